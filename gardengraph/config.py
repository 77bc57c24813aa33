from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GARDEN_", env_file=".env", extra="ignore")

    # Content settings
    content_dir: Path = Path("content")
    include_drafts: bool = False

    # Export settings
    graph_output_path: Path = Path("public/knowledge-graph.json")

    # Link settings
    registry_collision_policy: Literal["overwrite", "error"] = "overwrite"
    backlink_context_radius: int = 120
    backlink_context_max_chars: int = 200

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
