import sys

from loguru import logger

from gardengraph.api import create_app
from gardengraph.config import settings
from gardengraph.content_sources.local import FileContentSource
from gardengraph.session import BuildSession

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info(f"Serving content graph for {settings.content_dir}")
content_source = FileContentSource(
    content_dir=settings.content_dir, include_drafts=settings.include_drafts
)
session = BuildSession(
    source=content_source,
    collision_policy=settings.registry_collision_policy,
    context_radius=settings.backlink_context_radius,
    context_max_chars=settings.backlink_context_max_chars,
)
app = create_app(session=session)
