"""Loading content documents from a local ``content/`` tree."""

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

import frontmatter
from loguru import logger

from gardengraph.content_sources.base import ContentSource
from gardengraph.domain.content import ContentDocument, ContentType, SeriesInfo, content_url

MARKDOWN_SUFFIXES = (".md", ".mdx")
FLOW_SLUG_PATTERN = re.compile(r"^\d{4}/\d{2}/\d{2}$")


class ParseError(Exception):
    """Raised when a content file cannot be parsed."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class FileContentSource(ContentSource):
    """Content source reading markdown files with YAML frontmatter.

    Layout, relative to ``content_dir``:

    - ``posts/<slug>.md`` or ``posts/<slug>/index.md``
    - ``notes/<slug>.md``
    - ``flows/YYYY/MM/DD.md``
    - ``series/<slug>/index.md``

    ``.mdx`` is accepted wherever ``.md`` is.
    """

    def __init__(self, content_dir: str | Path, include_drafts: bool = False) -> None:
        """Initialize FileContentSource.

        Args:
            content_dir: Root content directory
            include_drafts: Whether documents marked ``draft: true`` are loaded
        """
        self.content_dir = Path(content_dir)
        self.include_drafts = include_drafts

    def get_posts(self) -> list[ContentDocument]:
        """Get all posts, newest first."""
        posts_dir = self.content_dir / "posts"
        files = [(f.stem, f) for f in self._markdown_files(posts_dir)]
        for folder in self._subfolders(posts_dir):
            index_file = self._index_file(folder)
            if index_file:
                files.append((folder.name, index_file))

        posts = self._load_documents("post", sorted(files))
        return sorted(posts, key=lambda p: p.date or "", reverse=True)

    def get_notes(self) -> list[ContentDocument]:
        """Get all notes, newest first."""
        notes_dir = self.content_dir / "notes"
        files = [(f.stem, f) for f in self._markdown_files(notes_dir)]
        notes = self._load_documents("note", sorted(files))
        return sorted(notes, key=lambda n: n.date or "", reverse=True)

    def get_flows(self) -> list[ContentDocument]:
        """Get all flows, newest first."""
        flows_dir = self.content_dir / "flows"
        if not flows_dir.exists():
            return []

        files = []
        for file in flows_dir.rglob("*"):
            if file.suffix not in MARKDOWN_SUFFIXES or not file.is_file():
                continue
            slug = file.relative_to(flows_dir).with_suffix("").as_posix()
            if not FLOW_SLUG_PATTERN.match(slug):
                logger.warning(f"Skipping flow outside YYYY/MM/DD layout: {file}")
                continue
            files.append((slug, file))

        flows = self._load_documents("flow", sorted(files))
        return sorted(flows, key=lambda f: f.slug, reverse=True)

    def get_series(self) -> dict[str, SeriesInfo]:
        """Get series metadata from ``series/<slug>/index.md`` files."""
        series = {}
        for folder in self._subfolders(self.content_dir / "series"):
            index_file = self._index_file(folder)
            if index_file is None:
                continue
            metadata, _ = self._parse(index_file)
            if metadata.get("draft") and not self.include_drafts:
                continue
            series[folder.name] = SeriesInfo(
                slug=folder.name,
                title=str(metadata.get("title") or folder.name),
            )
        return series

    def _load_documents(
        self, content_type: ContentType, files: list[tuple[str, Path]]
    ) -> list[ContentDocument]:
        documents = []
        for slug, file in files:
            document = self._load_document(content_type, slug, file)
            if document.draft and not self.include_drafts:
                logger.debug(f"Skipping draft {content_type} {slug}")
                continue
            documents.append(document)
        return documents

    def _load_document(self, content_type: ContentType, slug: str, file: Path) -> ContentDocument:
        metadata, content = self._parse(file)

        series = metadata.get("series") if content_type == "post" else None
        aliases = metadata.get("aliases") if content_type == "note" else None
        if isinstance(aliases, str):
            aliases = [aliases]

        return ContentDocument(
            slug=slug,
            title=str(metadata.get("title") or slug),
            type=content_type,
            content=content,
            url=content_url(content_type, slug),
            series=str(series) if series else None,
            aliases=[str(alias) for alias in aliases or []],
            date=self._format_date(metadata.get("date")),
            draft=bool(metadata.get("draft", False)),
            backlinks=bool(metadata.get("backlinks", True)),
        )

    @staticmethod
    def _parse(file: Path) -> tuple[dict[str, Any], str]:
        """Parse frontmatter and body. Malformed frontmatter is fatal."""
        try:
            post = frontmatter.load(str(file))
        except Exception as e:
            raise ParseError(file, f"Failed to parse frontmatter: {e}") from e
        return dict(post.metadata), post.content

    @staticmethod
    def _format_date(value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return str(value)

    @staticmethod
    def _markdown_files(folder: Path) -> list[Path]:
        if not folder.exists():
            return []
        return [f for f in folder.iterdir() if f.is_file() and f.suffix in MARKDOWN_SUFFIXES]

    @staticmethod
    def _subfolders(folder: Path) -> list[Path]:
        if not folder.exists():
            return []
        return sorted(f for f in folder.iterdir() if f.is_dir())

    @staticmethod
    def _index_file(folder: Path) -> Path | None:
        for suffix in MARKDOWN_SUFFIXES:
            candidate = folder / f"index{suffix}"
            if candidate.exists():
                return candidate
        return None
