"""Content domain models."""

from typing import Literal

from pydantic import BaseModel

ContentType = Literal["post", "note", "flow", "series"]

URL_PREFIXES: dict[str, str] = {
    "post": "/posts",
    "note": "/notes",
    "flow": "/flows",
    "series": "/series",
}


def content_url(content_type: ContentType, slug: str) -> str:
    """Build the absolute site path for a document of the given type."""
    return f"{URL_PREFIXES[content_type]}/{slug}"


class ContentDocument(BaseModel):
    """Represents one loaded markdown document.

    Attributes:
        slug: Identifier unique within the document's type namespace
            (flows use a ``YYYY/MM/DD`` date path)
        title: Display title from frontmatter, falls back to the slug
        type: Content namespace the document belongs to
        content: Raw markdown body without frontmatter
        url: Absolute site path of the rendered page
        series: Series slug the post belongs to, if any
        aliases: Extra names a note can be cited by
        date: Publication date as written in frontmatter
        draft: Whether the document is marked as a draft
        backlinks: Whether the page shows its "referenced by" panel
    """

    slug: str
    title: str
    type: ContentType
    content: str = ""
    url: str
    series: str | None = None
    aliases: list[str] = []
    date: str | None = None
    draft: bool = False
    backlinks: bool = True


class SeriesInfo(BaseModel):
    """Metadata for a series of posts."""

    slug: str
    title: str


class ContentCorpus(BaseModel):
    """All documents of one build, grouped by type."""

    posts: list[ContentDocument] = []
    notes: list[ContentDocument] = []
    flows: list[ContentDocument] = []
    series: dict[str, SeriesInfo] = {}

    def documents(self) -> list[ContentDocument]:
        """Documents with a body to scan, in processing order: posts, notes, flows."""
        return [*self.posts, *self.notes, *self.flows]
