"""Wikilink and backlink domain models."""

from html import escape

from pydantic import BaseModel

from gardengraph.domain.content import ContentType


class WikilinkOccurrence(BaseModel):
    """A single ``[[target]]`` or ``[[target|display]]`` found in a document.

    Attributes:
        target: Trimmed identifier between ``[[`` and ``|`` or ``]]``
        display: Trimmed display text, defaults to the target
        start: Offset of the opening ``[[`` in the source text
        end: Offset just past the closing ``]]``
    """

    target: str
    display: str
    start: int
    end: int


class SlugRegistryEntry(BaseModel):
    """Canonical record a citable short name resolves to."""

    url: str
    type: ContentType
    title: str


class RenderableLink(BaseModel):
    """Outcome of resolving a wikilink against the slug registry."""

    target: str
    display: str
    resolved: bool
    url: str | None = None
    type: ContentType | None = None

    @property
    def css_classes(self) -> str:
        if self.resolved:
            return f"wikilink wikilink--resolved wikilink--{self.type}"
        return "wikilink wikilink--broken"

    def to_html(self) -> str:
        """Render as an anchor when resolved, otherwise as a non-navigable span."""
        display = escape(self.display, quote=False)
        if self.resolved:
            return f'<a href="{escape(self.url or "")}" class="{self.css_classes}">{display}</a>'
        title = escape(f"[[{self.target}]] not found")
        return f'<span class="{self.css_classes}" title="{title}">{display}</span>'


class BacklinkSource(BaseModel):
    """A document that links to a given target."""

    slug: str
    title: str
    type: ContentType
    url: str
    context: str = ""  # plain-text window around the first link occurrence


class BrokenLink(BaseModel):
    """A wikilink whose target is not in the slug registry."""

    source: str
    source_type: ContentType
    target: str
