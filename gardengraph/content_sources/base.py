from typing import Protocol

from gardengraph.domain.content import ContentCorpus, ContentDocument, SeriesInfo


class ContentSource(Protocol):
    """Protocol for content loading implementations."""

    def get_posts(self) -> list[ContentDocument]:
        """Get all published posts."""
        ...

    def get_notes(self) -> list[ContentDocument]:
        """Get all published notes."""
        ...

    def get_flows(self) -> list[ContentDocument]:
        """Get all published flows."""
        ...

    def get_series(self) -> dict[str, SeriesInfo]:
        """Get series metadata keyed by series slug."""
        ...


def load_corpus(source: ContentSource) -> ContentCorpus:
    """Collect every collection of a content source into one corpus."""
    return ContentCorpus(
        posts=source.get_posts(),
        notes=source.get_notes(),
        flows=source.get_flows(),
        series=source.get_series(),
    )
