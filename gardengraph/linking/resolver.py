"""Wikilink resolution against the slug registry."""

import logging
from typing import Iterable

from gardengraph.domain.content import ContentDocument
from gardengraph.domain.links import (
    BrokenLink,
    RenderableLink,
    SlugRegistryEntry,
    WikilinkOccurrence,
)

from .extractor import extract_wikilinks, replace_wikilinks

logger = logging.getLogger(__name__)


class WikilinkResolver:
    """Turns wikilink occurrences into resolved links or broken-link markers."""

    def __init__(self, registry: dict[str, SlugRegistryEntry]):
        """Initialize resolver with a slug registry.

        Args:
            registry: Dictionary mapping citable short names to registry entries
        """
        self.registry = registry

    def resolve(self, occurrence: WikilinkOccurrence) -> RenderableLink:
        """Resolve a single occurrence. Never raises; a miss is a broken link.

        Args:
            occurrence: Wikilink found in a document

        Returns:
            RenderableLink tagged with the entry's type and url, or a broken marker
        """
        entry = self.registry.get(occurrence.target)
        if entry is None:
            return RenderableLink(
                target=occurrence.target,
                display=occurrence.display,
                resolved=False,
            )
        return RenderableLink(
            target=occurrence.target,
            display=occurrence.display,
            resolved=True,
            url=entry.url,
            type=entry.type,
        )

    def render(self, content: str) -> str:
        """Rewrite every wikilink in content into link markup.

        Args:
            content: Markdown body containing wikilinks

        Returns:
            Content with anchors for resolved links and spans for broken ones
        """
        return replace_wikilinks(content, lambda occurrence: self.resolve(occurrence).to_html())

    def find_broken_links(self, documents: Iterable[ContentDocument]) -> list[BrokenLink]:
        """List every unresolvable wikilink in the given documents, in document order.

        Args:
            documents: Documents to scan

        Returns:
            List of BrokenLink records, one per occurrence
        """
        broken_links = []
        for document in documents:
            for occurrence in extract_wikilinks(document.content):
                if occurrence.target not in self.registry:
                    logger.debug(f"Broken wikilink in {document.url}: {occurrence.target}")
                    broken_links.append(
                        BrokenLink(
                            source=document.slug,
                            source_type=document.type,
                            target=occurrence.target,
                        )
                    )
        return broken_links
