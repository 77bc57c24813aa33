"""Backlink index: reverse mapping from link target to linking documents."""

from typing import Iterable

from loguru import logger

from gardengraph.domain.content import ContentDocument
from gardengraph.domain.links import BacklinkSource

from .context import extract_link_context
from .extractor import extract_wikilinks


class BacklinkIndex:
    """Target identifier to the documents linking to it.

    Buckets keep insertion order, i.e. the order documents were passed to
    ``build`` (posts, then notes, then flows for a corpus). Each linking
    document appears once per target, with the context of its first link.
    """

    def __init__(self, backlinks: dict[str, list[BacklinkSource]] | None = None) -> None:
        self._backlinks = backlinks or {}

    @classmethod
    def build(
        cls,
        documents: Iterable[ContentDocument],
        context_radius: int = 120,
        context_max_chars: int = 200,
    ) -> "BacklinkIndex":
        """Build the index from every document's raw content.

        Args:
            documents: Documents to scan; series carry no body and are skipped
            context_radius: Characters of context either side of a link
            context_max_chars: Maximum context length

        Returns:
            BacklinkIndex over all wikilinks in the documents
        """
        backlinks: dict[str, list[BacklinkSource]] = {}
        seen: dict[str, set[tuple[str, str]]] = {}

        for document in documents:
            if document.type == "series":
                continue

            for occurrence in extract_wikilinks(document.content):
                if occurrence.target == document.slug:
                    continue

                source_key = (document.slug, document.type)
                target_seen = seen.setdefault(occurrence.target, set())
                if source_key in target_seen:
                    continue
                target_seen.add(source_key)

                backlinks.setdefault(occurrence.target, []).append(
                    BacklinkSource(
                        slug=document.slug,
                        title=document.title,
                        type=document.type,
                        url=document.url,
                        context=extract_link_context(
                            document.content,
                            occurrence.start,
                            occurrence.end,
                            radius=context_radius,
                            max_chars=context_max_chars,
                        ),
                    )
                )

        logger.debug(f"Backlink index built for {len(backlinks)} targets")
        return cls(backlinks)

    def query(self, slug: str) -> list[BacklinkSource]:
        """Get the documents linking to slug, empty for unknown slugs."""
        return list(self._backlinks.get(slug, []))

    def targets(self) -> list[str]:
        """Get every target identifier that has at least one backlink."""
        return list(self._backlinks)

    def __contains__(self, slug: object) -> bool:
        return slug in self._backlinks

    def __len__(self) -> int:
        return len(self._backlinks)
