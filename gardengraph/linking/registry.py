"""Slug registry: one lookup table for every citable short name."""

from typing import Literal

from loguru import logger

from gardengraph.domain.content import ContentCorpus, content_url
from gardengraph.domain.links import SlugRegistryEntry

CollisionPolicy = Literal["overwrite", "error"]


class SlugCollisionError(ValueError):
    """Raised when two different documents claim the same registry key."""

    def __init__(self, key: str, existing: SlugRegistryEntry, incoming: SlugRegistryEntry) -> None:
        self.key = key
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Slug '{key}' is registered by {existing.type} '{existing.url}' "
            f"and {incoming.type} '{incoming.url}'"
        )


class _RegistryBuilder:
    def __init__(self, on_collision: CollisionPolicy) -> None:
        self.on_collision = on_collision
        self.registry: dict[str, SlugRegistryEntry] = {}

    def register(self, key: str, entry: SlugRegistryEntry) -> None:
        existing = self.registry.get(key)
        # A note's alias repeating its own slug is the same entry, not a collision
        if existing is not None and existing is not entry:
            if self.on_collision == "error":
                raise SlugCollisionError(key, existing, entry)
            logger.debug(f"Slug '{key}' overwritten: {existing.url} -> {entry.url}")
        self.registry[key] = entry


def series_slugs(corpus: ContentCorpus) -> list[str]:
    """Series known from series metadata, then any only referenced by posts."""
    slugs = list(corpus.series)
    for post in corpus.posts:
        if post.series and post.series not in slugs:
            slugs.append(post.series)
    return slugs


def build_slug_registry(
    corpus: ContentCorpus, on_collision: CollisionPolicy = "overwrite"
) -> dict[str, SlugRegistryEntry]:
    """Map every post, flow, note (and alias) and series slug to its canonical entry.

    Registration order is posts, flows, notes, series. With the ``overwrite``
    policy a later registration of an existing key replaces the earlier one.

    Args:
        corpus: All documents of the build
        on_collision: ``overwrite`` (last write wins) or ``error``

    Returns:
        Dictionary of short name to SlugRegistryEntry

    Raises:
        SlugCollisionError: On a cross-document key clash under the ``error`` policy
    """
    builder = _RegistryBuilder(on_collision)

    for post in corpus.posts:
        builder.register(post.slug, SlugRegistryEntry(url=post.url, type="post", title=post.title))

    for flow in corpus.flows:
        builder.register(flow.slug, SlugRegistryEntry(url=flow.url, type="flow", title=flow.title))

    for note in corpus.notes:
        entry = SlugRegistryEntry(url=note.url, type="note", title=note.title)
        builder.register(note.slug, entry)
        for alias in note.aliases:
            if alias.strip():
                builder.register(alias.strip(), entry)

    for slug in series_slugs(corpus):
        info = corpus.series.get(slug)
        builder.register(
            slug,
            SlugRegistryEntry(
                url=content_url("series", slug),
                type="series",
                title=info.title if info else slug,
            ),
        )

    logger.debug(f"Slug registry built with {len(builder.registry)} keys")
    return builder.registry
