"""Build session owning the per-build link caches."""

from functools import cached_property

from loguru import logger

from gardengraph.content_sources.base import ContentSource, load_corpus
from gardengraph.domain.content import ContentCorpus
from gardengraph.domain.graph import KnowledgeGraph
from gardengraph.domain.links import BacklinkSource, BrokenLink, SlugRegistryEntry
from gardengraph.linking import (
    BacklinkIndex,
    KnowledgeGraphBuilder,
    WikilinkResolver,
    build_slug_registry,
)
from gardengraph.linking.registry import CollisionPolicy

_CACHED_ATTRIBUTES = (
    "corpus",
    "slug_registry",
    "backlink_index",
    "hidden_backlink_targets",
    "knowledge_graph",
)


class BuildSession:
    """Lazily builds and caches the slug registry, backlink index and graph.

    The first access pays the construction cost, later accesses within the
    session reuse the snapshot. Callers must treat returned structures as
    read-only. ``invalidate`` drops every cache, including the loaded corpus.
    """

    def __init__(
        self,
        *,
        source: ContentSource,
        collision_policy: CollisionPolicy = "overwrite",
        context_radius: int = 120,
        context_max_chars: int = 200,
    ):
        """Initialize the session.

        Args:
            source: Content source the corpus is loaded from
            collision_policy: How duplicate slug registry keys are handled
            context_radius: Characters of backlink context either side of a link
            context_max_chars: Maximum backlink context length
        """
        self.source = source
        self.collision_policy = collision_policy
        self.context_radius = context_radius
        self.context_max_chars = context_max_chars
        self.graph_builder = KnowledgeGraphBuilder()

    @cached_property
    def corpus(self) -> ContentCorpus:
        corpus = load_corpus(self.source)
        logger.info(
            f"Loaded {len(corpus.posts)} posts, {len(corpus.notes)} notes, "
            f"{len(corpus.flows)} flows, {len(corpus.series)} series"
        )
        return corpus

    @cached_property
    def slug_registry(self) -> dict[str, SlugRegistryEntry]:
        return build_slug_registry(self.corpus, on_collision=self.collision_policy)

    @cached_property
    def backlink_index(self) -> BacklinkIndex:
        return BacklinkIndex.build(
            self.corpus.documents(),
            context_radius=self.context_radius,
            context_max_chars=self.context_max_chars,
        )

    @cached_property
    def hidden_backlink_targets(self) -> set[str]:
        """Slugs of notes whose frontmatter turns the backlinks panel off."""
        return {note.slug for note in self.corpus.notes if not note.backlinks}

    @cached_property
    def knowledge_graph(self) -> KnowledgeGraph:
        return self.graph_builder.generate(
            self.corpus.posts,
            self.corpus.notes,
            self.corpus.flows,
            self.corpus.series,
        )

    @property
    def resolver(self) -> WikilinkResolver:
        return WikilinkResolver(self.slug_registry)

    def get_backlinks(self, slug: str) -> list[BacklinkSource]:
        """Get the documents linking to slug.

        Empty for unknown slugs and for notes with ``backlinks: false``. The
        index itself keeps those entries.
        """
        if slug in self.hidden_backlink_targets:
            return []
        return self.backlink_index.query(slug)

    def render(self, content: str) -> str:
        """Rewrite every wikilink in content into resolved or broken link markup."""
        return self.resolver.render(content)

    def find_broken_links(self) -> list[BrokenLink]:
        """List every unresolvable wikilink across posts, notes and flows."""
        return self.resolver.find_broken_links(self.corpus.documents())

    def invalidate(self) -> None:
        """Drop all cached build state so the next access rebuilds it."""
        for attribute in _CACHED_ATTRIBUTES:
            self.__dict__.pop(attribute, None)
