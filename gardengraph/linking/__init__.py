"""Wikilink extraction, resolution, backlinks and knowledge graph building."""

from gardengraph.linking.backlinks import BacklinkIndex
from gardengraph.linking.extractor import extract_wikilinks, strip_wikilinks
from gardengraph.linking.graph_builder import KnowledgeGraphBuilder, write_knowledge_graph
from gardengraph.linking.registry import SlugCollisionError, build_slug_registry
from gardengraph.linking.resolver import WikilinkResolver

__all__ = [
    "BacklinkIndex",
    "KnowledgeGraphBuilder",
    "SlugCollisionError",
    "WikilinkResolver",
    "build_slug_registry",
    "extract_wikilinks",
    "strip_wikilinks",
    "write_knowledge_graph",
]
