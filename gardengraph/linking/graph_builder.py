"""Building the knowledge graph export from loaded content."""

import json
from pathlib import Path

from loguru import logger

from gardengraph.domain.content import ContentDocument, SeriesInfo, content_url
from gardengraph.domain.graph import GraphEdge, GraphNode, KnowledgeGraph

from .extractor import extract_wikilinks

SERIES_ID_PREFIX = "series:"


class KnowledgeGraphBuilder:
    """Builds the node/edge graph for the client-side visualization."""

    def generate(
        self,
        posts: list[ContentDocument],
        notes: list[ContentDocument],
        flows: list[ContentDocument],
        series_lookup: dict[str, SeriesInfo],
    ) -> KnowledgeGraph:
        """Generate the knowledge graph in a single pass.

        Posts, notes and series are always present. Flows only appear when
        they sit on a wikilink edge whose both endpoints exist.

        Args:
            posts: All posts
            notes: All notes
            flows: All flows
            series_lookup: Series slug to series metadata

        Returns:
            KnowledgeGraph with pruned nodes and valid edges
        """
        node_map: dict[str, GraphNode] = {}
        for document in [*posts, *notes]:
            existing = node_map.get(document.slug)
            if existing is not None:
                logger.debug(
                    f"Graph node '{document.slug}' ({existing.type}) replaced by {document.type}"
                )
            node_map[document.slug] = self._node_for(document)

        edges = self._build_wikilink_edges([*posts, *notes, *flows], flows, node_map)
        edges += self._build_series_edges(posts, series_lookup, node_map)

        self._count_connections(node_map, edges)

        valid_edges = [e for e in edges if e.source in node_map and e.target in node_map]
        linked_ids = {e.source for e in valid_edges} | {e.target for e in valid_edges}
        nodes = [n for n in node_map.values() if n.type != "flow" or n.id in linked_ids]

        node_ids = {n.id for n in nodes}
        valid_edges = [e for e in valid_edges if e.source in node_ids and e.target in node_ids]

        logger.debug(
            f"Knowledge graph: {len(nodes)} nodes kept of {len(node_map)}, "
            f"{len(valid_edges)} edges kept of {len(edges)}"
        )
        return KnowledgeGraph(nodes=nodes, edges=valid_edges)

    def _build_wikilink_edges(
        self,
        documents: list[ContentDocument],
        flows: list[ContentDocument],
        node_map: dict[str, GraphNode],
    ) -> list[GraphEdge]:
        """Emit one edge per non-self wikilink and pull linked flows into the node map."""
        flows_by_slug = {flow.slug: flow for flow in flows}
        edges = []

        for document in documents:
            for occurrence in extract_wikilinks(document.content):
                target = occurrence.target
                if target == document.slug:
                    continue

                edges.append(GraphEdge(source=document.slug, target=target, type="wikilink"))

                if document.slug not in node_map:
                    node_map[document.slug] = self._node_for(document)

                target_flow = flows_by_slug.get(target)
                if target_flow and target not in node_map:
                    node_map[target] = self._node_for(target_flow)

        return edges

    def _build_series_edges(
        self,
        posts: list[ContentDocument],
        series_lookup: dict[str, SeriesInfo],
        node_map: dict[str, GraphNode],
    ) -> list[GraphEdge]:
        """Synthesize a node per referenced series and link it to its posts."""
        series_slugs: list[str] = []
        for post in posts:
            if post.series and post.series not in series_slugs:
                series_slugs.append(post.series)

        edges = []
        for series_slug in series_slugs:
            series_id = f"{SERIES_ID_PREFIX}{series_slug}"
            info = series_lookup.get(series_slug)
            node_map[series_id] = GraphNode(
                id=series_id,
                title=info.title if info and info.title else series_slug,
                type="series",
                url=content_url("series", series_slug),
            )
            for post in posts:
                if post.series == series_slug:
                    edges.append(GraphEdge(source=series_id, target=post.slug, type="series"))

        return edges

    @staticmethod
    def _count_connections(node_map: dict[str, GraphNode], edges: list[GraphEdge]) -> None:
        """Increment both endpoints of every edge that exist as nodes."""
        for node in node_map.values():
            node.connections = 0

        for edge in edges:
            if edge.source in node_map:
                node_map[edge.source].connections += 1
            if edge.target in node_map:
                node_map[edge.target].connections += 1

    @staticmethod
    def _node_for(document: ContentDocument) -> GraphNode:
        return GraphNode(
            id=document.slug,
            title=document.title,
            type=document.type,
            url=document.url,
        )


def write_knowledge_graph(graph: KnowledgeGraph, output_path: str | Path) -> Path:
    """Write the graph as indented JSON, creating parent directories.

    Args:
        graph: Graph to serialize
        output_path: Destination file

    Returns:
        Path the graph was written to
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(graph.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
    return path
