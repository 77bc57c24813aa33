"""Knowledge graph domain models."""

from typing import Literal

from pydantic import BaseModel

from gardengraph.domain.content import ContentType


class GraphNode(BaseModel):
    """A document (or synthesized series) shown in the knowledge graph."""

    id: str
    title: str
    type: ContentType
    url: str
    connections: int = 0  # edge endpoints touching this node


class GraphEdge(BaseModel):
    """A directed connection between two graph nodes."""

    source: str
    target: str
    type: Literal["wikilink", "series"]


class KnowledgeGraph(BaseModel):
    """Serializable node/edge export consumed by the graph visualization."""

    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
