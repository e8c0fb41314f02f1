"""Read-only lookup tables over a finalized ``KnowledgeGraph``."""

from __future__ import annotations

from collections import defaultdict

from .iri import predicate_matches
from .models import GraphEdge, GraphNode, KnowledgeGraph

Adjacency = dict[str, list[GraphEdge]]


def build_adjacency(graph: KnowledgeGraph) -> Adjacency:
    """Group edges by their ``from`` endpoint, keeping discovery order."""
    index: defaultdict[str, list[GraphEdge]] = defaultdict(list)
    for edge in graph.edges:
        index[edge.from_id].append(edge)
    return dict(index)


def nodes_by_id(graph: KnowledgeGraph) -> dict[str, GraphNode]:
    return {node.id: node for node in graph.nodes}


class GraphIndex:
    """Node map plus adjacency, the input every extractor works from."""

    def __init__(self, graph: KnowledgeGraph) -> None:
        self.graph = graph
        self.nodes = nodes_by_id(graph)
        self.adjacency = build_adjacency(graph)

    def outgoing(self, node_id: str) -> list[GraphEdge]:
        return self.adjacency.get(node_id, [])

    def targets(self, node_id: str, predicate: str) -> list[GraphNode]:
        """Nodes reached from *node_id* over edges whose predicate ends with *predicate*."""
        return [
            self.nodes[edge.to_id]
            for edge in self.outgoing(node_id)
            if predicate_matches(edge.predicate, predicate) and edge.to_id in self.nodes
        ]

    def first_target(self, node_id: str, predicate: str) -> GraphNode | None:
        found = self.targets(node_id, predicate)
        return found[0] if found else None
