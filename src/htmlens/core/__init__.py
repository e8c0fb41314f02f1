"""Graph construction: models, literal normalization, builder and indexes."""

from .adjacency import GraphIndex, build_adjacency, nodes_by_id
from .graph_builder import GraphBuilder, MalformedDocumentError, build_graph
from .models import GraphEdge, GraphNode, KnowledgeGraph
from .values import InvalidLiteralError, normalize_value

__all__ = [
    "GraphBuilder",
    "GraphEdge",
    "GraphIndex",
    "GraphNode",
    "InvalidLiteralError",
    "KnowledgeGraph",
    "MalformedDocumentError",
    "build_adjacency",
    "build_graph",
    "nodes_by_id",
    "normalize_value",
]
