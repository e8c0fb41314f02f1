"""Tests for graph lookup tables."""

from __future__ import annotations

from htmlens.core.adjacency import GraphIndex, build_adjacency, nodes_by_id
from htmlens.core.models import GraphEdge, GraphNode, KnowledgeGraph

S = "https://schema.org/"


def _graph() -> KnowledgeGraph:
    return KnowledgeGraph(
        nodes=[
            GraphNode(id="g", types=[S + "ProductGroup"]),
            GraphNode(id="p1", types=[S + "Product"]),
            GraphNode(id="p2", types=[S + "Product"]),
        ],
        edges=[
            GraphEdge(from_id="g", to_id="p2", predicate=S + "hasVariant"),
            GraphEdge(from_id="g", to_id="p1", predicate="http://schema.org/hasVariant"),
            GraphEdge(from_id="g", to_id="gone", predicate=S + "hasVariant"),
            GraphEdge(from_id="p1", to_id="g", predicate=S + "isVariantOf"),
        ],
    )


class TestBuildAdjacency:
    def test_groups_by_source_in_order(self):
        adjacency = build_adjacency(_graph())
        assert [e.to_id for e in adjacency["g"]] == ["p2", "p1", "gone"]
        assert [e.to_id for e in adjacency["p1"]] == ["g"]
        assert "p2" not in adjacency

    def test_nodes_by_id(self):
        assert set(nodes_by_id(_graph())) == {"g", "p1", "p2"}


class TestGraphIndex:
    def test_targets_match_either_scheme(self):
        index = GraphIndex(_graph())
        assert [n.id for n in index.targets("g", "hasVariant")] == ["p2", "p1"]

    def test_targets_skip_missing_nodes(self):
        index = GraphIndex(_graph())
        assert "gone" not in [n.id for n in index.targets("g", "hasVariant")]

    def test_first_target(self):
        index = GraphIndex(_graph())
        assert index.first_target("p1", "isVariantOf").id == "g"
        assert index.first_target("p2", "isVariantOf") is None

    def test_outgoing_of_leaf(self):
        assert GraphIndex(_graph()).outgoing("p2") == []
