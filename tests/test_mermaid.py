"""Tests for Mermaid diagram rendering."""

from __future__ import annotations

from htmlens.core.models import GraphEdge, GraphNode, KnowledgeGraph
from htmlens.generators.mermaid import EMPTY_DIAGRAM, NodeLabel, graph_to_mermaid, node_label

S = "https://schema.org/"


class TestNodeLabel:
    def test_http_node_is_a_link(self):
        node = GraphNode(id="https://shop.example/p", properties={S + "name": "Nuts & Bolts"})
        assert node_label(node).render() == "<a href='https://shop.example/p'>Nuts &amp; Bolts</a>"

    def test_blank_node_falls_back_to_type(self):
        assert node_label(GraphNode(id="_:b0", types=[S + "Offer"])).render() == '"Offer"'

    def test_untyped_falls_back_to_id_segment(self):
        assert node_label(GraphNode(id="_:b0")).text == "_:b0"
        assert node_label(GraphNode(id="https://schema.org/InStock")).text == "InStock"

    def test_property_value_summary(self):
        node = GraphNode(
            id="https://shop.example/pv",
            types=[S + "PropertyValue"],
            properties={S + "name": "Weight", S + "value": 12, S + "unitText": "kg"},
        )
        label = node_label(node)
        assert label == NodeLabel("Weight: 12 kg")
        assert label.render() == '"Weight: 12 kg"'

    def test_quotes_escaped(self):
        node = GraphNode(id="_:b1", properties={S + "name": 'Say "hi"'})
        assert node_label(node).render() == '"Say \\"hi\\""'


class TestGraphToMermaid:
    def test_empty(self):
        assert graph_to_mermaid(KnowledgeGraph()) == EMPTY_DIAGRAM

    def test_nodes_and_edges(self):
        graph = KnowledgeGraph(
            nodes=[
                GraphNode(id="_:b0", types=[S + "Offer"]),
                GraphNode(id="https://shop.example/p", properties={S + "name": "Widget"}),
            ],
            edges=[
                GraphEdge(from_id="https://shop.example/p", to_id="_:b0", predicate=S + "offers"),
                GraphEdge(from_id="https://shop.example/p", to_id="_:gone", predicate=S + "brand"),
            ],
        )
        assert graph_to_mermaid(graph).splitlines() == [
            "graph TD",
            '  N0["Offer"]',
            "  N1[<a href='https://shop.example/p'>Widget</a>]",
            "  N1 -->|offers| N0",
        ]
