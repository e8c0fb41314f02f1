"""Render a ``KnowledgeGraph`` as Mermaid ``graph TD`` code.

Every node becomes ``N<index>`` in sorted node order. Nodes whose identity
is an absolute http(s) IRI are rendered as HTML links so the diagram can
be clicked through in viewers that allow it.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from ..core.iri import has_schema_type, is_http_iri, property_text, shorten_iri
from ..core.models import GraphNode, KnowledgeGraph
from .formatting import escape_html_attr, escape_html_text, escape_mermaid_label

EMPTY_DIAGRAM = 'graph TD\n  Empty["No data"]'


class NodeLabel(NamedTuple):
    text: str
    href: Optional[str] = None

    def render(self) -> str:
        if self.href is not None:
            return f"<a href='{escape_html_attr(self.href)}'>{escape_html_text(self.text)}</a>"
        return f'"{escape_mermaid_label(self.text)}"'


def property_value_summary(node: GraphNode) -> Optional[str]:
    """``"<propertyID|name>: <value> <unit>"`` for ``PropertyValue`` nodes."""
    if not has_schema_type(node, "PropertyValue"):
        return None
    label = property_text(node, "propertyID") or property_text(node, "name") or "PropertyValue"
    value = property_text(node, "value") or property_text(node, "valueReference")
    if value is not None:
        label = f"{label}: {value}"
        unit = property_text(node, "unitText") or property_text(node, "unitCode")
        if unit is not None:
            label = f"{label} {unit}"
    return label


def node_label(node: GraphNode) -> NodeLabel:
    summary = property_value_summary(node)
    if summary is not None:
        return NodeLabel(summary)

    text = property_text(node, "name")
    if text is None:
        text = shorten_iri(node.types[0]) if node.types else shorten_iri(node.id)
    if is_http_iri(node.id):
        return NodeLabel(text, href=node.id)
    return NodeLabel(text)


def graph_to_mermaid(graph: KnowledgeGraph) -> str:
    """Mermaid source for *graph*; edges to unknown nodes are left out."""
    if not graph.nodes:
        return EMPTY_DIAGRAM

    lines = ["graph TD"]
    ids: dict[str, str] = {}
    for idx, node in enumerate(graph.nodes):
        mermaid_id = f"N{idx}"
        ids[node.id] = mermaid_id
        lines.append(f"  {mermaid_id}[{node_label(node).render()}]")

    for edge in graph.edges:
        source = ids.get(edge.from_id)
        target = ids.get(edge.to_id)
        if source is None or target is None:
            continue
        predicate = escape_mermaid_label(shorten_iri(edge.predicate))
        lines.append(f"  {source} -->|{predicate}| {target}")

    return "\n".join(lines)
