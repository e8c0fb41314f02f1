"""Knowledge Graph models for linked data embedded in web pages.

The graph sits between the JSON-LD expansion step and the analysers:

    HTML → JSON-LD blocks → expanded document → KnowledgeGraph → insights → report
                              (syntax)            (structure)      (semantics)

A ``KnowledgeGraph`` is produced once by ``GraphBuilder.finalize()`` and
is not modified afterwards.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .iri import shorten_iri


# ---------------------------------------------------------------------------
# Core graph models
# ---------------------------------------------------------------------------

class GraphNode(BaseModel):
    """A node identified by an IRI or a ``_:`` blank id.

    ``properties`` maps predicate IRIs to JSON values. A predicate seen
    once holds its value directly; a predicate seen twice or more holds a
    list in encounter order. Node-valued predicates are never stored here,
    they become edges.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    types: list[str] = Field(default_factory=list)
    properties: dict[str, Any] = Field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"@id": self.id, "@type": list(self.types)}
        data.update(self.properties)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphNode:
        properties = {k: v for k, v in data.items() if k not in ("@id", "@type")}
        types = data.get("@type") or []
        if isinstance(types, str):
            types = [types]
        return cls(id=str(data["@id"]), types=list(types), properties=properties)


class GraphEdge(BaseModel):
    """A directed, untyped-by-schema edge between two node identities."""

    model_config = ConfigDict(frozen=True)

    from_id: str
    to_id: str
    predicate: str

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.from_id, self.to_id, self.predicate)

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_id, "to": self.to_id, "predicate": self.predicate}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphEdge:
        return cls(
            from_id=str(data["from"]),
            to_id=str(data["to"]),
            predicate=str(data["predicate"]),
        )


class KnowledgeGraph(BaseModel):
    """Deduplicated nodes (sorted by id) and edges (in discovery order).

    Edges are not deduplicated: a product listing the same variant twice
    yields two identical ``hasVariant`` edges.
    """

    model_config = ConfigDict(frozen=True)

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    # -- Query helpers ---------------------------------------------------

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        """Find a node by identity."""
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    # -- Serialization ---------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{"nodes": [...], "edges": [...]}``.

        Each node becomes ``{"@id", "@type", <predicate>: <value>, ...}``
        and each edge ``{"from", "to", "predicate"}``.
        """
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KnowledgeGraph:
        nodes = [GraphNode.from_dict(n) for n in data.get("nodes", [])]
        nodes.sort(key=lambda n: n.id)
        edges = [GraphEdge.from_dict(e) for e in data.get("edges", [])]
        return cls(nodes=nodes, edges=edges)

    def compute_stats(self) -> dict[str, int]:
        """Count nodes, edges, and nodes per shortened type."""
        stats: dict[str, int] = {
            "total_nodes": len(self.nodes),
            "total_edges": len(self.edges),
        }
        for node in self.nodes:
            for ty in node.types:
                key = f"type_{shorten_iri(ty)}"
                stats[key] = stats.get(key, 0) + 1
        return stats
