"""Build a ``KnowledgeGraph`` from an expanded JSON-LD document.

The builder walks the expanded form produced by a JSON-LD processor
(``pyld.jsonld.expand``): a list of node objects whose predicates are
absolute IRIs and whose values are always lists of value objects
(``{"@value": ...}``), list objects (``{"@list": [...]}``) or nested
node objects.

Usage::

    builder = GraphBuilder()
    builder.ingest(expanded)
    graph = builder.finalize()
"""

from __future__ import annotations

import itertools
import logging
import uuid
from typing import Any, Callable, Iterable, Optional

from .models import GraphEdge, GraphNode, KnowledgeGraph
from .values import InvalidLiteralError, is_value_object, normalize_value

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

GRAPH_PREDICATE = "@graph"
INCLUDED_PREDICATE = "@included"
BLANK_PREFIX = "_:"


class MalformedDocumentError(TypeError):
    """The outer document is not a node object or a list of objects."""


# ---------------------------------------------------------------------------
# Blank identifiers
# ---------------------------------------------------------------------------

def sequential_blank_ids(prefix: str = "htmlens-b") -> Callable[[], str]:
    """Return a factory yielding ``_:htmlens-b0``, ``_:htmlens-b1``, ..."""
    counter = itertools.count()
    return lambda: f"{BLANK_PREFIX}{prefix}{next(counter)}"


def random_blank_id() -> str:
    """A fresh ``_:<uuid4>`` identifier, different on every run."""
    return f"{BLANK_PREFIX}{uuid.uuid4()}"


def _is_list_object(obj: Any) -> bool:
    return isinstance(obj, dict) and "@list" in obj


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class _NodeState:
    """Mutable per-node accumulator, frozen into a ``GraphNode`` on finalize."""

    __slots__ = ("id", "types", "properties", "multi")

    def __init__(self, node_id: str) -> None:
        self.id = node_id
        self.types: list[str] = []
        self.properties: dict[str, Any] = {}
        self.multi: set[str] = set()

    def add_type(self, type_iri: str) -> None:
        if type_iri not in self.types:
            self.types.append(type_iri)

    def add_value(self, predicate: str, value: Any) -> None:
        if predicate not in self.properties:
            self.properties[predicate] = value
        elif predicate in self.multi:
            self.properties[predicate].append(value)
        else:
            self.properties[predicate] = [self.properties[predicate], value]
            self.multi.add(predicate)

    def freeze(self) -> GraphNode:
        return GraphNode(
            id=self.id,
            types=sorted(set(self.types)),
            properties=dict(self.properties),
        )


class GraphBuilder:
    """Single-pass, depth-first converter from expanded JSON-LD to a graph.

    Parameters
    ----------
    id_factory
        Callable producing identities for node objects without ``@id``.
        Defaults to a per-builder sequential scheme (``_:htmlens-b0``, ...);
        pass :func:`random_blank_id` for UUID based identities.
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None) -> None:
        self._id_factory = id_factory or sequential_blank_ids()
        self._nodes: dict[str, _NodeState] = {}
        self._edges: list[GraphEdge] = []
        self._processing: set[str] = set()
        self._finalized = False

    # -- public API ----------------------------------------------------------

    def ingest(self, document: Any) -> None:
        """Walk an expanded document and accumulate nodes and edges.

        Raises
        ------
        MalformedDocumentError
            If *document* is neither a mapping nor a list of mappings.
        """
        if self._finalized:
            raise RuntimeError("GraphBuilder has already been finalized")
        if isinstance(document, dict):
            objects: Iterable[Any] = [document]
        elif isinstance(document, (list, tuple)):
            if not all(isinstance(obj, dict) for obj in document):
                raise MalformedDocumentError(
                    "Expanded document must be a list of JSON objects"
                )
            objects = document
        else:
            raise MalformedDocumentError(
                f"Expanded document must be an object or a list, got {type(document).__name__}"
            )

        for obj in objects:
            self._visit(obj)

    def finalize(self) -> KnowledgeGraph:
        """Freeze accumulated state into a ``KnowledgeGraph``.

        Types are sorted and deduplicated, nodes are ordered by identity
        and edges keep their discovery order.
        """
        self._finalized = True
        nodes = [state.freeze() for state in self._nodes.values()]
        nodes.sort(key=lambda n: n.id)
        logger.debug("Finalized graph: %d nodes, %d edges", len(nodes), len(self._edges))
        return KnowledgeGraph(nodes=nodes, edges=list(self._edges))

    # -- traversal -----------------------------------------------------------

    def _visit(self, obj: Any) -> Optional[str]:
        """Process any indexed object, returning its identity if it is a node."""
        if not isinstance(obj, dict):
            logger.debug("Skipping non-object entry: %r", obj)
            return None
        if is_value_object(obj):
            return None
        if _is_list_object(obj):
            for item in _as_list(obj["@list"]):
                self._visit(item)
            return None
        return self._process_node(obj)

    def _identity(self, obj: dict[str, Any]) -> str:
        raw = obj.get("@id")
        if isinstance(raw, str) and raw:
            return raw
        if raw is not None:
            logger.debug("Invalid @id %r, using its text form", raw)
            return str(raw)
        return self._id_factory()

    def _process_node(self, obj: dict[str, Any]) -> str:
        node_id = self._identity(obj)
        state = self._nodes.get(node_id)
        if state is None:
            state = self._nodes[node_id] = _NodeState(node_id)

        if node_id in self._processing:
            logger.debug("Cycle detected at %s, not descending again", node_id)
            return node_id
        self._processing.add(node_id)

        try:
            for type_iri in _as_list(obj.get("@type")):
                if isinstance(type_iri, str):
                    state.add_type(type_iri)

            for child in _as_list(obj.get("@graph")):
                child_id = self._visit(child)
                if child_id is not None:
                    self._add_edge(node_id, child_id, GRAPH_PREDICATE)

            for included in _as_list(obj.get("@included")):
                if not isinstance(included, dict) or is_value_object(included):
                    logger.debug("Skipping malformed @included entry: %r", included)
                    continue
                self._add_edge(node_id, self._process_node(included), INCLUDED_PREDICATE)

            reverse = obj.get("@reverse")
            if isinstance(reverse, dict):
                for predicate, sources in reverse.items():
                    for source in _as_list(sources):
                        if not isinstance(source, dict) or is_value_object(source):
                            logger.debug("Skipping malformed @reverse entry: %r", source)
                            continue
                        self._add_edge(self._process_node(source), node_id, predicate)

            for predicate, values in obj.items():
                if predicate.startswith("@"):
                    continue
                for value in self._collect(node_id, predicate, _as_list(values)):
                    state.add_value(predicate, value)
        finally:
            self._processing.discard(node_id)

        return node_id

    def _collect(self, source_id: str, predicate: str, values: list[Any]) -> list[Any]:
        """Gather literal values of one predicate, emitting edges for nodes.

        ``@list`` members are collected into a nested array that is added
        once when non-empty. Node members of a list each get their own edge.
        """
        collected: list[Any] = []
        for value in values:
            if not isinstance(value, dict):
                logger.debug("Skipping malformed value for %s: %r", predicate, value)
                continue
            if is_value_object(value):
                try:
                    collected.append(normalize_value(value))
                except InvalidLiteralError as exc:
                    logger.debug("Dropping literal for %s: %s", predicate, exc)
            elif _is_list_object(value):
                items = self._collect(source_id, predicate, _as_list(value["@list"]))
                if items:
                    collected.append(items)
            else:
                target_id = self._process_node(value)
                self._add_edge(source_id, target_id, predicate)
        return collected

    def _add_edge(self, from_id: str, to_id: str, predicate: str) -> None:
        self._edges.append(GraphEdge(from_id=from_id, to_id=to_id, predicate=predicate))


def build_graph(
    document: Any,
    id_factory: Optional[Callable[[], str]] = None,
) -> KnowledgeGraph:
    """Convenience wrapper: ingest one document and finalize."""
    builder = GraphBuilder(id_factory=id_factory)
    builder.ingest(document)
    return builder.finalize()
