"""Fallback summaries for unrecognized nodes, and DataDownload entries."""

from __future__ import annotations

import logging

from ..core.adjacency import GraphIndex
from ..core.graph_builder import BLANK_PREFIX
from ..core.iri import has_schema_type, json_value_to_string, property_text, shorten_iri
from ..core.models import GraphNode
from .classify import EntityKind, classify_node, is_supporting
from .summaries import DataDownloadEntry, EntitySummary

logger = logging.getLogger(__name__)


def scalar_properties(node: GraphNode) -> dict[str, str]:
    """Short-named display strings of every non-list property."""
    out: dict[str, str] = {}
    for key, value in node.properties.items():
        if isinstance(value, list):
            continue
        text = json_value_to_string(value)
        if text is None or not text.strip():
            continue
        out.setdefault(shorten_iri(key), text.strip())
    return out


def summarize_entity(node: GraphNode) -> EntitySummary:
    return EntitySummary(
        id=node.id,
        type_name=shorten_iri(node.types[0]) if node.types else None,
        properties=scalar_properties(node),
    )


def extract_other_entities(index: GraphIndex) -> list[EntitySummary]:
    """Summaries of nodes no other extractor handles.

    A node is skipped when it is a recognized kind, a component type
    (``Offer``, ``ListItem``, ...), or has neither properties nor a real
    identity. Untyped property-less nodes are references only and are
    skipped as well. Nodes reached through another node's property are
    still summarized when they qualify on their own.
    """
    entities: list[EntitySummary] = []
    for node in index.graph.nodes:
        if classify_node(node) is not EntityKind.OTHER or is_supporting(node):
            continue
        if not node.properties and (node.id.startswith(BLANK_PREFIX) or not node.types):
            continue
        entities.append(summarize_entity(node))
    logger.debug("Generic fallback summarized %d node(s)", len(entities))
    return entities


def extract_data_downloads(index: GraphIndex) -> list[DataDownloadEntry]:
    """Every ``DataDownload`` node that declares a ``contentUrl``."""
    entries: list[DataDownloadEntry] = []
    for node in index.graph.nodes:
        if not has_schema_type(node, "DataDownload"):
            continue
        content_url = property_text(node, "contentUrl")
        if content_url is None:
            target = index.first_target(node.id, "contentUrl")
            content_url = target.id if target is not None else None
        if content_url is None:
            continue
        license_text = property_text(node, "license")
        if license_text is None:
            target = index.first_target(node.id, "license")
            license_text = target.id if target is not None else None
        entries.append(DataDownloadEntry(
            content_url=content_url,
            encoding_format=property_text(node, "encodingFormat"),
            license=license_text,
        ))
    return entries
