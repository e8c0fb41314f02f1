"""BreadcrumbList extraction."""

from __future__ import annotations

from typing import Optional

from ..core.adjacency import GraphIndex
from ..core.iri import has_schema_type, is_http_iri, property_text
from ..core.models import GraphNode
from .classify import EntityKind, classify_node
from .summaries import BreadcrumbItem, BreadcrumbSummary


def parse_position(raw: Optional[str]) -> int:
    """Unsigned integer position, ``0`` when missing or unparseable."""
    if raw is None:
        return 0
    text = raw.strip()
    return int(text) if text.isascii() and text.isdigit() else 0


def _item(index: GraphIndex, list_item: GraphNode) -> BreadcrumbItem:
    name = property_text(list_item, "name")
    url = property_text(list_item, "item")
    target = index.first_target(list_item.id, "item")
    if target is not None:
        if url is None and is_http_iri(target.id):
            url = target.id
        if name is None:
            name = property_text(target, "name")
        if url is None:
            url = property_text(target, "url")
    return BreadcrumbItem(
        position=parse_position(property_text(list_item, "position")),
        name=name,
        url=url,
    )


def summarize_breadcrumbs(index: GraphIndex, crumbs: GraphNode) -> BreadcrumbSummary:
    items = [
        _item(index, node)
        for node in index.targets(crumbs.id, "itemListElement")
        if has_schema_type(node, "ListItem")
    ]
    items.sort(key=lambda item: item.position)
    return BreadcrumbSummary(id=crumbs.id, items=items)


def extract_breadcrumbs(index: GraphIndex) -> list[BreadcrumbSummary]:
    return [
        summarize_breadcrumbs(index, node)
        for node in index.graph.nodes
        if classify_node(node) is EntityKind.BREADCRUMB_LIST
    ]
