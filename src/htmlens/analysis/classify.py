"""Explicit entity classification by shortened schema.org type."""

from __future__ import annotations

from enum import Enum

from ..core.iri import shorten_iri
from ..core.models import GraphNode


class EntityKind(str, Enum):
    """Entity kinds the extractors know how to summarize."""

    PRODUCT_GROUP = "product_group"
    PRODUCT = "product"
    ORGANIZATION = "organization"
    BREADCRUMB_LIST = "breadcrumb_list"
    OTHER = "other"


# Shortened, lower-cased type names per kind, checked in priority order
_KIND_TYPES: list[tuple[EntityKind, frozenset[str]]] = [
    (EntityKind.PRODUCT_GROUP, frozenset({"productgroup"})),
    (EntityKind.PRODUCT, frozenset({"product", "individualproduct", "productmodel"})),
    (EntityKind.ORGANIZATION, frozenset({"organization", "corporation", "onlinestore", "onlinebusiness"})),
    (EntityKind.BREADCRUMB_LIST, frozenset({"breadcrumblist"})),
]

# Nodes that only make sense as parts of another entity
SUPPORTING_TYPES = frozenset({
    "offer",
    "aggregateoffer",
    "propertyvalue",
    "listitem",
    "postaladdress",
    "aggregaterating",
    "brand",
    "imageobject",
    "datadownload",
})


def short_types(node: GraphNode) -> set[str]:
    return {shorten_iri(t).lower() for t in node.types}


def classify_node(node: GraphNode) -> EntityKind:
    """Return the first matching kind, ``OTHER`` when nothing matches."""
    types = short_types(node)
    for kind, names in _KIND_TYPES:
        if types & names:
            return kind
    return EntityKind.OTHER


def is_supporting(node: GraphNode) -> bool:
    """True for component types such as ``Offer`` or ``PostalAddress``."""
    return bool(short_types(node) & SUPPORTING_TYPES)
