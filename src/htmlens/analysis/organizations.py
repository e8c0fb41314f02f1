"""Organization extraction: contact data, postal address and rating."""

from __future__ import annotations

from typing import Optional

from ..core.adjacency import GraphIndex
from ..core.iri import is_http_iri, property_text
from ..core.models import GraphNode
from .classify import EntityKind, classify_node
from .summaries import OrganizationSummary, PostalAddressSummary


def _text_or_target(index: GraphIndex, node: GraphNode, key: str, *target_keys: str) -> Optional[str]:
    """A literal property, else a property of (or the IRI of) the edge target."""
    text = property_text(node, key)
    if text is not None:
        return text
    target = index.first_target(node.id, key)
    if target is None:
        return None
    for target_key in target_keys:
        text = property_text(target, target_key)
        if text is not None:
            return text
    return target.id if is_http_iri(target.id) else None


def extract_address(index: GraphIndex, org: GraphNode) -> Optional[PostalAddressSummary]:
    target = index.first_target(org.id, "address")
    if target is None:
        raw = property_text(org, "address")
        return PostalAddressSummary(street_address=raw) if raw else None

    address = PostalAddressSummary(
        street_address=property_text(target, "streetAddress"),
        postal_code=property_text(target, "postalCode"),
        locality=property_text(target, "addressLocality"),
        region=property_text(target, "addressRegion"),
        country=_text_or_target(index, target, "addressCountry", "name"),
    )
    return address if address.one_line() else None


def summarize_organization(index: GraphIndex, org: GraphNode) -> OrganizationSummary:
    summary = OrganizationSummary(
        id=org.id,
        name=property_text(org, "name"),
        url=_text_or_target(index, org, "url"),
        logo=_text_or_target(index, org, "logo", "url", "contentUrl"),
        telephone=property_text(org, "telephone"),
        email=property_text(org, "email"),
        address=extract_address(index, org),
    )

    rating = index.first_target(org.id, "aggregateRating")
    if rating is not None:
        summary.rating_value = property_text(rating, "ratingValue")
        summary.rating_count = property_text(rating, "reviewCount") or property_text(
            rating, "ratingCount"
        )
    return summary


def extract_organizations(index: GraphIndex) -> list[OrganizationSummary]:
    return [
        summarize_organization(index, node)
        for node in index.graph.nodes
        if classify_node(node) is EntityKind.ORGANIZATION
    ]
