"""ProductGroup / Product / Offer extraction.

Walks ``hasVariant`` and ``offers`` edges from every ``ProductGroup``
and aggregates price range and availability across its variants. Pages
without a ProductGroup fall back to their first ``Product`` node, treated
as a single implicit variant.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from ..core.adjacency import GraphIndex
from ..core.iri import has_schema_type, property_list, property_text, shorten_iri
from ..core.models import GraphNode
from ..generators.formatting import format_price
from .classify import EntityKind, classify_node
from .generic import scalar_properties
from .summaries import (
    OfferSummary,
    PriceStats,
    ProductGroupSummary,
    VariantSummary,
)
from .variants import classify_properties, short_name

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Offers & variants
# ---------------------------------------------------------------------------

def parse_price(raw: Optional[str]) -> Optional[float]:
    """``"29,99"`` → ``29.99``; *None* for anything non-numeric."""
    if raw is None:
        return None
    try:
        value = float(raw.strip().replace(",", "."))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _availability(index: GraphIndex, offer: GraphNode) -> Optional[str]:
    text = property_text(offer, "availability")
    if text is None:
        target = index.first_target(offer.id, "availability")
        text = target.id if target is not None else None
    return shorten_iri(text) if text else None


def extract_offer(index: GraphIndex, product: GraphNode) -> Optional[OfferSummary]:
    """First ``offers`` edge leading to an ``Offer`` node, if any."""
    for offer in index.targets(product.id, "offers"):
        if not has_schema_type(offer, "Offer"):
            continue
        price_raw = property_text(offer, "price")
        currency = property_text(offer, "priceCurrency")
        price = parse_price(price_raw)
        return OfferSummary(
            price_raw=price_raw,
            price=price,
            price_display=format_price(price, currency) if price is not None else price_raw,
            currency=currency,
            availability=_availability(index, offer),
        )
    return None


def collect_additional_properties(index: GraphIndex, product: GraphNode) -> dict[str, str]:
    """``additionalProperty`` → ``PropertyValue`` name/value pairs."""
    result: dict[str, str] = {}
    for node in index.targets(product.id, "additionalProperty"):
        if not has_schema_type(node, "PropertyValue"):
            continue
        name = property_text(node, "name") or property_text(node, "propertyID")
        value = property_text(node, "value")
        if name and value is not None:
            result[name] = value
    return result


def summarize_variant(index: GraphIndex, product: GraphNode) -> VariantSummary:
    return VariantSummary(
        id=product.id,
        sku=property_text(product, "sku"),
        color=property_text(product, "color"),
        size=property_text(product, "size"),
        properties=scalar_properties(product),
        additional=collect_additional_properties(index, product),
        offer=extract_offer(index, product),
    )


def _sku_key(variant: VariantSummary) -> tuple[int, str]:
    return (0, "") if variant.sku is None else (1, variant.sku)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def _brand(index: GraphIndex, node: GraphNode) -> Optional[str]:
    brand_node = index.first_target(node.id, "brand")
    if brand_node is not None:
        return property_text(brand_node, "name")
    return property_text(node, "brand")


def _varies_by(index: GraphIndex, node: GraphNode) -> list[str]:
    names = [short_name(v) for v in property_list(node, "variesBy")]
    names.extend(short_name(t.id) for t in index.targets(node.id, "variesBy"))
    return names


def _aggregate(summary: ProductGroupSummary, variants: list[VariantSummary]) -> None:
    for variant in variants:
        offer = variant.offer
        if offer is None:
            continue
        if offer.availability:
            counts = summary.availability_counts
            counts[offer.availability] = counts.get(offer.availability, 0) + 1
        if offer.price is not None:
            if summary.price_stats is None:
                summary.price_stats = PriceStats(
                    min=offer.price, max=offer.price, currency=offer.currency
                )
            else:
                summary.price_stats.add(offer.price, offer.currency)


def summarize_product_group(index: GraphIndex, group: GraphNode) -> ProductGroupSummary:
    """Summarize one ``ProductGroup`` node and all its ``hasVariant`` targets."""
    summary = ProductGroupSummary(
        id=group.id,
        name=property_text(group, "name"),
        product_group_id=property_text(group, "productGroupID"),
        brand=_brand(index, group),
        varies_by=_varies_by(index, group),
    )

    variants = [summarize_variant(index, p) for p in index.targets(group.id, "hasVariant")]
    _aggregate(summary, variants)
    summary.total_variants = len(variants)
    summary.varying_properties, summary.common_properties = classify_properties(
        variants, summary.varies_by
    )
    summary.variants = sorted(variants, key=_sku_key)
    logger.debug(
        "ProductGroup %s: %d variant(s), varying=%s",
        group.id, len(variants), summary.varying_properties,
    )
    return summary


def summarize_standalone_product(index: GraphIndex, product: GraphNode) -> ProductGroupSummary:
    """A lone ``Product`` rendered as a group with one implicit variant."""
    variant = summarize_variant(index, product)
    summary = ProductGroupSummary(
        id=product.id,
        name=property_text(product, "name"),
        product_group_id=property_text(product, "productID") or property_text(product, "sku"),
        brand=_brand(index, product),
        standalone=True,
    )
    _aggregate(summary, [variant])
    summary.total_variants = 1
    summary.variants = [variant]
    return summary


def extract_products(index: GraphIndex) -> list[ProductGroupSummary]:
    """Every ProductGroup in node order, else the first standalone Product."""
    groups = [
        summarize_product_group(index, node)
        for node in index.graph.nodes
        if classify_node(node) is EntityKind.PRODUCT_GROUP
    ]
    if groups:
        return groups
    for node in index.graph.nodes:
        if classify_node(node) is EntityKind.PRODUCT:
            return [summarize_standalone_product(index, node)]
    return []
