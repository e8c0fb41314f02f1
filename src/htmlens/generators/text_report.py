"""Sectioned plain-text report built from ``GraphInsights``.

Layout (each section framed by a divider line, title and divider)::

    🏢 Organization            key/value lines
    🍞 Breadcrumb Navigation   one trail per line
    📦 ProductGroup: <name>    key/value lines
    🧩 Variants                table, columns from variesBy
    🔖 Common Properties       key/value lines
    📋 Other Entities
    🌐 Data Downloads          (optional)
    🕸️ Graph Summary
    🧾 Knowledge Graph JSON    (optional)
    🕸️ Knowledge Graph Visualization (optional)
"""

from __future__ import annotations

import json
from typing import Optional

from ..analysis.insights import GraphInsights
from ..analysis.summaries import (
    BreadcrumbSummary,
    DataDownloadEntry,
    EntitySummary,
    OrganizationSummary,
    ProductGroupSummary,
    VariantSummary,
)
from ..analysis.variants import variant_value
from ..config import LensConfig
from ..core.models import KnowledgeGraph
from .formatting import (
    MISSING_CELL,
    availability_label,
    format_availability_counts,
    format_price_range,
    key_value,
    section_header,
)
from .mermaid import graph_to_mermaid

NO_DATA_MESSAGE = "No JSON-LD structured data found."

_FALLBACK_COLUMNS = ("Color", "Size")


# ---------------------------------------------------------------------------
# Variant table
# ---------------------------------------------------------------------------

def variant_columns(group: ProductGroupSummary) -> list[str]:
    """``variesBy`` entries (deduplicated, SKU excluded) or Color/Size."""
    columns: list[str] = []
    seen: set[str] = set()
    for entry in group.varies_by:
        key = entry.lower()
        if key == "sku" or key in seen:
            continue
        seen.add(key)
        columns.append(entry)
    if columns or not group.standalone:
        return columns
    return [c for c in _FALLBACK_COLUMNS if any(variant_value(v, c) for v in group.variants)]


def _variant_row(variant: VariantSummary, columns: list[str]) -> list[str]:
    offer = variant.offer
    price = offer.price_display if offer else None
    availability = offer.availability if offer else None
    return [
        variant.sku or MISSING_CELL,
        *[variant_value(variant, column) or MISSING_CELL for column in columns],
        price or MISSING_CELL,
        availability_label(availability) if availability else MISSING_CELL,
    ]


def render_variant_table(
    variants: list[VariantSummary],
    columns: list[str],
    total_variants: Optional[int] = None,
    max_rows: Optional[int] = None,
) -> list[str]:
    """Pipe table padded to column widths; empty list when there are no variants."""
    if not variants:
        return []

    shown = variants if max_rows is None else variants[:max_rows]
    headers = ["SKU", *columns, "Price", "Availability"]
    rows = [_variant_row(v, columns) for v in shown]

    widths = [len(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))

    def fmt(cells: list[str]) -> str:
        return "|" + "|".join(f" {cell:<{widths[i]}} " for i, cell in enumerate(cells)) + "|"

    lines = section_header("🧩", "Variants")
    lines.append(fmt(headers))
    lines.append("|" + "|".join(f" {'-' * w} " for w in widths) + "|")
    lines.extend(fmt(row) for row in rows)

    total = len(variants) if total_variants is None else total_variants
    if total > len(shown):
        lines.append(f"({total - len(shown)} additional variants not shown)")
    lines.append("")
    return lines


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

class TextReportRenderer:
    """Turns ``GraphInsights`` (and optionally the graph itself) into text.

    Usage::

        renderer = TextReportRenderer(LensConfig(include_diagram=True))
        print(renderer.render(insights, graph))
    """

    def __init__(self, config: LensConfig | None = None, max_variant_rows: Optional[int] = None) -> None:
        self.config = config or LensConfig()
        self.max_variant_rows = max_variant_rows

    def render(self, insights: GraphInsights, graph: KnowledgeGraph | None = None) -> str:
        lines: list[str] = []

        if self._is_empty(insights):
            lines.append(NO_DATA_MESSAGE)
            lines.append("")

        if insights.organizations:
            lines.extend(self._organizations(insights.organizations))
        if any(b.items for b in insights.breadcrumbs):
            lines.extend(self._breadcrumbs(insights.breadcrumbs))
        for group in insights.product_groups:
            lines.extend(self._product_group(group))
        if insights.other_entities:
            lines.extend(self._other_entities(insights.other_entities))
        if self.config.include_data_downloads:
            lines.extend(self._data_downloads(insights.data_downloads))
        if insights.graph_summary:
            lines.extend(section_header("🕸️", "Graph Summary (condensed)"))
            lines.extend(insights.graph_summary)
            lines.append("")

        if graph is not None and self.config.include_markdown_json:
            lines.extend(section_header("🧾", "Knowledge Graph JSON"))
            lines.append("```json")
            lines.append(json.dumps(graph.to_dict(), indent=2, ensure_ascii=False))
            lines.append("```")
            lines.append("")
        if graph is not None and self.config.include_diagram:
            lines.extend(section_header("🕸️", "Knowledge Graph Visualization"))
            lines.append("```mermaid")
            lines.append(graph_to_mermaid(graph))
            lines.append("```")
            lines.append("")

        return "\n".join(lines).rstrip("\n") + "\n"

    # -- sections ------------------------------------------------------------

    @staticmethod
    def _is_empty(insights: GraphInsights) -> bool:
        return not (
            insights.organizations
            or any(b.items for b in insights.breadcrumbs)
            or insights.product_groups
            or insights.other_entities
        )

    def _kv(self, lines: list[str], label: str, value: Optional[str]) -> None:
        line = key_value(label, value, self.config.label_width)
        if line is not None:
            lines.append(line)

    def _organizations(self, orgs: list[OrganizationSummary]) -> list[str]:
        lines = section_header("🏢", "Organization")
        for idx, org in enumerate(orgs):
            if idx:
                lines.append("")
            self._kv(lines, "Name", org.name)
            self._kv(lines, "URL", org.url)
            self._kv(lines, "Logo", org.logo)
            self._kv(lines, "Telephone", org.telephone)
            self._kv(lines, "Email", org.email)
            if org.address is not None:
                self._kv(lines, "Address", org.address.one_line())
            if org.rating_value:
                rating = org.rating_value
                if org.rating_count:
                    rating = f"{rating} ({org.rating_count} reviews)"
                self._kv(lines, "Rating", rating)
        lines.append("")
        return lines

    @staticmethod
    def _breadcrumbs(trails: list[BreadcrumbSummary]) -> list[str]:
        lines = section_header("🍞", "Breadcrumb Navigation")
        for trail in trails:
            crumbs = []
            for item in trail.items:
                if item.name and item.url:
                    crumbs.append(f"{item.name} ({item.url})")
                elif item.name or item.url:
                    crumbs.append(item.name or item.url)
            if crumbs:
                lines.append(" → ".join(crumbs))
        lines.append("")
        return lines

    def _product_group(self, group: ProductGroupSummary) -> list[str]:
        kind = "Product" if group.standalone else "ProductGroup"
        lines = section_header("📦", f"{kind}: {group.name or kind}")
        self._kv(lines, f"{kind} ID", group.product_group_id)
        self._kv(lines, "Brand", group.brand)
        self._kv(lines, "Varies By", ", ".join(group.varies_by))
        if group.total_variants > 0:
            self._kv(lines, "Total Variants", str(group.total_variants))
        if group.price_stats is not None:
            stats = group.price_stats
            self._kv(lines, "Price Range", format_price_range(stats.min, stats.max, stats.currency))
        self._kv(lines, "Availability", format_availability_counts(group.availability_counts))
        lines.append("")

        lines.extend(render_variant_table(
            group.variants,
            variant_columns(group),
            total_variants=group.total_variants,
            max_rows=self.max_variant_rows,
        ))

        if group.common_properties and not group.standalone:
            lines.extend(section_header("🔖", "Common Properties"))
            for name in sorted(group.common_properties):
                self._kv(lines, name, group.common_properties[name])
            lines.append("")
        return lines

    @staticmethod
    def _other_entities(entities: list[EntitySummary]) -> list[str]:
        lines = section_header("📋", "Other Entities")
        for entity in entities:
            type_name = entity.type_name or "Thing"
            lines.append(f"• {type_name} - {entity.name}" if entity.name else f"• {type_name}")
            for key in sorted(entity.properties):
                if key != "name":
                    lines.append(f"    ↳ {key}: {entity.properties[key]}")
        lines.append("")
        return lines

    @staticmethod
    def _data_downloads(entries: list[DataDownloadEntry]) -> list[str]:
        lines = section_header("🌐", "Data Downloads")
        if not entries:
            lines.append("No data downloads detected.")
        else:
            noun = "data source" if len(entries) == 1 else "data sources"
            lines.append(f"✓ Found {len(entries)} official {noun}:")
            for entry in entries:
                lines.append(f"  • {entry.content_url}")
                if entry.encoding_format:
                    lines.append(f"    ↳ encodingFormat: {entry.encoding_format}")
                if entry.license:
                    lines.append(f"    ↳ license: {entry.license}")
        lines.append("")
        return lines
