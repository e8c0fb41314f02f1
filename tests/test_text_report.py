"""Tests for the sectioned text report."""

from __future__ import annotations

import pytest

from htmlens.analysis.insights import GraphInsights
from htmlens.analysis.summaries import (
    EntitySummary,
    OfferSummary,
    ProductGroupSummary,
    VariantSummary,
)
from htmlens.config import LensConfig
from htmlens.core.graph_builder import build_graph
from htmlens.generators.formatting import DIVIDER
from htmlens.generators.text_report import (
    NO_DATA_MESSAGE,
    TextReportRenderer,
    render_variant_table,
    variant_columns,
)


def _kv(label: str, value: str) -> str:
    return "• " + label.ljust(16) + " : " + value


@pytest.fixture
def product_report(product_group_doc) -> str:
    graph = build_graph(product_group_doc)
    return TextReportRenderer().render(GraphInsights.from_graph(graph), graph)


class TestProductGroupSection:
    def test_header_and_fields(self, product_report):
        lines = product_report.splitlines()
        idx = lines.index("📦 ProductGroup: Trail Bike")
        assert lines[idx - 1] == DIVIDER
        assert lines[idx + 1] == DIVIDER
        assert _kv("ProductGroup ID", "TB-1") in lines
        assert _kv("Brand", "Acme") in lines
        assert _kv("Varies By", "Size") in lines
        assert _kv("Total Variants", "2") in lines
        assert _kv("Price Range", "$29.99 – $35.50") in lines
        assert _kv("Availability", "1 InStock / 1 OutOfStock") in lines

    def test_variant_table(self, product_report):
        lines = product_report.splitlines()
        start = lines.index("🧩 Variants")
        assert lines[start + 2 : start + 6] == [
            "| SKU    | Size | Price  | Availability |",
            "| ------ | ---- | ------ | ------------ |",
            "| TB-1-L | L    | $35.50 | ✅ InStock    |",
            "| TB-1-M | M    | $29.99 | ❌ OutOfStock |",
        ]

    def test_common_properties(self, product_report):
        lines = product_report.splitlines()
        start = lines.index("🔖 Common Properties")
        assert lines[start + 2 : start + 4] == [_kv("Colorway", "Sunset"), _kv("color", "Red")]

    def test_section_order(self, product_report):
        assert product_report.index("📦 ProductGroup") < product_report.index("🧩 Variants")
        assert product_report.index("🧩 Variants") < product_report.index("🔖 Common Properties")
        assert product_report.index("🔖 Common Properties") < product_report.index("Graph Summary")

    def test_single_trailing_newline(self, product_report):
        assert product_report.endswith("Product → Size\n")
        assert not product_report.endswith("\n\n")

    def test_optional_sections_off_by_default(self, product_report):
        assert "```json" not in product_report
        assert "```mermaid" not in product_report
        assert "Data Downloads" not in product_report


class TestOptionalSections:
    def test_graph_json_and_diagram(self, product_group_doc):
        graph = build_graph(product_group_doc)
        config = LensConfig(include_markdown_json=True, include_diagram=True)
        report = TextReportRenderer(config).render(GraphInsights.from_graph(graph), graph)
        assert "🧾 Knowledge Graph JSON" in report
        assert '"@id": "https://shop.example/bikes#group"' in report
        assert "```mermaid\ngraph TD\n" in report
        assert report.index("```json") < report.index("```mermaid")

    def test_data_downloads_empty_notice(self):
        config = LensConfig(include_data_downloads=True)
        report = TextReportRenderer(config).render(GraphInsights())
        assert "🌐 Data Downloads" in report
        assert "No data downloads detected." in report


class TestOtherSections:
    def test_no_data(self):
        assert TextReportRenderer().render(GraphInsights()) == NO_DATA_MESSAGE + "\n"

    def test_organization_and_breadcrumbs(self, organization_doc, breadcrumb_doc):
        graph = build_graph(organization_doc + breadcrumb_doc)
        report = TextReportRenderer().render(GraphInsights.from_graph(graph))
        lines = report.splitlines()
        assert lines.index("🏢 Organization") < lines.index("🍞 Breadcrumb Navigation")
        assert _kv("Address", "1 Main St, 12345 Springfield, US") in lines
        assert _kv("Rating", "4.5 (120 reviews)") in lines
        assert "Home (https://shop.example/) → Bikes (https://shop.example/bikes)" in lines
        assert NO_DATA_MESSAGE not in report

    def test_other_entities(self):
        insights = GraphInsights(other_entities=[
            EntitySummary(id="e", type_name="Event", properties={"name": "Launch", "startDate": "2024-05-01"}),
            EntitySummary(id="t", properties={"text": "x"}),
        ])
        lines = TextReportRenderer().render(insights).splitlines()
        assert "• Event - Launch" in lines
        assert "    ↳ startDate: 2024-05-01" in lines
        assert "• Thing" in lines


class TestVariantTable:
    def _group(self, count: int) -> ProductGroupSummary:
        variants = [
            VariantSummary(id=f"v{i}", sku=f"S{i}", properties={"color": "Red"}, offer=OfferSummary(price_display="$1"))
            for i in range(count)
        ]
        return ProductGroupSummary(id="g", variants=variants, total_variants=count, standalone=True)

    def test_standalone_fallback_columns(self):
        assert variant_columns(self._group(1)) == ["Color"]

    def test_varies_by_columns_deduplicated(self):
        group = ProductGroupSummary(id="g", varies_by=["Size", "size", "sku", "Color"])
        assert variant_columns(group) == ["Size", "Color"]

    def test_truncation_note(self):
        group = self._group(3)
        lines = render_variant_table(group.variants, ["Color"], total_variants=3, max_rows=2)
        assert "(1 additional variants not shown)" in lines
        assert sum(1 for line in lines if "| Red" in line) == 2

    def test_missing_cells(self):
        lines = render_variant_table([VariantSummary(id="v")], ["Size"])
        assert lines[-2] == "| –   | –    | –     | –            |"

    def test_no_variants(self):
        assert render_variant_table([], ["Size"]) == []
