"""Run every extractor over a graph and build the condensed graph summary."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from ..core.adjacency import GraphIndex
from ..core.iri import title_case
from ..core.models import KnowledgeGraph
from .breadcrumbs import extract_breadcrumbs
from .generic import extract_data_downloads, extract_other_entities
from .organizations import extract_organizations
from .products import extract_products
from .summaries import (
    BreadcrumbSummary,
    DataDownloadEntry,
    EntitySummary,
    OrganizationSummary,
    ProductGroupSummary,
)

logger = logging.getLogger(__name__)

# Direct variant properties reported in the condensed summary
_SUMMARY_DIRECT_PROPERTIES = ("color", "size")


class GraphInsights(BaseModel):
    """Everything the report renderer needs, derived from one graph."""

    product_groups: list[ProductGroupSummary] = Field(default_factory=list)
    organizations: list[OrganizationSummary] = Field(default_factory=list)
    breadcrumbs: list[BreadcrumbSummary] = Field(default_factory=list)
    other_entities: list[EntitySummary] = Field(default_factory=list)
    data_downloads: list[DataDownloadEntry] = Field(default_factory=list)
    graph_summary: list[str] = Field(default_factory=list)

    @classmethod
    def from_graph(
        cls,
        graph: KnowledgeGraph,
        *,
        include_data_downloads: bool = False,
    ) -> GraphInsights:
        """Extract all summaries from a finalized graph.

        Parameters
        ----------
        graph
            The graph produced by ``GraphBuilder.finalize()``.
        include_data_downloads
            Also collect ``DataDownload`` entries and mention them in the
            condensed summary.
        """
        index = GraphIndex(graph)
        insights = cls(
            product_groups=extract_products(index),
            organizations=extract_organizations(index),
            breadcrumbs=extract_breadcrumbs(index),
            other_entities=extract_other_entities(index),
        )
        if include_data_downloads:
            insights.data_downloads = extract_data_downloads(index)
        insights.graph_summary = insights.build_graph_summary()
        logger.debug(
            "Insights: %d product group(s), %d organization(s), %d breadcrumb list(s), %d other",
            len(insights.product_groups),
            len(insights.organizations),
            len(insights.breadcrumbs),
            len(insights.other_entities),
        )
        return insights

    def build_graph_summary(self) -> list[str]:
        """Condensed ``Parent → Child (detail)`` lines, in a fixed order."""
        lines: list[str] = []
        offer_count = 0
        property_names: set[str] = set()
        direct_properties: set[str] = set()

        for group in self.product_groups:
            parent = "Product" if group.standalone else "ProductGroup"
            if group.brand:
                lines.append(f"{parent} → Brand ({group.brand})")
            if not group.standalone and group.total_variants > 0:
                lines.append(f"ProductGroup → Product ({group.total_variants})")
            for variant in group.variants:
                if variant.offer is not None:
                    offer_count += 1
                property_names.update(variant.additional)
                for prop in _SUMMARY_DIRECT_PROPERTIES:
                    if getattr(variant, prop):
                        direct_properties.add(prop)

        if offer_count:
            lines.append(f"Product → Offer ({offer_count})")
        if property_names:
            lines.append(f"Product → PropertyValue ({', '.join(sorted(property_names))})")
        for prop in sorted(direct_properties):
            lines.append(f"Product → {title_case(prop)}")
        if self.data_downloads:
            lines.append(f"ProductGroup → DataDownload ({len(self.data_downloads)})")
        return lines
