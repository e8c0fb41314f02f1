"""Summary models produced by the pattern extractors.

These are plain data holders; all rendering lives in ``htmlens.generators``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

class OfferSummary(BaseModel):
    """First ``Offer`` reachable from a product over ``offers``."""

    price_raw: Optional[str] = None
    price: Optional[float] = None
    price_display: Optional[str] = None
    currency: Optional[str] = None
    availability: Optional[str] = None  # shortened, e.g. "InStock"


class VariantSummary(BaseModel):
    id: str
    sku: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    properties: dict[str, str] = Field(default_factory=dict)
    additional: dict[str, str] = Field(default_factory=dict)
    offer: Optional[OfferSummary] = None


class PriceStats(BaseModel):
    min: float
    max: float
    currency: Optional[str] = None

    def add(self, price: float, currency: Optional[str]) -> None:
        self.min = min(self.min, price)
        self.max = max(self.max, price)
        if self.currency is None:
            self.currency = currency


class ProductGroupSummary(BaseModel):
    """A ProductGroup with its variants, or a lone Product as one variant."""

    id: str
    name: Optional[str] = None
    product_group_id: Optional[str] = None
    brand: Optional[str] = None
    varies_by: list[str] = Field(default_factory=list)
    total_variants: int = 0
    price_stats: Optional[PriceStats] = None
    availability_counts: dict[str, int] = Field(default_factory=dict)
    variants: list[VariantSummary] = Field(default_factory=list)
    varying_properties: list[str] = Field(default_factory=list)
    common_properties: dict[str, str] = Field(default_factory=dict)
    standalone: bool = False


# ---------------------------------------------------------------------------
# Organizations & navigation
# ---------------------------------------------------------------------------

class PostalAddressSummary(BaseModel):
    street_address: Optional[str] = None
    postal_code: Optional[str] = None
    locality: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None

    def one_line(self) -> str:
        city = " ".join(p for p in (self.postal_code, self.locality) if p)
        parts = [self.street_address, city, self.region, self.country]
        return ", ".join(p for p in parts if p)


class OrganizationSummary(BaseModel):
    id: str
    name: Optional[str] = None
    url: Optional[str] = None
    logo: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[PostalAddressSummary] = None
    rating_value: Optional[str] = None
    rating_count: Optional[str] = None


class BreadcrumbItem(BaseModel):
    position: int = 0
    name: Optional[str] = None
    url: Optional[str] = None


class BreadcrumbSummary(BaseModel):
    id: str
    items: list[BreadcrumbItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Everything else
# ---------------------------------------------------------------------------

class EntitySummary(BaseModel):
    """Fallback view of an unrecognized node."""

    id: str
    type_name: Optional[str] = None
    properties: dict[str, str] = Field(default_factory=dict)

    @property
    def name(self) -> Optional[str]:
        return self.properties.get("name")


class DataDownloadEntry(BaseModel):
    content_url: str
    encoding_format: Optional[str] = None
    license: Optional[str] = None
