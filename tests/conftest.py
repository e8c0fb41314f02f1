"""Shared fixtures: hand-written documents in pyld's expanded form."""

from __future__ import annotations

import pytest

from htmlens.core.adjacency import GraphIndex
from htmlens.core.graph_builder import build_graph

S = "https://schema.org/"


def v(value):
    return [{"@value": value}]


@pytest.fixture
def product_group_doc():
    """A ProductGroup varying by Size with two variants and one brand."""
    return [
        {
            "@id": "https://shop.example/bikes#group",
            "@type": [S + "ProductGroup"],
            S + "name": v("Trail Bike"),
            S + "productGroupID": v("TB-1"),
            S + "variesBy": v("Size"),
            S + "brand": [
                {"@id": "_:brand", "@type": [S + "Brand"], S + "name": v("Acme")},
            ],
            S + "hasVariant": [
                {
                    "@id": "https://shop.example/bikes/tb-1-m",
                    "@type": [S + "Product"],
                    S + "sku": v("TB-1-M"),
                    S + "size": v("M"),
                    S + "color": v("Red"),
                    S + "additionalProperty": [
                        {
                            "@type": [S + "PropertyValue"],
                            S + "name": v("FrameSize"),
                            S + "value": v("50 cm"),
                        },
                        {
                            "@type": [S + "PropertyValue"],
                            S + "name": v("Colorway"),
                            S + "value": v("Sunset"),
                        },
                    ],
                    S + "offers": [
                        {
                            "@type": [S + "Offer"],
                            S + "price": v(29.99),
                            S + "priceCurrency": v("USD"),
                            S + "availability": [{"@id": S + "OutOfStock"}],
                        },
                    ],
                },
                {
                    "@id": "https://shop.example/bikes/tb-1-l",
                    "@type": [S + "Product"],
                    S + "sku": v("TB-1-L"),
                    S + "size": v("L"),
                    S + "color": v("Red"),
                    S + "additionalProperty": [
                        {
                            "@type": [S + "PropertyValue"],
                            S + "name": v("FrameSize"),
                            S + "value": v("54 cm"),
                        },
                        {
                            "@type": [S + "PropertyValue"],
                            S + "name": v("Colorway"),
                            S + "value": v("Sunset"),
                        },
                    ],
                    S + "offers": [
                        {
                            "@type": [S + "Offer"],
                            S + "price": v("35.50"),
                            S + "priceCurrency": v("USD"),
                            S + "availability": [{"@id": S + "InStock"}],
                        },
                    ],
                },
            ],
        }
    ]


@pytest.fixture
def product_group_index(product_group_doc):
    return GraphIndex(build_graph(product_group_doc))


@pytest.fixture
def organization_doc():
    return [
        {
            "@id": "https://acme.example/#org",
            "@type": [S + "Organization"],
            S + "name": v("Acme Bikes"),
            S + "url": [{"@id": "https://acme.example/"}],
            S + "logo": [{"@id": "https://acme.example/logo.png"}],
            S + "telephone": v("+1-555-0100"),
            S + "email": v("hello@acme.example"),
            S + "address": [
                {
                    "@type": [S + "PostalAddress"],
                    S + "streetAddress": v("1 Main St"),
                    S + "postalCode": v("12345"),
                    S + "addressLocality": v("Springfield"),
                    S + "addressCountry": v("US"),
                }
            ],
            S + "aggregateRating": [
                {
                    "@type": [S + "AggregateRating"],
                    S + "ratingValue": v(4.5),
                    S + "reviewCount": v(120),
                }
            ],
        }
    ]


@pytest.fixture
def breadcrumb_doc():
    """ListItems deliberately listed out of position order."""
    return [
        {
            "@id": "https://shop.example/bikes#crumbs",
            "@type": [S + "BreadcrumbList"],
            S + "itemListElement": [
                {
                    "@type": [S + "ListItem"],
                    S + "position": v(2),
                    S + "name": v("Bikes"),
                    S + "item": [{"@id": "https://shop.example/bikes"}],
                },
                {
                    "@type": [S + "ListItem"],
                    S + "position": v(1),
                    S + "name": v("Home"),
                    S + "item": [{"@id": "https://shop.example/"}],
                },
            ],
        }
    ]
