"""Tests for Organization and BreadcrumbList extraction."""

from __future__ import annotations

import pytest

from htmlens.analysis.breadcrumbs import extract_breadcrumbs, parse_position
from htmlens.analysis.organizations import extract_address, extract_organizations
from htmlens.core.adjacency import GraphIndex
from htmlens.core.graph_builder import build_graph

S = "https://schema.org/"


class TestOrganization:
    def test_contact_fields(self, organization_doc):
        [org] = extract_organizations(GraphIndex(build_graph(organization_doc)))
        assert org.name == "Acme Bikes"
        assert org.url == "https://acme.example/"
        assert org.logo == "https://acme.example/logo.png"
        assert org.telephone == "+1-555-0100"
        assert org.email == "hello@acme.example"

    def test_address_one_line(self, organization_doc):
        [org] = extract_organizations(GraphIndex(build_graph(organization_doc)))
        assert org.address.one_line() == "1 Main St, 12345 Springfield, US"

    def test_rating(self, organization_doc):
        [org] = extract_organizations(GraphIndex(build_graph(organization_doc)))
        assert org.rating_value == "4.5"
        assert org.rating_count == "120"

    def test_online_store_is_an_organization(self):
        doc = [{"@id": "s", "@type": [S + "OnlineStore"], S + "name": [{"@value": "Shop"}]}]
        [org] = extract_organizations(GraphIndex(build_graph(doc)))
        assert org.name == "Shop"
        assert org.address is None

    def test_literal_address(self):
        doc = [{"@id": "o", "@type": [S + "Organization"], S + "address": [{"@value": "1 Main St"}]}]
        index = GraphIndex(build_graph(doc))
        assert extract_address(index, index.nodes["o"]).street_address == "1 Main St"

    def test_country_node_name(self):
        doc = [{
            "@id": "o",
            "@type": [S + "Organization"],
            S + "address": [{
                "@type": [S + "PostalAddress"],
                S + "addressCountry": [{"@type": [S + "Country"], S + "name": [{"@value": "Germany"}]}],
            }],
        }]
        index = GraphIndex(build_graph(doc))
        assert extract_address(index, index.nodes["o"]).country == "Germany"


class TestBreadcrumbs:
    def test_sorted_by_position(self, breadcrumb_doc):
        [trail] = extract_breadcrumbs(GraphIndex(build_graph(breadcrumb_doc)))
        assert [item.position for item in trail.items] == [1, 2]
        assert [item.name for item in trail.items] == ["Home", "Bikes"]
        assert [item.url for item in trail.items] == [
            "https://shop.example/",
            "https://shop.example/bikes",
        ]

    def test_item_name_from_target(self):
        doc = [{
            "@id": "crumbs",
            "@type": [S + "BreadcrumbList"],
            S + "itemListElement": [{
                "@type": [S + "ListItem"],
                S + "position": [{"@value": "1"}],
                S + "item": [{"@id": "https://shop.example/", S + "name": [{"@value": "Home"}]}],
            }],
        }]
        [trail] = extract_breadcrumbs(GraphIndex(build_graph(doc)))
        assert trail.items[0].name == "Home"

    @pytest.mark.parametrize(
        "raw, expected",
        [("3", 3), (" 4 ", 4), ("-1", 0), ("two", 0), ("٣", 0), (None, 0)],
    )
    def test_parse_position(self, raw, expected):
        assert parse_position(raw) == expected
