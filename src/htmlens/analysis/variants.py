"""Common vs. varying property classification for product variants.

A ProductGroup's ``variesBy`` entries are free text (``"Color"``,
``"FrameSize"``, ``"https://schema.org/size"``). Property names are
compared on their camel-case token sequences, so ``"Size"`` matches
``"FrameSize"`` but not ``"Colorway"``.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from ..core.iri import is_http_iri, shorten_iri
from .summaries import VariantSummary

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_SEPARATORS_RE = re.compile(r"[^0-9A-Za-z]+")

# Never candidates for common/varying classification
IDENTITY_PROPERTIES = frozenset({
    "sku",
    "name",
    "url",
    "image",
    "description",
    "productid",
    "productgroupid",
    "gtin",
    "gtin8",
    "gtin12",
    "gtin13",
    "gtin14",
    "mpn",
    "offers",
    "identifier",
    "sameas",
    "inproductgroupwithid",
})


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def short_name(name: str) -> str:
    """Last segment of an http(s) IRI; free text such as ``"Size (EU/US)"`` is kept."""
    return shorten_iri(name) if is_http_iri(name) else name


def normalize_tokens(name: str) -> list[str]:
    """Split *name* at upper-case letters and separators, lower-cased.

    >>> normalize_tokens("FrameSize")
    ['frame', 'size']
    >>> normalize_tokens("HTMLParser")
    ['h', 't', 'm', 'l', 'parser']
    """
    tokens: list[str] = []
    for chunk in _SEPARATORS_RE.split(short_name(name)):
        current = ""
        for ch in chunk:
            if ch.isupper() and current:
                tokens.append(current.lower())
                current = ch
            else:
                current += ch
        if current:
            tokens.append(current.lower())
    return tokens


def is_identity_property(name: str) -> bool:
    return short_name(name).lower() in IDENTITY_PROPERTIES


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

def matches_varies_by(candidate: str, entry: str) -> bool:
    """Does property *candidate* correspond to the ``variesBy`` *entry*?"""
    candidate_short = short_name(candidate)
    entry_short = short_name(entry)
    if candidate_short.lower() == entry_short.lower():
        return True

    entry_tokens = normalize_tokens(entry_short)
    candidate_tokens = normalize_tokens(candidate_short)
    if not entry_tokens or not candidate_tokens:
        return False
    if len(entry_tokens) == 1:
        return entry_tokens[0] in candidate_tokens
    return entry_tokens == candidate_tokens


def is_varying(candidate: str, varies_by: Iterable[str]) -> bool:
    return any(matches_varies_by(candidate, entry) for entry in varies_by)


def variant_value(variant: VariantSummary, entry: str) -> Optional[str]:
    """Cell value of a variant for one ``variesBy`` column.

    An exact (case-insensitive) name wins over a token match; direct
    properties win over ``additionalProperty`` values.
    """
    pools = (variant.properties, variant.additional)
    wanted = short_name(entry).lower()
    for pool in pools:
        for name, value in pool.items():
            if name.lower() == wanted:
                return value
    for pool in pools:
        for name, value in pool.items():
            if not is_identity_property(name) and matches_varies_by(name, entry):
                return value
    return None


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify_properties(
    variants: list[VariantSummary],
    varies_by: list[str],
) -> tuple[list[str], dict[str, str]]:
    """Split variant properties into varying names and common values.

    Returns
    -------
    tuple[list[str], dict[str, str]]
        ``(varying, common)``: sorted names of properties classified as
        varying across all variants, and the non-varying properties of the
        first variant with their values.
    """
    varying: set[str] = set()
    for variant in variants:
        for name in list(variant.properties) + list(variant.additional):
            if not is_identity_property(name) and is_varying(name, varies_by):
                varying.add(name)

    common: dict[str, str] = {}
    if variants:
        first = variants[0]
        for pool in (first.properties, first.additional):
            for name, value in pool.items():
                if is_identity_property(name) or name in varying:
                    continue
                common.setdefault(name, value)

    return sorted(varying), common
