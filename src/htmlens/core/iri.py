"""IRI shortening, schema.org property lookup and value display helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .models import GraphNode

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SCHEMA_HTTPS = "https://schema.org/"
SCHEMA_HTTP = "http://schema.org/"


# ---------------------------------------------------------------------------
# IRI helpers
# ---------------------------------------------------------------------------

def shorten_iri(iri: str) -> str:
    """Return the segment after the last ``/`` or ``#``.

    >>> shorten_iri("https://schema.org/InStock")
    'InStock'
    """
    cut = max(iri.rfind("/"), iri.rfind("#"))
    if cut < 0:
        return iri
    return iri[cut + 1:]


def predicate_matches(predicate: str, name: str) -> bool:
    """Loose predicate comparison: ``https://schema.org/offers`` matches ``offers``."""
    return predicate.endswith(name)


def is_http_iri(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def has_schema_type(node: GraphNode, type_name: str) -> bool:
    """Case-insensitive match of *type_name* against the node's shortened types."""
    wanted = type_name.lower()
    return any(shorten_iri(t).lower() == wanted for t in node.types)


def title_case(text: str) -> str:
    """``"color"`` → ``"Color"``; everything after the first character is lower-cased."""
    if not text:
        return text
    return text[0].upper() + text[1:].lower()


# ---------------------------------------------------------------------------
# Property lookup
# ---------------------------------------------------------------------------

def _candidate_keys(key: str) -> list[str]:
    if key.startswith(SCHEMA_HTTPS):
        short = key[len(SCHEMA_HTTPS):]
        return [key, SCHEMA_HTTP + short, short]
    if key.startswith(SCHEMA_HTTP):
        short = key[len(SCHEMA_HTTP):]
        return [key, SCHEMA_HTTPS + short, short]
    if is_http_iri(key):
        return [key, shorten_iri(key)]
    return [SCHEMA_HTTPS + key, SCHEMA_HTTP + key, key]


def resolve_property(node: GraphNode, key: str) -> Optional[Any]:
    """Look up a schema.org property on *node*.

    Parameters
    ----------
    node
        The node whose ``properties`` are searched.
    key
        A bare property name (``price``) or a full IRI. Both schema.org
        schemes and the bare key are tried, in that order.

    Returns
    -------
    The stored JSON value, or *None* when no candidate key is present.
    """
    for candidate in _candidate_keys(key):
        if candidate in node.properties:
            return node.properties[candidate]
    return None


def json_value_to_string(value: Any) -> Optional[str]:
    """Render a stored JSON value as a single display string.

    Strings are returned verbatim, numbers and booleans are stringified,
    lists yield their first element and objects their ``@value`` or
    ``name`` member.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        for item in value:
            text = json_value_to_string(item)
            if text is not None:
                return text
        return None
    if isinstance(value, dict):
        for member in ("@value", "name"):
            if member in value:
                return json_value_to_string(value[member])
    return None


def property_text(node: GraphNode, key: str) -> Optional[str]:
    """Display string of a property, *None* when absent or empty."""
    text = json_value_to_string(resolve_property(node, key))
    if text is None:
        return None
    text = text.strip()
    return text or None


def property_list(node: GraphNode, key: str) -> list[str]:
    """All display strings of a (possibly multi-valued) property."""
    value = resolve_property(node, key)
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    out: list[str] = []
    for item in items:
        text = json_value_to_string(item)
        if text and text.strip():
            out.append(text.strip())
    return out
