"""Normalization of expanded JSON-LD literals into plain JSON values."""

from __future__ import annotations

import math
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_XSD = "http://www.w3.org/2001/XMLSchema#"

_INTEGER_TYPES = {
    _XSD + name
    for name in (
        "integer", "int", "long", "short", "byte",
        "nonNegativeInteger", "positiveInteger",
        "nonPositiveInteger", "negativeInteger",
        "unsignedLong", "unsignedInt", "unsignedShort", "unsignedByte",
    )
}
_DECIMAL_TYPES = {_XSD + "decimal", _XSD + "double", _XSD + "float"}

JSON_LITERAL = "@json"


class InvalidLiteralError(ValueError):
    """A literal that cannot be represented as a JSON value."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def is_value_object(obj: Any) -> bool:
    return isinstance(obj, dict) and "@value" in obj


def normalize_value(obj: dict[str, Any]) -> Any:
    """Convert one expanded value object to its canonical JSON form.

    Parameters
    ----------
    obj
        An expanded value object such as ``{"@value": "29.99"}``,
        ``{"@value": "7", "@type": xsd:integer}`` or
        ``{"@value": "Rot", "@language": "de"}``.

    Returns
    -------
    ``None``, a bool, an int/float, a string, a language-tagged
    ``{"@value", "@language"?, "@direction"?}`` dict, or a structural copy
    of an ``@json`` literal.

    Raises
    ------
    InvalidLiteralError
        If the literal is not representable (non-finite or unparseable
        number, or a value of an unexpected shape).
    """
    if not is_value_object(obj):
        raise InvalidLiteralError(f"Not a value object: {obj!r}")

    raw = obj["@value"]
    datatype = obj.get("@type")

    if datatype == JSON_LITERAL:
        return _convert_json(raw)

    if "@language" in obj or "@direction" in obj:
        if not isinstance(raw, str):
            raise InvalidLiteralError(f"Language-tagged literal is not a string: {raw!r}")
        tagged: dict[str, Any] = {"@value": raw}
        if obj.get("@language"):
            tagged["@language"] = obj["@language"]
        if obj.get("@direction"):
            tagged["@direction"] = obj["@direction"]
        return tagged

    if raw is None or isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return _finite(raw)
    if isinstance(raw, str):
        if datatype in _INTEGER_TYPES:
            return _parse_number(raw, integer=True)
        if datatype in _DECIMAL_TYPES:
            return _parse_number(raw, integer=False)
        return raw

    raise InvalidLiteralError(f"Unsupported literal: {raw!r}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _finite(number: int | float) -> int | float:
    if isinstance(number, float) and not math.isfinite(number):
        raise InvalidLiteralError(f"Non-finite number: {number!r}")
    return number


def _parse_number(text: str, *, integer: bool) -> int | float:
    text = text.strip()
    try:
        if integer:
            return int(text)
        return _finite(float(text))
    except ValueError as exc:
        raise InvalidLiteralError(f"Unparseable number: {text!r}") from exc


def _convert_json(raw: Any) -> Any:
    """Structural copy of an embedded JSON literal.

    Non-finite floats have no JSON form and are kept as their string text.
    """
    if isinstance(raw, dict):
        return {str(k): _convert_json(v) for k, v in raw.items()}
    if isinstance(raw, (list, tuple)):
        return [_convert_json(v) for v in raw]
    if isinstance(raw, float) and not math.isfinite(raw):
        return str(raw)
    if raw is None or isinstance(raw, (bool, int, float, str)):
        return raw
    return str(raw)
