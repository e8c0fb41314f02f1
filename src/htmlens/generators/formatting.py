"""Text formatting primitives: section frames, prices, availability, escaping."""

from __future__ import annotations

import math
from typing import Mapping, Optional

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DIVIDER = "─" * 61
LABEL_WIDTH = 16
MISSING_CELL = "–"

CURRENCY_SYMBOLS: Mapping[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "JPY": "¥",
}

AVAILABILITY_ICONS: Mapping[str, str] = {
    "instock": "✅",
    "outofstock": "❌",
    "preorder": "🕒",
}
DEFAULT_AVAILABILITY_ICON = "•"


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def section_header(icon: str, title: str) -> list[str]:
    return [DIVIDER, f"{icon} {title}", DIVIDER]


def key_value(label: str, value: Optional[str], width: int = LABEL_WIDTH) -> Optional[str]:
    """``• <label padded> : <value>``, or *None* when *value* is empty."""
    if not value:
        return None
    return f"• {label:<{width}} : {value}"


# ---------------------------------------------------------------------------
# Prices
# ---------------------------------------------------------------------------

def format_price_with_precision(value: float, currency: Optional[str], decimals: int) -> str:
    number = f"{value:.{decimals}f}"
    if not currency:
        return number
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{number}"
    return f"{number} {currency}"


def format_price(value: float, currency: Optional[str] = None) -> str:
    """0 decimals for integral values, else 2.

    >>> format_price(120.0, "EUR")
    '€120'
    >>> format_price(29.99, "CHF")
    '29.99 CHF'
    """
    fraction = abs(value - math.trunc(value))
    decimals = 0 if fraction < 1e-4 else 2
    return format_price_with_precision(value, currency, decimals)


def format_price_range(minimum: float, maximum: float, currency: Optional[str] = None) -> str:
    """``$29.99 – $35.50``; a single value when both ends are equal."""
    low = format_price_with_precision(minimum, currency, 2)
    if abs(minimum - maximum) < 1e-4:
        return low
    return f"{low} – {format_price_with_precision(maximum, currency, 2)}"


# ---------------------------------------------------------------------------
# Availability
# ---------------------------------------------------------------------------

def availability_icon(status: str) -> str:
    return AVAILABILITY_ICONS.get(status.lower(), DEFAULT_AVAILABILITY_ICON)


def availability_label(status: str) -> str:
    return f"{availability_icon(status)} {status}"


def format_availability_counts(counts: Mapping[str, int]) -> Optional[str]:
    """``"1 InStock / 2 OutOfStock"``, statuses sorted; *None* when empty."""
    if not counts:
        return None
    return " / ".join(f"{counts[status]} {status}" for status in sorted(counts))


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------

_HTML_ATTR_ESCAPES = str.maketrans({
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#39;",
    "<": "&lt;",
    ">": "&gt;",
})
_HTML_TEXT_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})


def escape_html_attr(value: str) -> str:
    return value.translate(_HTML_ATTR_ESCAPES)


def escape_html_text(value: str) -> str:
    return value.translate(_HTML_TEXT_ESCAPES)


def escape_mermaid_label(label: str) -> str:
    return label.replace('"', '\\"')
