"""JSON-LD ``<script>`` extraction, block combination and expansion.

Expansion itself is delegated to PyLD; everything downstream of
:func:`expand_json_ld` works on plain expanded JSON and never imports it.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Optional

import httpx
from bs4 import BeautifulSoup
from pyld import jsonld as pyld_jsonld

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_CONTEXT = "https://schema.org"

_JSONLD_MEDIA_TYPES = ("application/ld+json", "application/json")
_LINK_ALTERNATE_RE = re.compile(
    r'<(?P<href>[^>]+)>\s*;[^,]*rel="?alternate"?[^,]*type="?application/ld\+json"?'
)


class JsonLdError(ValueError):
    """Invalid JSON-LD block or failed expansion."""


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract_json_ld_blocks(html: str) -> list[str]:
    """Return the trimmed text of every non-empty ``ld+json`` script.

    The ``type`` attribute is matched case-insensitively and may carry
    parameters (``application/ld+json; charset=utf-8``).
    """
    soup = BeautifulSoup(html, "html.parser")
    blocks: list[str] = []
    for script in soup.find_all("script"):
        script_type = (script.get("type") or "").strip().lower()
        if "ld+json" not in script_type:
            continue
        text = script.get_text().strip()
        if text:
            blocks.append(text)
    logger.debug("Found %d JSON-LD block(s)", len(blocks))
    return blocks


def parse_block(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise JsonLdError(f"failed to parse JSON-LD block: {exc}") from exc


def with_default_context(document: Any) -> Any:
    """Give context-less top-level objects the schema.org context.

    Raises
    ------
    JsonLdError
        If *document* is neither an object nor an array.
    """
    if isinstance(document, dict):
        document.setdefault("@context", DEFAULT_CONTEXT)
        return document
    if isinstance(document, list):
        for item in document:
            if isinstance(item, dict):
                item.setdefault("@context", DEFAULT_CONTEXT)
        return document
    raise JsonLdError(
        f"Invalid JSON-LD: top level must be an object or array, got {type(document).__name__}"
    )


def combine_json_ld_blocks(blocks: list[str]) -> dict[str, Any]:
    """Merge several raw blocks into one JSON-LD document.

    Parameters
    ----------
    blocks
        Raw JSON text of each ``<script type="application/ld+json">``.

    Returns
    -------
    dict
        A single document. Several blocks are merged under ``@graph`` with
        the first ``@context`` found (schema.org by default).

    Raises
    ------
    JsonLdError
        On invalid JSON, a non-object single block, or a top-level
        primitive among several blocks.
    """
    if not blocks:
        return {"@context": DEFAULT_CONTEXT, "@graph": []}

    if len(blocks) == 1:
        parsed = parse_block(blocks[0])
        if not isinstance(parsed, dict):
            raise JsonLdError(
                f"Invalid JSON-LD: single block must be an object, got {type(parsed).__name__}"
            )
        if "@context" not in parsed:
            parsed["@context"] = DEFAULT_CONTEXT
        return parsed

    context: Any = None
    graph: list[Any] = []
    for raw in blocks:
        parsed = parse_block(raw)
        if isinstance(parsed, dict):
            if context is None and "@context" in parsed:
                context = parsed["@context"]
            parsed.pop("@context", None)
            graph.append(parsed)
        elif isinstance(parsed, list):
            for item in parsed:
                if isinstance(item, dict):
                    item.pop("@context", None)
                graph.append(item)
        else:
            raise JsonLdError(
                f"Invalid JSON-LD: top level must be an object or array, got {type(parsed).__name__}"
            )

    return {"@context": context if context is not None else DEFAULT_CONTEXT, "@graph": graph}


# ---------------------------------------------------------------------------
# Expansion
# ---------------------------------------------------------------------------

class HttpxDocumentLoader:
    """PyLD document loader backed by httpx, caching remote contexts.

    Follows ``Link: <...>; rel="alternate"; type="application/ld+json"``
    headers, which is how schema.org serves its context.
    """

    def __init__(self, timeout: float = 30.0, user_agent: Optional[str] = None) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._cache: dict[str, dict[str, Any]] = {}

    def __call__(self, url: str, options: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        if url in self._cache:
            return self._cache[url]

        headers = {"Accept": "application/ld+json, application/json"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        try:
            resp = httpx.get(url, headers=headers, timeout=self.timeout, follow_redirects=True)
            resp.raise_for_status()
            content_type = resp.headers.get("content-type", "").split(";")[0].strip()
            if content_type not in _JSONLD_MEDIA_TYPES:
                alternate = _LINK_ALTERNATE_RE.search(resp.headers.get("link", ""))
                if alternate:
                    target = str(resp.url.join(alternate.group("href")))
                    logger.debug("Following JSON-LD alternate link %s", target)
                    resp = httpx.get(target, headers=headers, timeout=self.timeout, follow_redirects=True)
                    resp.raise_for_status()
            document = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise pyld_jsonld.JsonLdError(
                f"Could not load remote document {url}: {exc}",
                "jsonld.LoadDocumentError",
                {"url": url},
                code="loading document failed",
            ) from exc

        remote = {
            "contentType": "application/ld+json",
            "contextUrl": None,
            "documentUrl": str(resp.url),
            "document": document,
        }
        self._cache[url] = remote
        return remote


def expand_json_ld(
    raw: str | dict[str, Any] | list[Any],
    base_url: str,
    document_loader: Optional[Callable[..., dict[str, Any]]] = None,
) -> list[dict[str, Any]]:
    """Expand one JSON-LD document against *base_url*.

    Raises
    ------
    JsonLdError
        If the input is not JSON or the JSON-LD processor rejects it.
    """
    document = parse_block(raw) if isinstance(raw, str) else raw
    options: dict[str, Any] = {"base": base_url}
    if document_loader is not None:
        options["documentLoader"] = document_loader
    try:
        expanded = pyld_jsonld.expand(document, options)
    except pyld_jsonld.JsonLdError as exc:
        raise JsonLdError(f"JSON-LD expansion failed: {exc}") from exc
    return expanded
