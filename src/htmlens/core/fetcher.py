"""Fetch HTML or raw JSON-LD from a URL or a local file."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from urllib.parse import urlsplit

import httpx

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_URL_RE = re.compile(r"^https?://", re.IGNORECASE)

# Local files with these suffixes hold JSON-LD rather than HTML
JSON_LD_SUFFIXES = (".json", ".jsonld")

_ACCEPT = "text/html,application/xhtml+xml,application/ld+json;q=0.9,*/*;q=0.8"


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def is_url(source: str) -> bool:
    """Return True if *source* is an absolute http(s) URL."""
    return bool(_URL_RE.match(source.strip()))


def is_json_ld_file(source: str) -> bool:
    return not is_url(source) and source.lower().endswith(JSON_LD_SUFFIXES)


def derive_output_filename(url: str) -> str:
    """File name for a saved report: ``<host>__<path|index>[__<query>].md``.

    >>> derive_output_filename("https://shop.example/bikes/trail?page=2")
    'shop_example__bikes_trail__page_2.md'
    """
    parts = urlsplit(url)
    path = parts.path.strip("/").replace("/", "_") or "index"
    pieces = [_sanitize(parts.hostname or "page"), _sanitize(path)]
    if parts.query:
        pieces.append(_sanitize(parts.query))
    return "__".join(pieces) + ".md"


def build_output_path(base: str | Path, url: str) -> Path:
    """Use *base* as-is when it names a ``.md`` file, else a file inside it."""
    base = Path(base)
    if base.suffix.lower() == ".md":
        return base
    return base / derive_output_filename(url)


def _sanitize(text: str) -> str:
    return re.sub(r"[^A-Za-z0-9_-]", "_", text)


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------

class PageFetcher:
    """Fetches page content from an http(s) URL or a local path."""

    def __init__(self, timeout: float = 30.0, user_agent: str | None = None):
        self.timeout = timeout
        self.user_agent = user_agent

    # -- public API ----------------------------------------------------------

    def fetch(self, source: str) -> tuple[str, str]:
        """Fetch content and return ``(text, name)``.

        *source* can be:
        - An http(s) URL (``https://shop.example/product``)
        - A local HTML or ``.json``/``.jsonld`` file path

        Returns
        -------
        tuple[str, str]
            ``(content, final_url_or_file_stem)``

        Raises
        ------
        httpx.HTTPError
            On network failures or non-2xx responses.
        FileNotFoundError
            If a local path does not exist.
        """
        if is_url(source):
            return self._fetch_remote(source)
        return self._fetch_local(source)

    # -- private -------------------------------------------------------------

    def _fetch_remote(self, url: str) -> tuple[str, str]:
        headers = {"Accept": _ACCEPT}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        logger.debug("GET %s", url)
        resp = httpx.get(url, headers=headers, timeout=self.timeout, follow_redirects=True)
        resp.raise_for_status()
        return resp.text, str(resp.url)

    @staticmethod
    def _fetch_local(path_str: str) -> tuple[str, str]:
        path = Path(path_str).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(f"Local file not found: {path}")
        content = path.read_text(encoding="utf-8")
        return content, path.stem
