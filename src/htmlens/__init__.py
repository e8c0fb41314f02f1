"""htmlens: structured-data lens for web pages.

Extracts JSON-LD from HTML, builds a knowledge graph and renders product,
organization and navigation summaries.
"""

__version__ = "0.4.0"
