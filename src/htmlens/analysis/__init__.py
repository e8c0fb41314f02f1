"""Pattern extractors over a finalized knowledge graph."""

from .classify import EntityKind, classify_node  # noqa: F401
from .insights import GraphInsights  # noqa: F401
