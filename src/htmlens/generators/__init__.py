"""Text and diagram renderers."""
