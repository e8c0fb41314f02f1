"""Runtime settings for fetching, analysis and report rendering."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from . import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"Mozilla/5.0 (compatible; htmlens/{__version__})"

ENV_TIMEOUT = "HTMLENS_TIMEOUT"
ENV_USER_AGENT = "HTMLENS_USER_AGENT"


@dataclass
class LensConfig:
    """Knobs shared by the pipeline, the renderer and the CLI."""

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = field(default=DEFAULT_USER_AGENT)
    label_width: int = 16

    # Optional report sections
    include_data_downloads: bool = False
    include_markdown_json: bool = False
    include_diagram: bool = False

    # Sequential ``_:htmlens-bN`` blank ids instead of random UUIDs
    deterministic_ids: bool = True

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_env(cls, **overrides) -> LensConfig:
        """Build a config from ``HTMLENS_*`` variables, then apply *overrides*."""
        config = cls()
        raw_timeout = os.environ.get(ENV_TIMEOUT)
        if raw_timeout:
            try:
                config.timeout = float(raw_timeout)
            except ValueError:
                logger.warning("Ignoring invalid %s=%r", ENV_TIMEOUT, raw_timeout)
        user_agent = os.environ.get(ENV_USER_AGENT)
        if user_agent:
            config.user_agent = user_agent
        for name, value in overrides.items():
            if not hasattr(config, name):
                raise TypeError(f"Unknown LensConfig option: {name}")
            setattr(config, name, value)
        return config
