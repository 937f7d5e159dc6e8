"""Process-wide logging configuration for the entry points."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "LOG_STATS_LOG_LEVEL"


def configure_logging(default_level: str = "WARNING") -> None:
    """Configure stderr logging; the level comes from LOG_STATS_LOG_LEVEL.

    stdout is reserved for the report (CLI) or the MCP transport (server).
    """
    level_name = os.getenv(LOG_LEVEL_ENV, default_level).upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
