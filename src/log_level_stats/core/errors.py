"""Error taxonomy for a log analysis run.

Every error here is fatal for the run that raised it.
"""

from __future__ import annotations

from pathlib import Path


class LogStatsError(Exception):
    """Base class for analysis failures."""

    def __init__(self, reason: str, path: Path | str | None = None):
        self.reason = reason
        self.path = Path(path) if path is not None else None
        super().__init__(reason)


class ConfigError(LogStatsError, ValueError):
    """Configuration could not be resolved (missing path, unknown level)."""


class SourceOpenError(LogStatsError):
    """The input log file could not be opened."""


class SourceReadError(LogStatsError):
    """I/O or decode failure while reading the input log file."""


class DestinationCreateError(LogStatsError):
    """The report destination could not be created."""


class DestinationWriteError(LogStatsError):
    """Writing the report failed after the destination was opened."""
