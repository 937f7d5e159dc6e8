"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any

from log_level_stats.core.config import resolve_max_workers, resolve_ordering
from log_level_stats.core.errors import ConfigError
from log_level_stats.core.log_service import analyze_file
from log_level_stats.core.models import Severity, parse_severity
from log_level_stats.core.report import StatsReport


def _parse_level(level: str | None) -> Severity:
    if not level:
        return Severity.INFO
    try:
        return parse_severity(level)
    except ValueError as e:
        raise ConfigError(f"{e}. Tip: level is case-insensitive (e.g., 'error').") from e


async def log_level_stats_impl(
    *,
    log_path: str,
    level: str | None = None,
    ordering: str | None = None,
    max_workers: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `log_level_stats` MCP tool."""
    min_severity = _parse_level(level)
    order = resolve_ordering(ordering)
    state = await analyze_file(
        log_path,
        min_severity=min_severity,
        ordering=order,
        max_workers=resolve_max_workers(max_workers),
    )
    out: dict[str, Any] = StatsReport.from_state(state).model_dump()
    out["counted"] = state.counted
    out["min_severity"] = min_severity.value
    out["ordering"] = order.value
    return out
