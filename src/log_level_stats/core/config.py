"""Run configuration with environment fallback.

Flags win when non-empty; otherwise the matching environment variable is used.
The aggregator only ever sees the resolved values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .errors import ConfigError
from .models import Ordering, Severity, parse_severity

LOG_FILE_ENV = "LOG_FILE_PATH"
DETAIL_LEVEL_ENV = "DETAIL_LEVEL"
OUTPUT_FILE_ENV = "OUTPUT_FILE"
ORDERING_ENV = "LOG_STATS_ORDERING"
MAX_WORKERS_ENV = "LOG_STATS_MAX_WORKERS"

DEFAULT_LEVEL = Severity.INFO

ReportFormat = Literal["text", "json"]


@dataclass(frozen=True, slots=True)
class AnalyzerConfig:
    log_path: Path
    min_severity: Severity = DEFAULT_LEVEL
    output_path: Path | None = None  # None writes to stdout
    ordering: Ordering = Ordering.RANK
    report_format: ReportFormat = "text"
    labels: str = "ru"
    max_workers: int = 1
    encoding: str = "utf-8"


def _first_non_empty(value: str | None, env_name: str) -> str | None:
    if value:
        return value
    env = os.getenv(env_name)
    return env or None


def resolve_max_workers(max_workers: int | None) -> int:
    """Return the classifier worker count (explicit, then env, then 1)."""
    if max_workers is not None:
        if max_workers < 1:
            raise ConfigError("max_workers must be >= 1")
        return max_workers

    env = os.getenv(MAX_WORKERS_ENV)
    if env:
        try:
            value = int(env)
        except ValueError as exc:
            raise ConfigError(f"{MAX_WORKERS_ENV} must be an integer") from exc
        if value < 1:
            raise ConfigError(f"{MAX_WORKERS_ENV} must be >= 1")
        return value

    return 1


def resolve_ordering(value: str | None) -> Ordering:
    raw = _first_non_empty(value, ORDERING_ENV)
    if raw is None:
        return Ordering.RANK
    try:
        return Ordering(raw.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(o.value for o in Ordering)
        raise ConfigError(f"Unknown ordering '{raw}'. Allowed: {allowed}") from exc


def resolve_analyzer_config(
    *,
    log_path: str | None = None,
    detail_level: str | None = None,
    output_path: str | None = None,
    ordering: str | None = None,
    report_format: ReportFormat = "text",
    labels: str = "ru",
    max_workers: int | None = None,
    encoding: str = "utf-8",
) -> AnalyzerConfig:
    """Build an AnalyzerConfig, filling empty values from the environment."""
    path = _first_non_empty(log_path, LOG_FILE_ENV)
    if path is None:
        raise ConfigError(f"Log file path is required (flag or {LOG_FILE_ENV}).")

    level_raw = _first_non_empty(detail_level, DETAIL_LEVEL_ENV)
    try:
        level = parse_severity(level_raw) if level_raw else DEFAULT_LEVEL
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    out = _first_non_empty(output_path, OUTPUT_FILE_ENV)

    return AnalyzerConfig(
        log_path=Path(path),
        min_severity=level,
        output_path=Path(out) if out else None,
        ordering=resolve_ordering(ordering),
        report_format=report_format,
        labels=labels,
        max_workers=resolve_max_workers(max_workers),
        encoding=encoding,
    )
