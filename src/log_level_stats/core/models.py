"""Core data models for log level statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    """Known severity levels. Other leading tokens travel as plain strings."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class Ordering(str, Enum):
    """Rule used to compare a severity token against the threshold."""

    RANK = "rank"  # ERROR > WARNING > INFO, unknown tokens rank as INFO
    LEXICAL = "lexical"  # raw string comparison ("ERROR" < "INFO" < "WARNING")


SEVERITY_RANK: dict[str, int] = {
    Severity.ERROR.value: 2,
    Severity.WARNING.value: 1,
    Severity.INFO.value: 0,
}
UNKNOWN_RANK = 0


def parse_severity(value: Severity | str) -> Severity:
    """Case-insensitive lookup of a known level; raises ValueError otherwise."""
    if isinstance(value, Severity):
        return value
    name = value.strip().upper()
    try:
        return Severity(name)
    except ValueError as e:
        allowed = ", ".join(s.value for s in Severity)
        raise ValueError(f"Unknown severity '{value}'. Allowed: {allowed}") from e


def severity_rank(token: str) -> int:
    """Return the significance rank of a severity token."""
    return SEVERITY_RANK.get(token, UNKNOWN_RANK)


def passes_threshold(
    token: str,
    min_severity: Severity | str,
    ordering: Ordering = Ordering.RANK,
) -> bool:
    """Return True when `token` is at or above `min_severity`."""
    threshold = min_severity.value if isinstance(min_severity, Severity) else str(min_severity)
    if ordering == Ordering.LEXICAL:
        return token >= threshold
    return severity_rank(token) >= severity_rank(threshold)


def sort_key(token: str) -> tuple[int, str]:
    """Known levels by rank descending, then unknown tokens alphabetically."""
    if token in SEVERITY_RANK:
        return (-SEVERITY_RANK[token], "")
    return (1, token)


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One classified line. `severity` is the raw leading token."""

    severity: str
    message: str
    line_no: int | None = None


@dataclass(frozen=True, slots=True)
class AggregationState:
    """Snapshot of per-severity counts and the number of lines consumed."""

    counts: dict[str, int] = field(default_factory=dict)
    total_lines: int = 0

    @property
    def counted(self) -> int:
        """Number of lines that passed the threshold."""
        return sum(self.counts.values())

    def ordered_counts(self) -> list[tuple[str, int]]:
        return sorted(self.counts.items(), key=lambda kv: sort_key(kv[0]))
