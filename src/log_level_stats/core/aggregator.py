"""Thread-safe per-severity counter."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from .classifier import classify
from .models import AggregationState, LogEntry, Ordering, Severity, parse_severity, passes_threshold


class LogAggregator:
    """Accumulate severity counts above a threshold for a single run.

    Counts and the line total share one lock, so concurrent `ingest` calls
    never observe one updated without the other.
    """

    def __init__(
        self,
        min_severity: Severity | str = Severity.INFO,
        ordering: Ordering = Ordering.RANK,
    ) -> None:
        self.min_severity = parse_severity(min_severity)
        self.ordering = Ordering(ordering)
        self._counts: dict[str, int] = {}
        self._total = 0
        self._lock = threading.Lock()

    def accepts(self, entry: LogEntry) -> bool:
        return passes_threshold(entry.severity, self.min_severity, self.ordering)

    def ingest(self, entry: LogEntry) -> None:
        """Count one consumed line; bump its severity if it passes the threshold."""
        counted = self.accepts(entry)
        with self._lock:
            self._total += 1
            if counted:
                self._counts[entry.severity] = self._counts.get(entry.severity, 0) + 1

    def ingest_many(self, entries: Iterable[LogEntry]) -> None:
        """Ingest a batch under a single lock acquisition."""
        batch = [(e.severity, self.accepts(e)) for e in entries]
        with self._lock:
            for severity, counted in batch:
                self._total += 1
                if counted:
                    self._counts[severity] = self._counts.get(severity, 0) + 1

    def feed(self, line: str, line_no: int | None = None) -> LogEntry:
        """Classify and ingest a raw line."""
        entry = classify(line, line_no)
        self.ingest(entry)
        return entry

    def snapshot(self) -> AggregationState:
        with self._lock:
            return AggregationState(counts=dict(self._counts), total_lines=self._total)

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
            self._total = 0
