"""Summary report rendering (text and JSON)."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TextIO

from pydantic import BaseModel, Field

from .errors import DestinationCreateError, DestinationWriteError
from .models import AggregationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReportLabels:
    header: str
    total: str


RU_LABELS = ReportLabels(header="Статистика по сообщениям:", total="Всего сообщений")
EN_LABELS = ReportLabels(header="Message statistics:", total="Total messages")

LABEL_PRESETS: dict[str, ReportLabels] = {"ru": RU_LABELS, "en": EN_LABELS}


class StatsReport(BaseModel):
    """JSON shape of a report."""

    counts: dict[str, int] = Field(description="Lines counted per severity token.")
    total: int = Field(ge=0, description="All lines consumed, filtered or not.")

    @classmethod
    def from_state(cls, state: AggregationState) -> StatsReport:
        return cls(counts=dict(state.ordered_counts()), total=state.total_lines)


def render_text(state: AggregationState, labels: ReportLabels = RU_LABELS) -> str:
    """Header, one '<SEVERITY>: <count>' line per key, then the total line."""
    lines = [labels.header]
    lines.extend(f"{severity}: {count}" for severity, count in state.ordered_counts())
    lines.append(f"{labels.total}: {state.total_lines}")
    return "\n".join(lines) + "\n"


def render_json(state: AggregationState) -> str:
    return StatsReport.from_state(state).model_dump_json(indent=2) + "\n"


@contextmanager
def _open_destination(destination: Path | None, stream: TextIO | None) -> Iterator[TextIO]:
    if destination is None:
        yield stream if stream is not None else sys.stdout
        return

    try:
        f = destination.open("w", encoding="utf-8")
    except OSError as e:
        raise DestinationCreateError(
            f"Cannot create report file {destination}: {e}", destination
        ) from e
    with f:
        yield f


def report(
    state: AggregationState,
    destination: str | Path | None = None,
    *,
    labels: ReportLabels = RU_LABELS,
    fmt: Literal["text", "json"] = "text",
    stream: TextIO | None = None,
) -> None:
    """Write the summary to a freshly created file, or to `stream` (stdout)."""
    text = render_json(state) if fmt == "json" else render_text(state, labels)
    dest = Path(destination) if destination else None
    with _open_destination(dest, stream) as out:
        try:
            out.write(text)
            out.flush()
        except OSError as e:
            raise DestinationWriteError(
                f"Cannot write report to {dest or 'stream'}: {e}", dest
            ) from e
    if dest is not None:
        logger.debug("Report written to %s", dest)
