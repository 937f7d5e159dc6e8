from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from log_level_stats.core.errors import DestinationCreateError, DestinationWriteError
from log_level_stats.core.models import AggregationState
from log_level_stats.core.report import EN_LABELS, StatsReport, render_text, report

STATE = AggregationState(counts={"INFO": 2, "WARNING": 1, "ERROR": 1}, total_lines=4)


def test_render_text_structure() -> None:
    lines = render_text(STATE).splitlines()

    assert lines[0] == "Статистика по сообщениям:"
    assert lines[-1] == "Всего сообщений: 4"
    assert sorted(lines[1:-1]) == ["ERROR: 1", "INFO: 2", "WARNING: 1"]


def test_render_text_orders_known_levels_then_unknown() -> None:
    state = AggregationState(counts={"zeta": 1, "INFO": 3, "ERROR": 2, "alpha": 1}, total_lines=7)
    lines = render_text(state, EN_LABELS).splitlines()

    assert lines == [
        "Message statistics:",
        "ERROR: 2",
        "INFO: 3",
        "alpha: 1",
        "zeta: 1",
        "Total messages: 7",
    ]


def test_render_text_empty_counts() -> None:
    state = AggregationState(counts={}, total_lines=3)
    assert render_text(state).splitlines() == ["Статистика по сообщениям:", "Всего сообщений: 3"]


def test_report_to_stream() -> None:
    buf = io.StringIO()
    report(STATE, stream=buf)
    assert buf.getvalue() == render_text(STATE)


def test_report_creates_file(tmp_path: Path) -> None:
    out = tmp_path / "report.txt"
    out.write_text("stale\n", encoding="utf-8")

    report(STATE, out)

    text = out.read_text(encoding="utf-8")
    assert "stale" not in text
    assert text.splitlines()[-1] == "Всего сообщений: 4"


def test_report_json(tmp_path: Path) -> None:
    out = tmp_path / "report.json"
    report(STATE, out, fmt="json")

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == {"counts": {"ERROR": 1, "WARNING": 1, "INFO": 2}, "total": 4}
    assert StatsReport.model_validate(data).total == 4


def test_report_destination_create_failure(tmp_path: Path) -> None:
    out = tmp_path / "no-such-dir" / "report.txt"
    with pytest.raises(DestinationCreateError) as exc_info:
        report(STATE, out)
    assert exc_info.value.path == out


class _FullDiskStream(io.StringIO):
    def write(self, s: str) -> int:
        raise OSError(28, "No space left on device")


def test_report_write_failure_is_wrapped() -> None:
    with pytest.raises(DestinationWriteError, match="No space left"):
        report(STATE, stream=_FullDiskStream())
