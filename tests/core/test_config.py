from __future__ import annotations

from pathlib import Path

import pytest

from log_level_stats.core.config import resolve_analyzer_config, resolve_max_workers
from log_level_stats.core.errors import ConfigError
from log_level_stats.core.models import Ordering, Severity


def test_defaults() -> None:
    cfg = resolve_analyzer_config(log_path="app.log")
    assert cfg.log_path == Path("app.log")
    assert cfg.min_severity == Severity.INFO
    assert cfg.output_path is None
    assert cfg.ordering == Ordering.RANK
    assert cfg.max_workers == 1


def test_level_is_case_insensitive() -> None:
    cfg = resolve_analyzer_config(log_path="app.log", detail_level="warning")
    assert cfg.min_severity == Severity.WARNING


def test_empty_flags_fall_back_to_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FILE_PATH", "/var/log/app.log")
    monkeypatch.setenv("DETAIL_LEVEL", "error")
    monkeypatch.setenv("OUTPUT_FILE", "/tmp/report.txt")
    monkeypatch.setenv("LOG_STATS_ORDERING", "LEXICAL")

    cfg = resolve_analyzer_config(log_path="", detail_level="", output_path="")

    assert cfg.log_path == Path("/var/log/app.log")
    assert cfg.min_severity == Severity.ERROR
    assert cfg.output_path == Path("/tmp/report.txt")
    assert cfg.ordering == Ordering.LEXICAL


def test_flags_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FILE_PATH", "/var/log/other.log")
    monkeypatch.setenv("DETAIL_LEVEL", "ERROR")

    cfg = resolve_analyzer_config(log_path="app.log", detail_level="WARNING")

    assert cfg.log_path == Path("app.log")
    assert cfg.min_severity == Severity.WARNING


def test_missing_log_path_raises() -> None:
    with pytest.raises(ConfigError, match="LOG_FILE_PATH"):
        resolve_analyzer_config(log_path="")


def test_unknown_level_raises() -> None:
    with pytest.raises(ConfigError, match="Unknown severity"):
        resolve_analyzer_config(log_path="app.log", detail_level="verbose")


def test_unknown_ordering_raises() -> None:
    with pytest.raises(ConfigError, match="ordering"):
        resolve_analyzer_config(log_path="app.log", ordering="alphabetical")


def test_max_workers_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_STATS_MAX_WORKERS", "3")
    assert resolve_max_workers(None) == 3
    assert resolve_max_workers(2) == 2

    monkeypatch.setenv("LOG_STATS_MAX_WORKERS", "many")
    with pytest.raises(ConfigError, match="integer"):
        resolve_max_workers(None)

    with pytest.raises(ConfigError):
        resolve_max_workers(0)
