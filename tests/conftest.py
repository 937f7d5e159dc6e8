from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

SAMPLE_LINES = [
    "ERROR disk full",
    "INFO starting up",
    "WARNING low memory",
    "INFO ready",
]


@pytest.fixture
def sample_lines() -> list[str]:
    return list(SAMPLE_LINES)


@pytest.fixture
def write_log() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    return _write


@pytest.fixture
def sample_log(tmp_path: Path, write_log) -> Path:
    path = tmp_path / "app.log"
    write_log(path, SAMPLE_LINES)
    return path


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LOG_FILE_PATH",
        "DETAIL_LEVEL",
        "OUTPUT_FILE",
        "LOG_STATS_ORDERING",
        "LOG_STATS_MAX_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
