"""Line classifier: '<SEVERITY> <message>' with an INFO fallback."""

from __future__ import annotations

import re

from .models import LogEntry, Severity

_FIRST_WS_RE = re.compile(r"\s")


def classify(line: str, line_no: int | None = None) -> LogEntry:
    """Split a line on its first whitespace into severity token and message.

    The token is taken verbatim (case-sensitive, not validated). A line with
    no whitespace is an INFO entry whose message is the whole line.
    """
    line = line.rstrip("\r\n")
    parts = _FIRST_WS_RE.split(line, maxsplit=1)
    if len(parts) == 2:
        return LogEntry(severity=parts[0], message=parts[1], line_no=line_no)
    return LogEntry(severity=Severity.INFO.value, message=line, line_no=line_no)
