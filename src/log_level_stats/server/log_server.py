"""MCP server entrypoint (stdio transport).

Exposes the log level statistics pass as a tool.

Run locally (stdio):
    python -m log_level_stats.server.log_server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_level_stats.logging_setup import configure_logging
from log_level_stats.tools.stats import log_level_stats_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("log-level-stats", json_response=True)


@mcp.tool()
async def log_level_stats(
    log_path: str,
    level: str | None = None,
    ordering: str | None = None,
    max_workers: int | None = None,
) -> dict[str, Any]:
    """Count log lines per severity at or above a threshold.

    Parameters
    ----------
    log_path:
        Path to a local log file where lines look like '<SEVERITY> <message>'.
        Supports plain text and .gz.
    level:
        Minimum severity to count (ERROR, WARNING or INFO). Case-insensitive.
        Default: INFO (count everything).
    ordering:
        "rank" (ERROR > WARNING > INFO) or "lexical" (raw string comparison).
    max_workers:
        Classifier threads. Default: LOG_STATS_MAX_WORKERS or 1.

    Returns
    -------
    dict:
        {"counts": dict[str, int], "total": int, "counted": int,
         "min_severity": str, "ordering": str}
    """
    return await log_level_stats_impl(
        log_path=log_path,
        level=level,
        ordering=ordering,
        max_workers=max_workers,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    configure_logging(default_level="INFO")
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
