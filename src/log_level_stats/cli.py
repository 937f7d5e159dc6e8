from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from log_level_stats.core.config import AnalyzerConfig, resolve_analyzer_config
from log_level_stats.core.errors import ConfigError, LogStatsError
from log_level_stats.core.log_service import analyze_file
from log_level_stats.core.report import LABEL_PRESETS, report
from log_level_stats.logging_setup import configure_logging

LOGGER = logging.getLogger(__name__)

EXIT_RUN_ERROR = 1
EXIT_USAGE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Count log lines per severity (ERROR, WARNING, INFO) above a threshold."
    )
    p.add_argument("--log", "-log", dest="log_path", default="", help="Path to the log file (env: LOG_FILE_PATH)")
    p.add_argument(
        "--level",
        "-level",
        dest="detail_level",
        default="",
        help="Minimum level to count: ERROR, WARNING, INFO (env: DETAIL_LEVEL). Default: INFO",
    )
    p.add_argument(
        "--output",
        "-output",
        dest="output_path",
        default="",
        help="Report file path; stdout when empty (env: OUTPUT_FILE)",
    )
    p.add_argument(
        "--ordering",
        choices=["rank", "lexical"],
        default=None,
        help="Threshold comparison: rank (ERROR > WARNING > INFO) or lexical. Default: rank",
    )
    p.add_argument("--format", dest="report_format", choices=["text", "json"], default="text")
    p.add_argument("--labels", choices=sorted(LABEL_PRESETS), default="ru", help="Report label language")
    p.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Classifier threads (env: LOG_STATS_MAX_WORKERS). Default: 1",
    )
    p.add_argument("--encoding", default="utf-8")
    return p


def _resolve(args: argparse.Namespace) -> AnalyzerConfig:
    return resolve_analyzer_config(
        log_path=args.log_path,
        detail_level=args.detail_level,
        output_path=args.output_path,
        ordering=args.ordering,
        report_format=args.report_format,
        labels=args.labels,
        max_workers=args.max_workers,
        encoding=args.encoding,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entrypoint: analyze one log file and print or write the report."""
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        cfg = _resolve(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(EXIT_USAGE_ERROR)

    try:
        state = asyncio.run(
            analyze_file(
                cfg.log_path,
                min_severity=cfg.min_severity,
                ordering=cfg.ordering,
                encoding=cfg.encoding,
                max_workers=cfg.max_workers,
            )
        )
    except LogStatsError as e:
        print(f"Log analysis failed: {e}", file=sys.stderr)
        raise SystemExit(EXIT_RUN_ERROR)

    try:
        report(
            state,
            cfg.output_path,
            labels=LABEL_PRESETS[cfg.labels],
            fmt=cfg.report_format,
        )
    except LogStatsError as e:
        print(f"Report output failed: {e}", file=sys.stderr)
        raise SystemExit(EXIT_RUN_ERROR)

    LOGGER.info("Processed %s lines from %s", state.total_lines, cfg.log_path)


if __name__ == "__main__":
    main()
