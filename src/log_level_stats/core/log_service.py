"""Pass driver: read a log, classify each line and aggregate the counts.

This module is the main integration point between log files and the aggregator.
"""

from __future__ import annotations

import asyncio
import gzip
import logging
import zlib
from collections.abc import AsyncIterator, Iterable
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .aggregator import LogAggregator
from .classifier import classify
from .config import resolve_max_workers
from .errors import SourceOpenError, SourceReadError
from .models import AggregationState, Ordering, Severity

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1024


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a log file for async text reading (plain or gzip).

    Only '\\n' ends a line; a bare '\\r' stays part of the line.
    """
    try:
        if path.suffix.lower() == ".gz":
            af = wrap(
                gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors, newline="\n")
            )
        else:
            af = await aiofiles.open(path, encoding=encoding, errors=decode_errors, newline="\n")
    except OSError as e:
        raise SourceOpenError(f"Cannot open log file {path}: {e}", path) from e

    try:
        yield af
    finally:
        await af.close()


async def iter_lines(
    log_path: str | Path,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> AsyncIterator[tuple[int, str]]:
    """Yield (line_no, line) pairs; the last line is yielded even without a newline."""
    path = Path(log_path)
    async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as f:
        line_no = 0
        while True:
            try:
                line = await f.readline()
            except (OSError, EOFError, UnicodeDecodeError, zlib.error) as e:
                # truncated gzip raises EOFError, corrupt deflate data zlib.error
                raise SourceReadError(
                    f"Failed reading {path} after line {line_no}: {e}", path
                ) from e
            if not line:
                return
            line_no += 1
            yield line_no, line


def run(
    lines: Iterable[str],
    *,
    min_severity: Severity | str = Severity.INFO,
    ordering: Ordering = Ordering.RANK,
) -> AggregationState:
    """Aggregate an in-memory or file-like line source with a fresh aggregator."""
    aggregator = LogAggregator(min_severity, ordering)
    it = iter(lines)
    line_no = 0
    while True:
        try:
            line = next(it)
        except StopIteration:
            break
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Failed reading line source after line {line_no}: {e}") from e
        line_no += 1
        aggregator.feed(line, line_no)
    return aggregator.snapshot()


async def _batched(
    source: AsyncIterator[tuple[int, str]], size: int
) -> AsyncIterator[list[tuple[int, str]]]:
    batch: list[tuple[int, str]] = []
    async for item in source:
        batch.append(item)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def _ingest_batch(aggregator: LogAggregator, batch: list[tuple[int, str]]) -> None:
    aggregator.ingest_many(classify(line, line_no) for line_no, line in batch)


async def analyze_file(
    log_path: str | Path,
    *,
    min_severity: Severity | str = Severity.INFO,
    ordering: Ordering = Ordering.RANK,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
    max_workers: int | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> AggregationState:
    """Run one full analysis pass over a log file.

    With more than one worker, batches of lines are classified in a thread
    pool; all counter updates still go through the aggregator lock. Any open
    or read failure aborts the pass and nothing is returned.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")

    path = Path(log_path)
    aggregator = LogAggregator(min_severity, ordering)
    workers = resolve_max_workers(max_workers)
    lines = iter_lines(path, encoding=encoding, decode_errors=decode_errors)

    logger.debug(
        "Analyzing %s (min_severity=%s, ordering=%s, workers=%s)",
        path,
        aggregator.min_severity.value,
        aggregator.ordering.value,
        workers,
    )

    if workers == 1:
        async for line_no, line in lines:
            aggregator.ingest(classify(line, line_no))
    else:
        loop = asyncio.get_running_loop()
        executor = ThreadPoolExecutor(max_workers=workers)
        pending: set[asyncio.Future[None]] = set()
        try:
            async for batch in _batched(lines, batch_size):
                pending.add(loop.run_in_executor(executor, _ingest_batch, aggregator, batch))
                if len(pending) >= workers * 2:
                    done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                    for fut in done:
                        fut.result()
            if pending:
                await asyncio.gather(*pending)
        finally:
            executor.shutdown(wait=True)

    state = aggregator.snapshot()
    logger.debug("Analyzed %s: %s lines, %s counted", path, state.total_lines, state.counted)
    return state
