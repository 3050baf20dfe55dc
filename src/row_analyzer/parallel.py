from __future__ import annotations
import logging
from concurrent.futures import (
    ALL_COMPLETED, Executor, ProcessPoolExecutor, ThreadPoolExecutor, wait,
)
from typing import List, Sequence

from .errors import WorkerError
from .loader import Line
from .models import ChunkResult, RowRecord

__all__ = ["partition", "count_chunk", "make_executor", "run_chunks"]

log = logging.getLogger(__name__)


def partition(rows: Sequence[Line], worker_count: int) -> List[List[Line]]:
    """
    Split `rows` into contiguous chunks of ceil(n / worker_count) rows.

    Chunk count is at most `worker_count` and never zero: an empty input
    gives one empty chunk.
    """
    if worker_count < 1:
        raise ValueError(f"worker_count must be >= 1, got {worker_count}")
    size = max(1, -(-len(rows) // worker_count))
    chunks = [list(rows[i:i + size]) for i in range(0, len(rows), size)]
    return chunks or [[]]


def count_chunk(index: int, chunk: List[Line]) -> ChunkResult:
    """Worker: count characters for one chunk. Shares nothing with other workers."""
    records: List[RowRecord] = []
    total = 0
    prev = 0
    for file_row, text in chunk:
        if file_row <= prev:
            raise WorkerError(
                f"chunk {index}: file row {file_row} does not follow {prev}",
                chunk_index=index,
            )
        n = len(text)
        records.append(RowRecord(file_row=file_row, data_index=None, char_count=n))
        total += n
        prev = file_row
    return ChunkResult(index=index, records=tuple(records), partial_chars=total)


def make_executor(mode: str, workers: int) -> Executor:
    exec_cls = ThreadPoolExecutor if mode == "threads" else ProcessPoolExecutor
    return exec_cls(max_workers=workers)


def run_chunks(chunks: Sequence[List[Line]], executor: Executor) -> List[ChunkResult]:
    """
    Dispatch one worker per chunk and block until all of them are done.

    Results come back in completion order, which is unspecified. If any
    worker failed, the lowest failing chunk is raised as WorkerError after
    the barrier; no partial results escape.
    """
    futures = {}
    for i, chunk in enumerate(chunks):
        log.debug("Dispatching worker %d with %d lines", i, len(chunk))
        futures[executor.submit(count_chunk, i, chunk)] = i

    done, _ = wait(futures, return_when=ALL_COMPLETED)

    results: List[ChunkResult] = []
    failures = []
    for fut in done:
        exc = fut.exception()
        if exc is None:
            results.append(fut.result())
        else:
            failures.append((futures[fut], exc))

    if failures:
        index, exc = min(failures, key=lambda f: f[0])
        if isinstance(exc, WorkerError):
            raise exc
        raise WorkerError(f"worker {index} failed: {exc!r}", chunk_index=index) from exc

    log.info("All %d workers completed", len(results))
    return results
