# row_analyzer/engine.py
from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Executor
from typing import List, Optional, Tuple

from . import config as CFG
from .aggregate import aggregate, assign_data_indices
from .config import AnalysisConfig
from .distribution import build_length_table, build_page_table
from .errors import AnalysisError
from .loader import IngestLog, Source, iter_char_counts, read_rows, source_name
from .models import AnalysisResult, RowRecord
from .outliers import detect_outliers
from .parallel import make_executor, partition, run_chunks
from .stats import calculate_statistics

log = logging.getLogger(__name__)


class Engine:
    """
    Runs row-length analyses under one fixed configuration.

    Public API (used by CLI/Flask):
      * analyze(source): ingest -> count -> order -> statistics/tables/outliers
      * shutdown():      release the worker pool

    The worker pool of the parallel mode is created on first use and reused
    across analyses, so a directory run does not pay pool start-up per file.
    Every analysis still owns its corpus and tables outright.
    """

    # ------------- lifecycle -------------

    def __init__(self, config: Optional[AnalysisConfig] = None, *, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["ROW_ANALYZER_VERBOSE"] = "1"
            CFG.VERBOSE = True
        self.config = (config or AnalysisConfig()).validate()
        self._executor: Optional[Executor] = None
        self._pool_lock = threading.Lock()

    def __enter__(self) -> "Engine":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

    # ------------- analysis -------------

    # /* ~~~ One input in, one AnalysisResult out ~~~ */
    def analyze(self, source: Source) -> AnalysisResult:
        try:
            return self._analyze(source)
        except AnalysisError:
            raise
        except OSError as exc:
            raise AnalysisError(f"analysis of {source_name(source)} failed: {exc}") from exc

    def _analyze(self, source: Source) -> AnalysisResult:
        cfg = self.config
        name = source_name(source)
        log.info("Analyzing %s (mode=%s, workers=%d)", name, cfg.mode, cfg.worker_count)

        if cfg.mode == "streaming":
            corpus, total_chars, ingest_log = self._run_streaming(source)
        else:
            corpus, total_chars, ingest_log = self._run_parallel(source)

        stats = calculate_statistics([r.char_count for r in corpus])
        length_table = build_length_table(corpus)
        page_table = build_page_table(length_table, cfg.page_size)
        outliers = detect_outliers(stats, length_table)

        log.info("Done: rows=%d chars=%d errors=%d outlier_lengths=%d",
                 len(corpus), total_chars, ingest_log.error_count, len(outliers.entries))
        return AnalysisResult(
            source=name,
            corpus=corpus,
            length_table=length_table,
            page_table=page_table,
            statistics=stats,
            outliers=outliers,
            total_rows=len(corpus),
            total_chars=total_chars,
            error_count=ingest_log.error_count,
            failed_rows=tuple(ingest_log.failed_rows),
            page_size=cfg.page_size,
            mode=cfg.mode,
        )

    # ------------- teardown -------------

    def shutdown(self) -> None:
        with self._pool_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _pool(self) -> Executor:
        # concurrent requests of the web app share one engine
        with self._pool_lock:
            if self._executor is None:
                self._executor = make_executor(self.config.executor, self.config.worker_count)
            return self._executor

    def _run_parallel(self, source: Source) -> Tuple[Tuple[RowRecord, ...], int, IngestLog]:
        rows, ingest_log = read_rows(source)
        chunks = partition(rows, self.config.worker_count)
        log.info("Processing %d lines in %d chunks", len(rows), len(chunks))
        results = run_chunks(chunks, self._pool())
        corpus, total_chars = aggregate(results)
        return corpus, total_chars, ingest_log

    def _run_streaming(self, source: Source) -> Tuple[Tuple[RowRecord, ...], int, IngestLog]:
        ingest_log = IngestLog()
        records: List[RowRecord] = []
        total_chars = 0
        for file_row, n in iter_char_counts(source, ingest_log):
            records.append(RowRecord(file_row=file_row, data_index=None, char_count=n))
            total_chars += n
        return assign_data_indices(records), total_chars, ingest_log


def analyze(source: Source, config: Optional[AnalysisConfig] = None) -> AnalysisResult:
    """
    Analyze one line-oriented source.

    Raises AnalysisError (or a subclass) on any fatal failure; per-line decode
    failures are reported on the result instead.
    """
    with Engine(config) as eng:
        return eng.analyze(source)
