from __future__ import annotations
import os
from dataclasses import dataclass, replace

from .errors import ConfigurationError

# characters per page for the page-bucket table
PAGE_SIZE: int = 3000

# fixed worker count for the parallel mode
WORKER_THREADS: int = 8

# execution strategy:
# - "parallel"  materialize all lines, fan out over WORKER_THREADS chunks
# - "streaming" single thread, one line at a time
EXECUTION_MODE: str = "parallel"

# pool type for the parallel mode: "threads" or "procs"
EXECUTOR: str = "threads"

MODES = ("parallel", "streaming")
EXECUTORS = ("threads", "procs")

# directory mode
INCLUDE_EXTS = [".csv"]
REPORT_DIR: str = "reports"

# /* ~~~ display limits used by the outlier reports ~~~ */
CHARS_PER_WORD: int = 5
TOP_COMMON_LENGTHS: int = 15
TOP_COMMON_PAGES: int = 10
EXTREME_ROWS: int = 20
MAX_OUTLIERS_SHOWN: int = 30

# Progress logging (set ROW_ANALYZER_VERBOSE=1 to enable)
VERBOSE = os.environ.get("ROW_ANALYZER_VERBOSE") == "1"
PROGRESS_EVERY_LINES = 100_000


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """
    Per-run settings handed to the engine.

    Attributes
    ----------
    page_size : int
        Characters per page used for page buckets.
    worker_count : int
        Upper bound on the number of chunks in the parallel mode.
    mode : str
        "parallel" or "streaming". Both produce the same artifacts.
    executor : str
        "threads" or "procs"; ignored by the streaming mode.
    """
    page_size: int = PAGE_SIZE
    worker_count: int = WORKER_THREADS
    mode: str = EXECUTION_MODE
    executor: str = EXECUTOR

    def validate(self) -> "AnalysisConfig":
        if int(self.page_size) < 1:
            raise ConfigurationError(f"page_size must be positive, got {self.page_size}")
        if int(self.worker_count) < 1:
            raise ConfigurationError(f"worker_count must be positive, got {self.worker_count}")
        if self.mode not in MODES:
            raise ConfigurationError(f"unknown execution mode: {self.mode!r}")
        if self.executor not in EXECUTORS:
            raise ConfigurationError(f"unknown executor: {self.executor!r}")
        return self

    def with_overrides(self, **changes) -> "AnalysisConfig":
        """Return a copy with every non-None keyword applied."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes).validate()
