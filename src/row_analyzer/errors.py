"""Exception hierarchy for the row-length analyzer.

Every fatal failure of one analysis run derives from :class:`AnalysisError`,
so callers that process many files can catch one type and move on. Per-line
decode failures are not exceptions; they are counted on the result.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "AnalysisError",
    "ConfigurationError",
    "SourceError",
    "WorkerError",
    "ReportError",
]


class AnalysisError(RuntimeError):
    """Base exception for a failed analysis run."""


class ConfigurationError(AnalysisError):
    """Raised when an AnalysisConfig holds unusable values."""


class SourceError(AnalysisError):
    """Raised when the input source cannot be opened or read."""


class WorkerError(AnalysisError):
    """Raised when any chunk worker fails; the whole run is discarded."""

    def __init__(self, message: str, *, chunk_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index


class ReportError(AnalysisError):
    """Raised when a report file cannot be written."""
