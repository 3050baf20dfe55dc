# src/row_analyzer/models.py
"""
Data models for the row-length analyzer.

This module defines the small, focused value objects that flow through one
analysis run:

- RowRecord: one physical line with stable identity and its character count.
- ChunkResult: the owned output of a single worker.
- LengthGroup: count plus member rows for one key of a frequency table.
- StatisticsSummary: descriptive statistics over all row lengths.
- OutlierEntry / OutlierSet: distinct lengths above the 1.5 x IQR bound.
- AnalysisResult: everything a report sink needs, bundled.

These classes hold no pipeline logic beyond a few derived read-only values;
ingestion, aggregation and the math live in their own modules.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple

from .config import EXECUTION_MODE, PAGE_SIZE

# data_index of the header row (file_row == 1)
HEADER_DATA_INDEX = -1


@dataclass(frozen=True, slots=True)
class RowRecord:
    """
    One analyzed row.

    Attributes
    ----------
    file_row : int
        1-based physical line number in the source. Unique, strictly
        increasing in ingestion order.
    data_index : int
        -1 for the header line (file_row == 1); otherwise the 0-based offset
        among non-header rows in the sorted corpus. Workers emit records with
        data_index unset (None); the aggregator assigns it after sorting.
    char_count : int
        Number of Unicode code points in the line, line terminator excluded.
    """
    file_row: int
    data_index: Optional[int]
    char_count: int


@dataclass(frozen=True, slots=True)
class ChunkResult:
    """Output of one worker: its records in file order and their character sum."""
    index: int
    records: Tuple[RowRecord, ...]
    partial_chars: int


@dataclass(slots=True)
class LengthGroup:
    """
    One key of a frequency table.

    example_file_rows / example_data_indices hold every member row in
    first-seen (file) order; renderers take the first few as examples.
    """
    count: int = 0
    example_file_rows: List[int] = field(default_factory=list)
    example_data_indices: List[int] = field(default_factory=list)

    def add(self, record: RowRecord) -> None:
        self.count += 1
        self.example_file_rows.append(record.file_row)
        self.example_data_indices.append(record.data_index)


# char_count -> group; page_bucket -> group
LengthFrequencyTable = Dict[int, LengthGroup]
PageFrequencyTable = Dict[int, LengthGroup]


@dataclass(frozen=True, slots=True)
class StatisticsSummary:
    min: int = 0
    max: int = 0
    mean: float = 0.0
    median: int = 0
    q1: int = 0
    q3: int = 0
    std_dev: float = 0.0

    @property
    def range(self) -> int:
        return self.max - self.min

    @property
    def iqr(self) -> int:
        return self.q3 - self.q1

    def deviations(self, length: int) -> float:
        """Distance of `length` from the mean, in standard deviations."""
        if self.std_dev == 0:
            return 0.0
        return abs(length - self.mean) / self.std_dev


@dataclass(frozen=True, slots=True)
class OutlierEntry:
    length: int
    group: LengthGroup

    @property
    def count(self) -> int:
        return self.group.count


@dataclass(frozen=True, slots=True)
class OutlierSet:
    """
    Distinct row lengths strictly above `upper`, largest first.

    `lower` is reported alongside `upper` but never used to flag rows.
    """
    q1: int
    q3: int
    iqr: float
    upper: float
    lower: float
    entries: Tuple[OutlierEntry, ...] = ()

    @property
    def lengths(self) -> List[int]:
        return [e.length for e in self.entries]

    @property
    def total_rows(self) -> int:
        return sum(e.count for e in self.entries)

    def share(self, total_rows: int) -> float:
        """Percentage of all rows that fall above the threshold."""
        if total_rows == 0:
            return 0.0
        return self.total_rows / total_rows * 100.0


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """
    Every artifact of one analysis run.

    `corpus` is sorted by file_row; `page_table` is ordered by ascending
    bucket; `failed_rows` lists physical lines that could not be decoded
    (they are absent from the corpus and counted in `error_count`).
    """
    source: str
    corpus: Tuple[RowRecord, ...]
    length_table: LengthFrequencyTable
    page_table: PageFrequencyTable
    statistics: StatisticsSummary
    outliers: OutlierSet
    total_rows: int
    total_chars: int
    error_count: int
    failed_rows: Tuple[int, ...] = ()
    page_size: int = PAGE_SIZE
    mode: str = EXECUTION_MODE

    @property
    def lengths(self) -> List[int]:
        return [r.char_count for r in self.corpus]

    def page_percentage(self, bucket: int) -> float:
        if self.total_rows == 0:
            return 0.0
        return self.page_table[bucket].count / self.total_rows * 100.0

    def to_dict(self, include_rows: bool = False) -> dict:
        """JSON-ready view; the per-row corpus is omitted unless asked for."""
        stats = asdict(self.statistics)
        stats.update(range=self.statistics.range, iqr=self.statistics.iqr)
        out = {
            "source": self.source,
            "mode": self.mode,
            "page_size": self.page_size,
            "total_rows": self.total_rows,
            "total_chars": self.total_chars,
            "error_count": self.error_count,
            "failed_rows": list(self.failed_rows),
            "statistics": stats,
            "outliers": {
                "iqr": self.outliers.iqr,
                "upper": self.outliers.upper,
                "lower": self.outliers.lower,
                "rows": self.outliers.total_rows,
                "entries": [
                    {"length": e.length, "count": e.count,
                     "file_rows": e.group.example_file_rows[:3]}
                    for e in self.outliers.entries
                ],
            },
            "length_counts": {str(k): g.count for k, g in self.length_table.items()},
            "page_counts": [
                {"page_length": b, "count": g.count,
                 "percentage": round(self.page_percentage(b), 2)}
                for b, g in self.page_table.items()
            ],
        }
        if include_rows:
            out["rows"] = [asdict(r) for r in self.corpus]
        return out
