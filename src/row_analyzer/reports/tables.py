from __future__ import annotations
import csv
from typing import IO

from ..models import AnalysisResult

ROW_HEADER = ["file_row", "data_index", "character_length"]


def _writer(f: IO[str]):
    return csv.writer(f, lineterminator="\n")


def write_char_counts(result: AnalysisResult, f: IO[str]) -> None:
    """One line per row, in file order."""
    w = _writer(f)
    w.writerow(ROW_HEADER)
    w.writerows((r.file_row, r.data_index, r.char_count) for r in result.corpus)


def write_length_sorted(result: AnalysisResult, f: IO[str]) -> None:
    """Same rows, longest first; equal lengths keep file order."""
    w = _writer(f)
    w.writerow(ROW_HEADER)
    ordered = sorted(result.corpus, key=lambda r: r.char_count, reverse=True)
    w.writerows((r.file_row, r.data_index, r.char_count) for r in ordered)


def write_value_counts(result: AnalysisResult, f: IO[str]) -> None:
    w = _writer(f)
    w.writerow(["character_length_of_rows", "value_count"])
    for length in sorted(result.length_table, reverse=True):
        w.writerow((length, result.length_table[length].count))


def write_page_counts(result: AnalysisResult, f: IO[str]) -> None:
    w = _writer(f)
    w.writerow(["page_length", "pages_valuecount", "percentage"])
    for bucket, group in result.page_table.items():
        w.writerow((bucket, group.count, f"{result.page_percentage(bucket):.2f}"))
