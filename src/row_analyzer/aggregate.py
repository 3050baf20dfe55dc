from __future__ import annotations
import logging
from operator import attrgetter
from typing import Iterable, List, Tuple

from .errors import AnalysisError
from .models import HEADER_DATA_INDEX, ChunkResult, RowRecord

log = logging.getLogger(__name__)


def assign_data_indices(records: Iterable[RowRecord]) -> Tuple[RowRecord, ...]:
    """
    Give every record its data_index. Input must already be sorted by file_row.

    The header (file_row 1) gets -1; the remaining rows count up from 0 in
    order, so a missing header line does not shift data rows to -1.
    """
    out: List[RowRecord] = []
    next_index = 0
    for r in records:
        if r.file_row == 1:
            idx = HEADER_DATA_INDEX
        else:
            idx = next_index
            next_index += 1
        out.append(RowRecord(file_row=r.file_row, data_index=idx, char_count=r.char_count))
    return tuple(out)


def aggregate(results: Iterable[ChunkResult]) -> Tuple[Tuple[RowRecord, ...], int]:
    """
    Join worker outputs into the ordered corpus.

    Concatenates every chunk (in whatever order they finished), sorts by
    file_row, checks that the summed partial totals equal a direct recount,
    and assigns data indices. Returns (corpus, total_chars).
    """
    merged: List[RowRecord] = []
    total_chars = 0
    for res in results:
        merged.extend(res.records)
        total_chars += res.partial_chars

    merged.sort(key=attrgetter("file_row"))

    for a, b in zip(merged, merged[1:]):
        if a.file_row == b.file_row:
            raise AnalysisError(f"file row {a.file_row} produced by more than one worker")

    recount = sum(r.char_count for r in merged)
    if recount != total_chars:
        raise AnalysisError(
            f"character total mismatch: workers reported {total_chars}, rows sum to {recount}"
        )

    log.info("Sorted %d entries and assigned data indices", len(merged))
    return assign_data_indices(merged), total_chars
