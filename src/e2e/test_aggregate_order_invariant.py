import pytest

from row_analyzer.aggregate import aggregate, assign_data_indices
from row_analyzer.errors import AnalysisError
from row_analyzer.models import ChunkResult, RowRecord
from row_analyzer.parallel import count_chunk, partition


def _chunk_results(lines, w):
    return [count_chunk(i, c) for i, c in enumerate(partition(lines, w))]


LINES = [(i, "y" * (i * 7 % 11)) for i in range(1, 24)]


def test_out_of_order_completion_is_restored():
    results = _chunk_results(LINES, 4)
    corpus, total = aggregate(reversed(results))
    assert [r.file_row for r in corpus] == list(range(1, 24))
    assert total == sum(len(t) for _, t in LINES)


@pytest.mark.parametrize("w", [1, 2, 3, 5, 8, 23, 40])
def test_corpus_is_identical_for_every_worker_count(w):
    expected, expected_total = aggregate(_chunk_results(LINES, 1))
    corpus, total = aggregate(_chunk_results(LINES, w)[::-1])
    assert corpus == expected
    assert total == expected_total


def test_sum_invariant_over_partials():
    results = _chunk_results(LINES, 5)
    corpus, total = aggregate(results)
    assert sum(r.partial_chars for r in results) == total == sum(r.char_count for r in corpus)


def test_header_rule():
    corpus, _ = aggregate(_chunk_results(LINES, 3))
    assert corpus[0].file_row == 1 and corpus[0].data_index == -1
    assert [r.data_index for r in corpus[1:]] == list(range(0, 22))


def test_missing_header_line_does_not_produce_minus_one():
    rows = [RowRecord(file_row=n, data_index=None, char_count=1) for n in (2, 3, 5)]
    assert [r.data_index for r in assign_data_indices(rows)] == [0, 1, 2]


def test_partial_sum_mismatch_is_fatal():
    bad = ChunkResult(index=0, records=(RowRecord(1, None, 3),), partial_chars=4)
    with pytest.raises(AnalysisError):
        aggregate([bad])


def test_duplicate_rows_across_chunks_are_fatal():
    a = ChunkResult(index=0, records=(RowRecord(1, None, 3),), partial_chars=3)
    b = ChunkResult(index=1, records=(RowRecord(1, None, 3),), partial_chars=3)
    with pytest.raises(AnalysisError):
        aggregate([a, b])


def test_empty_join():
    assert aggregate([ChunkResult(index=0, records=(), partial_chars=0)]) == ((), 0)
