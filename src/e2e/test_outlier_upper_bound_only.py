from row_analyzer.distribution import build_length_table
from row_analyzer.models import RowRecord, StatisticsSummary
from row_analyzer.outliers import detect_outliers


def _table(lengths):
    rows = [RowRecord(file_row=i, data_index=i - 2, char_count=n) for i, n in enumerate(lengths, start=1)]
    return build_length_table(rows)


def test_reference_thresholds():
    stats = StatisticsSummary(q1=20, q3=30)
    out = detect_outliers(stats, _table([10, 20, 30, 40, 1000, 1000]))
    assert out.iqr == 10
    assert out.upper == 45
    assert out.lower == 5
    assert out.lengths == [1000]          # 40 is below the bound
    assert out.entries[0].count == 2      # count comes from the table group
    assert out.total_rows == 2


def test_entries_are_distinct_lengths_largest_first():
    stats = StatisticsSummary(q1=20, q3=30)
    out = detect_outliers(stats, _table([50, 2000, 20, 300, 50]))
    assert out.lengths == [2000, 300, 50]
    assert [e.count for e in out.entries] == [1, 1, 2]


def test_value_equal_to_upper_bound_is_not_flagged():
    stats = StatisticsSummary(q1=20, q3=30)
    out = detect_outliers(stats, _table([45, 46]))
    assert out.lengths == [46]


def test_lower_bound_is_reported_but_never_applied():
    # Documented asymmetric policy: only unusually long rows are outliers.
    stats = StatisticsSummary(q1=100, q3=110)
    out = detect_outliers(stats, _table([1, 5, 100, 110]))
    assert out.lower == 85
    assert out.lengths == []


def test_share_guards_empty_input():
    out = detect_outliers(StatisticsSummary(), {})
    assert out.entries == ()
    assert out.share(0) == 0.0
