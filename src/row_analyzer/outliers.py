from __future__ import annotations

from .models import LengthFrequencyTable, OutlierEntry, OutlierSet, StatisticsSummary

IQR_FACTOR = 1.5


def detect_outliers(stats: StatisticsSummary, length_table: LengthFrequencyTable) -> OutlierSet:
    """
    Flag distinct row lengths above q3 + 1.5 * IQR, largest first.

    Only the upper bound filters. The lower bound is computed so reports can
    show it, but unusually short rows are never flagged.
    """
    q1 = float(stats.q1)
    q3 = float(stats.q3)
    iqr = q3 - q1
    upper = q3 + IQR_FACTOR * iqr
    lower = q1 - IQR_FACTOR * iqr

    entries = tuple(
        OutlierEntry(length=length, group=length_table[length])
        for length in sorted(length_table, reverse=True)
        if length > upper
    )
    return OutlierSet(q1=stats.q1, q3=stats.q3, iqr=iqr, upper=upper, lower=lower, entries=entries)
