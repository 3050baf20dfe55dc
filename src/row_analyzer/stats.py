"""
Descriptive statistics over row lengths.

Quartiles follow a fixed index rule rather than linear interpolation, and
ties are averaged with integer floor division. Reports built by earlier
releases depend on these exact values, so do not swap in `statistics` or
numpy percentiles here.
"""

from __future__ import annotations
import math
from typing import Sequence

from .models import StatisticsSummary

__all__ = ["calculate_statistics", "quartile"]


def _mid(a: int, b: int) -> int:
    return (a + b) // 2


def quartile(sorted_lengths: Sequence[int], numerator: int) -> int:
    """
    Value at the numerator/4 position of a sorted, non-empty sequence.

    idx = numerator*n // 4. When numerator*n divides evenly by 4 the two
    neighbours sorted[idx-1] and sorted[idx] are averaged; otherwise
    sorted[idx] is taken as is. numerator=2 gives the median.
    """
    n = len(sorted_lengths)
    scaled = numerator * n
    idx = scaled // 4
    if scaled % 4 == 0:
        return _mid(sorted_lengths[idx - 1], sorted_lengths[idx])
    return sorted_lengths[idx]


def calculate_statistics(lengths: Sequence[int]) -> StatisticsSummary:
    """
    Summarize a multiset of row lengths (duplicates count).

    An empty input returns an all-zero summary instead of dividing by zero.
    """
    if not lengths:
        return StatisticsSummary()

    ordered = sorted(lengths)
    n = len(ordered)

    mean = sum(ordered) / n

    # 2n % 4 == 0 exactly when n is even, so this is the usual median
    median = quartile(ordered, 2)
    q1 = quartile(ordered, 1)
    q3 = quartile(ordered, 3)

    # population variance: divide by n, not n - 1
    variance = sum((x - mean) * (x - mean) for x in ordered) / n

    return StatisticsSummary(
        min=ordered[0],
        max=ordered[-1],
        mean=mean,
        median=median,
        q1=q1,
        q3=q3,
        std_dev=math.sqrt(variance),
    )
