from __future__ import annotations
from typing import Dict, Iterable, List, Sequence, Tuple

from .models import LengthFrequencyTable, LengthGroup, PageFrequencyTable, RowRecord

# example rows shown per group in general tables / in "largest rows" notes
EXAMPLE_LIMIT = 3
LARGEST_EXAMPLE_LIMIT = 5


def page_bucket(char_count: int, page_size: int) -> int:
    """ceil(char_count / page_size); an empty row is page 0."""
    return (char_count + page_size - 1) // page_size


def build_length_table(corpus: Iterable[RowRecord]) -> LengthFrequencyTable:
    """Group the ordered corpus by exact char_count in one pass."""
    table: LengthFrequencyTable = {}
    for r in corpus:
        group = table.get(r.char_count)
        if group is None:
            group = table[r.char_count] = LengthGroup()
        group.add(r)
    return table


def build_page_table(length_table: LengthFrequencyTable, page_size: int) -> PageFrequencyTable:
    """
    Re-group length groups into page buckets, ascending by bucket.

    Members of a bucket are re-sorted by file row so example order follows
    the corpus, not the order in which lengths were merged.
    """
    members: Dict[int, List[Tuple[int, int]]] = {}
    for length, group in length_table.items():
        bucket = members.setdefault(page_bucket(length, page_size), [])
        bucket.extend(zip(group.example_file_rows, group.example_data_indices))

    table: PageFrequencyTable = {}
    for bucket in sorted(members):
        rows = sorted(members[bucket])
        table[bucket] = LengthGroup(
            count=len(rows),
            example_file_rows=[fr for fr, _ in rows],
            example_data_indices=[di for _, di in rows],
        )
    return table


def by_frequency(table: Dict[int, LengthGroup]) -> List[Tuple[int, LengthGroup]]:
    """Most common keys first; equal counts fall back to the smaller key."""
    return sorted(table.items(), key=lambda kv: (-kv[1].count, kv[0]))


def by_key_desc(table: Dict[int, LengthGroup]) -> List[Tuple[int, LengthGroup]]:
    return sorted(table.items(), key=lambda kv: kv[0], reverse=True)


def examples(values: Sequence[int], limit: int = EXAMPLE_LIMIT) -> str:
    """First `limit` values joined for display, or N/A."""
    if not values:
        return "N/A"
    return ", ".join(str(v) for v in values[:limit])
