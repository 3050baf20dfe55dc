"""
Format-neutral content of the outlier report.

`build_sections` turns an AnalysisResult into a flat list of blocks (title,
headings, paragraphs, fact lists, bullet lists, tables). The Markdown and
plain-text renderers walk the same list, so the two reports always carry the
same numbers and differ only in layout.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from .. import config as CFG
from ..distribution import LARGEST_EXAMPLE_LIMIT, by_frequency, by_key_desc, examples
from ..models import AnalysisResult


@dataclass(frozen=True)
class Title:
    text: str


@dataclass(frozen=True)
class Heading:
    text: str
    level: int = 2


@dataclass(frozen=True)
class Paragraph:
    text: str
    note: bool = False      # rendered in italics where the format allows


@dataclass(frozen=True)
class Facts:
    """Label/value pairs, e.g. 'Total Rows' -> '42'."""
    items: List[Tuple[str, str]]


@dataclass(frozen=True)
class Bullets:
    """Bullet items; a non-empty label is emphasized before the text."""
    items: List[Tuple[Optional[str], str]]


@dataclass(frozen=True)
class Table:
    headers: Sequence[str]
    rows: List[Sequence[str]] = field(default_factory=list)
    widths: Sequence[int] = ()


Block = Union[Title, Heading, Paragraph, Facts, Bullets, Table]


def _pct(part: float, whole: float) -> float:
    return part / whole * 100.0 if whole else 0.0


def _sigma(value: float) -> str:
    return f"{value:.2f} σ"


def build_sections(result: AnalysisResult, basename: str) -> List[Block]:
    stats = result.statistics
    out = result.outliers
    page = result.page_size
    total_rows = result.total_rows
    per_word = CFG.CHARS_PER_WORD
    avg = result.total_chars / total_rows if total_rows else 0.0

    blocks: List[Block] = [
        Title(f"Row Length Analysis for {basename}"),
        Paragraph(f"Analysis performed on {total_rows} rows ({result.error_count} with errors)"),
    ]

    blocks += [
        Heading("File Statistics"),
        Facts([
            ("Total Rows", str(total_rows)),
            ("Total Characters", f"{result.total_chars} (~{result.total_chars // per_word} words, "
                                 f"~{result.total_chars // page} pages)"),
            ("Average Characters Per Row", f"{avg:.2f} (~{avg / per_word:.1f} words)"),
            ("Unique Row Lengths", str(len(result.length_table))),
        ]),
    ]

    blocks += [
        Heading("Descriptive Statistics for Row Lengths"),
        Facts([
            ("Minimum", f"{stats.min} chars"),
            ("Maximum", f"{stats.max} chars (~{stats.max // per_word} words, "
                        f"~{stats.max / page:.1f} pages)"),
            ("Range", f"{stats.range} chars"),
            ("Mean", f"{stats.mean:.2f} chars"),
            ("Median", f"{stats.median} chars"),
            ("25th Percentile (Q1)", f"{stats.q1} chars"),
            ("75th Percentile (Q3)", f"{stats.q3} chars"),
            ("Interquartile Range (IQR)", f"{stats.iqr} chars"),
            ("Standard Deviation", f"{stats.std_dev:.2f} chars"),
        ]),
        Heading("Outlier Detection Threshold (1.5 × IQR method)", level=3),
        Bullets([
            (None, f"Values above: {int(out.upper)} chars may be considered outliers"),
            (None, f"Values below: {int(max(out.lower, 0.0))} chars may be considered "
                   f"outliers (if positive)"),
        ]),
    ]

    common = Table(["Row Length", "Count", "Percentage", "File Rows", "Data Indices"],
                   widths=[15, 15, 15, 25, 25])
    for length, group in by_frequency(result.length_table)[:CFG.TOP_COMMON_LENGTHS]:
        common.rows.append([str(length), str(group.count), f"{_pct(group.count, total_rows):.2f}%",
                            examples(group.example_file_rows), examples(group.example_data_indices)])
    blocks += [Heading("Common Row Lengths"), common]

    pages = Table(["Page Length", "Count", "Percentage", "File Rows", "Data Indices"],
                  widths=[15, 15, 15, 25, 25])
    for bucket, group in by_frequency(result.page_table)[:CFG.TOP_COMMON_PAGES]:
        pages.rows.append([str(bucket), str(group.count), f"{result.page_percentage(bucket):.2f}%",
                           examples(group.example_file_rows), examples(group.example_data_indices)])
    blocks += [
        Heading(f"Top {CFG.TOP_COMMON_PAGES} Common Page Lengths"),
        pages,
        Paragraph(f"Note: Page length is calculated using {page} characters per page.", note=True),
    ]

    largest = by_key_desc(result.length_table)
    extreme = Table(["Count", "Chars", "Words (est.)", "Pages (est.)", "File Rows",
                     "Data Indices", "Std. Devs from Mean"],
                    widths=[10, 15, 15, 15, 25, 25, 15])
    for length, group in largest[:CFG.EXTREME_ROWS]:
        extreme.rows.append([str(group.count), str(length), str(length // per_word),
                             f"{length / page:.2f}", examples(group.example_file_rows),
                             examples(group.example_data_indices),
                             _sigma(stats.deviations(length))])
    blocks += [Heading("Extreme Row Lengths (Largest Rows)"), extreme]

    blocks += [
        Heading("Rows Above 1.5 × IQR Threshold"),
        Paragraph(f"Any row length above {int(out.upper)} characters is considered a "
                  f"statistical outlier."),
        Paragraph(f"Found {out.total_rows} rows ({out.share(total_rows):.2f}% of total) "
                  f"exceeding the outlier threshold."),
    ]
    if len(out.entries) > CFG.MAX_OUTLIERS_SHOWN:
        blocks.append(Paragraph(f"Showing the {CFG.MAX_OUTLIERS_SHOWN} largest outliers among "
                                f"{len(out.entries)} different outlier lengths:"))
    flagged = Table(["Row Length", "Count", "File Rows", "Data Indices", "Standard Deviations"],
                    widths=[15, 15, 25, 25, 15])
    for entry in out.entries[:CFG.MAX_OUTLIERS_SHOWN]:
        flagged.rows.append([str(entry.length), str(entry.count),
                             examples(entry.group.example_file_rows),
                             examples(entry.group.example_data_indices),
                             _sigma(stats.deviations(entry.length))])
    blocks.append(flagged)

    blocks += [
        Heading("Recommendations"),
        Paragraph("Based on the analysis, here are some actionable recommendations:"),
    ]
    if largest:
        top, top_group = largest[0]
        blocks += [
            Heading("Extremely Large Rows", level=3),
            Bullets([
                (None, f"The largest row contains {top} characters "
                       f"(approximately {top / page:.1f} pages)."),
                (None, "Investigate file rows: "
                       + examples(top_group.example_file_rows, LARGEST_EXAMPLE_LIMIT)),
                (None, f"These rows are {stats.deviations(top):.2f} standard deviations from the mean."),
                ("Action", "These rows may contain improperly formatted data or merged records."),
                ("Suggestion", "Manually inspect these rows to determine if they need to be "
                               "split or cleaned."),
            ]),
        ]

    quality: List[Tuple[Optional[str], str]] = [
        (None, f"The median row length is {stats.median} characters."),
        (None, f"Rows with lengths near the median (between {stats.q1} and {stats.q3} characters) "
               f"are likely to be properly formatted."),
    ]
    if out.total_rows > total_rows // 10:
        quality.append(("Warning", "More than 10% of rows are statistical outliers, suggesting "
                                   "high variability in row structure."))
    if stats.mean > stats.median * 1.5:
        quality.append((None, "The distribution is heavily skewed right (mean much larger than "
                              "median), suggesting some extremely large values are affecting "
                              "the average."))
    blocks += [Heading("General Data Quality", level=3), Bullets(quality)]

    blocks += [
        Heading("Index Reference"),
        Bullets([
            ("File Row", "Physical line number in the file (1-based, starts at 1)"),
            ("Data Index", "Position in the data (-1 = header row, 0 = first data row, "
                           "1 = second data row, etc.)"),
            (None, "For most use cases, you should refer to the File Row when locating rows "
                   "in the original file"),
        ]),
    ]
    return blocks
