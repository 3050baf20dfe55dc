from __future__ import annotations
import logging
import os
import time
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, IO, List, Optional

from ..errors import ReportError
from ..models import AnalysisResult
from .markdown import render_markdown
from .sections import build_sections
from .tables import write_char_counts, write_length_sorted, write_page_counts, write_value_counts
from .text import render_text

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReportPaths:
    char_counts: Path
    value_counts: Path
    md_outliers: Path
    txt_outliers: Path
    pages_valuecounts: Path
    length_sorted: Path

    def all(self) -> List[Path]:
        return [getattr(self, f.name) for f in fields(self)]


def report_paths(out_dir: str | Path, basename: str, timestamp: str) -> ReportPaths:
    d = Path(out_dir)
    return ReportPaths(
        char_counts=d / f"{basename}_char_counts_report_{timestamp}.csv",
        value_counts=d / f"{basename}_value_counts_report_{timestamp}.csv",
        md_outliers=d / f"{basename}_md_outliers_report_{timestamp}.md",
        txt_outliers=d / f"{basename}_txt_outliers_report_{timestamp}.txt",
        pages_valuecounts=d / f"{basename}_pages_valuecounts_report_{timestamp}.csv",
        length_sorted=d / f"{basename}_length_sorted_report_{timestamp}.csv",
    )


def _tmp(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def _write(path: Path, fill: Callable[[IO[str]], None]) -> None:
    # newline="" so csv controls line endings on every platform
    with open(_tmp(path), "w", encoding="utf-8", newline="") as f:
        fill(f)


def _discard(paths: List[Path]) -> None:
    for p in paths:
        try:
            os.unlink(p)
        except FileNotFoundError:
            pass
        except OSError as exc:
            log.warning("could not remove partial report %s: %s", p, exc)


def write_reports(
    result: AnalysisResult,
    out_dir: str | Path,
    basename: str,
    timestamp: Optional[str] = None,
) -> ReportPaths:
    """
    Write the six report files for one analysis into `out_dir`.

    The directory is created if needed. `timestamp` defaults to the current
    Unix time in seconds. Every file is rendered to a `.tmp` sibling first and
    only renamed into place once all six rendered; on any I/O failure the
    files of this run are removed again and ReportError is raised.
    """
    ts = timestamp or str(int(time.time()))
    paths = report_paths(out_dir, basename, ts)
    blocks = build_sections(result, basename)
    writers = [
        (paths.char_counts, lambda f: write_char_counts(result, f)),
        (paths.value_counts, lambda f: write_value_counts(result, f)),
        (paths.pages_valuecounts, lambda f: write_page_counts(result, f)),
        (paths.length_sorted, lambda f: write_length_sorted(result, f)),
        (paths.md_outliers, lambda f: f.write(render_markdown(blocks))),
        (paths.txt_outliers, lambda f: f.write(render_text(blocks))),
    ]
    committed: List[Path] = []
    try:
        os.makedirs(out_dir, exist_ok=True)
        for path, fill in writers:
            _write(path, fill)
        for path, _ in writers:
            os.replace(_tmp(path), path)
            committed.append(path)
    except OSError as exc:
        _discard([_tmp(p) for p, _ in writers] + committed)
        raise ReportError(f"cannot write reports to {out_dir}: {exc}") from exc
    log.info("Wrote %d report files to %s", len(committed), out_dir)
    return paths
