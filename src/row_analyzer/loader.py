"""
Row Ingestion Module

Reads a line-oriented source and gives every physical line a stable identity
(its 1-based file row) before any counting or parallel work happens.

Lines are split on LF; one trailing CR is dropped so CRLF files count the
same as LF files. Each line is decoded as strict UTF-8. A line that fails to
decode is a per-line read failure: it is logged, counted on the IngestLog and
skipped, while numbering continues so later rows keep their physical line
numbers. Failures to open or read the source itself are fatal (SourceError).

Key Functions:
    open_source(source): context manager yielding a line iterator
    iter_lines(lines, log): yield (file_row, text) for decodable lines
    read_rows(source): materialize every decodable line (parallel mode)
    iter_char_counts(source, log): (file_row, char_count) one line at a time
"""

from __future__ import annotations
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import IO, Iterable, Iterator, List, Tuple, Union

from . import config as CFG
from .errors import SourceError

log = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", IO[bytes], IO[str]]
Line = Tuple[int, str]


@dataclass(slots=True)
class IngestLog:
    """Run-level ingestion counters; owned by one analysis call."""
    lines_read: int = 0
    error_count: int = 0
    failed_rows: List[int] = field(default_factory=list)

    def record_failure(self, file_row: int, exc: Exception) -> None:
        self.error_count += 1
        self.failed_rows.append(file_row)
        log.warning("Error reading file row %d: %s", file_row, exc)


def source_name(source: Source) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return str(getattr(source, "name", "<stream>"))


@contextmanager
def open_source(source: Source) -> Iterator[Iterable[Union[bytes, str]]]:
    """
    Yield an iterable of raw lines for a path or an already-open stream.

    Paths are opened in binary mode so decoding happens per line. Streams are
    used as given and left open for their owner to close.
    """
    if isinstance(source, (str, os.PathLike)):
        try:
            f = open(source, "rb")
        except OSError as exc:
            raise SourceError(f"cannot open {os.fspath(source)}: {exc}") from exc
        with f:
            yield f
    else:
        if not hasattr(source, "__iter__"):
            raise SourceError(f"unsupported source type: {type(source).__name__}")
        yield source


def _strip_eol(raw: Union[bytes, str]) -> Union[bytes, str]:
    nl, cr = (b"\n", b"\r") if isinstance(raw, bytes) else ("\n", "\r")
    if raw.endswith(nl):
        raw = raw[:-1]
        if raw.endswith(cr):
            raw = raw[:-1]
    return raw


def iter_lines(lines: Iterable[Union[bytes, str]], ingest_log: IngestLog) -> Iterator[Line]:
    """
    Yield (file_row, text) for every line that decodes.

    Undecodable lines are recorded on `ingest_log` and skipped; they still
    consume a file row number.
    """
    it = iter(lines)
    file_row = 0
    while True:
        try:
            raw = next(it)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as exc:
            # text-mode streams decode inside the iterator; nothing to skip to
            raise SourceError(f"read failed after file row {file_row}: {exc}") from exc

        file_row += 1
        ingest_log.lines_read += 1
        body = _strip_eol(raw)
        if isinstance(body, bytes):
            try:
                text = body.decode("utf-8")
            except UnicodeDecodeError as exc:
                ingest_log.record_failure(file_row, exc)
                continue
        else:
            text = body

        if CFG.VERBOSE and file_row % CFG.PROGRESS_EVERY_LINES == 0:
            log.info("[ingest] lines=%s", f"{file_row:,}")
        yield file_row, text


def read_rows(source: Source) -> Tuple[List[Line], IngestLog]:
    """Materialize every decodable line of `source` (required before chunking)."""
    ingest_log = IngestLog()
    with open_source(source) as lines:
        rows = list(iter_lines(lines, ingest_log))
    log.info("Ingested %d of %d lines from %s (%d with errors)",
             len(rows), ingest_log.lines_read, source_name(source), ingest_log.error_count)
    return rows, ingest_log


def iter_char_counts(source: Source, ingest_log: IngestLog) -> Iterator[Tuple[int, int]]:
    """Streaming ingestion: (file_row, char_count) without keeping line text."""
    with open_source(source) as lines:
        for file_row, text in iter_lines(lines, ingest_log):
            yield file_row, len(text)
