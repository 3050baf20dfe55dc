"""Report sink: renders an AnalysisResult into CSV, Markdown and text files."""
from __future__ import annotations

from .markdown import render_markdown
from .sections import build_sections
from .text import render_text
from .writer import ReportPaths, report_paths, write_reports

__all__ = [
    "ReportPaths",
    "build_sections",
    "render_markdown",
    "render_text",
    "report_paths",
    "write_reports",
]
