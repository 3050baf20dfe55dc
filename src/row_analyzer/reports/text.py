from __future__ import annotations
from typing import List, Sequence

from .sections import Block, Bullets, Facts, Heading, Paragraph, Table, Title

RULE = 50


def _fixed(cells: Sequence[str], widths: Sequence[int]) -> str:
    if not widths:
        return " ".join(cells)
    return " ".join(f"{c:<{w}}" for c, w in zip(cells, widths)).rstrip()


def render_text(blocks: Sequence[Block]) -> str:
    """Plain-text report with evenly spaced columns for non-Markdown viewers."""
    lines: List[str] = []
    for b in blocks:
        if isinstance(b, Title):
            lines += [b.text.upper(), "=" * RULE]
        elif isinstance(b, Heading):
            if b.level <= 2:
                lines += ["", b.text.upper(), "-" * RULE]
            else:
                lines += ["", f"{b.text}:"]
        elif isinstance(b, Paragraph):
            lines += ["", b.text]
        elif isinstance(b, Facts):
            pad = max(len(label) for label, _ in b.items) + 2
            lines += [f"{label + ':':<{pad}}{value}" for label, value in b.items]
        elif isinstance(b, Bullets):
            lines += [f"- {label}: {text}" if label else f"- {text}" for label, text in b.items]
        elif isinstance(b, Table):
            rule = "-" * max(sum(b.widths) + len(b.widths), RULE)
            lines += [_fixed(b.headers, b.widths), rule]
            lines += [_fixed(r, b.widths) for r in b.rows]
        else:
            raise TypeError(f"unknown report block: {type(b).__name__}")
    return "\n".join(lines) + "\n"
