from __future__ import annotations
from typing import List, Sequence

from .sections import Block, Bullets, Facts, Heading, Paragraph, Table, Title


def _row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def render_markdown(blocks: Sequence[Block]) -> str:
    lines: List[str] = []
    for b in blocks:
        if isinstance(b, Title):
            lines.append(f"# {b.text}")
        elif isinstance(b, Heading):
            lines += ["", f"{'#' * b.level} {b.text}"]
        elif isinstance(b, Paragraph):
            lines += ["", f"*{b.text}*" if b.note else b.text]
        elif isinstance(b, Facts):
            lines += [f"- **{label}**: {value}" for label, value in b.items]
        elif isinstance(b, Bullets):
            lines += [f"- **{label}**: {text}" if label else f"- {text}" for label, text in b.items]
        elif isinstance(b, Table):
            lines.append(_row(b.headers))
            lines.append(_row(["-" * len(h) for h in b.headers]))
            lines += [_row(r) for r in b.rows]
        else:
            raise TypeError(f"unknown report block: {type(b).__name__}")
    return "\n".join(lines) + "\n"
