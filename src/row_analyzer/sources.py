from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

from .config import INCLUDE_EXTS

__all__ = ["SingleFile", "Directory", "InputSource", "discover_files", "report_basename"]


@dataclass(frozen=True, slots=True)
class SingleFile:
    path: str


@dataclass(frozen=True, slots=True)
class Directory:
    path: str


# what the CLI resolved from its arguments; the engine only ever sees files
InputSource = Union[SingleFile, Directory]


def discover_files(
    root: str | Path,
    exts: Optional[Iterable[str]] = None,
    recursive: bool = False,
) -> List[str]:
    """
    List files under `root` whose suffix is in `exts` (case-insensitive).

    Only the top level is scanned unless `recursive` is set. Results are
    sorted so repeated runs process files in the same order.
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(root)

    include: Set[str] = {
        (e if str(e).startswith(".") else "." + str(e)).lower()
        for e in (exts if exts is not None else INCLUDE_EXTS)
    }

    out: List[str] = []
    stack = [root]
    while stack:
        cur = stack.pop()
        try:
            with os.scandir(cur) as it:
                for entry in it:
                    if entry.is_dir(follow_symlinks=False):
                        if recursive:
                            stack.append(Path(entry.path))
                    elif entry.is_file():
                        if Path(entry.name).suffix.lower() in include:
                            out.append(entry.path)
        except PermissionError:
            continue
    out.sort()
    return out


def report_basename(path: str | Path) -> str:
    """File name up to its first dot: 'data.2024.csv' -> 'data'."""
    name = Path(path).name
    if not name:
        raise ValueError(f"invalid file path: {path!r}")
    return name.split(".")[0] or "unknown"
