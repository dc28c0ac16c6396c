"""Filesystem operations for the asset pipeline.

INVARIANT: The output tree is fully derived. Everything under the output
directory can be deleted and regenerated from the input and vendor trees.

Pure glob matching lives in :mod:`assetctl.domain.paths`. This module
handles actual file I/O and file discovery.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from pathlib import Path

from assetctl.domain.paths import matches

# Directories never descended into when collecting sources.
_SKIP_DIRS = frozenset({".git", ".assetctl", "__pycache__"})


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def relative_posix(path: Path, root: Path) -> str:
    """*path* relative to *root* as a POSIX string (also a URL path)."""
    return path.relative_to(root).as_posix()


def collect_files(
    root: Path,
    patterns: Iterable[str],
    *,
    exclude: Iterable[str] = (),
) -> list[Path]:
    """Return files under *root* matching *patterns* and no *exclude* pattern.

    Patterns are relative to *root*. Results are sorted so every run
    processes files in the same order. A missing *root* yields ``[]``.
    """
    patterns = list(patterns)
    exclude = list(exclude)
    if not root.is_dir():
        return []

    results: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        rel = relative_posix(path, root)
        if any(part in _SKIP_DIRS for part in path.relative_to(root).parts):
            continue
        if not matches(rel, patterns):
            continue
        if exclude and matches(rel, exclude):
            continue
        results.append(path)
    return sorted(results)


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def write_text_file(path: Path, text: str) -> None:
    """Write UTF-8 *text* to *path*, creating parent directories.

    Newlines are written as-is so output is byte-identical across platforms.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)


def copy_files(files: Iterable[Path], src_root: Path, dest_root: Path) -> list[Path]:
    """Copy *files* from *src_root* into *dest_root*, keeping relative paths.

    Returns the written destination paths in input order.
    """
    written: list[Path] = []
    for src in files:
        dest = dest_root / src.relative_to(src_root)
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)
        written.append(dest)
    return written


def remove_tree(path: Path) -> bool:
    """Delete *path* recursively. Returns False if it did not exist."""
    if not path.exists():
        return False
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
    return True
