"""Thin wrappers over the third-party compilers and minifiers.

Each wrapper normalizes the tool's failure into :class:`CompilerError` so
the service layer can report it without knowing which tool raised.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import rcssmin
import rjsmin
import sass

OUTPUT_STYLES = ("nested", "expanded", "compact", "compressed")


class CompilerError(Exception):
    """A source file could not be compiled or minified."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


def compile_sass(
    path: Path,
    *,
    include_paths: Sequence[Path] = (),
    output_style: str = "expanded",
) -> str:
    """Compile a ``.scss`` / ``.sass`` file to CSS with libsass."""
    if output_style not in OUTPUT_STYLES:
        msg = f"Unknown Sass output style: {output_style!r}"
        raise ValueError(msg)
    try:
        return sass.compile(
            filename=str(path),
            output_style=output_style,
            include_paths=[str(p) for p in include_paths],
        )
    except sass.CompileError as exc:
        raise CompilerError(path, str(exc).strip()) from exc


def minify_css(css: str) -> str:
    """Strip whitespace and comments, keeping ``/*!`` license comments."""
    return rcssmin.cssmin(css, keep_bang_comments=True)


def minify_js(path: Path) -> str:
    """Read and minify a script, keeping ``/*!`` license comments."""
    try:
        source = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CompilerError(path, f"not valid UTF-8 ({exc.reason})") from exc
    return rjsmin.jsmin(source, keep_bang_comments=True)
