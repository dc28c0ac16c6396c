"""Glob matching and output naming for asset files.

Patterns are POSIX-style and relative to an asset group's source directory.
``**`` spans any number of directories (including none), ``*`` and ``?``
never cross a ``/``. A wildcard never matches the leading dot of a name, so
editor swap files and other dotfiles stay out unless a pattern names them
with an explicit ``.``.

Examples:
    >>> matches("scss/app.scss", ["**/*.scss"])
    True
    >>> matches("js/vendor/x.js", ["js/*"])
    False
    >>> matches("js/.app.js.swp", ["js/*"])
    False
    >>> minified_name("theme/main.scss", ".css")
    'theme/main.min.css'
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable
from pathlib import PurePosixPath

MIN_SUFFIX = ".min"
_NO_DOT = r"(?!\.)"


@functools.lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a POSIX glob pattern into an anchored regex."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        # Wildcards opening a path segment must not match a leading dot.
        guard = _NO_DOT if i == 0 or pattern[i - 1] == "/" else ""
        if pattern.startswith("**/", i):
            out.append(f"(?:{_NO_DOT}[^/]*/)*")
            i += 3
        elif pattern.startswith("**", i):
            out.append(f"(?:{guard}[^/]*(?:/{_NO_DOT}[^/]*)*)?")
            i += 2
        elif ch == "*":
            out.append(f"{guard}[^/]*")
            i += 1
        elif ch == "?":
            out.append(f"{guard}[^/]")
            i += 1
        elif ch == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(ch))
                i += 1
            else:
                body = pattern[i + 1 : end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append(f"{guard}[{body}]")
                i = end + 1
        else:
            out.append(re.escape(ch))
            i += 1
    return re.compile("".join(out) + r"\Z")


def matches(relpath: str, patterns: Iterable[str]) -> bool:
    """Whether POSIX *relpath* matches any of *patterns*."""
    return any(glob_to_regex(p).match(relpath) for p in patterns)


def is_partial(relpath: str) -> bool:
    """Sass partials (``_name.scss``) are imported, never compiled on their own."""
    return PurePosixPath(relpath).name.startswith("_")


def minified_name(relpath: str, ext: str) -> str:
    """Rename *relpath* to ``<stem>.min<ext>``, keeping its directory.

    A stem that already ends in ``.min`` is not suffixed twice.
    """
    path = PurePosixPath(relpath)
    stem = path.stem
    if not stem.endswith(MIN_SUFFIX):
        stem += MIN_SUFFIX
    return str(path.with_name(f"{stem}{ext}"))
