"""Locating ``assetctl.toml`` for a theme checkout.

A theme is usually built from its own directory or from somewhere under
``src/`` while editing, so the search starts at the working directory and
climbs until a directory holds ``assetctl.toml``. That directory becomes the
project root. ``ASSETCTL_CONFIG`` pins one file and skips the search; an
explicit ``-c`` is handled by :meth:`AssetSettings.from_cli` before this
module is consulted.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "assetctl.toml"
CONFIG_ENV_VAR = "ASSETCTL_CONFIG"

logger = logging.getLogger(__name__)


def _search_dirs(start: Path) -> Iterator[Path]:
    """*start* and each of its parents, up to the filesystem root."""
    here = start.resolve()
    yield here
    yield from here.parents


def _pinned_config() -> Path | None:
    value = os.environ.get(CONFIG_ENV_VAR)
    return Path(value) if value else None


def find_config(start: Path | None = None) -> Path | None:
    """The config file governing *start* (default: the working directory).

    A path in ``ASSETCTL_CONFIG`` wins outright. If it names a missing
    file the project runs on defaults rather than falling back to a search.
    """
    pinned = _pinned_config()
    if pinned is not None:
        if pinned.is_file():
            return pinned
        logger.warning("%s=%s does not exist; using defaults", CONFIG_ENV_VAR, pinned)
        return None

    for directory in _search_dirs(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
