"""Task names and live-reload kinds."""

from __future__ import annotations

from enum import StrEnum


class TaskName(StrEnum):
    """Named build tasks, as exposed on the CLI."""

    CLEAN = "clean"
    VENDOR = "vendor"
    CSS = "css"
    JS = "js"
    MEDIA = "media"
    HTML = "html"
    BUILD = "build"


class ReloadKind(StrEnum):
    """How preview clients should react to a finished task."""

    NONE = "none"
    CSS = "css"
    FULL = "reload"


# Tasks that run in parallel once the vendor stage has finished.
PARALLEL_TASKS: tuple[TaskName, ...] = (
    TaskName.CSS,
    TaskName.JS,
    TaskName.MEDIA,
    TaskName.HTML,
)
