"""Pluggy hook specifications for assetctl build events.

``post_task`` fires after every successful task, which is how the preview
server learns that it should reload. ``post_build`` fires once per full
build with the aggregate outcome.
"""

from __future__ import annotations

from typing import Any

import pluggy

PROJECT_NAME = "assetctl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class AssetctlHookSpec:
    """Hook specifications for the assetctl plugin system."""

    @hookspec
    def post_task(
        self,
        task: str,
        outputs: list[str],
        reload: str,
    ) -> None:
        """Called after a task wrote its outputs.

        Args:
            task: Task name (``css``, ``js``, ``html``, ...).
            outputs: Written files, relative to the output directory (POSIX).
            reload: ``css`` for a stylesheet hot swap, ``reload`` for a
                full page refresh, ``none`` when clients need not react.
        """

    @hookspec
    def post_build(
        self,
        ok: bool,
        tasks: list[dict[str, Any]],
    ) -> None:
        """Called after a full build with one summary dict per task."""
