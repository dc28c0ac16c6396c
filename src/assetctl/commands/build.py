"""build — the full build (default command)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    cls=AssetCommand,
    examples="""\
  # Clean, vendor copy, then css/js/media/html in parallel
  assetctl build

  # Same thing: build is the default
  assetctl

  # Per-task timings
  assetctl -v build""",
)
@click.pass_obj
def build(app: AppContext) -> None:
    """Clean, copy vendor files, then build css, js, media and html."""
    from assetctl.services.build import BuildService

    app.emit(BuildService(app.project).build())
