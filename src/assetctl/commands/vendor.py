"""vendor — clean, then copy third-party files into the vendor directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    cls=AssetCommand,
    examples="""\
  # Clean the output, then copy every [[vendor]] entry
  assetctl vendor

  # List every copied file
  assetctl -v vendor""",
)
@click.pass_obj
def vendor(app: AppContext) -> None:
    """Clean the output, then copy vendor libraries into it."""
    from assetctl.services.build import BuildService

    app.emit(BuildService(app.project).vendor())
