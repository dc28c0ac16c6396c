"""css — compile stylesheets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl css

  # Reproducible banner year
  SOURCE_DATE_EPOCH=1700000000 assetctl css""",
)
@click.pass_obj
def css(app: AppContext) -> None:
    """Compile, prefix, banner and minify stylesheets."""
    from assetctl.services.styles import StyleService

    app.emit(StyleService(app.project).build())
