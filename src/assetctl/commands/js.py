"""js — minify scripts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl js
  assetctl --json js""",
)
@click.pass_obj
def js(app: AppContext) -> None:
    """Minify and banner scripts."""
    from assetctl.services.scripts import ScriptService

    app.emit(ScriptService(app.project).build())
