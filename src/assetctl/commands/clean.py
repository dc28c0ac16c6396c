"""clean — delete the output directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl clean
  assetctl --json clean""",
)
@click.pass_obj
def clean(app: AppContext) -> None:
    """Delete the generated output directory."""
    from assetctl.services.clean import CleanService

    app.emit(CleanService(app.project).clean())
