"""media / html — straight copies into the output root."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(cls=AssetCommand, examples="  assetctl media")
@click.pass_obj
def media(app: AppContext) -> None:
    """Copy images and videos."""
    from assetctl.services.copy import CopyService

    app.emit(CopyService(app.project).media())


@click.command(cls=AssetCommand, examples="  assetctl html")
@click.pass_obj
def html(app: AppContext) -> None:
    """Copy HTML pages."""
    from assetctl.services.copy import CopyService

    app.emit(CopyService(app.project).html())
