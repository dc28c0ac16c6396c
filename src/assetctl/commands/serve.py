"""serve — preview the output directory without rebuilding."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl serve
  assetctl serve --port 8080""",
)
@click.option("--host", default=None, help="Bind address (default from [server]).")
@click.option("--port", default=None, type=int, help="Listen port (default from [server]).")
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None) -> None:
    """Serve the output directory with the live-reload client injected."""
    from assetctl.server.runner import PreviewServer

    settings = app.settings
    server = PreviewServer(
        settings.output_dir,
        host=host or settings.server.host,
        port=port if port is not None else settings.server.port,
    )
    try:
        server.start()
    except OSError as exc:
        msg = f"Cannot start preview server on {server.host}:{server.port}: {exc}"
        raise click.ClickException(msg) from exc

    app.echo(f"Serving {settings.output_dir} at {server.url} (Ctrl-C to stop)", fg="green")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        app.echo("Stopping.")
    finally:
        server.stop()
