"""watch — build, then rebuild on change and serve a live-reload preview."""

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
  # Build, watch src/, serve docs/ on http://127.0.0.1:3000/
  assetctl watch

  # Different port, reachable from the LAN
  assetctl watch --host 0.0.0.0 --port 8080

  # Rebuild only, no preview server
  assetctl watch --no-serve""",
)
@click.option("--host", default=None, help="Preview bind address (default from [server]).")
@click.option("--port", default=None, type=int, help="Preview port (default from [server]).")
@click.option("--no-serve", is_flag=True, help="Rebuild on change without the preview server.")
@click.pass_obj
def watch(app: AppContext, host: str | None, port: int | None, no_serve: bool) -> None:
    """Build, then watch sources and live-reload the preview."""
    from assetctl.infrastructure.project import Project
    from assetctl.plugins.builtins.live_reload import LiveReloadPlugin
    from assetctl.server.runner import PreviewServer
    from assetctl.services.build import BuildService
    from assetctl.services.watch import WatchService

    settings = app.settings
    server: PreviewServer | None = None
    plugins: list[tuple[object, str]] = []
    if not no_serve:
        server = PreviewServer(
            settings.output_dir,
            host=host or settings.server.host,
            port=port if port is not None else settings.server.port,
        )
        plugins.append((LiveReloadPlugin(server.broadcaster), "live-reload"))

    project = Project(settings)
    project.init_event_bus(sync=False, plugins=plugins)
    app.use_project(project)

    # A failed initial build is reported, not fatal: the watcher picks up the fix.
    app.report(BuildService(project).build())

    watcher = WatchService(project, on_result=app.report)
    try:
        if server is not None:
            try:
                server.start()
            except OSError as exc:
                msg = f"Cannot start preview server on {server.host}:{server.port}: {exc}"
                raise click.ClickException(msg) from exc
            app.echo(f"Serving {settings.output_dir} at {server.url}", fg="green")
        watcher.start()
        app.echo(f"Watching {settings.input_dir} (Ctrl-C to stop)")
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        app.echo("Stopping.")
    finally:
        watcher.stop()
        if server is not None:
            server.stop()
        project.close()
