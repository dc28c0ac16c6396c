"""Root CLI group for assetctl with global flags and command registration."""

from __future__ import annotations

import click

from assetctl import __version__
from assetctl.commands import register_commands
from assetctl.commands._base import AssetGroup
from assetctl.commands._context import AppContext
from assetctl.config.settings import AssetSettings


@click.group(
    cls=AssetGroup,
    invoke_without_command=True,
    examples="""\
  # Full build (same as `assetctl build`)
  assetctl

  # Build with another config file, JSON result on stdout
  assetctl -c site/assetctl.toml --json build

  # Develop with live reload
  assetctl watch""",
)
@click.version_option(version=__version__, prog_name="assetctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """assetctl — static-site asset build and live-reload preview."""
    ctx.ensure_object(dict)
    settings = AssetSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from assetctl.commands.build import build

        ctx.invoke(build)


register_commands(cli)
