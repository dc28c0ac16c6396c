"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Project initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from assetctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from assetctl.config.settings import AssetSettings
    from assetctl.infrastructure.project import Project
    from assetctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The project is lazily
    initialized on first use so ``--help`` and ``--version`` never
    trigger plugin discovery.
    """

    def __init__(self, settings: AssetSettings) -> None:
        self.settings = settings
        self._project: Project | None = None

        from assetctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from assetctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def project(self) -> Project:
        """The project instance (created lazily on first access)."""
        if self._project is None:
            from assetctl.infrastructure.project import Project

            self._project = Project(self.settings)
            self._project.init_event_bus()
        return self._project

    def use_project(self, project: Project) -> None:
        """Install a pre-configured project (watch/serve attach plugins first)."""
        self._project = project

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def report(self, result: ServiceResult) -> None:
        """Print a result without exiting, whatever its outcome.

        Used by the watch loop, where a failed rebuild must not end the session.
        """
        output = format_result(result, settings=self.output_settings)
        click.echo(output, err=not result.ok)
        if not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        self.report(result)
        if not result.ok:
            raise SystemExit(1)

    def echo(self, message: str, **style: Any) -> None:
        """Status line for humans; silent under ``--quiet`` and ``--json``."""
        if self.settings.quiet or self.settings.json_output:
            return
        click.secho(message, **style)
