"""Click command classes carrying worked examples for each task.

``--help`` stays short; ``assetctl css --examples`` prints the invocations
worth copying (watch ports, alternate configs, JSON output) and exits
before the task runs or any config is loaded.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    command = ctx.command
    examples = getattr(command, "examples", None) or ""
    click.echo(f"{ctx.command_path} examples:\n")
    click.echo(textwrap.indent(textwrap.dedent(examples).strip("\n"), "  "))
    ctx.exit(0)


class _ExamplesMixin:
    """Adds the eager ``--examples`` flag when a command declares examples."""

    examples: str | None

    def _attach_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        params: list[click.Parameter] = self.params  # type: ignore[attr-defined]
        params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_print_examples,
                help="Print example invocations and exit.",
            )
        )


class AssetCommand(_ExamplesMixin, click.Command):
    """A task command: ``examples=`` is optional text shown by ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)


class AssetGroup(_ExamplesMixin, click.Group):
    """The root group. Commands declared on it default to :class:`AssetCommand`."""

    command_class = AssetCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)
