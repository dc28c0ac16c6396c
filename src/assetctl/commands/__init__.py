"""Subcommand modules for assetctl.

Provides register_commands() which uses deferred imports to keep
``assetctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every task command on the root CLI group."""
    from assetctl.commands.build import build
    from assetctl.commands.clean import clean
    from assetctl.commands.copy import html, media
    from assetctl.commands.css import css
    from assetctl.commands.js import js
    from assetctl.commands.serve import serve
    from assetctl.commands.vendor import vendor
    from assetctl.commands.watch import watch

    for command in (clean, vendor, css, js, media, html, build, watch, serve):
        cli.add_command(command)
