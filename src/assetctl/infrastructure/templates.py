"""Shared Jinja2 template loading with per-project override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader

BANNER_TEMPLATE = "banner.txt.j2"


def build_template_environment(group: str, *, project_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``.assetctl/templates/`` inside the project.
    Both a namespaced directory (for example ``.assetctl/templates/banner/``)
    and the shared root are supported.
    """

    loaders: list[BaseLoader] = []
    if project_root is not None:
        template_root = project_root / ".assetctl" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("assetctl", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)
