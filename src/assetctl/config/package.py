"""Package metadata resolution for the banner.

``[package]`` in assetctl.toml wins. Without it, a ``package.json`` in the
project root is read the way npm-based themes already carry this data.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from assetctl.config.models import PackageConfig

if TYPE_CHECKING:
    from assetctl.config.settings import AssetSettings

PACKAGE_JSON = "package.json"

_FIELDS = ("name", "title", "version", "author", "license", "homepage")


def _author_name(value: Any) -> str:
    """npm allows ``author`` as a string or a ``{name, email, url}`` object."""
    if isinstance(value, dict):
        return str(value.get("name", ""))
    return str(value) if value is not None else ""


def read_package_json(path: Path) -> PackageConfig:
    """Parse the banner fields out of a ``package.json`` file.

    Raises:
        ValueError: If the file is not valid JSON or not a JSON object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise ValueError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a JSON object"
        raise ValueError(msg)

    fields: dict[str, str] = {}
    for key in _FIELDS:
        if key not in data:
            continue
        value = data[key]
        fields[key] = _author_name(value) if key == "author" else str(value)
    try:
        return PackageConfig.model_validate(fields)
    except ValidationError as exc:
        msg = f"Invalid package metadata in {path}: {exc}"
        raise ValueError(msg) from exc


def resolve_package(settings: AssetSettings) -> PackageConfig:
    """Return the banner metadata for *settings*' project."""
    if settings.package is not None:
        return settings.package
    candidate = settings.project_root / PACKAGE_JSON
    if candidate.is_file():
        return read_package_json(candidate)
    return PackageConfig()
