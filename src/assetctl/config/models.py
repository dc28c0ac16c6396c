"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, assetctl.toml only contains overrides.
A project laid out like the stock Start Bootstrap theme needs no config at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- assetctl.toml sections ---


class PathsConfig(BaseModel):
    """[paths] section. Both paths are relative to the project root."""

    model_config = {"frozen": True}

    input: str = "src"
    output: str = "docs"


class AssetGroupConfig(BaseModel):
    """Shared shape of the [styles], [scripts], [media] and [html] sections.

    ``source`` is relative to the input directory, ``dest`` to the output
    directory, and ``patterns`` are globs relative to ``source``.
    """

    model_config = {"frozen": True}

    source: str = ""
    patterns: list[str] = Field(default_factory=list)
    dest: str = ""


class StylesConfig(AssetGroupConfig):
    """[styles] section."""

    source: str = "scss"
    patterns: list[str] = Field(default_factory=lambda: ["**/*.scss", "**/*.sass"])
    dest: str = "css"
    include_paths: list[str] = Field(default_factory=lambda: ["node_modules"])
    output_style: Literal["nested", "expanded", "compact", "compressed"] = "expanded"
    prefix: bool = True


class ScriptsConfig(AssetGroupConfig):
    """[scripts] section."""

    source: str = "js"
    patterns: list[str] = Field(default_factory=lambda: ["*"])
    dest: str = "js"


class MediaConfig(AssetGroupConfig):
    """[media] section."""

    patterns: list[str] = Field(default_factory=lambda: ["img/*", "mp4/*"])


class HtmlConfig(AssetGroupConfig):
    """[html] section."""

    patterns: list[str] = Field(default_factory=lambda: ["**/*.html"])


class VendorEntry(BaseModel):
    """One [[vendor]] table: a third-party directory copied into the output."""

    model_config = {"frozen": True}

    name: str
    source: str
    patterns: list[str] = Field(default_factory=lambda: ["**/*"])
    exclude: list[str] = Field(default_factory=list)
    dest: str


def default_vendor_entries() -> list[VendorEntry]:
    return [
        VendorEntry(
            name="bootstrap",
            source="node_modules/bootstrap/dist",
            dest="vendor/bootstrap",
        ),
        VendorEntry(
            name="fontawesome-css",
            source="node_modules/@fortawesome/fontawesome-free/css",
            dest="vendor/fontawesome-free/css",
        ),
        VendorEntry(
            name="fontawesome-webfonts",
            source="node_modules/@fortawesome/fontawesome-free/webfonts",
            dest="vendor/fontawesome-free/webfonts",
        ),
        VendorEntry(
            name="jquery",
            source="node_modules/jquery/dist",
            patterns=["*"],
            exclude=["core.js"],
            dest="vendor/jquery",
        ),
    ]


class PackageConfig(BaseModel):
    """[package] section — metadata interpolated into the banner."""

    model_config = {"frozen": True}

    name: str = ""
    title: str = ""
    version: str = "0.0.0"
    author: str = ""
    license: str = ""
    homepage: str = ""

    @property
    def display_title(self) -> str:
        return self.title or self.name


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = 3000


class WatchConfig(BaseModel):
    """[watch] section."""

    model_config = {"frozen": True}

    debounce_ms: int = 200


class PluginsConfig(BaseModel):
    """[plugins] section. ``disabled`` lists plugin names never to register."""

    model_config = {"frozen": True}

    enabled: bool = True
    disabled: list[str] = Field(default_factory=list)
