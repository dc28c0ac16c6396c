"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ASSETCTL_*`` prefix
  3. TOML file    — ``assetctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`assetctl.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from assetctl.config.discovery import find_config
from assetctl.config.models import (
    HtmlConfig,
    MediaConfig,
    PackageConfig,
    PathsConfig,
    PluginsConfig,
    ScriptsConfig,
    ServerConfig,
    StylesConfig,
    VendorEntry,
    WatchConfig,
    default_vendor_entries,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``assetctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class AssetSettings(BaseSettings):
    """Unified settings for the entire assetctl CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored on the
    :class:`~assetctl.commands._context.AppContext` at the CLI root level.

    Attributes:
        project_root: Resolved project directory (parent of ``assetctl.toml``,
            or CWD if no config found).
        config_path: The TOML file actually loaded, or None.
        package: Banner metadata. None means "read ``package.json``".
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ASSETCTL_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (not in TOML — derived from config location) ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    paths: PathsConfig = Field(default_factory=PathsConfig)
    styles: StylesConfig = Field(default_factory=StylesConfig)
    scripts: ScriptsConfig = Field(default_factory=ScriptsConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)
    html: HtmlConfig = Field(default_factory=HtmlConfig)
    vendor: list[VendorEntry] = Field(default_factory=default_vendor_entries)
    package: PackageConfig | None = None
    server: ServerConfig = Field(default_factory=ServerConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @property
    def input_dir(self) -> Path:
        return self.project_root / self.paths.input

    @property
    def output_dir(self) -> Path:
        return self.project_root / self.paths.output

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> AssetSettings:
        """Construct settings from CLI invocation.

        Discovers ``assetctl.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                import click

                msg = f"Config file not found: {p}"
                raise click.ClickException(msg)
            toml_path = p.resolve()
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        except ValidationError as exc:
            import click

            source = toml_path or "environment"
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            msg = f"Invalid configuration ({source}): {problems}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None
