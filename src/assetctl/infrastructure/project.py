"""Project — the single dependency injected into every service.

Owns the resolved input/output directories, banner rendering, and the
plugin event bus. Package metadata and the template environment are
loaded lazily so ``clean`` never touches ``package.json``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import TemplateError, TemplateSyntaxError

from assetctl.config.package import resolve_package
from assetctl.domain.banner import SOURCE_DATE_EPOCH, banner_context, copyright_year
from assetctl.infrastructure.templates import BANNER_TEMPLATE, build_template_environment

if TYPE_CHECKING:
    from jinja2 import Environment

    from assetctl.config.models import AssetGroupConfig, PackageConfig
    from assetctl.config.settings import AssetSettings
    from assetctl.plugins.event_bus import EventBus
    from assetctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetGroup:
    """An asset group resolved against the project's directories."""

    name: str
    source: Path
    patterns: tuple[str, ...]
    dest: Path


class Project:
    """Resolved build context for one project root."""

    def __init__(self, settings: AssetSettings) -> None:
        self._settings = settings
        self._package: PackageConfig | None = None
        self._templates: Environment | None = None
        self._event_bus: EventBus | None = None

    @property
    def settings(self) -> AssetSettings:
        return self._settings

    @property
    def root(self) -> Path:
        """Project root directory."""
        return self._settings.project_root

    @property
    def input_dir(self) -> Path:
        return self._settings.input_dir

    @property
    def output_dir(self) -> Path:
        return self._settings.output_dir

    @property
    def package(self) -> PackageConfig:
        """Banner metadata (loaded on first access).

        Raises:
            ValueError: If ``package.json`` exists but cannot be parsed.
        """
        if self._package is None:
            self._package = resolve_package(self._settings)
        return self._package

    @property
    def event_bus(self) -> EventBus | None:
        """The plugin event bus (None if not initialized)."""
        return self._event_bus

    @property
    def plugin_manager(self) -> PluginManager | None:
        return self._event_bus.plugin_manager if self._event_bus is not None else None

    def group(self, name: str) -> AssetGroup:
        """Resolve one of ``styles``, ``scripts``, ``media``, ``html``."""
        config: AssetGroupConfig = getattr(self._settings, name)
        return AssetGroup(
            name=name,
            source=self.input_dir / config.source,
            patterns=tuple(config.patterns),
            dest=self.output_dir / config.dest,
        )

    def render_banner(self) -> str:
        """Render the license banner for the current package metadata.

        Raises:
            ValueError: If ``SOURCE_DATE_EPOCH`` is set but not an integer,
                package metadata cannot be read, or the banner template
                fails to load or render.
        """
        if self._templates is None:
            self._templates = build_template_environment("banner", project_root=self.root)
        year = copyright_year(os.environ.get(SOURCE_DATE_EPOCH))
        context = banner_context(self.package, year)
        try:
            return self._templates.get_template(BANNER_TEMPLATE).render(**context)
        except TemplateError as exc:
            where = f" (line {exc.lineno})" if isinstance(exc, TemplateSyntaxError) else ""
            msg = f"Banner template error{where}: {exc.message or exc}"
            raise ValueError(msg) from exc

    def init_event_bus(self, *, sync: bool = True, plugins: list[tuple[Any, str]] | None = None) -> None:
        """Initialize the plugin event bus.

        Discovers entry-point and local plugins unless ``[plugins] enabled =
        false``, then registers *plugins* given as ``(instance, name)`` pairs.
        Names listed in ``[plugins] disabled`` are never registered.
        """
        from assetctl.plugins.event_bus import EventBus
        from assetctl.plugins.manager import PluginManager

        config = self._settings.plugins
        pm = PluginManager(blocked=config.disabled)
        if config.enabled:
            pm.discover_and_load(local_dir=self.root / ".assetctl" / "plugins")
        for plugin, name in plugins or []:
            pm.register_plugin(plugin, name=name)

        self._event_bus = EventBus(pm, sync=sync)

    def close(self) -> None:
        """Shut down the event bus, waiting for in-flight hooks."""
        if self._event_bus is not None:
            self._event_bus.shutdown()
            self._event_bus = None
