"""Plugin discovery and registration.

Two sources, loaded in this order:

1. Installed distributions advertising the ``assetctl.plugins`` entry-point
   group (pluggy's setuptools loader).
2. Single-file plugins in the project's ``.assetctl/plugins/`` directory,
   for build steps that belong to one site only (deploy, notify, ...).

Names in ``blocked`` are never registered, whichever source offers them.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import ModuleType

import pluggy

from assetctl.plugins.hookspecs import PROJECT_NAME, AssetctlHookSpec

ENTRY_POINT_GROUP = f"{PROJECT_NAME}.plugins"
LOCAL_MODULE_PREFIX = f"{PROJECT_NAME}_local_plugin_"

logger = logging.getLogger(__name__)


def _is_plugin_class(obj: object) -> bool:
    """Whether *obj* is a class with at least one ``@hookimpl`` method."""
    if not inspect.isclass(obj):
        return False
    marker = f"{PROJECT_NAME}_impl"
    return any(
        callable(member) and getattr(member, marker, None) is not None
        for name, member in inspect.getmembers(obj)
        if not name.startswith("_")
    )


def _import_file(path: Path, module_name: str) -> ModuleType | None:
    """Import *path* as *module_name*. Logs and returns None on failure."""
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Could not create module spec for %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Failed to load local plugin %s", path, exc_info=True)
        return None
    return module


class PluginManager:
    """pluggy manager preloaded with the assetctl hook specs."""

    def __init__(self, *, blocked: Iterable[str] = ()) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(AssetctlHookSpec)
        for name in blocked:
            self._pm.set_blocked(name)
        self._loaded = False

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def is_loaded(self) -> bool:
        """Whether :meth:`discover_and_load` has run."""
        return self._loaded

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then single-file plugins from *local_dir*.

        Returns the names of every registered plugin.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_entry_point_classes()
        if local_dir is not None and local_dir.is_dir():
            for name, plugin in self._local_plugins(local_dir):
                self.register_plugin(plugin, name=name)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance (built-ins, tests, local files).

        A blocked name is skipped silently apart from a debug log line.
        """
        resolved = name or type(plugin).__name__
        if self._pm.is_blocked(resolved):
            logger.debug("Plugin %s is disabled", resolved)
            return
        self._pm.register(plugin, name=resolved)
        logger.debug("Registered plugin %s", resolved)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Discovery internals
    # ------------------------------------------------------------------

    def _local_plugins(self, local_dir: Path) -> Iterator[tuple[str, object]]:
        """Yield ``(name, instance)`` for each hook class in ``*.py`` files.

        Files starting with ``_`` are helpers and are not imported. A file
        that fails to import, or a class that fails to instantiate, is
        logged and skipped.
        """
        for path in sorted(local_dir.glob("*.py")):
            if path.name.startswith("_"):
                continue
            module_name = f"{LOCAL_MODULE_PREFIX}{path.stem}"
            module = _import_file(path, module_name)
            if module is None:
                continue
            for cls_name, cls in inspect.getmembers(module, _is_plugin_class):
                if cls.__module__ != module_name:
                    continue
                try:
                    instance = cls()
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        cls_name,
                        path,
                        exc_info=True,
                    )
                    continue
                yield f"{module_name}.{cls_name}", instance

    def _instantiate_entry_point_classes(self) -> None:
        """Swap entry points that registered a class for an instance of it.

        Hooks on a bare class would be called without ``self``.
        """
        for plugin in self.get_plugins():
            if not _is_plugin_class(plugin):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__  # type: ignore[attr-defined]
            self._pm.unregister(plugin)
            try:
                instance = plugin()  # type: ignore[operator]
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
