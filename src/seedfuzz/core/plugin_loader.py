"""Discover and load mutator/reporter plugins from plugins/ directories.

A plugin is any non-private ``.py`` file exposing ``register(registry)``.
Files are loaded in sorted path order so the mutators they register keep
a stable position in the campaign.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

from seedfuzz.core.exceptions import PluginLoadError
from seedfuzz.core.registry import ComponentRegistry
from seedfuzz.core.schema import PluginInfo

log = logging.getLogger(__name__)


def _find_plugin_modules(plugin_dir: Path) -> list[Path]:
    if not plugin_dir.is_dir():
        return []
    return sorted(p for p in plugin_dir.rglob("*.py") if not p.name.startswith("_"))


def _module_name(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:8]
    return f"seedfuzz_plugin_{path.stem}_{digest}"


def _plugin_info(path: Path, plugin_dir: Path | None = None) -> PluginInfo:
    plugin_type = "root" if plugin_dir is not None and path.parent == plugin_dir else path.parent.name
    return PluginInfo(name=path.stem, path=path, module_name=_module_name(path), plugin_type=plugin_type)


class PluginLoader:
    """Discovers and loads plugins into a ComponentRegistry."""

    def __init__(self, plugin_dirs: list[Path], registry: ComponentRegistry) -> None:
        self._plugin_dirs = [Path(d).resolve() for d in plugin_dirs]
        self._registry = registry
        self._loaded: list[PluginInfo] = []
        self.load_errors: list[tuple[Path, PluginLoadError]] = []

    @property
    def loaded(self) -> list[PluginInfo]:
        return list(self._loaded)

    def discover_plugins(self) -> list[PluginInfo]:
        """List plugin modules in the configured directories without importing them."""
        return [
            _plugin_info(mod_path, plugin_dir)
            for plugin_dir in self._plugin_dirs
            for mod_path in _find_plugin_modules(plugin_dir)
        ]

    def _import(self, path: Path) -> ModuleType:
        module_name = _module_name(path)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise PluginLoadError(f"Could not load spec for: {path}")
        mod = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = mod
        try:
            spec.loader.exec_module(mod)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise PluginLoadError(f"Failed to load plugin {path}: {e}") from e
        return mod

    def load_plugin(self, plugin_path: Path) -> PluginInfo:
        """Import one plugin module and call its ``register(registry)``."""
        path = Path(plugin_path).resolve()
        if not path.exists():
            raise PluginLoadError(f"Plugin path does not exist: {path}")

        mod = self._import(path)
        register = getattr(mod, "register", None)
        if not callable(register):
            raise PluginLoadError(f"Plugin has no register() function: {path}")
        try:
            register(self._registry)
        except Exception as e:
            raise PluginLoadError(f"Plugin register() failed for {path}: {e}") from e

        plugin_dir = next((d for d in self._plugin_dirs if path.parent == d), None)
        info = _plugin_info(path, plugin_dir)
        self._loaded.append(info)
        log.debug("Loaded plugin %s (%s)", info.name, info.plugin_type)
        return info

    def load_all(self) -> list[PluginInfo]:
        """Load every discovered plugin; failures are logged and kept in ``load_errors``."""
        self._loaded = []
        self.load_errors = []
        for info in self.discover_plugins():
            try:
                self.load_plugin(info.path)
            except PluginLoadError as e:
                log.warning("Failed to load plugin %s: %s", info.path, e)
                self.load_errors.append((info.path, e))
        if self.load_errors:
            log.warning(
                "%d plugin(s) failed to load: %s",
                len(self.load_errors),
                ", ".join(str(p) for p, _ in self.load_errors),
            )
        return self.loaded
