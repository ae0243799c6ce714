"""Plugin registry for draw-machine hooks.

Three sources, registered in this order by the workspace:

1. built-ins handed over by the CLI (sound cue, live ticker);
2. installed packages exposing a ``namedraw.plugins`` entry point;
3. single-file plugins in ``.namedraw/plugins/*.py``.

Any plugin can be switched off by name with ``[plugins] disabled``
(``"sound"``, ``"ticker"``, an entry-point name, or a local file stem).
A plugin that fails to import or instantiate is logged and skipped.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

import pluggy

from namedraw.plugins.hookspecs import PROJECT_NAME, NamedrawHookSpec

ENTRY_POINT_GROUP = "namedraw.plugins"
LOCAL_MODULE_PREFIX = "namedraw_local_plugin_"

logger = logging.getLogger(__name__)


def plugin_name(plugin: object) -> str:
    """A plugin's registry name: its ``plugin_name`` attribute or class name."""
    return getattr(plugin, "plugin_name", None) or type(plugin).__name__


def has_hook_impls(cls: type) -> bool:
    """Whether *cls* defines at least one ``@hookimpl`` method."""
    marker = f"{PROJECT_NAME}_impl"
    return any(
        getattr(getattr(cls, attr, None), marker, None) is not None
        for attr in dir(cls)
        if not attr.startswith("_")
    )


class PluginManager:
    """Hook relay for the draw machine plus the three loading paths."""

    def __init__(self, *, disabled: Iterable[str] = ()) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(NamedrawHookSpec)
        for name in disabled:
            self._pm.set_blocked(name)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def names(self) -> list[str]:
        """Registered plugin names, in registration order."""
        return [self._pm.get_name(p) or plugin_name(p) for p in self._pm.get_plugins()]

    def is_disabled(self, name: str) -> bool:
        return self._pm.is_blocked(name)

    def add(self, plugin: object, name: str | None = None) -> bool:
        """Register a plugin instance. Returns False when its name is disabled."""
        resolved = name or plugin_name(plugin)
        if self._pm.register(plugin, name=resolved) is None:
            logger.debug("Plugin disabled: %s", resolved)
            return False
        logger.debug("Registered plugin: %s", resolved)
        return True

    def load_installed(self) -> None:
        """Register entry-point plugins, instantiating plugin classes."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not has_hook_impls(plugin):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                self._pm.register(plugin(), name=name)
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)

    def load_local(self, plugin_dir: Path) -> None:
        """Import ``*.py`` files in *plugin_dir* and register their hook classes.

        Files starting with ``_`` and files whose stem is disabled are
        not imported. Each class is registered as ``<stem>.<ClassName>``.
        """
        if not plugin_dir.is_dir():
            return
        for path in sorted(plugin_dir.glob("*.py")):
            if path.name.startswith("_") or self.is_disabled(path.stem):
                continue
            module = self._import_file(path)
            if module is None:
                continue
            for cls_name, cls in inspect.getmembers(module, inspect.isclass):
                if cls.__module__ != module.__name__ or not has_hook_impls(cls):
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
                self.add(instance, name=f"{path.stem}.{cls_name}")

    @staticmethod
    def _import_file(path: Path) -> ModuleType | None:
        module_name = LOCAL_MODULE_PREFIX + path.stem
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            logger.warning("Could not create module spec for %s", path)
            return None
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            logger.warning("Failed to load local plugin %s", path, exc_info=True)
            sys.modules.pop(module_name, None)
            return None
        return module
