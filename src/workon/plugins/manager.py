"""Plugin discovery, loading and hook dispatch.

Plugins are discovered from the ``workon.plugins`` entry-point group via
pluggy's setuptools support, or registered directly.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

import pluggy

from workon.plugins.hookspecs import WorkonHookSpec

PROJECT_NAME = "workon"
ENTRY_POINT_GROUP = "workon.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(WorkonHookSpec)

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return the names of all registered plugins."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> None:
        """Call every implementation of *hook_name* with *payload*.

        Exceptions raised by plugins propagate; callers decide whether they
        are fatal.
        """
        getattr(self._pm.hook, hook_name)(**payload)

    def _normalize_plugin_instances(self) -> None:
        """Replace plugin classes registered from entry points with instances.

        An entry point may name a class; dispatching against the class
        object would leave ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
