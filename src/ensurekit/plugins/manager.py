"""Plugin discovery and kind collection.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
Plugins may also be registered directly with :meth:`PluginManager.register_plugin`.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from ensurekit.config.settings import EnsureSettings
from ensurekit.domain.kinds import BUILTIN_KIND_NAMES, KindSpec
from ensurekit.engine import ValidatorSet, build
from ensurekit.plugins.hookspecs import EnsureHookSpec

if TYPE_CHECKING:
    from ensurekit.errors import ErrorPolicy

PROJECT_NAME = "ensurekit"
ENTRY_POINT_GROUP = "ensurekit.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, registration, and kind collection."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(EnsureHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load plugins from the ``ensurekit.plugins`` entry-point group.

        Returns a list of registered plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [name for name, _plugin in self._pm.list_name_plugin()]

    def collect_kinds(self) -> list[KindSpec]:
        """Return the kinds contributed by every registered plugin.

        Plugins are asked in registration order. A plugin whose hook
        raises or returns something other than a list of
        :class:`KindSpec` is skipped with a warning, and so is any kind
        whose name is built in or already contributed.
        """
        kinds: list[KindSpec] = []
        seen = set(BUILTIN_KIND_NAMES)
        for plugin_name, plugin in self._pm.list_name_plugin():
            if plugin is None:
                continue
            for spec in self._plugin_kinds(plugin, plugin_name):
                if spec.name in seen:
                    logger.warning(
                        "Skipping kind %r from plugin %s: name already registered",
                        spec.name,
                        plugin_name,
                    )
                    continue
                seen.add(spec.name)
                kinds.append(spec)
        return kinds

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _plugin_kinds(plugin: object, plugin_name: str) -> list[KindSpec]:
        hook = getattr(plugin, "register_kinds", None)
        if hook is None:
            return []

        try:
            specs = hook()
        except Exception:
            logger.warning(
                "Failed to collect kinds from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return []

        if specs is None:
            return []
        if not isinstance(specs, (list, tuple)):
            logger.warning("Plugin %s returned non-list kind registrations", plugin_name)
            return []

        valid: list[KindSpec] = []
        for spec in specs:
            if not isinstance(spec, KindSpec):
                logger.warning(
                    "Skipping non-KindSpec registration %r from plugin %s",
                    spec,
                    plugin_name,
                )
                continue
            valid.append(spec)
        return valid

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
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


def build_with_plugins(
    error_policy: ErrorPolicy | None = None,
    *,
    manager: PluginManager | None = None,
    settings: EnsureSettings | None = None,
) -> ValidatorSet:
    """Build a validator set including plugin-contributed kinds.

    Without a *manager*, a fresh one is created and, unless
    ``settings.load_entry_points`` is False, entry-point plugins are loaded.
    """
    if settings is None:
        settings = EnsureSettings()
    if manager is None:
        manager = PluginManager()
        if settings.load_entry_points:
            manager.discover_and_load()
    return build(error_policy, kinds=manager.collect_kinds(), settings=settings)
