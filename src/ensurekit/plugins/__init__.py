"""Extension layer — plugin-contributed kinds via pluggy.

Discovery: entry_points (pip-installed) in the ``ensurekit.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from ensurekit.plugins.hookspecs import hookimpl
from ensurekit.plugins.manager import PluginManager, build_with_plugins

__all__ = ["PluginManager", "build_with_plugins", "hookimpl"]
