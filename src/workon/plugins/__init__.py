"""Extension layer: plugin system via pluggy.

INVARIANT: Plugin failures are warnings, never errors.
"""

import pluggy

from workon.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("workon")

__all__ = ["PluginManager", "hookimpl"]
