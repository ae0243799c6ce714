"""Extension layer — presentation and notification hooks via pluggy.

Discovery: entry points (``namedraw.plugins`` group) plus single-file
plugins in ``.namedraw/plugins/``.
INVARIANT: Plugin failures are warnings, never errors.
"""

from namedraw.plugins.hookspecs import hookimpl
from namedraw.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
