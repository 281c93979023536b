"""pluginfo - metadata records for dynamically loadable plugin packages.

A plugin record carries a package's identity, version, archive location and
install state, together with a scheduled update or removal. Records rebuild
from and serialize to a compact JSON document without losing keys they do
not interpret.

Key modules:

- :mod:`pluginfo.model` - PluginRecord, plugin kinds and pending-slot traversal
- :mod:`pluginfo.config` - YAML configuration (metadata namespace, limits)
- :mod:`pluginfo.errors` - Errors raised by the strict parsers
- :mod:`pluginfo.cli` - ``pluginfo`` command line for inspecting stored records
"""

from pluginfo.model import PluginRecord, PluginType, make_name

__version__ = "0.1.0"

__all__ = ["PluginRecord", "PluginType", "__version__", "make_name"]
