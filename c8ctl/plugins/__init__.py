"""
Plugin system for c8ctl.

Plugins extend the CLI with top-level commands discovered at startup from
the c8ctl_plugins dependency directory.
"""

from c8ctl.plugins.loader import (
    LoadedPlugin,
    clear_loaded_plugins,
    execute_plugin_command,
    get_loaded_plugins,
    get_plugin_command_names,
    get_plugin_commands,
    is_plugin_command,
    load_installed_plugins,
)
from c8ctl.plugins.registry import (
    PluginEntry,
    add_plugin_to_registry,
    clear_registry_cache,
    get_registered_plugins,
    is_plugin_registered,
    load_plugin_registry,
    remove_plugin_from_registry,
)

__all__ = [
    # Loader
    "LoadedPlugin",
    "load_installed_plugins",
    "get_loaded_plugins",
    "get_plugin_commands",
    "get_plugin_command_names",
    "is_plugin_command",
    "execute_plugin_command",
    "clear_loaded_plugins",
    # Registry
    "PluginEntry",
    "load_plugin_registry",
    "add_plugin_to_registry",
    "remove_plugin_from_registry",
    "get_registered_plugins",
    "is_plugin_registered",
    "clear_registry_cache",
]
