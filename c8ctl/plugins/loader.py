"""Dynamic plugin discovery and command dispatch.

Plugins are ordinary packages installed into the dependency directory
``<cwd>/c8ctl_plugins`` (what ``pip install --target`` produces). A package
becomes a plugin by shipping an entry file:

    c8ctl_plugins/
        my_plugin/
            c8ctl_plugin.py          # module form (preferred)
            c8ctl_plugin/__init__.py # package form

The entry module must export ``commands``: a mapping of command name to a
callable taking the remaining positional arguments. Handlers may be plain
functions or coroutine functions. An optional ``metadata`` dict describes
the plugin and its commands.

Discovery runs once per process, before dispatch. A plugin that fails to
load is logged at debug level and skipped; it never aborts startup.
"""

import importlib.util
import inspect
import itertools
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Optional, Sequence

from c8ctl.errors import PluginLoadError
from c8ctl.logging import get_logger

logger = get_logger(__name__)

PLUGIN_DIR_NAME = "c8ctl_plugins"
PLUGIN_MODULE_ENTRY = "c8ctl_plugin.py"
PLUGIN_PACKAGE_ENTRY = Path("c8ctl_plugin") / "__init__.py"

# Entries starting with these are never scanned: "@" is the reserved
# namespace marker, "." covers hidden entries and installer metadata.
SKIPPED_PREFIXES = ("@", ".")

CommandHandler = Callable[[list[str]], Any]


@dataclass
class LoadedPlugin:
    """A plugin whose entry module loaded and exported a valid command table."""

    name: str
    commands: dict[str, CommandHandler]
    metadata: dict[str, Any] = field(default_factory=dict)
    entry_path: Optional[Path] = None
    module_name: Optional[str] = None

    @property
    def description(self) -> str:
        return str(self.metadata.get("description", ""))

    def command_description(self, command: str) -> str:
        described = self.metadata.get("commands")
        if isinstance(described, Mapping):
            info = described.get(command)
            if isinstance(info, Mapping):
                return str(info.get("description", ""))
        return ""


# Process-wide registry keyed by package name
_loaded_plugins: dict[str, LoadedPlugin] = {}
_import_counter = itertools.count(1)


def get_plugin_dir(base_dir: Optional[Path] = None) -> Path:
    """Return the dependency directory scanned for plugins."""
    return Path(base_dir or Path.cwd()) / PLUGIN_DIR_NAME


def find_entry_file(package_dir: Path) -> Optional[Path]:
    """Return the plugin entry file of a package, preferring the module form."""
    module_entry = package_dir / PLUGIN_MODULE_ENTRY
    if module_entry.is_file():
        return module_entry
    package_entry = package_dir / PLUGIN_PACKAGE_ENTRY
    if package_entry.is_file():
        return package_entry
    return None


def _unique_module_name(package_name: str) -> str:
    safe_name = re.sub(r"\W", "_", package_name)
    return f"c8ctl_plugin_{safe_name}_{next(_import_counter)}"


def _import_entry(package_name: str, entry_file: Path) -> ModuleType:
    """Execute an entry file as a fresh module.

    Each call uses a new module name, so a plugin is re-executed rather than
    served from the import cache.

    Raises:
        PluginLoadError: If the file cannot be imported
    """
    module_name = _unique_module_name(package_name)
    if entry_file.name == "__init__.py":
        spec = importlib.util.spec_from_file_location(
            module_name,
            entry_file,
            submodule_search_locations=[str(entry_file.parent)],
        )
    else:
        spec = importlib.util.spec_from_file_location(module_name, entry_file)

    if spec is None or spec.loader is None:
        raise PluginLoadError(
            message=f"Cannot create import spec for {entry_file}",
            error_code="PLUGIN-NoSpec",
            details={"plugin": package_name, "path": str(entry_file)},
        )

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except (Exception, SystemExit) as e:
        sys.modules.pop(module_name, None)
        raise PluginLoadError(
            message=f"Failed to import plugin '{package_name}': {e}",
            error_code="PLUGIN-ImportFailed",
            details={"plugin": package_name, "path": str(entry_file)},
        ) from e
    return module


def _extract_commands(module: ModuleType) -> Optional[dict[str, CommandHandler]]:
    """Return the module's command table, or None if it has the wrong shape."""
    commands = getattr(module, "commands", None)
    if not isinstance(commands, Mapping):
        return None
    for name, handler in commands.items():
        if not isinstance(name, str) or not callable(handler):
            return None
    return dict(commands)


def _release_module(plugin: LoadedPlugin) -> None:
    if plugin.module_name:
        sys.modules.pop(plugin.module_name, None)


def load_plugin(package_name: str, entry_file: Path) -> Optional[LoadedPlugin]:
    """Load one plugin candidate.

    Returns:
        The loaded plugin, or None if the module does not export a valid
        ``commands`` mapping

    Raises:
        PluginLoadError: If the entry file fails to import
    """
    module = _import_entry(package_name, entry_file)
    commands = _extract_commands(module)
    if commands is None:
        sys.modules.pop(module.__name__, None)
        return None

    metadata = getattr(module, "metadata", None)
    return LoadedPlugin(
        name=package_name,
        commands=commands,
        metadata=dict(metadata) if isinstance(metadata, Mapping) else {},
        entry_path=entry_file,
        module_name=module.__name__,
    )


def _ensure_importable(plugin_dir: Path) -> None:
    """Let plugins import their own package and co-installed dependencies."""
    path = str(plugin_dir.resolve())
    if path not in sys.path:
        sys.path.append(path)


def load_installed_plugins(base_dir: Optional[Path] = None) -> list[LoadedPlugin]:
    """Scan the dependency directory and register every valid plugin.

    Scanning is idempotent: running it again over an unchanged directory
    leaves the registry with the same plugins and commands.

    Args:
        base_dir: Directory containing c8ctl_plugins; defaults to the cwd

    Returns:
        Plugins loaded by this scan, in scan order
    """
    plugin_dir = get_plugin_dir(base_dir)
    if not plugin_dir.is_dir():
        logger.debug(f"No plugin directory at {plugin_dir}")
        return []

    try:
        entries = sorted(plugin_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.debug(f"Cannot list plugin directory {plugin_dir}: {e}")
        return []

    _ensure_importable(plugin_dir)

    loaded: list[LoadedPlugin] = []
    for entry in entries:
        if entry.name.startswith(SKIPPED_PREFIXES) or not entry.is_dir():
            continue

        entry_file = find_entry_file(entry)
        if entry_file is None:
            continue

        try:
            plugin = load_plugin(entry.name, entry_file)
        except PluginLoadError as e:
            logger.debug(f"Failed to load plugin {entry.name}: {e.__cause__ or e}")
            continue

        if plugin is None:
            logger.debug(f"Ignoring {entry.name}: no valid 'commands' export")
            continue

        previous = _loaded_plugins.get(plugin.name)
        if previous is not None:
            _release_module(previous)
        _loaded_plugins[plugin.name] = plugin
        loaded.append(plugin)
        logger.debug(
            f"Loaded plugin {plugin.name} with commands: {', '.join(plugin.commands)}"
        )

    return loaded


def get_loaded_plugins() -> list[LoadedPlugin]:
    return list(_loaded_plugins.values())


def get_plugin_commands() -> dict[str, CommandHandler]:
    """Merge command tables of all loaded plugins.

    When two plugins export the same name, the one loaded later wins.
    """
    merged: dict[str, CommandHandler] = {}
    owners: dict[str, str] = {}
    for plugin in _loaded_plugins.values():
        for name, handler in plugin.commands.items():
            if name in owners:
                logger.debug(
                    f"Plugin command '{name}' from {plugin.name} overrides {owners[name]}"
                )
            merged[name] = handler
            owners[name] = plugin.name
    return merged


def is_plugin_command(name: str) -> bool:
    return name in get_plugin_commands()


def get_plugin_command_names() -> list[str]:
    return list(get_plugin_commands())


async def execute_plugin_command(name: str, args: Sequence[str]) -> bool:
    """Run a plugin command.

    Args:
        name: Command name
        args: Positional arguments following the command name

    Returns:
        True if a handler was found and ran, False if no plugin exports name
    """
    handler = get_plugin_commands().get(name)
    if handler is None:
        return False

    result = handler(list(args))
    if inspect.isawaitable(result):
        await result
    return True


def clear_loaded_plugins() -> None:
    for plugin in _loaded_plugins.values():
        _release_module(plugin)
    _loaded_plugins.clear()
