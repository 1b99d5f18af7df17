"""Plugin registry.

Tracks plugins installed through c8ctl in plugins.json under the user data
directory. The registry is the source of truth for `sync plugins` and is
kept independent of the installer's own metadata.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from c8ctl.config.paths import ensure_user_data_dir, get_plugin_registry_path
from c8ctl.logging import get_logger

logger = get_logger(__name__)

_registry_cache: Optional[list["PluginEntry"]] = None


@dataclass
class PluginEntry:
    """A plugin installed through the CLI."""

    name: str
    source: str
    installed_at: str  # ISO format

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {
            "name": self.name,
            "source": self.source,
            "installedAt": self.installed_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PluginEntry":
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            source=data.get("source") or data["name"],
            installed_at=data.get("installedAt", ""),
        )


def load_plugin_registry() -> list[PluginEntry]:
    """Load the registry, caching it for the rest of the process.

    A corrupted file is reported and treated as an empty registry.
    """
    global _registry_cache
    if _registry_cache is not None:
        return _registry_cache

    path = get_plugin_registry_path()
    if not path.exists():
        _registry_cache = []
        return _registry_cache

    try:
        with open(path) as f:
            data = json.load(f)
        _registry_cache = [PluginEntry.from_dict(p) for p in data.get("plugins", [])]
    except (OSError, json.JSONDecodeError, TypeError, KeyError, AttributeError) as e:
        logger.warning(f"Plugin registry at {path} is corrupted, starting fresh: {e}")
        _registry_cache = []

    return _registry_cache


def save_plugin_registry(entries: list[PluginEntry]) -> None:
    global _registry_cache
    ensure_user_data_dir()
    path = get_plugin_registry_path()
    with open(path, "w") as f:
        json.dump({"plugins": [e.to_dict() for e in entries]}, f, indent=2)
    _registry_cache = list(entries)


def add_plugin_to_registry(name: str, source: Optional[str] = None) -> PluginEntry:
    """Record a plugin, replacing any entry with the same name."""
    entry = PluginEntry(
        name=name,
        source=source or name,
        installed_at=datetime.now(timezone.utc).isoformat(),
    )
    entries = [e for e in load_plugin_registry() if e.name != name]
    entries.append(entry)
    save_plugin_registry(entries)
    return entry


def remove_plugin_from_registry(name: str) -> bool:
    entries = load_plugin_registry()
    remaining = [e for e in entries if e.name != name]
    if len(remaining) == len(entries):
        return False
    save_plugin_registry(remaining)
    return True


def get_registered_plugins() -> list[PluginEntry]:
    return list(load_plugin_registry())


def get_plugin_entry(name: str) -> Optional[PluginEntry]:
    for entry in load_plugin_registry():
        if entry.name == name:
            return entry
    return None


def is_plugin_registered(name: str) -> bool:
    return get_plugin_entry(name) is not None


def clear_registry_cache() -> None:
    global _registry_cache
    _registry_cache = None
