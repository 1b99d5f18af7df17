"""
Location of c8ctl's persisted state.

Resolution order for the data directory:
1. C8CTL_DATA_DIR environment variable
2. Platform default:
   - Windows: %APPDATA%\\c8ctl
   - macOS:   ~/Library/Application Support/c8ctl
   - other:   $XDG_DATA_HOME/c8ctl (default ~/.local/share/c8ctl)
"""

import os
import sys
from pathlib import Path

from c8ctl.config.settings import get_c8ctl_settings

APP_DIR_NAME = "c8ctl"
PROFILES_FILE_NAME = "profiles.json"
SESSION_FILE_NAME = "session.json"
PLUGIN_REGISTRY_FILE_NAME = "plugins.json"


def get_user_data_dir() -> Path:
    """Return the data directory without creating it."""
    override = get_c8ctl_settings().data_dir
    if override:
        return Path(override).expanduser()

    home = Path.home()
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA") or home / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = home / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_DATA_HOME") or home / ".local" / "share")
    return base / APP_DIR_NAME


def ensure_user_data_dir() -> Path:
    data_dir = get_user_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_profiles_path() -> Path:
    return get_user_data_dir() / PROFILES_FILE_NAME


def get_session_path() -> Path:
    return get_user_data_dir() / SESSION_FILE_NAME


def get_plugin_registry_path() -> Path:
    return get_user_data_dir() / PLUGIN_REGISTRY_FILE_NAME
