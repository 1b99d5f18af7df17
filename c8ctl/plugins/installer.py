"""Install and remove plugin packages in the dependency directory.

Packages are installed with ``pip install --target <cwd>/c8ctl_plugins`` so
the loader finds them on the next invocation. Every install or removal made
through the CLI is mirrored in the plugin registry.
"""

import re
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from c8ctl.errors import PluginInstallError, ValidationError
from c8ctl.logging import get_logger
from c8ctl.plugins.loader import find_entry_file, get_plugin_dir
from c8ctl.plugins.registry import (
    PluginEntry,
    add_plugin_to_registry,
    get_registered_plugins,
    remove_plugin_from_registry,
)

logger = get_logger(__name__)


@dataclass
class SyncResult:
    entry: PluginEntry
    installed: bool
    error: Optional[str] = None


def normalize_package_name(name: str) -> str:
    """Normalize a distribution name the way installers name directories."""
    return re.sub(r"[-_.]+", "_", name).lower()


def _run_pip(args: list[str]) -> None:
    cmd = [sys.executable, "-m", "pip", *args]
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        raise PluginInstallError(
            message=f"pip {args[0]} failed",
            error_code="PLUGIN-PipFailed",
            details={"command": cmd, "stderr": (e.stderr or "").strip()[-2000:]},
            suggestion="Check the package name or source and your network access",
        ) from e


def install_plugin_package(source: str, base_dir: Optional[Path] = None) -> Path:
    """Install a package into the dependency directory.

    Returns:
        The dependency directory
    """
    plugin_dir = get_plugin_dir(base_dir)
    plugin_dir.mkdir(parents=True, exist_ok=True)
    _run_pip(["install", "--upgrade", "--target", str(plugin_dir), source])
    return plugin_dir


def find_installed_package(name: str, base_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the installed directory of a plugin package by name."""
    plugin_dir = get_plugin_dir(base_dir)
    if not plugin_dir.is_dir():
        return None
    wanted = {name.lower(), normalize_package_name(name)}
    for entry in plugin_dir.iterdir():
        if entry.is_dir() and entry.name.lower() in wanted:
            return entry
    return None


def uninstall_plugin_package(name: str, base_dir: Optional[Path] = None) -> bool:
    """Remove a package and its installer metadata from the dependency directory.

    ``pip uninstall`` does not support --target, so the directories are
    removed directly.

    Returns:
        True if anything was removed
    """
    plugin_dir = get_plugin_dir(base_dir)
    if not plugin_dir.is_dir():
        return False

    normalized = normalize_package_name(name)
    removed = False
    for entry in plugin_dir.iterdir():
        lowered = entry.name.lower()
        is_package = lowered in {name.lower(), normalized}
        is_metadata = lowered.startswith(f"{normalized}-") and lowered.endswith(
            (".dist-info", ".egg-info")
        )
        if entry.is_dir() and (is_package or is_metadata):
            shutil.rmtree(entry)
            logger.debug(f"Removed {entry}")
            removed = True
    return removed


def plugin_name_from_source(source: str) -> str:
    """Derive a package name from an install source.

    Handles ``#egg=NAME`` fragments, VCS URLs, archives and local paths:

        git+https://github.com/acme/c8ctl-hello.git  -> c8ctl-hello
        file:///tmp/c8ctl_hello-1.0.tar.gz           -> c8ctl_hello
    """
    egg = re.search(r"[#&]egg=([^&]+)", source)
    if egg:
        return egg.group(1)

    path = re.split(r"[?#]", source, maxsplit=1)[0].rstrip("/\\")
    basename = re.split(r"[/\\:]", path)[-1].split("@")[0]
    basename = re.sub(r"(\.git|\.zip|\.tar\.gz|\.tgz|\.whl)$", "", basename)
    return re.sub(r"-\d.*$", "", basename)


def _plugin_packages(plugin_dir: Path) -> set[str]:
    if not plugin_dir.is_dir():
        return set()
    return {
        entry.name
        for entry in plugin_dir.iterdir()
        if entry.is_dir() and find_entry_file(entry) is not None
    }


def load_plugin_package(
    name: Optional[str] = None,
    source: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> PluginEntry:
    """Install a plugin and record it in the registry.

    Exactly one of ``name`` (install from the package index) or ``source``
    (URL, VCS reference or local path) must be given. For a source install the
    registry name is the single new plugin package pip produced, falling back
    to the name derived from the source.

    Raises:
        ValidationError: If both or neither of name and source are given
        PluginInstallError: If installation fails
    """
    if name and source:
        raise ValidationError(
            message="Cannot specify both a package name and --from",
            error_code="PLUGIN-AmbiguousSource",
            details={"name": name, "source": source},
            suggestion="Use either 'c8ctl load plugin NAME' or "
            "'c8ctl load plugin --from URL'",
        )
    if not name and not source:
        raise ValidationError(
            message="A package name or --from source is required",
            error_code="PLUGIN-MissingSource",
            suggestion="Use either 'c8ctl load plugin NAME' or "
            "'c8ctl load plugin --from URL'",
        )

    if source:
        before = _plugin_packages(get_plugin_dir(base_dir))
        install_plugin_package(source, base_dir)
        added = _plugin_packages(get_plugin_dir(base_dir)) - before
        name = added.pop() if len(added) == 1 else plugin_name_from_source(source)
        logger.debug(f"Registering plugin from {source} as '{name}'")
    else:
        install_plugin_package(name, base_dir)

    package_dir = find_installed_package(name, base_dir)
    if package_dir is not None and find_entry_file(package_dir) is None:
        logger.warning(
            f"Package '{name}' was installed but ships no c8ctl_plugin entry file"
        )

    return add_plugin_to_registry(name, source or name)


def unload_plugin_package(name: str, base_dir: Optional[Path] = None) -> bool:
    """Remove a plugin package and its registry entry.

    Returns:
        True if the plugin was installed or registered
    """
    removed = uninstall_plugin_package(name, base_dir)
    unregistered = remove_plugin_from_registry(name)
    return removed or unregistered


def sync_registered_plugins(
    force: bool = False, base_dir: Optional[Path] = None
) -> list[SyncResult]:
    """Install registered plugins that are missing from the dependency directory.

    Args:
        force: Reinstall every registered plugin, even if present
        base_dir: Directory containing c8ctl_plugins; defaults to the cwd
    """
    results: list[SyncResult] = []
    for entry in get_registered_plugins():
        if not force and find_installed_package(entry.name, base_dir) is not None:
            results.append(SyncResult(entry=entry, installed=False))
            continue
        try:
            install_plugin_package(entry.source, base_dir)
        except PluginInstallError as e:
            logger.debug(f"Sync failed for {entry.name}: {e.details.get('stderr')}")
            results.append(SyncResult(entry=entry, installed=False, error=e.message))
            continue
        results.append(SyncResult(entry=entry, installed=True))
    return results
