"""
Version management for c8ctl.

The installed distribution metadata is the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

# Reported when running from a source tree that was never installed
FALLBACK_VERSION = "0.0.0"


def get_version() -> str:
    """
    Get the current version of the c8ctl package.

    Returns:
        str: Current version string
    """
    try:
        return version("c8ctl")
    except PackageNotFoundError:
        return FALLBACK_VERSION


__version__ = get_version()
