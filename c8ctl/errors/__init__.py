"""
Error handling framework for c8ctl.
"""

from c8ctl.errors.exceptions import (
    C8ctlError,
    ConfigurationError,
    InvalidProfileError,
    PluginError,
    PluginInstallError,
    PluginLoadError,
    ProfileNotFoundError,
    ValidationError,
    VariablesParseError,
)

__all__ = [
    # Base exception
    "C8ctlError",
    # Configuration
    "ConfigurationError",
    "ProfileNotFoundError",
    "InvalidProfileError",
    # Validation
    "ValidationError",
    "VariablesParseError",
    # Plugins
    "PluginError",
    "PluginLoadError",
    "PluginInstallError",
]
