"""
Exception hierarchy for c8ctl.

Errors raised by the configuration layer, the plugin system and user input
validation. Network failures from the orchestration client live in
c8ctl.client.errors and are kept separate from this hierarchy.
"""

from typing import Any, Optional


class C8ctlError(Exception):
    """
    Base exception class for all c8ctl errors.

    Command handlers catch this class, print the message (and suggestion,
    when present) and exit with status 1.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for reference and documentation
        details: Optional dictionary with additional error details
        suggestion: Optional suggestion text for how to fix the error
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestion = suggestion
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for JSON output."""
        result: dict[str, Any] = {"message": self.message}
        if self.error_code:
            result["error_code"] = self.error_code
        if self.details:
            result["details"] = self.details
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


# --- Configuration Errors ---


class ConfigurationError(C8ctlError):
    """
    Base class for errors in persisted or environment configuration.

    The fix typically requires **editing a profile or the session**, not
    changing the command line.

    Examples:
        >>> raise ProfileNotFoundError(
        ...     message="Profile 'prod' not found",
        ...     error_code="CONFIG-ProfileNotFound",
        ...     details={"profile": "prod"},
        ...     suggestion="Run 'c8ctl list profiles' to see available profiles",
        ... )
    """

    pass


class ProfileNotFoundError(ConfigurationError):
    """Raised when an explicit or session-active profile name does not exist."""

    def __init__(self, name: str, source: str = "explicit") -> None:
        super().__init__(
            message=f"Profile '{name}' not found",
            error_code="CONFIG-ProfileNotFound",
            details={"profile": name, "source": source},
            suggestion=(
                "Run 'c8ctl list profiles' to see available profiles, "
                "or 'c8ctl add profile' to create it"
            ),
        )
        self.name = name
        self.source = source


class InvalidProfileError(ConfigurationError):
    """Raised when a profile is missing required fields or mixes auth strategies."""

    pass


# --- Validation Errors ---


class ValidationError(C8ctlError):
    """
    Raised when user input on the command line is invalid.

    Use for argument validation, NOT for configuration file issues.
    """

    pass


class VariablesParseError(ValidationError):
    """Raised when a --variables payload is not a valid JSON object."""

    pass


# --- Plugin Errors ---


class PluginError(C8ctlError):
    """Base class for plugin discovery and management errors."""

    pass


class PluginLoadError(PluginError):
    """Raised while importing a single plugin candidate.

    The loader catches this per candidate and logs it at debug level. It
    never reaches a command handler.
    """

    pass


class PluginInstallError(PluginError):
    """Raised when installing or removing a plugin package fails."""

    pass
