"""Exception hierarchy for orchestration client errors.

All network-facing failures derive from ClusterClientError so command
handlers can report them with a single except clause.
"""

from typing import Any, Optional


class ClusterClientError(Exception):
    """Base exception for orchestration client errors.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code if applicable, None otherwise.
        details: Additional error context as a dictionary.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    @property
    def suggestion(self) -> Optional[str]:
        """Remediation hint carried in details, if any."""
        value = self.details.get("suggestion")
        return str(value) if value else None


class ConnectionError(ClusterClientError):
    """The cluster could not be reached (DNS, refused connection, TLS)."""

    pass


class TimeoutError(ClusterClientError):
    """A request exceeded the configured timeout after all retries."""

    pass


class AuthenticationError(ClusterClientError):
    """The OAuth token endpoint rejected the client credentials."""

    pass


class APIError(ClusterClientError):
    """The cluster returned an error response.

    Attributes:
        retryable: Whether this error may be resolved by retrying.
            5xx responses are retryable, 4xx are not.
    """

    _RETRYABLE_STATUS_CODES = {500, 502, 503, 504}

    @property
    def retryable(self) -> bool:
        if self.status_code is None:
            return False
        return self.status_code in self._RETRYABLE_STATUS_CODES

    def __str__(self) -> str:
        return self.message

    def verbose_str(self) -> str:
        """Error message with the status code appended, for debug output."""
        if self.status_code is not None:
            return f"{self.message} ({self.status_code})"
        return self.message
