"""Shared request logic for the orchestration client.

Pure functions for retry policy, backoff calculation and response parsing.
"""

import json
import random
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from c8ctl.client.errors import APIError
from c8ctl.errors import VariablesParseError

_STATUS_SUGGESTIONS = {
    400: "Check request parameters and try again",
    401: "Authentication required - check the profile's credentials",
    403: "Permission denied - verify the client's authorizations",
    404: "Resource not found - verify the key and the active tenant",
    409: "Conflicting state - the resource may already be completed or cancelled",
    429: "Rate limited - wait and retry",
}


@dataclass(frozen=True)
class ClientConfig:
    """Immutable transport settings for a client instance.

    Attributes:
        base_url: REST base URL of the cluster (e.g. http://localhost:8080/v2)
        timeout: Request timeout in seconds
        max_retries: Maximum number of retry attempts for failed requests
        retry_delay: Base delay between retry attempts in seconds
    """

    base_url: str
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0


def should_retry(status_code: int, attempt: int, max_retries: int) -> bool:
    """Retry server errors (5xx) while attempts remain.

    Args:
        status_code: HTTP response status code
        attempt: Current attempt number (0-indexed)
        max_retries: Maximum number of retries allowed
    """
    if attempt >= max_retries:
        return False
    return 500 <= status_code < 600


def calculate_backoff(attempt: int, base_delay: float) -> float:
    """Exponential backoff with jitter: base_delay * 2**attempt + random(0, 1)."""
    return base_delay * (2**attempt) + random.random()


def parse_response(response: httpx.Response) -> dict[str, Any]:
    """Parse an HTTP response, extracting JSON and handling errors.

    Empty success bodies (e.g. 204 on completion endpoints) yield {}.

    Raises:
        APIError: For non-2xx responses or invalid JSON bodies
    """
    if 200 <= response.status_code < 300:
        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                message="Invalid JSON response from cluster",
                status_code=response.status_code,
                details={
                    "error": str(e),
                    "response_text": response.text[:500],
                },
            ) from e

    try:
        error_data = response.json()
    except ValueError:
        error_data = {"message": response.text}

    # Problem detail bodies carry 'detail' and 'title'
    if isinstance(error_data, dict):
        error_message = (
            error_data.get("detail")
            or error_data.get("message")
            or error_data.get("title")
            or f"Request failed with status {response.status_code}"
        )
    else:
        error_message = str(error_data) or "Unknown error"

    details = dict(error_data) if isinstance(error_data, dict) else {"raw": error_data}
    suggestion = _STATUS_SUGGESTIONS.get(response.status_code)
    if suggestion is None and response.status_code >= 500:
        suggestion = "Server error - check cluster health or retry later"
    if suggestion:
        details["suggestion"] = suggestion

    raise APIError(
        message=error_message,
        status_code=response.status_code,
        details=details,
    )


def parse_variables(raw: Optional[str]) -> Optional[dict[str, Any]]:
    """Parse a --variables option into a JSON object.

    Raises:
        VariablesParseError: If the value is not a JSON object
    """
    if raw is None or not raw.strip():
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise VariablesParseError(
            message=f"Invalid JSON for variables: {e.msg}",
            error_code="INPUT-InvalidVariables",
            details={"value": raw},
            suggestion='Pass a JSON object, e.g. --variables \'{"amount": 42}\'',
        ) from e
    if not isinstance(value, dict):
        raise VariablesParseError(
            message="Variables must be a JSON object",
            error_code="INPUT-InvalidVariables",
            details={"value": raw},
            suggestion='Pass a JSON object, e.g. --variables \'{"amount": 42}\'',
        )
    return value
