"""Orchestration cluster client.

Provides the async REST client used by resource commands and plugins, with
consistent error handling and retry logic.
"""

from c8ctl.client.async_client import OrchestrationClient, create_client
from c8ctl.client.errors import (
    APIError,
    AuthenticationError,
    ClusterClientError,
    ConnectionError,
    TimeoutError,
)

__all__ = [
    "OrchestrationClient",
    "create_client",
    "ClusterClientError",
    "ConnectionError",
    "TimeoutError",
    "AuthenticationError",
    "APIError",
]
