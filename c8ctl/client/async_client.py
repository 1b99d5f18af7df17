"""Asynchronous REST client for the orchestration cluster.

OrchestrationClient wraps httpx.AsyncClient with retry handling, exponential
backoff and cluster authentication (OAuth client credentials or basic auth).
One method per resource operation keeps command handlers thin.

Usage:
    async with create_client("prod") as client:
        topology = await client.get_topology()
"""

import asyncio
import mimetypes
from pathlib import Path
from typing import Any, Optional, Sequence

import httpx

from c8ctl.client.core import (
    ClientConfig,
    calculate_backoff,
    parse_response,
    should_retry,
)
from c8ctl.client.errors import AuthenticationError, ConnectionError, TimeoutError
from c8ctl.config.models import ClusterConfig
from c8ctl.logging import get_logger

logger = get_logger(__name__)

DEFAULT_OAUTH_URL = "https://login.cloud.camunda.io/oauth/token"
DEFAULT_PAGE_LIMIT = 100


class OrchestrationClient:
    """Asynchronous client for the orchestration cluster REST API.

    Attributes:
        cluster: Resolved connection settings
        config: Transport settings
        tenant_id: Tenant applied to tenant-scoped requests, if any
    """

    def __init__(
        self,
        cluster: ClusterConfig,
        tenant_id: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            cluster: Resolved connection settings
            tenant_id: Tenant for create/search/publish requests
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts for server errors
            retry_delay: Base delay between retries in seconds
            transport: Optional httpx transport, used by tests
        """
        self.cluster = cluster
        self.tenant_id = tenant_id
        self.config = ClientConfig(
            base_url=cluster.base_url.rstrip("/"),
            timeout=timeout,
            max_retries=max_retries,
            retry_delay=retry_delay,
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._access_token: Optional[str] = None

    async def __aenter__(self) -> "OrchestrationClient":
        auth = None
        if self.cluster.has_basic_auth:
            auth = httpx.BasicAuth(self.cluster.username, self.cluster.password)
        self._client = httpx.AsyncClient(
            timeout=self.config.timeout,
            auth=auth,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # --- Authentication ---

    async def _fetch_access_token(self) -> str:
        """Request a token with the OAuth client credentials grant.

        Raises:
            AuthenticationError: If the token endpoint rejects the request
            ConnectionError: If the token endpoint cannot be reached
        """
        assert self._client is not None
        oauth_url = self.cluster.oauth_url or DEFAULT_OAUTH_URL
        form = {
            "grant_type": "client_credentials",
            "client_id": self.cluster.client_id,
            "client_secret": self.cluster.client_secret,
        }
        if self.cluster.audience:
            form["audience"] = self.cluster.audience

        logger.debug(f"Requesting OAuth token from {oauth_url}")
        try:
            response = await self._client.post(oauth_url, data=form, auth=None)
        except httpx.TransportError as e:
            raise ConnectionError(
                message=f"Could not reach OAuth endpoint at {oauth_url}",
                details={"url": oauth_url, "error": str(e)},
            ) from e

        token = None
        if response.status_code == 200:
            try:
                token = response.json().get("access_token")
            except ValueError:
                token = None
        if not token:
            raise AuthenticationError(
                message=f"OAuth token request failed ({response.status_code})",
                status_code=response.status_code,
                details={
                    "url": oauth_url,
                    "suggestion": "Check the client ID, client secret and audience",
                },
            )
        return token

    async def _auth_headers(self) -> dict[str, str]:
        if not self.cluster.has_oauth:
            return {}
        if self._access_token is None:
            self._access_token = await self._fetch_access_token()
        return {"Authorization": f"Bearer {self._access_token}"}

    # --- Transport ---

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        data: Optional[dict[str, Any]] = None,
        files: Optional[list[tuple[str, tuple[str, bytes, str]]]] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ) -> dict[str, Any]:
        """Make an HTTP request with retry handling.

        Raises:
            ConnectionError: Cannot connect to the cluster
            TimeoutError: Request exceeded timeout
            APIError: Cluster returned an error response
        """
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with OrchestrationClient(...) as client:'"
            )

        url = f"{self.config.base_url}{endpoint}"
        retries = max_retries if max_retries is not None else self.config.max_retries
        headers = await self._auth_headers()
        attempt = 0

        while True:
            try:
                logger.debug(f"{method} {url}")
                response = await self._client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                    data=data,
                    files=files,
                    headers=headers,
                    timeout=timeout or self.config.timeout,
                )

                if should_retry(response.status_code, attempt, retries):
                    delay = calculate_backoff(attempt, self.config.retry_delay)
                    logger.debug(
                        f"{method} {url} returned {response.status_code}, retrying in {delay:.1f}s"
                    )
                    await asyncio.sleep(delay)
                    attempt += 1
                    continue

                return parse_response(response)

            except httpx.ConnectError as e:
                if attempt < retries:
                    await asyncio.sleep(
                        calculate_backoff(attempt, self.config.retry_delay)
                    )
                    attempt += 1
                    continue
                raise ConnectionError(
                    message=f"Could not connect to cluster at {url}",
                    details={
                        "url": url,
                        "error": str(e),
                        "suggestion": "Check the base URL of the active profile",
                    },
                ) from e

            except httpx.TimeoutException as e:
                if attempt < retries:
                    await asyncio.sleep(
                        calculate_backoff(attempt, self.config.retry_delay)
                    )
                    attempt += 1
                    continue
                raise TimeoutError(
                    message=f"Request timed out after {timeout or self.config.timeout}s",
                    details={"url": url, "timeout": timeout or self.config.timeout},
                ) from e

    async def get(
        self, endpoint: str, params: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        return await self._make_request("GET", endpoint, params=params)

    async def post(
        self, endpoint: str, json: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        return await self._make_request("POST", endpoint, json=json)

    # --- Helpers ---

    def _search_body(
        self, filters: dict[str, Any], limit: int = DEFAULT_PAGE_LIMIT
    ) -> dict[str, Any]:
        query = {k: v for k, v in filters.items() if v is not None}
        if self.tenant_id:
            query["tenantId"] = self.tenant_id
        return {"filter": query, "page": {"limit": limit}}

    def _with_tenant(self, body: dict[str, Any]) -> dict[str, Any]:
        payload = {k: v for k, v in body.items() if v is not None}
        if self.tenant_id:
            payload["tenantId"] = self.tenant_id
        return payload

    # --- Cluster ---

    async def get_topology(self) -> dict[str, Any]:
        return await self.get("/topology")

    # --- Process instances ---

    async def search_process_instances(
        self,
        process_definition_id: Optional[str] = None,
        state: Optional[str] = None,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> dict[str, Any]:
        body = self._search_body(
            {"processDefinitionId": process_definition_id, "state": state}, limit
        )
        return await self.post("/process-instances/search", json=body)

    async def get_process_instance(self, key: str) -> dict[str, Any]:
        return await self.get(f"/process-instances/{key}")

    async def create_process_instance(
        self,
        process_definition_id: str,
        version: Optional[int] = None,
        variables: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        body = self._with_tenant(
            {
                "processDefinitionId": process_definition_id,
                "processDefinitionVersion": version,
                "variables": variables,
            }
        )
        return await self.post("/process-instances", json=body)

    async def cancel_process_instance(self, key: str) -> dict[str, Any]:
        return await self.post(f"/process-instances/{key}/cancellation")

    # --- Incidents ---

    async def search_incidents(
        self,
        state: Optional[str] = None,
        process_instance_key: Optional[str] = None,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> dict[str, Any]:
        body = self._search_body(
            {"state": state, "processInstanceKey": process_instance_key}, limit
        )
        return await self.post("/incidents/search", json=body)

    async def resolve_incident(self, key: str) -> dict[str, Any]:
        return await self.post(f"/incidents/{key}/resolution")

    # --- User tasks ---

    async def search_user_tasks(
        self,
        state: Optional[str] = None,
        assignee: Optional[str] = None,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> dict[str, Any]:
        body = self._search_body({"state": state, "assignee": assignee}, limit)
        return await self.post("/user-tasks/search", json=body)

    async def complete_user_task(
        self, key: str, variables: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        body = {"variables": variables} if variables else None
        return await self.post(f"/user-tasks/{key}/completion", json=body)

    # --- Jobs ---

    async def search_jobs(
        self,
        job_type: Optional[str] = None,
        state: Optional[str] = None,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> dict[str, Any]:
        body = self._search_body({"type": job_type, "state": state}, limit)
        return await self.post("/jobs/search", json=body)

    async def activate_jobs(
        self,
        job_type: str,
        max_jobs: int = 10,
        timeout_ms: int = 300000,
        worker: str = "c8ctl",
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "type": job_type,
            "maxJobsToActivate": max_jobs,
            "timeout": timeout_ms,
            "worker": worker,
        }
        if self.tenant_id:
            body["tenantIds"] = [self.tenant_id]
        return await self.post("/jobs/activation", json=body)

    async def complete_job(
        self, key: str, variables: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        body = {"variables": variables} if variables else None
        return await self.post(f"/jobs/{key}/completion", json=body)

    async def fail_job(
        self,
        key: str,
        retries: int = 0,
        error_message: Optional[str] = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"retries": retries}
        if error_message:
            body["errorMessage"] = error_message
        return await self.post(f"/jobs/{key}/failure", json=body)

    # --- Messages ---

    async def publish_message(
        self,
        name: str,
        correlation_key: Optional[str] = None,
        variables: Optional[dict[str, Any]] = None,
        time_to_live_ms: Optional[int] = None,
    ) -> dict[str, Any]:
        body = self._with_tenant(
            {
                "name": name,
                "correlationKey": correlation_key or "",
                "variables": variables,
                "timeToLive": time_to_live_ms,
            }
        )
        return await self.post("/messages/publication", json=body)

    async def correlate_message(
        self,
        name: str,
        correlation_key: Optional[str] = None,
        variables: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        body = self._with_tenant(
            {
                "name": name,
                "correlationKey": correlation_key or "",
                "variables": variables,
            }
        )
        return await self.post("/messages/correlation", json=body)

    # --- Deployments ---

    async def deploy_resources(self, paths: Sequence[Path]) -> dict[str, Any]:
        """Deploy BPMN, DMN and form files in one multipart request."""
        files = []
        for path in paths:
            content_type = mimetypes.guess_type(path.name)[0] or "application/xml"
            files.append(("resources", (path.name, path.read_bytes(), content_type)))
        data = {"tenantId": self.tenant_id} if self.tenant_id else None
        return await self._make_request("POST", "/deployments", data=data, files=files)


def create_client(
    profile_name: Optional[str] = None, **options: Any
) -> OrchestrationClient:
    """Build a client from resolved configuration.

    Args:
        profile_name: Explicit profile override
        **options: Passed to OrchestrationClient (timeout, max_retries, ...)

    Raises:
        ProfileNotFoundError: If the explicit or session profile does not exist
    """
    from c8ctl.config.resolver import resolve_cluster_config, resolve_tenant_id

    cluster = resolve_cluster_config(profile_name)
    options.setdefault("tenant_id", resolve_tenant_id(profile_name))
    return OrchestrationClient(cluster, **options)
