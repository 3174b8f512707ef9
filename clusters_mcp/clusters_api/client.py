"""
Thin HTTP client for the Clusters REST API.

The client sends exactly one request per call and returns the parsed JSON body
verbatim, whatever the HTTP status. Only transport failures and non-JSON
bodies are raised as exceptions; the tool layer reports those as failed calls.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from clusters_mcp.config import ClustersConfig, default_config
from clusters_mcp.errors import ClustersMcpError

logger = logging.getLogger(__name__)

TESTNET_QUERY = {"testnet": "true"}


class ClustersApiError(ClustersMcpError):
    """Base exception for failures talking to the Clusters API."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(ClustersApiError):
    """Raised when the API cannot be reached (DNS, refused connection, timeout)."""


class UpstreamMalformedResponseError(ClustersApiError):
    """Raised when the API answers with a body that is not valid JSON."""


@dataclass(frozen=True, slots=True)
class ApiRequest:
    """A fully resolved outbound request."""

    method: str
    path: str
    testnet: bool = False
    auth_key: Optional[str] = None
    body: Any = None

    @property
    def params(self) -> Optional[Dict[str, str]]:
        return dict(TESTNET_QUERY) if self.testnet else None


class ClustersApiClient:
    """Async client for the Clusters API surface."""

    def __init__(
        self,
        config: ClustersConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url, timeout=self.config.timeout
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, *, auth_key: Optional[str], has_body: bool) -> Dict[str, str]:
        headers: Dict[str, str] = {"X-API-KEY": self.config.api_key}
        if has_body:
            headers["Content-Type"] = "application/json"
        if auth_key is not None:
            headers["Authorization"] = f"Bearer {auth_key}"
        return headers

    def _process_response(self, response: httpx.Response) -> Any:
        # Error statuses with a JSON body are passed through untouched.
        try:
            return response.json()
        except ValueError as exc:
            logger.warning(
                "Clusters API returned a non-JSON body (status %s)", response.status_code
            )
            raise UpstreamMalformedResponseError(
                "Unexpected response from Clusters API.", status_code=response.status_code
            ) from exc

    async def send(self, request: ApiRequest) -> Any:
        """Issue ``request`` and return the decoded JSON body."""
        client = await self._get_client()
        has_body = request.body is not None
        headers = self._build_headers(auth_key=request.auth_key, has_body=has_body)
        content = json.dumps(request.body, separators=(",", ":")) if has_body else None
        try:
            response = await client.request(
                request.method,
                request.path,
                params=request.params,
                headers=headers,
                content=content,
            )
        except httpx.RequestError as exc:
            logger.warning("Clusters API unreachable for %s %s", request.method, request.path)
            raise NetworkError(f"Clusters API unreachable: {exc.__class__.__name__}") from exc
        logger.debug(
            "Clusters API %s %s -> %s", request.method, request.path, response.status_code
        )
        return self._process_response(response)


default_client = ClustersApiClient()
