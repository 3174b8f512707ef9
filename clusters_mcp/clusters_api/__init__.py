"""HTTP client wrappers for the Clusters API."""

from .client import (
    ApiRequest,
    ClustersApiClient,
    ClustersApiError,
    NetworkError,
    UpstreamMalformedResponseError,
    default_client,
)

__all__ = [
    "ApiRequest",
    "ClustersApiClient",
    "ClustersApiError",
    "NetworkError",
    "UpstreamMalformedResponseError",
    "default_client",
]
