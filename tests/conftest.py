import os
import sys

import httpx
import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from clusters_mcp.clusters_api.client import ClustersApiClient  # noqa: E402
from clusters_mcp.config import ClustersConfig  # noqa: E402
from clusters_mcp.metrics import default_metrics  # noqa: E402

BASE_URL = "https://api.clusters.xyz/v1"
TEST_API_KEY = "test-api-key"


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


@pytest.fixture
def make_api():
    """
    Build a ClustersApiClient backed by httpx.MockTransport.

    Returns ``(client, sent)`` where ``sent`` collects every httpx.Request the
    client issued. ``handler`` may return a response or raise; by default the
    stub API answers ``{"ok": true, "x": 1}``.
    """

    def _make(handler=None, *, api_key=TEST_API_KEY):
        sent = []

        def _handle(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            if handler is not None:
                return handler(request)
            return httpx.Response(200, json={"ok": True, "x": 1})

        async_client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(_handle))
        config = ClustersConfig(base_url=BASE_URL, api_key=api_key)
        return ClustersApiClient(config, async_client=async_client), sent

    return _make
