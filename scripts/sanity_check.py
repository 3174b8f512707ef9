"""Minimal sanity checks for the Clusters MCP tools against the live API."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from clusters_mcp.clusters_api import default_client  # noqa: E402
from clusters_mcp.mcp import call_tool  # noqa: E402

# Override via env to look up other records.
SAMPLE_CLUSTER = os.getenv("CLUSTERS_SAMPLE_NAME", "clusters")
SAMPLE_ADDRESS = os.getenv("CLUSTERS_SAMPLE_ADDRESS", "0x5755d1dcea21caa687339c305d143e6e78f96adf")
# Opt-in to testnet routing for the lookups.
USE_TESTNET = os.getenv("CLUSTERS_SANITY_TESTNET", "false").lower() in {"1", "true", "yes"}


async def main() -> None:
    try:
        print("Signing message:", await call_tool("get_signing_message"))
        print(
            "Cluster by name:",
            await call_tool("get_cluster_by_name", {"name": SAMPLE_CLUSTER, "testnet": USE_TESTNET}),
        )
        print(
            "Name by address:",
            await call_tool("get_name_by_address", {"address": SAMPLE_ADDRESS, "testnet": USE_TESTNET}),
        )
        print(
            "Name availability:",
            await call_tool("check_name_availability", {"names": [SAMPLE_CLUSTER]}),
        )
    finally:
        await default_client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
