"""Community name tools."""

from __future__ import annotations

from clusters_mcp.tools.base import AUTH_KEY, TESTNET, ToolDefinition, body_from_fields, string

check_community_name_availability = ToolDefinition(
    name="check_community_name_availability",
    description="Check whether a name is available inside a community.",
    method="GET",
    path="/names/community/{communityName}/check/{name}",
    params=(
        string("communityName", "Community name"),
        string("name", "Name to check"),
        TESTNET,
    ),
)

register_community_name = ToolDefinition(
    name="register_community_name",
    description="Register a name inside a community for a wallet address.",
    method="POST",
    path="/names/community/{communityName}/register",
    params=(
        AUTH_KEY,
        string("communityName", "Community name"),
        string("name", "Name to register"),
        string("walletAddress", "Wallet address that will own the name"),
        TESTNET,
    ),
    requires_auth=True,
    body=body_from_fields("name", "walletAddress"),
)

TOOLS = (check_community_name_availability, register_community_name)
