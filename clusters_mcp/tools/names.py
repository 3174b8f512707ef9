"""Address to name and name to address lookups."""

from __future__ import annotations

from clusters_mcp.tools.base import (
    TESTNET,
    ToolDefinition,
    body_from_param,
    object_array,
    string,
    string_array,
)

get_name_by_address = ToolDefinition(
    name="get_name_by_address",
    description="Get the cluster name for a wallet address.",
    method="GET",
    path="/names/address/{address}",
    params=(string("address", "Wallet address"), TESTNET),
)

get_all_names_by_address = ToolDefinition(
    name="get_all_names_by_address",
    description="List every cluster name owned by a wallet address.",
    method="GET",
    path="/names/owner/address/{address}",
    params=(string("address", "Wallet address"), TESTNET),
)

get_bulk_data_by_addresses = ToolDefinition(
    name="get_bulk_data_by_addresses",
    description="Resolve cluster names for many wallet addresses at once.",
    method="POST",
    path="/names/address",
    params=(string_array("addresses", "Wallet addresses"), TESTNET),
    body=body_from_param("addresses"),
)

get_bulk_data_by_names = ToolDefinition(
    name="get_bulk_data_by_names",
    description="Resolve wallet data for many cluster names at once.",
    method="POST",
    path="/names",
    params=(
        object_array("names", (string("name", "Cluster name, e.g. clusters/main"),), "Names to resolve"),
        TESTNET,
    ),
    body=body_from_param("names"),
)

TOOLS = (
    get_name_by_address,
    get_all_names_by_address,
    get_bulk_data_by_addresses,
    get_bulk_data_by_names,
)
