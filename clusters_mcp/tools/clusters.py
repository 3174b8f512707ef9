"""Cluster management tools."""

from __future__ import annotations

from clusters_mcp.tools.base import (
    AUTH_KEY,
    TESTNET,
    WALLET_TYPES,
    ToolDefinition,
    body_from_fields,
    body_from_param,
    boolean,
    enum,
    object_array,
    string,
    string_array,
)

create_a_cluster = ToolDefinition(
    name="create_a_cluster",
    description="Create a new cluster owned by the authenticated wallet.",
    method="POST",
    path="/clusters",
    params=(AUTH_KEY, TESTNET),
    requires_auth=True,
)

get_cluster_by_id = ToolDefinition(
    name="get_cluster_by_id",
    description="Get a cluster and its wallets by cluster id.",
    method="GET",
    path="/clusters/id/{id}",
    params=(string("id", "Cluster id"), TESTNET),
)

get_cluster_by_name = ToolDefinition(
    name="get_cluster_by_name",
    description="Get a cluster and its wallets by cluster name.",
    method="GET",
    path="/clusters/name/{name}",
    params=(string("name", "Cluster name"), TESTNET),
)

get_cluster_id_by_address = ToolDefinition(
    name="get_cluster_id_by_address",
    description="Get the id of the cluster that contains a wallet address.",
    method="GET",
    path="/clusters/address/{address}",
    params=(string("address", "Wallet address"), TESTNET),
)

add_wallets = ToolDefinition(
    name="add_wallets",
    description="Add wallets to the authenticated cluster.",
    method="POST",
    path="/clusters/wallets",
    params=(
        object_array(
            "wallets",
            (
                string("address", "Wallet address"),
                string("name", "Wallet name inside the cluster"),
                boolean("isPrivate", "Hide the wallet from public lookups"),
            ),
            "Wallets to add",
        ),
        AUTH_KEY,
        TESTNET,
    ),
    requires_auth=True,
    body=body_from_param("wallets"),
)

generate_wallet = ToolDefinition(
    name="generate_wallet",
    description="Generate a new wallet and add it to the authenticated cluster.",
    method="POST",
    path="/clusters/generate/wallet",
    params=(
        enum("type", WALLET_TYPES, "Wallet type"),
        string("name", "Wallet name inside the cluster"),
        boolean("isPrivate", "Hide the wallet from public lookups"),
        AUTH_KEY,
        TESTNET,
    ),
    requires_auth=True,
    body=body_from_fields("type", "name", "isPrivate"),
)

update_wallets = ToolDefinition(
    name="update_wallets",
    description="Rename wallets in the authenticated cluster.",
    method="PUT",
    path="/clusters/wallets/names",
    params=(
        object_array(
            "wallets",
            (
                string("address", "Wallet address"),
                string("name", "New wallet name"),
            ),
            "Wallets to rename",
        ),
        AUTH_KEY,
        TESTNET,
    ),
    requires_auth=True,
    body=body_from_param("wallets"),
)

remove_wallets = ToolDefinition(
    name="remove_wallets",
    description="Remove wallets from the authenticated cluster.",
    method="DELETE",
    path="/clusters/wallets",
    params=(string_array("addresses", "Wallet addresses to remove"), AUTH_KEY, TESTNET),
    requires_auth=True,
    body=body_from_param("addresses"),
)

verify_wallet = ToolDefinition(
    name="verify_wallet",
    description="Verify the authenticated wallet as a member of a cluster.",
    method="POST",
    path="/clusters/verify/{clusterId}",
    params=(string("clusterId", "Cluster id"), AUTH_KEY, TESTNET),
    requires_auth=True,
)

TOOLS = (
    create_a_cluster,
    get_cluster_by_id,
    get_cluster_by_name,
    get_cluster_id_by_address,
    add_wallets,
    generate_wallet,
    update_wallets,
    remove_wallets,
    verify_wallet,
)
