"""Name registration tools."""

from __future__ import annotations

from typing import Any, Mapping

from clusters_mcp.tools.base import (
    TESTNET,
    ToolDefinition,
    body_from_fields,
    body_from_param,
    enum,
    object_array,
    string,
    string_array,
)

# Chain ids accepted by the registration endpoint, plus Solana.
REGISTRATION_NETWORKS = (
    "1",
    "10",
    "56",
    "137",
    "8453",
    "81457",
    "17000",
    "42161",
    "43114",
    "11155111",
    "solana",
)


def registration_path(params: Mapping[str, Any]) -> str:
    """Solana registrations use their own endpoint; every chain id goes to /register/evm."""
    return "/register/solana" if params["network"] == "solana" else "/register/evm"


check_name_availability = ToolDefinition(
    name="check_name_availability",
    description="Check whether cluster names are available for registration.",
    method="POST",
    path="/names/register/check",
    params=(string_array("names", "Names to check"), TESTNET),
    body=body_from_param("names"),
)

get_registration_sign_data = ToolDefinition(
    name="get_registration_sign_data",
    description="Get the transaction data a wallet must sign to register names.",
    method="POST",
    path=registration_path,
    params=(
        enum("network", REGISTRATION_NETWORKS, "Chain id, or solana"),
        string("sender", "Wallet address paying for the registration"),
        object_array(
            "names",
            (
                string("name", "Name to register"),
                string("amountWei", "Amount in wei to pay for the name", required=False),
            ),
            "Names to register",
        ),
        string("referralClusterId", "Referring cluster id", required=False),
        TESTNET,
    ),
    body=body_from_fields("network", "sender", "names", "referralClusterId"),
)

get_transaction_status = ToolDefinition(
    name="get_transaction_status",
    description="Get the status of a registration transaction.",
    method="GET",
    path="/names/register/tx/{txHash}",
    params=(string("txHash", "Registration transaction hash"), TESTNET),
)

TOOLS = (check_name_availability, get_registration_sign_data, get_transaction_status)
