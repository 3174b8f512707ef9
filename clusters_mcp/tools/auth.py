"""Authentication key tools."""

from __future__ import annotations

from clusters_mcp.tools.base import (
    AUTH_KEY,
    WALLET_TYPES,
    ToolDefinition,
    body_from_fields,
    enum,
    string,
)

get_signing_message = ToolDefinition(
    name="get_signing_message",
    description="Get the message a wallet must sign to obtain an auth key.",
    method="GET",
    path="/auth/message",
)

get_auth_key = ToolDefinition(
    name="get_auth_key",
    description="Exchange a wallet signature of the signing message for an auth key.",
    method="POST",
    path="/auth/token",
    params=(
        string("signature", "Signature of the signing message"),
        string("signingDate", "Signing date returned by get_signing_message"),
        enum("type", WALLET_TYPES, "Wallet type"),
        string("wallet", "Wallet address that produced the signature"),
    ),
    body=body_from_fields("signature", "signingDate", "type", "wallet"),
)

validate_auth_token = ToolDefinition(
    name="validate_auth_token",
    description="Check whether an auth key is still valid.",
    method="GET",
    path="/auth/validate",
    params=(AUTH_KEY,),
    requires_auth=True,
)

TOOLS = (get_signing_message, get_auth_key, validate_auth_token)
