"""
Stdio transport built on the MCP SDK's low-level server.

The SDK owns framing, the initialize handshake and per-request tasks; this
module only wires the tool registry and dispatcher into it. Logs go to stderr
so stdout carries nothing but protocol messages.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from clusters_mcp import mcp as gateway
from clusters_mcp.clusters_api import default_client
from clusters_mcp.config import default_config
from clusters_mcp.errors import InvalidParametersError, UnknownToolError
from clusters_mcp.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _to_call_tool_result(result: dict) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=block["text"]) for block in result["content"]],
        isError=bool(result.get("isError", False)),
    )


def build_server(dispatcher: Optional[gateway.ToolDispatcher] = None) -> Server:
    """
    Create an MCP server exposing every registered tool.

    Unknown tools and invalid parameters are answered with ``INVALID_PARAMS``
    protocol errors; API failures come back as tool results with ``isError``.
    """
    server = Server(gateway.MCP_SERVER_NAME, version=gateway.MCP_SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=tool["name"], description=tool["description"], inputSchema=tool["inputSchema"])
            for tool in gateway.list_tools()
        ]

    # Registered directly: the SDK's call_tool decorator turns every exception
    # into an isError result, which would hide validation failures.
    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        arguments = request.params.arguments or {}
        try:
            result = await gateway.call_tool(name, arguments, dispatcher=dispatcher)
        except UnknownToolError as exc:
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=str(exc), data={"tool": exc.tool}))
        except InvalidParametersError as exc:
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=str(exc), data={"field": exc.field}))
        except Exception:
            logger.exception("Unexpected error while calling tool %s", name)
            raise McpError(types.ErrorData(code=types.INTERNAL_ERROR, message="Unexpected error while calling tool."))
        return types.ServerResult(_to_call_tool_result(result))

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def _run() -> None:
    server = build_server()
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await default_client.aclose()


def main() -> None:
    configure_logging(default_config, stream=sys.stderr)
    if not default_config.api_key:
        logger.warning("CLUSTERS_API_KEY is not set; requests will carry an empty X-API-KEY header")
    logger.info("%s %s listening on stdio", gateway.MCP_SERVER_NAME, gateway.MCP_SERVER_VERSION)
    asyncio.run(_run())


if __name__ == "__main__":
    main()
