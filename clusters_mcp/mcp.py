"""
Tool registry, dispatcher and JSON-RPC surface for MCP clients.

The registry maps tool names to static definitions. The dispatcher turns one
tool call into one Clusters API request and wraps the raw JSON response. It is
stateless apart from the API client it was given, so concurrent calls need no
coordination. The HTTP gateway answers through ``handle_jsonrpc``; the stdio
transport hands the same ``call_tool`` to the MCP SDK server.
"""

from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from clusters_mcp.clusters_api import ApiRequest, ClustersApiClient, ClustersApiError, default_client
from clusters_mcp.errors import InvalidParametersError, UnknownToolError
from clusters_mcp.metrics import UNKNOWN_TOOL_LABEL, default_metrics
from clusters_mcp.tools import ALL_TOOLS, ToolDefinition
from clusters_mcp.tools.validators import validate_params

logger = logging.getLogger(__name__)

MCP_SERVER_NAME = "clusters-mcp-server"
MCP_SERVER_VERSION = "2.0.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

PATH_PARAM_REGEX = re.compile(r"\{(\w+)\}")

TOOL_REGISTRY: Dict[str, ToolDefinition] = {tool.name: tool for tool in ALL_TOOLS}


def lookup(tool_name: str) -> Optional[ToolDefinition]:
    """Return the definition registered under ``tool_name``, or None."""
    return TOOL_REGISTRY.get(tool_name)


def list_tools() -> List[Dict[str, Any]]:
    """Return MCP descriptors for every registered tool."""
    return [tool.describe() for tool in TOOL_REGISTRY.values()]


def build_path(tool: ToolDefinition, params: Mapping[str, Any]) -> str:
    if callable(tool.path):
        return tool.path(params)
    return PATH_PARAM_REGEX.sub(lambda match: quote(str(params[match.group(1)]), safe=""), tool.path)


def build_request(tool: ToolDefinition, params: Mapping[str, Any]) -> ApiRequest:
    """Build the outbound request for already validated ``params``."""
    return ApiRequest(
        method=tool.method,
        path=build_path(tool, params),
        testnet=tool.supports_testnet and params.get("testnet") is True,
        auth_key=params["authKey"] if tool.requires_auth else None,
        body=tool.body.build(params),
    )


def text_result(payload: Any) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": json.dumps(payload)}]}


def error_result(message: str) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": message}], "isError": True}


class ToolDispatcher:
    """Executes tool calls against the Clusters API."""

    def __init__(
        self,
        client: ClustersApiClient | None = None,
        registry: Optional[Mapping[str, ToolDefinition]] = None,
    ) -> None:
        self.client = client or default_client
        self.registry = registry if registry is not None else TOOL_REGISTRY

    async def handle(self, tool_name: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Run one tool call end to end.

        Raises:
            UnknownToolError: ``tool_name`` is not registered.
            InvalidParametersError: ``params`` fail validation; nothing is sent.
            NetworkError: the API could not be reached.
            UpstreamMalformedResponseError: the API answered with non-JSON.
        """
        tool = self.registry.get(tool_name)
        if tool is None:
            raise UnknownToolError(tool_name)
        validated = validate_params(tool.params, params)
        response = await self.client.send(build_request(tool, validated))
        return text_result(response)


default_dispatcher = ToolDispatcher()


async def call_tool(
    tool_name: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    dispatcher: Optional[ToolDispatcher] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Dispatch a tool call and shape the outcome as an MCP tool result.

    API failures are reported in-band with ``isError``. Unknown tools and
    invalid parameters propagate so the caller can answer with a protocol error.
    """
    dispatcher = dispatcher or default_dispatcher
    start = time.monotonic()
    try:
        result = await dispatcher.handle(tool_name, params)
    except UnknownToolError as exc:
        logger.warning(
            "tool=%s outcome=rejected error=unknown_tool request_id=%s",
            UNKNOWN_TOOL_LABEL,
            request_id,
            extra={"tool": UNKNOWN_TOOL_LABEL, "request_id": request_id, "error": "unknown_tool"},
        )
        # Caller-supplied names never become metric keys.
        default_metrics.record_tool(UNKNOWN_TOOL_LABEL, success=False, failure=type(exc).__name__)
        raise
    except InvalidParametersError as exc:
        logger.warning(
            "tool=%s outcome=rejected error=%s request_id=%s",
            tool_name,
            exc,
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": str(exc)},
        )
        default_metrics.record_tool(tool_name, success=False, failure=type(exc).__name__)
        raise
    except ClustersApiError as exc:
        duration_ms = (time.monotonic() - start) * 1000
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s duration_ms=%.2f",
            tool_name,
            exc,
            request_id,
            duration_ms,
            extra={"tool": tool_name, "request_id": request_id, "error": str(exc)},
        )
        default_metrics.record_tool(
            tool_name, success=False, duration_ms=duration_ms, failure=type(exc).__name__
        )
        return error_result(str(exc))
    duration_ms = (time.monotonic() - start) * 1000
    logger.info(
        "tool=%s outcome=success request_id=%s duration_ms=%.2f",
        tool_name,
        request_id,
        duration_ms,
        extra={"tool": tool_name, "request_id": request_id},
    )
    default_metrics.record_tool(tool_name, success=True, duration_ms=duration_ms)
    return result


def jsonrpc_success(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def jsonrpc_error(rpc_id: Any, code: int, message: str, data: Any = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": rpc_id, "error": error}


def _is_notification(method: str) -> bool:
    return method.startswith("notifications/") or method == "initialized"


async def handle_jsonrpc(
    body: Any,
    *,
    dispatcher: Optional[ToolDispatcher] = None,
    request_id: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Answer one decoded JSON-RPC message.

    Supported methods:
      - initialize
      - ping
      - list_tools / tools/list
      - call_tool / tools/call
      - notifications/* (no response)

    Returns the response payload, or None for notifications.
    """
    if not isinstance(body, dict):
        return jsonrpc_error(None, INVALID_REQUEST, "Invalid request")

    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params: Dict[str, Any] = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        return jsonrpc_error(rpc_id, INVALID_PARAMS, "Invalid params")

    if not isinstance(method, str) or not method:
        return jsonrpc_error(rpc_id, INVALID_REQUEST, "Invalid request")

    if _is_notification(method):
        logger.debug("mcp notification method=%s request_id=%s", method, request_id)
        return None

    if method == "initialize":
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str) or not protocol_version:
            return jsonrpc_error(rpc_id, INVALID_PARAMS, "Invalid params")
        logger.debug("mcp initialize requested protocol=%s request_id=%s", protocol_version, request_id)
        return jsonrpc_success(
            rpc_id,
            {
                "protocolVersion": protocol_version,
                "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
                "capabilities": {"tools": {"listChanged": False}},
            },
        )

    if method == "ping":
        return jsonrpc_success(rpc_id, {})

    if method in ("list_tools", "tools/list"):
        return jsonrpc_success(rpc_id, {"tools": list_tools()})

    if method in ("call_tool", "tools/call"):
        tool_name = params.get("name") or params.get("tool")
        tool_params = params.get("arguments")
        if tool_params is None:
            tool_params = params.get("params") or {}
        if not isinstance(tool_name, str) or not tool_name.strip():
            return jsonrpc_error(rpc_id, INVALID_PARAMS, "Invalid params")
        if not isinstance(tool_params, dict):
            return jsonrpc_error(rpc_id, INVALID_PARAMS, "Invalid params")
        try:
            result = await call_tool(tool_name, tool_params, dispatcher=dispatcher, request_id=request_id)
        except UnknownToolError as exc:
            return jsonrpc_error(rpc_id, INVALID_PARAMS, str(exc), {"tool": exc.tool})
        except InvalidParametersError as exc:
            return jsonrpc_error(rpc_id, INVALID_PARAMS, str(exc), {"field": exc.field})
        except Exception:
            logger.exception("Unexpected error while calling tool %s", tool_name)
            return jsonrpc_error(rpc_id, INTERNAL_ERROR, "Unexpected error while calling tool.")
        return jsonrpc_success(rpc_id, result)

    return jsonrpc_error(rpc_id, METHOD_NOT_FOUND, "Method not found")
