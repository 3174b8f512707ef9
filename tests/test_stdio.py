import json

import httpx
import pytest
from mcp import types
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session

from clusters_mcp import mcp
from clusters_mcp.stdio import build_server


def _call(name, arguments=None):
    return types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )


async def _handle_call(server, name, arguments=None):
    return await server.request_handlers[types.CallToolRequest](_call(name, arguments))


@pytest.mark.asyncio
async def test_list_tools_exposes_registry():
    server = build_server()
    response = await server.request_handlers[types.ListToolsRequest](types.ListToolsRequest(method="tools/list"))

    tools = response.root.tools
    assert [tool.name for tool in tools] == list(mcp.TOOL_REGISTRY)
    by_name = {tool.name: tool for tool in tools}
    assert by_name["add_wallets"].inputSchema == mcp.TOOL_REGISTRY["add_wallets"].input_schema


@pytest.mark.asyncio
async def test_call_tool_returns_api_payload(make_api):
    api, sent = make_api()
    server = build_server(mcp.ToolDispatcher(api))

    response = await _handle_call(server, "get_cluster_by_name", {"name": "clusters"})

    result = response.root
    assert isinstance(result, types.CallToolResult)
    assert result.isError is False
    assert json.loads(result.content[0].text) == {"ok": True, "x": 1}
    assert len(sent) == 1


@pytest.mark.asyncio
async def test_call_tool_without_arguments(make_api):
    api, sent = make_api()
    server = build_server(mcp.ToolDispatcher(api))

    response = await _handle_call(server, "get_signing_message")

    assert response.root.isError is False
    assert sent[0].url.path == "/v1/auth/message"


@pytest.mark.asyncio
async def test_unknown_tool_is_invalid_params(make_api):
    api, sent = make_api()
    server = build_server(mcp.ToolDispatcher(api))

    with pytest.raises(McpError) as excinfo:
        await _handle_call(server, "nope", {})
    assert excinfo.value.error.code == types.INVALID_PARAMS
    assert excinfo.value.error.data == {"tool": "nope"}
    assert sent == []


@pytest.mark.asyncio
async def test_invalid_parameters_is_invalid_params(make_api):
    api, sent = make_api()
    server = build_server(mcp.ToolDispatcher(api))

    with pytest.raises(McpError) as excinfo:
        await _handle_call(server, "verify_wallet", {"clusterId": "1"})
    assert excinfo.value.error.code == types.INVALID_PARAMS
    assert excinfo.value.error.data == {"field": "authKey"}
    assert sent == []


@pytest.mark.asyncio
async def test_network_failure_is_in_band_error(make_api):
    def down(request):
        raise httpx.ConnectError("refused", request=request)

    api, _sent = make_api(down)
    server = build_server(mcp.ToolDispatcher(api))

    response = await _handle_call(server, "get_cluster_by_id", {"id": "42"})

    assert response.root.isError is True
    assert "unreachable" in response.root.content[0].text


@pytest.mark.asyncio
async def test_unexpected_error_is_logged_and_answered(caplog):
    class BrokenDispatcher:
        async def handle(self, tool_name, params=None):
            raise RuntimeError("boom")

    server = build_server(BrokenDispatcher())

    with caplog.at_level("ERROR", logger="clusters_mcp.stdio"):
        with pytest.raises(McpError) as excinfo:
            await _handle_call(server, "get_cluster_by_id", {"id": "42"})
    assert excinfo.value.error.code == types.INTERNAL_ERROR
    assert "boom" not in excinfo.value.error.message
    assert any(record.exc_info and "get_cluster_by_id" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_client_session_round_trip(make_api):
    api, sent = make_api()
    server = build_server(mcp.ToolDispatcher(api))

    async with create_connected_server_and_client_session(server) as session:
        listed = await session.list_tools()
        assert len(listed.tools) == len(mcp.TOOL_REGISTRY)

        result = await session.call_tool("get_cluster_by_id", {"id": "42"})
        assert json.loads(result.content[0].text) == {"ok": True, "x": 1}

        with pytest.raises(McpError) as excinfo:
            await session.call_tool("add_wallets", {"wallets": []})
        assert excinfo.value.error.code == types.INVALID_PARAMS

    assert [request.url.path for request in sent] == ["/v1/clusters/id/42"]
