"""
MCP JSON-RPC protocol tests.

Drives MCPProtocolHandler directly with decoded request bodies.
"""

import json

import pytest

from mock_broker.mcp.catalogue import TOOL_CATALOGUE, TOOL_NAMES
from mock_broker.mcp.protocol import MCPProtocolHandler, is_jsonrpc


@pytest.fixture
def handler(dispatcher):
    return MCPProtocolHandler(dispatcher, default_session_id="demo-session")


def rpc(method, params=None, request_id=1):
    body = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        body["params"] = params
    return body


class TestHandshake:
    def test_initialize(self, handler):
        response = handler.handle(rpc("initialize"))

        assert response["jsonrpc"] == "2.0"
        assert response["id"] == 1
        result = response["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert result["capabilities"] == {"tools": {}, "resources": {}, "prompts": {}}
        assert result["serverInfo"] == {"name": "zerodha-mock", "version": "1.0.0"}

    @pytest.mark.parametrize("method", ["notifications/initialized", "ping"])
    def test_empty_results(self, handler, method):
        assert handler.handle(rpc(method, request_id=7)) == {
            "jsonrpc": "2.0",
            "id": 7,
            "result": {},
        }

    def test_prompts_list_is_empty(self, handler):
        assert handler.handle(rpc("prompts/list"))["result"] == {"prompts": []}

    def test_unknown_method(self, handler):
        response = handler.handle(rpc("sampling/createMessage", request_id="abc"))

        assert response == {
            "jsonrpc": "2.0",
            "id": "abc",
            "error": {"code": -32601, "message": "Method not found"},
        }

    def test_is_jsonrpc(self):
        assert is_jsonrpc({"jsonrpc": "2.0"})
        assert not is_jsonrpc({"jsonrpc": "1.0"})
        assert not is_jsonrpc({"tool": "get-account"})
        assert not is_jsonrpc([])


class TestTools:
    def test_tools_list_matches_catalogue(self, handler):
        tools = handler.handle(rpc("tools/list"))["result"]["tools"]

        assert tools == TOOL_CATALOGUE
        assert {tool["name"] for tool in tools} == TOOL_NAMES
        place_order = next(t for t in tools if t["name"] == "place-order")
        assert place_order["inputSchema"]["required"] == ["symbol", "qty", "side"]

    def test_tools_list_returns_a_copy(self, handler):
        tools = handler.handle(rpc("tools/list"))["result"]["tools"]
        tools[0]["name"] = "mutated"
        assert TOOL_CATALOGUE[0]["name"] == "init"

    def test_tools_call_wraps_result_as_text(self, handler):
        response = handler.handle(
            rpc("tools/call", {"name": "place-order", "arguments": {"symbol": "TCS", "qty": 5, "side": "BUY"}})
        )

        result = response["result"]
        assert result["isError"] is False
        assert result["content"][0]["type"] == "text"
        payload = json.loads(result["content"][0]["text"])
        assert payload["status"] == "COMPLETE"
        assert payload["executed_price"] == 3450.0

    def test_tools_call_uses_default_session(self, handler, accounts):
        handler.handle(
            rpc("tools/call", {"name": "place-order", "arguments": {"symbol": "TCS", "qty": 5, "side": "BUY"}})
        )

        assert accounts.get("demo-session")[1].balance == 82750

    def test_tools_call_without_arguments(self, handler):
        response = handler.handle(rpc("tools/call", {"name": "get-account"}))
        payload = json.loads(response["result"]["content"][0]["text"])
        assert payload["id"] == "demo-session"

    def test_business_rejection_is_not_an_error(self, handler):
        response = handler.handle(
            rpc("tools/call", {"name": "get-quote", "arguments": {"symbol": "NOPE"}})
        )

        assert "error" not in response
        payload = json.loads(response["result"]["content"][0]["text"])
        assert payload == {"error": "Symbol not found"}

    def test_unknown_tool(self, handler):
        response = handler.handle(rpc("tools/call", {"name": "teleport", "arguments": {}}))

        assert response["error"] == {"code": -32603, "message": "Unknown tool: teleport"}

    def test_validation_error_maps_to_internal_error(self, handler):
        response = handler.handle(rpc("tools/call", {"name": "get-quote", "arguments": {}}))

        assert response["error"]["code"] == -32603
        assert "symbol" in response["error"]["message"]

    def test_non_object_params(self, handler):
        response = handler.handle({"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": [1, 2]})
        assert response["error"]["code"] == -32603


class TestResources:
    def test_resources_list(self, handler):
        resources = handler.handle(rpc("resources/list"))["result"]["resources"]

        assert resources == [
            {
                "uri": "market://alerts",
                "name": "Market Alerts",
                "description": "Real-time market alerts and significant events summary",
                "mimeType": "text/plain",
            }
        ]

    def test_read_alerts(self, handler):
        response = handler.handle(rpc("resources/read", {"uri": "market://alerts"}))

        content = response["result"]["contents"][0]
        assert content["uri"] == "market://alerts"
        assert content["mimeType"] == "text/plain"
        assert content["text"].startswith("=== MARKET ALERTS ===\n[POSITIVE] TCS:")

    def test_read_unknown_resource(self, handler):
        response = handler.handle(rpc("resources/read", {"uri": "market://rumours"}))

        assert response["error"] == {"code": -32602, "message": "Resource not found"}


class TestSimpleEnvelope:
    def test_missing_tool(self, handler):
        assert handler.handle_simple({"params": {}}) == (
            400,
            {"error": "Missing tool parameter"},
        )

    def test_session_from_header_wins(self, handler):
        status, result = handler.handle_simple(
            {"tool": "get-account", "sessionId": "body-session"}, session_header="header-session"
        )
        assert status == 200
        assert result["id"] == "header-session"

    def test_session_from_body(self, handler):
        _, result = handler.handle_simple({"tool": "get-account", "sessionId": "body-session"})
        assert result["id"] == "body-session"

    def test_no_session_uses_default(self, handler):
        _, result = handler.handle_simple({"tool": "get-account"})
        assert result["id"] == "demo-session"

    def test_unknown_tool_propagates(self, handler):
        from mock_broker.core.exceptions import UnknownToolError

        with pytest.raises(UnknownToolError):
            handler.handle_simple({"tool": "teleport"})
