"""
Protocol adapter between decoded request bodies and the tool dispatcher.

Two envelopes are understood:
- JSON-RPC 2.0 (MCP tool calling), selected by ``"jsonrpc": "2.0"``
- the simplified envelope ``{"tool": ..., "params": ..., "sessionId": ...}``
"""

import copy
import logging
from typing import Any

from mock_broker.core.config import settings
from mock_broker.mcp.catalogue import ALERTS_URI, RESOURCE_CATALOGUE, TOOL_CATALOGUE
from mock_broker.mcp.response_utils import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    error_message,
    jsonrpc_error,
    jsonrpc_result,
    tool_call_content,
)
from mock_broker.services.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)


def is_jsonrpc(body: Any) -> bool:
    return isinstance(body, dict) and body.get("jsonrpc") == "2.0"


class MCPProtocolHandler:
    """Routes JSON-RPC methods and simplified tool calls to the dispatcher."""

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        default_session_id: str | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.default_session_id = default_session_id or settings.DEFAULT_SESSION_ID
        self._methods = {
            "initialize": self._initialize,
            "notifications/initialized": self._initialized,
            "ping": self._ping,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "resources/list": self._resources_list,
            "resources/read": self._resources_read,
            "prompts/list": self._prompts_list,
        }

    # ------------------------------------------------------------------
    # JSON-RPC envelope
    # ------------------------------------------------------------------

    def handle(self, body: dict[str, Any]) -> dict[str, Any]:
        """Answer one JSON-RPC request with a result or error envelope."""
        method = body.get("method")
        request_id = body.get("id")
        params = body.get("params")
        if not isinstance(params, dict):
            params = {}

        handler = self._methods.get(method) if isinstance(method, str) else None
        if handler is None:
            logger.warning("[MCP] Method not found: %s", method)
            return jsonrpc_error(request_id, METHOD_NOT_FOUND, "Method not found")

        return handler(request_id, params)

    def _initialize(self, request_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        logger.info("[MCP] Initialize requested")
        return jsonrpc_result(
            request_id,
            {
                "protocolVersion": settings.PROTOCOL_VERSION,
                "capabilities": {"tools": {}, "resources": {}, "prompts": {}},
                "serverInfo": {
                    "name": settings.SERVER_NAME,
                    "version": settings.SERVER_VERSION,
                },
            },
        )

    def _initialized(self, request_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        logger.info("[MCP] Initialized notification received")
        return jsonrpc_result(request_id, {})

    def _ping(self, request_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        return jsonrpc_result(request_id, {})

    def _tools_list(self, request_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        logger.info("[MCP] Tools list requested")
        return jsonrpc_result(request_id, {"tools": copy.deepcopy(TOOL_CATALOGUE)})

    def _tools_call(self, request_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        arguments = params.get("arguments") or {}
        logger.info("[MCP] Calling tool: %s", name)
        try:
            result = self.dispatcher.execute(name, arguments, self.default_session_id)
        except Exception as e:
            logger.error("[MCP] Tool execution error: %s", e)
            return jsonrpc_error(request_id, INTERNAL_ERROR, error_message(e))
        return jsonrpc_result(request_id, tool_call_content(result))

    def _resources_list(self, request_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        return jsonrpc_result(request_id, {"resources": copy.deepcopy(RESOURCE_CATALOGUE)})

    def _resources_read(self, request_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        uri = params.get("uri")
        if uri != ALERTS_URI:
            return jsonrpc_error(request_id, INVALID_PARAMS, "Resource not found")
        return jsonrpc_result(
            request_id,
            {
                "contents": [
                    {
                        "uri": ALERTS_URI,
                        "mimeType": "text/plain",
                        "text": self.dispatcher.market.alerts_digest(),
                    }
                ]
            },
        )

    def _prompts_list(self, request_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        return jsonrpc_result(request_id, {"prompts": []})

    # ------------------------------------------------------------------
    # Simplified envelope
    # ------------------------------------------------------------------

    def handle_simple(
        self, body: dict[str, Any], session_header: str | None = None
    ) -> tuple[int, dict[str, Any]]:
        """Answer a simplified tool call.

        Returns:
            (HTTP status code, response payload)

        Dispatcher exceptions propagate to the transport.
        """
        session_id = session_header or body.get("sessionId")
        tool = body.get("tool")
        if not tool:
            return 400, {"error": "Missing tool parameter"}

        logger.info("[Custom] Calling tool: %s", tool)
        result = self.dispatcher.execute(tool, body.get("params") or {}, session_id)
        return 200, result
