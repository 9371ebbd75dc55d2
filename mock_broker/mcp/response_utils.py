"""
JSON-RPC 2.0 envelope helpers for the MCP transport.
"""

import json
from typing import Any

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def jsonrpc_result(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    """
    Create a JSON-RPC success response.

    Args:
        request_id: The id of the request being answered
        result: The method result

    Returns:
        dict[str, Any]: JSON-RPC response envelope
    """
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def jsonrpc_error(request_id: Any, code: int, message: str) -> dict[str, Any]:
    """
    Create a JSON-RPC error response.

    Args:
        request_id: The id of the request being answered (None if unknown)
        code: JSON-RPC error code
        message: Human readable error message

    Returns:
        dict[str, Any]: JSON-RPC error envelope
    """
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }


def tool_call_content(result: Any) -> dict[str, Any]:
    """Wrap a tool result as MCP text content."""
    return {
        "content": [
            {"type": "text", "text": json.dumps(result, default=str, indent=2)}
        ],
        "isError": False,
    }


def error_message(exception: Exception) -> str:
    """Message for an exception crossing the adapter boundary."""
    detail = getattr(exception, "detail", None)
    return str(detail) if detail is not None else str(exception)
