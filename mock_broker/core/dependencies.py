"""
FastAPI dependencies for dependency injection.
"""

from typing import cast

from fastapi import Request

from mock_broker.services.dispatcher import ToolDispatcher


def get_dispatcher(request: Request) -> ToolDispatcher:
    """
    Dependency to get the ToolDispatcher instance from application state.

    Raises:
        RuntimeError: If the dispatcher is not found in application state
    """
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        raise RuntimeError(
            "ToolDispatcher not found in application state. "
            "Ensure create_http_server() attached one."
        )
    return cast(ToolDispatcher, dispatcher)
