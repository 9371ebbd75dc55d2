"""
Shared dispatcher access for the FastMCP tool functions.
"""

from typing import TYPE_CHECKING

from mock_broker.core.container import container

if TYPE_CHECKING:
    from mock_broker.services.dispatcher import ToolDispatcher


def get_dispatcher() -> "ToolDispatcher":
    """Get the ToolDispatcher instance from the container.

    Raises:
        RuntimeError: If the dispatcher is not registered in the container
    """
    from mock_broker.services.dispatcher import ToolDispatcher

    return container.get(ToolDispatcher)


def is_dispatcher_available() -> bool:
    from mock_broker.services.dispatcher import ToolDispatcher

    return container.is_registered(ToolDispatcher)
