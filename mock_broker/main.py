#!/usr/bin/env python3
"""
Mock brokerage HTTP server: JSON-RPC MCP envelope plus the simple REST envelope.
"""

import uvicorn

from mock_broker.core.config import settings
from mock_broker.core.logging import setup_logging
from mock_broker.core.service_factory import register_services
from mock_broker.mcp.http_transport import create_http_server

setup_logging()

app = create_http_server(register_services())


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HTTP_HOST, port=settings.HTTP_PORT, log_level="info")
