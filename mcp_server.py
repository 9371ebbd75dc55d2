#!/usr/bin/env python3
"""
Native FastMCP server over stdio.

Shares the tool catalogue and dispatcher with the HTTP server but runs in
its own process, so its market and accounts are independent.
"""

import argparse

from mock_broker.core.logging import setup_logging
from mock_broker.core.service_factory import register_services
from mock_broker.mcp.server import mcp

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the mock brokerage MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http"],
        default="stdio",
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3001)
    args = parser.parse_args()

    setup_logging()
    register_services()

    if args.transport == "stdio":
        mcp.run()
    else:
        mcp.run(transport="streamable-http", host=args.host, port=args.port)
