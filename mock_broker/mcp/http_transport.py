"""HTTP transport for the mock brokerage MCP server"""

import json
import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from mock_broker import __version__
from mock_broker.core.config import settings
from mock_broker.core.dependencies import get_dispatcher
from mock_broker.core.service_factory import register_services
from mock_broker.mcp.catalogue import TOOL_CATALOGUE
from mock_broker.mcp.protocol import MCPProtocolHandler, is_jsonrpc
from mock_broker.mcp.response_utils import PARSE_ERROR, error_message, jsonrpc_error
from mock_broker.services.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)

MCP_PATHS = ("/", "/mcp", "/api/mcp")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path and client for every request"""

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        client = request.client.host if request.client else "-"
        logger.info("%s %s from %s", request.method, request.url.path, client)
        return await call_next(request)


async def _read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return {}
    return json.loads(raw.decode())


def create_http_server(dispatcher: ToolDispatcher | None = None) -> FastAPI:
    """Create the FastAPI app serving both the JSON-RPC and simplified envelopes.

    Args:
        dispatcher: Dispatcher to serve; the container's process-wide
            instance is used when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting HTTP MCP server")
        yield
        logger.info("Shutting down HTTP MCP server")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Mock brokerage exposed over MCP JSON-RPC and a simple REST envelope",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher or register_services()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type", settings.SESSION_HEADER],
    )

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": __version__,
            "transport": "http",
        }

    @app.get("/tools")
    async def list_tools() -> dict[str, Any]:
        """List available MCP tools"""
        return {"tools": TOOL_CATALOGUE}

    async def preflight() -> Response:
        return Response(status_code=200)

    async def mcp_endpoint(
        request: Request,
        dispatcher: Annotated[ToolDispatcher, Depends(get_dispatcher)],
    ) -> Response:
        """Handle JSON-RPC and simplified tool calls"""
        try:
            body = await _read_json_body(request)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return JSONResponse(
                status_code=400,
                content=jsonrpc_error(None, PARSE_ERROR, "Parse error"),
            )

        handler = MCPProtocolHandler(dispatcher)
        try:
            if is_jsonrpc(body):
                return JSONResponse(content=handler.handle(body))

            if not isinstance(body, dict):
                body = {}
            status_code, payload = handler.handle_simple(
                body, request.headers.get(settings.SESSION_HEADER)
            )
            return JSONResponse(status_code=status_code, content=payload)
        except Exception as e:
            logger.exception("Unexpected error handling request")
            return JSONResponse(status_code=500, content={"error": error_message(e)})

    for path in MCP_PATHS:
        app.add_api_route(path, mcp_endpoint, methods=["POST"])
        app.add_api_route(path, preflight, methods=["OPTIONS"], include_in_schema=False)

    return app


async def run_http_server(
    host: str = settings.HTTP_HOST,
    port: int = settings.HTTP_PORT,
    dispatcher: ToolDispatcher | None = None,
) -> None:
    """Run the HTTP server"""
    import uvicorn

    app = create_http_server(dispatcher)

    logger.info("Starting %s on %s:%s", settings.PROJECT_NAME, host, port)
    logger.info("  - MCP JSON-RPC: http://%s:%s/mcp", host, port)
    logger.info("  - Simple envelope: http://%s:%s/", host, port)
    logger.info("  - Health Check: http://%s:%s/health", host, port)
    logger.info("  - Tools List: http://%s:%s/tools", host, port)

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=False,
        timeout_keep_alive=30,
        timeout_graceful_shutdown=10,
    )

    server = uvicorn.Server(config)
    await server.serve()
