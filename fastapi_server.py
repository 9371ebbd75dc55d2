#!/usr/bin/env python3
"""
HTTP server for the JSON-RPC and simple tool-call envelopes.
"""

import uvicorn

from mock_broker.core.config import settings
from mock_broker.main import app

if __name__ == "__main__":
    uvicorn.run(
        app,
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
