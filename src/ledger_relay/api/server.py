"""
FastAPI server for the ledger relay.

This module builds the FastAPI application that accepts message submissions
and serves the ledger back by offset. It sets up:
- The submission, read and health routes
- A handler that turns store failures into plain-text 500 responses

The server runs on port 8000 by default; see ``ledger_relay.config``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from ledger_relay import __version__
from ledger_relay.api.routes import register_routes
from ledger_relay.store import StoreError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application with all routes registered."""
    application = FastAPI(title="Ledger Relay", version=__version__)

    @application.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("store failure while serving %s %s: %s", request.method, request.url.path, exc)
        return PlainTextResponse("Failed to read the ledger", status_code=500)

    register_routes(application)
    return application


app = create_app()


def start_server(host: str | None = None, port: int | None = None) -> None:
    """
    Run the relay with uvicorn.

    Args:
        host: Interface to bind; defaults to ``config.server.host``.
        port: Port to bind; defaults to ``config.server.port``.
    """
    import uvicorn

    from ledger_relay.config import config

    host = host or config.server.host
    port = port or config.server.port
    logger.info("Listening on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level=config.logging.level.lower())
