"""
Route registration entry point for the FastAPI application.

``health`` is registered before ``relay`` so that ``/health`` is not taken
by the ``/{offset}`` read route.
"""

from fastapi import FastAPI

from ledger_relay.api.routes import health, relay


def register_routes(app: FastAPI) -> None:
    """Register all API routes with the FastAPI app."""
    app.include_router(health.router)
    app.include_router(relay.router())
