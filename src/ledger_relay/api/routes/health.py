"""Health endpoint.

``/health`` reports liveness, the package version and the ledger size.  The
version string is read from ``ledger_relay.__version__``, which resolves it
from the installed package metadata.
"""

from fastapi import APIRouter

from ledger_relay import __version__
from ledger_relay.api.models import HealthResponse
from ledger_relay.store import count_entries

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__, entries=count_entries())
