"""
Shared pytest fixtures for the ledger relay test suite.

This module provides fixtures that are automatically available to all test files:
- Temporary ledger databases (empty, initialized, seeded with genesis)
- A FastAPI TestClient bound to a seeded ledger with no post delay
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ledger_relay.config import config, use_test_database
from ledger_relay.store import bootstrap_genesis, init_store

# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path(tmp_path: Path) -> Generator[Path, None, None]:
    """
    Point the config at a fresh, not yet created ledger database.

    Yields:
        Path to the temporary database file
    """
    with use_test_database(tmp_path / "ledger.db") as db_path:
        yield db_path


@pytest.fixture(scope="function")
def ledger(temp_db_path: Path) -> Path:
    """An initialized, empty ledger."""
    init_store()
    return temp_db_path


@pytest.fixture(scope="function")
def seeded_ledger(ledger: Path) -> Path:
    """An initialized ledger whose only entry is the genesis block."""
    bootstrap_genesis()
    return ledger


# ============================================================================
# API FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def no_post_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable the per-submission delay so API tests run fast."""
    monkeypatch.setattr(config.rate_limit, "post_delay_seconds", 0.0)


@pytest.fixture(scope="function")
def test_client(seeded_ledger: Path, no_post_delay: None) -> TestClient:
    """
    Create a FastAPI TestClient for endpoint testing.

    The ledger behind it holds the genesis block at serial 0.
    """
    from ledger_relay.api.server import app

    return TestClient(app)
