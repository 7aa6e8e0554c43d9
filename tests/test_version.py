"""Tests for version management.

``ledger_relay.__version__`` is resolved from the installed package metadata
and must agree with every place the version is surfaced: the FastAPI
OpenAPI schema and the ``/health`` endpoint.
"""

from __future__ import annotations

import re

import pytest

import ledger_relay

_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+(-[A-Za-z0-9]+(\.[A-Za-z0-9]+)*)?$")


@pytest.mark.unit
class TestVersionAttribute:
    def test_version_matches_semver(self) -> None:
        assert _SEMVER_RE.match(ledger_relay.__version__)

    def test_openapi_version_matches_package(self) -> None:
        from ledger_relay.api.server import app

        assert app.version == ledger_relay.__version__


@pytest.mark.api
def test_health_version_matches_package(test_client) -> None:
    assert test_client.get("/health").json()["version"] == ledger_relay.__version__
