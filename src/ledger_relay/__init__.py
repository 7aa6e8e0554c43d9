"""Ledger Relay: an append-only message relay for a toy ledger.

Clients POST colon-delimited ``transaction`` and ``block`` records; each one
is validated by the message codec (:mod:`ledger_relay.messages`), appended to
an ordered log (:mod:`ledger_relay.store`) and can be read back by offset
over HTTP (:mod:`ledger_relay.api`).

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("ledger-relay")
except PackageNotFoundError:
    __version__ = "0.1.0"
