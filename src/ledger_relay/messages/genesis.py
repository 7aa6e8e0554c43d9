"""The bootstrap block appended to an empty ledger."""

from __future__ import annotations

from ledger_relay.messages.block import NewBlock

GENESIS_NONCE = 1337.0

# Hardcoded bootstrap account, not derived from any key material.
GENESIS_MINER_ACCOUNT = (
    "AAAAB3NzaC1yc2EAAAADAQABAAAAQQDbXz4rfbrRrXYQJbwuC"
    "kIyIsccHRpxhxqxgKeneVF4eUXof6e2nLvdXkGA0Y6uBAQ6N7qKxasVTR/2s1N2OBWF"
)


def genesis_block() -> NewBlock:
    """Return the genesis block: no transactions, nonce 1337."""
    return NewBlock(nonce=GENESIS_NONCE, miner_account=GENESIS_MINER_ACCOUNT, transactions=())
