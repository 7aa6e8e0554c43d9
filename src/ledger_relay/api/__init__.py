"""HTTP surface of the ledger relay (FastAPI)."""
