"""
Command-line interface for the ledger relay.

Provides CLI commands for relay management:
- init-db: Create the ledger database and seed it with the genesis block
- genesis: Print the genesis block encoding
- run: Start the HTTP relay

Usage:
    ledger-relay init-db
    ledger-relay genesis
    ledger-relay run [--host HOST] [--port PORT] [--db PATH]

Environment Variables:
    RELAY_HOST: Host to bind the server (default: 0.0.0.0)
    RELAY_PORT: Port for the server (default: 8000)
    RELAY_DB_PATH: Ledger database path (default: data/ledger.db)
    RELAY_LOG_LEVEL: Root log level (default: INFO)
"""

import argparse
import json
import logging
import sys

_LOG_FORMATS = {
    "simple": "%(levelname)s %(message)s",
    "detailed": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging() -> None:
    """Configure the root logger from ``config.logging``."""
    from ledger_relay.config import config

    handler = logging.StreamHandler()
    if config.logging.format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_LOG_FORMATS[config.logging.format]))
    logging.basicConfig(level=config.logging.level, handlers=[handler], force=True)


def _prepare_store() -> bool:
    """Create the schema and append genesis if empty; returns whether genesis was added."""
    from ledger_relay.store import bootstrap_genesis, init_store

    init_store()
    return bootstrap_genesis()


def cmd_init_db(args: argparse.Namespace) -> int:
    """
    Initialize the ledger database.

    Creates the schema and appends the genesis block when the ledger is empty.

    Returns:
        0 on success, 1 on error
    """
    from ledger_relay.store import StoreError

    try:
        seeded = _prepare_store()
    except StoreError as e:
        print(f"Error initializing ledger: {e}", file=sys.stderr)
        return 1

    if seeded:
        print("Ledger initialized with the genesis block.")
    else:
        print("Ledger already initialized.")
    return 0


def cmd_genesis(args: argparse.Namespace) -> int:
    """Print the genesis block encoding."""
    from ledger_relay.messages import genesis_block

    print(genesis_block().encode())
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run the HTTP relay.

    Configuration Priority:
        1. CLI arguments (--host, --port, --db)
        2. Environment variables (RELAY_HOST, RELAY_PORT, RELAY_DB_PATH)
        3. config/server.ini, then built-in defaults

    Returns:
        0 on clean shutdown (Ctrl+C), 1 on error during startup
    """
    from ledger_relay.config import config, print_config_summary
    from ledger_relay.store import StoreError

    db_path = getattr(args, "db", None)
    if db_path:
        config.database.path = db_path

    configure_logging()
    print_config_summary()

    try:
        _prepare_store()
    except StoreError as e:
        print(f"Error initializing ledger: {e}", file=sys.stderr)
        return 1

    from ledger_relay.api.server import start_server

    try:
        start_server(host=getattr(args, "host", None), port=getattr(args, "port", None))
        return 0
    except KeyboardInterrupt:
        print("\nRelay stopped.")
        return 0
    except Exception as e:
        print(f"Error starting relay: {e}", file=sys.stderr)
        return 1


def main() -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="ledger-relay",
        description="Ledger Relay - an append-only message relay",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser(
        "init-db",
        help="Initialize the ledger database",
        description="Create the ledger database and append the genesis block if it is empty.",
    )
    init_parser.set_defaults(func=cmd_init_db)

    genesis_parser = subparsers.add_parser(
        "genesis",
        help="Print the genesis block encoding",
    )
    genesis_parser.set_defaults(func=cmd_genesis)

    run_parser = subparsers.add_parser(
        "run",
        help="Run the relay",
        description="Initialize the ledger if needed and start the HTTP relay.",
    )
    run_parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="Server port (default: 8000, or RELAY_PORT env var)",
    )
    run_parser.add_argument(
        "--host",
        type=str,
        help="Host to bind to (default: 0.0.0.0, or RELAY_HOST env var)",
    )
    run_parser.add_argument(
        "--db",
        type=str,
        help="Ledger database path (default: data/ledger.db, or RELAY_DB_PATH env var)",
    )
    run_parser.set_defaults(func=cmd_run)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
