"""
Relay configuration management.

This module handles loading and accessing relay configuration from multiple
sources with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/server.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The RelayConfig
dataclass provides typed access to all settings.

Usage:
    from ledger_relay.config import config

    print(config.server.port)
    print(config.database.absolute_path)

Environment Variable Mapping:
    RELAY_HOST                -> server.host
    RELAY_PORT                -> server.port
    RELAY_DB_PATH             -> database.path
    RELAY_LOG_LEVEL           -> logging.level
    RELAY_LOG_FORMAT          -> logging.format
    RELAY_POST_DELAY_SECONDS  -> rate_limit.post_delay_seconds
    RELAY_READ_WINDOW         -> relay.read_window
"""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/, data/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "server.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "server.example.ini"


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """Network server configuration."""

    host: str = "0.0.0.0"  # nosec B104 - intentional for server binding
    port: int = 8000


@dataclass
class DatabaseSettings:
    """Ledger store configuration."""

    path: str = "data/ledger.db"

    @property
    def absolute_path(self) -> Path:
        """Get absolute path to the ledger database file."""
        p = Path(self.path)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed", "json"] = "detailed"


@dataclass
class RateLimitSettings:
    """Rate limiting configuration."""

    # Each accepted POST holds its response this long before returning.
    post_delay_seconds: float = 2.0


@dataclass
class RelaySettings:
    """Read-path configuration."""

    # GET /<offset> returns entries offset..offset+read_window inclusive.
    read_window: int = 200


@dataclass
class RelayConfig:
    """
    Complete relay configuration.

    Aggregates all settings sections. Access via the module-level `config`
    singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    rate_limit: RateLimitSettings = field(default_factory=RateLimitSettings)
    relay: RelaySettings = field(default_factory=RelaySettings)


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _load_from_ini(parser: configparser.ConfigParser, cfg: RelayConfig) -> None:
    """Load configuration from parsed INI file into RelayConfig."""
    # Server section
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")

    # Database section
    if parser.has_section("database"):
        if parser.has_option("database", "path"):
            cfg.database.path = parser.get("database", "path")

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed", "json"):
                cfg.logging.format = val  # type: ignore[assignment]

    # Rate limit section
    if parser.has_section("rate_limit"):
        if parser.has_option("rate_limit", "post_delay_seconds"):
            cfg.rate_limit.post_delay_seconds = parser.getfloat(
                "rate_limit", "post_delay_seconds"
            )

    # Relay section
    if parser.has_section("relay"):
        if parser.has_option("relay", "read_window"):
            cfg.relay.read_window = parser.getint("relay", "read_window")


def _apply_env_overrides(cfg: RelayConfig) -> None:
    """Apply environment variable overrides to configuration."""
    if env_host := os.getenv("RELAY_HOST"):
        cfg.server.host = env_host
    if env_port := os.getenv("RELAY_PORT"):
        cfg.server.port = int(env_port)

    if env_db := os.getenv("RELAY_DB_PATH"):
        cfg.database.path = env_db

    if env_log := os.getenv("RELAY_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()
    if env_format := os.getenv("RELAY_LOG_FORMAT"):
        if env_format.lower() in ("simple", "detailed", "json"):
            cfg.logging.format = env_format.lower()  # type: ignore[assignment]

    if env_delay := os.getenv("RELAY_POST_DELAY_SECONDS"):
        cfg.rate_limit.post_delay_seconds = float(env_delay)

    if env_window := os.getenv("RELAY_READ_WINDOW"):
        cfg.relay.read_window = int(env_window)


def load_config() -> RelayConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/server.ini
        3. config/server.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        RelayConfig: Fully populated configuration object.
    """
    cfg = RelayConfig()

    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        config_file = CONFIG_EXAMPLE

    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> "RelayConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton. Already-built FastAPI
    apps keep reading the same singleton object, so prefer mutating fields
    in tests over reloading.

    Returns:
        RelayConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "database_path": str(config.database.absolute_path),
        "post_delay_seconds": config.rate_limit.post_delay_seconds,
        "read_window": config.relay.read_window,
    }


def print_config_summary() -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status()
    print("\n" + "=" * 60)
    print("RELAY CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("WARNING: Using example config (copy to server.ini for production)")
    print("-" * 60)
    print(f"Server:      {config.server.host}:{config.server.port}")
    print(f"Database:    {status['database_path']}")
    print(f"Post delay:  {status['post_delay_seconds']}s")
    print(f"Read window: {status['read_window']}")
    print(f"Log level:   {config.logging.level}")
    print("=" * 60 + "\n")


# =============================================================================
# TEST HELPERS
# =============================================================================


class use_test_database:
    """
    Context manager for using a temporary ledger database.

    Usage:
        from ledger_relay.config import use_test_database

        def test_something(tmp_path):
            with use_test_database(tmp_path / "ledger.db"):
                store.init_store()

    Args:
        db_path: Path to the test database file
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self.original_path: str | None = None

    def __enter__(self) -> Path:
        """Set up test database path."""
        self.original_path = config.database.path
        config.database.path = str(self.db_path)
        return self.db_path

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Restore original database path."""
        if self.original_path is not None:
            config.database.path = self.original_path
        return None
