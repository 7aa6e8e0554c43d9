"""Tests for ledger_relay.config loading and overrides."""

import configparser

import pytest

from ledger_relay.config import (
    RelayConfig,
    _load_from_ini,
    config,
    get_config_status,
    load_config,
    print_config_summary,
    use_test_database,
)


@pytest.mark.unit
def test_defaults():
    cfg = RelayConfig()

    assert cfg.server.port == 8000
    assert cfg.database.path == "data/ledger.db"
    assert cfg.rate_limit.post_delay_seconds == 2.0
    assert cfg.relay.read_window == 200


@pytest.mark.unit
def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RELAY_HOST", "127.0.0.1")
    monkeypatch.setenv("RELAY_PORT", "9100")
    monkeypatch.setenv("RELAY_DB_PATH", "/tmp/relay.db")
    monkeypatch.setenv("RELAY_LOG_LEVEL", "debug")
    monkeypatch.setenv("RELAY_LOG_FORMAT", "JSON")
    monkeypatch.setenv("RELAY_POST_DELAY_SECONDS", "0.5")
    monkeypatch.setenv("RELAY_READ_WINDOW", "50")

    cfg = load_config()

    assert cfg.server.host == "127.0.0.1"
    assert cfg.server.port == 9100
    assert cfg.database.path == "/tmp/relay.db"
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.format == "json"
    assert cfg.rate_limit.post_delay_seconds == 0.5
    assert cfg.relay.read_window == 50


@pytest.mark.unit
def test_unknown_log_format_is_ignored(monkeypatch):
    monkeypatch.setenv("RELAY_LOG_FORMAT", "xml")
    assert load_config().logging.format in ("simple", "detailed", "json")


@pytest.mark.unit
def test_ini_overrides():
    """Every section of server.ini should map onto its settings dataclass."""
    parser = configparser.ConfigParser()
    parser.read_dict(
        {
            "server": {"host": "localhost", "port": "8100"},
            "database": {"path": "var/ledger.db"},
            "logging": {"level": "warning", "format": "simple"},
            "rate_limit": {"post_delay_seconds": "0"},
            "relay": {"read_window": "10"},
        }
    )

    cfg = RelayConfig()
    _load_from_ini(parser, cfg)

    assert cfg.server.host == "localhost"
    assert cfg.server.port == 8100
    assert cfg.database.path == "var/ledger.db"
    assert cfg.logging.level == "WARNING"
    assert cfg.logging.format == "simple"
    assert cfg.rate_limit.post_delay_seconds == 0.0
    assert cfg.relay.read_window == 10


@pytest.mark.unit
def test_relative_database_path_is_under_project_root():
    from ledger_relay.config import PROJECT_ROOT

    cfg = RelayConfig()
    assert cfg.database.absolute_path == PROJECT_ROOT / "data" / "ledger.db"


@pytest.mark.unit
def test_use_test_database_restores_path(tmp_path):
    original = config.database.path

    with use_test_database(tmp_path / "x.db") as path:
        assert config.database.absolute_path == path

    assert config.database.path == original


@pytest.mark.unit
def test_config_status_and_summary(tmp_path, capsys):
    with use_test_database(tmp_path / "x.db"):
        status = get_config_status()
        print_config_summary()

    assert status["database_path"] == str(tmp_path / "x.db")
    assert status["read_window"] == config.relay.read_window
    out = capsys.readouterr().out
    assert "RELAY CONFIGURATION" in out
    assert f"Read window: {config.relay.read_window}" in out
