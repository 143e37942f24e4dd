"""Unit tests for connection configuration."""

from __future__ import annotations

import pytest

from row_scan.adapters.sqlite import SqliteSession
from row_scan.core.connection import ConnectionConfig, open_session
from row_scan.core.exceptions import AdapterError, ConfigurationError


class TestFromSource:
    def test_reads_prefixed_keys(self) -> None:
        source = {
            "CASS_DB_HOST": "10.0.0.1, 10.0.0.2,",
            "CASS_DB_PORT": "9043",
            "CASS_DB_USER": "svc",
            "CASS_DB_PASS": "secret",
            "CASS_DB_KEYSPACE": "accounts",
        }
        config = ConnectionConfig.from_source(source)
        assert config.driver == "cassandra"
        assert config.hosts == ["10.0.0.1", "10.0.0.2"]
        assert config.port == 9043
        assert config.user == "svc"
        assert config.password == "secret"
        assert config.database == "accounts"

    def test_blank_values_are_unset(self) -> None:
        config = ConnectionConfig.from_source({"CASS_DB_PORT": " ", "CASS_DB_USER": ""})
        assert config.port is None
        assert config.user is None
        assert config.hosts == []

    def test_custom_prefix_and_driver(self) -> None:
        source = {"APP_DB_DRIVER": "sqlite", "APP_DB_KEYSPACE": ":memory:"}
        config = ConnectionConfig.from_source(source, prefix="APP_DB_")
        assert config.driver == "sqlite"
        assert config.database == ":memory:"

    def test_invalid_port(self) -> None:
        with pytest.raises(ConfigurationError, match="CASS_DB_"):
            ConnectionConfig.from_source({"CASS_DB_PORT": "not-a-port"})


class TestOpenSession:
    def test_sqlite(self, sqlite_config: ConnectionConfig) -> None:
        session = open_session(sqlite_config)
        try:
            assert isinstance(session, SqliteSession)
        finally:
            session.close()

    def test_driver_name_case_insensitive(self) -> None:
        session = open_session(ConnectionConfig(driver="SQLite", database=":memory:"))
        session.close()

    def test_unsupported_driver(self) -> None:
        with pytest.raises(AdapterError, match="Unsupported database driver"):
            open_session(ConnectionConfig(driver="db2"))
