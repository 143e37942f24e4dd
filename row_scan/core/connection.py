"""Connection configuration and session construction.

ConnectionConfig is a Pydantic model for type-safe connection config.
open_session() resolves the adapter named by ``config.driver`` and asks it
for a ready Session.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Protocol

from pydantic import BaseModel, ValidationError

from row_scan.core.exceptions import AdapterError, ConfigurationError

_logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "CASS_DB_"


class ConfigSource(Protocol):
    """Anything exposing ``get(key)``, e.g. ``os.environ``."""

    def get(self, key: str) -> str | None: ...


class ConnectionConfig(BaseModel):
    """Configuration for database sessions."""

    driver: str = "cassandra"
    hosts: list[str] = []
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None  # keyspace, or file path for sqlite
    timeout: float | None = None
    extra: dict[str, Any] = {}

    @classmethod
    def from_source(cls, source: ConfigSource, prefix: str = DEFAULT_PREFIX) -> ConnectionConfig:
        """Build a config from ``{prefix}HOST``, ``{prefix}PORT`` etc.

        HOST is a comma-separated list of contact points. Blank values are
        treated as unset.
        """

        def _get(key: str) -> str | None:
            value = source.get(prefix + key)
            if value is None:
                return None
            value = value.strip()
            return value or None

        data: dict[str, Any] = {
            "port": _get("PORT"),
            "user": _get("USER"),
            "password": _get("PASS"),
            "database": _get("KEYSPACE"),
            "timeout": _get("TIMEOUT"),
        }
        driver = _get("DRIVER")
        if driver is not None:
            data["driver"] = driver
        hosts = _get("HOST")
        if hosts is not None:
            data["hosts"] = [h.strip() for h in hosts.split(",") if h.strip()]

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid connection settings under '{prefix}': {e}") from e


# Adapter module mapping: driver name → (module_path, adapter_class)
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    "sqlite": ("row_scan.adapters.sqlite", "SqliteAdapter"),
    "cassandra": ("row_scan.adapters.cassandra", "CassandraAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load an adapter by driver name."""
    driver_lower = driver.lower()
    if driver_lower not in _ADAPTER_MAP:
        raise AdapterError(f"Unsupported database driver: {driver}")

    module_path, cls_name = _ADAPTER_MAP[driver_lower]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


def open_session(config: ConnectionConfig) -> Any:
    """Create a Session for *config* using its driver's adapter."""
    adapter = _load_adapter(config.driver)
    _logger.debug("opening %s session (database=%s)", config.driver, config.database)
    return adapter.create_session(config)
