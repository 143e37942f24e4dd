"""Cassandra adapter using the DataStax driver (cassandra-driver).

The driver is imported lazily so this module loads without it installed.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from row_scan.adapters.protocol import Slot
from row_scan.core.connection import ConnectionConfig
from row_scan.core.exceptions import AdapterError, ConnectionError  # noqa: A004
from row_scan.core.params import coerce_params

APPLIED_COLUMN = "[applied]"
DEFAULT_PORT = 9042


class CassandraRowSet:
    """RowSet over a driver ResultSet. Paging is handled by the driver."""

    def __init__(self, result: Any) -> None:
        self._result = result
        self._columns = list(result.column_names or [])
        self._rows: Iterator[Any] = iter(result)

    @property
    def columns(self) -> list[str]:
        return self._columns

    @property
    def row_count(self) -> int | None:
        return None

    def scan(self, slots: Sequence[Slot]) -> bool:
        row = next(self._rows, None)
        if row is None:
            return False
        for slot, value in zip(slots, row, strict=True):
            slot.assign(value)
        return True

    def close(self) -> None:
        # Drop the reference so remaining pages are never fetched
        self._rows = iter(())


class CassandraSession:
    """Session wrapping a driver Session and its Cluster."""

    def __init__(self, session: Any, cluster: Any = None) -> None:
        self._session = session
        self._cluster = cluster

    def execute(self, statement: str, params: Any = None) -> CassandraRowSet:
        return CassandraRowSet(self._session.execute(statement, coerce_params(params)))

    def execute_conditional(
        self, statement: str, params: Any = None
    ) -> tuple[bool, dict[str, Any]]:
        result = self._session.execute(statement, coerce_params(params))
        applied = bool(result.was_applied)
        row = result.one()
        if row is None:
            return applied, {}
        values = dict(zip(result.column_names or [], row, strict=True))
        values.pop(APPLIED_COLUMN, None)
        return applied, values

    def close(self) -> None:
        if self._cluster is not None:
            self._cluster.shutdown()
        else:
            self._session.shutdown()


class CassandraAdapter:
    """Builds CassandraSession instances from a ConnectionConfig."""

    def create_session(self, config: ConnectionConfig) -> CassandraSession:
        try:
            from cassandra.auth import PlainTextAuthProvider
            from cassandra.cluster import Cluster
            from cassandra.query import tuple_factory
        except ImportError as e:
            raise AdapterError(
                "cassandra-driver is not installed; pip install row-scan[cassandra]"
            ) from e

        if not config.hosts:
            raise ConnectionError("No cassandra hosts configured")

        auth_provider = None
        if config.user is not None:
            auth_provider = PlainTextAuthProvider(username=config.user, password=config.password)

        try:
            cluster = Cluster(
                contact_points=config.hosts,
                port=config.port or DEFAULT_PORT,
                auth_provider=auth_provider,
                **config.extra,
            )
        except (TypeError, ValueError) as e:
            raise ConnectionError(f"Invalid cassandra cluster options {config.extra}: {e}") from e

        try:
            session = cluster.connect(config.database)
        except Exception as e:
            cluster.shutdown()
            raise ConnectionError(f"Error connecting to cassandra at {config.hosts}: {e}") from e

        # Positional rows keep scan() aligned with column_names
        session.row_factory = tuple_factory
        if config.timeout is not None:
            session.default_timeout = config.timeout
        return CassandraSession(session, cluster)
