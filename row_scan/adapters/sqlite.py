"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from typing import Any

from row_scan.adapters.protocol import Slot
from row_scan.core.connection import ConnectionConfig
from row_scan.core.exceptions import ConnectionError  # noqa: A004
from row_scan.core.params import coerce_params

# Column carrying the outcome of a conditional write, as Cassandra names it.
APPLIED_COLUMN = "[applied]"


class SqliteRowSet:
    """Cursor-backed RowSet. Rows are pulled one at a time."""

    def __init__(self, cursor: sqlite3.Cursor) -> None:
        self._cursor = cursor
        if cursor.description is None:
            self._columns: list[str] = []
        else:
            self._columns = [desc[0] for desc in cursor.description]

    @property
    def columns(self) -> list[str]:
        return self._columns

    @property
    def row_count(self) -> int | None:
        # sqlite3 only knows the count after the cursor is drained
        return None

    def scan(self, slots: Sequence[Slot]) -> bool:
        row = self._cursor.fetchone()
        if row is None:
            return False
        for slot, value in zip(slots, row, strict=True):
            slot.assign(value)
        return True

    def close(self) -> None:
        self._cursor.close()


class SqliteSession:
    """Session over a single autocommit sqlite3 connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def execute(self, statement: str, params: Any = None) -> SqliteRowSet:
        cursor = self._connection.execute(statement, coerce_params(params) or ())
        return SqliteRowSet(cursor)

    def execute_conditional(
        self, statement: str, params: Any = None
    ) -> tuple[bool, dict[str, Any]]:
        """Run a conditional write.

        A result row is read the way Cassandra reports lightweight
        transactions: an ``[applied]`` column plus the current row. Statements
        without a result set report whether any row changed.
        """
        cursor = self._connection.execute(statement, coerce_params(params) or ())
        try:
            if cursor.description is None:
                return cursor.rowcount > 0, {}
            columns = [desc[0] for desc in cursor.description]
            row = cursor.fetchone()
            if row is None:
                return False, {}
            values = dict(zip(columns, row, strict=True))
            applied = bool(values.pop(APPLIED_COLUMN, True))
            return applied, values
        finally:
            cursor.close()

    def close(self) -> None:
        self._connection.close()

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection


class SqliteAdapter:
    """Builds SqliteSession instances."""

    def create_session(self, config: ConnectionConfig) -> SqliteSession:
        database = config.database or ":memory:"
        try:
            conn = sqlite3.connect(
                database,
                timeout=config.timeout or 5.0,
                isolation_level=None,
            )
        except sqlite3.Error as e:
            raise ConnectionError(f"Cannot open sqlite database '{database}': {e}") from e
        return SqliteSession(conn)
