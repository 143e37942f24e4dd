"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from row_scan.core.connection import ConnectionConfig


class FakeRowSet:
    """In-memory RowSet that records whether it was closed."""

    def __init__(self, columns: list[str], rows: list[tuple[Any, ...]]) -> None:
        self._columns = columns
        self._rows = list(rows)
        self._index = 0
        self.closed = False

    @property
    def columns(self) -> list[str]:
        return self._columns

    @property
    def row_count(self) -> int | None:
        return len(self._rows)

    def scan(self, slots: Sequence[Any]) -> bool:
        if self._index >= len(self._rows):
            return False
        row = self._rows[self._index]
        self._index += 1
        for slot, value in zip(slots, row, strict=True):
            slot.assign(value)
        return True

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Session returning canned results and recording every call."""

    def __init__(
        self,
        columns: list[str] | None = None,
        rows: list[tuple[Any, ...]] | None = None,
        conditional: tuple[bool, dict[str, Any]] | None = None,
    ) -> None:
        self.columns = columns or []
        self.rows = rows or []
        self.conditional = conditional or (True, {})
        self.calls: list[tuple[str, Any]] = []
        self.row_sets: list[FakeRowSet] = []
        self.closed = False

    def execute(self, statement: str, params: Any = None) -> FakeRowSet:
        self.calls.append((statement, params))
        row_set = FakeRowSet(self.columns, self.rows)
        self.row_sets.append(row_set)
        return row_set

    def execute_conditional(
        self, statement: str, params: Any = None
    ) -> tuple[bool, dict[str, Any]]:
        self.calls.append((statement, params))
        return self.conditional

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_session():
    """Factory for FakeSession instances.

    Usage:
        session = fake_session(["id", "user_name"], [(42, "alice")])
    """

    def _make(
        columns: list[str] | None = None,
        rows: list[tuple[Any, ...]] | None = None,
        conditional: tuple[bool, dict[str, Any]] | None = None,
    ) -> FakeSession:
        return FakeSession(columns, rows, conditional)

    return _make


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:")
