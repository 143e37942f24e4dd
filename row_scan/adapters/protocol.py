"""Session and adapter protocols.

Every adapter module MUST implement these protocols. The mapping layer only
ever talks to a Session, never to a driver.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from row_scan.core.connection import ConnectionConfig


@runtime_checkable
class Slot(Protocol):
    """A scan target: receives one column value."""

    def assign(self, value: Any) -> None: ...


@runtime_checkable
class RowSet(Protocol):
    """Pull-based result cursor."""

    @property
    def columns(self) -> list[str]:
        """Column names in result order."""
        ...

    @property
    def row_count(self) -> int | None:
        """Total rows if known up front, else None."""
        ...

    def scan(self, slots: Sequence[Slot]) -> bool:
        """Fill *slots* positionally from the next row.

        Returns False once the result is exhausted.
        """
        ...

    def close(self) -> None:
        """Release the underlying cursor."""
        ...


@runtime_checkable
class Session(Protocol):
    """Statement execution protocol."""

    def execute(self, statement: str, params: Any = None) -> RowSet:
        """Execute a statement and return its rows."""
        ...

    def execute_conditional(
        self, statement: str, params: Any = None
    ) -> tuple[bool, dict[str, Any]]:
        """Execute a conditional write.

        Returns the applied flag and the row as it exists after the attempt.
        """
        ...

    def close(self) -> None:
        """Close the session and its connection."""
        ...


@runtime_checkable
class Adapter(Protocol):
    """Builds sessions for one driver."""

    def create_session(self, config: ConnectionConfig) -> Session:
        """Open a session for *config*."""
        ...
