"""RowScan exception hierarchy.

All exceptions are RowScan-specific. Raw driver exceptions are chained via
``__cause__`` but never raised directly to callers.
"""

from __future__ import annotations


class RowScanError(Exception):
    """Base exception for all RowScan errors."""


# --- Mapping ---


class MappingError(RowScanError):
    """Base for mapping errors."""


class DestinationNotWritable(MappingError):
    """Raised when a destination cannot be populated in place.

    Types, tuples, scalars and frozen records fall in this category.
    Raised before any statement is executed.
    """

    def __init__(self, kind: str, detail: str | None = None) -> None:
        self.kind = kind
        message = f"Destination of kind '{kind}' is not writable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnexpectedDestinationKind(MappingError):
    """Raised when a destination is neither a record nor a list."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unexpected destination kind: '{kind}'")


class ColumnScanFailure(MappingError):
    """Raised when a row cannot be scanned into its bound slots."""

    def __init__(self, column: str | None, detail: str) -> None:
        self.column = column
        if column is None:
            super().__init__(f"Row scan failed: {detail}")
        else:
            super().__init__(f"Row scan failed for column '{column}': {detail}")


# --- Execution ---


class ExecutionError(RowScanError):
    """Raised when the session fails to execute a statement."""

    def __init__(self, statement: str, detail: str) -> None:
        self.statement = statement
        super().__init__(f"Execution failed for '{statement}': {detail}")


# --- Configuration ---


class ConfigurationError(RowScanError):
    """Raised when connection settings are missing or malformed."""


# --- Adapter ---


class AdapterError(RowScanError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised when a session cannot be established."""
