"""RowScan - result-mapping engine for declared record types."""

from __future__ import annotations

from row_scan.core.client import Client
from row_scan.core.connection import ConnectionConfig, open_session
from row_scan.core.exceptions import (
    AdapterError,
    ColumnScanFailure,
    ConfigurationError,
    ConnectionError,  # noqa: A004
    DestinationNotWritable,
    ExecutionError,
    MappingError,
    RowScanError,
    UnexpectedDestinationKind,
)
from row_scan.mapping.conditional import ConditionalMapper
from row_scan.mapping.result import ResultMapper
from row_scan.mapping.schema import SchemaIndex, column

__all__ = [
    # Client
    "Client",
    # Connection
    "ConnectionConfig",
    "open_session",
    # Mapping
    "ResultMapper",
    "ConditionalMapper",
    "SchemaIndex",
    "column",
    # Exceptions
    "RowScanError",
    "MappingError",
    "DestinationNotWritable",
    "UnexpectedDestinationKind",
    "ColumnScanFailure",
    "ExecutionError",
    "ConfigurationError",
    "AdapterError",
    "ConnectionError",
]
