"""Mapping layer - bind result rows onto declared records."""

from __future__ import annotations

from row_scan.mapping.binder import DISCARD, FieldSlot, RowValues, bind_row
from row_scan.mapping.conditional import ConditionalMapper, type_matches
from row_scan.mapping.destination import Destination, DestinationKind, resolve_destination
from row_scan.mapping.naming import resolve
from row_scan.mapping.result import ResultMapper
from row_scan.mapping.schema import FieldDescriptor, SchemaIndex, column, schema_for

__all__ = [
    "resolve",
    "SchemaIndex",
    "FieldDescriptor",
    "schema_for",
    "column",
    "bind_row",
    "RowValues",
    "FieldSlot",
    "DISCARD",
    "Destination",
    "DestinationKind",
    "resolve_destination",
    "ResultMapper",
    "ConditionalMapper",
    "type_matches",
]
