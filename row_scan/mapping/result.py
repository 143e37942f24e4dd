"""Result mapper.

Drives a Session and maps its rows into a record, a list of records, or a
list of scalars.

No-rows policy: a single-record destination is left untouched when the
statement returns zero rows. This is not an error; ``map`` returns 0.
"""

from __future__ import annotations

import logging
from typing import Any

from row_scan.adapters.protocol import RowSet, Session
from row_scan.core.exceptions import ColumnScanFailure, ExecutionError
from row_scan.core.logger import Logger
from row_scan.mapping.binder import RowValues, bind_row, bind_scalar
from row_scan.mapping.destination import Destination, DestinationKind, resolve_destination
from row_scan.mapping.schema import schema_for

_logger = logging.getLogger(__name__)


def execute(session: Session, statement: str, params: Any) -> RowSet:
    """Run *statement*, wrapping driver failures in ExecutionError."""
    try:
        return session.execute(statement, params)
    except Exception as e:
        raise ExecutionError(statement, str(e)) from e


def scan(rows: RowSet, values: RowValues) -> bool:
    """Scan the next row into *values*, wrapping driver failures."""
    try:
        return rows.scan(values.slots)
    except ColumnScanFailure:
        raise
    except Exception as e:
        raise ColumnScanFailure(None, str(e)) from e


class ResultMapper:
    """Maps query results into caller-supplied destinations.

    Args:
        session: Executes statements; never closed by the mapper.
        logger: Optional logger, defaults to this module's logger.
    """

    def __init__(self, session: Session, logger: Logger | None = None) -> None:
        self._session = session
        self._logger = logger or _logger

    def map(
        self,
        destination: Any,
        statement: str,
        params: Any = None,
        *,
        into: type | None = None,
    ) -> int:
        """Populate *destination* from the rows of *statement*.

        Returns:
            The number of rows mapped.

        Raises:
            DestinationNotWritable: Before execution, for immutable destinations.
            UnexpectedDestinationKind: Before execution, for unsupported shapes.
            ExecutionError: If the session fails to run the statement.
            ColumnScanFailure: If a row cannot be scanned.
        """
        dest = resolve_destination(destination, into)
        rows = execute(self._session, statement, params)
        try:
            self._logger.debug(
                "mapping %s into %s (columns=%s, rows=%s)",
                statement,
                dest.kind.value,
                rows.columns,
                rows.row_count,
            )
            if dest.kind is DestinationKind.RECORD:
                return self._map_record(dest, rows)
            if dest.kind is DestinationKind.RECORD_SEQUENCE:
                return self._map_records(dest, rows)
            return self._map_scalars(dest, rows)
        finally:
            rows.close()

    def _map_record(self, dest: Destination, rows: RowSet) -> int:
        schema = schema_for(dest.element_type)  # type: ignore[arg-type]
        values = bind_row(rows.columns, schema, dest.target)
        if not scan(rows, values):
            self._logger.debug("no rows; %s left unmodified", schema.record_type.__name__)
            return 0
        values.commit()
        return 1

    def _map_records(self, dest: Destination, rows: RowSet) -> int:
        schema = schema_for(dest.element_type)  # type: ignore[arg-type]
        columns = rows.columns
        count = 0
        while True:
            record = schema.new_record()
            values = bind_row(columns, schema, record)
            if not scan(rows, values):
                break
            values.commit()
            dest.target.append(record)
            count += 1
        self._logger.debug("mapped %d %s rows", count, schema.record_type.__name__)
        return count

    def _map_scalars(self, dest: Destination, rows: RowSet) -> int:
        columns = rows.columns
        count = 0
        while True:
            target, values = bind_scalar(columns)
            if not scan(rows, values):
                break
            dest.target.append(target.value)
            count += 1
        return count
