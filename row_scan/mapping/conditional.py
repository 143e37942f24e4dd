"""Conditional-write mapper.

Maps the row returned by a conditional (compare-and-swap) write. The
returned row reflects the state after the attempt, so the destination is
updated whether or not the write applied.

Matching is lenient: a column is assigned only when it resolves to a field
AND the value's runtime type exactly matches the field's declared type.
Everything else is skipped and reported at debug level. Matched values are
staged first and written together; if one assignment fails the fields
already written are restored before ColumnScanFailure is raised.
"""

from __future__ import annotations

import logging
import types
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from row_scan.adapters.protocol import Session
from row_scan.core.exceptions import ColumnScanFailure, ExecutionError, UnexpectedDestinationKind
from row_scan.core.logger import Logger
from row_scan.mapping.destination import DestinationKind, resolve_destination
from row_scan.mapping.schema import schema_for

_logger = logging.getLogger(__name__)


def type_matches(value: Any, annotation: Any) -> bool:
    """Exact runtime type check against a declared annotation.

    ``bool`` does not satisfy ``int``; generics compare by origin;
    ``Optional[T]`` also accepts None; ``Any`` accepts everything.
    ``Annotated[T, ...]`` and ``NewType`` compare as their underlying type,
    ``Literal`` requires one of its values with the same exact type.
    """
    if annotation is Any:
        return True
    if annotation is None or annotation is type(None):
        return value is None
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return type_matches(value, supertype)
    origin = get_origin(annotation)
    if origin is Annotated:
        return type_matches(value, get_args(annotation)[0])
    if origin is Literal:
        return any(type(value) is type(arg) and value == arg for arg in get_args(annotation))
    if origin in (Union, types.UnionType):
        return any(type_matches(value, arg) for arg in get_args(annotation))
    target = origin if origin is not None else annotation
    if not isinstance(target, type):
        return False
    return type(value) is target


def _commit(destination: Any, staged: list[tuple[str, str, Any]]) -> None:
    """Assign staged values; on failure restore the fields already written."""
    previous: list[tuple[str, Any]] = []
    for name, column_name, value in staged:
        try:
            old = getattr(destination, name)
            setattr(destination, name, value)
        except (AttributeError, TypeError, ValueError) as e:
            for written, old_value in reversed(previous):
                object.__setattr__(destination, written, old_value)
            raise ColumnScanFailure(column_name, str(e)) from e
        previous.append((name, old))


class ConditionalMapper:
    """Maps conditional-write results into a single record."""

    def __init__(self, session: Session, logger: Logger | None = None) -> None:
        self._session = session
        self._logger = logger or _logger

    def map_conditional(self, destination: Any, statement: str, params: Any = None) -> bool:
        """Execute a conditional write and reconcile *destination*.

        Returns:
            The session's applied flag, unchanged.

        Raises:
            DestinationNotWritable: For immutable destinations.
            UnexpectedDestinationKind: For anything but a single record.
            ExecutionError: If the session fails to run the statement.
            ColumnScanFailure: If a type-compatible value cannot be assigned.
        """
        dest = resolve_destination(destination)
        if dest.kind is not DestinationKind.RECORD:
            raise UnexpectedDestinationKind(type(destination).__name__)

        try:
            applied, row = self._session.execute_conditional(statement, params)
        except Exception as e:
            raise ExecutionError(statement, str(e)) from e

        schema = schema_for(dest.element_type)  # type: ignore[arg-type]
        staged: list[tuple[str, str, Any]] = []
        for column_name, value in row.items():
            desc = schema.field_for(column_name)
            if desc is None:
                self._logger.debug("conditional: skipping unknown column %r", column_name)
                continue
            if not type_matches(value, desc.annotation):
                self._logger.debug(
                    "conditional: skipping column %r (%s) for field %r declared as %r",
                    column_name,
                    type(value).__name__,
                    desc.name,
                    desc.annotation,
                )
                continue
            staged.append((desc.name, column_name, value))

        _commit(destination, staged)
        self._logger.debug("conditional write applied=%s: %s", applied, statement)
        return applied
