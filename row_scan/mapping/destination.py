"""Destination shape resolution.

A destination is classified once, at call entry, into a closed set of
variants. Mappers dispatch on the variant and never inspect the raw object
again.
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from row_scan.core.exceptions import DestinationNotWritable, UnexpectedDestinationKind
from row_scan.mapping.schema import is_frozen, is_record_type

_IMMUTABLE_SCALARS = (str, bytes, int, float, complex, bool, frozenset, type(None))


class DestinationKind(Enum):
    RECORD = "record"
    RECORD_SEQUENCE = "record_sequence"
    SCALAR_SEQUENCE = "scalar_sequence"


@dataclass(frozen=True)
class Destination:
    """A classified, writable destination."""

    kind: DestinationKind
    target: Any
    element_type: type | None = None


def _kind_name(obj: Any) -> str:
    if isinstance(obj, type):
        return f"type[{obj.__name__}]"
    return type(obj).__name__


def _check_record_writable(record_type: type, kind: str) -> None:
    if is_frozen(record_type):
        raise DestinationNotWritable(kind, f"{record_type.__name__} is frozen")


def resolve_destination(target: Any, into: type | None = None) -> Destination:
    """Classify *target*.

    For list destinations the element type is *into* if given, else the type
    of the list's first element. An empty list without *into* is treated as
    a list of scalars.

    Raises:
        DestinationNotWritable: For classes, immutable values and frozen records.
        UnexpectedDestinationKind: For any other unsupported shape.
    """
    kind = _kind_name(target)

    if isinstance(target, type):
        raise DestinationNotWritable(kind, "pass an instance, not a class")

    if is_record_type(type(target)):
        _check_record_writable(type(target), kind)
        return Destination(DestinationKind.RECORD, target, type(target))

    # byte buffers hold only ints in 0..255, not row values
    if isinstance(target, bytearray):
        raise UnexpectedDestinationKind(kind)

    if isinstance(target, MutableSequence):
        element_type = into
        if element_type is None and len(target) > 0:
            element_type = type(target[0])
        if element_type is not None and is_record_type(element_type):
            _check_record_writable(element_type, kind)
            return Destination(DestinationKind.RECORD_SEQUENCE, target, element_type)
        return Destination(DestinationKind.SCALAR_SEQUENCE, target, element_type)

    if isinstance(target, (_IMMUTABLE_SCALARS, Sequence)):
        raise DestinationNotWritable(kind)

    raise UnexpectedDestinationKind(kind)
