"""Row binding.

Drivers scan positionally, in result column order. The binder rebuilds that
positional alignment from a name-keyed SchemaIndex: one slot per column,
either bound to a record field or discarding its value.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from row_scan.core.exceptions import ColumnScanFailure
from row_scan.mapping.schema import SchemaIndex


class FieldSlot:
    """Stages one column value for a record attribute."""

    __slots__ = ("record", "name", "column", "value", "filled")

    def __init__(self, record: Any, name: str, column: str) -> None:
        self.record = record
        self.name = name
        self.column = column
        self.value: Any = None
        self.filled = False

    def assign(self, value: Any) -> None:
        self.value = value
        self.filled = True

    def commit(self) -> None:
        if not self.filled:
            return
        try:
            setattr(self.record, self.name, self.value)
        except (AttributeError, TypeError, ValueError) as e:
            raise ColumnScanFailure(self.column, str(e)) from e


class ValueSlot:
    """Receives a value directly; used for scalar destinations."""

    __slots__ = ("value", "filled")

    def __init__(self) -> None:
        self.value: Any = None
        self.filled = False

    def assign(self, value: Any) -> None:
        self.value = value
        self.filled = True


class DiscardSlot:
    """Accepts a value and drops it."""

    __slots__ = ()

    def assign(self, value: Any) -> None:
        pass

    def __repr__(self) -> str:
        return "DISCARD"


DISCARD = DiscardSlot()


class RowValues:
    """Ordered scan slots for one row, aligned 1:1 with the result columns."""

    def __init__(self, slots: list[Any]) -> None:
        self.slots = slots

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.slots)

    def __getitem__(self, index: int) -> Any:
        return self.slots[index]

    @property
    def bound(self) -> list[FieldSlot]:
        return [slot for slot in self.slots if isinstance(slot, FieldSlot)]

    def commit(self) -> None:
        """Write staged values into the record."""
        for slot in self.bound:
            slot.commit()


def bind_row(columns: Sequence[str], schema: SchemaIndex, record: Any) -> RowValues:
    """Build scan slots for *record*, one per column in *columns*.

    Columns without a matching field get the DISCARD slot.
    """
    slots: list[Any] = []
    for column_name in columns:
        desc = schema.field_for(column_name)
        if desc is None:
            slots.append(DISCARD)
        else:
            slots.append(FieldSlot(record, desc.name, column_name))
    return RowValues(slots)


def bind_scalar(columns: Sequence[str]) -> tuple[ValueSlot, RowValues]:
    """Slots scanning the first column into a ValueSlot, discarding the rest."""
    target = ValueSlot()
    if not columns:
        return target, RowValues([])
    return target, RowValues([target, *(DISCARD for _ in columns[1:])])
