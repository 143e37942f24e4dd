"""Record schema introspection.

Supports dataclasses and Pydantic models. A SchemaIndex maps resolved
column names to field positions for exactly one record type and is never
mutated after construction.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
import types
import typing
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel

from row_scan.core.exceptions import UnexpectedDestinationKind
from row_scan.mapping.naming import resolve

_logger = logging.getLogger(__name__)

# dataclass field metadata key holding an explicit column name
COLUMN_KEY = "column"

_ZERO_FACTORIES: dict[Any, Any] = {
    int: int,
    float: float,
    complex: complex,
    str: str,
    bytes: bytes,
    bool: bool,
    Decimal: Decimal,
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
}


def column(name: str, **kwargs: Any) -> Any:
    """Declare a dataclass field stored under an explicit column name.

    Accepts the same keyword arguments as ``dataclasses.field``.
    """
    metadata = {**kwargs.pop("metadata", {}), COLUMN_KEY: name}
    return dataclasses.field(metadata=metadata, **kwargs)


def zero_value(annotation: Any) -> Any:
    """Return the zero value for a declared type."""
    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        args = get_args(annotation)
        if type(None) in args:
            return None
        return zero_value(args[0])

    target = origin if origin is not None else annotation
    factory = _ZERO_FACTORIES.get(target)
    return factory() if factory is not None else None


def is_record_type(cls: Any) -> bool:
    """Check if *cls* is a dataclass or Pydantic model class."""
    if not isinstance(cls, type):
        return False
    return dataclasses.is_dataclass(cls) or issubclass(cls, BaseModel)


def is_frozen(cls: type) -> bool:
    """Check if instances of a record type reject attribute assignment."""
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    if issubclass(cls, BaseModel):
        return bool(cls.model_config.get("frozen", False))
    return False


@dataclass(frozen=True)
class FieldDescriptor:
    """One declared field of a record type."""

    position: int
    name: str
    override: str | None
    annotation: Any
    column: str


def _field_annotation(cls: type, f: dataclasses.Field) -> Any:
    """Resolve one field's annotation, falling back to Any for that field only."""
    if not isinstance(f.type, str):
        return f.type
    holder = types.SimpleNamespace(__annotations__={f.name: f.type})
    for owner in cls.__mro__:
        module = sys.modules.get(owner.__module__)
        if module is None:
            continue
        try:
            return typing.get_type_hints(holder, vars(module), dict(vars(owner)))[f.name]
        except (NameError, TypeError, SyntaxError, AttributeError):
            continue
    _logger.debug("%s.%s: unresolvable annotation %r, treated as Any", cls.__name__, f.name, f.type)
    return Any


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError, SyntaxError, AttributeError):
        return {}


def _dataclass_fields(cls: type) -> list[FieldDescriptor]:
    hints = _type_hints(cls)
    result = []
    for position, f in enumerate(dataclasses.fields(cls)):
        annotation = hints[f.name] if f.name in hints else _field_annotation(cls, f)
        override = f.metadata.get(COLUMN_KEY)
        result.append(
            FieldDescriptor(
                position=position,
                name=f.name,
                override=override,
                annotation=annotation,
                column=resolve(f.name, override),
            )
        )
    return result


def _pydantic_fields(cls: type[BaseModel]) -> list[FieldDescriptor]:
    result = []
    for position, (name, info) in enumerate(cls.model_fields.items()):
        result.append(
            FieldDescriptor(
                position=position,
                name=name,
                override=info.alias,
                annotation=info.annotation,
                column=resolve(name, info.alias),
            )
        )
    return result


@dataclass(frozen=True)
class SchemaIndex:
    """Resolved column name → field position for one record type."""

    record_type: type
    fields: tuple[FieldDescriptor, ...]
    columns: dict[str, int]

    @classmethod
    def build(cls, record_type: type) -> SchemaIndex:
        """Index the declared fields of *record_type* in declaration order.

        When two fields resolve to the same column the later field wins.

        Raises:
            UnexpectedDestinationKind: If *record_type* is not a record.
        """
        if not is_record_type(record_type):
            raise UnexpectedDestinationKind(getattr(record_type, "__name__", repr(record_type)))

        if dataclasses.is_dataclass(record_type):
            fields = _dataclass_fields(record_type)
        else:
            fields = _pydantic_fields(record_type)

        columns: dict[str, int] = {}
        for desc in fields:
            if desc.column in columns:
                _logger.debug(
                    "%s: column %r of field %r shadowed by field %r",
                    record_type.__name__,
                    desc.column,
                    fields[columns[desc.column]].name,
                    desc.name,
                )
            columns[desc.column] = desc.position

        return cls(record_type=record_type, fields=tuple(fields), columns=columns)

    def field_for(self, column_name: str) -> FieldDescriptor | None:
        """Look up the field bound to *column_name*, if any."""
        position = self.columns.get(column_name)
        if position is None:
            return None
        return self.fields[position]

    def new_record(self) -> Any:
        """Allocate an instance with every field at its default or zero value."""
        record_type = self.record_type
        if dataclasses.is_dataclass(record_type):
            kwargs: dict[str, Any] = {}
            for f, desc in zip(dataclasses.fields(record_type), self.fields, strict=True):
                if not f.init:
                    continue
                if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                    kwargs[f.name] = zero_value(desc.annotation)
            return record_type(**kwargs)

        # Pydantic: skip validation, zero values need not satisfy constraints
        zeros = {
            name: zero_value(info.annotation)
            for name, info in record_type.model_fields.items()  # type: ignore[attr-defined]
            if info.is_required()
        }
        return record_type.model_construct(**zeros)  # type: ignore[attr-defined]


@lru_cache(maxsize=None)
def schema_for(record_type: type) -> SchemaIndex:
    """Cached SchemaIndex per record type."""
    return SchemaIndex.build(record_type)
