"""Unit tests for row binding."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from pydantic import BaseModel, ConfigDict

from row_scan.core.exceptions import ColumnScanFailure
from row_scan.mapping.binder import DISCARD, FieldSlot, bind_row, bind_scalar
from row_scan.mapping.schema import SchemaIndex


@dataclass
class User:
    ID: int
    UserName: str


class StrictUser(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    user_name: str


class TestBindRow:
    def test_one_slot_per_column(self) -> None:
        user = User(ID=0, UserName="")
        values = bind_row(["extra", "user_name", "id", "other"], SchemaIndex.build(User), user)
        assert len(values) == 4
        assert values[0] is DISCARD
        assert values[3] is DISCARD
        assert isinstance(values[1], FieldSlot)
        assert values[1].name == "UserName"
        assert values[2].name == "ID"

    def test_no_matching_columns(self) -> None:
        values = bind_row(["a", "b"], SchemaIndex.build(User), User(ID=0, UserName=""))
        assert list(values) == [DISCARD, DISCARD]
        assert values.bound == []

    def test_commit_writes_only_after_assign(self) -> None:
        user = User(ID=7, UserName="kept")
        values = bind_row(["id", "user_name"], SchemaIndex.build(User), user)
        values[0].assign(42)
        assert user.ID == 7
        values.commit()
        assert user.ID == 42
        assert user.UserName == "kept"

    def test_discard_accepts_anything(self) -> None:
        DISCARD.assign(object())
        DISCARD.assign(None)

    def test_failed_assignment_raises_scan_failure(self) -> None:
        user = StrictUser(id=1, user_name="a")
        values = bind_row(["id"], SchemaIndex.build(StrictUser), user)
        values[0].assign("not a number")
        with pytest.raises(ColumnScanFailure, match="'id'"):
            values.commit()


class TestBindScalar:
    def test_first_column_bound_rest_discarded(self) -> None:
        target, values = bind_scalar(["count", "other"])
        assert values[0] is target
        assert values[1] is DISCARD
        values[0].assign(3)
        assert target.value == 3

    def test_no_columns(self) -> None:
        _, values = bind_scalar([])
        assert len(values) == 0
