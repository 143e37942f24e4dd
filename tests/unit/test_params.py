"""Unit tests for parameter coercion."""

from __future__ import annotations

from row_scan.core.params import coerce_params, values_to_params


class TestCoerceParams:
    def test_none_and_dict_passthrough(self) -> None:
        params = {"id": 1}
        assert coerce_params(None) is None
        assert coerce_params(params) is params

    def test_list_becomes_tuple(self) -> None:
        assert coerce_params([1, "a"]) == (1, "a")

    def test_scalar_wrapped(self) -> None:
        assert coerce_params(42) == (42,)


class TestValuesToParams:
    def test_no_values(self) -> None:
        assert values_to_params(()) is None

    def test_positional_values(self) -> None:
        assert values_to_params((1, "alice")) == (1, "alice")

    def test_single_dict_is_named(self) -> None:
        assert values_to_params(({"id": 1},)) == {"id": 1}
