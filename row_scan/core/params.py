"""Statement parameter normalization."""

from __future__ import annotations

from typing import Any


def coerce_params(
    params: dict[str, Any] | tuple[Any, ...] | list[Any] | Any,
) -> dict[str, Any] | tuple[Any, ...] | None:
    """Normalize *params* to a dict, tuple, or None.

    * ``None`` / ``dict`` → returned as-is (named parameter binding).
    * ``tuple`` / ``list`` → converted to ``tuple`` (positional binding).
    * Any other scalar → wrapped in a single-element tuple.
    """
    if params is None or isinstance(params, dict):
        return params
    if isinstance(params, (tuple, list)):
        return tuple(params)
    return (params,)


def values_to_params(values: tuple[Any, ...]) -> dict[str, Any] | tuple[Any, ...] | None:
    """Collapse client ``*values`` into session parameters.

    A single dict argument is passed through for named binding; an empty
    call binds nothing.
    """
    if not values:
        return None
    if len(values) == 1 and isinstance(values[0], dict):
        return values[0]
    return tuple(values)
