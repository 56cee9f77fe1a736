"""In-memory reference ordering.

Reproduces the ordering a database applies to a planned page, from the
cursors alone. Used to check what a renderer returns; it never takes part in
pagination itself.
"""

from __future__ import annotations

import locale
import math
from collections.abc import Mapping
from functools import cmp_to_key
from typing import Any, Iterable

from pykeyset.core.expressions import Direction
from pykeyset.utils.exceptions import InvalidCursor
from pykeyset.utils.types import CURSOR_LABEL, CURSOR_SEPARATOR, T


def _cursor_of(row: Any) -> Any:
    if isinstance(row, Mapping):
        if CURSOR_LABEL not in row:
            raise InvalidCursor(f"Expected row to carry a {CURSOR_LABEL!r}")
        return row[CURSOR_LABEL]
    if not hasattr(row, CURSOR_LABEL):
        raise InvalidCursor(f"Expected row to carry a {CURSOR_LABEL!r}")
    return getattr(row, CURSOR_LABEL)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _compare_text(a: str, b: str) -> int:
    result = locale.strcoll(a, b)
    return (result > 0) - (result < 0)


def _compare_values(a: Any, b: Any) -> int:
    num_a, num_b = _as_number(a), _as_number(b)
    if num_a is not None and num_b is not None:
        return (num_a > num_b) - (num_a < num_b)
    return _compare_text(str(a), str(b))


def _compare_keyed(a: Any, b: Any) -> int:
    value_a, _, id_a = str(a).partition(CURSOR_SEPARATOR)
    value_b, _, id_b = str(b).partition(CURSOR_SEPARATOR)
    result = _compare_values(value_a, value_b)
    if result == 0:
        result = _compare_text(id_a, id_b)
    return result


def sort_rows(
    rows: Iterable[T],
    column: str | None = None,
    direction: Direction | str | None = None,
) -> list[T]:
    """Return rows sorted the way a planned page orders them.

    The input is never mutated and rows with equal keys keep their
    relative order.

    Args:
        rows: Mappings or objects carrying a ``cursor``
        column: Sort column, or None to order by the cursor (primary key) alone
        direction: ``asc`` or ``desc``; anything but an explicit ``asc`` sorts descending

    Returns:
        A new sorted list
    """
    descending = direction is None or Direction(direction) is not Direction.ASC
    compare = _compare_keyed if column else _compare_values
    key = cmp_to_key(compare)
    return sorted(rows, key=lambda row: key(_cursor_of(row)), reverse=descending)
