from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import cmp_to_key
from typing import Any

import pytest

from pykeyset import Paginated, PaginateOptions, PaginateResult, assemble_page, disable_tracing, encode_cursor, paginate
from pykeyset.core.expressions import AnyOf, Compare, Direction, Expression, Filter, Operator, Order, ValueType
from pykeyset.utils.types import CURSOR_LABEL, HAS_NEXT_LABEL, HAS_PREVIOUS_LABEL


def _sentinel(value_type: ValueType) -> Any:
    if value_type is ValueType.NUMERIC:
        return float(value_type.null_sentinel)
    if value_type is ValueType.TIMESTAMP:
        return datetime.fromisoformat(value_type.null_sentinel)
    return value_type.null_sentinel


def _coerce(literal: Any, like: Any) -> Any:
    """Cast a bound literal to the type of the column it is compared with."""
    if literal is None or like is None or isinstance(literal, type(like)):
        return literal
    if isinstance(like, datetime):
        return datetime.fromisoformat(literal)
    if isinstance(like, (int, float)):
        return float(literal)
    return str(literal)


def _null_last(a: Any, b: Any) -> int:
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    return (a > b) - (a < b)


class MemoryEngine:
    """Executes a PaginateResult over in-memory rows, standing in for a SQL adapter.

    Identifiers go through ``PaginateResult.identifier``; every other string is
    a bound literal. Probes are evaluated against each emitted row.
    """

    def __init__(self, table: str, rows: list[dict[str, Any]]) -> None:
        self.table = table
        self.rows = [dict(row) for row in rows]

    # --- Rendering ---

    def _column(self, result: PaginateResult, reference: str) -> tuple[str, str]:
        parts = result.identifier(reference)
        if len(parts) == 1:
            return result.table, parts[0]
        return parts[0], parts[1]

    def _resolve(self, result: PaginateResult, operand: Any, scope: dict[str, dict[str, Any]]) -> tuple[Any, bool]:
        if isinstance(operand, str) and result.is_identifier(operand):
            owner, column = self._column(result, operand)
            return scope[owner][column], True
        return operand, False

    def _compare(self, result: PaginateResult, f: Compare, scope: dict[str, dict[str, Any]]) -> bool:
        left: list[Any] = []
        right: list[Any] = []
        for position, (left_ref, right_ref) in enumerate(zip(f.left, f.right)):
            lv, _ = self._resolve(result, left_ref, scope)
            rv, right_is_column = self._resolve(result, right_ref, scope)
            coalesce = position == 0 and f.value_type is not None
            if coalesce and lv is None:
                lv = _sentinel(f.value_type)
            if coalesce and rv is None:
                rv = _sentinel(f.value_type)
            if not right_is_column:
                rv = _coerce(rv, lv)
            left.append(lv)
            right.append(rv)

        # NULL in a row-value comparison is unknown, which filters the row out
        if any(v is None for v in left + right):
            return False
        if f.op is Operator.GT:
            return tuple(left) > tuple(right)
        return tuple(left) < tuple(right)

    def _matches(self, result: PaginateResult, f: Filter, scope: dict[str, dict[str, Any]]) -> bool:
        if isinstance(f, Compare):
            return self._compare(result, f, scope)
        value, _ = self._resolve(result, f.left[0], scope)
        if f.op is Operator.IS_NULL:
            return value is None
        return value is not None

    def _sorted(self, result: PaginateResult, rows: list[dict[str, Any]], order: tuple[Order, ...]) -> list[dict[str, Any]]:
        columns = [self._column(result, entry.column)[1] for entry in order]

        def compare(a: dict[str, Any], b: dict[str, Any]) -> int:
            for entry, column in zip(order, columns):
                va, vb = a[column], b[column]
                if entry.value_type is not None:
                    va = _sentinel(entry.value_type) if va is None else va
                    vb = _sentinel(entry.value_type) if vb is None else vb
                outcome = _null_last(va, vb)
                if entry.direction is Direction.DESC:
                    outcome = -outcome
                if outcome:
                    return outcome
            return 0

        return sorted(rows, key=cmp_to_key(compare))

    def _cursor(self, result: PaginateResult, row: dict[str, Any]) -> str:
        columns = [self._column(result, reference)[1] for reference in result.cursor]
        if len(columns) == 2:
            value_type = result.order[0].value_type
            return encode_cursor(row[columns[1]], row[columns[0]], ordered=True, value_type=value_type)
        return encode_cursor(row[columns[0]])

    def _evaluate(self, result: PaginateResult, expression: Expression, outer: dict[str, Any]) -> bool:
        if isinstance(expression, AnyOf):
            return any(self._evaluate(result, operand, outer) for operand in expression.operands)
        probe = expression.probe
        return any(
            all(self._matches(result, f, {probe.table: outer, probe.alias: candidate}) for f in probe.filters)
            for candidate in self.rows
        )

    # --- Execution ---

    def fetch(self, result: PaginateResult, limit: int) -> list[dict[str, Any]]:
        """Return rows in physical order, each with its cursor and page flags."""
        matching = [
            row for row in self.rows
            if result.filter is None or self._matches(result, result.filter, {result.table: row})
        ]
        selected = self._sorted(result, matching, result.order)[:limit]
        return [
            {
                **row,
                CURSOR_LABEL: self._cursor(result, row),
                HAS_NEXT_LABEL: self._evaluate(result, result.has_next_page, row),
                HAS_PREVIOUS_LABEL: self._evaluate(result, result.has_previous_page, row),
            }
            for row in selected
        ]

    def page(self, limit: int = 3, **options: Any) -> Paginated[dict[str, Any]]:
        result = paginate(PaginateOptions(table=self.table, **options))
        return assemble_page(self.fetch(result, limit), result)


NAMES = ["AAAA", "BBBB", "CCCC", "DDDD", "EEEE", "FFFF", "GGGG", "HHHH", "IIII"]


def _named_rows() -> list[dict[str, Any]]:
    start = datetime(2025, 5, 9, 10, 11, tzinfo=timezone.utc)
    return [
        {
            "id": f"00000001-0000-000{n}-0000-00000000000{n}",
            "name": name,
            "path": f"/Users/{name}",
            "scan_interval": 3600,
            "created_at": start + timedelta(seconds=n - 1),
        }
        for n, name in enumerate(NAMES, start=1)
    ]


@pytest.fixture(autouse=True)
def reset_tracing():
    """Reset observability state between tests."""
    yield
    disable_tracing()


@pytest.fixture
def named_rows() -> list[dict[str, Any]]:
    return _named_rows()


@pytest.fixture
def engine():
    """Factory building a MemoryEngine over the given rows."""

    def make(rows: list[dict[str, Any]], table: str = "data") -> MemoryEngine:
        return MemoryEngine(table, rows)

    return make
