"""Dialect-neutral descriptors produced by the planner.

Nothing here renders SQL. Renderers walk these values and decide how to
quote identifiers and bind literals.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pykeyset.utils.exceptions import UnsupportedOrdering
from pykeyset.utils.types import MAX_ORDER_COLUMNS, ColumnRef, Operand


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> Direction:
        return Direction.DESC if self is Direction.ASC else Direction.ASC


class ValueType(str, Enum):
    """Declared type of a sort column, used to place NULLs in the keyset."""

    NUMERIC = "numeric"
    TIMESTAMP = "timestamp"
    TEXT = "text"

    @property
    def null_sentinel(self) -> str:
        """Value a NULL compares and orders as."""
        if self is ValueType.TIMESTAMP:
            return "1970-01-01T00:00:00+00:00"
        return "1"


class Operator(str, Enum):
    GT = ">"
    LT = "<"
    IS_NULL = "is null"
    IS_NOT_NULL = "is not null"

    def flipped(self) -> Operator:
        return {
            Operator.GT: Operator.LT,
            Operator.LT: Operator.GT,
            Operator.IS_NULL: Operator.IS_NOT_NULL,
            Operator.IS_NOT_NULL: Operator.IS_NULL,
        }[self]


@dataclass(frozen=True)
class Compare:
    """Row-value comparison ``(left...) <op> (right...)``.

    ``right`` entries are column references or literal values; ``None`` is a
    NULL boundary value. When ``value_type`` is set, NULLs in the leading
    position compare as ``value_type.null_sentinel`` on both sides.
    """

    left: tuple[ColumnRef, ...]
    op: Operator
    right: tuple[Operand, ...]
    value_type: ValueType | None = None

    def __post_init__(self) -> None:
        if self.op not in (Operator.GT, Operator.LT):
            raise ValueError(f"Compare does not accept operator {self.op.value!r}")
        if not 1 <= len(self.left) <= MAX_ORDER_COLUMNS or len(self.left) != len(self.right):
            raise UnsupportedOrdering(
                f"Cannot compare {len(self.left)} columns against {len(self.right)} values"
            )


@dataclass(frozen=True)
class NullCheck:
    left: tuple[ColumnRef]
    op: Operator = Operator.IS_NULL

    def __post_init__(self) -> None:
        if self.op not in (Operator.IS_NULL, Operator.IS_NOT_NULL):
            raise ValueError(f"NullCheck does not accept operator {self.op.value!r}")


Filter = Union[Compare, NullCheck]


@dataclass(frozen=True)
class Order:
    """One ORDER BY entry. NULLs order as ``value_type.null_sentinel`` when set."""

    column: ColumnRef
    direction: Direction
    value_type: ValueType | None = None


def validate_order(order: tuple[Order, ...] | list[Order]) -> tuple[Order, ...]:
    """Check an ORDER BY list is non-empty and has at most two entries.

    Raises:
        UnsupportedOrdering: If the list is empty or too long
    """
    if not order:
        raise UnsupportedOrdering("Order must contain at least one column")
    if len(order) > MAX_ORDER_COLUMNS:
        raise UnsupportedOrdering(
            f"No support for ordering on more than {MAX_ORDER_COLUMNS} columns, got {len(order)}"
        )
    return tuple(order)


@dataclass(frozen=True)
class Probe:
    """``EXISTS(SELECT id FROM table AS alias WHERE <filters AND-ed> ORDER BY order LIMIT 1)``."""

    table: str
    alias: str
    filters: tuple[Filter, ...]
    order: tuple[Order, ...]


@dataclass(frozen=True)
class Exists:
    probe: Probe


@dataclass(frozen=True)
class AnyOf:
    """Logical OR of independent existence checks."""

    operands: tuple[Expression, ...]


Expression = Union[Exists, AnyOf]


def any_of(*probes: Probe | None) -> Expression:
    """Combine the given probes with OR, skipping missing ones."""
    operands = tuple(Exists(probe) for probe in probes if probe is not None)
    if len(operands) == 1:
        return operands[0]
    return AnyOf(operands)


class PageMode(str, Enum):
    """Travel direction crossed with key order.

    ``FORWARD`` pages come from no token or an ``after`` token, ``BACKWARD``
    pages from a ``before`` token. ``SAME_ORDER`` means the display order
    follows the ascending key order, ``REVERSED_ORDER`` that it runs against
    it (descending sorts and the unordered default).
    """

    FORWARD_SAME_ORDER = "forward-same-order"
    FORWARD_REVERSED_ORDER = "forward-reversed-order"
    BACKWARD_SAME_ORDER = "backward-same-order"
    BACKWARD_REVERSED_ORDER = "backward-reversed-order"

    @classmethod
    def of(cls, direction: Direction, backward: bool) -> PageMode:
        if backward:
            if direction is Direction.ASC:
                return cls.BACKWARD_SAME_ORDER
            return cls.BACKWARD_REVERSED_ORDER
        if direction is Direction.ASC:
            return cls.FORWARD_SAME_ORDER
        return cls.FORWARD_REVERSED_ORDER

    @property
    def backward(self) -> bool:
        return self in (PageMode.BACKWARD_SAME_ORDER, PageMode.BACKWARD_REVERSED_ORDER)

    @property
    def display_direction(self) -> Direction:
        if self in (PageMode.FORWARD_SAME_ORDER, PageMode.BACKWARD_SAME_ORDER):
            return Direction.ASC
        return Direction.DESC

    @property
    def scan_direction(self) -> Direction:
        """Physical ORDER BY direction; backward pages are fetched reversed."""
        if self.backward:
            return self.display_direction.flipped()
        return self.display_direction

    @property
    def next_operator(self) -> Operator:
        """Operator selecting rows after a boundary in display order."""
        return Operator.GT if self.display_direction is Direction.ASC else Operator.LT

    @property
    def previous_operator(self) -> Operator:
        return self.next_operator.flipped()

    @property
    def boundary_operator(self) -> Operator:
        """Operator of the page filter against the token's boundary row."""
        return self.previous_operator if self.backward else self.next_operator
