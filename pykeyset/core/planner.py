from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from pykeyset.core.cursor import decode_cursor
from pykeyset.core.expressions import (
    Compare,
    Direction,
    Expression,
    Filter,
    Order,
    PageMode,
    Probe,
    ValueType,
    any_of,
    validate_order,
)
from pykeyset.core.probes import build_probes
from pykeyset.lifecycle.observability import track_plan
from pykeyset.utils.exceptions import UnknownColumnReference, UnsupportedOrdering
from pykeyset.utils.settings import SettingsResolver
from pykeyset.utils.types import PRIMARY_KEY, RESERVED_ALIASES, ColumnRef, qualify

logger = logging.getLogger("pykeyset")

IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


class SortSpec(BaseModel):
    """User ordering: one column plus the implicit primary key tie-break."""

    model_config = {"frozen": True}

    column: str = Field(pattern=IDENTIFIER_PATTERN)
    direction: Direction
    value_type: Optional[ValueType] = None


class After(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["after"] = "after"
    token: str


class Before(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["before"] = "before"
    token: str


PageCursor = Annotated[Union[After, Before], Field(discriminator="kind")]


def _with_column_types(sort: Any, column_types: dict[str, Any]) -> Any:
    """Fill a missing sort value_type from a table's declared column types."""
    if isinstance(sort, list):
        return [_with_column_types(item, column_types) for item in sort]
    if isinstance(sort, SortSpec):
        if sort.value_type is None and sort.column in column_types:
            return sort.model_copy(update={"value_type": ValueType(column_types[sort.column])})
        return sort
    if isinstance(sort, dict) and sort.get("value_type") is None and sort.get("column") in column_types:
        return {**sort, "value_type": column_types[sort["column"]]}
    return sort


class PaginateOptions(BaseModel):
    """Input to :func:`paginate`.

    ``table`` accepts a table name or a class with an inner ``Settings``.
    ``after=`` and ``before=`` are shortcuts for ``cursor=After(...)`` and
    ``cursor=Before(...)``.
    """

    model_config = {"frozen": True}

    table: str = Field(pattern=IDENTIFIER_PATTERN)
    sort: Union[SortSpec, list[SortSpec], None] = None
    cursor: Optional[PageCursor] = None

    @model_validator(mode="before")
    @classmethod
    def _expand_shortcuts(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        after = data.pop("after", None)
        before = data.pop("before", None)
        if after is not None and before is not None:
            raise ValueError("after and before are mutually exclusive")
        if after is not None or before is not None:
            if data.get("cursor") is not None:
                raise ValueError("cursor cannot be combined with after/before")
            data["cursor"] = After(token=after) if after is not None else Before(token=before)

        table = data.get("table")
        if isinstance(table, type):
            data["table"] = SettingsResolver.get_table_name(table)
            data["sort"] = _with_column_types(data.get("sort"), SettingsResolver.get_column_types(table))
        return data

    @field_validator("table")
    @classmethod
    def _not_reserved(cls, v: str) -> str:
        if v in RESERVED_ALIASES:
            raise ValueError(f"Table name {v!r} clashes with a query-local alias")
        return v


@dataclass(frozen=True)
class PaginateResult:
    """Structural pieces of one keyset-paginated query.

    ``next_probe``/``prev_probe`` (and their ``_null`` companions) are
    correlated against the outer table, so renderers evaluate them per row.
    """

    table: str
    cursor: tuple[ColumnRef, ...]
    filter: Filter | None
    order: tuple[Order, ...]
    page_mode: PageMode
    next_probe: Probe
    prev_probe: Probe
    next_probe_null: Probe | None = None
    prev_probe_null: Probe | None = None
    identifiers: frozenset[str] = field(default_factory=frozenset)

    @property
    def has_next_page(self) -> Expression:
        return any_of(self.next_probe, self.next_probe_null)

    @property
    def has_previous_page(self) -> Expression:
        return any_of(self.prev_probe, self.prev_probe_null)

    def is_identifier(self, reference: str) -> bool:
        """Whether a string in this result is a declared identifier (else a literal)."""
        return reference in self.identifiers

    def identifier(self, reference: str) -> tuple[str, ...]:
        """Split a declared identifier into its quoted parts.

        Raises:
            UnknownColumnReference: If the planner never declared ``reference``
        """
        if reference not in self.identifiers:
            raise UnknownColumnReference(f"{reference!r} is not an identifier of table {self.table!r}")
        return tuple(reference.split("."))


def _resolve_sort(sort: SortSpec | list[SortSpec] | None) -> SortSpec | None:
    if isinstance(sort, list):
        if len(sort) > 1:
            raise UnsupportedOrdering(
                f"No support for more than 1 sort column, got {[s.column for s in sort]}"
            )
        return sort[0] if sort else None
    return sort


def _declare_identifiers(table: str, sort_column: str | None) -> frozenset[str]:
    columns = [PRIMARY_KEY] if sort_column is None else [PRIMARY_KEY, sort_column]
    owners = (table, *RESERVED_ALIASES)
    names = {*owners, *columns}
    names.update(qualify(owner, column) for owner in owners for column in columns)
    return frozenset(names)


def paginate(options: PaginateOptions) -> PaginateResult:
    """Plan the cursor, filter, order and existence probes of one page.

    Args:
        options: Table, optional sort and optional after/before token

    Returns:
        A fresh, immutable PaginateResult

    Raises:
        InvalidCursor: If the token does not decode
        UnsupportedOrdering: If more than one sort column is requested
    """
    table = options.table
    raw_sort = options.sort
    first = raw_sort[0] if isinstance(raw_sort, list) and raw_sort else raw_sort

    with track_plan(
        table,
        sort_column=first.column if first else None,
        direction=first.direction.value if first else None,
    ) as ctx:
        sort = _resolve_sort(raw_sort)
        token = options.cursor.token if options.cursor is not None else None
        boundary = decode_cursor(token, ordered=sort is not None) if token is not None else None

        display = sort.direction if sort is not None else Direction.DESC
        page_mode = PageMode.of(display, backward=isinstance(options.cursor, Before))
        scan = page_mode.scan_direction
        table_id = qualify(table, PRIMARY_KEY)

        filter: Filter | None = None
        if sort is None:
            cursor: tuple[ColumnRef, ...] = (table_id,)
            order = validate_order([Order(table_id, scan)])
            if boundary is not None:
                filter = Compare((table_id,), page_mode.boundary_operator, (boundary[1],))
        else:
            column = qualify(table, sort.column)
            value_type = sort.value_type or ValueType.TEXT
            cursor = (column, table_id)
            order = validate_order([Order(column, scan, value_type), Order(table_id, scan)])
            if boundary is not None:
                filter = Compare(
                    (column, table_id),
                    page_mode.boundary_operator,
                    boundary,
                    value_type=value_type,
                )

        probes = build_probes(table, sort.column if sort else None, page_mode, order)
        ctx["page_mode"] = page_mode.value

    logger.debug(
        "Planned %s page on %s (cursor=%s, order=%s)",
        page_mode.value,
        table,
        ", ".join(cursor),
        ", ".join(f"{o.column} {o.direction.value}" for o in order),
    )

    return PaginateResult(
        table=table,
        cursor=cursor,
        filter=filter,
        order=order,
        page_mode=page_mode,
        next_probe=probes.next,
        prev_probe=probes.previous,
        next_probe_null=probes.next_null,
        prev_probe_null=probes.previous_null,
        identifiers=_declare_identifiers(table, sort.column if sort else None),
    )
