from __future__ import annotations

from dataclasses import dataclass

from pykeyset.core.expressions import Compare, NullCheck, Operator, Order, PageMode, Probe
from pykeyset.utils.types import PRIMARY_KEY, PROBE_ALIAS, qualify, requalify


@dataclass(frozen=True)
class Probes:
    """Existence probes answering "is there a row past this one?" per rendered row."""

    next: Probe
    previous: Probe
    next_null: Probe | None = None
    previous_null: Probe | None = None


def build_probes(
    table: str,
    sort_column: str | None,
    page_mode: PageMode,
    order: tuple[Order, ...],
) -> Probes:
    """Derive the next/previous existence probes for a planned page.

    Each probe compares the probe alias columns with the outer table's
    columns, so the boundary is whichever row the renderer is emitting.
    The sort-column comparison carries the sort's value_type, so probes
    place NULL rows exactly where the page ORDER BY does.

    Args:
        table: Table being paginated
        sort_column: Secondary sort column, or None when ordering by id only
        page_mode: Page mode recorded by the planner
        order: Physical ORDER BY of the page

    Returns:
        Probes; the NULL-aware ones only when a sort column is set
    """
    alias = PROBE_ALIAS
    probe_id = qualify(alias, PRIMARY_KEY)
    table_id = qualify(table, PRIMARY_KEY)
    value_type = order[0].value_type if sort_column is not None else None
    probe_order = tuple(
        Order(requalify(entry.column, alias), entry.direction, entry.value_type)
        for entry in order
    )

    def probe(op: Operator) -> Probe:
        if sort_column is None:
            filters = (Compare((probe_id,), op, (table_id,)),)
        else:
            filters = (
                Compare(
                    (qualify(alias, sort_column), probe_id),
                    op,
                    (qualify(table, sort_column), table_id),
                    value_type=value_type,
                ),
            )
        return Probe(table=table, alias=alias, filters=filters, order=probe_order)

    def null_probe(op: Operator) -> Probe | None:
        # Pairs NULL rows only, ordered by id; always a subset of probe(op).
        if sort_column is None:
            return None
        filters = (
            Compare((probe_id,), op, (table_id,)),
            NullCheck((qualify(alias, sort_column),)),
            NullCheck((qualify(table, sort_column),)),
        )
        return Probe(table=table, alias=alias, filters=filters, order=probe_order)

    return Probes(
        next=probe(page_mode.next_operator),
        previous=probe(page_mode.previous_operator),
        next_null=null_probe(page_mode.next_operator),
        previous_null=null_probe(page_mode.previous_operator),
    )
