from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic

from pykeyset.utils.types import CURSOR_LABEL, HAS_NEXT_LABEL, HAS_PREVIOUS_LABEL, T

if TYPE_CHECKING:
    from pykeyset.core.planner import PaginateResult


@dataclass(frozen=True)
class Paginated(Generic[T]):
    """Cursor-based pagination result, rows in display order."""

    items: list[T]
    next_cursor: str | None
    previous_cursor: str | None
    has_next: bool
    has_prev: bool


def _field(row: Any, name: str) -> Any:
    if isinstance(row, Mapping):
        return row[name]
    return getattr(row, name)


def assemble_page(rows: Sequence[T], result: PaginateResult) -> Paginated[T]:
    """Turn rows fetched with a planned query into a page.

    Backward pages are fetched in reverse physical order; they are flipped
    back here. Page-level flags come from the first and last row's own
    ``has_previous_page``/``has_next_page`` selections.

    Args:
        rows: Rows in the order the query returned them
        result: The plan the query was rendered from

    Returns:
        Paginated page
    """
    items = list(reversed(rows)) if result.page_mode.backward else list(rows)
    if not items:
        return Paginated(items=[], next_cursor=None, previous_cursor=None, has_next=False, has_prev=False)

    first, last = items[0], items[-1]
    has_next = bool(_field(last, HAS_NEXT_LABEL))
    has_prev = bool(_field(first, HAS_PREVIOUS_LABEL))

    return Paginated(
        items=items,
        next_cursor=str(_field(last, CURSOR_LABEL)) if has_next else None,
        previous_cursor=str(_field(first, CURSOR_LABEL)) if has_prev else None,
        has_next=has_next,
        has_prev=has_prev,
    )
