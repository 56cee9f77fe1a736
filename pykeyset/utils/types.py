from typing import Any, Optional, TypeVar

# Type aliases for better clarity
ColumnRef = str
Operand = Optional[str]
RowData = dict[str, Any]

# Generic type variable for rows
T = TypeVar("T")

# Constants
CURSOR_SEPARATOR = ","
PRIMARY_KEY = "id"
PROBE_ALIAS = "subquery"
RESERVED_ALIASES = ("subquery", "probe", "page")
MAX_ORDER_COLUMNS = 2  # sort column + primary key tie-break

# Labels renderers give to the per-row selections
CURSOR_LABEL = "cursor"
HAS_NEXT_LABEL = "has_next_page"
HAS_PREVIOUS_LABEL = "has_previous_page"


def qualify(owner: str, column: str) -> ColumnRef:
    """Build a ``owner.column`` reference.

    Args:
        owner: Table name or query-local alias
        column: Column name

    Returns:
        Qualified column reference
    """
    return f"{owner}.{column}"


def requalify(reference: ColumnRef, owner: str) -> ColumnRef:
    """Move a qualified reference onto another table name or alias."""
    _, _, column = reference.rpartition(".")
    return qualify(owner, column)
