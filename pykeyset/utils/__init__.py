from pykeyset.utils.exceptions import (
    PykeysetError,
    InvalidCursor,
    UnsupportedOrdering,
    UnknownColumnReference,
)
from pykeyset.utils.pagination import Paginated, assemble_page
from pykeyset.utils.types import (
    ColumnRef,
    Operand,
    RowData,
    CURSOR_SEPARATOR,
    PRIMARY_KEY,
    PROBE_ALIAS,
    RESERVED_ALIASES,
    MAX_ORDER_COLUMNS,
    CURSOR_LABEL,
    HAS_NEXT_LABEL,
    HAS_PREVIOUS_LABEL,
)

__all__ = [
    "PykeysetError",
    "InvalidCursor",
    "UnsupportedOrdering",
    "UnknownColumnReference",
    "Paginated",
    "assemble_page",
    "ColumnRef",
    "Operand",
    "RowData",
    "CURSOR_SEPARATOR",
    "PRIMARY_KEY",
    "PROBE_ALIAS",
    "RESERVED_ALIASES",
    "MAX_ORDER_COLUMNS",
    "CURSOR_LABEL",
    "HAS_NEXT_LABEL",
    "HAS_PREVIOUS_LABEL",
]
