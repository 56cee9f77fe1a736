from pykeyset.core import (
    After,
    Before,
    Direction,
    Order,
    PageMode,
    PaginateOptions,
    PaginateResult,
    SortSpec,
    ValueType,
    decode_cursor,
    encode_cursor,
    paginate,
    sort_rows,
)
from pykeyset.lifecycle import (
    enable_tracing,
    disable_tracing,
    PlanEvent,
    add_listener,
)
from pykeyset.utils import (
    PykeysetError,
    InvalidCursor,
    UnsupportedOrdering,
    UnknownColumnReference,
    Paginated,
    assemble_page,
)

__all__ = [
    # Core
    "After",
    "Before",
    "Direction",
    "Order",
    "PageMode",
    "PaginateOptions",
    "PaginateResult",
    "SortSpec",
    "ValueType",
    "decode_cursor",
    "encode_cursor",
    "paginate",
    "sort_rows",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "PlanEvent",
    "add_listener",
    # Utils
    "PykeysetError",
    "InvalidCursor",
    "UnsupportedOrdering",
    "UnknownColumnReference",
    "Paginated",
    "assemble_page",
]
