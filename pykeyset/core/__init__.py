from pykeyset.core.cursor import encode_cursor, decode_cursor
from pykeyset.core.expressions import (
    AnyOf,
    Compare,
    Direction,
    Exists,
    Expression,
    Filter,
    NullCheck,
    Operator,
    Order,
    PageMode,
    Probe,
    ValueType,
    validate_order,
)
from pykeyset.core.planner import (
    After,
    Before,
    PaginateOptions,
    PaginateResult,
    SortSpec,
    paginate,
)
from pykeyset.core.probes import Probes, build_probes
from pykeyset.core.sort import sort_rows

__all__ = [
    "encode_cursor",
    "decode_cursor",
    "AnyOf",
    "Compare",
    "Direction",
    "Exists",
    "Expression",
    "Filter",
    "NullCheck",
    "Operator",
    "Order",
    "PageMode",
    "Probe",
    "ValueType",
    "validate_order",
    "After",
    "Before",
    "PaginateOptions",
    "PaginateResult",
    "SortSpec",
    "paginate",
    "Probes",
    "build_probes",
    "sort_rows",
]
