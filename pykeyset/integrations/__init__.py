from pykeyset.integrations.fastapi import (
    CursorParams,
    PaginatedResponse,
    register_exception_handlers,
)

__all__ = [
    "CursorParams",
    "PaginatedResponse",
    "register_exception_handlers",
]
