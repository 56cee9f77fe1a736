from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from pykeyset.core.expressions import Direction
from pykeyset.core.planner import PaginateOptions
from pykeyset.utils.exceptions import InvalidCursor, PykeysetError, UnsupportedOrdering
from pykeyset.utils.pagination import Paginated

T = TypeVar("T")


def register_exception_handlers(app: Any) -> None:
    """Register pykeyset exception handlers on a FastAPI app."""
    from starlette.responses import JSONResponse

    @app.exception_handler(InvalidCursor)
    async def invalid_cursor_handler(request: Any, exc: InvalidCursor):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(UnsupportedOrdering)
    async def unsupported_ordering_handler(request: Any, exc: UnsupportedOrdering):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Any, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(PykeysetError)
    async def pykeyset_error_handler(request: Any, exc: PykeysetError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})


class CursorParams:
    """FastAPI dependency for cursor pagination parameters.

    Usage::

        @app.get("/repositories")
        def list_repositories(params: CursorParams = Depends()):
            result = paginate(params.options("repositories"))
    """

    def __init__(
        self,
        after: Optional[str] = None,
        before: Optional[str] = None,
        order_by: Optional[str] = None,
        direction: Direction = Direction.ASC,
    ):
        if after is not None and before is not None:
            raise InvalidCursor("after and before are mutually exclusive")
        self.after = after
        self.before = before
        self.order_by = order_by
        self.direction = direction

    def options(self, table: str | type) -> PaginateOptions:
        """Build PaginateOptions for ``table`` from the request parameters."""
        data: dict[str, Any] = {"table": table, "after": self.after, "before": self.before}
        if self.order_by:
            data["sort"] = {"column": self.order_by, "direction": self.direction}
        return PaginateOptions.model_validate(data)


class PaginatedResponse(BaseModel, Generic[T]):
    """Cursor-paginated response model for API endpoints."""

    items: list[T]
    next_cursor: Optional[str] = None
    previous_cursor: Optional[str] = None
    has_next: bool
    has_prev: bool

    @classmethod
    def from_page(cls, page_obj: Paginated) -> PaginatedResponse:
        return cls(
            items=page_obj.items,
            next_cursor=page_obj.next_cursor,
            previous_cursor=page_obj.previous_cursor,
            has_next=page_obj.has_next,
            has_prev=page_obj.has_prev,
        )
