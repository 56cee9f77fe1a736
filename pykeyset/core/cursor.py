"""Pagination token codec.

Tokens are user-facing opaque text: ``"value,id"`` when a sort column is in
play, a bare ``"id"`` otherwise. Nothing else in the package builds or parses
them.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pykeyset.core.expressions import ValueType
from pykeyset.utils.exceptions import InvalidCursor
from pykeyset.utils.types import CURSOR_SEPARATOR

logger = logging.getLogger("pykeyset")


def _to_text(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def encode_cursor(
    row_id: Any,
    value: Any = None,
    *,
    ordered: bool | None = None,
    value_type: ValueType | None = None,
) -> str:
    """Encode a boundary row into a pagination token.

    A NULL sort value is written as ``value_type.null_sentinel``, the key the
    planned ORDER BY places NULL rows at, so the token resumes exactly there.

    Args:
        row_id: Primary key of the row
        value: Sort column value of the row, ``None`` for NULL
        ordered: Whether a sort column is in play. Defaults to ``value is not None``;
            pass ``True`` to encode a NULL sort value.
        value_type: Declared type of the sort column, TEXT when omitted

    Returns:
        ``"value,id"`` or ``"id"``
    """
    if ordered is None:
        ordered = value is not None
    if not ordered:
        return _to_text(row_id)
    if value is None:
        value = (value_type or ValueType.TEXT).null_sentinel
    return f"{_to_text(value)}{CURSOR_SEPARATOR}{_to_text(row_id)}"


def decode_cursor(token: str, *, ordered: bool = True) -> tuple[str | None, str]:
    """Decode a pagination token into ``(value, id)``.

    The token is split at the first separator. Everything before it is the
    value, an empty string included; unordered tokens decode to ``(None, token)``.

    Raises:
        InvalidCursor: If the token is empty, lacks a separator when ordered,
            or carries no id
    """
    if not token:
        raise InvalidCursor("Empty cursor provided")

    if not ordered:
        return None, token

    value, separator, row_id = token.partition(CURSOR_SEPARATOR)
    if not separator:
        logger.debug("Rejected cursor without separator: %r", token)
        raise InvalidCursor(f"Invalid cursor {token!r}: expected 'value{CURSOR_SEPARATOR}id'")
    if not row_id:
        logger.debug("Rejected cursor without id: %r", token)
        raise InvalidCursor(f"Invalid cursor {token!r}: missing id")
    return value, row_id
