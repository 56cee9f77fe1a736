"""Settings resolution utilities for table declarations."""

from __future__ import annotations

from typing import Any


def _pluralize(name: str) -> str:
    """Naive pluralization for table names.

    Args:
        name: Singular class name

    Returns:
        Pluralized table name
    """
    lower = name.lower()
    if lower.endswith("s"):
        return lower + "es"
    if lower.endswith("y") and not lower.endswith(("ay", "ey", "iy", "oy", "uy")):
        return lower[:-1] + "ies"
    return lower + "s"


class SettingsResolver:
    """Resolves table settings from an inner Settings class.

    Example::

        class Repository:
            class Settings:
                table = "repositories"
                column_types = {"stars": ValueType.NUMERIC}
    """

    @staticmethod
    def get_table_name(cls: type) -> str:
        """Get table name from Settings or auto-pluralize.

        Args:
            cls: Table declaration class

        Returns:
            Table name
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "table"):
            return settings.table
        return _pluralize(cls.__name__)

    @staticmethod
    def get_column_types(cls: type) -> dict[str, Any]:
        """Get the per-column value types from Settings.

        Args:
            cls: Table declaration class

        Returns:
            Mapping of column name to value type
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "column_types"):
            return dict(settings.column_types)
        return {}
