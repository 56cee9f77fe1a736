class PykeysetError(Exception):
    """Base exception for all pykeyset errors."""


class InvalidCursor(PykeysetError):
    """Raised when a pagination token does not decode to the expected shape."""


class UnsupportedOrdering(PykeysetError):
    """Raised when more than one sort column (two order entries) is requested."""


class UnknownColumnReference(PykeysetError):
    """Raised when a renderer asks for an identifier the planner never declared."""
