"""
Exception types raised by gridreflow.

Errors are raised at the boundary where external data enters the library
(configuration, authored layouts) and are never caught internally.
"""

from typing import Optional


class GridReflowError(Exception):
    """Base class for all gridreflow errors."""


class ConfigError(GridReflowError, ValueError):
    """Malformed or incomplete breakpoint/column configuration."""


class LayoutValidationError(GridReflowError, ValueError):
    """
    An externally supplied layout failed validation.

    Attributes:
        context: Where the layout came from (e.g. 'layouts.lg')
        item_id: Id of the offending item, if it could be determined
        field: Name of the offending field
    """

    def __init__(
        self,
        message: str,
        context: str = "layout",
        item_id: Optional[str] = None,
        field: Optional[str] = None,
    ):
        self.context = context
        self.item_id = item_id
        self.field = field
        super().__init__(f"{context}: {message}")
