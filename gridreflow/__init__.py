"""
gridreflow - Responsive grid layout engine.

Keeps a non-overlapping placement of items on a fixed-column grid and
adapts it across named breakpoints, with a Dash playground and a CLI.
"""

__version__ = "0.1.0"

from gridreflow.config import GridConfig
from gridreflow.controller import ResponsiveGridController
from gridreflow.exceptions import ConfigError, GridReflowError, LayoutValidationError
from gridreflow.layouts.item import ControllerState, LayoutItem

__all__ = [
    "ConfigError",
    "ControllerState",
    "GridConfig",
    "GridReflowError",
    "LayoutItem",
    "LayoutValidationError",
    "ResponsiveGridController",
    "__version__",
]
