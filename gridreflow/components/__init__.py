"""
UI components for gridreflow.

This package contains the Dash/Mantine components used by the playground:
- dashboard: Draggable panel grid, panel wrapper and toolbar
"""

from gridreflow.components.dashboard import (
    create_dashboard_grid,
    create_panel,
    create_toolbar,
)

__all__ = [
    "create_dashboard_grid",
    "create_panel",
    "create_toolbar",
]
