"""
Dashboard components for gridreflow.

Provides the main dashboard area with:
- Draggable/resizable panel grid
- Panel wrapper with controls
- Dashboard toolbar
"""

from gridreflow.components.dashboard.grid import create_dashboard_grid
from gridreflow.components.dashboard.panel import create_panel
from gridreflow.components.dashboard.toolbar import create_toolbar

__all__ = [
    "create_dashboard_grid",
    "create_panel",
    "create_toolbar",
]
