"""
Dashboard grid component using dash-draggable.

Renders the controller's current state as a responsive, draggable grid.
The controller remains the source of truth: every layout the component
receives comes from ResponsiveGridController.layouts.
"""

from typing import Any, Dict, Optional

import dash_draggable
from dash import html

from gridreflow.components.dashboard.panel import create_panel, describe_item
from gridreflow.controller import ResponsiveGridController
from gridreflow.layouts.serializer import serialize_layouts


def create_dashboard_grid(
    controller: ResponsiveGridController,
    titles: Optional[Dict[str, str]] = None,
) -> html.Div:
    """
    Create a responsive draggable grid from controller state.

    Args:
        controller: Controller holding layouts and live items
        titles: Optional item id -> panel title

    Returns:
        Div sized to the controller's width containing the grid
    """
    titles = titles or {}
    positions = {item.id: item for item in controller.layout}

    panels = [
        create_panel(
            item_id,
            titles.get(item_id),
            describe_item(positions[item_id]) if item_id in positions else None,
        )
        for item_id in controller.items
    ]

    return html.Div([
        dash_draggable.ResponsiveGridLayout(
            id="dashboard-grid",
            children=panels,
            layouts=serialize_layouts(controller.layouts),
            breakpoints=controller.config.breakpoints,
            gridCols=controller.config.cols,
            clearSavedLayout=True,
        ),
    ], id="dashboard-container", style=grid_container_style(controller))


def grid_container_style(controller: ResponsiveGridController) -> Dict[str, Any]:
    """Pin the container to the simulated width so the grid picks the same breakpoint."""
    return {
        "width": f"{controller.width}px",
        "maxWidth": "100%",
        "minHeight": "500px",
        "margin": "0 auto",
        "transition": "width 150ms ease",
    }
