"""
Dash application factory for the gridreflow playground.

This module creates and configures a Dash application with:
- Mantine UI components
- A draggable grid rendered from ResponsiveGridController state
- Controls for simulated container width, breakpoint override and panels
- Callback registration
"""

import json
import logging
from typing import Dict, Optional

import dash_mantine_components as dmc
from dash import ALL, Dash, Input, Output, ctx, html, no_update
from dash.exceptions import PreventUpdate

from gridreflow.components.dashboard import create_dashboard_grid, create_toolbar
from gridreflow.components.dashboard.toolbar import AUTO_BREAKPOINT
from gridreflow.config import GridConfig
from gridreflow.controller import ResponsiveGridController
from gridreflow.exceptions import GridReflowError
from gridreflow.layouts.item import Layout
from gridreflow.layouts.serializer import serialize_layout

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1200


def create_controller(
    config: Optional[GridConfig] = None,
    n_panels: int = 4,
    width: int = DEFAULT_WIDTH,
    layouts: Optional[Dict[str, Layout]] = None,
) -> ResponsiveGridController:
    """Create a controller for n panels with listeners that log transitions."""
    controller = ResponsiveGridController(
        [f"panel-{i}" for i in range(n_panels)],
        width=width,
        config=config,
        layouts=layouts,
    )
    controller.add_listener(
        "breakpoint_change",
        lambda breakpoint, cols: logger.info(f"Breakpoint changed to '{breakpoint}' ({cols} cols)"),
    )
    return controller


def create_app(
    config: Optional[GridConfig] = None,
    n_panels: int = 4,
    width: int = DEFAULT_WIDTH,
    layouts: Optional[Dict[str, Layout]] = None,
) -> Dash:
    """
    Create and configure the Dash application.
    """
    app = Dash(
        __name__,
        suppress_callback_exceptions=True,
        title="gridreflow - Responsive Grid Playground",
        update_title=None,
    )

    controller = create_controller(config, n_panels, width, layouts)

    # Store references for callbacks (use Flask server config, not Dash config)
    app.server.config["controller"] = controller
    app.server.config["next_panel_id"] = n_panels

    app.layout = create_layout(controller)

    register_callbacks(app)

    return app


def create_layout(controller: ResponsiveGridController) -> dmc.MantineProvider:
    """Create the main application layout."""
    return dmc.MantineProvider(
        id="mantine-provider",
        theme={
            "fontFamily": "Inter, -apple-system, BlinkMacSystemFont, sans-serif",
            "primaryColor": "blue",
            "components": {
                "Button": {"defaultProps": {"radius": "md"}},
                "Paper": {"defaultProps": {"radius": "md"}},
                "Select": {"defaultProps": {"radius": "md"}},
            },
        },
        children=[
            dmc.NotificationProvider(position="top-right"),
            html.Div(id="notifications-container"),
            dmc.AppShell(
                id="app-shell",
                children=[
                    dmc.AppShellHeader(create_header(), px="md"),
                    dmc.AppShellMain(
                        dmc.Stack(
                            [
                                create_toolbar(controller.config.breakpoints, controller.width),
                                html.Div(create_dashboard_grid(controller), id="dashboard-wrapper"),
                                dmc.Code(
                                    format_state(controller),
                                    id="layout-json",
                                    block=True,
                                ),
                            ],
                            gap="md",
                        ),
                    ),
                ],
                header={"height": 60},
                padding="md",
            ),
        ],
    )


def create_header() -> dmc.Group:
    """Create the header content."""
    return dmc.Group(
        [
            dmc.Title("gridreflow", order=3, c="blue"),
            dmc.Text("Responsive grid playground", size="sm", c="dimmed"),
        ],
        justify="space-between",
        h="100%",
    )


def format_state(controller: ResponsiveGridController) -> str:
    """Pretty-printed JSON of the current breakpoint, cols and layout."""
    return json.dumps(
        {
            "breakpoint": controller.breakpoint,
            "cols": controller.cols,
            "width": controller.width,
            "layout": serialize_layout(controller.layout),
        },
        indent=2,
    )


def breakpoint_label(controller: ResponsiveGridController) -> str:
    return f"{controller.breakpoint} · {controller.cols} cols"


def register_callbacks(app: Dash):
    """Register all Dash callbacks."""

    # -------------------------------------------------------------------------
    # Width / breakpoint / panel controls
    # -------------------------------------------------------------------------
    @app.callback(
        Output("dashboard-wrapper", "children"),
        Output("breakpoint-badge", "children"),
        Output("layout-json", "children"),
        Output("notifications-container", "children"),
        Input("width-slider", "value"),
        Input("breakpoint-select", "value"),
        Input("add-panel-btn", "n_clicks"),
        Input({"type": "panel-close-btn", "index": ALL}, "n_clicks"),
    )
    def update_grid(width, breakpoint, add_clicks, close_clicks):
        """Apply a control change to the controller and re-render the grid."""
        controller: ResponsiveGridController = app.server.config["controller"]
        triggered = ctx.triggered_id

        try:
            if triggered == "width-slider" and width is not None:
                controller.set_width(int(width))
            elif triggered == "breakpoint-select":
                controller.set_breakpoint(None if breakpoint == AUTO_BREAKPOINT else breakpoint)
            elif triggered == "add-panel-btn":
                panel_id = f"panel-{app.server.config['next_panel_id']}"
                app.server.config["next_panel_id"] += 1
                controller.set_items(controller.items + [panel_id])
            elif isinstance(triggered, dict) and triggered.get("type") == "panel-close-btn":
                if not any(close_clicks):
                    raise PreventUpdate
                removed = triggered["index"]
                controller.set_items([i for i in controller.items if i != removed])
        except GridReflowError as e:
            notification = dmc.Notification(
                id="notif-error",
                title="Layout error",
                message=str(e),
                color="red",
                action="show",
            )
            return no_update, no_update, no_update, notification

        return (
            create_dashboard_grid(controller),
            breakpoint_label(controller),
            format_state(controller),
            no_update,
        )

    # -------------------------------------------------------------------------
    # User drag / resize
    # -------------------------------------------------------------------------
    @app.callback(
        Output("layout-json", "children", allow_duplicate=True),
        Input("dashboard-grid", "layouts"),
        prevent_initial_call=True,
    )
    def relay_user_layout(layouts):
        """Feed a layout edited in the browser back into the controller."""
        controller: ResponsiveGridController = app.server.config["controller"]
        if not layouts or controller.breakpoint not in layouts:
            raise PreventUpdate

        try:
            controller.update_layout(layouts[controller.breakpoint])
        except GridReflowError as e:
            logger.warning(f"Rejected layout from grid: {e}")
            raise PreventUpdate

        return format_state(controller)
