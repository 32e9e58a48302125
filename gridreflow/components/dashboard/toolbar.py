"""
Dashboard toolbar component.

Provides the controls that drive the controller: a simulated container
width, a breakpoint override, and adding panels.
"""

from typing import Mapping

import dash_mantine_components as dmc
from dash_iconify import DashIconify

AUTO_BREAKPOINT = "auto"


def create_toolbar(
    breakpoints: Mapping[str, int],
    width: int,
    max_width: int = 1600,
) -> dmc.Group:
    """
    Create the toolbar with width, breakpoint and panel controls.

    Args:
        breakpoints: Breakpoint name -> threshold, used for slider marks
            and the override menu
        width: Initial simulated container width
        max_width: Upper bound of the width slider

    Returns:
        Group component with toolbar controls
    """
    ordered = sorted(breakpoints, key=lambda name: breakpoints[name], reverse=True)

    return dmc.Group(
        [
            dmc.Button(
                "Add Panel",
                id="add-panel-btn",
                leftSection=DashIconify(icon="tabler:plus", width=16),
                variant="light",
            ),
            dmc.Stack(
                [
                    dmc.Text("Container width", size="xs", c="dimmed"),
                    dmc.Slider(
                        id="width-slider",
                        min=0,
                        max=max_width,
                        step=10,
                        value=width,
                        marks=[
                            {"value": breakpoints[name], "label": name}
                            for name in ordered
                            if breakpoints[name] <= max_width
                        ],
                    ),
                ],
                gap=4,
                style={"flex": 1, "minWidth": "320px"},
            ),
            dmc.Select(
                id="breakpoint-select",
                label="Breakpoint",
                data=[{"value": AUTO_BREAKPOINT, "label": "auto (from width)"}]
                + [{"value": name, "label": name} for name in ordered],
                value=AUTO_BREAKPOINT,
                allowDeselect=False,
                w=180,
            ),
            dmc.Badge(id="breakpoint-badge", size="lg", variant="light"),
        ],
        justify="space-between",
        align="flex-end",
        gap="md",
    )
