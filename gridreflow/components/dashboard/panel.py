"""
Panel wrapper component for grid items.

Each panel has a header with a drag handle and a remove button, and a body
showing the item's current grid geometry.
"""

from typing import Any, Optional

import dash_mantine_components as dmc
from dash import html
from dash_iconify import DashIconify

from gridreflow.layouts.item import LayoutItem


def create_panel(
    item_id: str,
    title: Optional[str] = None,
    content: Any = None,
) -> html.Div:
    """
    Create a panel wrapper with header and content area.

    Args:
        item_id: Grid item id; also used as the component id so the grid
            can match the panel to its layout entry
        title: Display title for the panel header (defaults to the id)
        content: Body content

    Returns:
        Panel component wrapped in a div with the item id
    """
    return html.Div(
        dmc.Paper(
            [
                create_panel_header(item_id, title or item_id),
                html.Div(
                    content,
                    id={"type": "panel-body", "index": item_id},
                    style={
                        "height": "calc(100% - 44px)",
                        "padding": "8px",
                        "overflow": "hidden",
                    },
                ),
            ],
            withBorder=True,
            radius="md",
            style={
                "height": "100%",
                "display": "flex",
                "flexDirection": "column",
                "overflow": "hidden",
            },
        ),
        id=item_id,
        style={"height": "100%"},
    )


def create_panel_header(item_id: str, title: str) -> dmc.Group:
    """Create the panel header with drag handle and remove button."""
    return dmc.Group(
        [
            dmc.Group(
                [
                    DashIconify(
                        icon="tabler:grip-vertical",
                        width=16,
                        className="panel-drag-handle",
                        style={"cursor": "grab", "color": "var(--mantine-color-dimmed)"},
                    ),
                    dmc.Text(title, size="sm", fw=500, truncate=True),
                ],
                gap="xs",
                style={"flex": 1, "overflow": "hidden"},
            ),
            dmc.ActionIcon(
                DashIconify(icon="tabler:x", width=16),
                id={"type": "panel-close-btn", "index": item_id},
                variant="subtle",
                size="sm",
                color="red",
            ),
        ],
        justify="space-between",
        p="xs",
        style={
            "borderBottom": "1px solid var(--mantine-color-default-border)",
            "flexShrink": 0,
        },
    )


def describe_item(item: LayoutItem) -> dmc.Stack:
    """Body text listing an item's position, size and static flag."""
    lines = [
        dmc.Text(f"x={item.x}  y={item.y}", size="xs", c="dimmed"),
        dmc.Text(f"w={item.w}  h={item.h}", size="xs", c="dimmed"),
    ]
    if item.static:
        lines.append(dmc.Badge("static", color="gray", variant="light", size="xs"))
    return dmc.Stack(lines, gap=2)
