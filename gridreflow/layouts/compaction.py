"""
Compaction engine.

Removes overlaps and closes gaps in a layout:

- vertical: items float up until they touch the item above them
- horizontal: items slide left until they touch the item to their left,
  moving down a row whenever the current row has no slot wide enough
- none: items keep their positions (free placement)

Static items never move; they are obstacles for everything else. Items are
processed in a deterministic order (row-major for vertical, column-major
for horizontal, insertion order on ties) so the same input always yields
the same output, which keeps layouts stable across breakpoint changes.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from gridreflow.exceptions import ConfigError
from gridreflow.layouts.item import (
    COMPACT_TYPES,
    Layout,
    LayoutItem,
    collides,
    get_first_collision,
    get_statics,
    sort_layout_items,
)

logger = logging.getLogger(__name__)


def normalize_compact_type(compact_type: Optional[str]) -> str:
    """Map None to 'none' and reject unknown modes."""
    if compact_type is None:
        return "none"
    if compact_type not in COMPACT_TYPES:
        raise ConfigError(
            f"Unknown compaction mode: {compact_type!r}. "
            f"Expected one of {', '.join(COMPACT_TYPES)}"
        )
    return compact_type


def correct_bounds(layout: Sequence[LayoutItem], cols: int) -> Layout:
    """
    Keep non-static items inside the grid.

    Items wider than the grid are shrunk to the column count, then items
    overflowing the right edge are pulled left. Static items keep their
    authored geometry.

    Returns:
        New list of copied items
    """
    corrected = []
    for item in layout:
        item = replace(item)
        if not item.static:
            if item.w > cols:
                item.w = cols
            if item.right > cols:
                item.x = cols - item.w
        corrected.append(item)
    return corrected


def _compact_vertical(obstacles: List[LayoutItem], item: LayoutItem) -> None:
    # Rise to the bottom of the nearest obstacle sharing a column with us.
    ceiling = 0
    for other in obstacles:
        shares_columns = other.x < item.right and item.x < other.right
        if shares_columns and other.y < item.bottom:
            ceiling = max(ceiling, other.bottom)
    item.y = ceiling

    collision = get_first_collision(obstacles, item)
    while collision is not None:
        item.y = collision.bottom
        collision = get_first_collision(obstacles, item)


def _slide_left(obstacles: List[LayoutItem], item: LayoutItem, reach: int, cols: int) -> None:
    # Slide to the right edge of the nearest row-sharing obstacle to our left.
    wall = 0
    for other in obstacles:
        shares_rows = other.y < item.bottom and item.y < other.bottom
        if shares_rows and other.x < reach:
            wall = max(wall, other.right)
    item.x = wall

    collision = get_first_collision(obstacles, item)
    while collision is not None and item.right <= cols:
        item.x = collision.right
        collision = get_first_collision(obstacles, item)


def _compact_horizontal(obstacles: List[LayoutItem], item: LayoutItem, cols: int) -> None:
    # Rows are tried top-down from the item's own row; below every obstacle
    # the row is empty, so this always terminates.
    reach = item.right
    _slide_left(obstacles, item, reach, cols)
    while item.right > cols:
        item.y += 1
        _slide_left(obstacles, item, reach, cols)


def compact_item(
    obstacles: List[LayoutItem],
    item: LayoutItem,
    cols: int,
    compact_type: str = "vertical",
) -> LayoutItem:
    """
    Move a single item against a set of already placed obstacles.

    Args:
        obstacles: Items already placed (not modified)
        item: Item to move (modified in place)
        cols: Column count
        compact_type: 'vertical', 'horizontal' or 'none'

    Returns:
        The moved item
    """
    if compact_type == "vertical":
        _compact_vertical(obstacles, item)
    elif compact_type == "horizontal":
        _compact_horizontal(obstacles, item, cols)
    return item


def compact(
    layout: Sequence[LayoutItem],
    cols: int,
    compact_type: Optional[str] = "vertical",
) -> Layout:
    """
    Compact a layout.

    Args:
        layout: Items to compact; may overlap or contain gaps
        cols: Active column count
        compact_type: 'vertical' (default), 'horizontal', or 'none'/None

    Returns:
        New list with the same items, in the same order, repositioned so no
        non-static items overlap. The input is not modified.
    """
    compact_type = normalize_compact_type(compact_type)
    corrected = correct_bounds(layout, cols)
    if compact_type == "none" or not corrected:
        return corrected

    placed = get_statics(corrected)
    for item in sort_layout_items(corrected, compact_type):
        if item.static:
            continue
        compact_item(placed, item, cols, compact_type)
        placed.append(item)

    assert_no_overlap(corrected)
    logger.debug(f"Compacted {len(corrected)} items ({compact_type}, {cols} cols)")
    return corrected


def assert_no_overlap(layout: Sequence[LayoutItem]) -> None:
    """
    Raise AssertionError if any non-static item overlaps another item.

    A failure means the compaction algorithm is broken, not that the input
    was bad.
    """
    for index, item in enumerate(layout):
        for other in layout[index + 1:]:
            if item.static and other.static:
                continue
            if collides(item, other):
                raise AssertionError(
                    f"Items '{item.id}' and '{other.id}' overlap after compaction"
                )
