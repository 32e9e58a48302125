"""
Breakpoint resolution and per-breakpoint layout synthesis.

Breakpoint tables map names to pixel thresholds, e.g.
{'lg': 1200, 'md': 996, 'sm': 768, 'xs': 480, 'xxs': 0}. Column tables
map the same names to column counts.
"""

import logging
from dataclasses import replace
from typing import List, Mapping, Optional, Sequence, Tuple

from gridreflow.exceptions import ConfigError
from gridreflow.layouts.compaction import compact
from gridreflow.layouts.item import Layout, LayoutItem, clone_layout

logger = logging.getLogger(__name__)


def sort_breakpoints(breakpoints: Mapping[str, int]) -> List[str]:
    """
    Return breakpoint names ordered by threshold, largest first.

    Raises:
        ConfigError: If the table is empty
    """
    if not breakpoints:
        raise ConfigError("Breakpoint table is empty")
    return sorted(breakpoints, key=lambda name: breakpoints[name], reverse=True)


def get_breakpoint_from_width(breakpoints: Mapping[str, int], width: int) -> str:
    """
    Resolve the active breakpoint for a container width.

    Picks the largest threshold the width reaches; widths below every
    threshold resolve to the smallest breakpoint.

    Args:
        breakpoints: Breakpoint name -> pixel threshold
        width: Container width in pixels

    Returns:
        Breakpoint name
    """
    ordered = sort_breakpoints(breakpoints)
    for name in ordered:
        if breakpoints[name] <= width:
            return name
    return ordered[-1]


def get_cols_from_breakpoint(breakpoint: str, cols: Mapping[str, int]) -> int:
    """
    Look up the column count of a breakpoint.

    Raises:
        ConfigError: If the breakpoint has no entry or a non-positive count
    """
    if breakpoint not in cols:
        raise ConfigError(f"No column count configured for breakpoint '{breakpoint}'")
    count = cols[breakpoint]
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        raise ConfigError(
            f"Column count for breakpoint '{breakpoint}' must be a positive integer, got {count!r}"
        )
    return count


def _round_half_up(value: float) -> int:
    # round() rounds halves to even; grid scaling rounds them up.
    return int(value + 0.5)


def scale_layout(layout: Sequence[LayoutItem], source_cols: int, target_cols: int) -> Layout:
    """
    Scale item widths and columns proportionally to a new column count.

    Heights and rows are left alone since row height does not depend on
    the breakpoint. When a scaled item overflows the right edge its width
    is shrunk first; the item is only moved left when even a width of one
    column would not fit.

    Args:
        layout: Source layout (not modified)
        source_cols: Column count the layout was authored for
        target_cols: Column count to scale to

    Returns:
        New list of scaled items
    """
    ratio = target_cols / source_cols
    scaled = []
    for item in layout:
        new_w = max(1, _round_half_up(item.w * ratio))
        new_x = max(0, _round_half_up(item.x * ratio))
        if new_x + new_w > target_cols:
            new_w = max(1, target_cols - new_x)
            if new_x + new_w > target_cols:
                new_x = target_cols - new_w
        scaled.append(replace(item, x=new_x, w=new_w))
    return scaled


def find_source_breakpoint(
    layouts: Mapping[str, Sequence[LayoutItem]],
    breakpoints: Mapping[str, int],
    breakpoint: str,
    last_breakpoint: Optional[str] = None,
) -> Optional[str]:
    """
    Pick the breakpoint whose layout should seed a missing one.

    Prefers the breakpoint being left, then the nearest cached breakpoint
    above the target, then the nearest below it.

    Returns:
        Breakpoint name, or None if no layout is cached at all
    """
    if last_breakpoint is not None and last_breakpoint in layouts:
        return last_breakpoint

    ordered = sort_breakpoints(breakpoints)
    if breakpoint not in ordered:
        return next((bp for bp in ordered if bp in layouts), None)

    index = ordered.index(breakpoint)
    above = reversed(ordered[:index])
    below = ordered[index + 1:]
    for candidate in list(above) + below:
        if candidate in layouts:
            return candidate
    return None


def find_or_generate_responsive_layout(
    layouts: Mapping[str, Sequence[LayoutItem]],
    breakpoints: Mapping[str, int],
    cols: Mapping[str, int],
    breakpoint: str,
    last_breakpoint: Optional[str] = None,
    compact_type: Optional[str] = "vertical",
) -> Tuple[Layout, bool]:
    """
    Return the layout for a breakpoint, generating one if none is cached.

    A cached layout is returned as an equal copy. Otherwise the layout of
    the closest breakpoint that has one is scaled to the target column
    count and compacted; with nothing cached the result is empty.

    Args:
        layouts: Breakpoint -> layout cache (not modified)
        breakpoints: Breakpoint -> pixel threshold
        cols: Breakpoint -> column count
        breakpoint: Target breakpoint
        last_breakpoint: Breakpoint being left (equal to target on first mount)
        compact_type: Compaction mode for generated layouts

    Returns:
        Tuple of (layout, generated) where generated is True when the
        layout did not come from the cache
    """
    if breakpoint in layouts:
        logger.debug(f"Using cached layout for breakpoint '{breakpoint}'")
        return clone_layout(layouts[breakpoint]), False

    target_cols = get_cols_from_breakpoint(breakpoint, cols)
    source = find_source_breakpoint(layouts, breakpoints, breakpoint, last_breakpoint)
    if source is None:
        logger.debug(f"No layouts cached; starting '{breakpoint}' empty")
        return [], True

    source_cols = get_cols_from_breakpoint(source, cols)
    scaled = scale_layout(layouts[source], source_cols, target_cols)
    logger.debug(
        f"Generated layout for '{breakpoint}' ({target_cols} cols) "
        f"from '{source}' ({source_cols} cols)"
    )
    return compact(scaled, target_cols, compact_type), True
