"""
Grid layout algorithms for gridreflow.

This package handles:
- The layout data model (LayoutItem)
- Validation of externally supplied layouts
- Compaction (overlap removal and gap closing)
- Breakpoint resolution and per-breakpoint layout synthesis
- Synchronization of layouts with the live item set
- Layout serialization (react-grid-layout dict shape)
"""

from gridreflow.layouts.item import (
    COMPACT_TYPES,
    ControllerState,
    Layout,
    LayoutItem,
    clone_layout,
    clone_layouts,
    collides,
    layout_bottom,
)
from gridreflow.layouts.validation import validate_layout, validate_layouts
from gridreflow.layouts.compaction import compact, correct_bounds
from gridreflow.layouts.responsive import (
    find_or_generate_responsive_layout,
    get_breakpoint_from_width,
    get_cols_from_breakpoint,
    scale_layout,
    sort_breakpoints,
)
from gridreflow.layouts.sync import synchronize_layout_with_items
from gridreflow.layouts.serializer import (
    serialize_layout,
    serialize_layouts,
    deserialize_layout,
    deserialize_layouts,
    load_layout_from_file,
    load_layouts_from_file,
)

__all__ = [
    "COMPACT_TYPES",
    "ControllerState",
    "Layout",
    "LayoutItem",
    "clone_layout",
    "clone_layouts",
    "collides",
    "layout_bottom",
    "validate_layout",
    "validate_layouts",
    "compact",
    "correct_bounds",
    "find_or_generate_responsive_layout",
    "get_breakpoint_from_width",
    "get_cols_from_breakpoint",
    "scale_layout",
    "sort_breakpoints",
    "synchronize_layout_with_items",
    "serialize_layout",
    "serialize_layouts",
    "deserialize_layout",
    "deserialize_layouts",
    "load_layout_from_file",
    "load_layouts_from_file",
]
