"""
Reconcile a layout with the live set of grid items.

The presentation layer adds and removes items freely; synchronization
makes sure the layout always has exactly one entry per live item, in
presentation order, compacted and ready to render.
"""

import logging
from dataclasses import replace
from typing import Any, List, Mapping, Optional, Sequence, Union

from gridreflow.layouts.compaction import compact
from gridreflow.layouts.item import Layout, LayoutItem, layout_bottom
from gridreflow.layouts.validation import validate_layout

logger = logging.getLogger(__name__)

# A live item is either a bare id or a dict hint with 'i' and optional
# default size/constraints (the equivalent of a 'data-grid' attribute).
ItemSpec = Union[str, Mapping[str, Any]]


def get_item_id(item: ItemSpec) -> str:
    if isinstance(item, str):
        return item
    return item.get("i", item.get("id"))


def get_item_ids(items: Sequence[ItemSpec]) -> List[str]:
    """Live ids in presentation order, duplicates dropped."""
    ids = []
    for item in items:
        item_id = get_item_id(item)
        if item_id not in ids:
            ids.append(item_id)
    return ids


def _default_item(
    item: ItemSpec,
    y: int,
    cols: int,
    default_w: Optional[int],
    default_h: int,
) -> LayoutItem:
    item_id = get_item_id(item)
    w = cols if default_w is None else default_w
    if isinstance(item, Mapping):
        hint = dict(item)
        hint.setdefault("x", 0)
        hint.setdefault("y", y)
        hint.setdefault("w", w)
        hint.setdefault("h", default_h)
        # Hints come from the consuming layer, so they are validated like any
        # other external layout.
        return validate_layout([hint], context=f"item '{item_id}'")[0]
    return LayoutItem(id=item_id, x=0, y=y, w=w, h=default_h)


def validate_item_hints(items: Sequence[ItemSpec]) -> None:
    """
    Validate every dict hint in a live item list.

    Hints are otherwise only checked when their item needs a default
    placement, which may happen long after the list was accepted.

    Raises:
        LayoutValidationError: On the first invalid hint
    """
    for item in items:
        if isinstance(item, Mapping):
            _default_item(item, 0, 1, 1, 1)


def synchronize_layout_with_items(
    layout: Sequence[LayoutItem],
    items: Sequence[ItemSpec],
    cols: int,
    compact_type: Optional[str] = "vertical",
    default_w: Optional[int] = 1,
    default_h: int = 1,
) -> Layout:
    """
    Build a complete layout covering exactly the live items.

    Entries for removed items are dropped. Items without an entry are
    appended below everything placed so far (x=0) with the default size,
    or with their own size hint when given as a dict. The result is then
    compacted.

    Args:
        layout: Existing layout, possibly partial or stale (not modified)
        items: Live item ids or dict hints, in presentation order
        cols: Active column count
        compact_type: Compaction mode
        default_w: Width of auto-placed items; None means full width
        default_h: Height of auto-placed items

    Returns:
        New compacted layout, one entry per live id in presentation order
    """
    existing = {}
    for entry in layout:
        existing.setdefault(entry.id, entry)

    live_ids = get_item_ids(items)
    bottom = layout_bottom([existing[item_id] for item_id in live_ids if item_id in existing])

    synced: Layout = []
    seen = set()
    added = []
    for item in items:
        item_id = get_item_id(item)
        if item_id in seen:
            continue
        seen.add(item_id)

        if item_id in existing:
            synced.append(replace(existing[item_id]))
        else:
            new_item = _default_item(item, bottom, cols, default_w, default_h)
            bottom = max(bottom, new_item.bottom)
            synced.append(new_item)
            added.append(item_id)

    dropped = [item_id for item_id in existing if item_id not in seen]
    if added or dropped:
        logger.debug(f"Synchronized layout: added {added}, dropped {dropped}")

    return compact(synced, cols, compact_type)
