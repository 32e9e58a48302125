"""
Grid layout data model.

A layout is a list of LayoutItem, one per grid item id. Items serialize to
the same dict shape react-grid-layout and dash_draggable use ('i', 'x',
'y', 'w', 'h', 'minW', ...), so layouts can be passed straight to the
rendering component and read back from it.
"""

import copy
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

COMPACT_TYPES = ("vertical", "horizontal", "none")

# Python attribute -> wire key
_OPTIONAL_KEYS = {
    "min_w": "minW",
    "max_w": "maxW",
    "min_h": "minH",
    "max_h": "maxH",
    "is_draggable": "isDraggable",
    "is_resizable": "isResizable",
}


@dataclass
class LayoutItem:
    """
    A single positioned item on the grid.

    Attributes:
        id: Unique identifier within a layout (wire key 'i')
        x: Column of the left edge
        y: Row of the top edge
        w: Width in columns
        h: Height in rows
        static: Static items never move and act only as obstacles
    """

    id: str
    x: int = 0
    y: int = 0
    w: int = 1
    h: int = 1
    min_w: Optional[int] = None
    max_w: Optional[int] = None
    min_h: Optional[int] = None
    max_h: Optional[int] = None
    static: bool = False
    is_draggable: Optional[bool] = None
    is_resizable: Optional[bool] = None

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the react-grid-layout dict shape, omitting unset optionals."""
        data: Dict[str, Any] = {
            "i": self.id,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
        }
        for attr, key in _OPTIONAL_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        if self.static:
            data["static"] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutItem":
        """Build an item from a react-grid-layout dict ('i' or 'id')."""
        item_id = data.get("i", data.get("id"))
        kwargs = {
            attr: data[key] for attr, key in _OPTIONAL_KEYS.items() if key in data
        }
        return cls(
            id=item_id,
            x=data.get("x", 0),
            y=data.get("y", 0),
            w=data.get("w", 1),
            h=data.get("h", 1),
            static=bool(data.get("static", data.get("isStatic", False))),
            **kwargs,
        )


@dataclass(frozen=True)
class ControllerState:
    """Snapshot rendered by the presentation layer."""

    layout: List[LayoutItem] = field(default_factory=list)
    breakpoint: str = ""
    cols: int = 0


Layout = List[LayoutItem]


def clone_layout(layout: Sequence[LayoutItem]) -> Layout:
    """Copy a layout so later mutation of either side is not shared."""
    return [replace(item) for item in layout]


def clone_layouts(layouts: Dict[str, Sequence[LayoutItem]]) -> Dict[str, Layout]:
    """Deep copy a breakpoint -> layout table."""
    return copy.deepcopy({bp: list(items) for bp, items in layouts.items()})


def layout_bottom(layout: Sequence[LayoutItem]) -> int:
    """Lowest occupied row boundary (max y + h), 0 for an empty layout."""
    return max((item.bottom for item in layout), default=0)


def collides(a: LayoutItem, b: LayoutItem) -> bool:
    """
    Whether two items overlap.

    Rectangles are half-open, so items sharing an edge do not collide. An
    item never collides with itself.
    """
    if a.id == b.id:
        return False
    if a.right <= b.x or b.right <= a.x:
        return False
    if a.bottom <= b.y or b.bottom <= a.y:
        return False
    return True


def get_first_collision(
    layout: Sequence[LayoutItem], item: LayoutItem
) -> Optional[LayoutItem]:
    """Return the first item in layout colliding with item, if any."""
    for other in layout:
        if collides(other, item):
            return other
    return None


def get_statics(layout: Sequence[LayoutItem]) -> Layout:
    return [item for item in layout if item.static]


def sort_layout_items(
    layout: Sequence[LayoutItem], compact_type: Optional[str] = "vertical"
) -> Layout:
    """
    Order items for compaction.

    Vertical (and 'none') sorts row-major, horizontal sorts column-major.
    sorted() is stable, so ties keep insertion order.
    """
    if compact_type == "horizontal":
        return sorted(layout, key=lambda item: (item.x, item.y))
    return sorted(layout, key=lambda item: (item.y, item.x))
