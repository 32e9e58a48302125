"""
ResponsiveGridController - breakpoint-aware layout state.

This module provides the controller that sits between the presentation
layer and the layout algorithms. It owns:
- The current state (layout, breakpoint, column count)
- A per-breakpoint layout cache, used to restore layouts when a breakpoint
  is revisited and to seed layouts for breakpoints never seen before
- The live item set and the container width

Design Principles:
1. Every transition runs to completion before listeners are notified, so
   listeners always observe committed state
2. Calls made from inside a listener are queued and run after the current
   transition finishes
3. External layouts are validated before anything is mutated; a rejected
   layout leaves cache and state untouched
"""

import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Sequence, Tuple

from gridreflow.config import GridConfig
from gridreflow.exceptions import ConfigError
from gridreflow.layouts.item import ControllerState, Layout, clone_layout, clone_layouts
from gridreflow.layouts.responsive import (
    find_or_generate_responsive_layout,
    get_breakpoint_from_width,
    get_cols_from_breakpoint,
)
from gridreflow.layouts.sync import (
    ItemSpec,
    get_item_ids,
    synchronize_layout_with_items,
    validate_item_hints,
)
from gridreflow.layouts.validation import LayoutLike, validate_layout, validate_layouts

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]

EVENTS = ("layout_change", "breakpoint_change", "width_change")


class ResponsiveGridController:
    """
    Keeps a grid layout in sync with container width and live items.

    Listeners are called in this order after every breakpoint change:
    - layout_change(layout, layouts)
    - breakpoint_change(breakpoint, cols)
    - width_change(width, margin, cols)

    layout_change alone fires when the layout changes without a breakpoint
    change (set_layouts, set_items, update_layout).

    Usage:
        controller = ResponsiveGridController(["a", "b"], width=1280)
        controller.set_width(800)
        controller.state.breakpoint  # 'sm'
    """

    def __init__(
        self,
        items: Sequence[ItemSpec],
        width: int,
        config: Optional[GridConfig] = None,
        layouts: Optional[Mapping[str, LayoutLike]] = None,
        breakpoint: Optional[str] = None,
        on_layout_change: Optional[Listener] = None,
        on_breakpoint_change: Optional[Listener] = None,
        on_width_change: Optional[Listener] = None,
    ):
        """
        Initialize the controller and generate the initial layout.

        Raises:
            LayoutValidationError: If any authored layout is invalid
            ConfigError: If breakpoint is not a configured breakpoint
        """
        self.config = config or GridConfig()
        self._layouts: Dict[str, Layout] = validate_layouts(layouts or {})
        self._items: List[ItemSpec] = list(items)
        validate_item_hints(self._items)
        self._width = self._check_width(width)

        self._breakpoint_override: Optional[str] = None
        if breakpoint is not None:
            self._check_breakpoint(breakpoint)
            self._breakpoint_override = breakpoint

        self._listeners: Dict[str, List[Listener]] = {event: [] for event in EVENTS}
        for event, listener in zip(EVENTS, (on_layout_change, on_breakpoint_change, on_width_change)):
            if listener is not None:
                self.add_listener(event, listener)

        self._pending: Deque[Tuple[Callable, tuple]] = deque()
        self._transitioning = False

        initial = self._resolve_breakpoint(self._width)
        cols = get_cols_from_breakpoint(initial, self.config.cols)
        layout = self._build_layout(initial, initial, cols)
        self._layouts[initial] = clone_layout(layout)
        self._state = ControllerState(layout=layout, breakpoint=initial, cols=cols)
        logger.debug(f"Initial breakpoint '{initial}' ({cols} cols) at width {self._width}")

    # -------------------------------------------------------------------------
    # State accessors
    # -------------------------------------------------------------------------
    @property
    def state(self) -> ControllerState:
        """Copy of the current state."""
        return ControllerState(
            layout=clone_layout(self._state.layout),
            breakpoint=self._state.breakpoint,
            cols=self._state.cols,
        )

    @property
    def layout(self) -> Layout:
        return clone_layout(self._state.layout)

    @property
    def breakpoint(self) -> str:
        return self._state.breakpoint

    @property
    def cols(self) -> int:
        return self._state.cols

    @property
    def width(self) -> int:
        return self._width

    @property
    def items(self) -> List[str]:
        """Live item ids in presentation order."""
        return get_item_ids(self._items)

    @property
    def layouts(self) -> Dict[str, Layout]:
        """Deep copy of the per-breakpoint layout cache."""
        return clone_layouts(self._layouts)

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------
    def add_listener(self, event: str, listener: Listener) -> None:
        """Register a listener; listeners of one event run in registration order."""
        if event not in self._listeners:
            raise ValueError(f"Unknown event: {event}. Expected one of {', '.join(EVENTS)}")
        self._listeners[event].append(listener)

    def remove_listener(self, event: str, listener: Listener) -> None:
        if event not in self._listeners:
            raise ValueError(f"Unknown event: {event}. Expected one of {', '.join(EVENTS)}")
        self._listeners[event].remove(listener)

    def _emit(self, event: str, *args) -> None:
        for listener in list(self._listeners[event]):
            listener(*args)

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------
    def set_width(self, width: int) -> None:
        """Report a new container width; changes breakpoint if the tier changed."""
        self._run(self._apply_width, self._check_width(width))

    def set_breakpoint(self, breakpoint: Optional[str]) -> None:
        """
        Force a breakpoint regardless of width, or clear the override with None.

        Raises:
            ConfigError: If the breakpoint is not configured
        """
        if breakpoint is not None:
            self._check_breakpoint(breakpoint)
        self._run(self._apply_breakpoint_override, breakpoint)

    def set_layouts(self, layouts: Mapping[str, LayoutLike]) -> None:
        """
        Replace the whole per-breakpoint layout table.

        Raises:
            LayoutValidationError: If any layout is invalid; the cache and
                current state are left unchanged
        """
        self._run(self._apply_layouts, validate_layouts(layouts))

    def set_items(self, items: Sequence[ItemSpec]) -> None:
        """
        Replace the live item set and re-synchronize the current layout.

        Raises:
            LayoutValidationError: If a dict hint is invalid; the previous
                item set and layout are kept
        """
        items = list(items)
        validate_item_hints(items)
        self._run(self._apply_items, items)

    def update_layout(self, layout: LayoutLike) -> None:
        """
        Accept a layout edited by the user (drag or resize) for the current breakpoint.

        Raises:
            LayoutValidationError: If the layout is invalid
        """
        validated = validate_layout(layout, context=f"layouts.{self._state.breakpoint}")
        self._run(self._apply_user_layout, validated)

    # -------------------------------------------------------------------------
    # Transition machinery
    # -------------------------------------------------------------------------
    def _run(self, operation: Callable, *args) -> None:
        if self._transitioning:
            logger.debug(f"Queued {operation.__name__} issued during a transition")
            self._pending.append((operation, args))
            return

        self._transitioning = True
        try:
            operation(*args)
            while self._pending:
                queued, queued_args = self._pending.popleft()
                queued(*queued_args)
        except Exception:
            self._pending.clear()
            raise
        finally:
            self._transitioning = False

    def _apply_width(self, width: int) -> None:
        self._width = width
        self._change_breakpoint(self._resolve_breakpoint(width))

    def _apply_breakpoint_override(self, breakpoint: Optional[str]) -> None:
        self._breakpoint_override = breakpoint
        self._change_breakpoint(self._resolve_breakpoint(self._width))

    def _apply_layouts(self, layouts: Dict[str, Layout]) -> None:
        self._layouts = layouts
        breakpoint, cols = self._state.breakpoint, self._state.cols
        layout = self._build_layout(breakpoint, breakpoint, cols)
        self._commit(layout, breakpoint, cols)
        self._emit("layout_change", self.layout, self.layouts)

    def _apply_items(self, items: List[ItemSpec]) -> None:
        # Only adopt the new items once they have produced a layout.
        synced = self._synchronize(self._state.layout, self._state.cols, items)
        self._items = items
        self._publish(synced)

    def _apply_user_layout(self, layout: Layout) -> None:
        self._publish(self._synchronize(layout, self._state.cols))

    def _publish(self, synced: Layout) -> None:
        self._commit(synced, self._state.breakpoint, self._state.cols)
        self._emit("layout_change", self.layout, self.layouts)

    def _change_breakpoint(self, new_breakpoint: str) -> None:
        last_breakpoint = self._state.breakpoint
        if new_breakpoint == last_breakpoint:
            return

        # Snapshot the outgoing layout so later edits don't leak into it.
        self._layouts[last_breakpoint] = clone_layout(self._state.layout)

        cols = get_cols_from_breakpoint(new_breakpoint, self.config.cols)
        layout = self._build_layout(new_breakpoint, last_breakpoint, cols)
        self._commit(layout, new_breakpoint, cols)
        logger.debug(
            f"Breakpoint changed '{last_breakpoint}' -> '{new_breakpoint}' "
            f"({cols} cols) at width {self._width}"
        )

        self._emit("layout_change", self.layout, self.layouts)
        self._emit("breakpoint_change", new_breakpoint, cols)
        self._emit("width_change", self._width, self.config.margin, cols)

    def _commit(self, layout: Layout, breakpoint: str, cols: int) -> None:
        self._layouts[breakpoint] = clone_layout(layout)
        self._state = ControllerState(layout=layout, breakpoint=breakpoint, cols=cols)

    def _build_layout(self, breakpoint: str, last_breakpoint: str, cols: int) -> Layout:
        layout, generated = find_or_generate_responsive_layout(
            self._layouts,
            self.config.breakpoints,
            self.config.cols,
            breakpoint,
            last_breakpoint,
            self.config.compact_type,
        )
        if generated:
            logger.debug(f"Generated layout for breakpoint '{breakpoint}'")
        return self._synchronize(layout, cols)

    def _synchronize(
        self, layout: Layout, cols: int, items: Optional[Sequence[ItemSpec]] = None
    ) -> Layout:
        return synchronize_layout_with_items(
            layout,
            self._items if items is None else items,
            cols,
            self.config.compact_type,
            default_w=self.config.default_item_w,
            default_h=self.config.default_item_h,
        )

    def _resolve_breakpoint(self, width: int) -> str:
        if self._breakpoint_override is not None:
            return self._breakpoint_override
        return get_breakpoint_from_width(self.config.breakpoints, width)

    def _check_breakpoint(self, breakpoint: str) -> None:
        if breakpoint not in self.config.breakpoints:
            raise ConfigError(f"Unknown breakpoint: {breakpoint}")
        get_cols_from_breakpoint(breakpoint, self.config.cols)

    @staticmethod
    def _check_width(width: int) -> int:
        if width < 0:
            raise ValueError(f"Width must be >= 0, got {width}")
        return width
