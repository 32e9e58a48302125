"""
Configuration management for gridreflow.

This module defines the GridConfig dataclass that holds the breakpoint and
column tables, the compaction mode and the defaults used for auto-placed
items.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from gridreflow.exceptions import ConfigError
from gridreflow.layouts.compaction import normalize_compact_type

DEFAULT_BREAKPOINTS = {"lg": 1200, "md": 996, "sm": 768, "xs": 480, "xxs": 0}
DEFAULT_COLS = {"lg": 12, "md": 10, "sm": 6, "xs": 4, "xxs": 2}


@dataclass
class GridConfig:
    """
    Grid configuration.

    Attributes:
        breakpoints: Breakpoint name -> minimum container width in pixels
        cols: Breakpoint name -> column count
        compact_type: 'vertical', 'horizontal' or 'none' (None means 'none')
        default_item_w: Width of auto-placed items; None means full width
        default_item_h: Height of auto-placed items
        margin: [x, y] margin between items in pixels
        row_height: Height of one grid row in pixels
    """

    breakpoints: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_BREAKPOINTS))
    cols: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_COLS))
    compact_type: Optional[str] = "vertical"

    # Auto-placement defaults
    default_item_w: Optional[int] = 1
    default_item_h: int = 1

    # Rendering hints passed through to the grid component
    margin: Tuple[int, int] = (10, 10)
    row_height: int = 150

    def __post_init__(self):
        """Validate and normalize the tables."""
        self.breakpoints = dict(self.breakpoints)
        self.cols = dict(self.cols)
        self.margin = tuple(self.margin)

        if not self.breakpoints:
            raise ConfigError("At least one breakpoint is required")

        for name, threshold in self.breakpoints.items():
            if not isinstance(threshold, int) or isinstance(threshold, bool) or threshold < 0:
                raise ConfigError(
                    f"Breakpoint '{name}' threshold must be a non-negative integer, got {threshold!r}"
                )

        missing = [name for name in self.breakpoints if name not in self.cols]
        if missing:
            raise ConfigError(f"No column count configured for breakpoints: {', '.join(missing)}")

        for name, count in self.cols.items():
            if not isinstance(count, int) or isinstance(count, bool) or count < 1:
                raise ConfigError(
                    f"Column count for breakpoint '{name}' must be a positive integer, got {count!r}"
                )

        self.compact_type = normalize_compact_type(self.compact_type)

        if self.default_item_w is not None and self.default_item_w < 1:
            raise ConfigError(f"default_item_w must be >= 1, got {self.default_item_w}")
        if self.default_item_h < 1:
            raise ConfigError(f"default_item_h must be >= 1, got {self.default_item_h}")
        if len(self.margin) != 2:
            raise ConfigError(f"margin must be [x, y], got {list(self.margin)}")

    def to_dict(self) -> dict:
        """Convert config to dictionary for serialization."""
        return {
            "breakpoints": dict(self.breakpoints),
            "cols": dict(self.cols),
            "compact_type": self.compact_type,
            "default_item_w": self.default_item_w,
            "default_item_h": self.default_item_h,
            "margin": list(self.margin),
            "row_height": self.row_height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridConfig":
        """Build a config from a dict, rejecting unknown keys."""
        known = cls().to_dict().keys()
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: Optional[Path] = None) -> GridConfig:
    """
    Load a GridConfig from a JSON file, or return the defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the file content is not a valid config
    """
    if path is None:
        return GridConfig()

    with open(Path(path), "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Config file is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object")
    return GridConfig.from_dict(data)
