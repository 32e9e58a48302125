"""
Layout table serializer.

Converts breakpoint -> layout tables between LayoutItem objects and the
react-grid-layout dict shape used by dash_draggable and JSON files.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from gridreflow.exceptions import LayoutValidationError
from gridreflow.layouts.item import LayoutItem
from gridreflow.layouts.validation import validate_layout, validate_layouts


LAYOUT_VERSION = "1.0"


def serialize_layout(layout: Sequence[LayoutItem]) -> List[Dict[str, Any]]:
    """Convert a single layout to a list of JSON-compatible dicts."""
    return [item.to_dict() for item in layout]


def serialize_layouts(
    layouts: Mapping[str, Sequence[LayoutItem]],
    versioned: bool = False,
) -> Dict[str, Any]:
    """
    Convert a layout table to JSON-compatible dicts.

    Args:
        layouts: Breakpoint -> layout
        versioned: Wrap the table in a {'version', 'layouts'} envelope

    Returns:
        Dict keyed by breakpoint, or the versioned envelope
    """
    table = {bp: serialize_layout(layout) for bp, layout in layouts.items()}
    if versioned:
        return {"version": LAYOUT_VERSION, "layouts": table}
    return table


def deserialize_layout(data: Any, context: str = "layout") -> List[LayoutItem]:
    """Validate and convert a list of item dicts."""
    return validate_layout(data, context=context)


def deserialize_layouts(data: Mapping[str, Any]) -> Dict[str, List[LayoutItem]]:
    """
    Validate and convert a layout table.

    Accepts either a bare {breakpoint: [items]} mapping or a versioned
    envelope {'version': '1.x', 'layouts': {...}}.

    Raises:
        ValueError: If the envelope version is incompatible
        LayoutValidationError: If any layout fails validation
    """
    if not isinstance(data, Mapping):
        raise LayoutValidationError("layouts must be a JSON object", context="layouts")

    if "layouts" in data and "version" in data:
        version = str(data.get("version", "0.0"))

        # Check version compatibility
        major_version = version.split(".")[0]
        if major_version != LAYOUT_VERSION.split(".")[0]:
            raise ValueError(
                f"Incompatible layout version: {version}. "
                f"Expected version {LAYOUT_VERSION.split('.')[0]}.x"
            )
        data = data["layouts"]

    return validate_layouts(data)


def _read_json(filepath: Path) -> Any:
    with open(Path(filepath), "r", encoding="utf-8") as f:
        return json.load(f)


def load_layout_from_file(filepath: Path) -> List[LayoutItem]:
    """
    Load a single layout (a JSON list of items).

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
        LayoutValidationError: If the layout is invalid
    """
    return deserialize_layout(_read_json(filepath), context=Path(filepath).name)


def load_layouts_from_file(filepath: Path) -> Dict[str, List[LayoutItem]]:
    """
    Load a layout table from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
        LayoutValidationError: If any layout is invalid
    """
    return deserialize_layouts(_read_json(filepath))
