"""
Structural validation for externally supplied layouts.

Validation runs wherever a layout crosses into the library (controller
construction, set_layouts, update_layout, file loading). Internally
generated layouts are correct by construction and are not re-validated.
"""

from dataclasses import replace
from typing import Any, Dict, List, Mapping, Sequence, Union

from gridreflow.exceptions import LayoutValidationError
from gridreflow.layouts.item import Layout, LayoutItem

LayoutLike = Sequence[Union[LayoutItem, Mapping[str, Any]]]

# (wire key, attribute, minimum)
_POSITION_FIELDS = (("x", "x", 0), ("y", "y", 0))
_SIZE_FIELDS = (("w", "w", 1), ("h", "h", 1))
_CONSTRAINT_FIELDS = (
    ("minW", "min_w", 0),
    ("maxW", "max_w", 1),
    ("minH", "min_h", 0),
    ("maxH", "max_h", 1),
)
_CONSTRAINT_PAIRS = (("minW", "min_w", "maxW", "max_w"), ("minH", "min_h", "maxH", "max_h"))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _to_item(entry: Union[LayoutItem, Mapping[str, Any]], index: int, context: str) -> LayoutItem:
    if isinstance(entry, LayoutItem):
        return entry
    if isinstance(entry, Mapping):
        return LayoutItem.from_dict(dict(entry))
    raise LayoutValidationError(
        f"item at index {index} must be a LayoutItem or mapping, got {type(entry).__name__}",
        context=context,
    )


def validate_layout(layout: LayoutLike, context: str = "layout") -> Layout:
    """
    Validate a layout and return it as fresh LayoutItem objects.

    Checks, in order: non-empty ids, unique ids, x/y >= 0, w/h >= 1,
    integer size constraints when given (minW/minH >= 0, maxW/maxH >= 1),
    and min <= max for width and height constraints when both are given.

    Args:
        layout: Sequence of LayoutItem or react-grid-layout dicts
        context: Label used in error messages (e.g. 'layouts.lg')

    Returns:
        A new list of LayoutItem; the input is not modified

    Raises:
        LayoutValidationError: On the first violated item/field
    """
    if isinstance(layout, (str, bytes, Mapping)) or not isinstance(layout, Sequence):
        raise LayoutValidationError("layout must be a list of items", context=context)

    items = [_to_item(entry, index, context) for index, entry in enumerate(layout)]

    for index, item in enumerate(items):
        if not isinstance(item.id, str) or not item.id:
            raise LayoutValidationError(
                f"item at index {index} has an empty or missing id",
                context=context,
                field="i",
            )

    seen = set()
    for item in items:
        if item.id in seen:
            raise LayoutValidationError(
                f"duplicate item id '{item.id}'",
                context=context,
                item_id=item.id,
                field="i",
            )
        seen.add(item.id)

    for fields in (_POSITION_FIELDS, _SIZE_FIELDS):
        for item in items:
            for key, attr, minimum in fields:
                value = getattr(item, attr)
                if not _is_int(value) or value < minimum:
                    raise LayoutValidationError(
                        f"item '{item.id}' field '{key}' must be an integer >= {minimum}, got {value!r}",
                        context=context,
                        item_id=item.id,
                        field=key,
                    )

    for item in items:
        for key, attr, minimum in _CONSTRAINT_FIELDS:
            value = getattr(item, attr)
            if value is not None and (not _is_int(value) or value < minimum):
                raise LayoutValidationError(
                    f"item '{item.id}' field '{key}' must be an integer >= {minimum}, got {value!r}",
                    context=context,
                    item_id=item.id,
                    field=key,
                )

    for item in items:
        for min_key, min_attr, max_key, max_attr in _CONSTRAINT_PAIRS:
            low, high = getattr(item, min_attr), getattr(item, max_attr)
            if low is not None and high is not None and low > high:
                raise LayoutValidationError(
                    f"item '{item.id}' has {min_key}={low} greater than {max_key}={high}",
                    context=context,
                    item_id=item.id,
                    field=min_key,
                )

    return [replace(item) for item in items]


def validate_layouts(layouts: Mapping[str, LayoutLike]) -> Dict[str, List[LayoutItem]]:
    """Validate every breakpoint of a layout table, returning a fresh table."""
    if not isinstance(layouts, Mapping):
        raise LayoutValidationError("layouts must map breakpoint names to layouts", context="layouts")
    return {
        bp: validate_layout(layout, context=f"layouts.{bp}")
        for bp, layout in layouts.items()
    }
