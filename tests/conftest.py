"""Shared fixtures for gridreflow tests."""

import pytest

from gridreflow.config import GridConfig
from gridreflow.layouts.item import LayoutItem


def item(item_id, x=0, y=0, w=1, h=1, **kwargs):
    """Shorthand LayoutItem constructor."""
    return LayoutItem(id=item_id, x=x, y=y, w=w, h=h, **kwargs)


def positions(layout):
    """Map id -> (x, y, w, h) for concise assertions."""
    return {entry.id: (entry.x, entry.y, entry.w, entry.h) for entry in layout}


@pytest.fixture
def default_config():
    """Default GridConfig (lg/md/sm/xs/xxs)."""
    return GridConfig()


@pytest.fixture
def breakpoints():
    return {"lg": 1200, "md": 996, "sm": 768, "xs": 480, "xxs": 0}


@pytest.fixture
def cols():
    return {"lg": 12, "md": 10, "sm": 6, "xs": 4, "xxs": 2}
