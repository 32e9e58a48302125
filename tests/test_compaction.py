"""
Unit tests for gridreflow.layouts.compaction.

Covers vertical, horizontal and pass-through compaction, static obstacles,
bounds correction, idempotency and determinism.
"""

import itertools
import random

import pytest

from gridreflow.exceptions import ConfigError
from gridreflow.layouts.compaction import assert_no_overlap, compact, correct_bounds
from gridreflow.layouts.item import collides

from tests.conftest import item, positions


class TestVerticalCompaction:
    """Tests for compact(..., 'vertical')."""

    def test_compact_when_empty_then_returns_empty(self):
        assert compact([], 12) == []

    def test_compact_when_two_items_share_a_cell_then_second_moves_below(self):
        layout = [item("a", 0, 0, 2, 1), item("b", 0, 0, 2, 1)]

        result = compact(layout, 12, "vertical")

        assert positions(result) == {"a": (0, 0, 2, 1), "b": (0, 1, 2, 1)}

    def test_compact_when_insertion_order_reversed_then_first_inserted_wins(self):
        layout = [item("b", 0, 0, 2, 1), item("a", 0, 0, 2, 1)]

        result = compact(layout, 12)

        assert positions(result) == {"b": (0, 0, 2, 1), "a": (0, 1, 2, 1)}

    def test_compact_when_gap_above_item_then_item_floats_up(self):
        result = compact([item("a", 3, 5, 2, 2)], 12)

        assert positions(result) == {"a": (3, 0, 2, 2)}

    def test_compact_when_item_below_another_then_it_rests_on_top_edge(self):
        layout = [item("a", 0, 0, 4, 2), item("b", 2, 7, 2, 1)]

        result = compact(layout, 12)

        assert positions(result)["b"] == (2, 2, 2, 1)

    def test_compact_when_columns_do_not_overlap_then_items_are_independent(self):
        layout = [item("a", 0, 0, 2, 3), item("b", 2, 4, 2, 1)]

        result = compact(layout, 12)

        assert positions(result)["b"] == (2, 0, 2, 1)

    def test_compact_when_input_unordered_then_output_keeps_input_order(self):
        layout = [item("b", 0, 3), item("a", 0, 0)]

        result = compact(layout, 12)

        assert [entry.id for entry in result] == ["b", "a"]
        assert positions(result) == {"a": (0, 0, 1, 1), "b": (0, 1, 1, 1)}

    def test_compact_when_called_then_input_is_not_mutated(self):
        layout = [item("a", 0, 4), item("b", 0, 4)]

        compact(layout, 12)

        assert positions(layout) == {"a": (0, 4, 1, 1), "b": (0, 4, 1, 1)}


class TestStaticItems:
    """Static items never move and block others."""

    def test_compact_when_static_occupies_top_then_item_goes_below(self):
        layout = [item("s", 0, 0, 2, 2, static=True), item("a", 0, 0, 2, 1)]

        result = compact(layout, 12)

        assert positions(result) == {"s": (0, 0, 2, 2), "a": (0, 2, 2, 1)}

    def test_compact_when_static_is_below_then_item_floats_over_it(self):
        layout = [item("s", 0, 3, 2, 1, static=True), item("a", 0, 1, 2, 1)]

        result = compact(layout, 12)

        assert positions(result) == {"s": (0, 3, 2, 1), "a": (0, 0, 2, 1)}

    def test_compact_when_static_is_above_then_item_rests_on_it(self):
        layout = [item("a", 0, 5, 2, 2), item("s", 0, 1, 2, 1, static=True)]

        result = compact(layout, 12)

        assert positions(result) == {"a": (0, 2, 2, 2), "s": (0, 1, 2, 1)}

    def test_compact_when_item_overlaps_static_below_then_it_settles_under_it(self):
        layout = [item("a", 0, 0), item("s", 0, 3, static=True), item("c", 0, 2, 1, 2)]

        result = compact(layout, 12)

        assert positions(result) == {"a": (0, 0, 1, 1), "s": (0, 3, 1, 1), "c": (0, 4, 1, 2)}

    def test_compact_when_static_overflows_then_static_is_kept(self):
        layout = [item("s", 10, 0, 4, 1, static=True)]

        result = compact(layout, 12)

        assert positions(result) == {"s": (10, 0, 4, 1)}


class TestBounds:
    """Tests for correct_bounds()."""

    def test_correct_bounds_when_item_wider_than_grid_then_width_is_clipped(self):
        result = correct_bounds([item("a", 3, 0, 20, 1)], 12)

        assert positions(result) == {"a": (0, 0, 12, 1)}

    def test_correct_bounds_when_item_overflows_right_edge_then_it_moves_left(self):
        result = correct_bounds([item("a", 10, 0, 4, 1)], 12)

        assert positions(result) == {"a": (8, 0, 4, 1)}

    def test_compact_when_item_too_wide_then_result_fits_columns(self):
        result = compact([item("a", 0, 0, 8, 1), item("b", 5, 0, 9, 1)], 6)

        assert all(entry.x + entry.w <= 6 for entry in result)


class TestHorizontalCompaction:
    """Tests for compact(..., 'horizontal')."""

    def test_compact_when_gap_to_the_left_then_item_slides_left(self):
        layout = [item("a", 0, 0, 2, 1), item("b", 5, 0, 2, 1)]

        result = compact(layout, 12, "horizontal")

        assert positions(result) == {"a": (0, 0, 2, 1), "b": (2, 0, 2, 1)}

    def test_compact_when_row_is_full_then_item_drops_to_next_row(self):
        layout = [item("a", 0, 0, 4, 1), item("b", 0, 0, 2, 1)]

        result = compact(layout, 4, "horizontal")

        assert positions(result) == {"a": (0, 0, 4, 1), "b": (0, 1, 2, 1)}

    def test_compact_when_item_drops_a_row_then_it_slides_left_in_that_row(self):
        layout = [
            item("a", 0, 0, 2, 2),
            item("b", 1, 0, 4, 2),
            item("s", 4, 0, 2, 2, static=True),
        ]

        result = compact(layout, 6, "horizontal")

        assert positions(result) == {"a": (0, 0, 2, 2), "b": (0, 2, 4, 2), "s": (4, 0, 2, 2)}

    def test_compact_when_horizontal_then_no_overlaps(self):
        layout = [item(str(i), i % 3, i // 2, 2, 1 + i % 2) for i in range(8)]

        result = compact(layout, 6, "horizontal")

        assert_no_overlap(result)


class TestPassThrough:
    """Tests for compact(..., 'none')."""

    def test_compact_when_none_then_positions_are_kept(self):
        layout = [item("a", 0, 3, 2, 1), item("b", 0, 3, 2, 1)]

        result = compact(layout, 12, "none")

        assert positions(result) == positions(layout)

    def test_compact_when_mode_is_python_none_then_positions_are_kept(self):
        result = compact([item("a", 0, 3)], 12, None)

        assert positions(result) == {"a": (0, 3, 1, 1)}

    def test_compact_when_mode_unknown_then_raises_config_error(self):
        with pytest.raises(ConfigError):
            compact([item("a")], 12, "diagonal")


def _scrambled_layout():
    # Overlapping, gappy, mixed-size items plus one static obstacle.
    sizes = itertools.cycle([(2, 1), (3, 2), (1, 3), (4, 1)])
    layout = []
    for index in range(12):
        w, h = next(sizes)
        layout.append(item(f"i{index}", (index * 5) % 9, (index * 3) % 7, w, h))
    layout.append(item("static", 4, 2, 2, 2, static=True))
    return layout


class TestCompactionProperties:
    """Idempotency, overlap removal and determinism."""

    def test_compact_when_applied_twice_then_result_is_unchanged(self):
        once = compact(_scrambled_layout(), 12)

        assert compact(once, 12) == once

    def test_compact_when_done_then_no_non_static_items_overlap(self):
        result = compact(_scrambled_layout(), 12)

        for first, second in itertools.combinations(result, 2):
            if first.static and second.static:
                continue
            assert not collides(first, second), (first, second)

    def test_compact_when_same_input_then_same_output(self):
        assert compact(_scrambled_layout(), 12) == compact(_scrambled_layout(), 12)

    def test_compact_when_vertical_then_every_item_rests_on_something(self):
        result = compact(_scrambled_layout(), 12)

        for entry in result:
            if entry.static or entry.y == 0:
                continue
            resting_on = [
                other for other in result
                if other.bottom == entry.y and other.x < entry.right and entry.x < other.right
            ]
            assert resting_on, entry


def _random_layout(seed, cols):
    # Overflowing widths, overlaps and up to two static obstacles.
    rng = random.Random(seed)
    layout = []
    for index in range(rng.randint(4, 14)):
        layout.append(item(
            f"i{index}",
            rng.randint(0, cols - 1),
            rng.randint(0, 8),
            rng.randint(1, cols + 2),
            rng.randint(1, 3),
        ))
    for index in range(rng.randint(0, 2)):
        w = rng.randint(1, cols)
        layout.append(item(
            f"s{index}",
            rng.randint(0, cols - w),
            rng.randint(0, 6),
            w,
            rng.randint(1, 2),
            static=True,
        ))
    return layout


@pytest.mark.parametrize("compact_type", ["vertical", "horizontal"])
@pytest.mark.parametrize("cols", [6, 12])
@pytest.mark.parametrize("seed", range(20))
class TestCompactionPropertiesOnRandomLayouts:
    """The same properties over seeded random layouts in both modes."""

    def test_compact_when_applied_twice_then_result_is_unchanged(self, seed, cols, compact_type):
        once = compact(_random_layout(seed, cols), cols, compact_type)

        assert compact(once, cols, compact_type) == once

    def test_compact_when_done_then_items_fit_and_do_not_overlap(self, seed, cols, compact_type):
        layout = _random_layout(seed, cols)

        result = compact(layout, cols, compact_type)

        assert [entry.id for entry in result] == [entry.id for entry in layout]
        for first, second in itertools.combinations(result, 2):
            if first.static and second.static:
                continue
            assert not collides(first, second), (first, second)
        for entry in result:
            if not entry.static:
                assert entry.right <= cols, entry

    def test_compact_when_done_then_statics_are_unmoved(self, seed, cols, compact_type):
        layout = _random_layout(seed, cols)

        result = compact(layout, cols, compact_type)

        statics = {entry.id: entry for entry in layout if entry.static}
        for entry in result:
            if entry.static:
                assert entry == statics[entry.id]
