# =============================================================================
# test_buffer.py - Dot grid buffer and dirty tracking
# =============================================================================

import pytest

from dotmatrix.core.errors import ValidationError
from dotmatrix.display.buffer import CLEAN, FULLY_DIRTY, DotGrid, PartiallyDirty

OFF = "rgb(50,50,50)"


def lit_indices(grid, style):
    return {i for i, cell in enumerate(grid.cells) if cell == style}


# =============================================================================
# Construction and clear
# =============================================================================

class TestClear:

    def test_new_grid_is_off_and_fully_dirty(self):
        grid = DotGrid(3, 2)
        assert len(grid) == 6
        assert grid.cells == (OFF,) * 6
        assert grid.dirty == FULLY_DIRTY

    def test_custom_off_style(self):
        grid = DotGrid(2, 2, off="black")
        assert set(grid.cells) == {"black"}

    def test_clear_resets_every_cell(self, grid):
        grid.fill(0, 0, 4, 4, "red")
        grid.clear()
        assert set(grid.cells) == {OFF}
        assert grid.dirty == FULLY_DIRTY

    def test_clear_subsumes_pending_dots(self, grid):
        grid.set(0, 0, "red")
        grid.clear()
        grid.set(1, 1, "blue")
        assert grid.dirty == FULLY_DIRTY

    def test_negative_dimensions_rejected(self):
        with pytest.raises(ValidationError):
            DotGrid(-1, 4)

    def test_empty_grid(self):
        grid = DotGrid(0, 0)
        assert len(grid) == 0
        assert grid.set(0, 0, "red") is False


# =============================================================================
# set / get
# =============================================================================

class TestSet:

    def test_set_writes_cell_and_marks_index(self, grid):
        """4x4 grid: (1, 1) is flat index 5."""
        assert grid.set(1, 1, "rgb(1,2,3)") is True
        assert grid.cells[5] == "rgb(1,2,3)"
        assert grid.get(1, 1) == "rgb(1,2,3)"
        assert grid.dirty == PartiallyDirty({5})

    def test_set_channels(self, grid):
        grid.set(3, 0, (10, 20, 30))
        assert grid.get(3, 0) == "rgb(10,20,30)"

    def test_set_without_color_turns_dot_off(self, grid):
        grid.set(2, 2, "red")
        grid.set(2, 2)
        assert grid.get(2, 2) == OFF

    def test_repeated_set_is_harmless(self, grid):
        grid.set(0, 0, "red")
        grid.set(0, 0, "blue")
        assert grid.dirty.indices == {0}
        assert grid.get(0, 0) == "blue"

    @pytest.mark.parametrize("color", [42, (1, 2), {"r": 1}, ("x", "y", "z")])
    def test_invalid_color_is_dropped(self, grid, color):
        before = grid.cells
        assert grid.set(1, 1, color) is False
        assert grid.cells == before
        assert grid.dirty == CLEAN

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (4, 0), (0, 4), (100, 100)])
    def test_out_of_range_is_ignored(self, grid, x, y):
        before = grid.cells
        assert grid.set(x, y, "red") is False
        assert grid.cells == before
        assert grid.dirty == CLEAN

    def test_out_of_range_column_does_not_wrap(self, grid):
        grid.set(4, 0, "red")
        assert grid.get(0, 1) == OFF

    def test_strict_bounds_raises(self):
        grid = DotGrid(4, 4, strict_bounds=True)
        with pytest.raises(ValidationError) as exc_info:
            grid.set(4, 0, "red")
        assert exc_info.value.details == {"x": 4, "y": 0, "width": 4, "height": 4}

    def test_get_out_of_range_raises(self, grid):
        with pytest.raises(ValidationError):
            grid.get(0, 4)

    def test_index_and_position(self, grid):
        assert grid.index(3, 2) == 11
        assert grid.position(11) == (3, 2)


# =============================================================================
# fill / rect
# =============================================================================

class TestFillAndRect:

    def test_fill_paints_rectangle(self, grid):
        grid.fill(0, 0, 2, 2, "red")
        assert lit_indices(grid, "red") == {0, 1, 4, 5}
        assert lit_indices(grid, OFF) == set(range(16)) - {0, 1, 4, 5}
        assert grid.dirty.indices == {0, 1, 4, 5}

    def test_fill_clips_to_grid(self, grid):
        grid.fill(3, 3, 5, 5, "red")
        assert lit_indices(grid, "red") == {15}

    def test_fill_strict_bounds_raises(self):
        grid = DotGrid(4, 4, strict_bounds=True)
        with pytest.raises(ValidationError):
            grid.fill(3, 3, 2, 1, "red")

    def test_rect_paints_border_only(self, grid):
        grid.rect(0, 0, 3, 3, "blue")
        assert lit_indices(grid, "blue") == {0, 1, 2, 4, 6, 8, 9, 10}
        assert grid.cells[5] == OFF

    def test_rect_single_row(self, grid):
        grid.rect(0, 1, 4, 1, "blue")
        assert lit_indices(grid, "blue") == {4, 5, 6, 7}

    def test_zero_size_paints_nothing(self, grid):
        grid.fill(1, 1, 0, 3, "red")
        grid.rect(1, 1, 3, 0, "red")
        assert grid.dirty == CLEAN

    def test_invalid_color_drops_whole_fill(self, grid):
        grid.fill(0, 0, 4, 4, 3.5)
        assert grid.dirty == CLEAN


# =============================================================================
# draw
# =============================================================================

SHAPE = [
    [1, 0, 1],
    [0, 1, 0],
]


class TestDraw:

    def test_draw_paints_lit_bits(self, grid):
        assert grid.draw(0, 0, SHAPE, color="red") is True
        assert lit_indices(grid, "red") == {0, 2, 5}

    def test_unlit_bits_untouched_without_fill(self, grid):
        grid.fill(0, 0, 4, 4, "blue")
        grid.draw(0, 0, SHAPE, color="red")
        assert lit_indices(grid, "red") == {0, 2, 5}
        assert lit_indices(grid, "blue") == set(range(16)) - {0, 2, 5}

    def test_fill_erases_unlit_bits(self, grid):
        grid.fill(0, 0, 4, 4, "blue")
        assert grid.draw(0, 0, SHAPE, color="red", fill=True) is True
        assert lit_indices(grid, "red") == {0, 2, 5}
        assert lit_indices(grid, OFF) == {1, 4, 6}
        assert lit_indices(grid, "blue") == set(range(16)) - {0, 1, 2, 4, 5, 6}

    def test_draw_at_offset(self, grid):
        grid.draw(1, 2, SHAPE, color="red")
        assert lit_indices(grid, "red") == {9, 11, 14}

    def test_draw_clips_partially_visible_shape(self, grid):
        assert grid.draw(-1, 3, SHAPE, color="red") is True
        # Only row 0 at y=3 is visible; bit (0,0) is off grid
        assert lit_indices(grid, "red") == {13}

    def test_draw_without_color_uses_off(self, grid):
        grid.fill(0, 0, 4, 4, "blue")
        grid.draw(0, 0, [[1]])
        assert grid.cells[0] == OFF

    @pytest.mark.parametrize(
        "x, y, shape, fill",
        [
            (0, 0, [], False),
            (0, 0, [[], []], True),
            (4, 0, SHAPE, True),
            (0, -2, SHAPE, True),
            (-3, 0, SHAPE, True),
            (0, 0, [[0, 0], [0, 0]], False),
        ],
    )
    def test_nothing_painted_returns_false(self, grid, x, y, shape, fill):
        assert grid.draw(x, y, shape, color="red", fill=fill) is False
        assert grid.dirty == CLEAN

    def test_blank_shape_with_fill_paints(self, grid):
        assert grid.draw(0, 0, [[0, 0]], color="red", fill=True) is True
        assert grid.dirty.indices == {0, 1}

    def test_ragged_rows(self, grid):
        grid.draw(0, 0, [[1], [1, 1, 1]], color="red")
        assert lit_indices(grid, "red") == {0, 4, 5, 6}

    def test_non_sequence_rows_skipped(self, grid):
        grid.draw(0, 0, [7, "11", [1]], color="red")
        assert lit_indices(grid, "red") == {8}

    def test_draw_never_raises_in_strict_mode(self):
        grid = DotGrid(4, 4, strict_bounds=True)
        assert grid.draw(3, 3, SHAPE, color="red") is True

    def test_invalid_color_with_fill_still_erases(self, grid):
        grid.fill(0, 0, 4, 4, "blue")
        assert grid.draw(0, 0, [[1, 0]], color=42, fill=True) is True
        assert grid.cells[0] == "blue"
        assert grid.cells[1] == OFF


# =============================================================================
# Dirty state
# =============================================================================

class TestDirtyState:

    def test_drain_returns_and_resets(self, grid):
        grid.set(0, 0, "red")
        state = grid.drain()
        assert state == PartiallyDirty({0})
        assert grid.dirty == CLEAN
        assert not grid.is_dirty

    def test_drain_full(self):
        grid = DotGrid(2, 2)
        assert grid.drain() == FULLY_DIRTY
        assert grid.drain() == CLEAN

    def test_is_pending_on_fresh_grid(self):
        grid = DotGrid(4, 4)
        grid.set(1, 1, "rgb(1,2,3)")
        assert grid.is_pending(5)
        assert grid.is_pending(0)
        assert not grid.is_pending(16)

    def test_is_pending_tracks_changed_dots(self, grid):
        assert not grid.is_pending(5)
        grid.set(1, 1, "rgb(1,2,3)")
        assert grid.is_pending(5)
        assert not grid.is_pending(6)

    def test_restore_merges_with_new_marks(self, grid):
        grid.set(0, 0, "red")
        state = grid.drain()
        grid.set(1, 0, "blue")
        grid.restore(state)
        assert grid.dirty == PartiallyDirty({0, 1})

    def test_restore_full(self, grid):
        grid.set(0, 0, "red")
        grid.restore(FULLY_DIRTY)
        assert grid.dirty == FULLY_DIRTY

    def test_restore_clean_is_noop(self, grid):
        grid.restore(CLEAN)
        assert grid.dirty == CLEAN
