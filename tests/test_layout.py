"""Unit tests for the regional bracket layout engine"""

import pytest

from bracketwatch.ui.layout import (
    REGION_HEIGHT,
    SLOT_HEIGHTS,
    cell_width_for,
    compute_grid,
    connector_glyphs,
)

VARIANTS = [(False, False), (True, False), (False, True), (True, True)]


@pytest.mark.unit
class TestGridGeometry:
    """Test cell placement for every orientation"""

    def test_region_height_is_31(self):
        assert REGION_HEIGHT == 31
        assert compute_grid(40).total_height == 31
        assert compute_grid(400).total_height == 31

    def test_slot_heights(self):
        assert SLOT_HEIGHTS == (3, 7, 15, 31)
        for previous, current in zip(SLOT_HEIGHTS, SLOT_HEIGHTS[1:]):
            assert current == 2 * previous + 1

    @pytest.mark.parametrize("mirrored,flipped", VARIANTS)
    def test_fifteen_cells_depth_major(self, mirrored, flipped):
        grid = compute_grid(120, mirrored=mirrored, flipped=flipped)

        assert len(grid.cells) == 15
        assert [len(grid.cells_for_depth(d)) for d in range(4)] == [8, 4, 2, 1]
        assert [c.depth for c in grid.cells] == [0] * 8 + [1] * 4 + [2] * 2 + [3]

    def test_center_rows(self):
        grid = compute_grid(120)

        assert [c.center_row for c in grid.cells_for_depth(0)] == [1, 5, 9, 13, 17, 21, 25, 29]
        assert [c.center_row for c in grid.cells_for_depth(1)] == [3, 11, 19, 27]
        assert [c.center_row for c in grid.cells_for_depth(2)] == [7, 23]
        assert [c.center_row for c in grid.cells_for_depth(3)] == [15]

    def test_flipped_reflects_rows(self):
        normal = compute_grid(120)
        flipped = compute_grid(120, flipped=True)

        for a, b in zip(normal.cells, flipped.cells):
            assert b.center_row == 30 - a.center_row
            assert b.col == a.col

    @pytest.mark.parametrize("mirrored,flipped", VARIANTS)
    @pytest.mark.parametrize("width", [1, 30, 80, 121, 500])
    def test_parent_center_is_midpoint_of_children(self, width, mirrored, flipped):
        grid = compute_grid(width, mirrored=mirrored, flipped=flipped)

        for depth in range(3):
            children = grid.cells_for_depth(depth)
            for j, parent in enumerate(grid.cells_for_depth(depth + 1)):
                a, b = children[2 * j], children[2 * j + 1]
                assert 2 * parent.center_row == a.center_row + b.center_row

    def test_elite8_has_no_outbound_connector(self):
        grid = compute_grid(120)

        assert not grid.cells_for_depth(3)[0].draw_outbound_connector
        assert all(c.draw_outbound_connector for c in grid.cells_for_depth(0))


@pytest.mark.unit
class TestCellWidth:
    """Test the width formula and its clamp"""

    @pytest.mark.parametrize(
        "width,expected",
        [(0, 1), (5, 1), (9, 1), (13, 1), (49, 10), (97, 22), (1000, 22)],
    )
    def test_cell_width_clamped(self, width, expected):
        assert cell_width_for(width) == expected
        assert compute_grid(width).cell_width == expected

    def test_custom_max_cell_width(self):
        assert compute_grid(1000, max_cell_width=30).cell_width == 30

    def test_columns(self):
        grid = compute_grid(97)

        assert grid.round_cols == [0, 25, 50, 75]
        assert grid.total_width == 97

    def test_mirrored_columns_reversed(self):
        grid = compute_grid(97, mirrored=True)

        assert grid.round_cols == [75, 50, 25, 0]
        assert grid.cells_for_depth(0)[0].col == 75
        assert grid.cells_for_depth(3)[0].col == 0


@pytest.mark.unit
class TestConnectors:
    """Test box-drawing connector placement"""

    def glyph_map(self, grid):
        return {(g.row, g.col): g.char for g in connector_glyphs(grid)}

    def test_normal_first_pair(self):
        grid = compute_grid(97)
        glyphs = self.glyph_map(grid)
        base = grid.round_cols[0] + grid.cell_width  # 22

        assert glyphs[(1, base)] == "─"
        assert glyphs[(1, base + 1)] == "┐"
        assert glyphs[(2, base + 1)] == "│"
        assert glyphs[(3, base)] == "─"
        assert glyphs[(3, base + 1)] == "├"
        assert glyphs[(3, base + 2)] == "─"
        assert glyphs[(4, base + 1)] == "│"
        assert glyphs[(5, base)] == "─"
        assert glyphs[(5, base + 1)] == "┘"

    def test_mirrored_first_pair(self):
        grid = compute_grid(97, mirrored=True)
        glyphs = self.glyph_map(grid)
        base = grid.round_cols[0] - grid.connector_width  # 72

        assert glyphs[(1, base + 1)] == "┌"
        assert glyphs[(1, base + 2)] == "─"
        assert glyphs[(3, base)] == "─"
        assert glyphs[(3, base + 1)] == "┤"
        assert glyphs[(5, base + 1)] == "└"
        assert glyphs[(5, base + 2)] == "─"

    def test_flipped_sorts_children_by_row(self):
        grid = compute_grid(97, flipped=True)
        glyphs = self.glyph_map(grid)
        base = grid.round_cols[0] + grid.cell_width

        # First pair is now at rows 29 and 25 with the parent at 27
        assert glyphs[(25, base + 1)] == "┐"
        assert glyphs[(27, base + 1)] == "├"
        assert glyphs[(29, base + 1)] == "┘"

    def test_nothing_drawn_right_of_elite8(self):
        grid = compute_grid(97)
        elite8_right = grid.round_cols[3] + grid.cell_width

        assert all(g.col < elite8_right for g in connector_glyphs(grid))

    @pytest.mark.parametrize("mirrored,flipped", VARIANTS)
    def test_glyphs_stay_inside_grid(self, mirrored, flipped):
        grid = compute_grid(80, mirrored=mirrored, flipped=flipped)

        for glyph in connector_glyphs(grid):
            assert 0 <= glyph.col < grid.total_width
            assert 0 <= glyph.row < grid.total_height
