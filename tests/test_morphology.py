"""Tests for hex morphology and gap closure."""

import numpy as np

from game.hex_coords import Cube
from game.morphology import close, dilate, from_grid, gap_closure, neighbour_count, to_grid

ORIGIN = Cube(0, 0, 0)
RING = ORIGIN.neighbours_layer0()


class TestGrid:
    def test_empty(self):
        """Test the grid of an empty board."""
        grid, origin = to_grid([])
        assert grid.shape == (1, 1)
        assert not grid.any()
        assert origin == (0, 0)

    def test_round_trip(self):
        """Test converting cells to a grid and back."""
        cells = RING | {Cube(3, -5, 2)}
        grid, origin = to_grid(cells)
        assert grid.sum() == len(cells)
        assert from_grid(grid, origin) == cells

    def test_layers_are_flattened(self):
        """Test that stacked cells flatten onto the ground."""
        grid, origin = to_grid([Cube(1, -1, 0, layer=2)])
        assert from_grid(grid, origin) == {Cube(1, -1, 0)}


class TestOperations:
    def test_neighbour_count(self):
        """Test counting occupied hex neighbours on the grid."""
        grid, origin = to_grid([ORIGIN])
        counts = neighbour_count(grid)
        q0, r0 = origin
        assert counts[-r0, -q0] == 0
        for cell in RING:
            assert counts[cell.r - r0, cell.q - q0] == 1
        assert counts.sum() == 6

    def test_dilate(self):
        """Test hex dilation of a single cell."""
        grid, origin = to_grid([ORIGIN])
        assert from_grid(dilate(grid), origin) == RING | {ORIGIN}

    def test_close_keeps_line(self):
        """Test that closing leaves a straight line unchanged."""
        line = {Cube(0, -1, 1), ORIGIN, Cube(0, 1, -1)}
        grid, origin = to_grid(line)
        assert from_grid(close(grid), origin) == line

    def test_close_fills_ring(self):
        """Test that closing fills the hole in a ring."""
        grid, origin = to_grid(RING)
        closed = close(grid)
        assert from_grid(closed, origin) == RING | {ORIGIN}
        assert np.array_equal(closed & grid, grid)


class TestGapClosure:
    def test_surrounded_cell(self):
        """Test that a surrounded empty cell becomes a phantom."""
        assert gap_closure(RING) == {ORIGIN}

    def test_cell_walled_on_five_sides(self):
        """Test that a cell walled on five sides becomes a phantom."""
        assert gap_closure(RING - {Cube(0, -1, 1)}) == {ORIGIN}

    def test_open_shapes_have_no_phantoms(self):
        """Test that open shapes gain no phantom cells."""
        assert gap_closure({Cube(0, -1, 1), ORIGIN, Cube(0, 1, -1)}) == set()
        assert gap_closure(set()) == set()

    def test_cell_walled_on_four_sides(self):
        """Test that a cell walled on four sides is not a phantom."""
        four = RING - {Cube(0, -1, 1), Cube(1, -1, 0)}
        assert ORIGIN not in gap_closure(four)
