"""Binary morphology on the hex lattice.

Ground-level occupancy is rasterised onto a small axial (q, r) numpy grid and
the usual image operations are applied with hex adjacency:

    dilate:  a cell is set if it or any of its six neighbours is set
    erode:   a cell stays set only if all six of its neighbours are set
    close:   dilate then erode

``gap_closure`` uses the closing to find "phantom" cells: empty cells that
the closing fills in and that are walled in on at least five sides. A sliding
chip can't squeeze into such a cell.

Usage:
    phantoms = gap_closure(occupied)
    if dest in phantoms:
        return MoveResult(MoveStatus.SMALL_GAP)
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from game.hex_coords import HEX_DIRECTIONS, Cube

# (dq, dr) neighbour offsets in axial coordinates
AXIAL_DIRECTIONS = tuple((dq, dr) for dq, dr, _ in HEX_DIRECTIONS)

# Empty border kept around the occupied cells so dilation never falls off the grid
GRID_MARGIN = 2

# A phantom cell is walled in on at least this many sides
PHANTOM_NEIGHBOURS = 5


def to_grid(cells: Iterable[Cube]) -> tuple[np.ndarray, tuple[int, int]]:
    """Rasterise ground cells onto a boolean axial grid.

    Args:
        cells: Cells to set (layers are ignored)

    Returns:
        (grid, origin): grid[r - r0, q - q0] is True for every cell, origin = (q0, r0)
    """
    cells = list(cells)
    if not cells:
        return np.zeros((1, 1), dtype=bool), (0, 0)

    qs = [cell.q for cell in cells]
    rs = [cell.r for cell in cells]
    q0 = min(qs) - GRID_MARGIN
    r0 = min(rs) - GRID_MARGIN
    width = max(qs) - q0 + 1 + GRID_MARGIN
    height = max(rs) - r0 + 1 + GRID_MARGIN

    grid = np.zeros((height, width), dtype=bool)
    for cell in cells:
        grid[cell.r - r0, cell.q - q0] = True
    return grid, (q0, r0)


def from_grid(grid: np.ndarray, origin: tuple[int, int]) -> set[Cube]:
    """Inverse of ``to_grid``: the set of layer-0 cubes whose grid cell is set."""
    q0, r0 = origin
    rows, cols = np.nonzero(grid)
    cubes = set()
    for row, col in zip(rows, cols):
        q = int(col) + q0
        r = int(row) + r0
        cubes.add(Cube(q, r, -q - r))
    return cubes


def neighbour_count(grid: np.ndarray) -> np.ndarray:
    """Number of set hex neighbours of every grid cell (cells off-grid count as unset)."""
    height, width = grid.shape
    padded = np.pad(grid.astype(np.int8), 1)
    total = np.zeros(grid.shape, dtype=np.int8)
    for dq, dr in AXIAL_DIRECTIONS:
        total += padded[1 + dr : 1 + dr + height, 1 + dq : 1 + dq + width]
    return total


def dilate(grid: np.ndarray) -> np.ndarray:
    return grid | (neighbour_count(grid) > 0)


def erode(grid: np.ndarray) -> np.ndarray:
    return grid & (neighbour_count(grid) == len(AXIAL_DIRECTIONS))


def close(grid: np.ndarray) -> np.ndarray:
    return erode(dilate(grid))


def gap_closure(occupied: Iterable[Cube]) -> set[Cube]:
    """Cells too narrow for a sliding chip to enter.

    Args:
        occupied: Occupied layer-0 cells, excluding the chip that is moving

    Returns:
        Set of phantom cells (layer 0)
    """
    grid, origin = to_grid(occupied)
    closed = close(grid)
    new = closed & ~grid

    # Count neighbours among both real and newly closed cells
    walls = neighbour_count(new | grid)
    phantoms = new & (walls >= PHANTOM_NEIGHBOURS)
    return from_grid(phantoms, origin)
