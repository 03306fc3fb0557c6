"""Hexagonal coordinate systems used by the Hive board.

Three representations of a board cell exist:

- ``Cube`` (q, r, s, layer): the rules coordinate. Every position the board
  reasons about is a Cube, and q + r + s == 0 always holds.
- ``DoubleHeight`` (col, row, layer): the caller-facing offset coordinate used
  for move requests and history files.
- ``Spiral`` (index, layer): a single non-negative index per cell, enumerating
  rings outward from the origin. Only used to serialize board snapshots.

See https://www.redblobgames.com/grids/hexagons/ for the cube and doubled
coordinate conventions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from game.errors import NotationError

__all__ = [
    "Cube",
    "DoubleHeight",
    "Spiral",
    "HEX_DIRECTIONS",
    "hex_distance",
    "centroid_distance",
    "ring",
    "ring_offset",
    "cube_to_spiral",
]

# (q, r, s) unit vectors to the six layer-0 neighbours
HEX_DIRECTIONS = (
    (1, -1, 0),
    (1, 0, -1),
    (0, 1, -1),
    (-1, 1, 0),
    (-1, 0, 1),
    (0, -1, 1),
)

# Base period of the spiral's triangle wave (the number of sides of a hexagon)
_SPIRAL_PERIOD = 6.0


class HexCoordinate(Protocol):
    """Capabilities the board needs from its rules coordinate.

    ``Cube`` is the only implementation; the protocol documents the seam.
    """

    layer: int

    def __add__(self, other): ...

    def __sub__(self, other): ...

    def ascend(self): ...

    def descend(self): ...

    def to_bottom(self): ...

    def on_layer(self, layer: int): ...

    def neighbours_layer0(self) -> set: ...

    def neighbours_all(self) -> set: ...

    def neighbours_onlayer(self, layer: int) -> set: ...

    def to_doubleheight(self) -> "DoubleHeight": ...

    def to_spiral(self) -> "Spiral": ...


@dataclass(frozen=True, order=True)
class Cube:
    """Cube coordinate with a stacking layer (0 = ground)."""

    q: int
    r: int
    s: int
    layer: int = 0

    def __post_init__(self):
        if self.q + self.r + self.s != 0:
            raise ValueError(
                f"Invalid cube coordinate ({self.q}, {self.r}, {self.s}): q + r + s != 0"
            )

    def __add__(self, other: Cube) -> Cube:
        return Cube(
            self.q + other.q,
            self.r + other.r,
            self.s + other.s,
            self.layer + other.layer,
        )

    def __sub__(self, other: Cube) -> Cube:
        return Cube(
            self.q - other.q,
            self.r - other.r,
            self.s - other.s,
            self.layer - other.layer,
        )

    def __repr__(self) -> str:
        if self.layer:
            return f"Cube({self.q}, {self.r}, {self.s}, layer={self.layer})"
        return f"Cube({self.q}, {self.r}, {self.s})"

    @classmethod
    def origin(cls) -> Cube:
        return cls(0, 0, 0)

    @property
    def qrs(self) -> tuple[int, int, int]:
        return self.q, self.r, self.s

    def manhattan(self) -> int:
        """Sum of the absolute values of each component."""
        return abs(self.q) + abs(self.r) + abs(self.s)

    def vector_sqsum(self) -> int:
        """Square sum of the vector components."""
        return self.q**2 + self.r**2 + self.s**2

    def ascend(self) -> Cube:
        return Cube(self.q, self.r, self.s, self.layer + 1)

    def descend(self) -> Cube:
        return Cube(self.q, self.r, self.s, self.layer - 1)

    def to_bottom(self) -> Cube:
        return Cube(self.q, self.r, self.s)

    def on_layer(self, layer: int) -> Cube:
        return Cube(self.q, self.r, self.s, layer)

    def neighbours_layer0(self) -> set[Cube]:
        """The six neighbouring cells on layer 0, whatever layer we are on."""
        return {
            Cube(self.q + dq, self.r + dr, self.s + ds)
            for dq, dr, ds in HEX_DIRECTIONS
        }

    def neighbours_onlayer(self, layer: int) -> set[Cube]:
        """The six neighbouring cells on the given layer."""
        return {
            Cube(self.q + dq, self.r + dr, self.s + ds, layer)
            for dq, dr, ds in HEX_DIRECTIONS
        }

    def neighbours_all(self) -> set[Cube]:
        """Neighbours on our own layer plus the cells directly above and below.

        Used wherever a stack has to behave as a single blob.
        """
        neighbours = self.neighbours_onlayer(self.layer)
        neighbours.add(self.ascend())
        neighbours.add(self.descend())
        return neighbours

    def unit_vector_to(self, other: Cube) -> Cube | None:
        """Unit step from self towards other, or None if they don't share a hex line.

        Layers are ignored.
        """
        delta = other.to_bottom() - self.to_bottom()
        if delta.manhattan() == 0 or 0 not in delta.qrs:
            return None
        norm = delta.manhattan() // 2
        return Cube(delta.q // norm, delta.r // norm, delta.s // norm)

    def to_doubleheight(self) -> DoubleHeight:
        return DoubleHeight(self.q, 2 * self.r + self.q, self.layer)

    @classmethod
    def from_doubleheight(cls, hex: DoubleHeight) -> Cube:
        q = hex.col
        r = (hex.row - hex.col) // 2
        return cls(q, r, -q - r, hex.layer)

    def to_spiral(self) -> Spiral:
        return cube_to_spiral(self.q, self.r, self.s, self.layer)

    @classmethod
    def from_spiral(cls, hex: Spiral) -> Cube:
        x = hex.index
        if x == 0:
            return cls(0, 0, 0, hex.layer)

        ring_index = ring(x)
        offset = ring_offset(ring_index)
        q = _growing_trunc_tri(x, ring_index, offset, 0.0)
        r = _growing_trunc_tri(x, ring_index, offset, 4.0)
        return cls(q, r, -q - r, hex.layer)


@dataclass(frozen=True, order=True)
class DoubleHeight:
    """Double-height offset coordinate: col = q, row = 2r + q.

    Only (col, row) pairs with an even sum name a real cell. The type does not
    enforce this; ``parse`` does.
    """

    col: int
    row: int
    layer: int = 0

    def __str__(self) -> str:
        # Layer is never part of a recorded move
        return f"{self.col},{self.row}"

    @classmethod
    def parse(cls, text: str) -> DoubleHeight:
        """Parse a comma separated "col,row" string (e.g. "0,-2")."""
        items = text.split(",")
        if len(items) != 2:
            raise NotationError(f"Expected 'col,row' but got '{text}'")
        try:
            col, row = (int(item.strip()) for item in items)
        except ValueError:
            raise NotationError(f"Non-integer coordinate in '{text}'") from None
        if (col + row) % 2 != 0:
            raise NotationError(f"Coordinate '{text}' is not a hex cell (col + row must be even)")
        return cls(col, row)

    def to_cube(self) -> Cube:
        return Cube.from_doubleheight(self)

    @classmethod
    def from_cube(cls, cube: Cube) -> DoubleHeight:
        return cube.to_doubleheight()


@dataclass(frozen=True, order=True)
class Spiral:
    """Spiral index coordinate, used only to serialize snapshots."""

    index: int
    layer: int = 0

    def to_cube(self) -> Cube:
        return Cube.from_spiral(self)

    @classmethod
    def from_cube(cls, cube: Cube) -> Spiral:
        return cube.to_spiral()


def hex_distance(a: Cube, b: Cube) -> int:
    """Number of steps between two hexes (layers ignored)."""
    return (a.to_bottom() - b.to_bottom()).manhattan() // 2


def centroid_distance(a: Cube, b: Cube) -> float:
    """Euclidean distance between hex centres, in hex widths."""
    return math.sqrt((a.to_bottom() - b.to_bottom()).vector_sqsum() / 2)


def ring(index: int) -> int:
    """Smallest ring of the spiral that contains ``index``."""
    if index < 0:
        raise ValueError(f"Spiral index must be non-negative, got {index}")
    n = 0
    while 3 * n * (n + 1) < index:
        n += 1
    return n


def ring_offset(ring_index: int) -> int:
    """First spiral index of a ring (ring n holds 6n cells)."""
    if ring_index == 0:
        return 0
    return 3 * ring_index * (ring_index - 1) + 1


def cube_to_spiral(q: int, r: int, s: int, layer: int = 0) -> Spiral:
    """Find the spiral index of a cube coordinate.

    There is no closed form for the inverse, so scan the candidate ring.
    """
    if q + r + s != 0:
        raise ValueError("q + r + s != 0")
    if q == 0 and r == 0:
        return Spiral(0, layer)

    ring_index = max(abs(q), abs(r), abs(s))
    start = ring_offset(ring_index)
    for index in range(start, start + 6 * ring_index):
        if _growing_trunc_tri(index, ring_index, start, 0.0) != q:
            continue
        if _growing_trunc_tri(index, ring_index, start, 4.0) == r:
            return Spiral(index, layer)
    raise ValueError(f"Couldn't find a spiral index for ({q}, {r}, {s})")


def _growing_trunc_tri(x: float, c: float, x_prime: float, phi: float) -> int:
    """Truncated triangle wave whose amplitude and period grow with each cycle.

    Args:
        x: Spiral index
        c: Cycle (ring) number
        x_prime: Spiral index this cycle began on
        phi: Phase shift (0 gives q, 4 gives r)
    """
    p = _SPIRAL_PERIOD
    offset_x = x - x_prime
    s = offset_x - (c / 4.0) * (2.0 * phi + p)
    p_star = c * p

    # Python's % is a true modulo for floats
    y = 6.0 / p * abs((s % p_star) - c * p / 2.0) - 1.5 * c

    # Never taller than the ring number
    if abs(y) > c:
        return int(math.copysign(c, y))
    return int(y)
