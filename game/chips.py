"""Game components: teams, species, the fixed chip roster and its registry.

Each team owns exactly the same 14 chips for the whole game. Chips are never
created or destroyed, only moved, so the registry is a fixed block of 28 slots
indexed by (team, name) rather than a hash map:

    slot = team.slot * CHIPS_PER_TEAM + name.slot

A mosquito that has absorbed a neighbour's power carries a transient mimicry
overlay in its slot. The overlay changes how the chip moves and how it is
displayed, never which chip it is.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import numpy as np

from game.constants import CHIPS_PER_TEAM, NUM_TEAMS, ROSTER
from game.errors import NotationError, UnknownChipError
from game.hex_coords import Cube


class Team(Enum):
    """The two sides. The value is the one-character wire form."""

    BLACK = "B"
    WHITE = "W"

    def complement(self) -> Team:
        return Team.WHITE if self is Team.BLACK else Team.BLACK

    def __invert__(self) -> Team:
        return self.complement()

    def __str__(self) -> str:
        return self.value

    @property
    def slot(self) -> int:
        return 0 if self is Team.BLACK else 1

    @property
    def long_name(self) -> str:
        """Name used in CSV history files ("Black" / "White")."""
        return self.name.capitalize()

    @classmethod
    def from_str(cls, text: str) -> Team:
        try:
            return cls(text)
        except ValueError:
            raise NotationError(f"Unrecognised team '{text}'") from None

    @classmethod
    def from_long_name(cls, text: str) -> Team:
        for team in cls:
            if team.long_name == text:
                return team
        raise NotationError(f"Unrecognised team name '{text}'")


class Species(Enum):
    """Chip species, valued by their letter."""

    QUEEN = "q"
    ANT = "a"
    SPIDER = "s"
    BEETLE = "b"
    GRASSHOPPER = "g"
    MOSQUITO = "m"
    LADYBIRD = "l"
    PILLBUG = "p"

    @property
    def letter(self) -> str:
        return self.value


class ChipName(Enum):
    """The closed set of chip names each team owns."""

    Q1 = "q1"
    S1 = "s1"
    S2 = "s2"
    A1 = "a1"
    A2 = "a2"
    A3 = "a3"
    B1 = "b1"
    B2 = "b2"
    G1 = "g1"
    G2 = "g2"
    G3 = "g3"
    M1 = "m1"
    L1 = "l1"
    P1 = "p1"

    def __str__(self) -> str:
        return self.value

    @property
    def species(self) -> Species:
        return Species(self.value[0])

    @property
    def index(self) -> int:
        return int(self.value[1:])

    @property
    def slot(self) -> int:
        return _NAME_SLOTS[self]

    @classmethod
    def from_name(cls, text: str) -> ChipName:
        """Look up a lower-case chip name such as "a1"."""
        try:
            return cls(text)
        except ValueError:
            raise UnknownChipError(f"Chip '{text}' is not part of the roster") from None


_NAME_SLOTS = {ChipName(name): i for i, name in enumerate(ROSTER)}


@dataclass(frozen=True)
class Chip:
    """A permanent chip identity: a roster name and a team."""

    name: ChipName
    team: Team

    def __str__(self) -> str:
        return self.wire_name

    def __repr__(self) -> str:
        return f"Chip({self.name.value}, {self.team.name})"

    @property
    def species(self) -> Species:
        return self.name.species

    @property
    def slot(self) -> int:
        return self.team.slot * CHIPS_PER_TEAM + self.name.slot

    @property
    def wire_name(self) -> str:
        """Name with the team encoded by case: upper-case for Black."""
        if self.team is Team.BLACK:
            return self.name.value.upper()
        return self.name.value

    def display_name(self, mimic: Species | None = None, elevated: bool = False) -> str:
        """Name as shown to players.

        A mimicking mosquito shows the letter of the species it copied ("ma"),
        and a chip above layer 0 is marked with a trailing '*'.
        """
        name = self.name.value
        if mimic is not None:
            name = f"{self.species.letter}{mimic.letter}"
        if elevated:
            name += "*"
        return name

    @classmethod
    def parse(cls, text: str) -> Chip:
        """Parse a case-coded chip name ("A1" is Black's a1, "a1" is White's)."""
        if not text:
            raise NotationError("Empty chip name")
        team = Team.BLACK if text[0].isupper() else Team.WHITE
        try:
            return cls(ChipName.from_name(text.lower()), team)
        except UnknownChipError as e:
            raise NotationError(str(e)) from None


ALL_CHIPS = tuple(
    sorted(
        (Chip(name, team) for team in Team for name in ChipName),
        key=lambda chip: chip.slot,
    )
)

REGISTRY_SLOTS = NUM_TEAMS * CHIPS_PER_TEAM


class ChipRegistry:
    """Positions of all 28 chips in a fixed array.

    Attributes:
        coords: (28, 4) int array of (q, r, s, layer) per slot
        placed: (28,) bool array, False while the chip is in its owner's hand
        mimics: per-slot mimicry overlay (a Species or None)
    """

    def __init__(self, clone: ChipRegistry | None = None):
        if clone is not None:
            self.coords = np.copy(clone.coords)
            self.placed = np.copy(clone.placed)
            self.mimics = list(clone.mimics)
        else:
            self.coords = np.zeros((REGISTRY_SLOTS, 4), dtype=np.int16)
            self.placed = np.zeros(REGISTRY_SLOTS, dtype=bool)
            self.mimics: list[Species | None] = [None] * REGISTRY_SLOTS

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChipRegistry):
            return NotImplemented
        return self.positions() == other.positions()

    def copy(self) -> ChipRegistry:
        return ChipRegistry(clone=self)

    def position(self, chip: Chip) -> Cube | None:
        slot = chip.slot
        if not self.placed[slot]:
            return None
        q, r, s, layer = (int(v) for v in self.coords[slot])
        return Cube(q, r, s, layer)

    def set_position(self, chip: Chip, position: Cube | None) -> None:
        slot = chip.slot
        if position is None:
            self.placed[slot] = False
            self.coords[slot] = 0
        else:
            self.placed[slot] = True
            self.coords[slot] = (position.q, position.r, position.s, position.layer)

    def chip_at(self, position: Cube) -> Chip | None:
        """Return the chip at exactly this position (layer included)."""
        target = np.array(
            (position.q, position.r, position.s, position.layer), dtype=self.coords.dtype
        )
        matches = np.flatnonzero(self.placed & np.all(self.coords == target, axis=1))
        if matches.size == 0:
            return None
        return ALL_CHIPS[int(matches[0])]

    def placed_positions(self) -> set[Cube]:
        return {Cube(*(int(v) for v in row)) for row in self.coords[self.placed]}

    def placed_chips(self, team: Team | None = None) -> list[Chip]:
        chips = [ALL_CHIPS[int(slot)] for slot in np.flatnonzero(self.placed)]
        if team is None:
            return chips
        return [chip for chip in chips if chip.team is team]

    def positions(self) -> dict[Chip, Cube | None]:
        """Every chip mapped to its position (None for chips in hand)."""
        return {chip: self.position(chip) for chip in ALL_CHIPS}

    def items(self) -> Iterator[tuple[Chip, Cube]]:
        """Placed chips and their positions, in slot order."""
        for slot in np.flatnonzero(self.placed):
            chip = ALL_CHIPS[int(slot)]
            yield chip, self.position(chip)

    def mimic(self, chip: Chip) -> Species | None:
        return self.mimics[chip.slot]

    def set_mimic(self, chip: Chip, species: Species | None) -> None:
        self.mimics[chip.slot] = species

    def clear_mimics(self) -> None:
        self.mimics = [None] * REGISTRY_SLOTS
