"""Move history: one event per turn on which a chip moved.

Turns with no event are skipped turns. The history is append-only during
play; loaders build the same ``Event`` objects back from saved games.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from game.chips import Chip, ChipName, Species, Team
from game.errors import NotationError, UnknownChipError
from game.hex_coords import DoubleHeight


@dataclass(frozen=True)
class Event:
    """A chip arriving at a location on a given turn.

    Attributes:
        turn: Board turn on which the move happened (0-based)
        chip: The chip that moved
        location: Destination in double-height coordinates
        mimic: Species a mosquito was mimicking for this move, if any
    """

    turn: int
    chip: Chip
    location: DoubleHeight
    mimic: Species | None = None

    @property
    def team(self) -> Team:
        return self.chip.team

    @property
    def name(self) -> str:
        """Display name, lower case (e.g. "a1", or "ma" for a mimicking mosquito)."""
        return self.chip.display_name(mimic=self.mimic)

    @property
    def wire_name(self) -> str:
        """Display name with the team encoded by case."""
        if self.team is Team.BLACK:
            return self.name.upper()
        return self.name

    @staticmethod
    def parse_name(text: str) -> tuple[ChipName, Species | None]:
        """Resolve a lower-case display name to a chip name and mimicked species.

        "a1" -> (A1, None); "ma" -> (M1, ANT).

        Raises:
            NotationError: If the name matches neither form
        """
        try:
            return ChipName.from_name(text), None
        except UnknownChipError:
            pass
        if len(text) == 2 and text[0] == Species.MOSQUITO.letter:
            try:
                species = Species(text[1])
            except ValueError:
                raise NotationError(f"Unknown mimicked species in '{text}'") from None
            if species is not Species.MOSQUITO:
                return ChipName.M1, species
        raise NotationError(f"Unknown chip name '{text}'")


class History:
    """Events keyed by turn."""

    def __init__(self, events: dict[int, Event] | None = None):
        self.events: dict[int, Event] = dict(events) if events else {}

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        for turn in sorted(self.events):
            yield self.events[turn]

    def __eq__(self, other) -> bool:
        if not isinstance(other, History):
            return NotImplemented
        return self.events == other.events

    def copy(self) -> History:
        return History(self.events)

    def add_event(
        self, turn: int, chip: Chip, location: DoubleHeight, mimic: Species | None = None
    ) -> Event:
        event = Event(turn, chip, location, mimic)
        self.events[turn] = event
        return event

    def which_chip(self, turn: int) -> Chip | None:
        """Chip that moved on a turn, None if the turn was skipped or hasn't happened."""
        event = self.events.get(turn)
        return event.chip if event is not None else None

    def last_two_turns(self, this_turn: int) -> list[Chip | None]:
        """Chips that moved on the previous turn and the turn before, in that order."""
        return [
            self.which_chip(turn) if turn >= 0 else None
            for turn in (this_turn - 1, this_turn - 2)
        ]

    def as_rows(self, turns: int) -> list[Event | None]:
        """Every turn up to ``turns`` in order, None for skipped turns."""
        return [self.events.get(turn) for turn in range(turns)]
