"""Caller-facing move request.

A BoardAction mirrors what a client sends to the engine:

    BoardAction(name="A1", rowcol=(0, -2), special=None)          # Black moves a1
    BoardAction(name="m1", rowcol=(1, 1), special="m,0,2")        # mosquito absorbs (0,2) then moves
    BoardAction(name="p1", rowcol=(1, 1), special="p,0,2")        # pillbug moves the chip at (0,2) to (1,1)
    BoardAction(name="m1", rowcol=(1, 1), special="m,0,2,p,1,-1") # mosquito absorbs a pillbug and uses it
    BoardAction.skip()
    BoardAction.forfeit()

``rowcol`` is the destination as a (col, row) double-height pair.
"""

from __future__ import annotations

from dataclasses import dataclass

from game.chips import ChipName, Team
from game.errors import NotationError, UnknownChipError
from game.hex_coords import DoubleHeight

SKIP = "skip"
FORFEIT = "forfeit"
MIMIC = "m"
FORCED_MOVE = "p"


@dataclass(frozen=True)
class BoardAction:
    name: str
    rowcol: tuple[int, int] = (0, 0)
    special: str | None = None

    @classmethod
    def skip(cls) -> BoardAction:
        return cls("", (0, 0), SKIP)

    @classmethod
    def forfeit(cls) -> BoardAction:
        return cls("", (0, 0), FORFEIT)

    @classmethod
    def do_move(
        cls, chip_name: str, team: Team, col: int, row: int, special: str = ""
    ) -> BoardAction:
        """Build a move request, encoding the team in the case of the chip name."""
        name = chip_name.upper() if team is Team.BLACK else chip_name.lower()
        return cls(name, (col, row), special or None)

    @property
    def is_skip(self) -> bool:
        return self.special == SKIP

    @property
    def is_forfeit(self) -> bool:
        return self.special == FORFEIT

    @property
    def chip_name(self) -> ChipName:
        try:
            return ChipName.from_name(self.name.lower())
        except UnknownChipError as e:
            raise NotationError(str(e)) from None

    @property
    def destination(self) -> DoubleHeight:
        col, row = self.rowcol
        if (col + row) % 2 != 0:
            raise NotationError(f"({col},{row}) is not a hex cell")
        return DoubleHeight(col, row)

    def specials(self) -> list[tuple[str, DoubleHeight]]:
        """Parse the special payload into (kind, location) pairs.

        Returns:
            e.g. [("m", DoubleHeight(0, 2)), ("p", DoubleHeight(1, -1))]

        Raises:
            NotationError: If the payload is malformed
        """
        if not self.special or self.is_skip or self.is_forfeit:
            return []

        items = [item.strip() for item in self.special.split(",")]
        parsed = []
        i = 0
        while i < len(items):
            kind = items[i]
            if kind not in (MIMIC, FORCED_MOVE):
                raise NotationError(f"Unknown special move '{kind}' in '{self.special}'")
            if i + 2 >= len(items):
                raise NotationError(f"Special '{kind}' needs a col,row location")
            location = DoubleHeight.parse(f"{items[i + 1]},{items[i + 2]}")
            parsed.append((kind, location))
            i += 3
        return parsed

    def to_dict(self) -> dict:
        return {"name": self.name, "rowcol": list(self.rowcol), "special": self.special}

    @classmethod
    def from_dict(cls, data: dict) -> BoardAction:
        try:
            col, row = data.get("rowcol", (0, 0))
            return cls(str(data.get("name", "")), (int(col), int(row)), data.get("special"))
        except (TypeError, ValueError):
            raise NotationError(f"Malformed board action: {data}") from None
