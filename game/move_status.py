"""Move outcome value object.

Every operation that validates or mutates the board returns a ``MoveResult``.
Rule violations are ordinary results, not exceptions: the caller decides what
to do with them (re-prompt, report over the wire, abort a replay).

The wire form of a result is its ``str()``:

    Success, Win(B), Win(None), BadDistance(3), RecentMove(a1), ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from game.chips import Chip, Team


class MoveStatus(Enum):
    """Closed vocabulary of move outcomes."""

    SUCCESS = "Success"
    WIN = "Win"
    NOTHING = "Nothing"

    # Placement
    BEE_NEED = "BeeNeed"
    BAD_NEIGHBOUR = "BadNeighbour"

    # Shared constraints
    OCCUPIED = "Occupied"
    UNCONNECTED = "Unconnected"
    HIVE_SPLIT = "HiveSplit"
    BEETLE_BLOCK = "BeetleBlock"

    # Turn flow
    NO_BEE = "NoBee"
    NO_SKIP = "NoSkip"

    # Species
    SMALL_GAP = "SmallGap"
    BAD_DISTANCE = "BadDistance"
    NO_JUMP = "NoJump"

    # Special moves
    NO_SPECIAL = "NoSpecial"
    RECENT_MOVE = "RecentMove"
    NOT_NEIGHBOUR = "NotNeighbour"
    BEETLE_GATE = "BeetleGate"
    NO_SUCK = "NoSuck"


_MESSAGES = {
    MoveStatus.SUCCESS: "Action successful.",
    MoveStatus.NOTHING: "",
    MoveStatus.BEE_NEED: "It's your fourth placement, you must place your bee now.",
    MoveStatus.BAD_NEIGHBOUR: "Can't place a new chip next to the other team.",
    MoveStatus.OCCUPIED: "Can't move this chip to an occupied position.",
    MoveStatus.UNCONNECTED: "Can't move your chip to an unconnected position.",
    MoveStatus.HIVE_SPLIT: "No: this move would split the hive in two.",
    MoveStatus.BEETLE_BLOCK: "A beetle on top of you prevents you from taking action.",
    MoveStatus.NO_BEE: "Can't move existing chips until you've placed your bee.",
    MoveStatus.NO_SKIP: "Can't skip turn until both bees are placed.",
    MoveStatus.SMALL_GAP: "Gap too small for this piece to move into.",
    MoveStatus.NO_JUMP: "Grasshopper can't make this jump.",
    MoveStatus.NO_SPECIAL: "This chip doesn't have special moves.",
    MoveStatus.NOT_NEIGHBOUR: "That is not a neighbouring hex.",
    MoveStatus.BEETLE_GATE: "A beetle gate prevents this move.",
    MoveStatus.NO_SUCK: "Mosquito can't absorb that.",
}


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a move request.

    Attributes:
        status: The outcome kind
        team: Winning team for ``Win`` (None means a draw)
        distance: Required move distance for ``BadDistance``
        chip: The chip that moved too recently for ``RecentMove``
    """

    status: MoveStatus
    team: Team | None = None
    distance: int | None = None
    chip: Chip | None = None

    @classmethod
    def win(cls, team: Team | None) -> MoveResult:
        return cls(MoveStatus.WIN, team=team)

    @classmethod
    def bad_distance(cls, distance: int) -> MoveResult:
        return cls(MoveStatus.BAD_DISTANCE, distance=distance)

    @classmethod
    def recent_move(cls, chip: Chip) -> MoveResult:
        return cls(MoveStatus.RECENT_MOVE, chip=chip)

    def __str__(self) -> str:
        if self.status is MoveStatus.WIN:
            return f"Win({self.team.value if self.team is not None else 'None'})"
        if self.status is MoveStatus.BAD_DISTANCE:
            return f"BadDistance({self.distance})"
        if self.status is MoveStatus.RECENT_MOVE:
            return f"RecentMove({self.chip.name.value})"
        return self.status.value

    def __eq__(self, other) -> bool:
        # Compare against a bare status for convenience: result == MoveStatus.SUCCESS
        if isinstance(other, MoveStatus):
            return self.status is other
        if not isinstance(other, MoveResult):
            return NotImplemented
        return (
            self.status is other.status
            and self.team is other.team
            and self.distance == other.distance
            and self.chip == other.chip
        )

    def __hash__(self) -> int:
        return hash((self.status, self.team, self.distance, self.chip))

    @property
    def is_success(self) -> bool:
        """True for outcomes that changed the board (``Success`` or ``Win``)."""
        return self.status in (MoveStatus.SUCCESS, MoveStatus.WIN)

    @property
    def message(self) -> str:
        """Human readable description of the outcome.

        Returns:
            str: A sentence suitable for showing to the player
        """
        if self.status is MoveStatus.WIN:
            if self.team is None:
                return "Draw. Both teams have suffered defeat!"
            return f"{self.team.long_name} team wins. Well done!"
        if self.status is MoveStatus.BAD_DISTANCE:
            return f"No: this piece must move {self.distance} space(s)."
        if self.status is MoveStatus.RECENT_MOVE:
            return f"Can't do that this turn because chip {self.chip.name.value} moved recently."
        return _MESSAGES[self.status]

    def to_dict(self) -> dict:
        """JSON-ready representation of the outcome."""
        data = {"status": self.status.value}
        if self.status is MoveStatus.WIN:
            data["team"] = self.team.value if self.team is not None else None
        if self.distance is not None:
            data["distance"] = self.distance
        if self.chip is not None:
            data["chip"] = self.chip.wire_name
        return data


SUCCESS = MoveResult(MoveStatus.SUCCESS)
NOTHING = MoveResult(MoveStatus.NOTHING)
