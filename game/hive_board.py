from __future__ import annotations

import logging

from game.chips import Chip, ChipName, ChipRegistry, Species, Team
from game.constants import MIN_BOARD_SIZE, QUEEN_DEADLINE_TURNS, SURROUNDED
from game.errors import QueenNotPlacedError
from game.hex_coords import Cube, DoubleHeight, HexCoordinate
from game.hive_logic import ground_positions, species_check
from game.history import History
from game.morphology import to_grid
from game.move_status import SUCCESS, MoveResult, MoveStatus

logger = logging.getLogger(__name__)


class HiveBoard:
    # Positions are cube coordinates (q, r, s) plus a stacking layer:
    #
    #          (0,-1,1)   (1,-1,0)
    #     (-1,0,1)   (0,0,0)   (1,0,-1)
    #          (-1,1,0)   (0,1,-1)
    #
    # Callers talk in double-height (col, row) coordinates, where the same
    # neighbourhood reads:
    #
    #             (0,-2)
    #     (-1,-1)        (1,-1)
    #             (0,0)
    #     (-1,1)         (1,1)
    #             (0,2)
    #
    # A chip on layer n > 0 sits on top of the chip at layer n - 1 of the same
    # cell. Only beetles (and mosquitoes acting as beetles) ever leave layer 0.
    #
    # Every rule check returns a MoveResult. Nothing is changed on the board
    # unless the result is Success (or Win).

    def __init__(self, coord: type[HexCoordinate] = Cube, clone=None):
        self.coord = coord
        if clone is not None:
            self.coord = clone.coord
            self.registry = clone.registry.copy()
            self.history = clone.history.copy()
            self.turns = clone.turns
            self.size = clone.size
        else:
            self.registry = ChipRegistry()
            self.history = History()
            self.turns = 0
            self.size = MIN_BOARD_SIZE

    def __eq__(self, other):
        if not isinstance(other, HiveBoard):
            return NotImplemented
        return (
            self.turns == other.turns
            and self.size == other.size
            and self.registry == other.registry
        )

    def copy(self):
        return HiveBoard(clone=self)

    def to_board(self, location: DoubleHeight) -> Cube:
        """Convert a caller-facing double-height location to a board position."""
        return self.coord.from_doubleheight(location)

    # ==================================================================================
    # QUERIES
    # ==================================================================================

    def get_chip(self, position: Cube) -> Chip | None:
        return self.registry.chip_at(position)

    def top_position(self, position: Cube) -> Cube | None:
        """Position of the top-most chip of the stack at this cell, None if empty."""
        position = position.to_bottom()
        if self.get_chip(position) is None:
            return None
        while self.get_chip(position.ascend()) is not None:
            position = position.ascend()
        return position

    def top_chip(self, position: Cube) -> Chip | None:
        top = self.top_position(position)
        return self.get_chip(top) if top is not None else None

    def position_of(self, chip: Chip) -> Cube | None:
        return self.registry.position(chip)

    def position_of_name(self, name: ChipName, team: Team) -> Cube | None:
        return self.registry.position(Chip(name, team))

    def placed_positions(self) -> set[Cube]:
        return self.registry.placed_positions()

    def placed_chips(self, team: Team | None = None) -> list[Chip]:
        return self.registry.placed_chips(team)

    def count_neighbours(self, position: Cube) -> int:
        """Occupied neighbours, always counted on layer 0 whatever the layer of position."""
        return len(position.neighbours_layer0() & ground_positions(self.placed_positions()))

    def neighbour_chips(self, position: Cube) -> list[Chip]:
        """Top-most chip of every neighbouring stack."""
        chips = []
        for neighbour in position.neighbours_layer0():
            chip = self.top_chip(neighbour)
            if chip is not None:
                chips.append(chip)
        return chips

    def bee_placed(self, team: Team) -> bool:
        return self.position_of_name(ChipName.Q1, team) is not None

    def queen_position(self, team: Team) -> Cube:
        position = self.position_of_name(ChipName.Q1, team)
        if position is None:
            raise QueenNotPlacedError(f"{team.long_name} queen has not been placed")
        return position

    def occupancy_grid(self):
        """Layer-0 occupancy rasterised onto an axial numpy grid.

        Returns:
            (grid, origin) as produced by ``morphology.to_grid``
        """
        return to_grid(ground_positions(self.placed_positions()))

    def mimic(self, chip: Chip) -> Species | None:
        return self.registry.mimic(chip)

    def movement_species(self, chip: Chip) -> Species:
        """Species whose movement rules apply to this chip right now.

        A mosquito on top of the hive moves as a beetle; on the ground it moves
        as whatever it has absorbed this turn (or not at all).
        """
        if chip.species is not Species.MOSQUITO:
            return chip.species
        position = self.position_of(chip)
        if position is not None and position.layer > 0:
            return Species.BEETLE
        mimic = self.registry.mimic(chip)
        return mimic if mimic is not None else Species.MOSQUITO

    def display_name(self, chip: Chip) -> str:
        position = self.position_of(chip)
        elevated = position is not None and position.layer > 0
        return chip.display_name(mimic=self.registry.mimic(chip), elevated=elevated)

    # ==================================================================================
    # MOVES
    # ==================================================================================

    def move_chip(self, name: ChipName, team: Team, dest: Cube) -> MoveResult:
        """Try to move a chip to dest, placing it from the player's hand if needed.

        Args:
            name: Chip name
            team: Team that owns the chip
            dest: Destination (layer 0; climbers are lifted automatically)

        Returns:
            MoveResult describing what happened
        """
        chip = Chip(name, team)
        source = self.position_of(chip)
        if source is None:
            result = self.place_chip(chip, dest)
        else:
            result = self.relocate_chip(chip, dest, source)

        if result.is_success:
            logger.debug(f"Turn {self.turns - 1}: {chip.wire_name} -> {dest.to_doubleheight()} ({result})")
        else:
            logger.debug(f"Rejected {chip.wire_name} -> {dest.to_doubleheight()}: {result}")
        return result

    def place_chip(self, chip: Chip, dest: Cube) -> MoveResult:
        dest = dest.to_bottom()
        if (
            self.turns in QUEEN_DEADLINE_TURNS
            and not self.bee_placed(chip.team)
            and chip.name is not ChipName.Q1
        ):
            return MoveResult(MoveStatus.BEE_NEED)
        if self.get_chip(dest) is not None:
            return MoveResult(MoveStatus.OCCUPIED)
        if self.turns > 0 and self.count_neighbours(dest) == 0:
            return MoveResult(MoveStatus.UNCONNECTED)
        if self.turns > 1 and self.unfriendly_neighbours(dest, chip.team):
            return MoveResult(MoveStatus.BAD_NEIGHBOUR)

        self.update(chip, dest)
        return SUCCESS

    def unfriendly_neighbours(self, dest: Cube, team: Team) -> bool:
        return any(chip.team is not team for chip in self.neighbour_chips(dest))

    def relocate_chip(self, chip: Chip, dest: Cube, source: Cube) -> MoveResult:
        if not self.bee_placed(chip.team):
            return MoveResult(MoveStatus.NO_BEE)

        species = self.movement_species(chip)
        if species is Species.BEETLE:
            dest = self.layer_adjust(dest)
        else:
            dest = dest.to_bottom()

        result = self.basic_constraints(dest, source)
        if not result.is_success:
            return result

        result = species_check(species, self.placed_positions(), source, dest)
        if not result.is_success:
            return result

        self.update(chip, dest)
        return self.check_win_state(chip.team)

    def layer_adjust(self, dest: Cube) -> Cube:
        """First free layer of the stack at dest."""
        dest = dest.to_bottom()
        while self.get_chip(dest) is not None:
            dest = dest.ascend()
        return dest

    def basic_constraints(self, dest: Cube, source: Cube) -> MoveResult:
        """Constraints shared by every relocation, forced moves included."""
        if self.get_chip(dest) is not None:
            return MoveResult(MoveStatus.OCCUPIED)
        if self.count_neighbours(dest) == 0:
            return MoveResult(MoveStatus.UNCONNECTED)
        if self.sat_on_me(source):
            return MoveResult(MoveStatus.BEETLE_BLOCK)
        if self.hive_break_check(source, dest):
            return MoveResult(MoveStatus.HIVE_SPLIT)
        return SUCCESS

    def sat_on_me(self, source: Cube) -> bool:
        return self.get_chip(source.ascend()) is not None

    def hive_break_check(self, source: Cube, dest: Cube) -> bool:
        """True if moving the chip at source to dest would split the hive.

        Stacks count as a single blob: a chip is connected to its same-layer
        neighbours and to the chips directly above and below it.
        """
        positions = self.placed_positions()
        positions.discard(source)
        positions.add(dest)

        connected = {dest}
        stack = [dest]
        while stack:
            position = stack.pop()
            for neighbour in position.neighbours_all():
                if neighbour in positions and neighbour not in connected:
                    connected.add(neighbour)
                    stack.append(neighbour)

        return len(connected) != len(positions)

    def bee_neighbours(self, team: Team) -> int:
        """Occupied cells around a team's queen (0 while the queen is in hand)."""
        if not self.bee_placed(team):
            return 0
        return self.count_neighbours(self.queen_position(team))

    def check_win_state(self, team: Team) -> MoveResult:
        """Win/draw check from the point of view of the team that just moved."""
        mine = self.bee_neighbours(team) == SURROUNDED
        theirs = self.bee_neighbours(team.complement()) == SURROUNDED
        if mine and theirs:
            return MoveResult.win(None)
        if theirs:
            return MoveResult.win(team)
        if mine:
            return MoveResult.win(team.complement())
        return SUCCESS

    def skip_turn(self) -> MoveResult:
        """Skip the current turn. Only allowed once both queens are on the board."""
        if self.bee_placed(Team.BLACK) and self.bee_placed(Team.WHITE):
            self.turns += 1
            return SUCCESS
        return MoveResult(MoveStatus.NO_SKIP)

    def update(self, chip: Chip, dest: Cube) -> None:
        """Move chip to dest without any checks, record it and advance the turn."""
        self.registry.set_position(chip, dest)
        self.size = self.find_size()
        self.history.add_event(
            self.turns, chip, dest.to_bottom().to_doubleheight(), self.registry.mimic(chip)
        )
        self.turns += 1

    def find_size(self) -> int:
        """Odd display size (>= 5) large enough for the chips at the board's extremities."""
        positions = self.placed_positions()
        if not positions:
            return MIN_BOARD_SIZE
        biggest = 0
        for position in positions:
            location = position.to_doubleheight()
            biggest = max(biggest, abs(location.row), 2 * abs(location.col))
        return max((biggest - biggest % 2) + 3, MIN_BOARD_SIZE)

    def revert_mimicry(self) -> None:
        self.registry.clear_mimics()
