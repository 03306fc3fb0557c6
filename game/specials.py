"""Special moves: the pillbug's forced move and the mosquito's mimicry.

Both operate on a live ``HiveBoard``. A forced move relocates a neighbouring
chip (of either team) on the acting team's behalf; mimicry lends the mosquito
a neighbour's movement rules for the rest of the turn.

Usage:
    result = mimic(board, mosquito, victim_cell)
    if result.is_success:
        result = board.move_chip(mosquito.name, mosquito.team, dest)
    revert_mimicry(board)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from game.chips import Chip, ChipName, Species, Team
from game.hex_coords import Cube
from game.move_status import NOTHING, SUCCESS, MoveResult, MoveStatus

if TYPE_CHECKING:
    from game.hive_board import HiveBoard


def forced_move(board: HiveBoard, source: Cube, dest: Cube, position: Cube) -> MoveResult:
    """Use the chip at position to move the chip at source onto dest.

    Args:
        board: Board to act on (mutated on success)
        source: Cell of the chip being moved
        dest: Empty cell it is moved to
        position: Cell of the acting pillbug (or mosquito mimicking one)

    Returns:
        MoveResult; on success the victim has moved and the turn has advanced
    """
    position = position.to_bottom()
    source = source.to_bottom()
    dest = dest.to_bottom()

    actor = board.get_chip(position)
    if actor is None:
        return NOTHING
    if board.movement_species(actor) is not Species.PILLBUG:
        return MoveResult(MoveStatus.NO_SPECIAL)

    victim = board.get_chip(source)
    if victim is None:
        return NOTHING

    if board.sat_on_me(position):
        return MoveResult(MoveStatus.BEETLE_BLOCK)

    # The actor is reported first if both moved recently
    recent = board.history.last_two_turns(board.turns)
    if actor in recent:
        return MoveResult.recent_move(actor)
    if victim in recent:
        return MoveResult.recent_move(victim)

    neighbours = position.neighbours_layer0()
    if source not in neighbours or dest not in neighbours:
        return MoveResult(MoveStatus.NOT_NEIGHBOUR)

    if beetle_gate(board, source, dest, position):
        return MoveResult(MoveStatus.BEETLE_GATE)

    result = board.basic_constraints(dest, source)
    if not result.is_success:
        return result

    board.update(victim, dest)
    return board.check_win_state(actor.team)


def find_beetle_gates(board: HiveBoard, location: Cube) -> set[Cube]:
    """Occupied cells neighbouring location one layer above it."""
    return board.placed_positions() & location.neighbours_onlayer(location.layer + 1)


def beetle_gate(board: HiveBoard, source: Cube, dest: Cube, position: Cube) -> bool:
    """True if chips stacked above the hive block the path from source over the actor to dest."""
    above_actor = find_beetle_gates(board, position)
    return (
        len(above_actor & find_beetle_gates(board, source)) == 2
        or len(above_actor & find_beetle_gates(board, dest)) == 2
    )


def mimic(board: HiveBoard, mosquito: Chip, victim_cell: Cube) -> MoveResult:
    """Let a ground-level mosquito absorb the species of a neighbouring chip.

    The victim is the top-most chip of the neighbouring stack. Absorbing another
    mosquito, or an empty cell, fails with ``NoSuck``.
    """
    position = board.position_of(mosquito)
    if mosquito.species is not Species.MOSQUITO or position is None or position.layer > 0:
        return MoveResult(MoveStatus.NO_SUCK)
    if victim_cell.to_bottom() not in position.neighbours_layer0():
        return MoveResult(MoveStatus.NOT_NEIGHBOUR)

    victim = board.top_chip(victim_cell)
    if victim is None or victim.species is Species.MOSQUITO:
        return MoveResult(MoveStatus.NO_SUCK)

    board.registry.set_mimic(mosquito, victim.species)
    return SUCCESS


def revert_mimicry(board: HiveBoard) -> None:
    """Return every mosquito to its own identity. Called at the end of every turn."""
    board.revert_mimicry()


def find_mimic_source(board: HiveBoard, mosquito: Chip, species: Species) -> Cube | None:
    """A neighbouring cell whose top-most chip is of the given species, if any."""
    position = board.position_of(mosquito)
    if position is None:
        return None
    for cell in sorted(position.neighbours_layer0()):
        chip = board.top_chip(cell)
        if chip is not None and chip.species is species:
            return cell
    return None


def forced_move_candidates(board: HiveBoard, team: Team, source: Cube, dest: Cube) -> list[Chip]:
    """Chips of a team that sit next to both source and dest and could force a move.

    A mosquito qualifies only when it has a pillbug to absorb.
    """
    candidates = []
    for name in (ChipName.P1, ChipName.M1):
        chip = Chip(name, team)
        position = board.position_of(chip)
        if position is None or position.layer > 0:
            continue
        neighbours = position.neighbours_layer0()
        if source.to_bottom() not in neighbours or dest.to_bottom() not in neighbours:
            continue
        if name is ChipName.M1 and find_mimic_source(board, chip, Species.PILLBUG) is None:
            continue
        candidates.append(chip)
    return candidates
