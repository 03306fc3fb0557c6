"""Stateless movement rules for each species.

All functions are pure: they take the set of placed positions and a
source/destination pair and return a ``MoveResult``. The board resolves which
rule applies to a chip (mimicry, stacking) and passes the placed positions in,
so the rules can be tested without building a board.

Usage:
    result = species_check(Species.SPIDER, placed, source, dest)
"""

from collections import deque
from typing import Sequence

from game.chips import Species
from game.hex_coords import Cube
from game.morphology import gap_closure
from game.move_status import SUCCESS, MoveResult, MoveStatus

# Flood-fill round rules: True = step must land on an occupied cell
SPIDER_RULES = (False, False, False)
LADYBIRD_RULES = (True, True, False)


def ground_positions(placed: set[Cube]) -> set[Cube]:
    """Occupied layer-0 cells."""
    return {position for position in placed if position.layer == 0}


def slide_check(placed: set[Cube], source: Cube, dest: Cube) -> MoveResult:
    """Gap-closure test shared by every sliding chip.

    The moving chip is removed before the closing so it can't wall itself in.
    """
    occupied = ground_positions(placed)
    occupied.discard(source)
    if dest in gap_closure(occupied):
        return MoveResult(MoveStatus.SMALL_GAP)
    return SUCCESS


def step_check(placed: set[Cube], source: Cube, dest: Cube) -> MoveResult:
    """Slide exactly one cell (queen, pillbug, beetle at ground level)."""
    result = slide_check(placed, source, dest)
    if not result.is_success:
        return result
    if dest not in source.neighbours_layer0():
        return MoveResult.bad_distance(1)
    return SUCCESS


def flood_fill(obstacles: set[Cube], source: Cube, rules: Sequence[bool]) -> set[Cube]:
    """Distance-limited flood fill over and around obstacles.

    Round k admits a layer-0 neighbour of a round k-1 cell if it satisfies
    ``rules[k-1]`` (True: must be an obstacle, False: must be free). A cell
    admitted in an earlier round, the source included, is never admitted
    again.

    Args:
        obstacles: Occupied layer-0 cells
        source: Starting cell
        rules: One occupancy rule per round

    Returns:
        Cells first reached on the final round
    """
    source = source.to_bottom()
    admitted = {source}
    fringe = deque([source])

    for must_be_occupied in rules:
        reached = set()
        while fringe:
            cell = fringe.popleft()
            for neighbour in cell.neighbours_layer0():
                if neighbour in admitted or neighbour in reached:
                    continue
                if (neighbour in obstacles) == must_be_occupied:
                    reached.add(neighbour)
        admitted |= reached
        fringe.extend(sorted(reached))
        if not fringe:
            return set()

    return set(fringe)


def walk_check(
    placed: set[Cube], source: Cube, dest: Cube, rules: Sequence[bool]
) -> MoveResult:
    """Gap-closure test followed by an exact-distance flood fill."""
    result = slide_check(placed, source, dest)
    if not result.is_success:
        return result
    if dest not in flood_fill(ground_positions(placed), source, rules):
        return MoveResult.bad_distance(len(rules))
    return SUCCESS


def beetle_check(placed: set[Cube], source: Cube, dest: Cube) -> MoveResult:
    """One step in any direction, on top of the hive or off it.

    On the ground a beetle slides like a queen; once either end of the move is
    raised, gaps no longer matter.
    """
    if source.layer == 0 and dest.layer == 0:
        return step_check(placed, source, dest)
    if dest.to_bottom() not in source.neighbours_layer0():
        return MoveResult.bad_distance(1)
    return SUCCESS


def grasshopper_check(placed: set[Cube], source: Cube, dest: Cube) -> MoveResult:
    """Jump in a straight line over one or more contiguous chips."""
    start = source.to_bottom()
    end = dest.to_bottom()
    step = start.unit_vector_to(end)
    if step is None:
        return MoveResult(MoveStatus.NO_JUMP)

    occupied = ground_positions(placed)
    cell = start + step
    if cell == end:
        # Neighbouring cell: nothing to jump over
        return MoveResult(MoveStatus.NO_JUMP)
    while cell != end:
        if cell not in occupied:
            return MoveResult(MoveStatus.NO_JUMP)
        cell = cell + step
    return SUCCESS


def species_check(species: Species, placed: set[Cube], source: Cube, dest: Cube) -> MoveResult:
    """Dispatch to the movement rule of a species.

    Args:
        species: Species whose rules apply (after mimicry has been resolved)
        placed: Positions of all placed chips, every layer
        source: Current position of the moving chip
        dest: Destination, already lifted to the right layer for climbers
    """
    if species is Species.ANT:
        return slide_check(placed, source, dest)
    if species in (Species.QUEEN, Species.PILLBUG):
        return step_check(placed, source, dest)
    if species is Species.SPIDER:
        return walk_check(placed, source, dest, SPIDER_RULES)
    if species is Species.LADYBIRD:
        return walk_check(placed, source, dest, LADYBIRD_RULES)
    if species is Species.BEETLE:
        return beetle_check(placed, source, dest)
    if species is Species.GRASSHOPPER:
        return grasshopper_check(placed, source, dest)
    # An unmimicked mosquito has no moves of its own
    return MoveResult(MoveStatus.NO_SUCK)
