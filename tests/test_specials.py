"""Tests for the pillbug's forced move and the mosquito's mimicry."""

import pytest

from game.chips import Chip, ChipName, Species, Team
from game.hex_coords import Cube, DoubleHeight
from game.hive_board import HiveBoard
from game.move_status import MoveResult, MoveStatus
from game.specials import (
    beetle_gate,
    find_mimic_source,
    forced_move,
    forced_move_candidates,
    mimic,
    revert_mimicry,
)

W = Team.WHITE
B = Team.BLACK

PILLBUG = (0, 2)
VICTIM = (1, 3)
TARGET = (-1, 3)


def cell(col, row, layer=0):
    return Cube.from_doubleheight(DoubleHeight(col, row, layer))


def build(placements):
    board = HiveBoard()
    for name, team, location in placements:
        board.update(Chip(name, team), cell(*location))
    return board


@pytest.fixture
def board():
    """White pillbug at (0,2) next to a white ant that moved on the last turn."""
    return build(
        [
            (ChipName.Q1, W, (0, 0)),
            (ChipName.Q1, B, (0, -2)),
            (ChipName.P1, W, PILLBUG),
            (ChipName.A1, B, (0, -4)),
            (ChipName.A1, W, VICTIM),
        ]
    )


@pytest.fixture
def settled(board):
    """Same position two turns later, nothing moved recently."""
    board.skip_turn()
    board.skip_turn()
    return board


class TestForcedMove:
    def test_success(self, settled):
        """Test a pillbug moving a neighbouring chip."""
        result = forced_move(settled, cell(*VICTIM), cell(*TARGET), cell(*PILLBUG))
        assert result == MoveStatus.SUCCESS
        assert settled.position_of(Chip(ChipName.A1, W)) == cell(*TARGET)
        assert settled.turns == 8
        assert settled.history.which_chip(7) == Chip(ChipName.A1, W)

    def test_victim_moved_recently(self, board):
        """Test that a chip that just moved can't be forced."""
        result = forced_move(board, cell(*VICTIM), cell(*TARGET), cell(*PILLBUG))
        assert result == MoveResult.recent_move(Chip(ChipName.A1, W))
        assert str(result) == "RecentMove(a1)"

    def test_actor_moved_recently(self):
        """Test that a pillbug that just moved can't act."""
        board = build(
            [
                (ChipName.Q1, W, (0, 0)),
                (ChipName.Q1, B, (0, -2)),
                (ChipName.A1, B, (0, -4)),
                (ChipName.A1, W, VICTIM),
                (ChipName.P1, W, PILLBUG),
            ]
        )
        result = forced_move(board, cell(*VICTIM), cell(*TARGET), cell(*PILLBUG))
        assert result == MoveResult.recent_move(Chip(ChipName.P1, W))

    def test_destination_not_neighbour(self, settled):
        """Test that the destination must touch the pillbug."""
        result = forced_move(settled, cell(*VICTIM), cell(1, 5), cell(*PILLBUG))
        assert result == MoveStatus.NOT_NEIGHBOUR

    def test_source_not_neighbour(self, settled):
        """Test that the victim must touch the pillbug."""
        result = forced_move(settled, cell(0, -4), cell(*TARGET), cell(*PILLBUG))
        assert result == MoveStatus.NOT_NEIGHBOUR

    def test_actor_without_special(self, settled):
        """Test that only pillbug-capable chips can force a move."""
        result = forced_move(settled, cell(0, -2), cell(1, -1), cell(0, 0))
        assert result == MoveStatus.NO_SPECIAL

    def test_nothing_to_act_on(self, settled):
        """Test forcing a move from an empty cell."""
        assert forced_move(settled, cell(*VICTIM), cell(*TARGET), cell(4, 4)) == MoveStatus.NOTHING
        assert forced_move(settled, cell(1, 1), cell(*TARGET), cell(*PILLBUG)) == MoveStatus.NOTHING

    def test_beetle_on_pillbug(self, board):
        """Test that a beetle on top of the pillbug blocks it."""
        board.update(Chip(ChipName.B1, B), cell(*PILLBUG, 1))
        result = forced_move(board, cell(*VICTIM), cell(*TARGET), cell(*PILLBUG))
        assert result == MoveStatus.BEETLE_BLOCK

    def test_beetle_gate(self, board):
        """Test that a beetle gate blocks a forced move."""
        board.update(Chip(ChipName.A2, B), cell(1, 1))
        board.update(Chip(ChipName.A3, B), cell(0, 4))
        board.update(Chip(ChipName.B1, B), cell(1, 1, 1))
        board.update(Chip(ChipName.B2, B), cell(0, 4, 1))
        assert beetle_gate(board, cell(*VICTIM), cell(*TARGET), cell(*PILLBUG))
        result = forced_move(board, cell(*VICTIM), cell(*TARGET), cell(*PILLBUG))
        assert result == MoveStatus.BEETLE_GATE

    def test_rejected_move_leaves_board_unchanged(self, settled):
        """Test that a rejected forced move changes nothing."""
        before = settled.copy()
        forced_move(settled, cell(*VICTIM), cell(1, 5), cell(*PILLBUG))
        assert settled == before

    def test_candidates(self, settled):
        """Test listing the chips that could force a recorded move."""
        candidates = forced_move_candidates(settled, W, cell(*VICTIM), cell(*TARGET))
        assert candidates == [Chip(ChipName.P1, W)]
        assert forced_move_candidates(settled, B, cell(*VICTIM), cell(*TARGET)) == []


class TestMosquitoAsPillbug:
    @pytest.fixture
    def board(self):
        board = build(
            [
                (ChipName.Q1, W, (0, 0)),
                (ChipName.Q1, B, (0, -2)),
                (ChipName.M1, W, (0, 2)),
                (ChipName.P1, W, (1, 1)),
                (ChipName.A1, W, (-1, 3)),
            ]
        )
        board.skip_turn()
        board.skip_turn()
        return board

    def test_candidates_need_a_pillbug_to_absorb(self, board):
        """Test that a mosquito is a candidate only next to a pillbug."""
        candidates = forced_move_candidates(board, W, cell(-1, 3), cell(0, 4))
        assert candidates == [Chip(ChipName.M1, W)]

    def test_forced_move_after_mimicry(self, board):
        """Test a mosquito forcing a move after absorbing a pillbug."""
        mosquito = Chip(ChipName.M1, W)
        assert mimic(board, mosquito, cell(1, 1)) == MoveStatus.SUCCESS
        result = forced_move(board, cell(-1, 3), cell(0, 4), cell(0, 2))
        assert result == MoveStatus.SUCCESS
        assert board.position_of(Chip(ChipName.A1, W)) == cell(0, 4)

    def test_forced_move_without_mimicry(self, board):
        """Test that a mosquito can't force a move without mimicry."""
        result = forced_move(board, cell(-1, 3), cell(0, 4), cell(0, 2))
        assert result == MoveStatus.NO_SPECIAL


class TestMimicry:
    @pytest.fixture
    def board(self):
        return build(
            [
                (ChipName.Q1, W, (0, 0)),
                (ChipName.Q1, B, (0, -2)),
                (ChipName.M1, W, (0, 2)),
                (ChipName.A1, B, (0, -4)),
            ]
        )

    @pytest.fixture
    def mosquito(self):
        return Chip(ChipName.M1, W)

    def test_mimic_queen_then_move(self, board, mosquito):
        """Test a mosquito moving as a queen after mimicry."""
        assert mimic(board, mosquito, cell(0, 0)) == MoveStatus.SUCCESS
        assert board.movement_species(mosquito) is Species.QUEEN
        assert board.move_chip(ChipName.M1, W, cell(1, 1)) == MoveStatus.SUCCESS
        assert board.history.events[4].name == "mq"

        revert_mimicry(board)
        assert board.mimic(mosquito) is None
        assert board.movement_species(mosquito) is Species.MOSQUITO

    def test_empty_cell(self, board, mosquito):
        """Test that mimicking an empty cell fails."""
        assert mimic(board, mosquito, cell(1, 1)) == MoveStatus.NO_SUCK

    def test_not_neighbour(self, board, mosquito):
        """Test that the mimicked chip must be a neighbour."""
        assert mimic(board, mosquito, cell(0, -2)) == MoveStatus.NOT_NEIGHBOUR

    def test_other_mosquito(self, board, mosquito):
        """Test that a mosquito can't absorb another mosquito."""
        board.update(Chip(ChipName.M1, B), cell(-1, 3))
        assert mimic(board, mosquito, cell(-1, 3)) == MoveStatus.NO_SUCK

    def test_mosquito_in_hand(self, board):
        """Test that a mosquito in hand can't mimic."""
        assert mimic(board, Chip(ChipName.M1, B), cell(0, 0)) == MoveStatus.NO_SUCK

    def test_mimic_beetle_and_climb(self, board, mosquito):
        """Test a mosquito climbing after absorbing a beetle."""
        board.update(Chip(ChipName.B1, W), cell(1, 1))
        assert mimic(board, mosquito, cell(1, 1)) == MoveStatus.SUCCESS
        assert board.move_chip(ChipName.M1, W, cell(0, 0)) == MoveStatus.SUCCESS
        assert board.position_of(mosquito) == cell(0, 0, 1)
        assert board.history.events[5].name == "mb"

        # Once up on the hive the mosquito keeps moving as a beetle
        revert_mimicry(board)
        assert board.movement_species(mosquito) is Species.BEETLE
        assert board.display_name(mosquito) == "m1*"

    def test_find_mimic_source(self, board, mosquito):
        """Test finding a neighbour of a given species to mimic."""
        assert find_mimic_source(board, mosquito, Species.QUEEN) == cell(0, 0)
        assert find_mimic_source(board, mosquito, Species.ANT) is None
        assert find_mimic_source(board, Chip(ChipName.M1, B), Species.QUEEN) is None
