"""Tests for HiveBoard: hive integrity, skipping, win detection and queries."""

import pytest

from game.chips import Chip, ChipName, Species, Team
from game.errors import QueenNotPlacedError
from game.hex_coords import Cube, DoubleHeight
from game.hive_board import HiveBoard
from game.move_status import MoveResult, MoveStatus

W = Team.WHITE
B = Team.BLACK


def cell(col, row, layer=0):
    return Cube.from_doubleheight(DoubleHeight(col, row, layer))


def build(placements):
    board = HiveBoard()
    for name, team, location in placements:
        board.update(Chip(name, team), cell(*location))
    return board


class TestHiveIntegrity:
    def test_hive_split(self):
        """Test that a move splitting the hive is rejected."""
        board = HiveBoard()
        board.update(Chip(ChipName.A1, B), Cube(0, 0, 0))
        board.update(Chip(ChipName.Q1, W), Cube(0, -1, 1))
        board.update(Chip(ChipName.Q1, B), Cube(0, 1, -1))
        board.update(Chip(ChipName.A2, W), Cube(0, -2, 2))
        assert board.move_chip(ChipName.A1, B, Cube(0, -3, 3)) == MoveStatus.HIVE_SPLIT

    def test_stack_is_one_blob(self):
        """Test that a stack counts as one cell for hive integrity."""
        board = build(
            [
                (ChipName.Q1, W, (0, 0)),
                (ChipName.Q1, B, (0, -2)),
                (ChipName.B1, W, (0, 2)),
            ]
        )
        board.update(Chip(ChipName.B1, B), cell(0, 0, 1))
        assert not board.hive_break_check(cell(0, 2), cell(1, 1))
        # Lifting the bottom chip strands the beetle above it
        assert board.hive_break_check(cell(0, 0), cell(1, 1))

    def test_occupied_destination(self):
        """Test that a non-climber can't move onto an occupied cell."""
        board = build(
            [(ChipName.Q1, W, (0, 0)), (ChipName.Q1, B, (0, -2)), (ChipName.A1, W, (0, 2))]
        )
        assert board.move_chip(ChipName.A1, W, cell(0, -2)) == MoveStatus.OCCUPIED

    def test_unconnected_destination(self):
        """Test that a move away from the hive is rejected."""
        board = build(
            [(ChipName.Q1, W, (0, 0)), (ChipName.Q1, B, (0, -2)), (ChipName.A1, W, (0, 2))]
        )
        assert board.move_chip(ChipName.A1, W, cell(0, 8)) == MoveStatus.UNCONNECTED


class TestSkipTurn:
    def test_no_skip_without_both_bees(self):
        """Test that skipping needs both queens on the board."""
        board = HiveBoard()
        assert board.skip_turn() == MoveStatus.NO_SKIP
        board.move_chip(ChipName.Q1, W, cell(0, 0))
        assert board.skip_turn() == MoveStatus.NO_SKIP
        assert board.turns == 1

    def test_skip(self):
        """Test that a skip advances the turn."""
        board = build([(ChipName.Q1, W, (0, 0)), (ChipName.Q1, B, (0, -2))])
        assert board.skip_turn() == MoveStatus.SUCCESS
        assert board.turns == 3
        assert board.history.which_chip(2) is None
        assert len(board.history) == 2


class TestWinState:
    @pytest.fixture
    def board(self):
        # White queen at (0,0) has five neighbours, only (1,1) is free
        return build(
            [
                (ChipName.Q1, W, (0, 0)),
                (ChipName.Q1, B, (0, 2)),
                (ChipName.A1, W, (1, -1)),
                (ChipName.A1, B, (-1, 1)),
                (ChipName.A2, W, (-1, -1)),
                (ChipName.S1, W, (0, -2)),
                (ChipName.A2, B, (-1, 3)),
                (ChipName.A3, W, (0, -4)),
            ]
        )

    def test_surrounding_opponent_wins(self, board):
        """Test that surrounding the opposing queen wins."""
        assert board.move_chip(ChipName.A2, B, cell(1, 1)) == MoveResult.win(B)
        assert board.bee_neighbours(W) == 6

    def test_surrounding_own_queen_loses(self, board):
        """Test that surrounding your own queen hands the opponent the win."""
        assert board.move_chip(ChipName.A3, W, cell(1, 1)) == MoveResult.win(B)

    def test_draw(self, board):
        """Test that surrounding both queens is a draw."""
        board.update(Chip(ChipName.A3, B), cell(0, 4))
        board.update(Chip(ChipName.S1, B), cell(1, 3))
        result = board.move_chip(ChipName.A3, W, cell(1, 1))
        assert result == MoveResult.win(None)
        assert str(result) == "Win(None)"

    def test_unplaced_queen_is_never_surrounded(self):
        """Test that a queen in hand is never surrounded."""
        board = build([(ChipName.Q1, W, (0, 0))])
        assert board.bee_neighbours(B) == 0
        assert board.check_win_state(W) == MoveStatus.SUCCESS


class TestQueries:
    @pytest.fixture
    def board(self):
        board = build(
            [
                (ChipName.Q1, W, (0, 0)),
                (ChipName.Q1, B, (0, -2)),
                (ChipName.M1, W, (0, 2)),
            ]
        )
        board.update(Chip(ChipName.B1, B), cell(0, 0, 1))
        return board

    def test_top_of_stack(self, board):
        """Test finding the top chip of a stack."""
        assert board.top_position(cell(0, 0)) == cell(0, 0, 1)
        assert board.top_chip(cell(0, 0)) == Chip(ChipName.B1, B)
        assert board.top_position(cell(5, 5)) is None
        assert board.top_chip(cell(5, 5)) is None

    def test_count_neighbours_ignores_layers(self, board):
        """Test that neighbour counts ignore stacked chips."""
        assert board.count_neighbours(cell(1, 1)) == 2
        assert board.count_neighbours(cell(1, 1, 1)) == 2

    def test_neighbour_chips_are_top_most(self, board):
        """Test that neighbour chips are the tops of their stacks."""
        assert set(board.neighbour_chips(cell(1, 1))) == {Chip(ChipName.B1, B), Chip(ChipName.M1, W)}

    def test_queen_position(self, board):
        """Test finding each team's queen."""
        assert board.queen_position(W) == Cube(0, 0, 0)
        empty = HiveBoard()
        with pytest.raises(QueenNotPlacedError):
            empty.queen_position(B)

    def test_movement_species(self, board):
        """Test the species a chip moves as, including mimicry."""
        mosquito = Chip(ChipName.M1, W)
        assert board.movement_species(mosquito) is Species.MOSQUITO
        board.registry.set_mimic(mosquito, Species.ANT)
        assert board.movement_species(mosquito) is Species.ANT
        assert board.display_name(mosquito) == "ma"
        board.revert_mimicry()
        board.update(mosquito, cell(0, -2, 1))
        assert board.movement_species(mosquito) is Species.BEETLE
        assert board.display_name(mosquito) == "m1*"

    def test_occupancy_grid(self, board):
        """Test the ground occupancy grid."""
        grid, origin = board.occupancy_grid()
        assert grid.sum() == 3

    @pytest.mark.parametrize(
        "location,expected", [((0, 0), 5), ((0, -2), 5), ((3, 5), 9), ((1, -7), 9)]
    )
    def test_find_size(self, location, expected):
        """Test the board size that covers a location."""
        board = build([(ChipName.A1, W, location)])
        assert board.size == expected

    def test_copy_is_independent(self, board):
        """Test that a copied board does not share state with the original."""
        clone = board.copy()
        assert clone == board
        clone.move_chip(ChipName.A1, W, cell(1, 3))
        assert clone != board
        assert board.position_of_name(ChipName.A1, W) is None
        assert len(board.history) == 4
