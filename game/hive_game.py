import logging
from pathlib import Path
from typing import Callable

from game.board_action import FORCED_MOVE, MIMIC, BoardAction
from game.chips import Chip, ChipName, Species, Team
from game.errors import NotationError
from game.formatters import EventFormatter, SpiralFormatter
from game.hive_board import HiveBoard
from game.history import Event
from game.loaders import AutoSelectLoader
from game.move_status import NOTHING, MoveResult, MoveStatus
from game.specials import (
    find_mimic_source,
    forced_move,
    forced_move_candidates,
    mimic,
    revert_mimicry,
)
from game.writers import HistoryCsvWriter, HistoryStringWriter

logger = logging.getLogger(__name__)


# For full rules: https://www.gen42.com/games/hive
# The engine boundary: callers submit BoardActions and get MoveResults back.


class HiveGame:
    def __init__(self, first=Team.WHITE, clone=None):
        if clone is not None:
            self.first = clone.first
            self.board = HiveBoard(clone=clone.board)
            self.result = clone.result
        else:
            # Team that moves on even turns
            self.first = first
            self.board = HiveBoard()
            # Set once the game has been won, drawn or forfeited
            self.result: MoveResult | None = None

    def copy(self):
        return HiveGame(clone=self)

    @property
    def active_team(self) -> Team:
        return self.first if self.board.turns % 2 == 0 else self.first.complement()

    @property
    def game_over(self) -> bool:
        return self.result is not None

    @property
    def winner(self) -> Team | None:
        return self.result.team if self.result is not None else None

    # ==================================================================================
    # MOVES
    # ==================================================================================

    def submit(self, action: BoardAction) -> MoveResult:
        """Carry out a move request for the active team.

        Args:
            action: Move, skip or forfeit request

        Returns:
            MoveResult; ``Nothing`` once the game is over
        """
        if self.game_over:
            return NOTHING

        team = self.active_team
        if action.is_forfeit:
            result = MoveResult.win(team.complement())
            logger.info(f"{team.long_name} forfeits")
        elif action.is_skip:
            result = self.board.skip_turn()
        else:
            result = self._do_action(action, team)

        # Mimicry never outlives the turn, whatever happened
        revert_mimicry(self.board)
        self._check_game_over(result)
        return result

    def move(self, name: str, col: int, row: int, special: str = "") -> MoveResult:
        """Convenience wrapper: move the active team's chip ``name`` to (col, row)."""
        return self.submit(BoardAction.do_move(name, self.active_team, col, row, special))

    def skip_turn(self) -> MoveResult:
        return self.submit(BoardAction.skip())

    def forfeit(self) -> MoveResult:
        return self.submit(BoardAction.forfeit())

    def _do_action(self, action: BoardAction, team: Team) -> MoveResult:
        chip_name = action.chip_name
        dest = self.board.to_board(action.destination)

        victim_location = None
        for kind, location in action.specials():
            if kind == MIMIC:
                mosquito = Chip(ChipName.M1, team)
                result = mimic(self.board, mosquito, self.board.to_board(location))
                if not result.is_success:
                    return result
                chip_name = ChipName.M1
            elif kind == FORCED_MOVE:
                victim_location = location

        if victim_location is not None:
            position = self.board.position_of_name(chip_name, team)
            if position is None:
                return MoveResult(MoveStatus.NO_SPECIAL)
            return forced_move(self.board, self.board.to_board(victim_location), dest, position)

        return self.board.move_chip(chip_name, team, dest)

    def _check_game_over(self, result: MoveResult) -> None:
        if result.status is not MoveStatus.WIN:
            return
        self.result = result
        if result.team is None:
            logger.info(f"Draw after {self.board.turns} turns")
        else:
            logger.info(f"{result.team.long_name} wins after {self.board.turns} turns")

    # ==================================================================================
    # STATE & HISTORY
    # ==================================================================================

    def encoded_state(self) -> str:
        """Current board as a spiral notation string."""
        return SpiralFormatter.encode(self.board)

    def history_rows(self) -> list[Event | None]:
        """One entry per completed turn, None for skipped turns."""
        return self.board.history.as_rows(self.board.turns)

    def history_string(self) -> str:
        return EventFormatter.rows_to_string(self.history_rows(), self.first)

    def save_history(self, path: str | Path) -> Path:
        """Save the history as a replay file.

        A ``.csv`` path gets a CSV replay file, where trailing skipped turns have
        no row and are not saved. Any other path gets a history string line.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="") as f:
            if path.suffix.lower() == ".csv":
                writer = HistoryCsvWriter(f)
            else:
                writer = HistoryStringWriter(f)
            writer.write_rows(self.history_rows(), self.first)
        logger.info(f"Saved {len(self.board.history)} moves to {path}")
        return path

    @classmethod
    def from_spiral(cls, code: str, first=Team.WHITE) -> "HiveGame":
        """Resume a game from a spiral snapshot (no history)."""
        game = cls(first)
        game.board = SpiralFormatter.decode(code)
        return game

    # ==================================================================================
    # REPLAY
    # ==================================================================================

    @classmethod
    def replay(
        cls,
        source: str | Path | list[Event | None],
        first: Team | None = None,
        status_reporter: Callable[[str], None] | None = None,
    ) -> "HiveGame":
        """Rebuild a game by replaying a saved history.

        Args:
            source: Path to a CSV / history string file, or already loaded rows
            first: Team that moved on turn 0. Defaults to the team of the first
                recorded move, or White for an empty history
            status_reporter: Optional callback for loader status messages

        Raises:
            NotationError: If the file is malformed or a recorded move can't be replayed
        """
        if isinstance(source, (str, Path)):
            rows = AutoSelectLoader(source, status_reporter).load()
        else:
            rows = source

        if first is None:
            first = next((row.team for row in rows if row is not None), Team.WHITE)

        game = cls(first)
        for row in rows:
            game.replay_event(row)
        return game

    def replay_event(self, event: Event | None) -> MoveResult:
        """Apply one recorded turn.

        A recorded move that the active team can't make directly is retried as
        a forced move by one of its pillbug-capable chips.
        """
        turn = self.board.turns
        if self.game_over:
            raise NotationError(f"Turn {turn}: game already finished")

        if event is None:
            result = self.skip_turn()
            if not result.is_success:
                raise NotationError(f"Turn {turn}: recorded skip is not allowed ({result})")
            return result

        if event.turn != turn:
            raise NotationError(f"Expected a move for turn {turn}, got turn {event.turn}")

        team = self.active_team
        dest = self.board.to_board(event.location)

        if event.team is team:
            result = self._replay_move(event, dest)
            if result.is_success:
                return self._finish_replayed(result)

        source = self.board.position_of(event.chip)
        if source is not None:
            for actor in forced_move_candidates(self.board, team, source, dest):
                if actor.species is Species.MOSQUITO:
                    mimic(self.board, actor, find_mimic_source(self.board, actor, Species.PILLBUG))
                result = forced_move(self.board, source, dest, self.board.position_of(actor))
                revert_mimicry(self.board)
                if result.is_success:
                    return self._finish_replayed(result)

        raise NotationError(
            f"Turn {turn}: {event.wire_name} to {event.location} could not be replayed"
        )

    def _replay_move(self, event: Event, dest) -> MoveResult:
        if event.mimic is not None:
            victim_cell = find_mimic_source(self.board, event.chip, event.mimic)
            if victim_cell is None:
                return MoveResult(MoveStatus.NO_SUCK)
            result = mimic(self.board, event.chip, victim_cell)
            if not result.is_success:
                revert_mimicry(self.board)
                return result
        result = self.board.move_chip(event.chip.name, event.chip.team, dest)
        revert_mimicry(self.board)
        return result

    def _finish_replayed(self, result: MoveResult) -> MoveResult:
        self._check_game_over(result)
        return result
