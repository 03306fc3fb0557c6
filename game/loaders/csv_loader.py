"""Loader for CSV replay files written by ``HistoryCsvWriter``.

File format:
    turn,team,name,row,col
    0,White,a1,0,0
    1,Black,q1,-2,0
"""

import csv
from pathlib import Path
from typing import Callable

from game.chips import Chip, Team
from game.constants import CSV_HEADER
from game.errors import NotationError
from game.hex_coords import DoubleHeight
from game.history import Event


class HistoryCsvLoader:
    """Loads and parses CSV replay files."""

    def __init__(
        self,
        filename: str | Path,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize CSV loader.

        Args:
            filename: Path to CSV file
            status_reporter: Optional callback for status messages
        """
        self.filename = Path(filename)
        self._status_reporter = status_reporter

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter

    def load(self) -> list[Event | None]:
        """Load and parse the CSV file.

        Returns:
            One entry per turn up to the last recorded move; None marks a
            skipped turn (a gap in the turn column)

        Raises:
            NotationError: If the header or a row is malformed (with its line number)
        """
        self._report(f"Loading history from: {self.filename}")

        with open(self.filename, "r", newline="") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                self._report("Empty history file")
                return []
            if tuple(field.strip() for field in header) != CSV_HEADER:
                raise NotationError(f"Expected header '{','.join(CSV_HEADER)}'", line=1)

            rows: list[Event | None] = []
            for line_num, record in enumerate(reader, start=2):
                if not any(field.strip() for field in record):
                    continue
                event = self._parse_row(record, line_num)
                if event.turn < len(rows):
                    raise NotationError(f"Turn {event.turn} is out of order", line=line_num)
                # Missing turns were skipped
                rows.extend([None] * (event.turn - len(rows)))
                rows.append(event)

        skips = sum(1 for row in rows if row is None)
        self._report(f"Loaded {len(rows)} turns ({skips} skipped)")
        return rows

    @staticmethod
    def _parse_row(record: list[str], line_num: int) -> Event:
        if len(record) != len(CSV_HEADER):
            raise NotationError(
                f"Expected {len(CSV_HEADER)} fields but got {len(record)}", line=line_num
            )
        turn, team, name, row, col = (field.strip() for field in record)
        try:
            turn, row, col = int(turn), int(row), int(col)
        except ValueError:
            raise NotationError("Turn, row and col must be integers", line=line_num) from None
        if turn < 0:
            raise NotationError(f"Negative turn {turn}", line=line_num)
        if (row + col) % 2 != 0:
            raise NotationError(f"({col},{row}) is not a hex cell", line=line_num)

        try:
            chip_name, mimic = Event.parse_name(name.lower())
            chip = Chip(chip_name, Team.from_long_name(team))
        except NotationError as e:
            raise NotationError(str(e), line=line_num) from None
        return Event(turn, chip, DoubleHeight(col, row), mimic)

    def _report(self, message: str | None) -> None:
        """Report status message via callback or print."""
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
