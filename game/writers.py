"""History writers for Hive games.

Provides writer classes that combine a formatter with an output stream to
save a game's move history (CSV replay files, history strings).
"""

import csv
import sys
from abc import ABC, abstractmethod
from typing import TextIO

from game.chips import Team
from game.constants import CSV_HEADER
from game.formatters import EventFormatter
from game.history import Event


class GameWriter(ABC):
    """Abstract base class for history writers.

    A GameWriter writes a header, then one record per turn, to an output
    stream. Subclasses implement the format-specific parts.
    """

    def __init__(self, output: TextIO):
        """Initialize the writer.

        Args:
            output: Output stream to write to (file, stdout, etc.)
        """
        self.output = output

    @abstractmethod
    def write_header(self) -> None:
        pass

    @abstractmethod
    def write_event(self, event: Event) -> None:
        """Write a turn on which a chip moved."""
        pass

    def write_skip(self, turn: int, team: Team) -> None:
        """Write a skipped turn. Formats that encode skips as gaps do nothing."""
        pass

    def write_footer(self) -> None:
        pass

    def write_rows(self, rows: list[Event | None], first: Team) -> None:
        """Write a whole game: header, every turn, footer.

        Args:
            rows: One entry per turn, None for skipped turns
            first: Team that moved on turn 0
        """
        self.write_header()
        for turn, event in enumerate(rows):
            if event is None:
                self.write_skip(turn, first if turn % 2 == 0 else first.complement())
            else:
                self.write_event(event)
        self.write_footer()

    def flush(self) -> None:
        """Flush the output stream."""
        self.output.flush()

    def close(self) -> None:
        """Close the output stream (but never close stdout/stderr)."""
        if self.output in (sys.stdout, sys.stderr):
            return
        if hasattr(self.output, "close"):
            self.output.close()


class HistoryCsvWriter(GameWriter):
    """Writes a history as a CSV replay file.

    File format:
        turn,team,name,row,col
        0,White,a1,0,0
        1,Black,q1,-2,0
        3,Black,a1,-4,0       # turn 2 was skipped

    Skipped turns have no row: a gap in the turn column is a skip.
    """

    def __init__(self, output: TextIO):
        super().__init__(output)
        self._csv = csv.writer(output, lineterminator="\n")

    def write_header(self) -> None:
        self._csv.writerow(CSV_HEADER)

    def write_event(self, event: Event) -> None:
        self._csv.writerow(
            [
                event.turn,
                event.team.long_name,
                event.name,
                event.location.row,
                event.location.col,
            ]
        )


class HistoryStringWriter(GameWriter):
    """Writes a history as a single history string line.

    Format:
        a1.0,0/Q1.0,-2/W.0,0/
    """

    def write_header(self) -> None:
        pass

    def write_event(self, event: Event) -> None:
        self.output.write(EventFormatter.event_to_string(event) + EventFormatter.SEPARATOR)

    def write_skip(self, turn: int, team: Team) -> None:
        self.output.write(EventFormatter.skip_to_string(team) + EventFormatter.SEPARATOR)

    def write_footer(self) -> None:
        self.output.write("\n")
