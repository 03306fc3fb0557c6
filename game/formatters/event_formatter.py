"""History string formatter.

A history string lists one entry per turn, each followed by '/':

    a1.0,0/Q1.0,-2/ma.1,-1/W.0,0/

Each entry is ``<name>.<col>,<row>``. Upper-case names belong to Black. A
mosquito that moved as another species is written as "m" plus that species'
letter. A skipped turn is written "w.0,0" (White) or "W.0,0" (Black).
"""

from game.chips import Chip, Team
from game.constants import SKIP_EVENT_NAME
from game.errors import NotationError
from game.hex_coords import DoubleHeight
from game.history import Event


class EventFormatter:
    """Converts history rows to/from history strings."""

    SEPARATOR = "/"

    @staticmethod
    def event_to_string(event: Event) -> str:
        return f"{event.wire_name}.{event.location}"

    @staticmethod
    def skip_to_string(team: Team) -> str:
        name = SKIP_EVENT_NAME.upper() if team is Team.BLACK else SKIP_EVENT_NAME
        return f"{name}.{DoubleHeight(0, 0)}"

    @staticmethod
    def rows_to_string(rows: list[Event | None], first: Team) -> str:
        """Encode every turn of a game.

        Args:
            rows: One entry per turn, None for skipped turns
            first: Team that moved on turn 0 (decides who skipped)

        Returns:
            str: History string with a trailing separator
        """
        entries = []
        for turn, event in enumerate(rows):
            if event is None:
                team = first if turn % 2 == 0 else first.complement()
                entries.append(EventFormatter.skip_to_string(team))
            else:
                entries.append(EventFormatter.event_to_string(event))
        return "".join(entry + EventFormatter.SEPARATOR for entry in entries)

    @staticmethod
    def string_to_event(text: str, turn: int) -> Event | None:
        """Parse a single entry. Returns None for a skipped turn.

        Raises:
            NotationError: If the entry is malformed
        """
        name, dot, location = text.strip().partition(".")
        if not dot or not name:
            raise NotationError(f"Expected '<name>.<col>,<row>' but got '{text}'")

        if name.lower() == SKIP_EVENT_NAME:
            return None

        team = Team.BLACK if name[0].isupper() else Team.WHITE
        chip_name, mimic = Event.parse_name(name.lower())
        return Event(turn, Chip(chip_name, team), DoubleHeight.parse(location), mimic)

    @staticmethod
    def string_to_rows(text: str) -> list[Event | None]:
        """Parse a full history string into one entry per turn."""
        entries = text.strip().split(EventFormatter.SEPARATOR)
        # Trailing separator leaves an empty final entry
        if entries and entries[-1] == "":
            entries.pop()
        return [EventFormatter.string_to_event(entry, turn) for turn, entry in enumerate(entries)]
