"""Loader for history string files ("a1.0,0/Q1.0,-2/.../")."""

from pathlib import Path
from typing import Callable

from game.formatters import EventFormatter
from game.history import Event


class HistoryStringLoader:
    """Loads a history string saved to a text file."""

    def __init__(
        self,
        filename: str | Path,
        status_reporter: Callable[[str], None] | None = None,
    ):
        self.filename = Path(filename)
        self._status_reporter = status_reporter

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter

    def load(self) -> list[Event | None]:
        self._report(f"Loading history string from: {self.filename}")
        with open(self.filename, "r") as f:
            text = f.read().strip()
        rows = EventFormatter.string_to_rows(text)
        self._report(f"Loaded {len(rows)} turns")
        return rows

    def _report(self, message: str | None) -> None:
        """Report status message via callback or print."""
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
