"""Auto-detecting replay loader.

Detects the format of a saved game (CSV or history string) and delegates to
the appropriate loader.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from game.constants import CSV_HEADER
from game.history import Event

from .base_loader import ReplayLoader
from .csv_loader import HistoryCsvLoader
from .history_string_loader import HistoryStringLoader


class AutoSelectLoader:
    """Loader that detects the file format and delegates to the matching loader.

    Implements the ReplayLoader protocol so it can be used as a drop-in replacement.

    Detection logic:
    - Files ending in .csv -> HistoryCsvLoader
    - Files whose first line is the CSV header -> HistoryCsvLoader
    - Default: HistoryStringLoader
    """

    def __init__(
        self,
        filename: str | Path,
        status_reporter: Callable[[str], None] | None = None,
    ):
        self.filename = Path(filename)
        self._status_reporter = status_reporter
        self._delegate: ReplayLoader | None = None

    @staticmethod
    def detect_file_format(filepath: str | Path) -> str:
        """Detect whether a file is a CSV replay or a history string.

        Returns:
            "csv" or "history"
        """
        filepath = Path(filepath)
        if filepath.suffix.lower() == ".csv":
            return "csv"

        with open(filepath, "r") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                if line.startswith(CSV_HEADER[0]):
                    return "csv"
                break
        return "history"

    def _get_delegate(self) -> ReplayLoader:
        if self._delegate is None:
            if self.detect_file_format(self.filename) == "csv":
                self._delegate = HistoryCsvLoader(self.filename, self._status_reporter)
            else:
                self._delegate = HistoryStringLoader(self.filename, self._status_reporter)
        return self._delegate

    def load(self) -> list[Event | None]:
        return self._get_delegate().load()

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter
        if self._delegate is not None:
            self._delegate.set_status_reporter(reporter)
