"""Base protocol for game replay loaders."""

from typing import Callable, Protocol

from game.history import Event


class ReplayLoader(Protocol):
    """Protocol defining the interface for game replay loaders.

    All loader implementations (CSV, history string) should conform to this interface.
    """

    def load(self) -> list[Event | None]:
        """Load and parse the replay file.

        Returns:
            One entry per turn, in turn order; None marks a skipped turn
        """
        ...

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        ...
