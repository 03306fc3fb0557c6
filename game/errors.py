"""Exception hierarchy for the Hive engine.

Rule violations are never raised: they come back as ``MoveResult`` values.
The exceptions here cover the two other kinds of failure:

- the caller broke the setup contract (a chip outside the roster, asking for a
  queen that was never placed), and
- a saved game or snapshot string could not be parsed.

Usage:
    from game.errors import NotationError

    try:
        board = SpiralFormatter.decode(code)
    except NotationError as e:
        logger.warning(f"Bad snapshot: {e}")
"""

__all__ = [
    "HiveError",
    "UnknownChipError",
    "QueenNotPlacedError",
    "NotationError",
]


class HiveError(Exception):
    """Base exception for all engine errors."""


class UnknownChipError(HiveError, KeyError):
    """A chip name that is not part of the fixed roster was referenced."""

    def __str__(self):
        return str(self.args[0]) if self.args else "Unknown chip"


class QueenNotPlacedError(HiveError):
    """The queen of a team was queried before it was placed."""


class NotationError(HiveError, ValueError):
    """A spiral string, history string, CSV row or coordinate could not be parsed.

    Attributes:
        line: Optional 1-based line number of the offending input
    """

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
