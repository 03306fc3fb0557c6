"""Two-digit duodecimal numbers (0-143) used for skip couplets in spiral strings.

Digits run 0-9 then 'x' (10) and 'y' (11).
"""

from game.constants import DUODECIMAL_DIGITS, MAX_SKIP
from game.errors import NotationError

BASE = len(DUODECIMAL_DIGITS)


def decimal_to_duo(number: int) -> str:
    """Encode 0 <= number <= 143 as two duodecimal digits ("00" to "yy")."""
    if not 0 <= number <= MAX_SKIP:
        raise ValueError(f"Can only encode numbers from 0 to {MAX_SKIP}, got {number}")
    high, low = divmod(number, BASE)
    return DUODECIMAL_DIGITS[high] + DUODECIMAL_DIGITS[low]


def duo_to_decimal(couplet: str) -> int:
    """Decode two duodecimal digits.

    Raises:
        NotationError: If the couplet is not exactly two valid digits
    """
    if len(couplet) != 2 or any(digit not in DUODECIMAL_DIGITS for digit in couplet):
        raise NotationError(f"Invalid duodecimal couplet '{couplet}'")
    return BASE * DUODECIMAL_DIGITS.index(couplet[0]) + DUODECIMAL_DIGITS.index(couplet[1])


def is_duo_digit(char: str) -> bool:
    return len(char) == 1 and char in DUODECIMAL_DIGITS
