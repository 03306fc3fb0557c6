"""Spiral notation: a compact board snapshot string.

Format:
    TTTTSS<couplets>

    TTTT  turn count, 4 digits zero padded
    SS    display size, 2 digits zero padded

Couplets follow in ascending spiral index (ground chip before the chips
stacked on it):

    a1    White chip a1 at the next spiral cell (Black chips are upper case)
    (1    White beetle b1 one layer above the previous chip; '[' for Black,
          '<' / '>' for White / Black mosquitoes
    1x    skip 22 empty spiral cells (two duodecimal digits, at most 143)

Example: "000305a1Q1" is turn 3, size 5, White a1 at the origin and Black's
queen at spiral index 1.
"""

from game.chips import Chip
from game.constants import (
    ELEVATED_MARKERS,
    MARKER_TO_LETTER,
    MAX_SKIP,
    SPIRAL_HEADER_LENGTH,
    SPIRAL_SIZE_DIGITS,
    SPIRAL_TURN_DIGITS,
)
from game.errors import NotationError
from game.formatters.duodecimal import decimal_to_duo, duo_to_decimal, is_duo_digit
from game.hex_coords import Cube, Spiral
from game.hive_board import HiveBoard


class SpiralFormatter:
    """Converts boards to/from spiral notation."""

    @staticmethod
    def encode(board: HiveBoard) -> str:
        """Encode the chips, turn count and size of a board.

        Args:
            board: Board to encode

        Returns:
            str: Spiral notation string
        """
        code = [f"{board.turns:0{SPIRAL_TURN_DIGITS}d}{board.size:0{SPIRAL_SIZE_DIGITS}d}"]

        spirals = {position.to_spiral(): chip for chip, position in board.registry.items()}

        # Start before index 0 so a gap in front of the first chip is written too
        previous = -1
        for spiral in sorted(spirals):
            chip = spirals[spiral]
            gap = spiral.index - previous - 1
            while gap > 0:
                chunk = min(gap, MAX_SKIP)
                code.append(decimal_to_duo(chunk))
                gap -= chunk

            text = chip.wire_name
            if spiral.layer > 0:
                if text[0] not in ELEVATED_MARKERS:
                    raise NotationError(f"Chip {text} can't be encoded above layer 0")
                text = ELEVATED_MARKERS[text[0]] + text[1:]
            code.append(text)
            previous = spiral.index

        return "".join(code)

    @staticmethod
    def decode(code: str) -> HiveBoard:
        """Build a board from spiral notation.

        The board has no history: only chip positions, turn count and size
        are stored in the string.

        Raises:
            NotationError: If the string is malformed
        """
        code = code.strip()
        if len(code) < SPIRAL_HEADER_LENGTH:
            raise NotationError(f"Spiral string too short for its header: '{code}'")

        header, body = code[:SPIRAL_HEADER_LENGTH], code[SPIRAL_HEADER_LENGTH:]
        if not (header.isascii() and header.isdigit()):
            raise NotationError(f"Spiral header must be digits: '{header}'")
        if len(body) % 2 != 0:
            raise NotationError(f"Spiral body has an odd number of characters: '{body}'")

        board = HiveBoard()
        board.turns = int(header[:SPIRAL_TURN_DIGITS])
        board.size = int(header[SPIRAL_TURN_DIGITS:])

        index = 0
        layer = 0
        for i in range(0, len(body), 2):
            first, second = body[i], body[i + 1]
            if is_duo_digit(first):
                index += duo_to_decimal(first + second)
            elif first in MARKER_TO_LETTER:
                if index == 0:
                    raise NotationError(f"Elevated chip '{first}{second}' has no chip beneath it")
                index -= 1
                layer += 1
                SpiralFormatter._place(board, MARKER_TO_LETTER[first] + second, index, layer)
                index += 1
            elif first.isalpha():
                layer = 0
                SpiralFormatter._place(board, first + second, index, layer)
                index += 1
            else:
                raise NotationError(f"Unrecognised couplet '{first}{second}'")

        return board

    @staticmethod
    def _place(board: HiveBoard, name: str, index: int, layer: int) -> None:
        chip = Chip.parse(name)
        if board.position_of(chip) is not None:
            raise NotationError(f"Chip '{name}' appears twice")

        position = Cube.from_spiral(Spiral(index, layer))
        if layer > 0 and board.get_chip(position.descend()) is None:
            raise NotationError(f"Elevated chip '{name}' has no chip beneath it")
        board.registry.set_position(chip, position)
