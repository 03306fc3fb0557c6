"""Game constants shared across modules.

This module contains the chip roster, turn limits and codec characters
used by the board, the special moves and the formatters.
"""

# Chip roster for each team, in registry slot order. 14 chips per team.
ROSTER = (
    "q1",
    "s1",
    "s2",
    "a1",
    "a2",
    "a3",
    "b1",
    "b2",
    "g1",
    "g2",
    "g3",
    "m1",
    "l1",
    "p1",
)
CHIPS_PER_TEAM = len(ROSTER)
NUM_TEAMS = 2

# Board turns on which a team is making its 4th placement (queen deadline)
QUEEN_DEADLINE_TURNS = (6, 7)

# Neighbours needed around a queen to surround it
SURROUNDED = 6

# Display size of an empty or small board (always odd)
MIN_BOARD_SIZE = 5

# Spiral codec
SPIRAL_TURN_DIGITS = 4
SPIRAL_SIZE_DIGITS = 2
SPIRAL_HEADER_LENGTH = SPIRAL_TURN_DIGITS + SPIRAL_SIZE_DIGITS
DUODECIMAL_DIGITS = "0123456789xy"
MAX_SKIP = 143

# Elevated chips are written with a marker instead of their species letter
ELEVATED_MARKERS = {"B": "[", "b": "(", "M": ">", "m": "<"}
MARKER_TO_LETTER = {v: k for k, v in ELEVATED_MARKERS.items()}

# CSV history files
CSV_HEADER = ("turn", "team", "name", "row", "col")
SAVED_GAMES_DIR = "saved_games"

# History string: skipped turns are recorded with this pseudo-chip
SKIP_EVENT_NAME = "w"
