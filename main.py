"""Command line entry point for the Hive engine."""

import argparse
import logging
import sys
from pathlib import Path

from game.chips import Team
from game.constants import SAVED_GAMES_DIR
from game.errors import NotationError
from game.formatters import SpiralFormatter
from game.hive_game import HiveGame


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hive rules engine",
        epilog="""
Examples:
  Replay a saved game and print its final state and history string:
    --replay saved_games/game.csv

  Replay a game and save it again as CSV:
    --replay history.txt --save-dir saved_games

  Decode a spiral snapshot:
    --decode 000305a1Q1
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--replay", type=str, help="Path to a CSV replay file or history string file"
    )
    parser.add_argument(
        "--decode", type=str, metavar="SPIRAL", help="Spiral snapshot string to decode"
    )
    parser.add_argument(
        "--first",
        type=str,
        choices=[team.value for team in Team],
        default=None,
        help="Team that moved first in the replayed game (default: team of the first recorded move)",
    )
    parser.add_argument(
        "--save-dir",
        type=str,
        nargs="?",
        const=SAVED_GAMES_DIR,
        default=None,
        help=f"Save the replayed game as CSV in this directory (default: {SAVED_GAMES_DIR})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.replay is None and args.decode is None:
        parser.print_help()
        return 1

    try:
        if args.decode is not None:
            board = SpiralFormatter.decode(args.decode)
            print(f"Turns: {board.turns}")
            print(f"Size: {board.size}")
            for chip, position in board.registry.items():
                print(f"{chip.wire_name} {position.to_doubleheight()} layer {position.layer}")

        if args.replay is not None:
            first = Team.from_str(args.first) if args.first is not None else None
            game = HiveGame.replay(args.replay, first=first)
            print(f"State: {game.encoded_state()}")
            print(f"History: {game.history_string()}")
            if game.result is not None:
                print(f"Result: {game.result}")
            if args.save_dir is not None:
                path = Path(args.save_dir) / f"{Path(args.replay).stem}.csv"
                game.save_history(path)
                print(f"Saved: {path}")
    except (NotationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
