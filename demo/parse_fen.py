#!/usr/bin/env python3
"""Demo script to parse a board position and draw it in the terminal."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from chess_notation.board_display import display_board
from chess_notation.config import ParserSettings
from chess_notation.exceptions import NotationError
from chess_notation.fen import STARTING_FEN, parse_board


def main(argv: list[str] | None = None) -> int:
    """Parse a board-notation line and display the position.

    Returns:
        0 on success, 1 if the line could not be parsed.
    """
    import argparse

    parser = argparse.ArgumentParser(description="Parse a chess board position")
    parser.add_argument(
        "fen",
        nargs="?",
        default=STARTING_FEN,
        help="Board-notation line (quote it); defaults to the starting position",
    )
    parser.add_argument(
        "--flip", action="store_true", help="Draw the board from black's side"
    )
    args = parser.parse_args(argv)

    try:
        board = parse_board(args.fen, ParserSettings.from_env())
    except NotationError as e:
        logger.error(f"Could not parse {args.fen!r}: {e}")
        return 1

    display_board(board, flip=args.flip)
    return 0


if __name__ == "__main__":
    sys.exit(main())
