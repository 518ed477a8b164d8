#!/usr/bin/env python3
"""Demo script to parse a game transcript and print its moves."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from chess_notation.board_display import display_game_summary
from chess_notation.config import ParserSettings
from chess_notation.exceptions import NotationError
from chess_notation.pgn import parse_game

DEFAULT_GAME = Path(__file__).parent / "games" / "byrne_fischer_1956.pgn"


def main(argv: list[str] | None = None) -> int:
    """Parse a PGN file and print its tags, moves and result.

    Returns:
        0 on success, 1 if the file could not be read or parsed.
    """
    import argparse

    parser = argparse.ArgumentParser(
        description="Parse a chess game transcript",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demo/parse_pgn.py
  python demo/parse_pgn.py demo/games/morphy_isouard_1858.pgn

Options are read from CHESS_NOTATION_* variables (or a .env file).
        """,
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=str(DEFAULT_GAME),
        help="PGN file to parse",
    )
    args = parser.parse_args(argv)

    try:
        text = Path(args.path).read_text(encoding="utf-8")
        game = parse_game(text, ParserSettings.from_env())
    except (OSError, NotationError) as e:
        logger.error(f"Could not parse {args.path}: {e}")
        return 1

    logger.info(f"Parsed {game.plies} plies from {args.path}")
    display_game_summary(game)
    return 0


if __name__ == "__main__":
    sys.exit(main())
