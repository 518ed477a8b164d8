"""Grammar-driven parsers for chess move lists, move tokens and board positions."""

from chess_notation.config import ParserSettings
from chess_notation.exceptions import (
    IncompleteInputError,
    NotationError,
    NotationSyntaxError,
    StructuralError,
)
from chess_notation.fen import STARTING_FEN, parse_board
from chess_notation.pgn import parse_game
from chess_notation.san import parse_move

__all__ = [
    "STARTING_FEN",
    "IncompleteInputError",
    "NotationError",
    "NotationSyntaxError",
    "ParserSettings",
    "StructuralError",
    "parse_board",
    "parse_game",
    "parse_move",
]
