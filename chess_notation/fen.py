"""Board positions (FEN-style single line).

```
board        = placement SEP active_color SEP castling SEP en_passant
               SEP halfmove_clock SEP fullmove_number
placement    = rank ("/" rank){7}
rank         = (piece | empty_run){1,8}
castling     = "-" | K? Q? k? q?        (at least one letter, KQkq order)
en_passant   = "-" | square
SEP          = [ \\t]+
```

The whole line is atomic: fields need at least one separating space and no
whitespace may appear inside a field. That a rank covers 8 squares is
checked by :func:`chess_notation.builder.build_board`.
"""

from __future__ import annotations

from functools import lru_cache

from loguru import logger

from chess_notation.builder import build_board
from chess_notation.config import ParserSettings
from chess_notation.exceptions import NotationError
from chess_notation.grammar import (
    Choice,
    Literal,
    Lookahead,
    Optional,
    Pattern,
    Repeat,
    Rule,
    Sequence,
    parse,
)
from chess_notation.types import BoardState

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

SEP = Pattern(r"[ \t]+", "whitespace")
PIECE = Rule("piece", Pattern(r"[KQRBNPkqrbnp]", "piece symbol"))
EMPTY_RUN = Rule("empty_run", Pattern(r"[1-8]", "empty square count"))
RANK = Rule("rank", Repeat(Choice(PIECE, EMPTY_RUN), 1, 8), atomic=True)
PLACEMENT = Rule(
    "placement",
    Sequence(RANK, *(Sequence(Literal("/"), RANK) for _ in range(7))),
    atomic=True,
    quiet=False,
)
ACTIVE_COLOR = Rule("active_color", Pattern(r"[wb]", "w or b"), atomic=True)
NO_CASTLING = Rule("no_castling", Literal("-"))
WHITE_KINGSIDE = Rule("white_kingside", Literal("K"))
WHITE_QUEENSIDE = Rule("white_queenside", Literal("Q"))
BLACK_KINGSIDE = Rule("black_kingside", Literal("k"))
BLACK_QUEENSIDE = Rule("black_queenside", Literal("q"))
EN_PASSANT = Rule(
    "en_passant",
    Choice(Literal("-"), Rule("square", Pattern(r"[a-h][1-8]", "square"))),
    atomic=True,
)
HALFMOVE_CLOCK = Rule("halfmove_clock", Pattern(r"[0-9]+", "digits"), atomic=True)
FULLMOVE_NUMBER = Rule("fullmove_number", Pattern(r"[0-9]+", "digits"), atomic=True)


def _castling_rule(strict_order: bool) -> Rule:
    if strict_order:
        rights = Sequence(
            Lookahead(Pattern(r"[KQkq]", "castling letter")),
            Optional(WHITE_KINGSIDE),
            Optional(WHITE_QUEENSIDE),
            Optional(BLACK_KINGSIDE),
            Optional(BLACK_QUEENSIDE),
        )
    else:
        # Duplicates are rejected by the builder
        rights = Repeat(
            Choice(WHITE_KINGSIDE, WHITE_QUEENSIDE, BLACK_KINGSIDE, BLACK_QUEENSIDE),
            1,
            4,
        )
    return Rule("castling", Choice(NO_CASTLING, rights), atomic=True)


@lru_cache(maxsize=None)
def board_rule(strict_castling_order: bool = True) -> Rule:
    """Return the top-level ``board`` rule."""
    return Rule(
        "board",
        Sequence(
            PLACEMENT,
            SEP,
            ACTIVE_COLOR,
            SEP,
            _castling_rule(strict_castling_order),
            SEP,
            EN_PASSANT,
            SEP,
            HALFMOVE_CLOCK,
            SEP,
            FULLMOVE_NUMBER,
        ),
        atomic=True,
        quiet=False,
    )


def parse_board(text: str, settings: ParserSettings | None = None) -> BoardState:
    """Parse a board-notation line into a :class:`BoardState`.

    Args:
        text: e.g. ``"8/8/8/8/8/8/8/8 w - - 0 1"``. Surrounding whitespace
            is ignored.
        settings: Parser options. Defaults to ``ParserSettings()``.

    Returns:
        The parsed position. No partial board is ever returned.

    Raises:
        NotationSyntaxError: If the line does not follow the grammar.
        IncompleteInputError: If the line ends before the last field.
        StructuralError: If a rank does not cover 8 squares, a castling
            letter repeats, or the full-move counter is 0.
    """
    settings = settings or ParserSettings()
    try:
        node = parse(board_rule(settings.strict_castling_order), text)
        board = build_board(node, settings)
    except NotationError as e:
        logger.debug(f"Rejected board notation: {e}")
        raise
    logger.debug(f"Parsed board: {board.active_color} to move, move {board.fullmove_number}")
    return board
