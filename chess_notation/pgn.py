"""Game transcripts (PGN-style move lists).

```
game          = metadata_block* move_pair+ game_result
metadata_block= "[" tag_name tag_value "]"
move_pair     = move_number white_move white_comment?
                (continuation? black_move black_comment?)?
move_number   = @{ number "." }
continuation  = @{ number "..." }
*_comment     = @{ "{" comment_text "}" }
game_result   = @{ "1/2-1/2" | "1-0" | "0-1" }
```

Whitespace is allowed between any two elements except inside the atomic
(``@``) rules and inside move tokens.
"""

from __future__ import annotations

from functools import lru_cache

from loguru import logger

from chess_notation.builder import build_game
from chess_notation.config import ParserSettings
from chess_notation.exceptions import NotationError
from chess_notation.grammar import (
    Choice,
    Literal,
    Optional,
    Pattern,
    Repeat,
    Rule,
    Sequence,
    parse,
)
from chess_notation.san import complete_move_rule
from chess_notation.types import Game

NUMBER = Rule("number", Pattern(r"[0-9]+", "digits"))
TAG_NAME = Rule("tag_name", Pattern(r"[A-Za-z0-9_]+", "tag name"), atomic=True)
TAG_VALUE = Rule(
    "tag_value",
    Sequence(Literal('"'), Pattern(r'(?:[^"\\]|\\.)*', "tag text"), Literal('"')),
    atomic=True,
)
METADATA_BLOCK = Rule(
    "metadata_block", Sequence(Literal("["), TAG_NAME, TAG_VALUE, Literal("]"))
)
MOVE_NUMBER = Rule("move_number", Sequence(NUMBER, Literal(".")), atomic=True)
CONTINUATION = Rule("continuation", Sequence(NUMBER, Literal("...")), atomic=True)
GAME_RESULT = Rule(
    "game_result",
    Choice(Literal("1/2-1/2"), Literal("1-0"), Literal("0-1")),
    atomic=True,
)


def _comment(name: str) -> Rule:
    # Not quiet: an unterminated comment reports the missing "}" at end of input.
    return Rule(
        name,
        Sequence(
            Literal("{"),
            Rule("comment_text", Pattern(r"[^}]*", "comment text")),
            Literal("}"),
        ),
        atomic=True,
        quiet=False,
    )


@lru_cache(maxsize=None)
def game_rule(accept_zero_castling: bool = False) -> Rule:
    """Return the top-level ``game`` rule."""
    move = complete_move_rule(accept_zero_castling)
    move_pair = Rule(
        "move_pair",
        Sequence(
            MOVE_NUMBER,
            Rule("white_move", move),
            Optional(_comment("white_comment")),
            # The continuation marker and the black comment only exist with a black move
            Optional(
                Sequence(
                    Optional(CONTINUATION),
                    Rule("black_move", move),
                    Optional(_comment("black_comment")),
                )
            ),
        ),
    )
    return Rule(
        "game",
        Sequence(Repeat(METADATA_BLOCK), Repeat(move_pair, 1), GAME_RESULT),
    )


def parse_game(text: str, settings: ParserSettings | None = None) -> Game:
    """Parse a game transcript into a :class:`Game`.

    Args:
        text: Tags, numbered move pairs and a result, e.g. ``"1.e4 e5 1-0"``.
        settings: Parser options. Defaults to ``ParserSettings()``.

    Returns:
        The parsed game. No partial game is ever returned.

    Raises:
        NotationSyntaxError: If the text does not follow the grammar.
        IncompleteInputError: If the text ends before the result token.
        StructuralError: If a move number is not positive.
    """
    settings = settings or ParserSettings()
    try:
        node = parse(game_rule(settings.accept_zero_castling), text)
        game = build_game(node)
    except NotationError as e:
        logger.debug(f"Rejected game notation: {e}")
        raise
    logger.debug(
        f"Parsed game: {len(game.tags)} tags, {len(game.moves)} move pairs, "
        f"result {game.result.value}"
    )
    return game
