"""SAN move tokens: grammar, move-form priority table and constructors.

Several move forms share textual prefixes (``O-O`` / ``O-O-O``, ``exd8`` /
``exd8=Q``, ``Nd7`` / ``Nbd7``), and ordered choice commits to the first
alternative that matches. ``MOVE_FORMS`` therefore lists the forms from the
most specific to the least specific, each paired with the constructor that
turns its parse node into a :data:`~chess_notation.types.Move`.

A token must end at a boundary: the character after it may not be a letter,
digit, ``=`` or ``-``. An alternative that matches only a prefix of the token
makes the whole token fail instead of silently dropping the rest.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, NamedTuple, Sequence as SequenceType

from loguru import logger

from chess_notation.config import ParserSettings
from chess_notation.grammar import (
    Choice,
    Literal,
    Lookahead,
    Node,
    Optional,
    Pattern,
    Rule,
    Sequence,
    parse,
)
from chess_notation.types import (
    Capture,
    CastleKingside,
    CastleQueenside,
    CheckSuffix,
    Move,
    NonCapture,
    PieceKind,
    Promotion,
    PromotionCapture,
    Square,
)

MoveConstructor = Callable[[Node, "CheckSuffix | None"], Move]


class MoveForm(NamedTuple):
    """One alternative of the move grammar and how to build its value."""

    rule: Rule
    build: MoveConstructor


# Token-level literals
PIECE = Rule("piece", Pattern(r"[KQRBN]", "piece letter"))
DISAMBIGUATOR = Rule("disambiguator", Pattern(r"[a-h1-8]", "file or rank"))
TARGET = Rule("target", Pattern(r"[a-h][1-8]", "square"))
FROM_FILE = Rule("from_file", Pattern(r"[a-h]", "file"))
TO_FILE = Rule("to_file", Pattern(r"[a-h]", "file"))
TO_RANK = Rule("to_rank", Pattern(r"[18]", "promotion rank"))
PROMOTED = Rule("promoted", Pattern(r"[QRBN]", "promotion piece"))
CAPTURE_MARK = Literal("x")
CHECK = Rule("check", Pattern(r"[+#]", "check marker"))
TOKEN_BOUNDARY = Lookahead(
    Pattern(r"[A-Za-z0-9=\-]", "move character"), negate=True, label="end of move"
)

_SUFFIXES: dict[str, CheckSuffix] = {"+": "check", "#": "checkmate"}


def _castle(name: str, literal: str, accept_zero: bool) -> Rule:
    if accept_zero:
        body: Choice | Literal = Choice(Literal(literal), Literal(literal.replace("O", "0")))
    else:
        body = Literal(literal)
    return Rule(name, body, atomic=True)


def _form(name: str, *items) -> Rule:
    return Rule(name, Sequence(*items), atomic=True)


def _piece(node: Node) -> PieceKind:
    piece = node.child("piece")
    return PieceKind(piece.text) if piece is not None else PieceKind.PAWN


def _disambiguator(node: Node) -> str | None:
    found = node.child("disambiguator")
    return found.text if found is not None else None


def _target(node: Node) -> Square:
    return Square.parse(node.child("target").text)


def _build_castle_queenside(node: Node, suffix: CheckSuffix | None) -> Move:
    return CastleQueenside(suffix=suffix)


def _build_castle_kingside(node: Node, suffix: CheckSuffix | None) -> Move:
    return CastleKingside(suffix=suffix)


def _build_promotion_capture(node: Node, suffix: CheckSuffix | None) -> Move:
    return PromotionCapture(
        from_file=node.child("from_file").text,
        to_file=node.child("to_file").text,
        to_rank=node.child("to_rank").text,
        promoted=PieceKind(node.child("promoted").text),
        suffix=suffix,
    )


def _build_promotion(node: Node, suffix: CheckSuffix | None) -> Move:
    return Promotion(
        from_file=node.child("from_file").text,
        to_rank=node.child("to_rank").text,
        promoted=PieceKind(node.child("promoted").text),
        suffix=suffix,
    )


def _build_capture(node: Node, suffix: CheckSuffix | None) -> Move:
    return Capture(
        piece=_piece(node),
        disambiguator=_disambiguator(node),
        target=_target(node),
        suffix=suffix,
    )


def _build_non_capture(node: Node, suffix: CheckSuffix | None) -> Move:
    return NonCapture(
        piece=_piece(node),
        disambiguator=_disambiguator(node),
        target=_target(node),
        suffix=suffix,
    )


@lru_cache(maxsize=None)
def move_forms(accept_zero_castling: bool = False) -> tuple[MoveForm, ...]:
    """Return the move alternatives in the order they must be tried."""
    return (
        # The queenside literal extends the kingside one.
        MoveForm(
            _castle("castle_queenside", "O-O-O", accept_zero_castling),
            _build_castle_queenside,
        ),
        MoveForm(
            _castle("castle_kingside", "O-O", accept_zero_castling),
            _build_castle_kingside,
        ),
        MoveForm(
            _form(
                "promotion_capture",
                FROM_FILE, CAPTURE_MARK, TO_FILE, TO_RANK, Literal("="), PROMOTED,
            ),
            _build_promotion_capture,
        ),
        MoveForm(
            _form("promotion", FROM_FILE, TO_RANK, Literal("="), PROMOTED),
            _build_promotion,
        ),
        MoveForm(
            _form("disambiguated_capture", Optional(PIECE), DISAMBIGUATOR, CAPTURE_MARK, TARGET),
            _build_capture,
        ),
        MoveForm(
            _form("capture", Optional(PIECE), CAPTURE_MARK, TARGET),
            _build_capture,
        ),
        MoveForm(
            _form("disambiguated_move", Optional(PIECE), DISAMBIGUATOR, TARGET),
            _build_non_capture,
        ),
        MoveForm(
            _form("piece_move", Optional(PIECE), TARGET),
            _build_non_capture,
        ),
    )


MOVE_FORMS = move_forms()

_CONSTRUCTORS: dict[str, MoveConstructor] = {
    form.rule.name: form.build for form in MOVE_FORMS
}


def build_complete_move_rule(forms: SequenceType[MoveForm]) -> Rule:
    """Assemble the ``complete_move`` rule trying ``forms`` in the given order."""
    return Rule(
        "complete_move",
        Sequence(
            Choice(*(form.rule for form in forms)),
            Optional(CHECK),
            TOKEN_BOUNDARY,
        ),
        atomic=True,
        quiet=False,
    )


@lru_cache(maxsize=None)
def complete_move_rule(accept_zero_castling: bool = False) -> Rule:
    return build_complete_move_rule(move_forms(accept_zero_castling))


def build_move(node: Node) -> Move:
    """Turn a ``complete_move`` node into its move variant."""
    form = node.children[0]
    check = node.child("check")
    suffix = _SUFFIXES[check.text] if check is not None else None
    return _CONSTRUCTORS[form.rule](form, suffix)


def parse_move(text: str, settings: ParserSettings | None = None) -> Move:
    """Parse a single SAN move token such as ``Nbd7``, ``exd8=Q+`` or ``O-O-O``.

    Args:
        text: The move token. Surrounding whitespace is ignored.
        settings: Parser options. Defaults to ``ParserSettings()``.

    Returns:
        Exactly one move variant.

    Raises:
        NotationSyntaxError: If no move form matches the whole token.
        IncompleteInputError: If the token is empty or cut short.
    """
    settings = settings or ParserSettings()
    node = parse(complete_move_rule(settings.accept_zero_castling), text)
    move = build_move(node)
    logger.debug(f"Parsed move {node.text!r} as {move.kind}")
    return move
