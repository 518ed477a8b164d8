"""Turn parse trees from the PGN and FEN grammars into typed values.

The grammars only describe shape. Invariants that shape cannot express are
checked here and reported as :class:`StructuralError`:

- every rank of a board covers exactly 8 squares, and there are 8 ranks
- move numbers and the full-move counter are positive
- a castling letter appears at most once (relevant when any order is accepted)
- the result token is one of the three result literals

Building is pure: no I/O, no shared state, the same tree gives an equal value.
"""

from __future__ import annotations

import re

from pydantic import ValidationError

from chess_notation.config import ParserSettings
from chess_notation.exceptions import StructuralError
from chess_notation.grammar import Node
from chess_notation.san import build_move
from chess_notation.types import (
    BoardSquareContent,
    BoardState,
    CastlingRights,
    Comment,
    EmptyRun,
    Game,
    GameResult,
    MovePair,
    PiecePlacement,
    Rank,
    Square,
    Tag,
)

BOARD_WIDTH = 8
BOARD_HEIGHT = 8

_ESCAPE_RE = re.compile(r'\\(["\\])')

_CASTLING_FLAGS = (
    "white_kingside",
    "white_queenside",
    "black_kingside",
    "black_queenside",
)


def _positive_int(node: Node, rule: str) -> int:
    value = int(node.text)
    if value < 1:
        raise StructuralError(rule, f"{node.text!r} is not a positive number")
    return value


# ── Game ────────────────────────────────────────────────────────────────────


def build_tag(node: Node) -> Tag:
    """Build a tag from a ``metadata_block`` node, unescaping ``\\"`` and ``\\\\``."""
    quoted = node.child("tag_value").text
    value = _ESCAPE_RE.sub(r"\1", quoted[1:-1])
    return Tag(name=node.child("tag_name").text, value=value)


def build_move_pair(node: Node) -> MovePair:
    """Build a move pair from a ``move_pair`` node."""
    number = _positive_int(node.child("move_number").child("number"), "move_number")
    white = node.child("white_move")
    black = node.child("black_move")
    white_comment = node.child("white_comment")
    black_comment = node.child("black_comment")
    try:
        return MovePair(
            number=number,
            white=build_move(white.children[0]),
            white_comment=_build_comment(white_comment),
            black=build_move(black.children[0]) if black is not None else None,
            black_comment=_build_comment(black_comment),
        )
    except ValidationError as e:
        raise StructuralError("move_pair", str(e)) from e


def _build_comment(node: Node | None) -> Comment | None:
    if node is None:
        return None
    return Comment(text=node.child("comment_text").text)


def build_result(node: Node) -> GameResult:
    try:
        return GameResult(node.text)
    except ValueError as e:
        raise StructuralError(
            "game_result", f"{node.text!r} is not one of 1-0, 0-1, 1/2-1/2"
        ) from e


def build_game(node: Node) -> Game:
    """Build a :class:`Game` from a ``game`` node."""
    tags: list[Tag] = []
    pairs: list[MovePair] = []
    result: GameResult | None = None

    for child in node.children:
        if child.rule == "metadata_block":
            tags.append(build_tag(child))
        elif child.rule == "move_pair":
            pairs.append(build_move_pair(child))
        elif child.rule == "game_result":
            result = build_result(child)
        else:
            raise StructuralError("game", f"unexpected element {child.rule!r}")

    if not pairs:
        raise StructuralError("game", "at least one move pair is required")
    if result is None:
        raise StructuralError("game", "missing game result")

    try:
        return Game(tags=tuple(tags), moves=tuple(pairs), result=result)
    except ValidationError as e:
        raise StructuralError("game", str(e)) from e


# ── Board ───────────────────────────────────────────────────────────────────


def build_rank(node: Node, rank_number: int) -> Rank:
    """Build a rank and check that its entries cover exactly 8 squares."""
    entries: list[BoardSquareContent] = []
    try:
        for child in node.children:
            if child.rule == "piece":
                entries.append(PiecePlacement(symbol=child.text))
            else:
                entries.append(EmptyRun(count=int(child.text)))
        rank = Rank(entries=tuple(entries))
    except ValidationError as e:
        raise StructuralError("rank", str(e)) from e
    if rank.width != BOARD_WIDTH:
        raise StructuralError(
            "rank",
            f"rank {rank_number} ({node.text!r}) covers {rank.width} squares, "
            f"expected {BOARD_WIDTH}",
        )
    return rank


def build_castling(node: Node) -> CastlingRights:
    flags: dict[str, bool] = {}
    for child in node.children:
        if child.rule not in _CASTLING_FLAGS:
            continue
        if child.rule in flags:
            raise StructuralError("castling", f"{child.text!r} appears more than once")
        flags[child.rule] = True
    return CastlingRights(**flags)


def build_board(node: Node, settings: ParserSettings | None = None) -> BoardState:
    """Build a :class:`BoardState` from a ``board`` node."""
    settings = settings or ParserSettings()

    rank_nodes = node.child("placement").children_named("rank")
    if len(rank_nodes) != BOARD_HEIGHT:
        raise StructuralError(
            "placement", f"found {len(rank_nodes)} ranks, expected {BOARD_HEIGHT}"
        )
    ranks = tuple(
        build_rank(rank_node, BOARD_HEIGHT - index)
        for index, rank_node in enumerate(rank_nodes)
    )

    en_passant_square = node.child("en_passant").child("square")
    fullmove_number = int(node.child("fullmove_number").text)
    if fullmove_number == 0 and not settings.allow_zero_fullmove:
        raise StructuralError("fullmove_number", "full-move counter starts at 1")

    try:
        return BoardState(
            ranks=ranks,
            active_color="white" if node.child("active_color").text == "w" else "black",
            castling=build_castling(node.child("castling")),
            en_passant=(
                Square.parse(en_passant_square.text)
                if en_passant_square is not None
                else None
            ),
            halfmove_clock=int(node.child("halfmove_clock").text),
            fullmove_number=fullmove_number,
        )
    except ValidationError as e:
        raise StructuralError("board", str(e)) from e
