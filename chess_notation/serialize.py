"""Render parsed values back to notation text.

Parsing the output of these functions gives back an equal value.
"""

from __future__ import annotations

from chess_notation.types import (
    BoardState,
    Capture,
    CastleKingside,
    CastleQueenside,
    EmptyRun,
    Game,
    Move,
    MovePair,
    NonCapture,
    PieceKind,
    Promotion,
    PromotionCapture,
    Rank,
)

_SUFFIX_TEXT = {"check": "+", "checkmate": "#", None: ""}


def _piece_letter(piece: PieceKind) -> str:
    return "" if piece == PieceKind.PAWN else piece.value


def format_move(move: Move) -> str:
    """Render a move as a SAN token."""
    if isinstance(move, CastleQueenside):
        san = "O-O-O"
    elif isinstance(move, CastleKingside):
        san = "O-O"
    elif isinstance(move, PromotionCapture):
        san = f"{move.from_file}x{move.to_file}{move.to_rank}={move.promoted.value}"
    elif isinstance(move, Promotion):
        san = f"{move.from_file}{move.to_rank}={move.promoted.value}"
    elif isinstance(move, (Capture, NonCapture)):
        san = _piece_letter(move.piece) + (move.disambiguator or "")
        if isinstance(move, Capture):
            san += "x"
        san += str(move.target)
    else:
        raise TypeError(f"Not a move: {move!r}")
    return san + _SUFFIX_TEXT[move.suffix]


def _escape_comment(text: str) -> str:
    # A comment cannot contain its closing brace.
    return text.replace("}", "]")


def format_move_pair(pair: MovePair) -> str:
    parts = [f"{pair.number}.", format_move(pair.white)]
    if pair.white_comment is not None:
        parts.append(f"{{{_escape_comment(pair.white_comment.text)}}}")
        if pair.black is not None:
            parts.append(f"{pair.number}...")
    if pair.black is not None:
        parts.append(format_move(pair.black))
    if pair.black_comment is not None:
        parts.append(f"{{{_escape_comment(pair.black_comment.text)}}}")
    return " ".join(parts)


def format_game(game: Game) -> str:
    """Render a game: one tag per line, a blank line, then the movetext."""
    lines: list[str] = []
    for tag in game.tags:
        escaped = tag.value.replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'[{tag.name} "{escaped}"]')
    if lines:
        lines.append("")
    movetext = [format_move_pair(pair) for pair in game.moves]
    movetext.append(game.result.value)
    lines.append(" ".join(movetext))
    return "\n".join(lines) + "\n"


def format_rank(rank: Rank) -> str:
    return "".join(
        str(entry.count) if isinstance(entry, EmptyRun) else entry.symbol
        for entry in rank.entries
    )


def format_board(board: BoardState) -> str:
    """Render a board state as a single board-notation line."""
    placement = "/".join(format_rank(rank) for rank in board.ranks)
    side = "w" if board.active_color == "white" else "b"

    castling = ""
    if board.castling.white_kingside:
        castling += "K"
    if board.castling.white_queenside:
        castling += "Q"
    if board.castling.black_kingside:
        castling += "k"
    if board.castling.black_queenside:
        castling += "q"

    en_passant = str(board.en_passant) if board.en_passant is not None else "-"
    return (
        f"{placement} {side} {castling or '-'} {en_passant} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )
