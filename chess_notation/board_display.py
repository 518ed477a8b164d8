"""Terminal rendering of parsed boards and games.

This module renders :class:`BoardState` values with Unicode chess pieces and
colored backgrounds, and prints a summary table of a parsed :class:`Game`.
"""

import re
from typing import Dict, Optional

from chess_notation.serialize import format_move
from chess_notation.types import FILES, BoardState, Game, PieceSymbol, Square

# Unicode chess pieces (filled/solid)
PIECE_SYMBOLS: Dict[str, str] = {
    "K": "♔",  # White King
    "Q": "♕",  # White Queen
    "R": "♖",  # White Rook
    "B": "♗",  # White Bishop
    "N": "♘",  # White Knight
    "P": "♙",  # White Pawn
    "k": "♚",  # Black King
    "q": "♛",  # Black Queen
    "r": "♜",  # Black Rook
    "b": "♝",  # Black Bishop
    "n": "♞",  # Black Knight
    "p": "♟",  # Black Pawn
}

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""

    # Text colors
    WHITE = "\033[97m"
    BLACK = "\033[30m"
    CYAN = "\033[96m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"

    # Background colors
    BG_LIGHT_BROWN = "\033[48;5;223m"  # Light squares
    BG_DARK_BROWN = "\033[48;5;94m"  # Dark squares
    BG_GREEN = "\033[102m"

    # Reset
    RESET = "\033[0m"
    BOLD = "\033[1m"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes, e.g. to measure or compare rendered output."""
    return _ANSI_RE.sub("", text)


def get_piece_display(symbol: Optional[PieceSymbol]) -> str:
    """Get the Unicode glyph for a piece symbol, or a space for an empty square."""
    if symbol is None:
        return " "
    return PIECE_SYMBOLS.get(symbol, symbol)


def get_square_color(file_index: int, rank_index: int) -> str:
    """Get background color for a square given 0-based file and rank indices."""
    is_light_square = (file_index + rank_index) % 2 == 1
    return Colors.BG_LIGHT_BROWN if is_light_square else Colors.BG_DARK_BROWN


def get_piece_color(symbol: Optional[PieceSymbol]) -> str:
    if symbol is None:
        return Colors.WHITE
    return Colors.WHITE if symbol.isupper() else Colors.BLACK


def render_board(
    board: BoardState,
    highlight_squares: Optional[list[Square]] = None,
    flip: bool = False,
) -> str:
    """Render a board as a block of colored terminal text.

    Args:
        board: Parsed board state.
        highlight_squares: Squares to draw with a highlighted background.
        flip: Whether to render from black's perspective.

    Returns:
        The rendered board, one line per rank plus file labels and a status line.
    """
    highlighted = {str(square) for square in highlight_squares or []}
    files = FILES[::-1] if flip else FILES

    file_header = f"{'':>6}"
    for file_char in files:
        file_header += f"{Colors.BOLD}{Colors.YELLOW}{file_char:>3}{Colors.RESET}"

    lines = [file_header]
    rank_indices = range(8) if flip else range(7, -1, -1)
    for rank_index in rank_indices:
        cells = board.ranks[7 - rank_index].squares()
        rank_label = f"{Colors.BOLD}{Colors.YELLOW}{rank_index + 1:>4} {Colors.RESET}"

        row = ""
        for file_char in files:
            file_index = FILES.index(file_char)
            symbol = cells[file_index]
            bg_color = get_square_color(file_index, rank_index)
            if f"{file_char}{rank_index + 1}" in highlighted:
                bg_color = Colors.BG_GREEN
            row += (
                f"{bg_color}{get_piece_color(symbol)} "
                f"{get_piece_display(symbol)} {Colors.RESET}"
            )

        lines.append(
            f"{rank_label}{row} {Colors.BOLD}{Colors.YELLOW}{rank_index + 1}{Colors.RESET}"
        )
    lines.append(file_header)
    lines.append(_status_line(board))
    return "\n".join(lines)


def _status_line(board: BoardState) -> str:
    rights = board.castling
    castling = "".join(
        letter
        for letter, allowed in (
            ("K", rights.white_kingside),
            ("Q", rights.white_queenside),
            ("k", rights.black_kingside),
            ("q", rights.black_queenside),
        )
        if allowed
    ) or "-"
    en_passant = str(board.en_passant) if board.en_passant is not None else "-"
    return (
        f"{Colors.BOLD}{Colors.GREEN}{board.active_color.capitalize()} to move{Colors.RESET}"
        f"  {Colors.CYAN}castling {castling}  en passant {en_passant}  "
        f"halfmove {board.halfmove_clock}  move {board.fullmove_number}{Colors.RESET}"
    )


def display_board(
    board: BoardState,
    highlight_squares: Optional[list[Square]] = None,
    flip: bool = False,
) -> None:
    """Print a board to the terminal."""
    print()
    print(render_board(board, highlight_squares=highlight_squares, flip=flip))
    print()


def render_game_summary(game: Game) -> str:
    """Render the tag table, numbered moves with comments, and the result."""
    width = max([len(tag.name) for tag in game.tags] + [10])
    lines = [f"{Colors.BOLD}{Colors.CYAN}Game metadata{Colors.RESET}"]
    for tag in game.tags:
        lines.append(f"| {tag.name:<{width}} | {tag.value}")

    lines.append(f"{Colors.BOLD}{Colors.CYAN}Moves{Colors.RESET}")
    for pair in game.moves:
        line = f"{pair.number:>3}. {format_move(pair.white):<8}"
        if pair.white_comment is not None:
            line += f" {{{pair.white_comment.text}}}"
        if pair.black is not None:
            line += f" {format_move(pair.black):<8}"
        if pair.black_comment is not None:
            line += f" {{{pair.black_comment.text}}}"
        lines.append(line.rstrip())

    lines.append(f"{Colors.BOLD}Result: {game.result.value}{Colors.RESET}")
    return "\n".join(lines)


def display_game_summary(game: Game) -> None:
    """Print a game summary to the terminal."""
    print(render_game_summary(game))
