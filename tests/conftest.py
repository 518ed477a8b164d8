"""Shared test fixtures and utilities for the test suite."""

from pathlib import Path

import pytest

from chess_notation.types import BoardState

PGN_GAMES_DIR = Path(__file__).parent.parent / "demo" / "games"


@pytest.fixture
def pgn_games_dir() -> Path:
    """Directory holding the sample game transcripts."""
    return PGN_GAMES_DIR


@pytest.fixture
def opera_game_text(pgn_games_dir) -> str:
    """Morphy's Opera game: comments, disambiguation, queenside castling, mate."""
    return (pgn_games_dir / "morphy_isouard_1858.pgn").read_text(encoding="utf-8")


@pytest.fixture
def byrne_fischer_text(pgn_games_dir) -> str:
    """The Game of the Century: long game, no comments, black wins."""
    return (pgn_games_dir / "byrne_fischer_1956.pgn").read_text(encoding="utf-8")


# Common Board Positions
@pytest.fixture
def common_positions():
    """Dictionary of commonly used board-notation lines for testing."""
    return {
        "starting": "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
        "empty": "8/8/8/8/8/8/8/8 w - - 0 1",
        "after_e4": "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
        "fools_mate": "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3",
        "partial_castling": "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R b Kq - 12 40",
        "kings_facing": "8/8/8/3k4/3K4/8/8/8 w - - 0 1",
    }


@pytest.fixture
def assert_full_width():
    """Assert every rank of a parsed board expands to exactly 8 squares."""

    def _check(board: BoardState) -> None:
        assert len(board.ranks) == 8
        for rank in board.ranks:
            assert rank.width == 8
            assert len(rank.squares()) == 8

    return _check
