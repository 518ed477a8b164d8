"""Tests for SAN move tokens: each move form, suffixes, ordering and token boundaries."""

from unittest.mock import patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from chess_notation.config import ParserSettings
from chess_notation.exceptions import (
    IncompleteInputError,
    NotationError,
    NotationSyntaxError,
)
from chess_notation.grammar import parse
from chess_notation.san import (
    MOVE_FORMS,
    build_complete_move_rule,
    build_move,
    move_forms,
    parse_move,
)
from chess_notation.serialize import format_move
from chess_notation.types import (
    FILES,
    RANKS,
    Capture,
    CastleKingside,
    CastleQueenside,
    NonCapture,
    PieceKind,
    Promotion,
    PromotionCapture,
    Square,
)


class TestMoveForms:
    """One example per move form."""

    def test_parse_move__given_pawn_push__then_non_capture_pawn(self):
        move = parse_move("e4")

        assert move == NonCapture(piece=PieceKind.PAWN, target=Square.parse("e4"))

    def test_parse_move__given_piece_move__then_piece_recorded(self):
        move = parse_move("Nf3")

        assert isinstance(move, NonCapture)
        assert move.piece == PieceKind.KNIGHT
        assert move.disambiguator is None
        assert str(move.target) == "f3"

    def test_parse_move__given_file_disambiguator__then_disambiguated_move(self):
        move = parse_move("Nbd7")

        assert move == NonCapture(
            piece=PieceKind.KNIGHT, disambiguator="b", target=Square.parse("d7")
        )

    def test_parse_move__given_rank_disambiguator__then_disambiguated_move(self):
        move = parse_move("R1a3")

        assert move == NonCapture(
            piece=PieceKind.ROOK, disambiguator="1", target=Square.parse("a3")
        )

    def test_parse_move__given_piece_capture__then_capture(self):
        move = parse_move("Nxe5")

        assert move == Capture(piece=PieceKind.KNIGHT, target=Square.parse("e5"))

    def test_parse_move__given_pawn_capture__then_file_kept_as_disambiguator(self):
        move = parse_move("exd5")

        assert move == Capture(
            piece=PieceKind.PAWN, disambiguator="e", target=Square.parse("d5")
        )

    def test_parse_move__given_disambiguated_capture__then_capture(self):
        move = parse_move("Rdxd8")

        assert isinstance(move, Capture)
        assert move.piece == PieceKind.ROOK
        assert move.disambiguator == "d"

    def test_parse_move__given_promotion__then_promotion(self):
        move = parse_move("e8=Q")

        assert move == Promotion(from_file="e", to_rank="8", promoted=PieceKind.QUEEN)
        assert str(move.target) == "e8"

    def test_parse_move__given_capture_promotion__then_promotion_capture(self):
        move = parse_move("exd8=Q")

        assert move == PromotionCapture(
            from_file="e", to_file="d", to_rank="8", promoted=PieceKind.QUEEN
        )
        assert str(move.target) == "d8"

    def test_parse_move__given_black_underpromotion__then_rank_one(self):
        move = parse_move("gxh1=N")

        assert isinstance(move, PromotionCapture)
        assert move.to_rank == "1"
        assert move.promoted == PieceKind.KNIGHT

    def test_parse_move__given_kingside_castle__then_castle_kingside(self):
        assert parse_move("O-O") == CastleKingside()

    def test_parse_move__given_queenside_castle__then_castle_queenside(self):
        assert parse_move("O-O-O") == CastleQueenside()


class TestCheckSuffix:
    """Check and checkmate markers."""

    @pytest.mark.parametrize(
        "text, suffix",
        [
            ("e4", None),
            ("Bb5+", "check"),
            ("Rd8#", "checkmate"),
            ("O-O-O+", "check"),
            ("exd8=Q#", "checkmate"),
        ],
    )
    def test_parse_move__given_suffix__then_recorded(self, text, suffix):
        assert parse_move(text).suffix == suffix

    def test_is_check__given_check_suffix__then_only_check_is_true(self):
        move = parse_move("Qxf7+")

        assert move.is_check
        assert not move.is_checkmate

    def test_is_checkmate__given_mate_suffix__then_only_checkmate_is_true(self):
        move = parse_move("Qxf7#")

        assert move.is_checkmate
        assert not move.is_check


class TestRejectedTokens:
    """Tokens no move form accepts in full."""

    @pytest.mark.parametrize(
        "text",
        [
            "Qh4e1",  # two-character disambiguation
            "e7=Q",  # promotion off the last rank
            "e8=K",  # promotion to a king
            "Ke9",  # no ninth rank
            "Zf3",  # unknown piece
            "N bd7",  # whitespace inside a token
            "e4e5",  # two tokens run together
            "O-O-O-O",
            "0-0",  # digits need accept_zero_castling
        ],
    )
    def test_parse_move__given_invalid_token__then_syntax_error(self, text):
        with pytest.raises(NotationSyntaxError):
            parse_move(text)

    def test_parse_move__given_trailing_character__then_error_at_boundary(self):
        with pytest.raises(NotationSyntaxError) as exc_info:
            parse_move("Qh4e1")

        assert exc_info.value.offset == 3
        assert "end of move" in exc_info.value.expected

    def test_parse_move__given_no_form_matches__then_all_forms_listed(self):
        with pytest.raises(NotationSyntaxError) as exc_info:
            parse_move("Zz")

        assert exc_info.value.offset == 0
        attempted = set(exc_info.value.expected)
        assert {form.rule.name for form in MOVE_FORMS} <= attempted

    @pytest.mark.parametrize("text", ["", "N", "Nb", "e8=", "exd8="])
    def test_parse_move__given_cut_short__then_incomplete_input(self, text):
        with pytest.raises(IncompleteInputError) as exc_info:
            parse_move(text)

        assert exc_info.value.offset == len(text)

    def test_parse_move__given_promotion_without_piece__then_piece_expected(self):
        with pytest.raises(IncompleteInputError) as exc_info:
            parse_move("exd8=")

        assert exc_info.value.expected == ("promotion piece",)

    def test_parse_move__given_piece_and_file_only__then_capture_or_square_expected(self):
        with pytest.raises(IncompleteInputError) as exc_info:
            parse_move("Nb")

        assert exc_info.value.expected == ("'x'", "square")

    def test_parse_move__given_empty_token__then_incomplete_input(self):
        with pytest.raises(IncompleteInputError):
            parse_move("")

    def test_parse_move__given_surrounding_whitespace__then_ignored(self):
        assert parse_move("  Nf3 ") == parse_move("Nf3")


class TestFormOrdering:
    """Move forms are tried from the most specific to the least specific."""

    def test_move_forms__then_specific_forms_precede_their_prefixes(self):
        names = [form.rule.name for form in MOVE_FORMS]

        assert names == [
            "castle_queenside",
            "castle_kingside",
            "promotion_capture",
            "promotion",
            "disambiguated_capture",
            "capture",
            "disambiguated_move",
            "piece_move",
        ]

    @pytest.mark.parametrize("text", ["O-O-O", "exd8=Q", "e8=Q"])
    def test_reversed_forms__given_ambiguous_prefix__then_token_rejected(self, text):
        rule = build_complete_move_rule(tuple(reversed(MOVE_FORMS)))

        with pytest.raises(NotationSyntaxError):
            parse(rule, text)

    def test_reversed_forms__given_unambiguous_token__then_still_parses(self):
        rule = build_complete_move_rule(tuple(reversed(MOVE_FORMS)))

        assert build_move(parse(rule, "Nf3")) == parse_move("Nf3")

    def test_move_forms__given_same_flag__then_cached(self):
        assert move_forms() is move_forms(False)
        assert move_forms(True) is not move_forms(False)


class TestZeroCastling:
    """Digit zero castling is opt-in."""

    ZERO = ParserSettings(accept_zero_castling=True)

    def test_parse_move__given_zero_castling_enabled__then_castles(self):
        assert parse_move("0-0", self.ZERO) == CastleKingside()
        assert parse_move("0-0-0+", self.ZERO) == CastleQueenside(suffix="check")

    def test_parse_move__given_zero_castling_enabled__then_letter_form_still_works(self):
        assert parse_move("O-O-O", self.ZERO) == CastleQueenside()


class TestLogging:
    @patch("chess_notation.san.logger")
    def test_parse_move__given_valid_token__then_logs_debug(self, mock_logger):
        parse_move("Nbd7")

        mock_logger.debug.assert_called_once()
        assert "'Nbd7'" in mock_logger.debug.call_args[0][0]


# Hypothesis strategies for move values
squares = st.builds(
    Square, file=st.sampled_from(list(FILES)), rank=st.sampled_from(list(RANKS))
)
suffixes = st.sampled_from([None, "check", "checkmate"])
disambiguators = st.none() | st.sampled_from(list(FILES + RANKS))
promotion_pieces = st.sampled_from(
    [PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT]
)

moves = st.one_of(
    st.builds(
        NonCapture,
        piece=st.sampled_from(list(PieceKind)),
        disambiguator=disambiguators,
        target=squares,
        suffix=suffixes,
    ),
    st.builds(
        Capture,
        piece=st.sampled_from(list(PieceKind)),
        disambiguator=disambiguators,
        target=squares,
        suffix=suffixes,
    ),
    st.builds(
        Promotion,
        from_file=st.sampled_from(list(FILES)),
        to_rank=st.sampled_from(["1", "8"]),
        promoted=promotion_pieces,
        suffix=suffixes,
    ),
    st.builds(
        PromotionCapture,
        from_file=st.sampled_from(list(FILES)),
        to_file=st.sampled_from(list(FILES)),
        to_rank=st.sampled_from(["1", "8"]),
        promoted=promotion_pieces,
        suffix=suffixes,
    ),
    st.builds(CastleKingside, suffix=suffixes),
    st.builds(CastleQueenside, suffix=suffixes),
)


class TestMoveProperties:
    """Property-based checks over generated move values."""

    @given(move=moves)
    @settings(max_examples=300, deadline=None)
    def test_parse_move__given_formatted_move__then_same_variant_and_fields(self, move):
        assert parse_move(format_move(move)) == move

    @given(text=st.text(alphabet="abcdefghKQRBNPx12345678=+#O-0 ", max_size=8))
    @settings(max_examples=300, deadline=None)
    def test_parse_move__given_arbitrary_text__then_move_or_notation_error(self, text):
        try:
            move = parse_move(text)
        except NotationError:
            return
        assert format_move(move) == text.strip()
