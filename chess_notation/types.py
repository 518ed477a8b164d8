from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Self

Color = Literal["white", "black"]
File = Literal["a", "b", "c", "d", "e", "f", "g", "h"]
RankDigit = Literal["1", "2", "3", "4", "5", "6", "7", "8"]
PromotionRank = Literal["1", "8"]
CheckSuffix = Literal["check", "checkmate"]
PieceSymbol = Literal["K", "Q", "R", "B", "N", "P", "k", "q", "r", "b", "n", "p"]

FILES = "abcdefgh"
RANKS = "12345678"


class PieceKind(str, Enum):
    """Piece letters used in move tokens. Pawns have no letter in SAN."""

    KING = "K"
    QUEEN = "Q"
    ROOK = "R"
    BISHOP = "B"
    KNIGHT = "N"
    PAWN = "P"


PROMOTION_PIECES = frozenset(
    {PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT}
)


class GameResult(str, Enum):
    WHITE_WIN = "1-0"
    BLACK_WIN = "0-1"
    DRAW = "1/2-1/2"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Square(_Frozen):
    """A board square such as ``e4``. Equal and hashable by (file, rank)."""

    file: File
    rank: RankDigit

    @classmethod
    def parse(cls, name: str) -> "Square":
        """Build a square from its two-character name.

        Raises:
            ValueError: If ``name`` is not a file letter followed by a rank digit.
        """
        if len(name) != 2:
            raise ValueError(f"Square name must have two characters: {name!r}")
        return cls(file=name[0], rank=name[1])

    def __str__(self) -> str:
        return f"{self.file}{self.rank}"


class _BaseMove(_Frozen):
    suffix: CheckSuffix | None = None

    @property
    def is_check(self) -> bool:
        return self.suffix == "check"

    @property
    def is_checkmate(self) -> bool:
        return self.suffix == "checkmate"


class NonCapture(_BaseMove):
    kind: Literal["move"] = "move"
    piece: PieceKind = PieceKind.PAWN
    disambiguator: File | RankDigit | None = None
    target: Square


class Capture(_BaseMove):
    kind: Literal["capture"] = "capture"
    piece: PieceKind = PieceKind.PAWN
    disambiguator: File | RankDigit | None = None
    target: Square


class _PromotingMove(_BaseMove):
    from_file: File
    to_rank: PromotionRank
    promoted: PieceKind

    @field_validator("promoted", mode="after")
    def validate_promotion_piece(cls, v: PieceKind) -> PieceKind:
        """Pawns promote to a queen, rook, bishop or knight only."""
        if v not in PROMOTION_PIECES:
            raise ValueError(f"Cannot promote to {v.name.lower()}")
        return v


class Promotion(_PromotingMove):
    kind: Literal["promotion"] = "promotion"

    @property
    def target(self) -> Square:
        return Square(file=self.from_file, rank=self.to_rank)


class PromotionCapture(_PromotingMove):
    kind: Literal["promotion_capture"] = "promotion_capture"
    to_file: File

    @property
    def target(self) -> Square:
        return Square(file=self.to_file, rank=self.to_rank)


class CastleKingside(_BaseMove):
    kind: Literal["castle_kingside"] = "castle_kingside"


class CastleQueenside(_BaseMove):
    kind: Literal["castle_queenside"] = "castle_queenside"


Move = Annotated[
    Union[NonCapture, Capture, Promotion, PromotionCapture, CastleKingside, CastleQueenside],
    Field(discriminator="kind"),
]


class Comment(_Frozen):
    """Free text found between braces. Kept verbatim, never interpreted."""

    text: str

    def __str__(self) -> str:
        return self.text


class MovePair(_Frozen):
    number: int = Field(ge=1)
    white: Move
    white_comment: Comment | None = None
    black: Optional[Move] = None
    black_comment: Comment | None = None

    @model_validator(mode="after")
    def validate_black_comment(self) -> Self:
        """A comment in the post-black slot needs the black move it follows.

        Raises:
            ValueError: If `black_comment` is set while `black` is None.
        """
        if self.black is None and self.black_comment is not None:
            raise ValueError("`black_comment` requires a black move")
        return self


class Tag(_Frozen):
    name: str
    value: str


class Game(_Frozen):
    """A parsed game transcript: tags, numbered move pairs and the result."""

    tags: tuple[Tag, ...] = ()
    moves: tuple[MovePair, ...] = Field(min_length=1)
    result: GameResult

    def tag(self, name: str) -> str | None:
        """Return the value of the first tag called ``name``, if any."""
        for tag in self.tags:
            if tag.name == name:
                return tag.value
        return None

    @property
    def plies(self) -> int:
        return sum(1 if pair.black is None else 2 for pair in self.moves)


class PiecePlacement(_Frozen):
    symbol: PieceSymbol

    @property
    def color(self) -> Color:
        return "white" if self.symbol.isupper() else "black"

    @property
    def kind(self) -> PieceKind:
        return PieceKind(self.symbol.upper())

    @property
    def width(self) -> int:
        return 1


class EmptyRun(_Frozen):
    count: int = Field(ge=1, le=8)

    @property
    def width(self) -> int:
        return self.count


BoardSquareContent = Union[PiecePlacement, EmptyRun]


class Rank(_Frozen):
    entries: tuple[BoardSquareContent, ...] = Field(min_length=1, max_length=8)

    @property
    def width(self) -> int:
        """Number of board squares the entries cover."""
        return sum(entry.width for entry in self.entries)

    def squares(self) -> tuple[PieceSymbol | None, ...]:
        """Expand the rank to one cell per square, ``None`` for empty squares."""
        cells: list[PieceSymbol | None] = []
        for entry in self.entries:
            if isinstance(entry, EmptyRun):
                cells.extend([None] * entry.count)
            else:
                cells.append(entry.symbol)
        return tuple(cells)


class CastlingRights(_Frozen):
    white_kingside: bool = False
    white_queenside: bool = False
    black_kingside: bool = False
    black_queenside: bool = False

    def any(self) -> bool:
        return (
            self.white_kingside
            or self.white_queenside
            or self.black_kingside
            or self.black_queenside
        )


class BoardState(_Frozen):
    """A single position. ``ranks[0]`` is rank 8, ``ranks[7]`` is rank 1."""

    ranks: tuple[Rank, ...] = Field(min_length=8, max_length=8)
    active_color: Color
    castling: CastlingRights = Field(default_factory=CastlingRights)
    en_passant: Square | None = None
    halfmove_clock: int = Field(default=0, ge=0)
    fullmove_number: int = Field(default=1, ge=0)

    def piece_at(self, square: Square | str) -> PieceSymbol | None:
        """Return the piece symbol standing on ``square``, or ``None``."""
        if isinstance(square, str):
            square = Square.parse(square)
        rank = self.ranks[8 - int(square.rank)]
        return rank.squares()[FILES.index(square.file)]
