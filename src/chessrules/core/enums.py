"""Core enumerations and flags for the chess rules domain."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color. Light moves first."""

    LIGHT = 0
    DARK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def symbol(self) -> str:
        """Single-letter code used by the text binding ('L' / 'D')."""
        return self.name[0]

    @classmethod
    def from_symbol(cls, symbol: str) -> Color:
        for color in cls:
            if color.symbol == symbol.upper():
                return color
        raise ValueError(f"Invalid color symbol: {symbol!r}")

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Direction(Enum):
    """Compass direction as a ``(file_delta, rank_delta)`` step.

    North points from rank 1 towards rank 8.
    """

    NORTH = (0, 1)
    SOUTH = (0, -1)
    EAST = (1, 0)
    WEST = (-1, 0)
    NORTH_EAST = (1, 1)
    NORTH_WEST = (-1, 1)
    SOUTH_EAST = (1, -1)
    SOUTH_WEST = (-1, -1)

    @property
    def file_delta(self) -> int:
        return self.value[0]

    @property
    def rank_delta(self) -> int:
        return self.value[1]


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    LIGHT_KINGSIDE = auto()
    LIGHT_QUEENSIDE = auto()
    DARK_KINGSIDE = auto()
    DARK_QUEENSIDE = auto()

    LIGHT_BOTH = LIGHT_KINGSIDE | LIGHT_QUEENSIDE
    DARK_BOTH = DARK_KINGSIDE | DARK_QUEENSIDE
    ALL = LIGHT_BOTH | DARK_BOTH

    @classmethod
    def for_side(cls, color: Color, kingside: bool) -> CastlingRights:
        if color == Color.LIGHT:
            return cls.LIGHT_KINGSIDE if kingside else cls.LIGHT_QUEENSIDE
        return cls.DARK_KINGSIDE if kingside else cls.DARK_QUEENSIDE

    @classmethod
    def for_color(cls, color: Color) -> CastlingRights:
        return cls.LIGHT_BOTH if color == Color.LIGHT else cls.DARK_BOTH


class OutcomeKind(IntEnum):
    """Status of a game after the last completed half-move."""

    IN_PROGRESS = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3


class MoveResult(IntEnum):
    """Value returned for every attempted move or promotion choice."""

    APPLIED = auto()
    REJECTED = auto()
    AWAITING_PROMOTION = auto()


class RejectReason(IntEnum):
    """Why a move or promotion choice was rejected."""

    GAME_OVER = auto()
    PROMOTION_PENDING = auto()
    WRONG_COLOR = auto()
    PIECE_CAPTURED = auto()
    NOT_LEGAL = auto()
    NO_PROMOTION_PENDING = auto()
    INVALID_PROMOTION_CHOICE = auto()
    UNKNOWN_PIECE = auto()
    UNKNOWN_SQUARE = auto()
