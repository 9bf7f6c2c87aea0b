"""Piece model: static per-kind movement descriptors and the mutable piece record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, Direction, PieceKind
from chessrules.core.types import MAX_RANK, MIN_RANK

if TYPE_CHECKING:
    from chessrules.core.board import Square

# Range limit that never stops a scan before the board edge does.
NO_LIMIT = 64

CARDINAL: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
)
DIAGONAL: tuple[Direction, ...] = (
    Direction.NORTH_EAST,
    Direction.NORTH_WEST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
)
ALL_DIRECTIONS: tuple[Direction, ...] = CARDINAL + DIAGONAL


@dataclass(frozen=True, slots=True)
class PieceDescriptor:
    """Static movement description shared by every piece of one kind."""

    symbol: str
    value: int
    directions: tuple[Direction, ...]
    is_sliding: bool
    step_limit: int
    generates_branched_moves: bool = False

    @property
    def range_limit(self) -> int:
        return NO_LIMIT if self.is_sliding else self.step_limit


# Pawn directions are given for Light; Dark pawns mirror them (see Piece.directions).
DESCRIPTORS: dict[PieceKind, PieceDescriptor] = {
    PieceKind.PAWN: PieceDescriptor("P", 100, (Direction.NORTH,), False, 1),
    PieceKind.KNIGHT: PieceDescriptor("N", 350, CARDINAL, False, 1, True),
    PieceKind.BISHOP: PieceDescriptor("B", 350, DIAGONAL, True, NO_LIMIT),
    PieceKind.ROOK: PieceDescriptor("R", 525, CARDINAL, True, NO_LIMIT),
    PieceKind.QUEEN: PieceDescriptor("Q", 1000, ALL_DIRECTIONS, True, NO_LIMIT),
    PieceKind.KING: PieceDescriptor("K", 10000, ALL_DIRECTIONS, False, 1),
}

_KIND_BY_SYMBOL: dict[str, PieceKind] = {d.symbol: k for k, d in DESCRIPTORS.items()}

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)

_MIRRORED: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.NORTH_EAST: Direction.SOUTH_EAST,
    Direction.NORTH_WEST: Direction.SOUTH_WEST,
    Direction.SOUTH_EAST: Direction.NORTH_EAST,
    Direction.SOUTH_WEST: Direction.NORTH_WEST,
    Direction.EAST: Direction.EAST,
    Direction.WEST: Direction.WEST,
}


def kind_from_symbol(symbol: str) -> PieceKind:
    """Piece kind for a symbol, e.g. 'N' → KNIGHT (case-insensitive)."""
    try:
        return _KIND_BY_SYMBOL[symbol.upper()]
    except KeyError:
        raise ValueError(f"Invalid piece symbol: {symbol!r}") from None


@dataclass(eq=False, slots=True)
class Piece:
    """A piece on (or captured from) the board.

    Pieces compare by identity. A captured piece keeps its last location and
    move count; it simply stops taking part in scans.
    """

    id: int
    kind: PieceKind
    color: Color
    location: Square
    move_count: int = 0
    captured: bool = False

    # ── Descriptor access ────────────────────────────────────────────────

    @property
    def descriptor(self) -> PieceDescriptor:
        return DESCRIPTORS[self.kind]

    @property
    def symbol(self) -> str:
        """Display symbol: uppercase for Light, lowercase for Dark."""
        sym = self.descriptor.symbol
        return sym if self.color == Color.LIGHT else sym.lower()

    @property
    def value(self) -> int:
        return self.descriptor.value

    @property
    def directions(self) -> tuple[Direction, ...]:
        dirs = self.descriptor.directions
        if self.kind == PieceKind.PAWN and self.color == Color.DARK:
            return tuple(_MIRRORED[d] for d in dirs)
        return dirs

    @property
    def forward(self) -> int:
        """Rank delta of one step towards the opponent's home rank."""
        return 1 if self.color == Color.LIGHT else -1

    @property
    def far_rank(self) -> int:
        """Rank on which a pawn of this color promotes."""
        return MAX_RANK if self.color == Color.LIGHT else MIN_RANK

    # ── Relations ────────────────────────────────────────────────────────

    def is_opponent(self, other: Piece) -> bool:
        return other.color != self.color

    @property
    def has_moved(self) -> bool:
        return self.move_count > 0

    def __str__(self) -> str:
        return f"{self.color}_{self.kind.name.lower()}"

    def __repr__(self) -> str:
        state = " captured" if self.captured else ""
        return f"<Piece #{self.id} {self} @{self.location.name}{state}>"
