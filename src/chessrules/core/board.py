"""Board - 64 addressable squares and copy-on-write occupancy views."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from chessrules.core.enums import Color
from chessrules.core.errors import InvalidSetup
from chessrules.core.types import (
    FILES,
    MAX_RANK,
    MIN_RANK,
    Coord,
    file_index,
    is_on_board,
    parse_square,
    square_name,
)

if TYPE_CHECKING:
    from chessrules.core.piece import Piece

BOARD_FILES = 8
BOARD_RANKS = 8


@dataclass(eq=False, slots=True)
class Square:
    """One cell of the board. Identity is its ``(file, rank)``."""

    file: str
    rank: int
    tile_color: Color
    occupant: Piece | None = field(default=None, repr=False)

    @property
    def name(self) -> str:
        return square_name(self.file, self.rank)

    @property
    def coord(self) -> Coord:
        return self.file, self.rank

    def is_occupied(self) -> bool:
        return self.occupant is not None

    def __str__(self) -> str:
        return self.name


def sort_key(square: Square) -> tuple[int, int]:
    """Order squares a1, b1, ..., h1, a2, ..., h8."""
    return square.rank, file_index(square.file)


# ── Occupancy interface ──────────────────────────────────────────────────────


class Occupancy(ABC):
    """Read-only question "who stands where" asked by the move scanner.

    Implemented by the live :class:`Board` and by hypothetical
    :class:`BoardView` snapshots, so scans never need to know which one
    they are walking.
    """

    @abstractmethod
    def square_at(self, file: str, rank: int) -> Square | None:
        """Square at ``(file, rank)`` or ``None`` when off-board."""

    @abstractmethod
    def piece_at(self, square: Square) -> Piece | None:
        """Piece standing on *square*, if any."""

    @abstractmethod
    def location_of(self, piece: Piece) -> Square:
        """Square *piece* stands on in this occupancy."""

    @abstractmethod
    def occupants(self) -> Iterator[Piece]:
        """All pieces currently on the board."""

    def is_ignored(self, piece: Piece) -> bool:
        """Whether *piece* is excluded from attack computation."""
        return False

    def is_empty(self, square: Square) -> bool:
        return self.piece_at(square) is None

    def pieces(self, color: Color) -> list[Piece]:
        """Pieces of *color* that take part in attack computation."""
        return [
            p for p in self.occupants() if p.color == color and not self.is_ignored(p)
        ]


# ── Live board ───────────────────────────────────────────────────────────────


class Board(Occupancy):
    """Mutable 8x8 board; exclusive owner of its 64 squares."""

    __slots__ = ("_squares",)

    def __init__(self, files: int = BOARD_FILES, ranks: int = BOARD_RANKS) -> None:
        if (files, ranks) != (BOARD_FILES, BOARD_RANKS):
            raise InvalidSetup(
                f"Board must be {BOARD_FILES}x{BOARD_RANKS}, got {files}x{ranks}"
            )
        self._squares: dict[Coord, Square] = {}
        for rank in range(MIN_RANK, MAX_RANK + 1):
            for file in FILES:
                # a1 is a dark square.
                tile = Color.DARK if (file_index(file) + rank) % 2 else Color.LIGHT
                self._squares[(file, rank)] = Square(file, rank, tile)

    # -- Element access -----------------------------------------------------

    def square_at(self, file: str, rank: int) -> Square | None:
        if not is_on_board(file, rank):
            return None
        return self._squares[(file, rank)]

    def square(self, name: str) -> Square:
        """Square by name, e.g. ``board.square("e4")``."""
        file, rank = parse_square(name)
        return self._squares[(file, rank)]

    def __getitem__(self, name: str) -> Piece | None:
        return self.square(name).occupant

    def __iter__(self) -> Iterator[Square]:
        return iter(self._squares.values())

    def piece_at(self, square: Square) -> Piece | None:
        return square.occupant

    def location_of(self, piece: Piece) -> Square:
        return piece.location

    def occupants(self) -> Iterator[Piece]:
        for sq in self._squares.values():
            if sq.occupant is not None:
                yield sq.occupant

    # -- Mutation -----------------------------------------------------------

    def place(self, piece: Piece, square: Square) -> None:
        """Put *piece* on an empty *square* (set-up and promotion)."""
        if square.is_occupied() and square.occupant is not piece:
            raise InvalidSetup(
                f"Square {square.name} already holds {square.occupant}"
            )
        square.occupant = piece
        piece.location = square

    def relocate(self, piece: Piece, destination: Square) -> Piece | None:
        """Move *piece* to *destination*; return the displaced occupant, if any."""
        displaced = destination.occupant
        if piece.location.occupant is piece:
            piece.location.occupant = None
        destination.occupant = piece
        piece.location = destination
        return displaced

    def remove(self, piece: Piece) -> None:
        """Lift *piece* off its square (the piece keeps its last location)."""
        if piece.location.occupant is piece:
            piece.location.occupant = None

    def snapshot(self) -> BoardView:
        """Immutable view of the current occupancy."""
        return BoardView(
            self, {sq: sq.occupant for sq in self if sq.occupant is not None}
        )

    # -- Rendering ----------------------------------------------------------

    def render(self) -> str:
        rows: list[str] = []
        for rank in range(MAX_RANK, MIN_RANK - 1, -1):
            row = []
            for file in FILES:
                p = self._squares[(file, rank)].occupant
                row.append(p.symbol if p else ".")
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  " + " ".join(FILES))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return self.render()


# ── Hypothetical views ───────────────────────────────────────────────────────


class BoardView(Occupancy):
    """Copy-on-write occupancy snapshot used to test hypothetical moves.

    A view shares the board's immutable squares but keeps its own
    square → piece mapping, so evaluating a candidate move never touches
    the live board and there is nothing to restore afterwards.
    """

    __slots__ = ("_board", "_occupants", "_locations", "_ignored")

    def __init__(
        self,
        board: Board,
        occupants: Mapping[Square, Piece],
        ignored: frozenset[Piece] = frozenset(),
    ) -> None:
        self._board = board
        self._occupants: Mapping[Square, Piece] = MappingProxyType(dict(occupants))
        self._locations: dict[Piece, Square] = {p: sq for sq, p in occupants.items()}
        self._ignored = ignored

    def square_at(self, file: str, rank: int) -> Square | None:
        return self._board.square_at(file, rank)

    def piece_at(self, square: Square) -> Piece | None:
        return self._occupants.get(square)

    def location_of(self, piece: Piece) -> Square:
        return self._locations.get(piece, piece.location)

    def occupants(self) -> Iterator[Piece]:
        return iter(self._occupants.values())

    def is_ignored(self, piece: Piece) -> bool:
        return piece in self._ignored

    def with_move(
        self,
        piece: Piece,
        destination: Square,
        captured: Piece | None = None,
    ) -> BoardView:
        """New view with *piece* on *destination* and *captured* lifted off."""
        occupants = dict(self._occupants)
        origin = self.location_of(piece)
        if occupants.get(origin) is piece:
            del occupants[origin]
        ignored = self._ignored
        if captured is not None:
            captured_sq = self.location_of(captured)
            if occupants.get(captured_sq) is captured:
                del occupants[captured_sq]
            ignored = ignored | {captured}
        occupants[destination] = piece
        return BoardView(self._board, occupants, ignored)
