"""Move scanner — walks the board outward from a piece's square.

The scanner knows nothing about check. It reports every square a piece can
physically reach on a given :class:`~chessrules.core.board.Occupancy`
(reachable squares plus the opponent pieces found on them); the legality
filter in :mod:`chessrules.core.move_generator` decides which of those are
actually playable.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from chessrules.core.board import Occupancy, Square
from chessrules.core.enums import Direction, PieceKind
from chessrules.core.piece import NO_LIMIT, Piece
from chessrules.core.types import shift_file

PAWN_FIRST_MOVE_LIMIT = 2


@dataclass(slots=True)
class ScanResult:
    """Raw scanner output for one piece."""

    reachable: list[Square] = field(default_factory=list)
    captures: list[Piece] = field(default_factory=list)

    def __contains__(self, square: object) -> bool:
        return any(square is s for s in self.reachable)

    def __len__(self) -> int:
        return len(self.reachable)


class MoveScanner:
    """Scans an occupancy on behalf of individual pieces."""

    __slots__ = ("_view",)

    def __init__(self, view: Occupancy) -> None:
        self._view = view

    # -- Dispatch -----------------------------------------------------------

    def raw_moves(
        self, piece: Piece, en_passant_target: Square | None = None
    ) -> ScanResult:
        """Every square *piece* can physically move to (castling excluded)."""
        match piece.kind:
            case PieceKind.PAWN:
                return self.scan_pawn(piece, en_passant_target)
            case _ if piece.descriptor.generates_branched_moves:
                return self.scan_branched(piece)
            case _:
                return self.scan(piece, piece.descriptor.range_limit)

    def attacked_squares(self, piece: Piece) -> list[Square]:
        """Squares *piece* attacks: its raw moves, but only diagonals for pawns."""
        if piece.kind == PieceKind.PAWN:
            return self.pawn_diagonals(piece)
        return self.raw_moves(piece).reachable

    # -- Generic scans ------------------------------------------------------

    def step(self, square: Square, file_delta: int, rank_delta: int) -> Square | None:
        """Neighbour of *square* at the given offset, or ``None`` off-board."""
        return self._view.square_at(
            shift_file(square.file, file_delta), square.rank + rank_delta
        )

    def scan(
        self,
        piece: Piece,
        range_limit: int = NO_LIMIT,
        directions: Iterable[Direction] | None = None,
    ) -> ScanResult:
        """Slide from *piece* along each direction until blocked or out of range.

        An empty square is added and the scan continues; an opponent's square
        is added as a capture and ends the direction; a friendly piece or the
        board edge ends the direction without adding anything.
        """
        view = self._view
        origin = view.location_of(piece)
        result = ScanResult()

        for direction in piece.directions if directions is None else directions:
            square = origin
            count = 0
            while count < range_limit:
                square = self.step(square, direction.file_delta, direction.rank_delta)
                if square is None:
                    break
                count += 1
                occupant = view.piece_at(square)
                if occupant is None:
                    result.reachable.append(square)
                    continue
                if piece.is_opponent(occupant):
                    result.reachable.append(square)
                    result.captures.append(occupant)
                break
        return result

    def scan_branched(self, piece: Piece) -> ScanResult:
        """Knight scan: one cardinal step, then both perpendicular diagonals."""
        view = self._view
        origin = view.location_of(piece)
        result = ScanResult()

        for direction in piece.directions:
            pivot = self.step(origin, direction.file_delta, direction.rank_delta)
            if pivot is None:
                continue
            if direction.file_delta == 0:
                offsets = ((1, direction.rank_delta), (-1, direction.rank_delta))
            else:
                offsets = ((direction.file_delta, 1), (direction.file_delta, -1))

            for df, dr in offsets:
                square = self.step(pivot, df, dr)
                if square is None:
                    continue
                occupant = view.piece_at(square)
                if occupant is None:
                    result.reachable.append(square)
                elif piece.is_opponent(occupant):
                    result.reachable.append(square)
                    result.captures.append(occupant)
        return result

    # -- Pawns --------------------------------------------------------------

    def pawn_diagonals(self, piece: Piece) -> list[Square]:
        """The (at most two) squares diagonally forward of a pawn."""
        origin = self._view.location_of(piece)
        squares: list[Square] = []
        for df in (-1, 1):
            square = self.step(origin, df, piece.forward)
            if square is not None:
                squares.append(square)
        return squares

    def scan_pawn(
        self, piece: Piece, en_passant_target: Square | None = None
    ) -> ScanResult:
        """Forward pushes onto empty squares plus diagonal captures.

        *en_passant_target* must only be given when it was created by an
        opponent pawn.
        """
        view = self._view
        limit = PAWN_FIRST_MOVE_LIMIT if piece.move_count == 0 else 1

        forward = self.scan(piece, limit)
        result = ScanResult(
            reachable=[sq for sq in forward.reachable if view.is_empty(sq)]
        )

        for square in self.pawn_diagonals(piece):
            occupant = view.piece_at(square)
            if occupant is not None:
                if piece.is_opponent(occupant):
                    result.reachable.append(square)
                    result.captures.append(occupant)
            elif square is en_passant_target:
                result.reachable.append(square)
        return result
