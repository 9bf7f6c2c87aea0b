"""Legal move generation + attack detection."""

from __future__ import annotations

from chessrules.core.board import Board, BoardView, Occupancy, Square, sort_key
from chessrules.core.enums import Color, PieceKind
from chessrules.core.piece import Piece
from chessrules.core.scanner import MoveScanner, ScanResult
from chessrules.core.special_moves import Castling, SpecialMoveContext


class MoveGenerator:
    """Turns raw scanner output into legal destination squares.

    Every candidate is tested on a copy-on-write :class:`BoardView`, so the
    live board is never modified by a legality query.
    """

    __slots__ = ("_board", "_context")

    def __init__(
        self, board: Board, context: SpecialMoveContext | None = None
    ) -> None:
        self._board = board
        self._context = context if context is not None else SpecialMoveContext()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def context(self) -> SpecialMoveContext:
        return self._context

    # -- Public API ---------------------------------------------------------

    def raw_moves(self, piece: Piece) -> ScanResult:
        """Physically reachable squares for *piece* (may leave its king attacked)."""
        scanner = MoveScanner(self._board)
        return scanner.raw_moves(piece, self._context.en_passant_for(piece))

    def legal_moves(self, piece: Piece) -> list[Square]:
        """Strictly legal destinations for *piece*, castling included."""
        if piece.captured:
            return []
        legal = [
            sq
            for sq in self.raw_moves(piece).reachable
            if not self.leaves_king_attacked(piece, sq)
        ]
        if piece.kind == PieceKind.KING:
            legal.extend(Castling.candidates(piece, self))
        return sorted(legal, key=sort_key)

    def all_legal_moves(self, color: Color) -> dict[Piece, list[Square]]:
        """Legal destinations of every *color* piece that has at least one."""
        moves: dict[Piece, list[Square]] = {}
        for piece in self._board.pieces(color):
            squares = self.legal_moves(piece)
            if squares:
                moves[piece] = squares
        return moves

    def has_legal_move(self, color: Color) -> bool:
        return any(self.legal_moves(p) for p in self._board.pieces(color))

    # -- Simulation ---------------------------------------------------------

    def hypothetical(self, piece: Piece, destination: Square) -> BoardView:
        """Occupancy after *piece* moves to *destination* (captures lifted off)."""
        captured = self._board.piece_at(destination)
        if captured is None and destination is self._context.en_passant_for(piece):
            captured = self._context.en_passant_pawn
        return self._board.snapshot().with_move(piece, destination, captured)

    def leaves_king_attacked(self, piece: Piece, destination: Square) -> bool:
        """Would moving *piece* to *destination* expose its own king?"""
        view = self.hypothetical(piece, destination)
        if piece.kind == PieceKind.KING:
            king_sq = destination
        else:
            king_sq = view.location_of(self.king_of(piece.color))
        return self.is_attacked(king_sq, piece.color.opposite, view)

    # -- Attack detection ---------------------------------------------------

    def is_attacked(
        self, square: Square, by_color: Color, view: Occupancy | None = None
    ) -> bool:
        """Is *square* attacked by any live piece of *by_color*?"""
        occupancy = self._board if view is None else view
        scanner = MoveScanner(occupancy)
        for attacker in occupancy.pieces(by_color):
            if attacker.captured:
                continue
            if any(square is s for s in scanner.attacked_squares(attacker)):
                return True
        return False

    def attackers_of(self, square: Square, by_color: Color) -> list[Piece]:
        """Live *by_color* pieces that attack *square* on the current board."""
        scanner = MoveScanner(self._board)
        return [
            p
            for p in self._board.pieces(by_color)
            if not p.captured
            and any(square is s for s in scanner.attacked_squares(p))
        ]

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king = self.king_of(color)
        return self.is_attacked(king.location, color.opposite)

    def king_of(self, color: Color) -> Piece:
        """Return the single king of *color* on the board."""
        for piece in self._board.pieces(color):
            if piece.kind == PieceKind.KING:
                return piece
        raise ValueError(f"No {color.name} king on board")
