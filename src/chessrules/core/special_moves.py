"""Special-move resolvers: castling, en passant and pawn promotion.

Each resolver either injects extra candidate squares into a piece's legal
moves or applies a side effect after a move has been committed. Per-game
state lives in :class:`SpecialMoveContext`; the resolvers themselves are
stateless.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import CastlingRights, PieceKind
from chessrules.core.piece import PROMOTION_KINDS, Piece
from chessrules.core.types import MAX_RANK, MIN_RANK, file_index, shift_file

if TYPE_CHECKING:
    from chessrules.core.board import Board, Occupancy, Square
    from chessrules.core.move_generator import MoveGenerator

_LOGGER = logging.getLogger(__name__)

KING_CASTLE_STEP = 2
KINGSIDE_ROOK_FILE = "h"
QUEENSIDE_ROOK_FILE = "a"

# Corner square → the castling right lost once that corner's rook leaves or is taken.
_ROOK_CORNERS: dict[tuple[str, int], CastlingRights] = {
    (QUEENSIDE_ROOK_FILE, MIN_RANK): CastlingRights.LIGHT_QUEENSIDE,
    (KINGSIDE_ROOK_FILE, MIN_RANK): CastlingRights.LIGHT_KINGSIDE,
    (QUEENSIDE_ROOK_FILE, MAX_RANK): CastlingRights.DARK_QUEENSIDE,
    (KINGSIDE_ROOK_FILE, MAX_RANK): CastlingRights.DARK_KINGSIDE,
}


def _home_rank(piece: Piece) -> int:
    return MIN_RANK if piece.far_rank == MAX_RANK else MAX_RANK


@dataclass(slots=True)
class SpecialMoveContext:
    """Transient per-game state consulted by the special-move resolvers."""

    castling_rights: CastlingRights = CastlingRights.ALL
    en_passant_target: Square | None = None
    en_passant_pawn: Piece | None = None
    pending_promotion: Piece | None = None

    def en_passant_for(self, piece: Piece) -> Square | None:
        """Live en passant target if *piece* is a pawn allowed to use it."""
        pawn = self.en_passant_pawn
        if piece.kind != PieceKind.PAWN or pawn is None or not piece.is_opponent(pawn):
            return None
        return self.en_passant_target

    def clear_en_passant(self) -> None:
        self.en_passant_target = None
        self.en_passant_pawn = None


# ── Castling ─────────────────────────────────────────────────────────────────


class Castling:
    """King + rook combined move."""

    @staticmethod
    def rook_for(king: Piece, kingside: bool, board: Occupancy) -> Piece | None:
        """Unmoved same-color rook on the corner of *king*'s rank, if any."""
        file = KINGSIDE_ROOK_FILE if kingside else QUEENSIDE_ROOK_FILE
        corner = board.square_at(file, king.location.rank)
        if corner is None:
            return None
        rook = board.piece_at(corner)
        if (
            rook is None
            or rook.kind != PieceKind.ROOK
            or rook.color != king.color
            or rook.move_count != 0
        ):
            return None
        return rook

    @staticmethod
    def candidates(king: Piece, generator: MoveGenerator) -> list[Square]:
        """Two-square king destinations for every side castling is legal on."""
        context = generator.context
        board = generator.board
        if king.kind != PieceKind.KING or king.captured or king.move_count != 0:
            return []
        if not context.castling_rights & CastlingRights.for_color(king.color):
            return []
        if generator.is_in_check(king.color):
            return []

        origin = king.location
        if origin.rank != _home_rank(king):
            return []

        opponent = king.color.opposite
        landing: list[Square] = []

        for kingside in (True, False):
            if not context.castling_rights & CastlingRights.for_side(king.color, kingside):
                continue
            rook = Castling.rook_for(king, kingside, board)
            if rook is None:
                continue

            step = 1 if kingside else -1
            lo, hi = sorted((file_index(origin.file), file_index(rook.location.file)))
            between = [
                board.square_at(shift_file("a", idx), origin.rank)
                for idx in range(lo + 1, hi)
            ]
            if any(sq is None or not board.is_empty(sq) for sq in between):
                continue

            transit = [
                board.square_at(shift_file(origin.file, step * n), origin.rank)
                for n in range(1, KING_CASTLE_STEP + 1)
            ]
            if any(sq is None or generator.is_attacked(sq, opponent) for sq in transit):
                continue

            landing.append(transit[-1])
        return landing

    @staticmethod
    def is_castling_move(piece: Piece, origin: Square, destination: Square) -> bool:
        return (
            piece.kind == PieceKind.KING
            and origin.rank == destination.rank
            and abs(file_index(destination.file) - file_index(origin.file))
            == KING_CASTLE_STEP
        )

    @staticmethod
    def resolve(
        board: Board, king: Piece, origin: Square, destination: Square
    ) -> Piece | None:
        """Slide the rook next to a king that just castled; return the rook."""
        if not Castling.is_castling_move(king, origin, destination):
            return None
        kingside = destination.file > origin.file
        file = KINGSIDE_ROOK_FILE if kingside else QUEENSIDE_ROOK_FILE
        corner = board.square_at(file, origin.rank)
        rook = board.piece_at(corner) if corner is not None else None
        if rook is None or rook.kind != PieceKind.ROOK:
            return None

        rook_to = board.square_at(
            shift_file(destination.file, -1 if kingside else 1), destination.rank
        )
        assert rook_to is not None
        board.relocate(rook, rook_to)
        rook.move_count += 1
        _LOGGER.debug("Castled %s: rook %s -> %s", king.color, corner, rook_to)
        return rook

    @staticmethod
    def update_rights(
        context: SpecialMoveContext,
        piece: Piece,
        origin: Square,
        captured: Piece | None,
    ) -> None:
        """Drop rights lost by a king move, a rook move, or a rook capture."""
        rights = context.castling_rights
        if piece.kind == PieceKind.KING:
            rights &= ~CastlingRights.for_color(piece.color)
        if piece.kind == PieceKind.ROOK and origin.coord in _ROOK_CORNERS:
            rights &= ~_ROOK_CORNERS[origin.coord]
        if captured is not None and captured.kind == PieceKind.ROOK:
            corner = captured.location.coord
            if corner in _ROOK_CORNERS:
                rights &= ~_ROOK_CORNERS[corner]
        context.castling_rights = rights


# ── En passant ───────────────────────────────────────────────────────────────


class EnPassant:
    """Capture of a pawn that has just double-stepped past an opponent pawn."""

    @staticmethod
    def is_double_step(piece: Piece, origin: Square, destination: Square) -> bool:
        return (
            piece.kind == PieceKind.PAWN
            and piece.move_count == 1
            and origin.file == destination.file
            and destination.rank - origin.rank == 2 * piece.forward
        )

    @staticmethod
    def resolve(
        context: SpecialMoveContext,
        board: Board,
        piece: Piece,
        origin: Square,
        destination: Square,
    ) -> Piece | None:
        """Apply en passant after a committed move; return the pawn taken, if any.

        Whatever happens, the previous target expires here; a new one is set
        only when *piece* has just double-stepped.
        """
        taken: Piece | None = None
        target = context.en_passant_for(piece)
        if target is not None and destination is target:
            taken = context.en_passant_pawn
            assert taken is not None
            board.remove(taken)
            taken.captured = True
            _LOGGER.debug("%s captured %s en passant on %s", piece, taken, destination)

        context.clear_en_passant()

        if EnPassant.is_double_step(piece, origin, destination):
            context.en_passant_target = board.square_at(
                destination.file, destination.rank - piece.forward
            )
            context.en_passant_pawn = piece
        return taken


# ── Promotion ────────────────────────────────────────────────────────────────


class PawnPromotion:
    """Replacement of a pawn that reached its far rank."""

    @staticmethod
    def requires_choice(piece: Piece) -> bool:
        return piece.kind == PieceKind.PAWN and piece.location.rank == piece.far_rank

    @staticmethod
    def is_valid_choice(kind: PieceKind) -> bool:
        return kind in PROMOTION_KINDS

    @staticmethod
    def promote(board: Board, pawn: Piece, kind: PieceKind, new_id: int) -> Piece:
        """Put a new *kind* piece on the pawn's square and return it."""
        square = pawn.location
        board.remove(pawn)
        replacement = Piece(new_id, kind, pawn.color, square, move_count=pawn.move_count)
        board.place(replacement, square)
        _LOGGER.debug("Promoted %s on %s to %s", pawn, square, replacement)
        return replacement
