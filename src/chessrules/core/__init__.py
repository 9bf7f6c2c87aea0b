"""Rules core: board geometry, piece movement and check detection.

Quick start::

    from chessrules.game import GameState

    gen = GameState.standard().generator()
    for square in gen.legal_moves(gen.board["e2"]):
        print(square)
"""

from chessrules.core.board import Board, BoardView, Occupancy, Square
from chessrules.core.enums import (
    CastlingRights,
    Color,
    Direction,
    MoveResult,
    OutcomeKind,
    PieceKind,
    RejectReason,
)
from chessrules.core.errors import ChessError, InvalidSetup
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import DESCRIPTORS, PROMOTION_KINDS, Piece, PieceDescriptor
from chessrules.core.rules import Outcome, Rules
from chessrules.core.scanner import MoveScanner, ScanResult
from chessrules.core.special_moves import (
    Castling,
    EnPassant,
    PawnPromotion,
    SpecialMoveContext,
)
from chessrules.core.types import is_on_board, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "Direction",
    "MoveResult",
    "OutcomeKind",
    "PieceKind",
    "RejectReason",
    # Errors
    "ChessError",
    "InvalidSetup",
    # Helpers
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "BoardView",
    "Castling",
    "DESCRIPTORS",
    "EnPassant",
    "MoveGenerator",
    "MoveScanner",
    "Occupancy",
    "Outcome",
    "PROMOTION_KINDS",
    "PawnPromotion",
    "Piece",
    "PieceDescriptor",
    "Rules",
    "ScanResult",
    "SpecialMoveContext",
    "Square",
]
