"""chessrules — a two-player chess rules engine."""

from chessrules.api import attempt_move, legal_moves, new_game, outcome, resolve_promotion
from chessrules.core import Color, MoveResult, OutcomeKind, PieceKind
from chessrules.game import GameController, GameSettings

__all__ = [
    "Color",
    "GameController",
    "GameSettings",
    "MoveResult",
    "OutcomeKind",
    "PieceKind",
    "attempt_move",
    "legal_moves",
    "new_game",
    "outcome",
    "resolve_promotion",
]
