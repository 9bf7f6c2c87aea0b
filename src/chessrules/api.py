"""Narrow functional API consumed by a presentation layer.

Quick start::

    from chessrules import api

    game = api.new_game()
    pawn = game.board["e2"]
    api.legal_moves(game, pawn.id)          # [e3, e4]
    api.attempt_move(game, pawn.id, "e4")   # MoveResult.APPLIED
"""

from __future__ import annotations

from chessrules.core.board import Square
from chessrules.core.enums import MoveResult, PieceKind
from chessrules.core.rules import Outcome
from chessrules.game.controller import GameController
from chessrules.game.settings import GameSettings


def new_game(settings: GameSettings | None = None) -> GameController:
    """Standard back-rank setup, Light to move.

    Returns the :class:`GameController` that owns the new
    :class:`~chessrules.game.state.GameState` (``game.state``). The other
    functions here take that controller in place of a bare state, so every
    move goes through its lock and turn bookkeeping.
    """
    return GameController(settings=settings)


def legal_moves(game: GameController, piece_id: int) -> list[Square]:
    """Read-only query for move-preview highlighting."""
    return game.legal_moves(piece_id)


def attempt_move(
    game: GameController, piece_id: int, square: Square | str
) -> MoveResult:
    return game.attempt_move(piece_id, square)


def resolve_promotion(game: GameController, kind: PieceKind) -> MoveResult:
    return game.resolve_promotion(kind)


def outcome(game: GameController) -> Outcome:
    return game.outcome
