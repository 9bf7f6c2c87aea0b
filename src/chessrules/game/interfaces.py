"""Abstract interfaces for the game layer.

The presentation layer depends on :class:`IGameController`, not on the
concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.board import Square
    from chessrules.core.enums import MoveResult, PieceKind
    from chessrules.core.piece import Piece
    from chessrules.core.rules import Outcome


# ── Turn FSM states ──────────────────────────────────────────────────────────


class TurnPhase(IntEnum):
    """Finite-state-machine states of the turn controller."""

    AWAITING_MOVE = auto()
    VALIDATING_MOVE = auto()
    RESOLVING_SPECIAL_MOVES = auto()
    AWAITING_PROMOTION = auto()  # blocked until a promotion kind is supplied
    EVALUATING_CHECK = auto()
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the turn controller."""

    @abstractmethod
    def legal_moves(self, piece: Piece | int) -> list[Square]:
        """Legal destinations for a piece (read-only)."""

    @abstractmethod
    def attempt_move(self, piece: Piece | int, destination: Square | str) -> MoveResult:
        """Validate and, if legal, commit a move."""

    @abstractmethod
    def resolve_promotion(self, kind: PieceKind) -> MoveResult:
        """Supply the replacement kind for a pending promotion."""

    @property
    @abstractmethod
    def outcome(self) -> Outcome:
        """Status after the last completed half-move."""
