"""GameController — the turn controller of a chess game.

Coordinates: GameState, MoveGenerator, the special-move resolvers and Rules.
Emits events via simple callbacks so a presentation layer / tests can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from chessrules.core.board import Board, Square
from chessrules.core.enums import Color, MoveResult, PieceKind, RejectReason
from chessrules.core.piece import Piece
from chessrules.core.rules import Outcome, Rules
from chessrules.core.special_moves import Castling, EnPassant, PawnPromotion
from chessrules.game.interfaces import IGameController, TurnPhase
from chessrules.game.settings import GameSettings
from chessrules.game.state import GameState, MoveRecord, Placement

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
PhaseCallback = Callable[[TurnPhase], None]
CheckCallback = Callable[[Color], None]  # color in check
PromotionCallback = Callable[[Piece], None]  # pawn awaiting a replacement
GameOverCallback = Callable[[Outcome], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns whose turn it is; validates, commits and resolves every half-move.

    Rejected moves are returned as :attr:`MoveResult.REJECTED` with the reason
    stored in ``state.last_rejection``; the board is left untouched.

    Thread-safety: every public operation holds a per-game re-entrant lock,
    so one game may be driven from several threads without interleaving.
    """

    __slots__ = ("_state", "_settings", "_lock", "events")

    def __init__(
        self,
        state: GameState | None = None,
        settings: GameSettings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._state = (
            state
            if state is not None
            else GameState.standard(self._settings.first_to_move)
        )
        self._lock = threading.RLock()
        self.events = GameEvents()

    @classmethod
    def from_placements(
        cls,
        placements: Iterable[Placement | str],
        active_color: Color | None = None,
        settings: GameSettings | None = None,
    ) -> GameController:
        """Controller for a custom position (validated, may raise InvalidSetup)."""
        settings = settings if settings is not None else GameSettings()
        color = active_color if active_color is not None else settings.first_to_move
        ctrl = cls(GameState.from_placements(placements, color), settings)
        ctrl._refresh_outcome()
        return ctrl

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def active_color(self) -> Color:
        return self._state.active_color

    @property
    def phase(self) -> TurnPhase:
        return self._state.phase

    @property
    def outcome(self) -> Outcome:
        return self._state.outcome

    def piece(self, piece: Piece | int) -> Piece:
        if isinstance(piece, Piece):
            return piece
        return self._state.piece(piece)

    def square(self, square: Square | str) -> Square:
        if isinstance(square, Square):
            return square
        return self._state.board.square(square)

    # ── IGameController impl ─────────────────────────────────────────────

    def legal_moves(self, piece: Piece | int) -> list[Square]:
        with self._lock:
            return self._state.generator().legal_moves(self.piece(piece))

    def all_legal_moves(self, color: Color | None = None) -> dict[Piece, list[Square]]:
        """Legal moves of every piece of *color* (default: side to move)."""
        with self._lock:
            color = self._state.active_color if color is None else color
            return self._state.generator().all_legal_moves(color)

    def attempt_move(self, piece: Piece | int, destination: Square | str) -> MoveResult:
        with self._lock:
            state = self._state
            if state.is_game_over:
                return self._reject(RejectReason.GAME_OVER)
            if state.pending_promotion is not None:
                return self._reject(RejectReason.PROMOTION_PENDING)

            try:
                mover = self.piece(piece)
            except KeyError:
                return self._reject(RejectReason.UNKNOWN_PIECE)
            try:
                target = self.square(destination)
            except ValueError:
                return self._reject(RejectReason.UNKNOWN_SQUARE)
            self._set_phase(TurnPhase.VALIDATING_MOVE)

            if mover.color != state.active_color:
                return self._reject(RejectReason.WRONG_COLOR, TurnPhase.AWAITING_MOVE)
            if mover.captured:
                return self._reject(RejectReason.PIECE_CAPTURED, TurnPhase.AWAITING_MOVE)
            if not any(target is sq for sq in self.legal_moves(mover)):
                return self._reject(RejectReason.NOT_LEGAL, TurnPhase.AWAITING_MOVE)

            state.last_rejection = None
            record = self._commit(mover, target)

            if PawnPromotion.requires_choice(mover):
                state.special.pending_promotion = mover
                self._set_phase(TurnPhase.AWAITING_PROMOTION)
                for cb in self.events.on_promotion_required:
                    cb(mover)
                return MoveResult.AWAITING_PROMOTION

            self._complete_half_move(record)
            return MoveResult.APPLIED

    def resolve_promotion(self, kind: PieceKind) -> MoveResult:
        with self._lock:
            state = self._state
            if state.is_game_over:
                return self._reject(RejectReason.GAME_OVER)
            if state.pending_promotion is None:
                return self._reject(RejectReason.NO_PROMOTION_PENDING)
            if not PawnPromotion.is_valid_choice(kind):
                # Stay blocked; the caller is expected to choose again.
                self._reject(RejectReason.INVALID_PROMOTION_CHOICE)
                return MoveResult.AWAITING_PROMOTION

            state.last_rejection = None
            replacement = state.promote(kind)
            record = state.move_history[-1]
            record.promotion = kind
            record.piece = replacement
            self._complete_half_move(record)
            return MoveResult.APPLIED

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit(self, piece: Piece, destination: Square) -> MoveRecord:
        """Update occupancy and run castling / en passant side effects."""
        state = self._state
        board = state.board
        origin = piece.location

        captured = board.relocate(piece, destination)
        if captured is not None:
            captured.captured = True
        piece.move_count += 1
        state.active_player.moved_this_turn = True

        self._set_phase(TurnPhase.RESOLVING_SPECIAL_MOVES)
        Castling.update_rights(state.special, piece, origin, captured)
        rook = Castling.resolve(board, piece, origin, destination)
        taken_en_passant = EnPassant.resolve(
            state.special, board, piece, origin, destination
        )

        record = MoveRecord(
            piece=piece,
            origin=origin,
            destination=destination,
            captured=captured or taken_en_passant,
            castling_rook=rook,
            en_passant=taken_en_passant is not None,
        )
        state.move_history.append(record)
        return record

    def _complete_half_move(self, record: MoveRecord) -> None:
        """Evaluate the opponent's status, then end the game or pass the turn."""
        state = self._state
        mover = state.active_color

        self._set_phase(TurnPhase.EVALUATING_CHECK)
        outcome = Rules.evaluate(
            state.generator(), mover.opposite, self._settings.stalemate_ends_game
        )
        state.outcome = outcome
        record.outcome_after = outcome
        state.turn_count += 1

        for cb in self.events.on_move:
            cb(record, state)

        if outcome.is_terminal:
            _LOGGER.info("Game over after %d half-moves: %s", state.turn_count, outcome)
            self._set_phase(TurnPhase.GAME_OVER)
            for cb in self.events.on_game_over:
                cb(outcome)
            return

        state.active_player.moved_this_turn = False
        state.active_color = mover.opposite
        self._set_phase(TurnPhase.AWAITING_MOVE)
        if outcome.color is not None:
            _LOGGER.debug("%s is in check", outcome.color)
            for cb in self.events.on_check:
                cb(outcome.color)

    def _refresh_outcome(self) -> None:
        """Evaluate a freshly set-up position for the side to move."""
        state = self._state
        state.outcome = Rules.evaluate(
            state.generator(), state.active_color, self._settings.stalemate_ends_game
        )
        if state.outcome.is_terminal:
            state.phase = TurnPhase.GAME_OVER

    def _reject(
        self, reason: RejectReason, phase: TurnPhase | None = None
    ) -> MoveResult:
        self._state.last_rejection = reason
        if self._settings.log_rejections:
            _LOGGER.debug("Rejected (%s): %s to move", reason.name, self._state.active_color)
        if phase is not None:
            self._set_phase(phase)
        return MoveResult.REJECTED

    def _set_phase(self, phase: TurnPhase) -> None:
        if self._state.phase == phase:
            return
        self._state.phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
