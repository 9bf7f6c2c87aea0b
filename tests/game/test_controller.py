"""Tests for GameController — the turn controller."""

import logging
import threading

from chessrules.core.enums import Color, MoveResult, OutcomeKind, RejectReason
from chessrules.game.controller import GameController
from chessrules.game.interfaces import IGameController, TurnPhase
from chessrules.game.settings import GameSettings

_FOOLS_MATE = ("f2 f3", "e7 e5", "g2 g4", "d8 h4")


def _play(ctrl: GameController, *moves: str) -> list[MoveResult]:
    results = []
    for move in moves:
        origin, dest = move.split()
        results.append(ctrl.attempt_move(ctrl.board[origin], dest))
    return results


class TestNewGame:
    def test_is_controller(self, ctrl) -> None:
        assert isinstance(ctrl, IGameController)

    def test_phase_awaiting(self, ctrl) -> None:
        assert ctrl.phase == TurnPhase.AWAITING_MOVE
        assert ctrl.active_color == Color.LIGHT
        assert ctrl.outcome.kind == OutcomeKind.IN_PROGRESS

    def test_first_to_move_setting(self) -> None:
        ctrl = GameController(settings=GameSettings(first_to_move=Color.DARK))
        assert ctrl.active_color == Color.DARK
        assert _play(ctrl, "e7 e5") == [MoveResult.APPLIED]

    def test_custom_position_already_mated(self, make_ctrl) -> None:
        ctrl = make_ctrl("RLa8", "KLd6", "KDd8", active=Color.DARK)
        assert ctrl.phase == TurnPhase.GAME_OVER
        assert ctrl.outcome.kind == OutcomeKind.CHECKMATE


class TestAttemptMove:
    def test_applied_flips_turn(self, ctrl) -> None:
        pawn = ctrl.board["e2"]
        assert ctrl.attempt_move(pawn, "e4") == MoveResult.APPLIED
        assert ctrl.board["e4"] is pawn
        assert ctrl.board["e2"] is None
        assert pawn.move_count == 1
        assert ctrl.active_color == Color.DARK
        assert ctrl.state.turn_count == 1
        assert ctrl.state.last_rejection is None

    def test_by_id_and_square_name(self, ctrl) -> None:
        assert ctrl.attempt_move(12, "e4") == MoveResult.APPLIED
        assert ctrl.board["e4"].id == 12

    def test_wrong_color(self, ctrl) -> None:
        pawn = ctrl.board["e7"]
        assert ctrl.attempt_move(pawn, "e5") == MoveResult.REJECTED
        assert ctrl.state.last_rejection == RejectReason.WRONG_COLOR
        assert ctrl.board["e7"] is pawn
        assert ctrl.phase == TurnPhase.AWAITING_MOVE
        assert ctrl.active_color == Color.LIGHT

    def test_not_legal_leaves_board_unchanged(self, ctrl) -> None:
        before = ctrl.board.render()
        assert ctrl.attempt_move(ctrl.board["e2"], "e5") == MoveResult.REJECTED
        assert ctrl.state.last_rejection == RejectReason.NOT_LEGAL
        assert ctrl.board.render() == before
        assert ctrl.state.move_history == []

    def test_unknown_piece_id(self, ctrl) -> None:
        before = ctrl.board.render()
        assert ctrl.attempt_move(999, "e4") == MoveResult.REJECTED
        assert ctrl.state.last_rejection == RejectReason.UNKNOWN_PIECE
        assert ctrl.board.render() == before
        assert ctrl.phase == TurnPhase.AWAITING_MOVE
        assert ctrl.active_color == Color.LIGHT

    def test_off_board_square_name(self, ctrl) -> None:
        pawn = ctrl.board["e2"]
        assert ctrl.attempt_move(pawn, "e9") == MoveResult.REJECTED
        assert ctrl.state.last_rejection == RejectReason.UNKNOWN_SQUARE
        assert ctrl.board["e2"] is pawn
        assert ctrl.phase == TurnPhase.AWAITING_MOVE
        # still playable afterwards
        assert ctrl.attempt_move(pawn, "e4") == MoveResult.APPLIED

    def test_captured_piece(self, make_ctrl) -> None:
        ctrl = make_ctrl("KLe1", "RLa1", "NDa5", "KDh8")
        knight = ctrl.board["a5"]
        assert _play(ctrl, "a1 a5") == [MoveResult.APPLIED]
        assert knight.captured
        assert ctrl.attempt_move(knight, "b7") == MoveResult.REJECTED
        assert ctrl.state.last_rejection == RejectReason.PIECE_CAPTURED
        assert knight in ctrl.state.player(Color.DARK).pieces

    def test_rejection_clears_after_success(self, ctrl) -> None:
        ctrl.attempt_move(ctrl.board["e7"], "e5")
        assert ctrl.state.last_rejection is not None
        ctrl.attempt_move(ctrl.board["e2"], "e4")
        assert ctrl.state.last_rejection is None

    def test_history(self, ctrl) -> None:
        _play(ctrl, "e2 e4", "d7 d5", "e4 d5")
        history = ctrl.state.move_history
        assert [str(r) for r in history] == ["e2 e4", "d7 d5", "e4 d5"]
        assert history[-1].captured is not None
        assert history[-1].captured.captured

    def test_king_never_left_attacked(self, ctrl) -> None:
        moves = ("e2 e4", "e7 e5", "d1 h5", "b8 c6", "f1 c4", "g8 f6")
        for move in moves:
            _play(ctrl, move)
            gen = ctrl.state.generator()
            mover = ctrl.active_color.opposite
            assert not gen.is_attacked(
                gen.king_of(mover).location, ctrl.active_color
            )


class TestGameOver:
    def test_fools_mate(self, ctrl) -> None:
        assert _play(ctrl, *_FOOLS_MATE) == [MoveResult.APPLIED] * 4
        assert ctrl.phase == TurnPhase.GAME_OVER
        assert ctrl.outcome.color == Color.DARK

    def test_moves_rejected_after_game_over(self, ctrl) -> None:
        _play(ctrl, *_FOOLS_MATE)
        assert ctrl.attempt_move(ctrl.board["a2"], "a3") == MoveResult.REJECTED
        assert ctrl.state.last_rejection == RejectReason.GAME_OVER
        assert ctrl.attempt_move(ctrl.board["a7"], "a6") == MoveResult.REJECTED


class TestEvents:
    def test_phase_sequence(self, ctrl) -> None:
        phases: list[TurnPhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.attempt_move(ctrl.board["e2"], "e4")
        assert phases == [
            TurnPhase.VALIDATING_MOVE,
            TurnPhase.RESOLVING_SPECIAL_MOVES,
            TurnPhase.EVALUATING_CHECK,
            TurnPhase.AWAITING_MOVE,
        ]

    def test_rejected_phase_sequence(self, ctrl) -> None:
        phases: list[TurnPhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.attempt_move(ctrl.board["e2"], "e5")
        assert phases == [TurnPhase.VALIDATING_MOVE, TurnPhase.AWAITING_MOVE]

    def test_on_move(self, ctrl) -> None:
        records = []
        ctrl.events.on_move.append(lambda record, state: records.append(record))
        ctrl.attempt_move(ctrl.board["g1"], "f3")
        assert len(records) == 1
        assert records[0].notation == "g1 f3"

    def test_on_check(self, make_ctrl) -> None:
        checked: list[Color] = []
        ctrl = make_ctrl("KLe1", "RLa1", "KDe8")
        ctrl.events.on_check.append(checked.append)
        _play(ctrl, "a1 a8")
        assert checked == [Color.DARK]
        assert ctrl.outcome.kind == OutcomeKind.CHECK

    def test_on_game_over(self, ctrl) -> None:
        outcomes = []
        ctrl.events.on_game_over.append(outcomes.append)
        _play(ctrl, *_FOOLS_MATE)
        assert len(outcomes) == 1
        assert outcomes[0].kind == OutcomeKind.CHECKMATE


class TestLogging:
    def test_rejection_logged(self, ctrl, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="chessrules.game.controller"):
            ctrl.attempt_move(ctrl.board["e7"], "e5")
        assert "WRONG_COLOR" in caplog.text

    def test_rejection_logging_disabled(self, caplog) -> None:
        ctrl = GameController(settings=GameSettings(log_rejections=False))
        with caplog.at_level(logging.DEBUG, logger="chessrules.game.controller"):
            ctrl.attempt_move(ctrl.board["e7"], "e5")
        assert "Rejected" not in caplog.text

    def test_game_over_logged(self, ctrl, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="chessrules.game.controller"):
            _play(ctrl, *_FOOLS_MATE)
        assert "Game over" in caplog.text


class TestThreadSafety:
    def test_same_move_from_two_threads(self, ctrl) -> None:
        pawn = ctrl.board["e2"]
        results: list[MoveResult] = []
        barrier = threading.Barrier(4)

        def _worker() -> None:
            barrier.wait()
            results.append(ctrl.attempt_move(pawn, "e4"))

        threads = [threading.Thread(target=_worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(MoveResult.APPLIED) == 1
        assert results.count(MoveResult.REJECTED) == 3
        assert ctrl.state.ply_count == 1
