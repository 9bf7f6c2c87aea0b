"""Tests for GameState set-up and bookkeeping."""

import pytest

from chessrules.core.enums import Color, PieceKind
from chessrules.core.errors import InvalidSetup
from chessrules.core.rules import Outcome
from chessrules.game.interfaces import TurnPhase
from chessrules.game.state import GameState, Placement, standard_placements


class TestStandardSetup:
    def test_thirty_two_pieces(self) -> None:
        state = GameState.standard()
        assert len(list(state.board.occupants())) == 32
        assert len(state.player(Color.LIGHT).pieces) == 16
        assert len(state.player(Color.DARK).pieces) == 16

    def test_back_ranks_mirrored(self) -> None:
        board = GameState.standard().board
        light = "".join(board[f"{f}1"].symbol for f in "abcdefgh")
        dark = "".join(board[f"{f}8"].symbol for f in "abcdefgh")
        assert light == "RNBQKBNR"
        assert dark == "rnbqkbnr"
        assert all(board[f"{f}2"].kind == PieceKind.PAWN for f in "abcdefgh")
        assert all(board[f"{f}7"].color == Color.DARK for f in "abcdefgh")

    def test_initial_bookkeeping(self) -> None:
        state = GameState.standard()
        assert state.active_color == Color.LIGHT
        assert state.phase == TurnPhase.AWAITING_MOVE
        assert state.outcome == Outcome.in_progress()
        assert state.turn_count == 0
        assert state.ply_count == 0
        assert state.pending_promotion is None
        assert not state.is_game_over

    def test_piece_ids(self) -> None:
        state = GameState.standard()
        assert state.piece(4) is state.board["e1"]
        assert state.piece(12) is state.board["e2"]
        assert state.piece(20) is state.board["e8"]
        with pytest.raises(KeyError):
            state.piece(99)

    def test_standard_placements_count(self) -> None:
        assert len(standard_placements()) == 32


class TestCustomSetup:
    def test_minimal_kings(self, make_state) -> None:
        state = make_state("KLe1", "KDe8", active=Color.DARK)
        assert state.active_color == Color.DARK
        assert state.player(Color.LIGHT).king is state.board["e1"]

    def test_placement_objects_and_move_count(self) -> None:
        state = GameState.from_placements(
            [
                Placement(PieceKind.KING, Color.LIGHT, "e1"),
                Placement(PieceKind.KING, Color.DARK, "e8"),
                Placement(PieceKind.PAWN, Color.LIGHT, "e4", 1),
            ]
        )
        assert state.board["e4"].move_count == 1

    def test_placement_parse(self) -> None:
        assert Placement.parse("qDd8") == Placement(PieceKind.QUEEN, Color.DARK, "d8")

    @pytest.mark.parametrize(
        "placements",
        [
            ("KLe1",),
            ("KDe8",),
            ("KLe1", "KLd1", "KDe8"),
            ("KLe1", "KDe8", "QDe8"),
            ("KLe1", "KDe8", "PLz9"),
            ("KLe1", "KDe8", "XLa1"),
            ("KLe1", "KDe8", "PXa2"),
            ("KLe1", "KDe8", "PLa2a"),
        ],
    )
    def test_invalid_setup(self, placements: tuple[str, ...]) -> None:
        with pytest.raises(InvalidSetup):
            GameState.from_placements(placements)

    def test_invalid_setup_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            GameState.from_placements(["KLe1"])


class TestPromoteHelper:
    def test_requires_pending(self, make_state) -> None:
        state = make_state("KLe1", "KDe8")
        with pytest.raises(ValueError):
            state.promote(PieceKind.QUEEN)

    def test_replaces_pending_pawn(self, make_state) -> None:
        state = make_state("KLe1", "PLa8", "KDh1")
        pawn = state.board["a8"]
        state.special.pending_promotion = pawn
        queen = state.promote(PieceKind.QUEEN)
        assert state.board["a8"] is queen
        assert queen.id == 3
        assert state.pending_promotion is None
        assert queen in state.player(Color.LIGHT).pieces
