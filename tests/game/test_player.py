"""Tests for Player."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceKind
from chessrules.core.errors import InvalidSetup
from chessrules.core.piece import Piece
from chessrules.game.player import Player


def _pieces(*kinds: PieceKind) -> list[Piece]:
    board = Board()
    return [
        Piece(idx, kind, Color.LIGHT, board.square_at("abcdefgh"[idx], 1))
        for idx, kind in enumerate(kinds)
    ]


class TestPlayer:
    def test_color(self) -> None:
        assert Player(Color.DARK).color == Color.DARK

    def test_king(self) -> None:
        pieces = _pieces(PieceKind.ROOK, PieceKind.KING)
        assert Player(Color.LIGHT, pieces).king is pieces[1]

    @pytest.mark.parametrize(
        "kinds",
        [(), (PieceKind.QUEEN,), (PieceKind.KING, PieceKind.KING)],
    )
    def test_king_count_enforced(self, kinds: tuple[PieceKind, ...]) -> None:
        with pytest.raises(InvalidSetup):
            Player(Color.LIGHT, _pieces(*kinds)).king

    def test_material_ignores_captured(self) -> None:
        pieces = _pieces(PieceKind.KING, PieceKind.QUEEN, PieceKind.PAWN)
        player = Player(Color.LIGHT, pieces)
        assert player.material() == 11100
        pieces[1].captured = True
        assert player.material() == 10100
        assert len(player.live_pieces()) == 2
        assert len(player.pieces) == 3

    def test_replace(self) -> None:
        pieces = _pieces(PieceKind.KING, PieceKind.PAWN)
        player = Player(Color.LIGHT, pieces)
        queen = Piece(9, PieceKind.QUEEN, Color.LIGHT, pieces[1].location)
        player.replace(pieces[1], queen)
        assert player.pieces[1] is queen

    def test_replace_unknown_piece(self) -> None:
        player = Player(Color.LIGHT, _pieces(PieceKind.KING))
        stranger = _pieces(PieceKind.PAWN)[0]
        with pytest.raises(ValueError):
            player.replace(stranger, stranger)

    def test_repr(self) -> None:
        assert repr(Player(Color.DARK, _pieces(PieceKind.KING))) == "Player(dark, 1 pieces)"
