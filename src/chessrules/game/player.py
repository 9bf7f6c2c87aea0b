"""Player — one side of the game and the pieces it owns."""

from __future__ import annotations

from chessrules.core.enums import Color, PieceKind
from chessrules.core.errors import InvalidSetup
from chessrules.core.piece import Piece


class Player:
    """Owns the pieces of one color.

    Captured pieces stay in :attr:`pieces` (flagged ``captured``) so identity
    and move counts survive for debugging; only promotion swaps an entry out.
    """

    __slots__ = ("_color", "pieces", "moved_this_turn")

    def __init__(self, color: Color, pieces: list[Piece] | None = None) -> None:
        self._color = color
        self.pieces: list[Piece] = pieces if pieces is not None else []
        self.moved_this_turn = False

    @property
    def color(self) -> Color:
        return self._color

    @property
    def king(self) -> Piece:
        kings = [p for p in self.pieces if p.kind == PieceKind.KING]
        if len(kings) != 1:
            raise InvalidSetup(f"{self._color.name} must have exactly one king")
        return kings[0]

    def live_pieces(self) -> list[Piece]:
        return [p for p in self.pieces if not p.captured]

    def material(self) -> int:
        """Sum of descriptor values of the pieces still on the board."""
        return sum(p.value for p in self.live_pieces())

    def replace(self, old: Piece, new: Piece) -> None:
        """Swap *old* for *new* in place (promotion)."""
        for idx, piece in enumerate(self.pieces):
            if piece is old:
                self.pieces[idx] = new
                return
        raise ValueError(f"{old!r} does not belong to {self._color.name}")

    def __repr__(self) -> str:
        return f"Player({self._color}, {len(self.live_pieces())} pieces)"
