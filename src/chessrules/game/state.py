"""Game state — board, players, turn bookkeeping and move history."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple

from chessrules.core.board import Board, Square
from chessrules.core.enums import Color, PieceKind, RejectReason
from chessrules.core.errors import InvalidSetup
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import DESCRIPTORS, Piece, kind_from_symbol
from chessrules.core.rules import Outcome
from chessrules.core.special_moves import PawnPromotion, SpecialMoveContext
from chessrules.game.interfaces import TurnPhase
from chessrules.game.player import Player

BACK_RANK = "RNBQKBNR"


class Placement(NamedTuple):
    """One piece of a custom starting position."""

    kind: PieceKind
    color: Color
    square: str
    move_count: int = 0

    @classmethod
    def parse(cls, text: str) -> Placement:
        """Parse ``<Symbol><L|D><file><rank>``, e.g. ``"KLe1"``."""
        text = text.strip()
        if len(text) != 4:
            raise ValueError(f"Invalid placement: {text!r}")
        return cls(kind_from_symbol(text[0]), Color.from_symbol(text[1]), text[2:].lower())


def standard_placements() -> list[Placement]:
    """Back rank on the home rank, pawns on the adjacent rank, mirrored."""
    placements: list[Placement] = []
    for color, home, pawns in ((Color.LIGHT, 1, 2), (Color.DARK, 8, 7)):
        for file, symbol in zip("abcdefgh", BACK_RANK):
            placements.append(Placement(kind_from_symbol(symbol), color, f"{file}{home}"))
        for file in "abcdefgh":
            placements.append(Placement(PieceKind.PAWN, color, f"{file}{pawns}"))
    return placements


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    piece: Piece
    origin: Square
    destination: Square
    captured: Piece | None = None
    castling_rook: Piece | None = None
    en_passant: bool = False
    promotion: PieceKind | None = None
    outcome_after: Outcome = field(default_factory=Outcome)

    @property
    def notation(self) -> str:
        """Text-binding form, e.g. ``"e7 e8=Q"``."""
        text = f"{self.origin.name} {self.destination.name}"
        if self.promotion is not None:
            text += f"={DESCRIPTORS[self.promotion].symbol}"
        return text

    def __str__(self) -> str:
        return self.notation


@dataclass
class GameState:
    """Board, players and per-turn bookkeeping of a single game.

    Locking is left to :class:`~chessrules.game.controller.GameController`.
    Build one with :meth:`standard` or :meth:`from_placements`; both validate
    the position.
    """

    board: Board
    players: dict[Color, Player]
    active_color: Color = Color.LIGHT
    turn_count: int = 0
    outcome: Outcome = field(default_factory=Outcome)
    phase: TurnPhase = TurnPhase.AWAITING_MOVE
    special: SpecialMoveContext = field(default_factory=SpecialMoveContext)
    move_history: list[MoveRecord] = field(default_factory=list)
    last_rejection: RejectReason | None = None
    _next_id: int = field(default=0, repr=False)

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def standard(cls, active_color: Color = Color.LIGHT) -> GameState:
        return cls.from_placements(standard_placements(), active_color)

    @classmethod
    def from_placements(
        cls,
        placements: Iterable[Placement | str],
        active_color: Color = Color.LIGHT,
    ) -> GameState:
        """Build and validate a position; raises :class:`InvalidSetup`."""
        board = Board()
        players = {Color.LIGHT: Player(Color.LIGHT), Color.DARK: Player(Color.DARK)}
        next_id = 0
        for item in placements:
            try:
                placement = Placement.parse(item) if isinstance(item, str) else item
                square = board.square(placement.square)
            except ValueError as exc:
                raise InvalidSetup(str(exc)) from exc
            piece = Piece(
                next_id,
                placement.kind,
                placement.color,
                square,
                move_count=placement.move_count,
            )
            board.place(piece, square)
            players[placement.color].pieces.append(piece)
            next_id += 1

        state = cls(board=board, players=players, active_color=active_color)
        state._next_id = next_id
        state.validate()
        return state

    def validate(self) -> None:
        """Check the one-king-per-side and one-piece-per-square invariants."""
        for player in self.players.values():
            king = player.king  # raises InvalidSetup unless exactly one
            if king.captured:
                raise InvalidSetup(f"{player.color.name} king is not on the board")
        seen: set[Square] = set()
        for player in self.players.values():
            for piece in player.live_pieces():
                if piece.location in seen or piece.location.occupant is not piece:
                    raise InvalidSetup(f"Square {piece.location.name} is shared")
                seen.add(piece.location)

    # ── Lookups ──────────────────────────────────────────────────────────

    def player(self, color: Color) -> Player:
        return self.players[color]

    @property
    def active_player(self) -> Player:
        return self.players[self.active_color]

    @property
    def opponent(self) -> Player:
        return self.players[self.active_color.opposite]

    def piece(self, piece_id: int) -> Piece:
        for player in self.players.values():
            for piece in player.pieces:
                if piece.id == piece_id:
                    return piece
        raise KeyError(f"No piece with id {piece_id}")

    def generator(self) -> MoveGenerator:
        return MoveGenerator(self.board, self.special)

    @property
    def pending_promotion(self) -> Piece | None:
        return self.special.pending_promotion

    @property
    def is_game_over(self) -> bool:
        return self.phase == TurnPhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    # ── Mutation helpers ─────────────────────────────────────────────────

    def promote(self, kind: PieceKind) -> Piece:
        """Replace the pending pawn with a new *kind* piece."""
        pawn = self.special.pending_promotion
        if pawn is None:
            raise ValueError("No promotion pending")
        replacement = PawnPromotion.promote(self.board, pawn, kind, self._next_id)
        self._next_id += 1
        self.players[pawn.color].replace(pawn, replacement)
        self.special.pending_promotion = None
        return replacement
