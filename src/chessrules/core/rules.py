"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, OutcomeKind
from chessrules.core.move_generator import MoveGenerator


@dataclass(frozen=True, slots=True)
class Outcome:
    """Game status after the last completed half-move.

    ``color`` is the side in check for ``CHECK`` and the winner for
    ``CHECKMATE``; it is ``None`` otherwise.
    """

    kind: OutcomeKind = OutcomeKind.IN_PROGRESS
    color: Color | None = None

    @classmethod
    def in_progress(cls) -> Outcome:
        return cls()

    @classmethod
    def check(cls, color: Color) -> Outcome:
        return cls(OutcomeKind.CHECK, color)

    @classmethod
    def checkmate(cls, winner: Color) -> Outcome:
        return cls(OutcomeKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> Outcome:
        return cls(OutcomeKind.STALEMATE)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (OutcomeKind.CHECKMATE, OutcomeKind.STALEMATE)

    def __str__(self) -> str:
        if self.color is None:
            return self.kind.name.lower()
        return f"{self.kind.name.lower()}({self.color})"


class Rules:
    """Static rule-checker that operates on a :class:`MoveGenerator`."""

    @staticmethod
    def is_in_check(gen: MoveGenerator, color: Color) -> bool:
        return gen.is_in_check(color)

    @staticmethod
    def is_checkmate(gen: MoveGenerator, color: Color) -> bool:
        if not gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def is_stalemate(gen: MoveGenerator, color: Color) -> bool:
        if gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def evaluate(
        gen: MoveGenerator, color: Color, stalemate_ends_game: bool = True
    ) -> Outcome:
        """Status of *color*, the side about to move."""
        in_check = gen.is_in_check(color)
        if gen.has_legal_move(color):
            return Outcome.check(color) if in_check else Outcome.in_progress()
        if in_check:
            return Outcome.checkmate(color.opposite)
        if stalemate_ends_game:
            return Outcome.stalemate()
        return Outcome.in_progress()
