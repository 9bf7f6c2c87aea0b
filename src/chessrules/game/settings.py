"""Game settings."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color


@dataclass
class GameSettings:
    """All caller-configurable rule options."""

    # Chess rule: Light (White) moves first.
    first_to_move: Color = Color.LIGHT

    # When False a stalemated side simply has no moves and the game stays open.
    stalemate_ends_game: bool = True

    # Emit a DEBUG record for every rejected move or promotion choice.
    log_rejections: bool = True
