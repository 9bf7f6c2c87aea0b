"""Game layer: the turn controller and the bookkeeping around it.

Quick start::

    from chessrules.game import GameController

    ctrl = GameController()
    ctrl.attempt_move(ctrl.board["e2"], "e4")
"""

from chessrules.game.commands import CommandProcessor
from chessrules.game.controller import GameController, GameEvents
from chessrules.game.interfaces import IGameController, TurnPhase
from chessrules.game.player import Player
from chessrules.game.settings import GameSettings
from chessrules.game.state import GameState, MoveRecord, Placement, standard_placements

__all__ = [
    # Interfaces
    "IGameController",
    "TurnPhase",
    # Concrete
    "CommandProcessor",
    "GameController",
    "GameEvents",
    "GameSettings",
    "GameState",
    "MoveRecord",
    "Placement",
    "Player",
    "standard_placements",
]
