"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessrules.core.enums import Color
from chessrules.core.move_generator import MoveGenerator
from chessrules.game.controller import GameController
from chessrules.game.state import GameState

StateFactory = Callable[..., GameState]
ControllerFactory = Callable[..., GameController]


@pytest.fixture
def make_state() -> StateFactory:
    """Build a validated custom position from placement strings like ``"KLe1"``."""

    def _make(*placements: str, active: Color = Color.LIGHT) -> GameState:
        return GameState.from_placements(placements, active)

    return _make


@pytest.fixture
def make_ctrl() -> ControllerFactory:
    """Controller over a custom position."""

    def _make(*placements: str, active: Color = Color.LIGHT) -> GameController:
        return GameController.from_placements(placements, active)

    return _make


@pytest.fixture
def ctrl() -> GameController:
    """Controller over the standard starting position."""
    return GameController()


@pytest.fixture
def start_gen() -> MoveGenerator:
    return GameState.standard().generator()
