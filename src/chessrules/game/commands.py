"""Line-oriented text binding over :class:`GameController`.

Understood lines (case-insensitive)::

    e2 e4       move the piece on e2 to e4
    e4 d5*      same, with an optional trailing capture marker
    e2 e4 e7 e5 two moves in a row, Light then Dark
    QLd1        place a Light queen on d1 (only while setting up)
    =Q          choose the promotion piece
    _moves      list every legal move of the side to move
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from chessrules.core.enums import MoveResult
from chessrules.core.errors import InvalidSetup
from chessrules.core.piece import kind_from_symbol
from chessrules.game.controller import GameController
from chessrules.game.settings import GameSettings
from chessrules.game.state import Placement

_LOGGER = logging.getLogger(__name__)

_HALF = r"([a-h][1-8])\s+([a-h][1-8])\s*\*?"
_MOVE_RE = re.compile(rf"^{_HALF}$", re.IGNORECASE)
_DOUBLE_MOVE_RE = re.compile(rf"^{_HALF}\s+{_HALF}$", re.IGNORECASE)
_PLACE_RE = re.compile(r"^([KQBNRP])([LD])([a-h])([1-8])$", re.IGNORECASE)
_PROMOTE_RE = re.compile(r"^=?\s*([QRBNKP])$", re.IGNORECASE)
_MOVES_RE = re.compile(r"^_moves$", re.IGNORECASE)


class CommandProcessor:
    """Feeds text commands to a game.

    Placement lines are collected until the first move (or :meth:`start`),
    at which point a controller is built from them; with no placements the
    standard position is used.
    """

    __slots__ = ("_controller", "_placements", "_settings", "output")

    def __init__(
        self,
        controller: GameController | None = None,
        settings: GameSettings | None = None,
    ) -> None:
        self._controller = controller
        self._placements: list[Placement] = []
        self._settings = settings
        self.output: list[str] = []

    @property
    def controller(self) -> GameController:
        return self.start()

    def start(self) -> GameController:
        """Build the controller from collected placements (once)."""
        if self._controller is None:
            if self._placements:
                self._controller = GameController.from_placements(
                    self._placements, settings=self._settings
                )
            else:
                self._controller = GameController(settings=self._settings)
        return self._controller

    # ── Processing ───────────────────────────────────────────────────────

    def process_file(self, path: str | Path) -> int:
        """Process a command file line by line; return how many succeeded."""
        with open(path, encoding="utf-8") as fh:
            return self.process_lines(fh)

    def process_lines(self, lines: Iterable[str]) -> int:
        """Process every non-blank line; return how many succeeded."""
        return sum(1 for line in lines if line.strip() and self.process_line(line))

    def process_line(self, line: str) -> bool:
        """Execute one command. Returns True if it changed the game."""
        line = line.strip()

        if _PLACE_RE.match(line):
            return self._place(Placement.parse(line))
        if m := _MOVE_RE.match(line):
            return self._move(m.group(1).lower(), m.group(2).lower())
        if m := _DOUBLE_MOVE_RE.match(line):
            o1, d1, o2, d2 = (s.lower() for s in m.groups())
            # the second move is only tried if the first one applied
            return self._move(o1, d1) and self._move(o2, d2)
        if m := _PROMOTE_RE.match(line):
            return self._promote(m.group(1))
        if _MOVES_RE.match(line):
            if self._started() is not None:
                self.output.extend(self.describe_moves())
            return False

        _LOGGER.warning("Invalid command: [%s]", line)
        return False

    def describe_moves(self) -> list[str]:
        """One line per legal move of the side to move, captures annotated."""
        ctrl = self.start()
        lines: list[str] = []
        for piece, squares in ctrl.all_legal_moves().items():
            for sq in squares:
                text = f"{str(piece):<15} [{piece.location.name} => {sq.name}]"
                if sq.occupant is not None and piece.is_opponent(sq.occupant):
                    text += f" * can_capture: {sq.occupant}"
                lines.append(text)
        return lines

    # ── Command handlers ─────────────────────────────────────────────────

    def _started(self) -> GameController | None:
        """:meth:`start`, but a bad setup is logged and discarded."""
        try:
            return self.start()
        except InvalidSetup:
            _LOGGER.exception("Placed pieces do not form a valid position")
            self._placements.clear()
            return None

    def _place(self, placement: Placement) -> bool:
        if self._controller is not None:
            _LOGGER.warning("Cannot place %s: game already started", placement.square)
            return False
        self._placements.append(placement)
        return True

    def _move(self, origin: str, destination: str) -> bool:
        ctrl = self._started()
        if ctrl is None:
            return False

        piece = ctrl.board[origin]
        if piece is None:
            _LOGGER.warning("There is no piece to move on: %s", origin)
            return False
        result = ctrl.attempt_move(piece, destination)
        if result == MoveResult.REJECTED:
            _LOGGER.warning("Invalid for %s at %s to move to %s", piece, origin, destination)
            return False
        return True

    def _promote(self, symbol: str) -> bool:
        ctrl = self._started()
        if ctrl is None:
            return False
        return ctrl.resolve_promotion(kind_from_symbol(symbol)) == MoveResult.APPLIED
