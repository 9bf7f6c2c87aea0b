"""Exception taxonomy.

Only set-up contract violations are raised. Rejected moves and promotion
choices are reported as :class:`~chessrules.core.enums.MoveResult` values.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for errors raised by the rules engine."""


class InvalidSetup(ChessError, ValueError):
    """The initial position violates a board or king-count invariant."""
