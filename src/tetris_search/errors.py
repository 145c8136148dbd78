"""Exceptions raised by tetris_search.

Game over is not an error: placements that top out return ``None`` and the
search reports it on its result object.
"""

from __future__ import annotations


class TetrisSearchError(Exception):
    """Base class for all library errors."""


class InvalidPositionError(TetrisSearchError, ValueError):
    """An injected position snapshot is malformed."""


class InvalidMoveError(TetrisSearchError, ValueError):
    """A move cannot be applied to the position (bad rotation or column)."""


class InvalidWeightsError(TetrisSearchError, ValueError):
    """Evaluator weights name a feature that does not exist."""


class NotReadyError(TetrisSearchError):
    """A decision was requested before an evaluator was loaded."""


class InvariantViolation(TetrisSearchError, AssertionError):
    """Internal consistency check failed; indicates a bug, not bad input."""
