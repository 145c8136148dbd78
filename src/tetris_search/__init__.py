"""Heuristic placement search for a falling-block puzzle game.

Simulates every legal placement of the active piece (optionally via the
hold slot), scores each resulting board with a pluggable evaluator and
picks the best one.
"""

from .engine import Engine
from .errors import (
    InvalidMoveError,
    InvalidPositionError,
    InvalidWeightsError,
    InvariantViolation,
    NotReadyError,
    TetrisSearchError,
)
from .game import Features, GameConfig, Move, PieceType, Position
from .search import (
    CallableEvaluator,
    Evaluator,
    GameResult,
    LinearEvaluator,
    SearchResult,
    Weights,
    best_move,
    play_to_completion,
)

__all__ = [
    "CallableEvaluator",
    "Engine",
    "Evaluator",
    "Features",
    "GameConfig",
    "GameResult",
    "InvalidMoveError",
    "InvalidPositionError",
    "InvalidWeightsError",
    "InvariantViolation",
    "LinearEvaluator",
    "Move",
    "NotReadyError",
    "PieceType",
    "Position",
    "SearchResult",
    "TetrisSearchError",
    "Weights",
    "best_move",
    "play_to_completion",
]
