"""Move search over simulated placements."""

from .evaluator import CallableEvaluator, Evaluator, LinearEvaluator, Weights
from .search import GameResult, SearchResult, best_move, iter_game, play_game, play_to_completion

__all__ = [
    "CallableEvaluator",
    "Evaluator",
    "GameResult",
    "LinearEvaluator",
    "SearchResult",
    "Weights",
    "best_move",
    "iter_game",
    "play_game",
    "play_to_completion",
]
