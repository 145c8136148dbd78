"""Game module for tetris_search.

Exports the game-state simulator:
- PieceType / shape: piece catalog with precomputed rotations
- draw: 7-bag piece supply
- Position: immutable game state with legal moves and placement physics
- Features: board statistics consumed by evaluators
- ScoringRules: line-clear score table
"""

from .bag import draw, fresh_bag
from .core import GameConfig, Move, Position
from .features import FEATURE_NAMES, Features, extract_features
from .grid import BOARD_HEIGHT, BOARD_WIDTH, BUFFER_ROWS, format_board
from .pieces import NUM_ROTATIONS, PieceType, shape
from .rules import ScoringRules

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "BUFFER_ROWS",
    "FEATURE_NAMES",
    "Features",
    "GameConfig",
    "Move",
    "NUM_ROTATIONS",
    "PieceType",
    "Position",
    "ScoringRules",
    "draw",
    "extract_features",
    "format_board",
    "fresh_bag",
    "shape",
]
