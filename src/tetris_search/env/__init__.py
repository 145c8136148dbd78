"""Gymnasium environments for tetris_search."""

from __future__ import annotations

from gymnasium.envs.registration import register

# One action per piece placement (column, rotation, hold)
register(
    id="TetrisPlacement-v0",
    entry_point="tetris_search.env.placement_env:PlacementEnv",
)

__all__ = ["TetrisPlacement-v0"]
