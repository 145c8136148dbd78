from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_search.game import BOARD_HEIGHT, BOARD_WIDTH, NUM_ROTATIONS, GameConfig, Move, Position, PieceType


NUM_ACTIONS = 2 * NUM_ROTATIONS * BOARD_WIDTH

PIECE_COLORS = {
    0: (30, 30, 36),
    1: (240, 160, 40),
    2: (50, 90, 230),
    3: (70, 200, 120),
    4: (220, 60, 60),
    5: (160, 70, 200),
    6: (230, 220, 60),
    7: (60, 200, 220),
}


def encode_action(move: Move) -> int:
    return (int(move.use_swap) * NUM_ROTATIONS + move.rotation) * BOARD_WIDTH + move.column


def decode_action(action: int) -> Move:
    column = action % BOARD_WIDTH
    action //= BOARD_WIDTH
    rotation = action % NUM_ROTATIONS
    use_swap = bool(action // NUM_ROTATIONS)
    return Move(column, rotation, use_swap)


def compute_action_mask(position: Position) -> np.ndarray:
    mask = np.zeros((NUM_ACTIONS,), dtype=np.bool_)
    for move in position.legal_moves():
        mask[encode_action(move)] = True
    return mask


class PlacementEnv(gym.Env):
    """One step = one piece placement chosen from the legal (column, rotation, hold) moves."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 invalid_action_penalty: float = -1.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)

        k = self.config.queue_length
        n_pieces = len(PieceType) + 1  # 0 means no piece

        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=len(PieceType), shape=(BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8),
                "current": spaces.Discrete(n_pieces),
                "next": spaces.Box(low=0, high=len(PieceType), shape=(k,), dtype=np.int8),
                "pocket": spaces.Discrete(n_pieces),
            }
        )
        self.action_space = spaces.Discrete(NUM_ACTIONS)

        self._rng = random.Random(self.config.random_seed)
        self.position = Position.new_game(self._rng, k)
        self._placements = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.config.queue_length
        nxt = np.zeros((k,), dtype=np.int8)
        for i, p in enumerate(self.position.next_pieces[:k]):
            nxt[i] = p
        return {
            "board": np.array(self.position.board, dtype=np.int8),
            "current": int(self.position.current_piece),
            "next": nxt,
            "pocket": int(self.position.pocket or 0),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": compute_action_mask(self.position),
            "score": self.position.score,
            "lines": self.position.lines,
            "placements": self._placements,
            "features": self.position.features().as_dict(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self._rng = random.Random(seed)
        self.position = Position.new_game(self._rng, self.config.queue_length)
        self._placements = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        move = decode_action(int(action))

        terminated = False
        truncated = False

        if not compute_action_mask(self.position)[int(action)]:
            info = self._get_info()
            info["invalid_action"] = True
            return self._get_obs(), self.invalid_action_penalty, terminated, truncated, info

        before = self.position.score
        next_position = self.position.apply(move, self.config.regenerate_next, self._rng)
        if next_position is None:
            terminated = True
            reward = self.terminal_penalty
        else:
            reward = float(next_position.score - before)
            self.position = next_position
            self._placements += 1
            if self.config.max_placements is not None and self._placements >= self.config.max_placements:
                truncated = True

        info = self._get_info()
        info["move"] = move
        return self._get_obs(), reward, terminated, truncated, info

    # Mask exposure for wrappers/MaskablePPO
    def get_action_mask(self) -> np.ndarray:
        return compute_action_mask(self.position)

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.position.board
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = PIECE_COLORS[int(grid[y, x])]
            return img
        return None

    def close(self) -> None:
        pass
