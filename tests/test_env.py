import gymnasium as gym
import numpy as np

import tetris_search.env  # noqa: F401
from tetris_search.env.placement_env import NUM_ACTIONS, PlacementEnv, compute_action_mask, decode_action, encode_action
from tetris_search.env.wrappers import ResampleInvalidActionWrapper
from tetris_search.game import GameConfig, Move, PieceType, Position


def test_action_encoding():
    assert NUM_ACTIONS == 80
    assert encode_action(Move(0, 0, False)) == 0
    assert encode_action(Move(9, 3, True)) == 79
    assert decode_action(encode_action(Move(4, 2, True))) == Move(4, 2, True)


def test_registered_env_reset_and_step():
    env = gym.make("TetrisPlacement-v0")
    obs, info = env.reset(seed=3)
    assert env.observation_space.contains(obs)
    position = env.unwrapped.position
    assert info["action_mask"].sum() == len(position.legal_moves())
    action = int(np.flatnonzero(info["action_mask"])[0])
    obs, reward, terminated, truncated, info = env.step(action)
    assert not terminated
    assert info["placements"] == 1
    assert reward == 0.0
    env.close()


def test_invalid_action_is_penalized_and_ignored(board):
    env = PlacementEnv(GameConfig(random_seed=0))
    env.reset()
    env.position = Position(board=board, current_piece=PieceType.O, next_pieces=(PieceType.T,) * 4)
    bad = encode_action(Move(9, 0, False))  # square sticks out of the board
    assert not env.get_action_mask()[bad]
    obs, reward, terminated, truncated, info = env.step(bad)
    assert reward == env.invalid_action_penalty
    assert info["invalid_action"]
    assert info["placements"] == 0
    assert not obs["board"].any()


def test_line_clear_reward(board, fill_rows):
    fill_rows(board, [21], except_cols=[0])
    env = PlacementEnv(GameConfig(random_seed=0))
    env.reset()
    env.position = Position(board=board, current_piece=PieceType.I, next_pieces=(PieceType.T,) * 4)
    _, reward, terminated, _, info = env.step(encode_action(Move(0, 1, False)))
    assert reward == 40.0
    assert info["lines"] == 1
    assert not terminated


def test_topping_out_terminates(doomed_board):
    env = PlacementEnv(GameConfig(random_seed=0), terminal_penalty=-5.0)
    env.reset()
    env.position = Position(board=doomed_board, current_piece=PieceType.T, next_pieces=(PieceType.O,) * 4)
    _, reward, terminated, _, _ = env.step(encode_action(Move(0, 0, False)))
    assert terminated
    assert reward == -5.0


def test_truncates_at_placement_cap():
    env = PlacementEnv(GameConfig(random_seed=0, max_placements=2))
    _, info = env.reset()
    truncated = False
    for _ in range(2):
        action = int(np.flatnonzero(info["action_mask"])[0])
        _, _, terminated, truncated, info = env.step(action)
    assert truncated


def test_resample_wrapper_replaces_invalid_actions(board):
    env = ResampleInvalidActionWrapper(PlacementEnv(GameConfig(random_seed=0)))
    env.reset(seed=0)
    env.unwrapped.position = Position(board=board, current_piece=PieceType.O, next_pieces=(PieceType.T,) * 4)
    _, _, _, _, info = env.step(encode_action(Move(9, 0, False)))
    assert info["placements"] == 1
    assert "invalid_action" not in info


def test_mask_matches_legal_moves(board):
    pos = Position(board=board, current_piece=PieceType.I, next_pieces=(PieceType.O,))
    mask = compute_action_mask(pos)
    assert mask.sum() == 70
    assert mask[encode_action(Move(6, 0, False))]
    assert not mask[encode_action(Move(7, 0, False))]


def test_render_rgb_array():
    env = PlacementEnv(GameConfig(random_seed=0), render_mode="rgb_array")
    env.reset()
    img = env.render()
    assert img.shape == (22 * 12, 10 * 12, 3)
    assert img.dtype == np.uint8
