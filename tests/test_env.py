from __future__ import annotations

from dataclasses import replace

import gymnasium as gym
import numpy as np
import pytest

import tetris_rl.env  # noqa: F401
from tetris_rl.env.tetris_env import Action, TetrisEnv
from tetris_rl.env.wrappers import ResampleInvalidActionWrapper
from tetris_rl.game import GameStatus, TetrominoType, create_piece


def test_reset_observation_in_space():
    env = TetrisEnv()
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert obs["board"].shape == (20, 10)
    # Falling piece is overlaid with negative values
    assert (obs["board"] < 0).sum() == 4
    assert obs["held"] == 0
    assert obs["can_hold"] == 1
    assert info["action_mask"].shape == (len(Action),)
    assert env.game.status is GameStatus.PLAYING


def test_seeded_resets_are_reproducible():
    a, b = TetrisEnv(), TetrisEnv()
    obs_a, _ = a.reset(seed=123)
    obs_b, _ = b.reset(seed=123)
    assert np.array_equal(obs_a["board"], obs_b["board"])
    assert obs_a["next"] == obs_b["next"]


def test_action_mask_at_spawn():
    env = TetrisEnv()
    env.reset(seed=1)
    mask = env.get_action_mask()
    assert mask[Action.NONE]
    assert mask[Action.LEFT]
    assert mask[Action.HARD_DROP]
    assert mask[Action.HOLD]


def test_action_mask_excludes_o_rotation():
    env = TetrisEnv()
    env.reset(seed=1)
    state = env.game.get_state()
    env.game.set_state(replace(state, current_piece=create_piece(TetrominoType.O)))
    mask = env.get_action_mask()
    assert not mask[Action.ROTATE_CW]
    assert not mask[Action.ROTATE_CCW]
    assert mask[Action.LEFT]


def test_hold_action_updates_observation():
    env = TetrisEnv()
    env.reset(seed=2)
    obs, _, _, _, info = env.step(Action.HOLD)
    assert obs["held"] != 0
    assert obs["can_hold"] == 0
    assert not info["action_mask"][Action.HOLD]


def test_hard_drops_eventually_end_the_episode():
    env = TetrisEnv()
    env.reset(seed=4)
    terminated = False
    for _ in range(500):
        _, reward, terminated, truncated, info = env.step(Action.HARD_DROP)
        assert isinstance(reward, float)
        if terminated:
            break
    assert terminated
    assert env.game.status is GameStatus.GAME_OVER
    assert info["score"] > 0


def test_truncation_after_max_steps():
    env = TetrisEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(Action.NONE) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_invalid_action_raises():
    env = TetrisEnv()
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(42)


def test_rgb_render():
    env = TetrisEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (20 * 12, 10 * 12, 3)
    assert img.dtype == np.uint8


def test_registered_env_with_resample_wrapper():
    env = ResampleInvalidActionWrapper(gym.make("Tetris-10x20-v0"))
    obs, info = env.reset(seed=0)
    # A second hold in a row is masked; the wrapper swaps it out
    for _ in range(20):
        obs, reward, terminated, truncated, info = env.step(Action.HOLD)
        if terminated or truncated:
            break
    assert env.get_action_mask().dtype == np.bool_
    env.close()
