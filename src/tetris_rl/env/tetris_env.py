from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_rl.game import (
    Command,
    GameConfig,
    GameGrid,
    GameStatus,
    HardDropCommand,
    HoldCommand,
    MoveCommand,
    RotateCommand,
    RotationDirection,
    SoftDropCommand,
    TetrisGame,
)


logger = logging.getLogger(__name__)

FRAME_MS = 1000.0 / 60.0


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    SOFT_DROP = 5
    HARD_DROP = 6
    HOLD = 7


def build_commands(config: GameConfig) -> Dict[Action, Command]:
    return {
        Action.LEFT: MoveCommand(-1, 0, config=config),
        Action.RIGHT: MoveCommand(1, 0, config=config),
        Action.ROTATE_CW: RotateCommand(RotationDirection.CW, config=config),
        Action.ROTATE_CCW: RotateCommand(RotationDirection.CCW, config=config),
        Action.SOFT_DROP: SoftDropCommand(config=config),
        Action.HARD_DROP: HardDropCommand(config=config),
        Action.HOLD: HoldCommand(config=config),
    }


def _compute_action_mask(game: TetrisGame, commands: Dict[Action, Command]) -> np.ndarray:
    """True for actions that would change the current state. NONE is always allowed."""
    mask = np.zeros((len(Action),), dtype=np.bool_)
    mask[Action.NONE] = True
    state = game.get_state()
    for action, command in commands.items():
        mask[action] = command.execute(state) is not state
    return mask


class TetrisEnv(gym.Env):
    """One env step = one input action followed by one fixed-length frame."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 frame_ms: float = FRAME_MS,
                 max_episode_steps: int = 50_000,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        # Agents act every frame, so the post-spawn grace window is off by default
        self.config = config or GameConfig(spawn_delay_ms=0.0)
        self.game = TetrisGame(self.config)
        self.commands = build_commands(self.config)
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "score": 0.01,   # reward per engine point
            "lines": 1.0,    # reward per line cleared
            "holes": 0.1,    # penalize holes created on lock
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.config.height, self.config.width
        n_types = 7
        # Board cells: locked pieces as 1..7, the falling piece as -1..-7
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_types, high=n_types, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(n_types + 1),
                "held": spaces.Discrete(n_types + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0
        self._last_obs: Optional[Dict[str, Any]] = None

    def _get_obs(self) -> Dict[str, Any]:
        state = self.game.get_state()
        board = np.array(state.board, dtype=np.int8, copy=True)
        piece = state.current_piece
        if piece is not None and state.status is not GameStatus.GAME_OVER:
            for x, y in piece.cells_at(*state.position):
                if 0 <= y < self.config.height and 0 <= x < self.config.width:
                    board[y, x] = -int(piece.type)
        return {
            "board": board,
            "next": int(state.next_piece.type) if state.next_piece is not None else 0,
            "held": int(state.held_piece.type) if state.held_piece is not None else 0,
            "can_hold": int(state.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        stats = self.game.get_statistics()
        return {
            "action_mask": self.get_action_mask(),
            "score": stats.score,
            "level": stats.level,
            "lines": stats.lines,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game, self.commands)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self.game.start_game()
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        try:
            act = Action(int(action))
        except ValueError:
            raise ValueError(f"Invalid action {action!r}; expected 0..{len(Action) - 1}") from None

        before = self.game.get_state()
        holes_before = GameGrid.from_array(before.board).count_holes()

        if act is not Action.NONE:
            self.game.execute(self.commands[act])
        self.game.update(self.frame_ms)

        after = self.game.get_state()
        holes_after = GameGrid.from_array(after.board).count_holes()

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(after.score - before.score),
            "lines": self.reward_weights["lines"] * float(after.lines - before.lines),
            "holes": -self.reward_weights["holes"] * float(max(0, holes_after - holes_before)),
        }

        self._steps += 1
        terminated = after.status is GameStatus.GAME_OVER
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
            logger.debug("episode finished after %d steps, score=%d", self._steps, after.score)

        reward = float(sum(reward_components.values()))
        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            board = self._last_obs["board"] if self._last_obs is not None else self._get_obs()["board"]
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = int(board[y, x])
                    if v > 0:
                        color = (70, 200, 120)
                    elif v < 0:
                        color = (230, 230, 90)
                    else:
                        color = (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
