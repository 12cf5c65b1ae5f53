from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import pytest

from tetris_rl.game import (
    BagRandomizer,
    GameConfig,
    GameGrid,
    GameState,
    GameStatus,
    Position,
    TetrisGame,
    TetrominoType,
    create_piece,
)


class ScriptedRandomizer(BagRandomizer):
    """Deals piece types in a fixed, repeating order."""

    def __init__(self, types: Sequence[TetrominoType]) -> None:
        super().__init__(0)
        self.script = list(types)

    def _refill(self) -> None:
        self.bag = list(reversed(self.script))


NO_DELAY = GameConfig(spawn_delay_ms=0.0)


def board_with(cells: Iterable[Tuple[int, int]] = (), width: int = 10, height: int = 20,
               value: int = 1) -> np.ndarray:
    board = GameGrid(width, height)
    for x, y in cells:
        board.set_cell(x, y, value)
    return board.frozen_snapshot()


def make_state(kind: TetrominoType = TetrominoType.T, position: Tuple[int, int] = (3, 0),
               board: Optional[np.ndarray] = None, **overrides) -> GameState:
    fields = dict(
        board=board if board is not None else board_with(),
        current_piece=create_piece(kind),
        position=Position(*position),
        next_piece=create_piece(TetrominoType.I),
        status=GameStatus.PLAYING,
    )
    fields.update(overrides)
    return GameState(**fields)


@pytest.fixture
def scripted_game():
    def factory(*types: TetrominoType, config: GameConfig = NO_DELAY) -> TetrisGame:
        return TetrisGame(config, randomizer=ScriptedRandomizer(types))
    return factory
