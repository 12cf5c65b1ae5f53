from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

import numpy as np

from .pieces import Piece


class GameStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


class PendingAction(Enum):
    """Deferred work a command leaves for the manager's next update."""

    LOCK = "lock"  # hard drop landed the piece
    REFILL_PREVIEW = "refill_preview"  # hold promoted the preview piece


class Position(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True, eq=False)
class GameState:
    """Snapshot of a game. Every transition builds a new instance.

    `board` is a read-only array; equality is identity so that a rejected
    command can be recognised by `new_state is state`.
    """

    board: np.ndarray
    current_piece: Optional[Piece]
    position: Position
    next_piece: Optional[Piece]
    held_piece: Optional[Piece] = None
    can_hold: bool = True
    score: int = 0
    level: int = 1
    lines: int = 0
    status: GameStatus = GameStatus.IDLE
    pending: Optional[PendingAction] = None
    clock_ms: float = 0.0
    spawn_time_ms: float = 0.0
    drop_timer_ms: float = 0.0
    cleared_rows: Tuple[int, ...] = ()  # rows removed by the most recent lock

    @property
    def lock_requested(self) -> bool:
        return self.pending is PendingAction.LOCK


@dataclass(frozen=True)
class GameStatistics:
    score: int
    level: int
    lines: int
    status: GameStatus
