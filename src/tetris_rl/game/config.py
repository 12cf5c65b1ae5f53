from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .rules import ScoringRules


BOARD_WIDTH = 10
BOARD_HEIGHT = 20
SPAWN_X = 3
SPAWN_Y = 0
SPAWN_DELAY_MS = 200.0  # commands are ignored this long after a spawn


@dataclass(frozen=True)
class GameConfig:
    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT
    spawn_x: int = SPAWN_X
    spawn_y: int = SPAWN_Y
    spawn_delay_ms: float = SPAWN_DELAY_MS
    random_seed: Optional[int] = None
    rules: ScoringRules = field(default_factory=ScoringRules)


DEFAULT_CONFIG = GameConfig()
