"""Game module for Tetris RL.

Exports the game-state engine and supporting classes:
- GameGrid: Board representation, placement checks and line clearing
- Piece / TetrominoType: Tetromino catalog with rotation states
- get_kick_offsets: Wall kick lookup for rotations
- BagRandomizer: 7-bag piece supply
- ScoringRules / GameConfig: Scoring, leveling and board configuration
- GameState: Immutable game snapshot
- MoveCommand, RotateCommand, ...: Pure input transitions
- TetrisGame: State manager driving gravity, locking and spawning
"""

from .grid import ClearResult, GameGrid, EMPTY
from .pieces import Piece, RotationDirection, TetrominoType, create_piece, rotate_piece
from .kicks import get_kick_offsets
from .randomizer import BagRandomizer
from .rules import ScoringRules
from .config import GameConfig, DEFAULT_CONFIG
from .state import GameState, GameStatistics, GameStatus, PendingAction, Position
from .commands import (
    Command,
    HardDropCommand,
    HoldCommand,
    MoveCommand,
    RotateCommand,
    SoftDropCommand,
)
from .core import TetrisGame

__all__ = [
    "ClearResult",
    "GameGrid",
    "EMPTY",
    "Piece",
    "RotationDirection",
    "TetrominoType",
    "create_piece",
    "rotate_piece",
    "get_kick_offsets",
    "BagRandomizer",
    "ScoringRules",
    "GameConfig",
    "DEFAULT_CONFIG",
    "GameState",
    "GameStatistics",
    "GameStatus",
    "PendingAction",
    "Position",
    "Command",
    "HardDropCommand",
    "HoldCommand",
    "MoveCommand",
    "RotateCommand",
    "SoftDropCommand",
    "TetrisGame",
]
