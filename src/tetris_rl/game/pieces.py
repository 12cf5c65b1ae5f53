from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


class RotationDirection(Enum):
    CW = 1
    CCW = -1


Shape = np.ndarray


def _shapes(*rows: List[List[int]]) -> Tuple[Shape, ...]:
    out = []
    for r in rows:
        arr = np.array(r, dtype=np.int8)
        arr.setflags(write=False)
        out.append(arr)
    return tuple(out)


# Orientation tables, index 0 is the spawn orientation. O has a single state,
# S and Z have two, the others four.
SHAPES: Dict[TetrominoType, Tuple[Shape, ...]] = {
    TetrominoType.I: _shapes(
        [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
        [[0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0]],
        [[0, 0, 0, 0], [0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0]],
        [[0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0]],
    ),
    TetrominoType.O: _shapes(
        [[1, 1], [1, 1]],
    ),
    TetrominoType.T: _shapes(
        [[0, 1, 0], [1, 1, 1], [0, 0, 0]],
        [[0, 1, 0], [0, 1, 1], [0, 1, 0]],
        [[0, 0, 0], [1, 1, 1], [0, 1, 0]],
        [[0, 1, 0], [1, 1, 0], [0, 1, 0]],
    ),
    TetrominoType.S: _shapes(
        [[0, 1, 1], [1, 1, 0], [0, 0, 0]],
        [[0, 1, 0], [0, 1, 1], [0, 0, 1]],
    ),
    TetrominoType.Z: _shapes(
        [[1, 1, 0], [0, 1, 1], [0, 0, 0]],
        [[0, 0, 1], [0, 1, 1], [0, 1, 0]],
    ),
    TetrominoType.J: _shapes(
        [[1, 0, 0], [1, 1, 1], [0, 0, 0]],
        [[0, 1, 1], [0, 1, 0], [0, 1, 0]],
        [[0, 0, 0], [1, 1, 1], [0, 0, 1]],
        [[0, 1, 0], [0, 1, 0], [1, 1, 0]],
    ),
    TetrominoType.L: _shapes(
        [[0, 0, 1], [1, 1, 1], [0, 0, 0]],
        [[0, 1, 0], [0, 1, 0], [0, 1, 1]],
        [[0, 0, 0], [1, 1, 1], [1, 0, 0]],
        [[1, 1, 0], [0, 1, 0], [0, 1, 0]],
    ),
}

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.O: "#f0f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.S: "#00f000",
    TetrominoType.Z: "#f00000",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
}


def _orientations(kind: TetrominoType) -> Tuple[Shape, ...]:
    try:
        return SHAPES[kind]
    except KeyError:
        raise ValueError(f"Unknown tetromino type: {kind!r}") from None


def num_rotations(kind: TetrominoType) -> int:
    return len(_orientations(kind))


def shape_for(kind: TetrominoType, rotation_state: int) -> Shape:
    shapes = _orientations(kind)
    if not 0 <= rotation_state < len(shapes):
        raise ValueError(f"Invalid rotation state {rotation_state} for tetromino {TetrominoType(kind).name}")
    return shapes[rotation_state]


@dataclass(frozen=True)
class Piece:
    """A tetromino in one of its orientations.

    Pieces are values: rotating returns a new Piece. The shape is derived from
    (type, rotation_state) so it is left out of comparisons.
    """

    type: TetrominoType
    rotation_state: int = 0
    color: str = ""
    shape: Shape = field(default=None, compare=False, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "shape", shape_for(self.type, self.rotation_state))
        if not self.color:
            object.__setattr__(self, "color", COLORS[self.type])

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        """Absolute (x, y) coordinates of the occupied sub-cells."""
        return [(origin_x + int(dx), origin_y + int(dy)) for dy, dx in np.argwhere(self.shape)]


def create_piece(kind: TetrominoType) -> Piece:
    """Fresh piece in its spawn orientation. Raises ValueError for unknown kinds."""
    return Piece(TetrominoType(kind))


def rotate_piece(piece: Piece, direction: RotationDirection) -> Piece:
    if not isinstance(direction, RotationDirection):
        raise ValueError(f"Unknown rotation direction: {direction!r}")
    if piece.type == TetrominoType.O:
        return piece
    n = num_rotations(piece.type)
    new_state = (piece.rotation_state + direction.value) % n
    return Piece(piece.type, new_state, piece.color)
