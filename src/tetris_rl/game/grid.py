from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .pieces import Piece


EMPTY = 0

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class ClearResult:
    count: int
    cleared_rows: Tuple[int, ...]


class GameGrid:
    """Playfield of locked cells.

    The grid uses 0 for empty cells and the tetromino type value (1..7) for
    locked cells. Row 0 is the top of the visible field; pieces may hang above
    it with negative y while entering.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    @classmethod
    def from_array(cls, cells: np.ndarray) -> "GameGrid":
        height, width = cells.shape
        board = cls(width, height)
        board.grid = np.array(cells, dtype=np.int8, copy=True)
        return board

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Optional[int]:
        """Cell value, or None when (x, y) is off the board."""
        if not self.is_inside(x, y):
            return None
        return int(self.grid[y, x])

    def set_cell(self, x: int, y: int, value: int) -> None:
        # Out-of-bounds writes are ignored; callers check placement first
        if self.is_inside(x, y):
            self.grid[y, x] = value

    def can_place(self, piece: Piece, position: Coordinate) -> bool:
        x0, y0 = position
        for x, y in piece.cells_at(x0, y0):
            if x < 0 or x >= self.width or y >= self.height:
                return False
            # Rows above the field are not checked for occupancy
            if y >= 0 and self.grid[y, x] != EMPTY:
                return False
        return True

    def lock(self, piece: Piece, position: Coordinate) -> None:
        x0, y0 = position
        value = int(piece.type)
        for x, y in piece.cells_at(x0, y0):
            if 0 <= y < self.height:
                self.set_cell(x, y, value)

    def clear_completed_rows(self) -> ClearResult:
        full_rows = np.flatnonzero(np.all(self.grid != EMPTY, axis=1))
        if full_rows.size == 0:
            return ClearResult(count=0, cleared_rows=())
        num = int(full_rows.size)
        # Remove full rows together and add empty rows at the top
        remaining = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        return ClearResult(count=num, cleared_rows=tuple(int(r) for r in full_rows))

    def is_empty(self) -> bool:
        return not bool(np.any(self.grid != EMPTY))

    def locked_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.flatnonzero(np.any(self.grid != EMPTY, axis=1))
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.grid[:, x]:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def snapshot(self) -> np.ndarray:
        return self.grid.copy()

    def frozen_snapshot(self) -> np.ndarray:
        """Read-only copy, suitable for storing in a GameState."""
        cells = self.grid.copy()
        cells.setflags(write=False)
        return cells
