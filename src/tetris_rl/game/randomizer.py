from __future__ import annotations

import random
from typing import List, Optional

from .pieces import Piece, TetrominoType, create_piece


class BagRandomizer:
    """7-bag piece supply.

    Each refill holds exactly one of every type in shuffled order, so the same
    type can never be more than 12 pieces apart.
    """

    PIECES = tuple(TetrominoType)

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)
        self.bag: List[TetrominoType] = []

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)
        self.bag = []

    def reset(self) -> None:
        self.bag = []

    def _refill(self) -> None:
        self.bag = list(self.PIECES)
        # random.shuffle is an in-place Fisher-Yates
        self.rng.shuffle(self.bag)

    def next(self) -> Piece:
        if not self.bag:
            self._refill()
        return create_piece(self.bag.pop())

    def peek(self) -> TetrominoType:
        if not self.bag:
            self._refill()
        return self.bag[-1]

    def __len__(self) -> int:
        return len(self.bag)
