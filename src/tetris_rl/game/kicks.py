"""Wall kick tables.

Offsets are (dx, dy) with dy positive meaning *up*; grid rows grow downward,
so callers subtract dy from the row coordinate.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .pieces import SHAPES, TetrominoType


Offset = Tuple[int, int]
KickTable = Dict[Tuple[int, int], Tuple[Offset, ...]]

NO_KICK: Tuple[Offset, ...] = ((0, 0),)

JLSTZ_KICKS: KickTable = {
    (0, 1): ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (1, 0): ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    (1, 2): ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    (2, 1): ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (2, 3): ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    (3, 2): ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (3, 0): ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (0, 3): ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
}

I_KICKS: KickTable = {
    (0, 1): ((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    (1, 0): ((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    (1, 2): ((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
    (2, 1): ((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    (2, 3): ((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    (3, 2): ((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    (3, 0): ((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    (0, 3): ((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
}


def get_kick_offsets(kind: TetrominoType, from_state: int, to_state: int) -> Tuple[Offset, ...]:
    """Ordered candidate offsets for rotating `kind` from one state to another.

    The first entry is always (0, 0). Pairs missing from the table fall back to
    (0, 0) alone.
    """
    if kind not in SHAPES:
        raise ValueError(f"Unknown tetromino type: {kind!r}")
    if kind == TetrominoType.O:
        return NO_KICK
    table = I_KICKS if kind == TetrominoType.I else JLSTZ_KICKS
    return table.get((from_state, to_state), NO_KICK)
