"""Front-end timing helpers: key auto-repeat and the fixed-timestep accumulator.

Nothing here touches pygame so it can be driven from tests or other loops.
"""

from __future__ import annotations

from typing import Dict, Hashable, List

DAS_MS = 133.0  # delay before a held key starts repeating
ARR_MS = 33.0   # interval between repeats once repeating
UPDATE_HZ = 60
MAX_FRAME_MS = 1000.0


class KeyRepeat:
    """Delayed auto shift / auto repeat rate for held keys.

    `update` returns how many times each held key should fire this frame.
    """

    def __init__(self, das_ms: float = DAS_MS, arr_ms: float = ARR_MS) -> None:
        self.das_ms = das_ms
        self.arr_ms = arr_ms
        self.held: Dict[Hashable, float] = {}
        self.fired: Dict[Hashable, int] = {}

    def press(self, key: Hashable) -> None:
        if key not in self.held:
            self.held[key] = 0.0
            self.fired[key] = 0

    def release(self, key: Hashable) -> None:
        self.held.pop(key, None)
        self.fired.pop(key, None)

    def clear(self) -> None:
        self.held.clear()
        self.fired.clear()

    def _due(self, held_ms: float) -> int:
        # Initial press, then one more at DAS, then every ARR after it
        if held_ms < self.das_ms:
            return 1
        if self.arr_ms <= 0:
            return 2
        return 2 + int((held_ms - self.das_ms) // self.arr_ms)

    def update(self, dt_ms: float) -> List[Hashable]:
        out: List[Hashable] = []
        for key, held_ms in self.held.items():
            due = self._due(held_ms)
            out.extend([key] * (due - self.fired[key]))
            self.fired[key] = due
            self.held[key] = held_ms + dt_ms
        return out


class FixedTimestep:
    """Accumulates frame time and hands out whole fixed-length update steps."""

    def __init__(self, hz: int = UPDATE_HZ, max_frame_ms: float = MAX_FRAME_MS) -> None:
        self.step_ms = 1000.0 / hz
        self.max_frame_ms = max_frame_ms
        self.accumulator = 0.0

    def advance(self, frame_ms: float) -> int:
        # Cap the catch-up after long stalls
        self.accumulator += min(frame_ms, self.max_frame_ms)
        steps = int(self.accumulator // self.step_ms)
        self.accumulator -= steps * self.step_ms
        return steps

    @property
    def interpolation(self) -> float:
        return self.accumulator / self.step_ms
