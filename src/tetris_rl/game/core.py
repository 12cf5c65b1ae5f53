from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .commands import Command, board_for
from .config import GameConfig
from .grid import GameGrid
from .pieces import create_piece
from .randomizer import BagRandomizer
from .state import GameState, GameStatistics, GameStatus, PendingAction, Position


logger = logging.getLogger(__name__)


class TetrisGame:
    """Owns the authoritative GameState and drives gravity, locking and spawning.

    The state itself is immutable; every method here computes a new state and
    swaps it in.
    """

    def __init__(self, config: Optional[GameConfig] = None, randomizer: Optional[BagRandomizer] = None) -> None:
        self.config = config or GameConfig()
        self.rules = self.config.rules
        self.randomizer = randomizer if randomizer is not None else BagRandomizer(self.config.random_seed)
        self.state = self._initial_state()

    @property
    def spawn_position(self) -> Position:
        return Position(self.config.spawn_x, self.config.spawn_y)

    def _initial_state(self, status: GameStatus = GameStatus.IDLE) -> GameState:
        board = GameGrid(self.config.width, self.config.height)
        return GameState(
            board=board.frozen_snapshot(),
            current_piece=None,
            position=self.spawn_position,
            next_piece=self.randomizer.next(),
            status=status,
        )

    # ---------- Queries ----------
    def get_state(self) -> GameState:
        return self.state

    def set_state(self, state: GameState) -> None:
        self.state = state

    def get_statistics(self) -> GameStatistics:
        s = self.state
        return GameStatistics(score=s.score, level=s.level, lines=s.lines, status=s.status)

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def lines(self) -> int:
        return self.state.lines

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def game_over(self) -> bool:
        return self.state.status is GameStatus.GAME_OVER

    # ---------- Lifecycle ----------
    def start_game(self) -> None:
        if self.state.status not in (GameStatus.IDLE, GameStatus.GAME_OVER):
            logger.debug("start ignored while %s", self.state.status.value)
            return
        self.randomizer.reset()
        self.state = self._initial_state(GameStatus.PLAYING)
        logger.debug("game started")
        self._spawn_piece()

    def pause(self) -> None:
        if self.state.status is GameStatus.PLAYING:
            self.state = replace(self.state, status=GameStatus.PAUSED)
            logger.debug("game paused")

    def resume(self) -> None:
        if self.state.status is GameStatus.PAUSED:
            self.state = replace(self.state, status=GameStatus.PLAYING)
            logger.debug("game resumed")

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.randomizer.seed(seed)
        else:
            self.randomizer.reset()
        self.state = self._initial_state()
        logger.debug("game reset")

    # ---------- Commands and ticks ----------
    def execute(self, command: Command) -> GameState:
        """Apply an input command to the current state."""
        self.state = command.execute(self.state)
        if self.state.pending is PendingAction.REFILL_PREVIEW:
            self._refill_preview()
        return self.state

    def update(self, delta_ms: float) -> None:
        if self.state.status is not GameStatus.PLAYING:
            return
        self.state = replace(self.state, clock_ms=self.state.clock_ms + delta_ms)

        if self.state.pending is PendingAction.REFILL_PREVIEW:
            self._refill_preview()
        if self.state.pending is PendingAction.LOCK:
            self._lock_piece()
            return

        timer = self.state.drop_timer_ms + delta_ms
        interval = self.rules.drop_interval_ms(self.state.level)
        if timer < interval:
            self.state = replace(self.state, drop_timer_ms=timer)
            return
        self.state = replace(self.state, drop_timer_ms=timer - interval)
        self._gravity_step()

    def _gravity_step(self) -> None:
        s = self.state
        if s.current_piece is None:
            return
        below = Position(s.position.x, s.position.y + 1)
        if board_for(s).can_place(s.current_piece, below):
            self.state = replace(s, position=below)
        else:
            self._lock_piece()

    def _refill_preview(self) -> None:
        self.state = replace(self.state, next_piece=self.randomizer.next(), pending=None)

    def _lock_piece(self) -> None:
        s = self.state
        assert s.current_piece is not None
        board = board_for(s)
        board.lock(s.current_piece, s.position)
        result = board.clear_completed_rows()
        gained = self.rules.score_for_lines(result.count, s.level)
        lines = s.lines + result.count
        level = self.rules.level_for_lines(lines)
        if result.count:
            logger.debug("cleared rows %s for %d points", list(result.cleared_rows), gained)
        if level != s.level:
            logger.debug("level up: %d -> %d", s.level, level)
        self.state = replace(
            s,
            board=board.frozen_snapshot(),
            current_piece=None,
            score=s.score + gained,
            lines=lines,
            level=level,
            pending=None,
            cleared_rows=result.cleared_rows,
        )
        self._spawn_piece()

    def _spawn_piece(self) -> None:
        s = self.state
        piece = s.next_piece if s.next_piece is not None else self.randomizer.next()
        upcoming = self.randomizer.next()
        spawn = self.spawn_position
        if not board_for(s).can_place(piece, spawn):
            self.state = replace(s, current_piece=None, next_piece=upcoming, status=GameStatus.GAME_OVER)
            logger.info("game over: score=%d lines=%d level=%d", s.score, s.lines, s.level)
            return
        self.state = replace(
            s,
            current_piece=create_piece(piece.type),
            position=spawn,
            next_piece=upcoming,
            can_hold=True,
            spawn_time_ms=s.clock_ms,
            drop_timer_ms=0.0,
        )
        logger.debug("spawned %s", piece.type.name)
