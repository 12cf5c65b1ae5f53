"""Input commands.

Each command is a pure transition `execute(state) -> state`. A command that
cannot be applied returns the very same state object.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .config import DEFAULT_CONFIG, GameConfig
from .grid import GameGrid
from .kicks import get_kick_offsets
from .pieces import RotationDirection, create_piece, rotate_piece
from .state import GameState, GameStatus, PendingAction, Position


def board_for(state: GameState) -> GameGrid:
    return GameGrid.from_array(state.board)


def is_command_allowed(state: GameState, config: GameConfig) -> bool:
    if state.current_piece is None or state.status is not GameStatus.PLAYING:
        return False
    # A piece waiting on a deferred lock is already committed
    if state.pending is not None:
        return False
    return state.clock_ms - state.spawn_time_ms >= config.spawn_delay_ms


@dataclass(frozen=True)
class Command:
    config: GameConfig = field(default=DEFAULT_CONFIG, kw_only=True)

    def execute(self, state: GameState) -> GameState:
        if not is_command_allowed(state, self.config):
            return state
        return self.apply(state)

    def apply(self, state: GameState) -> GameState:
        """Transition for an allowed command; implemented by each subclass."""
        raise NotImplementedError


@dataclass(frozen=True)
class MoveCommand(Command):
    dx: int = 0
    dy: int = 0

    def apply(self, state: GameState) -> GameState:
        board = board_for(state)
        target = Position(state.position.x + self.dx, state.position.y + self.dy)
        if board.can_place(state.current_piece, target):
            return replace(state, position=target)
        return state


@dataclass(frozen=True)
class RotateCommand(Command):
    direction: RotationDirection = RotationDirection.CW

    def apply(self, state: GameState) -> GameState:
        board = board_for(state)
        piece = state.current_piece
        rotated = rotate_piece(piece, self.direction)
        if rotated == piece:
            return state
        kicks = get_kick_offsets(piece.type, piece.rotation_state, rotated.rotation_state)
        for dx, dy in kicks:
            # Kick dy points up, grid y points down
            target = Position(state.position.x + dx, state.position.y - dy)
            if board.can_place(rotated, target):
                return replace(state, current_piece=rotated, position=target)
        return state


@dataclass(frozen=True)
class SoftDropCommand(Command):
    def apply(self, state: GameState) -> GameState:
        board = board_for(state)
        target = Position(state.position.x, state.position.y + 1)
        if board.can_place(state.current_piece, target):
            return replace(
                state,
                position=target,
                score=state.score + self.config.rules.soft_drop_points,
            )
        return state


def drop_distance(board: GameGrid, state: GameState) -> int:
    x, y = state.position
    distance = 0
    while board.can_place(state.current_piece, (x, y + distance + 1)):
        distance += 1
    return distance


@dataclass(frozen=True)
class HardDropCommand(Command):
    """Drops to the lowest free row and asks the manager to lock there."""

    def apply(self, state: GameState) -> GameState:
        distance = drop_distance(board_for(state), state)
        return replace(
            state,
            position=Position(state.position.x, state.position.y + distance),
            score=state.score + distance * self.config.rules.hard_drop_points,
            pending=PendingAction.LOCK,
        )


@dataclass(frozen=True)
class HoldCommand(Command):
    """Swap the active piece with the held one, once per spawn.

    With an empty hold slot the preview piece comes into play and the manager
    is asked to draw a new preview.
    """

    def apply(self, state: GameState) -> GameState:
        if not state.can_hold:
            return state
        stashed = create_piece(state.current_piece.type)
        pending = None
        next_piece = state.next_piece
        if state.held_piece is not None:
            incoming = create_piece(state.held_piece.type)
        else:
            if next_piece is None:
                return state
            incoming = next_piece
            next_piece = None
            pending = PendingAction.REFILL_PREVIEW
        spawn = Position(self.config.spawn_x, self.config.spawn_y)
        if not board_for(state).can_place(incoming, spawn):
            return state
        return replace(
            state,
            current_piece=incoming,
            position=spawn,
            next_piece=next_piece,
            held_piece=stashed,
            can_hold=False,
            pending=pending,
        )
