from __future__ import annotations

from typing import Optional, Tuple

import pygame

from tetris_rl.game import GameState, GameStatus, Piece
from tetris_rl.game.pieces import COLORS, TetrominoType


def _hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return (20, 20, 26)
    try:
        return _hex_to_rgb(COLORS[TetrominoType(abs(v))])
    except ValueError:
        return (200, 200, 200)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self.font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        w = self.margin * 3 + (width + self.panel_cells) * self.cell_size
        h = self.margin * 2 + height * self.cell_size
        return w, h

    def _cell(self, surf: pygame.Surface, x: int, y: int, color: Tuple[int, int, int]) -> None:
        rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)
        pygame.draw.rect(surf, color, rect)

    def _grid_surface(self, state: GameState) -> pygame.Surface:
        h, w = state.board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                self._cell(surf, x, y, _color_for_value(int(state.board[y, x])))
        piece = state.current_piece
        if piece is not None:
            color = _hex_to_rgb(piece.color)
            for x, y in piece.cells_at(*state.position):
                if 0 <= y < h and 0 <= x < w:
                    self._cell(surf, x, y, color)
        return surf

    def _piece_preview(self, piece: Optional[Piece]) -> pygame.Surface:
        size = 4 * self.cell_size
        surf = pygame.Surface((size, size))
        surf.fill((10, 10, 14))
        if piece is not None:
            color = _hex_to_rgb(piece.color)
            for x, y in piece.cells_at(0, 0):
                self._cell(surf, x, y, color)
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int]) -> None:
        if self.font is None:
            self.font = pygame.font.SysFont(None, 24)
        screen.blit(self.font.render(text, True, (230, 230, 230)), pos)

    def draw(self, screen: pygame.Surface, state: GameState) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state), (self.margin, self.margin))

        h, w = state.board.shape
        x0 = self.margin * 2 + w * self.cell_size
        y = self.margin
        self._text(screen, "NEXT", (x0, y))
        screen.blit(self._piece_preview(state.next_piece), (x0, y + 24))
        y += 24 + 4 * self.cell_size + self.margin
        self._text(screen, "HOLD", (x0, y))
        screen.blit(self._piece_preview(state.held_piece), (x0, y + 24))
        y += 24 + 4 * self.cell_size + self.margin
        for line in (f"Score: {state.score}", f"Level: {state.level}", f"Lines: {state.lines}"):
            self._text(screen, line, (x0, y))
            y += 24

        overlay = {
            GameStatus.IDLE: "Press SPACE to start",
            GameStatus.PAUSED: "Paused - press P",
            GameStatus.GAME_OVER: "Game Over - press R",
        }.get(state.status)
        if overlay is not None:
            self._text(screen, overlay, (self.margin, 2))
        pygame.display.flip()
