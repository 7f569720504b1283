from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from bubble_swerve.game import SwerveGame
from bubble_swerve.game.shapes import color_for_value


EMPTY = (20, 20, 26)
HUD_HEIGHT = 40


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return EMPTY if v == 0 else color_for_value(v)


class Renderer:
    """Draws cells as bubbles in a square area so the window survives board rotation."""

    def __init__(self, cell_size: int = 28, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font = None

    def window_size(self, game: SwerveGame) -> Tuple[int, int]:
        side = max(game.width, game.height) * self.cell_size
        return side + self.margin * 2, side + self.margin * 2 + HUD_HEIGHT

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        radius = self.cell_size // 2 - 1
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                center = (x * self.cell_size + self.cell_size // 2, y * self.cell_size + self.cell_size // 2)
                pygame.draw.circle(surf, _color_for_value(v), center, radius)
                if v < 0:
                    # active piece outline
                    pygame.draw.circle(surf, (255, 255, 255), center, radius, 1)
        return surf

    def _hud(self, game: SwerveGame) -> str:
        text = f"Score {game.score}   Level {game.level}   Lines {game.lines_cleared}   Gravity {game.orientation.name}"
        if game.game_over:
            text += "   GAME OVER - Enter to restart"
        elif game.paused:
            text += "   PAUSED"
        return text

    def draw(self, screen: pygame.Surface, game: SwerveGame) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        state = game.get_state()
        grid_surf = self._grid_surface(state)
        screen.fill((10, 10, 14))
        h, w = state.shape
        side = max(w, h) * self.cell_size
        # centre the (possibly non-square) board inside the square play area
        offset_x = self.margin + (side - w * self.cell_size) // 2
        offset_y = HUD_HEIGHT + self.margin + (side - h * self.cell_size) // 2
        screen.blit(grid_surf, (offset_x, offset_y))
        screen.blit(self._font.render(self._hud(game), True, (230, 230, 230)), (self.margin, 10))
        pygame.display.flip()
