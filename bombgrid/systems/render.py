from __future__ import annotations

from typing import Iterable, Optional, Tuple

import pygame

from ..components import Cell
from ..constants import (
    BACKGROUND,
    BOMB,
    CRATE,
    DEBUG,
    ENEMY,
    EXPLOSION,
    GRID_LINE,
    HUD_H,
    PLAYER,
    TILE,
    WALL,
    WHITE,
)
from ..ecs import CacheStats
from ..state import Snapshot


class RenderSystem:
    """
    Draws a Snapshot: walls, crates, bombs, explosions, enemies, player,
    then the status line under the board.
    """

    def __init__(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        self.screen = screen
        self.font = font
        self._status_cache: Tuple[str, Optional[pygame.Surface]] = ("", None)

    # ---- Helpers ----
    def _tile(self, x: int, y: int, color: Tuple[int, int, int], rows: int, cols: int) -> None:
        # Explosions may sit off the board; they stay in state but are not drawn
        if not (0 <= x < cols and 0 <= y < rows):
            return
        rect = pygame.Rect(x * TILE, y * TILE, TILE, TILE)
        pygame.draw.rect(self.screen, color, rect)
        if DEBUG.show_grid:
            pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def _tiles(self, cells: Iterable[Tuple[int, int]], color: Tuple[int, int, int], rows: int, cols: int) -> None:
        for x, y in cells:
            self._tile(x, y, color, rows, cols)

    def _status_surface(self, text: str) -> Optional[pygame.Surface]:
        cached_text, surf = self._status_cache
        if text != cached_text or surf is None:
            surf = self.font.render(text, True, WHITE) if text else None
            self._status_cache = (text, surf)
        return surf

    # ---- Main ----
    def render(self, snap: Snapshot, stats: Optional[CacheStats] = None) -> None:
        self.screen.fill(BACKGROUND)
        rows = len(snap.cells)
        cols = len(snap.cells[0]) if rows else 0

        for y, row in enumerate(snap.cells):
            for x, cell in enumerate(row):
                if cell is Cell.WALL:
                    self._tile(x, y, WALL, rows, cols)
                elif cell is Cell.CRATE:
                    self._tile(x, y, CRATE, rows, cols)

        self._tiles(snap.bombs, BOMB, rows, cols)
        self._tiles(snap.explosions, EXPLOSION, rows, cols)
        self._tiles(snap.enemies, ENEMY, rows, cols)
        if snap.player_alive:
            self._tile(snap.player[0], snap.player[1], PLAYER, rows, cols)

        # HUD
        base_y = rows * TILE + (HUD_H - self.font.get_height()) // 2
        status = self._status_surface(snap.status_text)
        if status is not None:
            self.screen.blit(status, (8, base_y))
        if DEBUG.show_stats and stats is not None:
            txt = self.font.render(
                f"views {stats.hits}/{stats.misses}  bombs {len(snap.bombs)}  enemies {len(snap.enemies)}",
                True,
                (200, 200, 240),
            )
            self.screen.blit(txt, (cols * TILE - txt.get_width() - 8, base_y))
