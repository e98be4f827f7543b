from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

# ---- Board & Display ----
ROWS, COLS = 12, 12
TILE = 40
HUD_H = 36

# One simulation step per rendered frame
FPS = 60

# ---- Colors ----
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
BACKGROUND = (24, 24, 28)
GRID_LINE = (17, 17, 17)
WALL = (102, 102, 102)
CRATE = (185, 128, 93)
BOMB = (34, 34, 34)
EXPLOSION = (255, 165, 0)
ENEMY = (255, 0, 0)
PLAYER = (0, 255, 255)

# ---- Gameplay ----
PLAYER_START: Tuple[int, int] = (1, 1)
# Cells forced Empty so the player always has room to escape a bomb
START_POCKET: Tuple[Tuple[int, int], ...] = ((1, 1), (2, 1), (1, 2))
CRATE_CHANCE = 0.22
ENEMY_COUNT = 4
ENEMY_TURN_CHANCE = 0.03
BOMB_FUSE_TICKS = 60
EXPLOSION_TICKS = 20
SPAWN_MAX_ATTEMPTS = 10_000

# ---- Status text ----
STATUS_PLAYING = ""
STATUS_DIED = "You Died!"
STATUS_WON = "You Win!"


@dataclass
class GameConfig:
    """Tunables for a single round. Defaults mirror the module constants."""

    rows: int = ROWS
    cols: int = COLS
    crate_chance: float = CRATE_CHANCE
    enemy_count: int = ENEMY_COUNT
    enemy_turn_chance: float = ENEMY_TURN_CHANCE
    bomb_fuse: int = BOMB_FUSE_TICKS
    explosion_ticks: int = EXPLOSION_TICKS
    player_start: Tuple[int, int] = PLAYER_START
    start_pocket: Tuple[Tuple[int, int], ...] = field(default=START_POCKET)
    spawn_max_attempts: int = SPAWN_MAX_ATTEMPTS
    seed: Optional[int] = None

    def validate(self) -> None:
        # Border walls plus the 2x2 start pocket need at least 4x4
        if self.rows < 4 or self.cols < 4:
            raise ValueError(f"grid too small: {self.cols}x{self.rows}")
        if not 0.0 <= self.crate_chance <= 1.0:
            raise ValueError(f"crate_chance out of range: {self.crate_chance}")
        if not 0.0 <= self.enemy_turn_chance <= 1.0:
            raise ValueError(f"enemy_turn_chance out of range: {self.enemy_turn_chance}")
        if self.enemy_count < 0:
            raise ValueError(f"enemy_count must be >= 0, got {self.enemy_count}")
        if self.bomb_fuse <= 0 or self.explosion_ticks <= 0:
            raise ValueError("bomb_fuse and explosion_ticks must be positive")
        if self.spawn_max_attempts <= 0:
            raise ValueError("spawn_max_attempts must be positive")
        sx, sy = self.player_start
        if not (0 < sx < self.cols - 1 and 0 < sy < self.rows - 1):
            raise ValueError(f"player_start {self.player_start} is not an interior cell")


# Presentation toggles (runtime-togglable, never read by the simulation)
@dataclass
class DebugFlags:
    show_grid: bool = True
    show_stats: bool = False

DEBUG = DebugFlags()
