from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Cell(Enum):
    EMPTY = 0
    WALL = 1
    CRATE = 2


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class GameStatus(Enum):
    PLAYING = "playing"
    PLAYER_DIED = "player_died"
    PLAYER_WON = "player_won"


# Center first, then the four orthogonal neighbours
CROSS_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, 0), (1, 0), (-1, 0), (0, 1), (0, -1))


# ---- Core spatial components ----
@dataclass
class Position:
    gx: int
    gy: int

    @property
    def cell(self) -> Tuple[int, int]:
        return self.gx, self.gy


# ---- Actors ----
@dataclass
class PlayerTag:
    pass


@dataclass
class EnemyTag:
    pass


@dataclass
class Vitals:
    alive: bool = True


@dataclass
class Heading:
    """Enemy wander heading. None until the first re-roll."""
    direction: Optional[Direction] = None


# ---- Hazards ----
@dataclass
class Fuse:
    """Bomb countdown in ticks."""
    ticks: int


@dataclass
class Blast:
    """Explosion lifetime in ticks."""
    ticks: int
