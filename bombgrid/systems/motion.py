from __future__ import annotations

from ..components import Direction, Position
from ..grid import Grid


def can_move(grid: Grid, x: int, y: int) -> bool:
    """
    Shared passability rule for the player and enemies: on the board and Empty.
    Bombs, explosions and other actors never block.
    """
    return grid.is_empty(x, y)


def step(grid: Grid, pos: Position, direction: Direction) -> bool:
    """Move `pos` one cell along `direction` if passable. Returns True if it moved."""
    nx, ny = pos.gx + direction.dx, pos.gy + direction.dy
    if not can_move(grid, nx, ny):
        return False
    pos.gx, pos.gy = nx, ny
    return True
