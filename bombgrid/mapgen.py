from __future__ import annotations

import logging
import random
from typing import Iterable, List, Tuple

from .components import Cell, Position
from .constants import CRATE_CHANCE, SPAWN_MAX_ATTEMPTS, START_POCKET
from .grid import Grid

logger = logging.getLogger(__name__)


class MapGenerationError(RuntimeError):
    """The generated map cannot host the requested enemies."""


def generate_grid(
    rows: int,
    cols: int,
    rng: random.Random,
    crate_chance: float = CRATE_CHANCE,
    start_pocket: Iterable[Tuple[int, int]] = START_POCKET,
) -> Grid:
    """
    Walled border, random crates inside, then the start pocket cleared.
    Draws one rng.random() per interior cell, row by row.
    """
    grid = Grid(cols, rows)
    for y in range(rows):
        for x in range(cols):
            if grid.is_border(x, y):
                grid.set_cell(x, y, Cell.WALL)
            elif rng.random() < crate_chance:
                grid.set_cell(x, y, Cell.CRATE)

    for x, y in start_pocket:
        if grid.in_bounds(x, y) and not grid.is_border(x, y):
            grid.set_cell(x, y, Cell.EMPTY)
    return grid


def spawn_enemies(
    grid: Grid,
    count: int,
    excluded: Tuple[int, int],
    rng: random.Random,
    max_attempts: int = SPAWN_MAX_ATTEMPTS,
) -> List[Position]:
    """
    Rejection-sample `count` enemy cells: Empty and not `excluded`.

    Two enemies may land on the same cell. Raises MapGenerationError when
    no candidate cell exists or the draws run out.
    """
    if count <= 0:
        return []
    if not any(cell != excluded for cell in grid.cells_of(Cell.EMPTY)):
        raise MapGenerationError("no empty cell available for enemies")

    spawned: List[Position] = []
    attempts = 0
    while len(spawned) < count:
        if attempts >= max_attempts:
            raise MapGenerationError(
                f"placed {len(spawned)}/{count} enemies after {attempts} draws"
            )
        attempts += 1
        x = rng.randrange(grid.w)
        y = rng.randrange(grid.h)
        if grid.is_empty(x, y) and (x, y) != excluded:
            spawned.append(Position(x, y))

    logger.debug("Spawned %d enemies in %d draws", count, attempts)
    return spawned
