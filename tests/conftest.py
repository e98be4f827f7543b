"""
Pytest fixtures: seeded configs and hand-built rounds.
"""

import random

import pytest

from bombgrid.components import PlayerTag, Position, Vitals
from bombgrid.constants import GameConfig
from bombgrid.ecs import World
from bombgrid.events import EventBus
from bombgrid.grid import Grid
from bombgrid.state import GameState

# 7x7 board: walls on the border, one crate at (3,1), one inner wall at (3,3)
OPEN_ROWS = [
    "#######",
    "#..c..#",
    "#.....#",
    "#..#..#",
    "#.....#",
    "#.....#",
    "#######",
]


@pytest.fixture
def config():
    return GameConfig(seed=1234)


@pytest.fixture
def open_grid():
    return Grid.from_rows(OPEN_ROWS)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def make_state():
    """Factory for a GameState on a hand-built grid, skipping map generation."""

    def _make(rows=None, player=(1, 1), enemies=(), seed=0, **overrides):
        grid = Grid.from_rows(rows or OPEN_ROWS)
        cfg = GameConfig(rows=grid.h, cols=grid.w, seed=seed, **overrides)
        world = World()
        pid = world.spawn(PlayerTag(), Position(*player), Vitals())
        state = GameState(config=cfg, grid=grid, world=world, player=pid, rng=random.Random(seed), seed=seed)
        for x, y in enemies:
            state.add_enemy(x, y)
        return state

    return _make
