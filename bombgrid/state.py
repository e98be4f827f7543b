from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .components import Blast, Cell, EnemyTag, Fuse, GameStatus, Heading, PlayerTag, Position, Vitals
from .constants import STATUS_DIED, STATUS_PLAYING, STATUS_WON, GameConfig
from .ecs import World
from .grid import Grid
from .mapgen import generate_grid, spawn_enemies

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of one tick, handed to the renderer."""

    cells: Tuple[Tuple[Cell, ...], ...]
    player: Coord
    player_alive: bool
    enemies: Tuple[Coord, ...]
    bombs: Tuple[Coord, ...]
    explosions: Tuple[Coord, ...]
    status: GameStatus
    status_text: str


@dataclass
class GameState:
    """
    Everything one round owns: the grid, the entity world, the player id
    and the random source every stochastic system draws from.
    """

    config: GameConfig
    grid: Grid
    world: World
    player: int
    rng: random.Random
    seed: Optional[int] = None
    tick: int = 0

    # ---- Player ----
    @property
    def player_pos(self) -> Position:
        pos = self.world.get(self.player, Position)
        if pos is None:
            raise LookupError(f"player entity {self.player} has no Position")
        return pos

    @property
    def player_alive(self) -> bool:
        vitals = self.world.get(self.player, Vitals)
        return bool(vitals and vitals.alive)

    # ---- Spawning ----
    def add_enemy(self, x: int, y: int) -> int:
        return self.world.spawn(EnemyTag(), Position(x, y), Heading())

    def add_bomb(self, x: int, y: int, ticks: Optional[int] = None) -> int:
        return self.world.spawn(Position(x, y), Fuse(self.config.bomb_fuse if ticks is None else ticks))

    def add_explosion(self, x: int, y: int, ticks: Optional[int] = None) -> int:
        return self.world.spawn(Position(x, y), Blast(self.config.explosion_ticks if ticks is None else ticks))

    # ---- Queries ----
    def enemy_count(self) -> int:
        return self.world.count(EnemyTag)

    def enemy_cells(self) -> Tuple[Coord, ...]:
        _, rows = self.world.view(EnemyTag, Position)
        return tuple(pos.cell for _, pos in rows)

    def bomb_cells(self) -> Tuple[Coord, ...]:
        _, rows = self.world.view(Position, Fuse)
        return tuple(pos.cell for pos, _ in rows)

    def explosion_cells(self) -> Tuple[Coord, ...]:
        _, rows = self.world.view(Position, Blast)
        return tuple(pos.cell for pos, _ in rows)

    # ---- Status ----
    @property
    def status(self) -> GameStatus:
        """Derived each time: a dead player outranks an empty enemy list."""
        if not self.player_alive:
            return GameStatus.PLAYER_DIED
        if self.enemy_count() == 0:
            return GameStatus.PLAYER_WON
        return GameStatus.PLAYING

    @property
    def status_text(self) -> str:
        status = self.status
        if status is GameStatus.PLAYER_DIED:
            return STATUS_DIED
        if status is GameStatus.PLAYER_WON:
            return STATUS_WON
        return STATUS_PLAYING

    def snapshot(self) -> Snapshot:
        return Snapshot(
            cells=tuple(tuple(row) for row in self.grid.cells),
            player=self.player_pos.cell,
            player_alive=self.player_alive,
            enemies=self.enemy_cells(),
            bombs=self.bomb_cells(),
            explosions=self.explosion_cells(),
            status=self.status,
            status_text=self.status_text,
        )


def new_game(config: Optional[GameConfig] = None) -> GameState:
    """Generate the map, place the player and spawn enemies, all from one seeded rng."""
    config = config or GameConfig()
    config.validate()

    seed = config.seed if config.seed is not None else random.randrange(2**32)
    rng = random.Random(seed)

    grid = generate_grid(
        config.rows, config.cols, rng,
        crate_chance=config.crate_chance,
        start_pocket=config.start_pocket,
    )
    world = World()
    sx, sy = config.player_start
    player = world.spawn(PlayerTag(), Position(sx, sy), Vitals())

    state = GameState(config=config, grid=grid, world=world, player=player, rng=rng, seed=seed)
    for pos in spawn_enemies(grid, config.enemy_count, config.player_start, rng, config.spawn_max_attempts):
        state.add_enemy(pos.gx, pos.gy)

    logger.info(
        "New game: seed=%d size=%dx%d enemies=%d", seed, config.cols, config.rows, state.enemy_count()
    )
    return state
