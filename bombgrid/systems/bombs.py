from __future__ import annotations

import logging
from typing import List, Optional

from ..components import CROSS_OFFSETS, Blast, Fuse, Position
from ..events import BombDetonated, BombPlaced, CrateDestroyed, EventBus
from ..state import GameState

logger = logging.getLogger(__name__)


class BombSystem:
    """
    Bomb fuses, cross-shaped detonation and explosion lifetimes.

    Both countdowns walk an immutable world view, so entities destroyed
    mid-loop never cause a neighbour to be skipped.
    """

    def __init__(self, state: GameState, bus: Optional[EventBus] = None) -> None:
        self.state = state
        self.bus = bus

    # ---- Bombs ----
    def bomb_at(self, x: int, y: int) -> Optional[int]:
        eids, rows = self.state.world.view(Position, Fuse)
        for eid, (pos, _) in zip(eids, rows):
            if (pos.gx, pos.gy) == (x, y):
                return eid
        return None

    def place_bomb(self, x: int, y: int) -> Optional[int]:
        """New bomb at (x, y). At most one bomb per cell: a second placement returns None."""
        if self.bomb_at(x, y) is not None:
            return None
        eid = self.state.add_bomb(x, y)
        logger.debug("Bomb placed at (%d, %d)", x, y)
        self._publish(BombPlaced(x, y))
        return eid

    def advance_bombs(self) -> List[int]:
        """Tick every fuse; detonate and remove the expired ones. Returns new explosion ids."""
        world = self.state.world
        created: List[int] = []
        eids, rows = world.view(Position, Fuse)
        for eid, (pos, fuse) in zip(eids, rows):
            fuse.ticks -= 1
            if fuse.ticks <= 0:
                created.extend(self.detonate(pos.gx, pos.gy))
                world.destroy(eid)
        return created

    def detonate(self, x: int, y: int) -> List[int]:
        """
        Five explosions: (x, y) and its four orthogonal neighbours.

        Offsets are neither clipped to the board nor stopped by walls. Each
        offset holding a crate turns Empty; walls are left as they are.
        """
        grid = self.state.grid
        created: List[int] = []
        for dx, dy in CROSS_OFFSETS:
            ex, ey = x + dx, y + dy
            if grid.destroy_crate(ex, ey):
                logger.debug("Crate destroyed at (%d, %d)", ex, ey)
                self._publish(CrateDestroyed(ex, ey))
            created.append(self.state.add_explosion(ex, ey))
        logger.debug("Bomb detonated at (%d, %d)", x, y)
        self._publish(BombDetonated(x, y))
        return created

    # ---- Explosions ----
    def advance_explosions(self) -> int:
        """Tick every explosion; remove the expired ones. Returns how many were removed."""
        world = self.state.world
        removed = 0
        eids, rows = world.view(Blast)
        for eid, (blast,) in zip(eids, rows):
            blast.ticks -= 1
            if blast.ticks <= 0:
                world.destroy(eid)
                removed += 1
        return removed

    def _publish(self, event) -> None:
        if self.bus is not None:
            self.bus.publish(event)
