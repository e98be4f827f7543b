from __future__ import annotations

import logging
from typing import Optional

from ..components import Blast, EnemyTag, GameStatus, Position, Vitals
from ..events import EnemyKilled, EventBus, PlayerKilled, PlayerWon
from ..state import GameState

logger = logging.getLogger(__name__)


class OutcomeSystem:
    """
    Explosion overlaps and the win check, in a fixed order:
    player death, then enemy removal, then win. A tick that kills the player
    and the last enemy together reports PLAYER_DIED.
    """

    def __init__(self, state: GameState, bus: Optional[EventBus] = None) -> None:
        self.state = state
        self.bus = bus
        self._announced: Optional[GameStatus] = None

    def evaluate(self) -> GameStatus:
        state = self.state
        world = state.world
        blasts = {pos.cell for pos, _ in world.view(Position, Blast)[1]}

        vitals = world.get(state.player, Vitals)
        pos = state.player_pos
        if vitals is not None and vitals.alive and pos.cell in blasts:
            vitals.alive = False
            logger.info("Player killed at (%d, %d) on tick %d", pos.gx, pos.gy, state.tick)
            self._publish(PlayerKilled(pos.gx, pos.gy))

        eids, rows = world.view(EnemyTag, Position)
        for eid, (_, epos) in zip(eids, rows):
            if epos.cell in blasts:
                world.destroy(eid)
                logger.debug("Enemy %d destroyed at (%d, %d)", eid, epos.gx, epos.gy)
                self._publish(EnemyKilled(eid, epos.gx, epos.gy))

        status = state.status
        if status is GameStatus.PLAYER_WON and self._announced is not GameStatus.PLAYER_WON:
            logger.info("All enemies cleared on tick %d", state.tick)
            self._publish(PlayerWon())
        self._announced = status
        return status

    def _publish(self, event) -> None:
        if self.bus is not None:
            self.bus.publish(event)
