from __future__ import annotations

from ..components import Direction, EnemyTag, Heading, Position
from ..state import GameState
from .motion import step

DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class WanderAI:
    """
    Random-walk enemies. Each tick an enemy re-rolls its heading with a small
    chance, then pushes one cell along it. A blocked enemy keeps its heading
    and tries again next tick.
    """

    def __init__(self, state: GameState) -> None:
        self.state = state

    def update(self) -> None:
        state = self.state
        rng = state.rng
        chance = state.config.enemy_turn_chance
        _, rows = state.world.view(EnemyTag, Position, Heading)
        for _, pos, heading in rows:
            if rng.random() < chance:
                heading.direction = rng.choice(DIRECTIONS)
            if heading.direction is None:
                continue
            step(state.grid, pos, heading.direction)
