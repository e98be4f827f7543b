from __future__ import annotations

from typing import List, Optional, Tuple, Type

from ..components import Direction, GameStatus
from ..events import EventBus, MoveIntent, PlaceBombIntent
from ..state import GameState
from .bombs import BombSystem
from .motion import step


class PlayerController:
    """
    Player entry points. Intents arrive over the bus from the input layer,
    or are called directly. Everything is refused once the round is over,
    won or lost.
    """

    def __init__(self, state: GameState, bombs: BombSystem, bus: Optional[EventBus] = None) -> None:
        self.state = state
        self.bombs = bombs
        self.bus = bus
        self._handles: List[Tuple[Type, int]] = []
        if bus is not None:
            self._handles.append((MoveIntent, bus.subscribe(MoveIntent, self._on_move)))
            self._handles.append((PlaceBombIntent, bus.subscribe(PlaceBombIntent, self._on_bomb)))

    def detach(self) -> None:
        if self.bus is None:
            return
        for event_type, handle in self._handles:
            self.bus.unsubscribe(event_type, handle)
        self._handles.clear()

    # --- Events ---
    def _on_move(self, ev: MoveIntent) -> None:
        self.try_move(ev.direction)

    def _on_bomb(self, _: PlaceBombIntent) -> None:
        self.place_bomb()

    # --- Entry points ---
    def accepting_input(self) -> bool:
        return self.state.status is GameStatus.PLAYING

    def try_move(self, direction: Direction) -> bool:
        if not self.accepting_input():
            return False
        return step(self.state.grid, self.state.player_pos, direction)

    def place_bomb(self) -> Optional[int]:
        if not self.accepting_input():
            return None
        pos = self.state.player_pos
        return self.bombs.place_bomb(pos.gx, pos.gy)
