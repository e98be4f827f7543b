from __future__ import annotations

from typing import Callable, Dict

import pygame

from ..components import Direction
from ..events import EventBus, MoveIntent, PlaceBombIntent, Quit, Restart, ToggleDebug

MOVE_KEYS: Dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_w: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
}


class InputSystem:
    """
    Translates pygame key events into intents. Gameplay intents are only
    forwarded while the round is still being played.
    """

    def __init__(self, bus: EventBus, accepting_input: Callable[[], bool]) -> None:
        self.bus = bus
        self.accepting_input = accepting_input

    def handle_event(self, ev: pygame.event.Event) -> None:
        if ev.type == pygame.QUIT:
            self.bus.publish(Quit())
            return
        if ev.type != pygame.KEYDOWN:
            return

        if ev.key == pygame.K_ESCAPE:
            self.bus.publish(Quit())
        elif ev.key == pygame.K_F1:
            self.bus.publish(ToggleDebug())
        elif ev.key == pygame.K_r:
            self.bus.publish(Restart())
        elif not self.accepting_input():
            return
        elif ev.key in MOVE_KEYS:
            self.bus.publish(MoveIntent(MOVE_KEYS[ev.key]))
        elif ev.key == pygame.K_SPACE:
            self.bus.publish(PlaceBombIntent())
