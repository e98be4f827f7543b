from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, List, Tuple, Type, TypeVar

from .components import Direction

logger = logging.getLogger(__name__)

E = TypeVar("E")  # event type variable
Handler = Callable[[Any], None]


@dataclass(frozen=True)
class Event:
    """Base event marker class."""


# --- Intents (input collaborator -> core) ---
@dataclass(frozen=True)
class Quit(Event):
    pass


@dataclass(frozen=True)
class ToggleDebug(Event):
    pass


@dataclass(frozen=True)
class Restart(Event):
    pass


@dataclass(frozen=True)
class MoveIntent(Event):
    direction: Direction


@dataclass(frozen=True)
class PlaceBombIntent(Event):
    pass


# --- Outcomes (core -> status/log collaborators) ---
@dataclass(frozen=True)
class BombPlaced(Event):
    x: int
    y: int


@dataclass(frozen=True)
class BombDetonated(Event):
    x: int
    y: int


@dataclass(frozen=True)
class CrateDestroyed(Event):
    x: int
    y: int


@dataclass(frozen=True)
class EnemyKilled(Event):
    entity: int
    x: int
    y: int


@dataclass(frozen=True)
class PlayerKilled(Event):
    x: int
    y: int


@dataclass(frozen=True)
class PlayerWon(Event):
    pass


class EventBus:
    """
    Synchronous publish/subscribe with once=True support.

    - a failing handler is logged and skipped, the rest still run
    - unsubscribe by handle id
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[Type[Event], List[Tuple[int, bool, Handler]]] = DefaultDict(list)
        self._next_id: int = 1

    def subscribe(self, event_type: Type[E], handler: Handler, *, once: bool = False) -> int:
        handle_id = self._next_id
        self._next_id += 1
        self._subs[event_type].append((handle_id, once, handler))
        return handle_id

    def unsubscribe(self, event_type: Type[E], handle_id: int) -> None:
        subs = self._subs.get(event_type)
        if subs:
            self._subs[event_type] = [t for t in subs if t[0] != handle_id]

    def publish(self, event: Event) -> None:
        subs = self._subs.get(type(event), [])
        if not subs:
            return

        remove_ids: List[int] = []
        for handle_id, once, callback in list(subs):
            if once:
                remove_ids.append(handle_id)
            try:
                callback(event)
            except Exception:
                logger.exception("Handler %r failed for %s", callback, type(event).__name__)

        if remove_ids:
            self._subs[type(event)] = [t for t in self._subs[type(event)] if t[0] not in remove_ids]
