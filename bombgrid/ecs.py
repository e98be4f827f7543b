from __future__ import annotations

from dataclasses import dataclass
from typing import Any, DefaultDict, Dict, FrozenSet, List, Optional, Tuple, Type, TypeVar

T = TypeVar("T")

View = Tuple[Tuple[int, ...], Tuple[Tuple[Any, ...], ...]]


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0


class World:
    """
    Entity store for one round.

      - one dict per component type: entity id -> component
      - view() returns IMMUTABLE tuples, so systems may destroy entities
        while walking a view without skipping or shifting anything
      - views are cached and invalidated when a store they read changes
    """

    def __init__(self) -> None:
        self._next_eid: int = 1
        self.stores: Dict[Type[Any], Dict[int, Any]] = {}
        self._view_cache: Dict[FrozenSet[Type[Any]], View] = {}
        self._view_dirty: Dict[FrozenSet[Type[Any]], bool] = {}
        self._comp_to_views: DefaultDict[Type[Any], List[FrozenSet[Type[Any]]]] = DefaultDict(list)
        self.cache_stats = CacheStats()

    # ---- Entities ----
    def spawn(self, *components: Any) -> int:
        eid = self._next_eid
        self._next_eid += 1
        for component in components:
            self.add(eid, component)
        return eid

    def alive(self, entity: int) -> bool:
        return any(entity in store for store in self.stores.values())

    def destroy(self, entity: int) -> None:
        for comp_type, store in self.stores.items():
            if entity in store:
                del store[entity]
                self._mark_dirty_for(comp_type)

    # ---- Components ----
    def add(self, entity: int, component: Any) -> None:
        store = self.stores.setdefault(type(component), {})
        store[entity] = component
        self._mark_dirty_for(type(component))

    def get(self, entity: int, comp_type: Type[T]) -> Optional[T]:
        store = self.stores.get(comp_type)
        return None if store is None else store.get(entity)

    def count(self, comp_type: Type[Any]) -> int:
        return len(self.stores.get(comp_type, ()))

    # ---- Views ----
    def view(self, *comp_types: Type[Any]) -> View:
        """Entities having every given component, ordered by id, with their components."""
        key = frozenset(comp_types)
        cached = self._view_cache.get(key)
        if cached is not None and not self._view_dirty.get(key, True):
            self.cache_stats.hits += 1
            return self._reorder(cached, key, comp_types)

        entities = None
        for ct in key:
            ids = set(self.stores.get(ct, {}).keys())
            entities = ids if entities is None else (entities & ids)

        ent_sorted = tuple(sorted(entities or ()))
        ordered = tuple(sorted(key, key=lambda ct: ct.__qualname__))
        rows = tuple(tuple(self.stores[ct][e] for ct in ordered) for e in ent_sorted)

        result = (ent_sorted, rows)
        self._view_cache[key] = result
        self._view_dirty[key] = False
        for ct in key:
            lst = self._comp_to_views[ct]
            if key not in lst:
                lst.append(key)

        self.cache_stats.misses += 1
        return self._reorder(result, key, comp_types)

    @staticmethod
    def _reorder(cached: View, key: FrozenSet[Type[Any]], comp_types: Tuple[Type[Any], ...]) -> View:
        # Cache rows are stored in a canonical order; hand them back in call order.
        ordered = tuple(sorted(key, key=lambda ct: ct.__qualname__))
        if ordered == comp_types:
            return cached
        idx = [ordered.index(ct) for ct in comp_types]
        eids, rows = cached
        return eids, tuple(tuple(row[i] for i in idx) for row in rows)

    def _mark_dirty_for(self, comp_type: Type[Any]) -> None:
        for key in self._comp_to_views.get(comp_type, []):
            self._view_dirty[key] = True
