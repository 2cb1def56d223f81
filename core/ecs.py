"""
core/ecs.py — Entity-Component-System

An escape world is small (player, guard, key, door) but every system
reads it the same way: entities are ints, components are plain
dataclasses stored by type, and systems ask for the combinations they
need.

    w = World()
    pid = w.spawn()
    w.add(pid, Position(60.0, 60.0))
    w.add(pid, Velocity())

    for eid, pos, vel in w.query(Position, Velocity):
        ...

World-wide singletons (tile grid, event bus, game state, clock, dev log)
are *resources*, one per type, kept apart from entity components.
"""

from __future__ import annotations
from typing import Any, Iterator


class World:
    def __init__(self):
        self._last_eid = 0
        self._components: dict[type, dict[int, Any]] = {}
        self._resources: dict[type, Any] = {}

    # -- Entities --

    def spawn(self) -> int:
        """Hand out the next entity id (1, 2, 3 …)."""
        self._last_eid += 1
        return self._last_eid

    # -- Components --

    def add(self, eid: int, comp: Any):
        self._components.setdefault(type(comp), {})[eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        store = self._components.get(comp_type)
        return store.get(eid) if store else None

    def has(self, eid: int, comp_type: type) -> bool:
        store = self._components.get(comp_type)
        return bool(store) and eid in store

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield ``(eid, comp1, comp2, …)`` for entities holding every type.

        Walks the smallest store and probes the others.
        """
        if not types:
            return
        stores = [self._components.get(t) for t in types]
        if not all(stores):
            return
        driver = min(stores, key=len)
        for eid in list(driver):
            if all(eid in s for s in stores):
                yield (eid, *(s[eid] for s in stores))

    def query_one(self, *types: type) -> tuple | None:
        """First match of ``query(*types)``, or None."""
        return next(self.query(*types), None)

    def all_of(self, comp_type: type) -> Iterator[tuple[int, Any]]:
        """Yield (eid, component) for every entity with this type."""
        yield from list(self._components.get(comp_type, {}).items())

    # -- Resources --

    def set_res(self, resource: Any):
        self._resources[type(resource)] = resource

    def res(self, res_type: type) -> Any | None:
        return self._resources.get(res_type)

    # -- Debug --

    def entity_ids(self) -> set[int]:
        """Ids that hold at least one component."""
        return {eid for store in self._components.values() for eid in store}
