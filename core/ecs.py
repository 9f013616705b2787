"""
core/ecs.py — Entity-Component-System

Entities are ints. Components are any object, stored by type.
Query by component types to get matching entities.

    w = World()
    e = w.spawn()
    w.add(e, Position(5.0, 3.0, room="crypt"))
    w.add(e, Health(30))
    w.room_add(e, "crypt")

    for eid, pos, hp in w.query_room("crypt", Position, Health):
        ...

Killed entities stay in the stores until ``purge()`` but are skipped
by every query, so a dead enemy is never visible to targeting even
within the frame it died.
"""

from __future__ import annotations
from typing import Any, Iterator


class World:
    def __init__(self):
        self._next_id = 0
        self._stores: dict[type, dict[int, Any]] = {}
        self._dead: set[int] = set()
        # Room index: room name → entity IDs, in spawn order.
        # A dict is used as an ordered set so room queries yield a
        # stable collection order frame after frame.
        self._room_index: dict[str, dict[int, None]] = {}

    # -- Room helpers --

    def room_add(self, eid: int, room: str):
        """Register *eid* in the room index for *room*."""
        self._room_index.setdefault(room, {})[eid] = None

    def room_set(self, eid: int, new_room: str):
        """Move *eid* to *new_room* in the index."""
        for eids in self._room_index.values():
            eids.pop(eid, None)
        self.room_add(eid, new_room)

    def room_entities(self, room: str) -> list[int]:
        """Living entity IDs in *room*, ascending spawn order."""
        return sorted(eid for eid in self._room_index.get(room, {})
                      if eid not in self._dead)

    def query_room(self, room: str, *types: type) -> Iterator[tuple]:
        """Yield ``(eid, comp1, comp2, ...)`` for living entities in *room*."""
        if not types:
            return
        stores = [self._stores.get(t, {}) for t in types]
        for eid in self.room_entities(room):
            if all(eid in s for s in stores):
                yield (eid, *(s[eid] for s in stores))

    # -- Entities --

    def spawn(self) -> int:
        self._next_id += 1
        return self._next_id

    def kill(self, eid: int):
        self._dead.add(eid)

    def alive(self, eid: int) -> bool:
        return eid not in self._dead

    def purge(self):
        """Remove dead entities from all stores. Call once per frame."""
        for store in self._stores.values():
            for eid in self._dead:
                store.pop(eid, None)
        for eids in self._room_index.values():
            for eid in self._dead:
                eids.pop(eid, None)
        self._dead.clear()

    def clear_room(self, room: str):
        """Kill every entity registered in *room* (room exit)."""
        for eid in list(self._room_index.get(room, {})):
            self.kill(eid)

    # -- Components --

    def add(self, eid: int, comp: Any):
        t = type(comp)
        if t not in self._stores:
            self._stores[t] = {}
        self._stores[t][eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        return self._stores.get(comp_type, {}).get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid in self._stores.get(comp_type, {})

    def remove(self, eid: int, comp_type: type):
        store = self._stores.get(comp_type)
        if store and eid in store:
            del store[eid]

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield (eid, comp1, comp2, ...) for entities that have ALL types."""
        if not types:
            return
        # Iterate over the smallest bucket
        buckets = [(t, self._stores.get(t, {})) for t in types]
        buckets.sort(key=lambda b: len(b[1]))
        smallest = buckets[0][1]
        for eid in list(smallest):
            if eid in self._dead or eid < 0:
                continue
            if all(eid in b for _, b in buckets):
                yield (eid, *(self._stores[t][eid] for t in types))

    def query_one(self, *types: type) -> tuple | None:
        """Return first match or None."""
        for result in self.query(*types):
            return result
        return None

    # -- Resources (singletons, not tied to entities) --

    def set_res(self, resource: Any):
        t = type(resource)
        if t not in self._stores:
            self._stores[t] = {}
        self._stores[t][-1] = resource

    def res(self, res_type: type) -> Any | None:
        return self._stores.get(res_type, {}).get(-1)
