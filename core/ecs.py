"""
core/ecs.py — Entity/component store for one maze level

Entities are ints handed out by ``spawn()``.  Components are plain
dataclass instances filed by their type.

    w = World()
    z = w.spawn()
    w.add(z, Position(5.0, 3.0))
    w.add(z, Pursuer(speed=1.2))

    for eid, pos, pursuer in w.query(Position, Pursuer):
        ...

A rebuild throws the whole World away, so ids are never reused within a
level and nothing is ever despawned.  Singletons such as ``GameClock``
are stored as *resources* (``set_res`` / ``res``), one per type.
"""

from __future__ import annotations
from typing import Any, Iterator

_RES = -1           # resource slot; never a real entity id


class World:
    def __init__(self):
        self._last_eid = 0
        self._by_type: dict[type, dict[int, Any]] = {}

    def spawn(self) -> int:
        self._last_eid += 1
        return self._last_eid

    def _store(self, comp_type: type) -> dict[int, Any]:
        return self._by_type.setdefault(comp_type, {})

    # -- Components --

    def add(self, eid: int, comp: Any) -> None:
        self._store(type(comp))[eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        return self._by_type.get(comp_type, {}).get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid in self._by_type.get(comp_type, {})

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield ``(eid, c1, c2, ...)`` for entities carrying every type.

        Ascending eid (spawn) order, so systems visit entities the same
        way every tick.
        """
        if not types:
            return
        stores = [self._by_type.get(t, {}) for t in types]
        for eid in sorted(min(stores, key=len)):
            if eid != _RES and all(eid in s for s in stores):
                yield (eid, *(s[eid] for s in stores))

    def query_one(self, *types: type) -> tuple | None:
        return next(self.query(*types), None)

    def count(self, comp_type: type) -> int:
        return sum(1 for eid in self._by_type.get(comp_type, {}) if eid != _RES)

    # -- Resources --

    def set_res(self, resource: Any) -> None:
        self._store(type(resource))[_RES] = resource

    def res(self, res_type: type) -> Any | None:
        return self._by_type.get(res_type, {}).get(_RES)
