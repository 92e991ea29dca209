"""logic/pursuit.py — Pursuer chase behaviour.

Pursuers walk in a straight line at the player's current position.
There is no pathfinding and no wall check: they drift through walls.
The first live pursuer found within ``capture_radius`` ends the tick
with a ``PlayerCaught`` event; pursuers after it do not move that
tick.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from components import Position, Pursuer, DevLog, GameClock
from core.events import PlayerCaught
from core.tuning import get as _tun
from logic.navigation import find_player

if TYPE_CHECKING:
    from core.ecs import World
    from core.events import EventBus


def pursuit_system(world: "World", dt: float,
                   bus: "EventBus | None" = None, *,
                   detect_capture: bool = True) -> int | None:
    """Move every live pursuer toward the player.

    Returns the entity id of the capturing pursuer, or ``None``.  With
    *detect_capture* off, pursuers inside the capture radius keep
    closing in instead.
    """
    res = find_player(world)
    if res is None:
        return None
    ppos = res[1]

    capture_r = float(_tun("pursuer", "capture_radius", 0.4))
    min_dist = float(_tun("pursuer", "min_dist", 0.01))

    for eid, pos, pursuer in world.query(Position, Pursuer):
        if not pursuer.alive:
            continue

        dx = ppos.x - pos.x
        dz = ppos.z - pos.z
        dist = math.hypot(dx, dz)

        if detect_capture and dist < capture_r:
            log = world.res(DevLog)
            if log is not None:
                clock = world.res(GameClock)
                log.record("pursuit", "player caught", eid=eid,
                           t=clock.time if clock else 0.0,
                           details={"dist": round(dist, 3)})
            if bus is not None:
                bus.emit(PlayerCaught(pursuer_eid=eid, dist=dist))
            return eid

        if dist > min_dist:
            step = pursuer.speed * dt
            pos.x += dx / dist * step
            pos.z += dz / dist * step

    return None
