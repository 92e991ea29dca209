"""logic/combat.py — Player attack resolution.

The player fires a ray from its position along its heading.  Each live
pursuer is a circle of radius ``hit_radius``; the pursuer whose circle
the ray enters first is killed.  At most one pursuer dies per attack.
Walls do not stop the ray.

A kill marks the pursuer not-alive (its entity stays in the World) and
emits ``PursuerKilled`` with the score it is worth; the state machine
adds the points.  No live pursuers, or a clean miss, is an ordinary
``None`` result.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING, Iterable

from components import Position, Pursuer, DevLog, GameClock
from core.events import Notice, PursuerKilled
from core.tuning import get as _tun
from logic.navigation import find_player

if TYPE_CHECKING:
    from core.ecs import World
    from core.events import EventBus


# ── Pure geometry ────────────────────────────────────────────────────

def ray_circle_entry(ox: float, oz: float, dx: float, dz: float,
                     cx: float, cz: float, radius: float) -> float | None:
    """Distance along the unit ray (ox, oz)+t·(dx, dz) where it enters the circle.

    Returns ``None`` if the ray misses or the circle lies behind the
    origin.  An origin inside the circle yields ``0.0``.
    """
    # Projection of the centre onto the ray
    t = (cx - ox) * dx + (cz - oz) * dz
    px = ox + t * dx
    pz = oz + t * dz
    perp_sq = (cx - px) ** 2 + (cz - pz) ** 2
    r_sq = radius * radius
    if perp_sq > r_sq:
        return None
    if (cx - ox) ** 2 + (cz - oz) ** 2 <= r_sq:
        return 0.0
    if t < 0.0:
        return None
    return t - math.sqrt(r_sq - perp_sq)


def resolve_attack(origin: tuple[float, float], direction: tuple[float, float],
                   targets: Iterable[tuple[int, float, float]],
                   radius: float | None = None,
                   max_range: float | None = None) -> int | None:
    """Pick the nearest target hit by the ray.

    Parameters
    ----------
    origin : (x, z)
        Ray start.
    direction : (dx, dz)
        Ray direction; need not be normalised.
    targets : iterable of (eid, x, z)
        Live pursuers to test.
    radius : float | None
        Hit circle radius (default ``[pursuer] hit_radius``).
    max_range : float | None
        Entry distance cap (default ``[combat] max_range``).

    Returns
    -------
    int | None
        Entity id of the nearest hit; on a tie the earlier target wins.
    """
    if radius is None:
        radius = float(_tun("pursuer", "hit_radius", 0.4))
    if max_range is None:
        max_range = float(_tun("combat", "max_range", 50.0))

    dx, dz = direction
    mag = math.hypot(dx, dz)
    if mag < 1e-9:
        return None
    dx /= mag
    dz /= mag
    ox, oz = origin

    best_eid: int | None = None
    best_t = math.inf
    for eid, cx, cz in targets:
        t = ray_circle_entry(ox, oz, dx, dz, cx, cz, radius)
        if t is None or t > max_range:
            continue
        if t < best_t:
            best_t = t
            best_eid = eid
    return best_eid


# ── World-level attack ───────────────────────────────────────────────

def live_pursuers(world: "World") -> list[tuple[int, float, float]]:
    """``(eid, x, z)`` for every live pursuer, in spawn order."""
    return [(eid, pos.x, pos.z)
            for eid, pos, p in world.query(Position, Pursuer) if p.alive]


def player_attack(world: "World", bus: "EventBus | None" = None) -> int | None:
    """Fire the player's attack.  Returns the killed pursuer's id or ``None``."""
    res = find_player(world)
    if res is None:
        return None
    _pid, pos, facing = res[0], res[1], res[2]

    targets = live_pursuers(world)
    if not targets:
        return None

    hit = resolve_attack((pos.x, pos.z),
                         (math.cos(facing.yaw), math.sin(facing.yaw)),
                         targets)
    if hit is None:
        return None

    world.get(hit, Pursuer).alive = False
    points = int(_tun("combat", "kill_score", 100))

    log = world.res(DevLog)
    if log is not None:
        clock = world.res(GameClock)
        log.record("combat", "pursuer down", eid=hit,
                   t=clock.time if clock else 0.0, details={"points": points})
    if bus is not None:
        bus.emit(PursuerKilled(eid=hit, points=points))
        bus.emit(Notice(f"Zombie down! +{points}",
                        float(_tun("messages.durations", "kill", 1.2))))
    return hit
