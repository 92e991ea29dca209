"""logic/spawning.py — Entity builders for a fresh level.

Usage::

    world = World()
    pid = spawn_player(world, grid)
    eids = spawn_pursuers(world, grid, count=min(level, 3), rng=rng)
"""

from __future__ import annotations
import math
import random
from typing import TYPE_CHECKING

from components import Position, Facing, Player, AutoPath, Pursuer
from core.tuning import get as _tun

if TYPE_CHECKING:
    from core.ecs import World
    from core.maze import Grid


def pursuer_count(level: int) -> int:
    """One pursuer per level number, capped at ``[pursuer] max_count``."""
    return min(max(1, level), int(_tun("pursuer", "max_count", 3)))


def spawn_player(world: "World", grid: "Grid") -> int:
    """Create the player at the start cell with the initial heading."""
    sx, sz = grid.start
    eid = world.spawn()
    world.add(eid, Position(x=float(sx), z=float(sz)))
    world.add(eid, Facing(yaw=float(_tun("player", "initial_yaw", math.pi / 2))))
    world.add(eid, Player(
        move_speed=float(_tun("player", "move_speed", 4.0)),
        turn_speed=float(_tun("player", "turn_speed", 2.0)),
        auto_speed=float(_tun("player", "auto_speed", 3.0)),
    ))
    world.add(eid, AutoPath())
    return eid


def pick_spawn_cell(grid: "Grid", rng: random.Random,
                    clearance: float | None = None,
                    attempts: int | None = None) -> tuple[int, int]:
    """Sample a random open cell well away from the start and the goal.

    A candidate qualifies when its distance to both the start cell and
    the goal cell exceeds *clearance*.  After *attempts* misses the
    last candidate is used anyway; small mazes often have no cell that
    satisfies both constraints.
    """
    if clearance is None:
        clearance = float(_tun("pursuer", "spawn_clearance", 5.0))
    if attempts is None:
        attempts = int(_tun("pursuer", "spawn_attempts", 200))

    open_cells = grid.open_cells()
    sx, sz = grid.start
    gx, gz = grid.goal
    cell = grid.start
    for _ in range(max(1, attempts)):
        cell = rng.choice(open_cells)
        x, z = cell
        if (math.hypot(x - sx, z - sz) > clearance
                and math.hypot(x - gx, z - gz) > clearance):
            break
    return cell


def spawn_pursuers(world: "World", grid: "Grid", count: int,
                   rng: random.Random) -> list[int]:
    """Create *count* pursuers on random open cells."""
    speed = float(_tun("pursuer", "speed", 1.2))
    eids: list[int] = []
    for _ in range(count):
        x, z = pick_spawn_cell(grid, rng)
        eid = world.spawn()
        world.add(eid, Position(x=float(x), z=float(z)))
        world.add(eid, Pursuer(speed=speed))
        eids.append(eid)
    return eids
