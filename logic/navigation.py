"""logic/navigation.py — Player steering: manual drive and autopath.

The player entity carries ``Position``, ``Facing``, ``Player`` (rates)
and ``AutoPath``.  Two mutually exclusive modes:

Manual
    Tank controls.  Turn first, then propose a step along the new
    heading.  The step is taken only if the destination point is not
    blocked; otherwise it is dropped entirely (no wall sliding).

Autonomous
    Walk the cached BFS path cell by cell at ``auto_speed``.  When the
    player is within ``waypoint_reach`` of the front cell's centre the
    cell is popped.  Emptying the path exits the mode with a
    ``PathFinished`` event.  Manual input is ignored meanwhile.

Activating autopath always recomputes the path from the player's
current cell to the goal.  An empty result keeps (or puts) the player
in manual mode and emits ``NoPath``.

Usage::

    from logic.navigation import navigation_system
    navigation_system(world, grid, controls, dt, bus)
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from components import Position, Facing, Player, AutoPath, Controls, DevLog, GameClock
from core.collision import cell_of, is_blocked
from core.events import Notice, PathStarted, PathFinished, NoPath
from core.tuning import get as _tun
from logic.pathfinding import shortest_path

if TYPE_CHECKING:
    from core.ecs import World
    from core.events import EventBus
    from core.maze import Grid


def find_player(world: "World"):
    """Return ``(eid, Position, Facing, Player, AutoPath)`` or ``None``."""
    return world.query_one(Position, Facing, Player, AutoPath)


def _log(world: "World", msg: str, eid: int, details: dict | None = None):
    log = world.res(DevLog)
    if log is not None:
        clock = world.res(GameClock)
        log.record("path", msg, eid=eid,
                   t=clock.time if clock else 0.0, details=details)


# ── Manual mode ──────────────────────────────────────────────────────

def manual_step(pos: Position, facing: Facing, player: Player,
                grid: "Grid", forward: int, turn: int, dt: float) -> bool:
    """Apply one tick of tank controls.  Returns True if the player moved."""
    facing.yaw += turn * player.turn_speed * dt
    if forward == 0:
        return False
    step = forward * player.move_speed * dt
    nx = pos.x + math.cos(facing.yaw) * step
    nz = pos.z + math.sin(facing.yaw) * step
    if is_blocked(grid, nx, nz):
        return False
    pos.x = nx
    pos.z = nz
    return True


# ── Autonomous mode ──────────────────────────────────────────────────

def activate_autopath(world: "World", grid: "Grid",
                      bus: "EventBus | None" = None) -> bool:
    """Compute a fresh path to the goal and enter autonomous mode.

    Returns True if autonomous mode is now active.
    """
    res = find_player(world)
    if res is None:
        return False
    eid, pos, _facing, _player, auto = res

    start = cell_of(pos.x, pos.z)
    path = shortest_path(start, grid.goal, grid)
    dur = float(_tun("messages.durations", "autopath", 1.5))

    if not path:
        auto.cells = []
        auto.active = False
        _log(world, "no path", eid, {"start": start})
        if bus is not None:
            bus.emit(NoPath(start=start))
            bus.emit(Notice("No path!", float(_tun("messages.durations", "no_path", 1.5))))
        return False

    auto.cells = path
    auto.active = True
    _log(world, "auto-path on", eid, {"start": start, "cells": len(path)})
    if bus is not None:
        bus.emit(PathStarted(length=len(path)))
        bus.emit(Notice("Auto-path ON", dur))
    return True


def cancel_autopath(world: "World") -> None:
    """Drop any active path and return to manual mode."""
    res = find_player(world)
    if res is None:
        return
    auto = res[4]
    auto.cells = []
    auto.active = False


def follow_autopath(world: "World", grid: "Grid", dt: float,
                    bus: "EventBus | None" = None) -> bool:
    """Advance one tick along the active path.  Returns True if the player moved."""
    res = find_player(world)
    if res is None:
        return False
    eid, pos, facing, player, auto = res
    if not auto.active:
        return False
    if not auto.cells:
        auto.active = False
        return False

    reach = float(_tun("player", "waypoint_reach", 0.1))
    tx, tz = auto.cells[0]
    dx = tx - pos.x
    dz = tz - pos.z
    dist = math.hypot(dx, dz)

    if dist < reach:
        auto.cells.pop(0)
        if not auto.cells:
            auto.active = False
            _log(world, "auto-path finished", eid)
            if bus is not None:
                bus.emit(PathFinished())
                bus.emit(Notice("Auto-path finished",
                                float(_tun("messages.durations", "autopath", 1.5))))
        return False

    ux = dx / dist
    uz = dz / dist
    # Never step past the waypoint, however large dt gets.
    step = min(player.auto_speed * dt, dist)
    nx = pos.x + ux * step
    nz = pos.z + uz * step

    facing.yaw = math.atan2(uz, ux)
    if is_blocked(grid, nx, nz):
        return False
    pos.x = nx
    pos.z = nz
    return True


# ── System ───────────────────────────────────────────────────────────

def navigation_system(world: "World", grid: "Grid", controls: Controls,
                      dt: float, bus: "EventBus | None" = None) -> None:
    """One tick of player navigation (mode switch, then movement)."""
    if controls.autopath:
        activate_autopath(world, grid, bus)

    res = find_player(world)
    if res is None:
        return
    _eid, pos, facing, player, auto = res

    if auto.active:
        follow_autopath(world, grid, dt, bus)
    else:
        manual_step(pos, facing, player, grid,
                    controls.forward, controls.turn, dt)
