"""logic/tick.py — System tick orchestration.

Runs the per-frame system pipeline for one level's World:

    clock → navigation (autopath edge, then manual/auto move)
          → attack edge → pursuit → goal check

and reports what happened so the game state machine can decide on
transitions.

Usage::

    from logic.tick import tick_systems
    report = tick_systems(world, grid, controls, dt, bus)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from components import GameClock, Controls
from core.collision import dist_to_cell
from core.tuning import get as _tun
from logic.combat import player_attack
from logic.navigation import navigation_system, find_player
from logic.pursuit import pursuit_system

if TYPE_CHECKING:
    from core.ecs import World
    from core.events import EventBus
    from core.maze import Grid


@dataclass
class TickReport:
    """Outcome of one tick."""
    caught_by: int | None = None
    goal_reached: bool = False
    kills: list[int] = field(default_factory=list)


def goal_distance(world: "World", grid: "Grid") -> float:
    """Distance from the player to the goal cell centre (inf if no player)."""
    res = find_player(world)
    if res is None:
        return float("inf")
    pos = res[1]
    return dist_to_cell(pos.x, pos.z, grid.goal)


def tick_systems(world: "World", grid: "Grid", controls: Controls | None,
                 dt: float, bus: "EventBus | None" = None, *,
                 check_outcomes: bool = True) -> TickReport:
    """Run all core gameplay systems for one frame.

    Parameters
    ----------
    world : World
        The current level's entities.
    grid : Grid
        The current maze (read-only here).
    controls : Controls | None
        This tick's input; ``None`` means no input.
    dt : float
        Delta-time in seconds.
    bus : EventBus | None
        Receives notices and gameplay events.
    check_outcomes : bool
        When False, capture and goal-reach are not detected (entities
        still move).  The state machine clears it while a rebuild is
        pending.
    """
    if dt < 0:
        raise ValueError(f"dt must be >= 0, got {dt}")
    controls = controls or Controls()
    report = TickReport()

    # Advance level clock
    clock = world.res(GameClock)
    if clock:
        clock.time += dt

    # Player
    navigation_system(world, grid, controls, dt, bus)

    if controls.attack:
        hit = player_attack(world, bus)
        if hit is not None:
            report.kills.append(hit)

    # Pursuers
    report.caught_by = pursuit_system(world, dt, bus,
                                      detect_capture=check_outcomes)

    # Goal
    if check_outcomes:
        radius = float(_tun("scoring", "goal_radius", 0.6))
        report.goal_reached = goal_distance(world, grid) < radius

    return report
