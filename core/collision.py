"""core/collision.py — Point-sampled collision against the maze grid.

These live in ``core/`` (not ``logic/``) because navigation, pursuit
spawning, and tests all need them.  Keeping them here prevents a
circular dependency.

A continuous position is blocked when the cell it rounds to is a wall
or lies outside the grid.  Only the destination point is sampled, so a
diagonal step from ``(1.4, 1.4)`` to ``(1.6, 1.6)`` lands in ``(2, 2)``
even when ``(2, 1)`` and ``(1, 2)`` are both walls.  That corner clip
is part of how the maze plays; swept collision is deliberately absent.
"""

from __future__ import annotations
import math

from core.maze import Grid


def cell_of(x: float, z: float) -> tuple[int, int]:
    """Round a continuous position to its cell (half-up on both axes)."""
    return int(math.floor(x + 0.5)), int(math.floor(z + 0.5))


def is_blocked(grid: Grid, x: float, z: float) -> bool:
    """Return True if ``(x, z)`` rounds to a wall or out-of-bounds cell."""
    cx, cz = cell_of(x, z)
    if not grid.in_bounds(cx, cz):
        return True
    return not grid.is_open(cx, cz)


def dist_to_cell(x: float, z: float, cell: tuple[int, int]) -> float:
    """Straight-line distance from ``(x, z)`` to the centre of *cell*."""
    return math.hypot(x - cell[0], z - cell[1])
