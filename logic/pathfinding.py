"""logic/pathfinding.py — Breadth-first shortest path on the maze grid.

Every open cell costs the same, so plain BFS gives the shortest route
in cells.  Neighbours are scanned in ``NEIGHBOUR_DIRS`` order
(+x, -x, +z, -z); among equal-length routes the one BFS discovers
first under that order is returned, so output is stable for a given
grid.

Public API
----------
``shortest_path(start, goal, grid)`` → ``list[(x, z)]`` (empty if unreachable)
"""

from __future__ import annotations
from collections import deque

from core.maze import Grid


Cell = tuple[int, int]


def shortest_path(start: Cell, goal: Cell, grid: Grid) -> list[Cell]:
    """BFS from *start* to *goal* over open cells.

    Parameters
    ----------
    start, goal : (int, int)
        Cell indices ``(x, z)``.
    grid : Grid
        The current maze.

    Returns
    -------
    list[(int, int)]
        Cells from *start* to *goal* inclusive, or ``[]`` when either
        end is not an open cell or no route exists.  ``start == goal``
        yields ``[start]``.
    """
    if not grid.is_open(*start) or not grid.is_open(*goal):
        return []

    parent: dict[Cell, Cell | None] = {start: None}
    frontier: deque[Cell] = deque([start])

    while frontier:
        cur = frontier.popleft()
        if cur == goal:
            break
        for nxt in grid.neighbours(*cur):
            if nxt not in parent:
                parent[nxt] = cur
                frontier.append(nxt)

    if goal not in parent:
        return []

    # ── Reconstruct path ─────────────────────────────────────────────
    path: list[Cell] = []
    node: Cell | None = goal
    while node is not None:
        path.append(node)
        node = parent[node]
    path.reverse()
    return path
