"""core/maze.py — Maze grid and depth-first maze generator.

The grid is a square matrix of cell states (``CELL_OPEN`` /
``CELL_WALL``) indexed ``cells[z][x]``.  It lives in ``core/`` because
collision, pathfinding, spawning, and the renderer all read it.

Generation carves a spanning tree over the odd sub-lattice with
randomized depth-first backtracking:

1. Every cell starts as a wall.  ``(1, 1)`` is opened and pushed.
2. Look at the top of the stack, shuffle the four 2-step directions
   and take the first whose target is strictly inside the outer ring
   and still a wall.  Open the midpoint and the target, push the
   target.  If no direction qualifies, pop.
3. Force-open ``(1, 1)`` and the goal ``(size-2, size-2)``.

Because ``size`` is even, the goal sits on an even coordinate that the
carver never visits, so step 3 leaves it walled in on all four sides.
With ``patch_goal`` (the default, ``[maze] patch_isolated_goal``) the
generator then opens the single cell ``(size-3, size-2)`` linking the
goal to the lattice cell ``(size-3, size-3)``, which the spanning tree
always reaches.  ``patch_goal=False`` reproduces the raw carve.

The random source only needs ``shuffle()``; pass a seeded
``random.Random`` for reproducible mazes.
"""

from __future__ import annotations
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator

from core.constants import (
    CELL_OPEN, CELL_WALL, CARVE_DIRS, NEIGHBOUR_DIRS, START_CELL,
)
from core.tuning import get as _tun

MIN_SIZE = 10
MAX_SIZE = 20


@dataclass
class Grid:
    """Square cell matrix.  Immutable by convention once a level starts."""
    size: int
    cells: list[list[int]] = field(default_factory=list)

    def __post_init__(self):
        if not self.cells:
            self.cells = [[CELL_WALL] * self.size for _ in range(self.size)]
        if len(self.cells) != self.size or any(len(r) != self.size for r in self.cells):
            raise ValueError(f"grid rows must be {self.size}×{self.size}")

    @classmethod
    def from_rows(cls, rows: list[str], wall: str = "#") -> "Grid":
        """Build a grid from text rows (``rows[z][x]``); *wall* marks walls."""
        cells = [[CELL_WALL if ch == wall else CELL_OPEN for ch in row]
                 for row in rows]
        return cls(size=len(cells), cells=cells)

    @property
    def start(self) -> tuple[int, int]:
        return START_CELL

    @property
    def goal(self) -> tuple[int, int]:
        return (self.size - 2, self.size - 2)

    def in_bounds(self, x: int, z: int) -> bool:
        return 0 <= x < self.size and 0 <= z < self.size

    def is_open(self, x: int, z: int) -> bool:
        """True for an in-bounds open cell."""
        return self.in_bounds(x, z) and self.cells[z][x] == CELL_OPEN

    def open_cells(self) -> list[tuple[int, int]]:
        """All open cells in row-major order."""
        return [(x, z)
                for z in range(self.size)
                for x in range(self.size)
                if self.cells[z][x] == CELL_OPEN]

    def neighbours(self, x: int, z: int) -> Iterator[tuple[int, int]]:
        """Open 4-neighbours of ``(x, z)`` in ``NEIGHBOUR_DIRS`` order."""
        for dx, dz in NEIGHBOUR_DIRS:
            nx, nz = x + dx, z + dz
            if self.is_open(nx, nz):
                yield nx, nz

    def to_rows(self, wall: str = "#", open_: str = ".") -> list[str]:
        return ["".join(wall if c == CELL_WALL else open_ for c in row)
                for row in self.cells]

    def __str__(self) -> str:
        return "\n".join(self.to_rows())


# ── Sizing ───────────────────────────────────────────────────────────

def maze_size_for_level(level: int) -> int:
    """10 cells at level 1, +2 per level, capped at 20."""
    base = int(_tun("maze", "base_size", MIN_SIZE))
    step = int(_tun("maze", "size_step", 2))
    cap = int(_tun("maze", "max_size", MAX_SIZE))
    return min(base + step * (max(1, level) - 1), cap)


def _check_size(size: int) -> None:
    if size % 2 != 0 or not (MIN_SIZE <= size <= MAX_SIZE):
        raise ValueError(
            f"maze size must be even and within {MIN_SIZE}..{MAX_SIZE}, got {size}")


# ── Generation ───────────────────────────────────────────────────────

def generate_maze(size: int, rng: random.Random | None = None, *,
                  patch_goal: bool | None = None) -> Grid:
    """Carve a ``size``×``size`` maze.  See the module docstring."""
    _check_size(size)
    rng = rng or random.Random()
    if patch_goal is None:
        patch_goal = bool(_tun("maze", "patch_isolated_goal", True))

    grid = Grid(size)
    cells = grid.cells

    def inside(x: int, z: int) -> bool:
        return 0 < x < size - 1 and 0 < z < size - 1

    sx, sz = START_CELL
    cells[sz][sx] = CELL_OPEN
    stack: list[tuple[int, int]] = [(sx, sz)]
    dirs = list(CARVE_DIRS)

    while stack:
        cx, cz = stack[-1]
        rng.shuffle(dirs)
        for dx, dz in dirs:
            nx, nz = cx + dx, cz + dz
            if inside(nx, nz) and cells[nz][nx] == CELL_WALL:
                cells[cz + dz // 2][cx + dx // 2] = CELL_OPEN
                cells[nz][nx] = CELL_OPEN
                stack.append((nx, nz))
                break
        else:
            stack.pop()

    gx, gz = grid.goal
    cells[sz][sx] = CELL_OPEN
    cells[gz][gx] = CELL_OPEN

    if patch_goal and not goal_reachable(grid):
        cells[gz][gx - 1] = CELL_OPEN

    return grid


def goal_reachable(grid: Grid) -> bool:
    """Flood-fill from the start cell; True if the goal is connected."""
    seen = {grid.start}
    frontier = deque([grid.start])
    while frontier:
        x, z = frontier.popleft()
        if (x, z) == grid.goal:
            return True
        for n in grid.neighbours(x, z):
            if n not in seen:
                seen.add(n)
                frontier.append(n)
    return False
