"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Unit System
-----------
All gameplay distances are measured in **cells**: cell ``(x, z)`` is
centred on the point ``(x, z)`` and spans ``[x - 0.5, x + 0.5)`` on
each axis.  Continuous positions round to a cell with
``floor(v + 0.5)``.

    Distance / position     cells
    Speed                   cells / s
    Time                    s   (real seconds, level-local)
    Angles                  rad (yaw; 0 = +x, pi/2 = +z)

Rendering converts to pixels via ``TILE_SIZE`` (px per cell).
No gameplay code should reference pixels; only the renderer does.

Tunable numbers (speeds, radii, scoring) live in ``data/tuning.toml``;
only structural constants belong here.
"""

# Cell states
CELL_OPEN = 0
CELL_WALL = 1

# Carving steps on the odd sub-lattice: two cells along one axis.
CARVE_DIRS: tuple[tuple[int, int], ...] = (
    (2, 0), (-2, 0), (0, 2), (0, -2),
)

# BFS neighbour order, fixed so equal-length ties resolve the same way
# on every run: +x, -x, +z, -z.
NEIGHBOUR_DIRS: tuple[tuple[int, int], ...] = (
    (1, 0), (-1, 0), (0, 1), (0, -1),
)

START_CELL = (1, 1)

# Render
TILE_SIZE = 32
MINIMAP_SIZE = 160

CELL_COLORS = {
    CELL_OPEN: (0, 170, 0),
    CELL_WALL: (0, 51, 0),
}
GOAL_COLOR = (255, 221, 0)
PLAYER_COLOR = (255, 255, 51)
PURSUER_COLOR = (255, 34, 34)
PATH_COLOR = (80, 160, 255)
