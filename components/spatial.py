"""components.spatial — Position and heading on the maze plane.

All coordinates are in cells; ``x`` runs along grid columns and ``z``
along grid rows, matching ``Grid.cells[z][x]``.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Position:
    x: float = 0.0        # cells
    z: float = 0.0        # cells


@dataclass
class Facing:
    """Heading angle.  Forward is ``(cos(yaw), sin(yaw))``."""
    yaw: float = 0.0      # rad
