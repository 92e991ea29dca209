"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial        Position, Facing
actors         Player, Pursuer, AutoPath
resources      GameClock, Controls
dev_log        DevLog

All public names are re-exported here so callers can do
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position, Facing

# ── Actors ───────────────────────────────────────────────────────────
from components.actors import Player, Pursuer, AutoPath

# ── World resources / singletons ─────────────────────────────────────
from components.resources import GameClock, Controls
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Position", "Facing",
    # actors
    "Player", "Pursuer", "AutoPath",
    # resources
    "GameClock", "Controls", "DevLog",
]
