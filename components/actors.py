"""components.actors — Player, pursuers, and the player's autopath."""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class Player:
    """Marks the player entity and carries its movement rates."""
    move_speed: float = 4.0     # cells/s
    turn_speed: float = 2.0     # rad/s
    auto_speed: float = 3.0     # cells/s while following a path


@dataclass
class Pursuer:
    """A hostile that walks straight at the player, ignoring walls.

    A killed pursuer keeps its entity and Position; only ``alive``
    flips, so ids stay valid for the rest of the level.
    """
    speed: float = 1.2          # cells/s
    alive: bool = True


@dataclass
class AutoPath:
    """Autonomous navigation state for the player.

    ``cells`` is consumed front-to-back; ``active`` is False in manual
    mode.  An empty list with ``active`` False means "no path".
    """
    cells: list[tuple[int, int]] = field(default_factory=list)
    active: bool = False
