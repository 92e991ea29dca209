"""components.resources — World-level singletons (not per-entity)."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class GameClock:
    """Level-local time: accumulated ``dt`` since the level was built.

    A fresh World (and so a fresh clock) is created at every rebuild,
    which is what resets the elapsed-time counter.
    """
    time: float = 0.0

    @property
    def seconds(self) -> int:
        """Whole elapsed seconds, as shown on the HUD and used for scoring."""
        return int(self.time)


@dataclass
class Controls:
    """One tick of player input.

    ``forward`` and ``turn`` are in {-1, 0, 1}; turn +1 increases yaw.
    ``autopath`` and ``attack`` are rising-edge triggers.
    """
    forward: int = 0
    turn: int = 0
    autopath: bool = False
    attack: bool = False
