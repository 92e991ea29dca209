"""core/events.py — Gameplay events and the queue that delivers them.

Systems *emit* plain dataclass events during a tick; the state machine
*drains* the queue once at the end of the tick, calling every handler
subscribed to that event's class name::

    bus = EventBus()
    bus.subscribe("Notice", hud.show)
    bus.emit(Notice("No path!", 1.5))
    bus.drain()

The bus belongs to the GameStateMachine, not to a World, so
subscriptions survive level rebuilds.  A handler that raises is
reported and skipped; the rest of the queue still runs.  Events a
handler emits are delivered in the same drain, after the current
batch.
"""

from __future__ import annotations
import traceback
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class Notice:
    """A short-lived user-facing message (the HUD decides how to show it)."""
    text: str
    duration: float = 1.5      # s


@dataclass
class PlayerCaught:
    """A live pursuer came within capture radius of the player."""
    pursuer_eid: int = 0
    dist: float = 0.0


@dataclass
class PursuerKilled:
    """An attack removed a pursuer."""
    eid: int = 0
    points: int = 0


@dataclass
class GoalReached:
    """The player came within goal radius of the goal cell centre."""
    elapsed: float = 0.0


@dataclass
class PathStarted:
    """Autonomous mode was (re)activated with a fresh path."""
    length: int = 0


@dataclass
class PathFinished:
    """The active path was consumed; autonomous mode exited."""


@dataclass
class NoPath:
    """Autonomous mode was requested but the goal is unreachable."""
    start: tuple[int, int] = (0, 0)


@dataclass
class LevelBuilt:
    """A rebuild finished; fresh grid and entities are in place."""
    level: int = 1
    size: int = 10


# ═══════════════════════════════════════════════════════════════════
#  Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """FIFO event queue with subscribe-by-class-name delivery."""

    MAX_ROUNDS = 1000       # nested emit rounds per drain

    def __init__(self):
        self._queue: list[Any] = []
        self._handlers: dict[str, list[Callable]] = defaultdict(list)

    def emit(self, event) -> None:
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Call *handler(event)* for every drained event named *event_type*."""
        self._handlers[event_type].append(handler)

    def drain(self) -> int:
        """Deliver everything queued.  Returns the number of events delivered."""
        delivered = 0
        for _ in range(self.MAX_ROUNDS):
            if not self._queue:
                break
            batch, self._queue = self._queue, []
            for event in batch:
                self._deliver(event)
            delivered += len(batch)
        return delivered

    def _deliver(self, event) -> None:
        name = type(event).__name__
        for handler in self._handlers.get(name, ()):
            try:
                handler(event)
            except Exception as exc:
                print(f"[EVENT] {name} handler failed: {exc}")
                traceback.print_exc()

    def clear(self) -> None:
        self._queue.clear()

    def pending_count(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._handlers)})"
