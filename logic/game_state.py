"""logic/game_state.py — Level, score, and transition state machine.

Phases
------
PLAYING            normal play; goal and capture are checked each tick
LEVEL_TRANSITION   goal reached; score awarded, level bumped, rebuild pending
CAUGHT_TRANSITION  player caught; penalty applied, same-level rebuild pending

``PLAYING → LEVEL_TRANSITION``
    player within ``goal_radius`` of the goal cell centre.
    ``bonus = max(0, 300 − floor(elapsed)·5)``, ``score += 500 + bonus``.
``PLAYING → CAUGHT_TRANSITION``
    a live pursuer within ``capture_radius``.  ``score = max(0, score − 100)``.
``*_TRANSITION → PLAYING``
    when the pending rebuild fires (``rebuild_delay`` seconds later):
    fresh maze sized for the level, fresh World, player back at the
    start, new pursuers, clock at zero, autopath cleared.

At most one rebuild is ever pending.  While it is, the world keeps
ticking but goal and capture are not detected, so one tick that meets
both conditions scores exactly once (capture is checked first).

The rebuild delay is measured on the machine's own clock, which only
advances through ``update(dt)``; nothing depends on wall time.

Usage::

    machine = GameStateMachine(seed=1234)
    machine.bus.subscribe("Notice", hud.show)
    report = machine.update(controls, dt)
"""

from __future__ import annotations
import math
import random
import time
from dataclasses import dataclass
from enum import Enum, auto

from components import GameClock, DevLog, Controls, Position, Pursuer
from core.ecs import World
from core.events import EventBus, Notice, GoalReached, LevelBuilt
from core.maze import Grid, generate_maze, maze_size_for_level
from core.tuning import get as _tun
from logic.navigation import find_player
from logic.spawning import spawn_player, spawn_pursuers, pursuer_count
from logic.tick import tick_systems, TickReport


class Phase(Enum):
    PLAYING = auto()
    LEVEL_TRANSITION = auto()
    CAUGHT_TRANSITION = auto()


@dataclass
class ScheduledRebuild:
    """A deferred level rebuild, fired by ``GameStateMachine.update``."""
    fires_at: float             # machine time, s
    level: int                  # level to build
    reason: str = ""            # "goal" | "caught"


@dataclass
class GameState:
    """Everything one run owns.  Score and level survive rebuilds."""
    level: int = 1
    score: int = 0
    grid: Grid | None = None
    world: World | None = None
    phase: Phase = Phase.PLAYING
    pending: ScheduledRebuild | None = None
    time: float = 0.0           # machine clock, s

    @property
    def elapsed(self) -> float:
        """Seconds since the current level was built."""
        clock = self.world.res(GameClock) if self.world else None
        return clock.time if clock else 0.0


# ── Scoring rules ────────────────────────────────────────────────────

def goal_bonus(elapsed_seconds: float) -> int:
    """Time bonus: 300 at 0 s, minus 5 per whole second, never negative."""
    full = int(_tun("scoring", "time_bonus", 300))
    per_sec = int(_tun("scoring", "bonus_per_second", 5))
    return max(0, full - int(math.floor(elapsed_seconds)) * per_sec)


def goal_award(elapsed_seconds: float) -> int:
    """Total points for reaching the goal after *elapsed_seconds*."""
    return int(_tun("scoring", "goal_base", 500)) + goal_bonus(elapsed_seconds)


def capture_penalty(score: int) -> int:
    """Score after being caught (clamped at zero)."""
    return max(0, score - int(_tun("scoring", "capture_penalty", 100)))


# ── State machine ────────────────────────────────────────────────────

class GameStateMachine:
    """Owns the GameState and drives one tick at a time."""

    def __init__(self, *, seed: int | None = None,
                 rng: random.Random | None = None,
                 bus: EventBus | None = None,
                 log: DevLog | None = None,
                 level: int = 1, score: int = 0):
        if rng is None:
            if seed is None:
                seed = time.time_ns()
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng
        self.bus = bus or EventBus()
        self.log = log or DevLog()
        self.state = GameState(level=max(1, level), score=max(0, score))
        self.rebuilds = 0

        self.bus.subscribe("PursuerKilled", self._on_pursuer_killed)
        self.rebuild()

    # ── Convenience accessors ───────────────────────────────────────

    @property
    def world(self) -> World:
        return self.state.world

    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def pending(self) -> ScheduledRebuild | None:
        return self.state.pending

    def player_pose(self) -> tuple[float, float, float] | None:
        """``(x, z, yaw)`` of the player."""
        res = find_player(self.world)
        if res is None:
            return None
        pos, facing = res[1], res[2]
        return pos.x, pos.z, facing.yaw

    def pursuer_poses(self) -> list[tuple[int, float, float, bool]]:
        """``(eid, x, z, alive)`` for every pursuer of this level."""
        return [(eid, pos.x, pos.z, p.alive)
                for eid, pos, p in self.world.query(Position, Pursuer)]

    def active_path(self) -> list[tuple[int, int]]:
        res = find_player(self.world)
        if res is None or not res[4].active:
            return []
        return list(res[4].cells)

    # ── Lifecycle ───────────────────────────────────────────────────

    def rebuild(self) -> None:
        """Discard the current maze and entities and build the level afresh."""
        st = self.state
        size = maze_size_for_level(st.level)
        grid = generate_maze(size, self.rng)

        world = World()
        world.set_res(GameClock())
        world.set_res(self.log)
        spawn_player(world, grid)
        spawn_pursuers(world, grid, pursuer_count(st.level), self.rng)

        st.grid = grid
        st.world = world
        st.phase = Phase.PLAYING
        st.pending = None
        self.rebuilds += 1
        self.log.level = st.level
        self.log.record("level", f"built level {st.level}", t=st.time,
                        details={"size": size, "score": st.score})

        print(f"[LEVEL] level {st.level}: {size}×{size} maze, "
              f"{pursuer_count(st.level)} pursuer(s), score {st.score}")
        self.bus.emit(LevelBuilt(level=st.level, size=size))
        self.bus.emit(Notice(f"Level {st.level}",
                             float(_tun("messages.durations", "level_start", 1.8))))

    def schedule_rebuild(self, phase: Phase, reason: str) -> bool:
        """Arm the single pending rebuild.  Returns False if one is already armed."""
        st = self.state
        if st.pending is not None:
            return False
        delay = float(_tun("transition", "rebuild_delay", 0.9))
        st.pending = ScheduledRebuild(fires_at=st.time + delay,
                                      level=st.level, reason=reason)
        st.phase = phase
        self.log.record("level", f"rebuild scheduled ({reason})", t=st.time,
                        details={"fires_at": round(st.pending.fires_at, 3)})
        return True

    # ── Transitions ─────────────────────────────────────────────────

    def reach_goal(self) -> bool:
        """Award the goal and schedule the next level.  Ignored while a rebuild is pending."""
        st = self.state
        if st.pending is not None:
            return False
        elapsed = st.elapsed
        gained = goal_award(elapsed)
        st.score += gained
        finished = st.level
        st.level += 1
        self.schedule_rebuild(Phase.LEVEL_TRANSITION, "goal")
        print(f"[LEVEL] level {finished} complete in {int(elapsed)}s (+{gained})")
        self.bus.emit(GoalReached(elapsed=elapsed))
        self.bus.emit(Notice(f"Level {finished} complete! +{gained}",
                             float(_tun("messages.durations", "level_complete", 2.5))))
        return True

    def player_caught(self, pursuer_eid: int | None = None) -> bool:
        """Apply the capture penalty and schedule a same-level restart."""
        st = self.state
        if st.pending is not None:
            return False
        before = st.score
        st.score = capture_penalty(st.score)
        self.schedule_rebuild(Phase.CAUGHT_TRANSITION, "caught")
        print(f"[LEVEL] caught on level {st.level} (score {before} → {st.score})")
        penalty = int(_tun("scoring", "capture_penalty", 100))
        self.bus.emit(Notice(f"Caught by zombie! −{penalty}, restarting…",
                             float(_tun("messages.durations", "caught", 2.2))))
        return True

    def _on_pursuer_killed(self, ev) -> None:
        self.state.score += ev.points

    # ── Tick ────────────────────────────────────────────────────────

    def update(self, controls: Controls | None, dt: float) -> TickReport:
        """Advance one frame.  Fires a due rebuild instead of ticking."""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        st = self.state
        st.time += dt

        if st.pending is not None and st.time >= st.pending.fires_at:
            st.level = st.pending.level
            self.rebuild()
            self.bus.drain()
            return TickReport()

        report = tick_systems(st.world, st.grid, controls, dt, self.bus,
                              check_outcomes=st.pending is None)
        # Kill points land before the capture penalty clamps the score.
        self.bus.drain()

        if st.pending is None:
            if report.caught_by is not None:
                self.player_caught(report.caught_by)
            elif report.goal_reached:
                self.reach_goal()

        self.bus.drain()
        return report
