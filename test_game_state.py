"""test_game_state.py — Scoring, transitions, and deferred rebuilds.

Run:  python test_game_state.py

Drives GameStateMachine directly.  Poses are set by hand on the live
World so each transition can be triggered on a chosen tick.
"""
from __future__ import annotations
import sys, math, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core import tuning
tuning.load()

from components import Position, Pursuer, Controls
from core.events import EventBus
from logic.game_state import (
    GameStateMachine, Phase, goal_bonus, goal_award, capture_penalty,
)
from logic.navigation import find_player


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
    assert cond, f"{label} {detail}".strip()


# ── Helpers ──────────────────────────────────────────────────────────

def _move_player(m: GameStateMachine, x: float, z: float):
    pos = find_player(m.world)[1]
    pos.x, pos.z = x, z


def _pursuers(m: GameStateMachine) -> list[int]:
    return [eid for eid, _pos, _p in m.world.query(Position, Pursuer)]


def _retire_pursuers(m: GameStateMachine):
    for eid in _pursuers(m):
        m.world.get(eid, Pursuer).alive = False


def _notices(m: GameStateMachine) -> list[str]:
    texts: list[str] = []
    m.bus.subscribe("Notice", lambda ev: texts.append(ev.text))
    return texts


# ═══════════════════════════════════════════════════════════════════════
#  Tests
# ═══════════════════════════════════════════════════════════════════════

def test_scoring_rules():
    print("\n=== 1: Scoring rules ===")
    check(goal_award(0.0) == 800, f"1a: 0 s → 800 (got {goal_award(0.0)})")
    check(goal_award(59.9) == 505, "1b: 59.9 s floors to 59 → 505")
    check(goal_award(60.0) == 500, "1c: 60 s → 500")
    check(goal_award(100.0) == 500, "1d: 100 s → bonus clamps at 0")
    check(goal_bonus(10.5) == 250, "1e: 10.5 s → bonus 250")
    check(capture_penalty(50) == 0, "1f: 50 − 100 clamps at 0")
    check(capture_penalty(250) == 150, "1g: 250 − 100 = 150")
    check(capture_penalty(0) == 0, "1h: already zero")


def test_initial_state():
    print("\n=== 2: Fresh run ===")
    m = GameStateMachine(seed=42)
    check(m.phase is Phase.PLAYING and m.pending is None, "2a: playing, nothing pending")
    check(m.state.level == 1 and m.state.score == 0, "2b: level 1, score 0")
    check(m.grid.size == 10, "2c: 10×10 maze")
    check(len(_pursuers(m)) == 1 and m.world.count(Pursuer) == 1, "2d: one pursuer on level 1")
    check(m.player_pose()[:2] == (1.0, 1.0), "2e: player on the start cell")

    texts = _notices(m)
    m.bus.drain()
    check(texts == ["Level 1"], f"2f: level notice ({texts})")

    again = GameStateMachine(seed=42)
    check(again.grid.cells == m.grid.cells and again.pursuer_poses() == m.pursuer_poses(),
          "2g: equal seeds give equal levels")

    try:
        m.update(Controls(), -0.1)
    except ValueError:
        ok("2h: negative dt rejected")
    else:
        check(False, "2h: negative dt rejected", "no ValueError")


def test_goal_transition():
    print("\n=== 3: Reaching the goal ===")
    m = GameStateMachine(seed=7)
    texts = _notices(m)
    m.bus.drain()
    _retire_pursuers(m)
    gx, gz = m.grid.goal
    _move_player(m, gx - 0.3, gz)

    report = m.update(None, 0.0)
    check(report.goal_reached, "3a: tick reports the goal")
    check(m.phase is Phase.LEVEL_TRANSITION and m.pending is not None, "3b: level transition armed")
    check(m.state.score == 800 and m.state.level == 2, f"3c: +800, level 2 (score {m.state.score})")
    check(texts[-1] == "Level 1 complete! +800", f"3d: notice ({texts[-1]})")

    # Still standing on the goal: no second award while pending.
    m.update(None, 0.5)
    check(m.state.score == 800 and m.state.level == 2, "3e: no double award")
    check(m.rebuilds == 1, "3f: not rebuilt before the delay")

    m.update(None, 0.5)
    check(m.rebuilds == 2 and m.phase is Phase.PLAYING, "3g: rebuilt after 0.9 s")
    check(m.grid.size == 12 and len(_pursuers(m)) == 2, "3h: level 2 is 12×12 with two pursuers")
    check(m.state.elapsed == 0.0 and m.player_pose()[:2] == (1.0, 1.0),
          "3i: clock and player reset")
    check(m.state.score == 800, "3j: score carried over")
    check(texts[-1] == "Level 2", f"3k: next level notice ({texts[-1]})")


def test_goal_bonus_uses_level_clock():
    print("\n=== 4: Time bonus from level clock ===")
    m = GameStateMachine(seed=8)
    _retire_pursuers(m)
    for _ in range(20):
        m.update(None, 0.5)                # 10 s standing still
    gx, gz = m.grid.goal
    _move_player(m, gx, gz)
    m.update(None, 0.0)
    check(m.state.score == 750, f"4a: 500 + (300 − 10·5) = 750 (got {m.state.score})")


def test_caught_transition():
    print("\n=== 5: Caught ===")
    m = GameStateMachine(seed=3, score=250)
    texts = _notices(m)
    m.bus.drain()
    zid = _pursuers(m)[0]
    px, pz = m.player_pose()[:2]
    zpos = m.world.get(zid, Position)
    zpos.x, zpos.z = px + 0.2, pz

    report = m.update(None, 0.0)
    check(report.caught_by == zid, "5a: capturing pursuer reported")
    check(m.phase is Phase.CAUGHT_TRANSITION, "5b: caught transition armed")
    check(m.state.score == 150 and m.state.level == 1, f"5c: 250 → 150, same level ({m.state.score})")
    check(texts[-1] == "Caught by zombie! −100, restarting…", f"5d: notice ({texts[-1]})")

    pending = m.pending
    for _ in range(3):
        m.update(None, 0.2)
    check(m.pending is pending and m.state.score == 150, "5e: one pending rebuild, one penalty")

    m.update(None, 0.5)
    check(m.phase is Phase.PLAYING and m.rebuilds == 2, "5f: restarted")
    check(m.grid.size == 10 and m.state.score == 150, "5g: same level size, score kept")

    msgs = [e["msg"] for e in m.log.for_cat("level")]
    check(msgs == ["built level 1", "rebuild scheduled (caught)", "built level 1"],
          f"5h: dev log records the transition ({msgs})")
    check(m.log.recent(1)[0]["msg"] == "built level 1", "5i: newest entry last")


def test_caught_and_goal_same_tick():
    print("\n=== 6: Capture and goal on one tick ===")
    m = GameStateMachine(seed=11, score=500)
    gx, gz = m.grid.goal
    _move_player(m, gx, gz)
    zid = _pursuers(m)[0]
    zpos = m.world.get(zid, Position)
    zpos.x, zpos.z = gx, gz + 0.1

    m.update(None, 0.0)
    check(m.phase is Phase.CAUGHT_TRANSITION, "6a: capture takes priority")
    check(m.state.score == 400 and m.state.level == 1, f"6b: only the penalty applied ({m.state.score})")

    check(not m.reach_goal(), "6c: goal ignored while a rebuild is pending")
    check(not m.player_caught(zid), "6d: second capture ignored")
    check(m.state.score == 400, "6e: score unchanged")


def test_kill_scores():
    print("\n=== 7: Kill scoring ===")
    m = GameStateMachine(seed=5)
    zid = _pursuers(m)[0]
    zpos = m.world.get(zid, Position)
    # Player faces +z from (1, 1); put the pursuer 2 cells ahead.
    zpos.x, zpos.z = 1.0, 3.0

    m.update(Controls(attack=True), 0.0)
    check(not m.world.get(zid, Pursuer).alive, "7a: pursuer killed")
    check(m.state.score == 100, f"7b: +100 (got {m.state.score})")
    check(m.pursuer_poses()[0][3] is False, "7c: pose list flags it dead")

    m.update(Controls(attack=True), 0.0)
    check(m.state.score == 100, "7d: attacking with nothing alive scores nothing")


def test_kill_then_capture_same_tick():
    print("\n=== 10: Kill and capture on one tick ===")
    m = GameStateMachine(seed=5, score=50)
    _retire_pursuers(m)
    _move_player(m, 1.0, 1.0)
    shot = m.world.spawn()
    m.world.add(shot, Position(1.0, 1.2))
    m.world.add(shot, Pursuer())
    biter = m.world.spawn()
    m.world.add(biter, Position(1.0, 0.8))
    m.world.add(biter, Pursuer())

    m.update(Controls(attack=True), 0.0)
    alive = [m.world.get(e, Pursuer).alive for e in (shot, biter)]
    check(alive == [False, True], f"10a: earlier pursuer shot, other survives ({alive})")
    check(m.phase is Phase.CAUGHT_TRANSITION, "10b: survivor still catches the player")
    # 50 + 100 for the kill, then -100 for the capture
    check(m.state.score == 50, f"10c: kill scored before the penalty (got {m.state.score})")


def test_shared_bus_and_tuning():
    print("\n=== 8: External bus and tuning overrides ===")
    bus = EventBus()
    built = []
    bus.subscribe("LevelBuilt", built.append)
    try:
        tuning.override({"transition": {"rebuild_delay": 2.0},
                         "scoring": {"capture_penalty": 30}})
        m = GameStateMachine(seed=9, bus=bus, score=100)
        bus.drain()
        check(len(built) == 1 and built[0].size == 10, "8a: LevelBuilt on the supplied bus")

        m.player_caught()
        check(m.state.score == 70, f"8b: overridden penalty (got {m.state.score})")
        check(math.isclose(m.pending.fires_at, 2.0), "8c: overridden delay")
        m.update(None, 1.5)
        check(m.rebuilds == 1, "8d: not yet")
        m.update(None, 0.6)
        check(m.rebuilds == 2 and len(built) == 2, "8e: rebuilt at 2.1 s")
    finally:
        tuning.load()


def test_event_bus():
    print("\n=== 9: Event bus ===")
    from core.events import Notice, NoPath
    bus = EventBus()
    got = []

    def broken(ev):
        raise RuntimeError("boom")

    bus.subscribe("Notice", broken)
    bus.subscribe("Notice", lambda ev: got.append(ev.text))
    bus.subscribe("NoPath", lambda ev: bus.emit(Notice("follow-up")))
    bus.emit(Notice("first"))
    bus.emit(NoPath(start=(1, 1)))
    check(bus.pending_count() == 2, "9a: events queue until drained")
    n = bus.drain()
    check(got == ["first", "follow-up"], f"9b: failing handler skipped, nested emit delivered ({got})")
    check(n == 3 and bus.pending_count() == 0, f"9c: three events delivered (got {n})")

    bus.emit(Notice("dropped"))
    bus.clear()
    bus.drain()
    check(got == ["first", "follow-up"], "9d: clear discards the queue")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Scoring rules", test_scoring_rules),
        ("Initial state", test_initial_state),
        ("Goal transition", test_goal_transition),
        ("Level clock bonus", test_goal_bonus_uses_level_clock),
        ("Caught transition", test_caught_transition),
        ("Same-tick outcomes", test_caught_and_goal_same_tick),
        ("Kill scoring", test_kill_scores),
        ("Kill then capture", test_kill_then_capture_same_tick),
        ("Bus and tuning", test_shared_bus_and_tuning),
        ("Event bus", test_event_bus),
    ]

    for name, fn in sections:
        try:
            fn()
        except AssertionError:
            pass
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    print(f"\n{'=' * 60}")
    print(f"  Game State Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
