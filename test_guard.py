"""test_guard.py — Guard suspicion, memory, patrol/chase and capture.

Run: python test_guard.py
"""
from __future__ import annotations
import math, random, sys, traceback

from core import tuning
from core.constants import PATROL, CHASE, OUTCOME_CAUGHT
from core.level import level_from_dict
from components import (
    Brain, Guard, Patrol, Position, Velocity, Facing, Player, InputIntent,
)
from logic.ai.guard import (
    update_suspicion, update_state, patrol_velocity, chase_velocity,
)
from logic.ai.brains import registered_names, tick_ai
from simulation.world_sim import EscapeSim


ARENA = [
    "##########",
    "#........#",
    "#........#",
    "#........#",
    "##########",
]


def _sim(player, guard, key=(1, 1), door=(1, 3),
         patrol=((5, 2), (2, 2))) -> EscapeSim:
    tuning.clear()
    level = level_from_dict({
        "tile_size": 40,
        "layout": ARENA,
        "anchors": {"player": list(player), "guard": list(guard),
                    "key": list(key), "door": list(door),
                    "patrol": [list(p) for p in patrol]},
    }, name="arena")
    return EscapeSim.from_level(level)


def _record(sim: EscapeSim, *names: str) -> list:
    seen: list = []
    for name in names:
        sim.bus.subscribe(name, seen.append)
    return seen


# ════════════════════════════════════════════════════════════════════════
#  Suspicion / memory (component level)
# ════════════════════════════════════════════════════════════════════════

def test_suspicion_gain_by_state():
    g = Guard()
    update_suspicion(g, True, 0.02)
    assert abs(g.suspicion - 0.02) < 1e-9
    g.state = CHASE
    update_suspicion(g, True, 0.02)
    assert abs(g.suspicion - 0.05) < 1e-9


def test_suspicion_decay_and_floor():
    g = Guard(suspicion=0.1)
    update_suspicion(g, False, 0.1)
    assert abs(g.suspicion - 0.02) < 1e-9
    update_suspicion(g, False, 0.1)
    assert g.suspicion == 0.0


def test_suspicion_capped():
    g = Guard(suspicion=3.99, state=CHASE)
    update_suspicion(g, True, 0.033)
    assert g.suspicion == g.suspicion_max


def test_suspicion_and_memory_stay_in_range():
    rng = random.Random(11)
    g = Guard()
    for _ in range(5000):
        sees = rng.random() < 0.4
        dt = rng.uniform(0.0, 0.033)
        update_suspicion(g, sees, dt)
        update_state(g, sees, dt)
        assert 0.0 <= g.suspicion <= g.suspicion_max
        assert 0.0 <= g.memory_timer <= g.max_memory
        assert g.state in (PATROL, CHASE)


def test_sighting_forces_chase_and_fills_memory():
    g = Guard()
    update_suspicion(g, True, 0.016)
    update_state(g, True, 0.016)
    assert g.state == CHASE
    assert g.memory_timer == g.max_memory


def test_continuous_sight_never_patrols():
    g = Guard()
    for _ in range(1000):
        update_suspicion(g, True, 0.033)
        update_state(g, True, 0.033)
        assert g.state == CHASE


def test_disengage_needs_memory_and_calm():
    """Memory empty but suspicion still high → keep chasing."""
    g = Guard(state=CHASE, suspicion=1.0, memory_timer=0.01)
    update_suspicion(g, False, 0.02)
    update_state(g, False, 0.02)
    assert g.memory_timer == 0.0
    assert g.state == CHASE

    g.suspicion = 0.1
    update_suspicion(g, False, 0.02)
    update_state(g, False, 0.02)
    assert g.state == PATROL


def test_low_suspicion_but_memory_keeps_chasing():
    g = Guard(state=CHASE, suspicion=0.0, memory_timer=3.0)
    t = 0.0
    while t < 2.9:
        update_suspicion(g, False, 0.02)
        update_state(g, False, 0.02)
        t += 0.02
        assert g.state == CHASE
    for _ in range(10):
        update_suspicion(g, False, 0.02)
        update_state(g, False, 0.02)
    assert g.state == PATROL


def test_patrol_ignores_memory():
    g = Guard(state=PATROL, memory_timer=1.0)
    update_state(g, False, 0.5)
    assert g.memory_timer == 1.0


# ════════════════════════════════════════════════════════════════════════
#  Motion helpers
# ════════════════════════════════════════════════════════════════════════

def test_patrol_arrival_advances_and_stops():
    patrol = Patrol(waypoints=[(0.0, 0.0), (100.0, 0.0)], index=1)
    vel = Velocity(50.0, 50.0)
    patrol_velocity(patrol, Guard(), Position(95.0, 0.0), vel)
    assert patrol.index == 0, "wraps to the start of the route"
    assert (vel.x, vel.y) == (0.0, 0.0)


def test_patrol_heads_for_waypoint():
    patrol = Patrol(waypoints=[(100.0, 0.0)], index=0)
    vel = Velocity()
    patrol_velocity(patrol, Guard(speed=90.0), Position(0.0, 0.0), vel)
    assert (vel.x, vel.y) == (90.0, 0.0)
    assert patrol.index == 0


def test_chase_holds_when_close():
    vel = Velocity(1.0, 1.0)
    chase_velocity(Guard(), Position(0.0, 0.0), vel, 3.0, 0.0)
    assert (vel.x, vel.y) == (0.0, 0.0)
    chase_velocity(Guard(chase_speed=115.0), Position(0.0, 0.0), vel, 0.0, 50.0)
    assert abs(vel.x) < 1e-9 and abs(vel.y - 115.0) < 1e-9


# ════════════════════════════════════════════════════════════════════════
#  Brain in a world
# ════════════════════════════════════════════════════════════════════════

def test_guard_brain_registered():
    assert "guard" in registered_names()


def test_spotted_in_one_tick():
    sim = _sim(player=(3, 2), guard=(7, 2))
    spotted = _record(sim, "PlayerSpotted")
    sim.step(0.02)
    g = sim.world.get(sim.guard_eid, Guard)
    assert g.state == CHASE
    assert g.memory_timer == g.max_memory
    assert abs(g.suspicion - 0.02) < 1e-9
    assert len(spotted) == 1 and abs(spotted[0].distance - 160.0) < 1e-9
    pos = sim.world.get(sim.guard_eid, Position)
    assert abs(pos.x - (300.0 - 115.0 * 0.02)) < 1e-9
    assert pos.y == 100.0


def test_waypoint_arrival_tick_has_zero_velocity():
    # Player behind the guard (guard faces left), out of the cone.
    sim = _sim(player=(8, 2), guard=(5, 2))
    sim.step(0.02)
    patrol = sim.world.get(sim.guard_eid, Patrol)
    vel = sim.world.get(sim.guard_eid, Velocity)
    pos = sim.world.get(sim.guard_eid, Position)
    assert patrol.index == 1
    assert (vel.x, vel.y) == (0.0, 0.0)
    assert (pos.x, pos.y) == (220.0, 100.0)
    assert sim.world.get(sim.guard_eid, Guard).state == PATROL

    sim.step(0.02)
    assert (vel.x, vel.y) == (-90.0, 0.0)
    assert abs(pos.x - (220.0 - 1.8)) < 1e-9
    assert math.isclose(sim.world.get(sim.guard_eid, Facing).angle, math.pi)


def test_chase_abandoned_event():
    sim = _sim(player=(3, 2), guard=(7, 2))
    abandoned = _record(sim, "ChaseAbandoned")
    sim.step(0.02)
    g = sim.world.get(sim.guard_eid, Guard)
    assert g.state == CHASE

    g.suspicion = 0.1
    g.memory_timer = 0.01
    sim.world.get(sim.guard_eid, Facing).angle = 0.0     # look away
    sim.step(0.02)
    assert g.state == PATROL
    assert len(abandoned) == 1
    assert abandoned[0].guard_eid == sim.guard_eid


def test_capture_regardless_of_state():
    sim = _sim(player=(2, 2), guard=(5, 2))
    caught = _record(sim, "PlayerCaught")
    gpos = sim.world.get(sim.guard_eid, Position)
    gpos.x = 120.0                                       # 20 px from the player
    sim.world.get(sim.guard_eid, Facing).angle = 0.0     # player behind
    assert sim.step(0.02) is False
    assert sim.world.get(sim.guard_eid, Guard).state == PATROL
    assert not sim.running
    assert sim.outcome == OUTCOME_CAUGHT
    assert len(caught) == 1


def test_no_capture_at_exact_contact():
    sim = _sim(player=(2, 2), guard=(5, 2))
    gpos = sim.world.get(sim.guard_eid, Position)
    gpos.x = 130.0                                       # 14 + 16 apart
    sim.world.get(sim.guard_eid, Facing).angle = 0.0
    sim.step(0.0)
    assert sim.running


def test_caught_world_is_frozen():
    sim = _sim(player=(2, 2), guard=(5, 2))
    sim.world.get(sim.guard_eid, Position).x = 120.0
    sim.step(0.02)
    before = sim.snapshot()
    stamina = sim.world.get(sim.player_eid, Player).stamina
    for _ in range(10):
        assert sim.step(0.03, InputIntent(right=True, sprint=True)) is False
    assert sim.snapshot() == before
    assert sim.world.get(sim.player_eid, Player).stamina == stamina


def test_inactive_brain_is_skipped():
    sim = _sim(player=(3, 2), guard=(7, 2))
    sim.world.get(sim.guard_eid, Brain).active = False
    assert tick_ai(sim.world, 0.02) == []
    sim.step(0.02)
    assert sim.world.get(sim.guard_eid, Guard).state == PATROL


def test_unknown_brain_logged():
    sim = _sim(player=(3, 2), guard=(7, 2))
    sim.world.get(sim.guard_eid, Brain).kind = "nobody"
    assert tick_ai(sim.world, 0.02) == []
    errors = sim.dev_log.for_cat("error")
    assert errors and "nobody" in errors[-1]["msg"]


# ════════════════════════════════════════════════════════════════════════
#  MAIN
# ════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    tests = [(n, f) for n, f in list(globals().items())
             if n.startswith("test_") and callable(f)]
    failed = 0
    for name, fn in tests:
        try:
            fn()
            print(f"  [PASS] {name}")
        except Exception:
            failed += 1
            print(f"  [FAIL] {name}")
            traceback.print_exc()
    print(f"\n  Guard tests: {len(tests) - failed} passed, {failed} failed")
    sys.exit(1 if failed else 0)
