"""test_player.py — Player controller, stamina, key pickup and the door.

The guard's brain is switched off in most tests so only the player
systems run.

Run: python test_player.py
"""
from __future__ import annotations
import math, sys, traceback

from core import tuning
from core.constants import OUTCOME_ESCAPED
from core.level import level_from_dict, load_level
from components import (
    Brain, Player, Position, Velocity, Facing, Key, Door, InputIntent,
)
from simulation.world_sim import EscapeSim


ARENA = [
    "##########",
    "#........#",
    "#........#",
    "#........#",
    "##########",
]

RIGHT = InputIntent(right=True)
SPRINT_RIGHT = InputIntent(right=True, sprint=True)


def _sim(player=(3, 2), guard=(8, 3), key=(1, 1), door=(1, 3)) -> EscapeSim:
    tuning.clear()
    level = level_from_dict({
        "tile_size": 40,
        "layout": ARENA,
        "anchors": {"player": list(player), "guard": list(guard),
                    "key": list(key), "door": list(door),
                    "patrol": [list(guard)]},
    }, name="arena")
    sim = EscapeSim.from_level(level)
    sim.world.get(sim.guard_eid, Brain).active = False
    return sim


def _player(sim: EscapeSim):
    w, eid = sim.world, sim.player_eid
    return w.get(eid, Player), w.get(eid, Position), w.get(eid, Facing)


# ════════════════════════════════════════════════════════════════════════
#  Movement
# ════════════════════════════════════════════════════════════════════════

def test_walk_speed():
    sim = _sim()
    _, pos, facing = _player(sim)
    sim.step(0.02, RIGHT)
    assert abs(pos.x - (140.0 + 120.0 * 0.02)) < 1e-9
    assert pos.y == 100.0
    assert facing.angle == 0.0


def test_diagonal_is_normalised():
    sim = _sim()
    _, pos, facing = _player(sim)
    sim.step(0.02, InputIntent(up=True, left=True))
    step = 120.0 * 0.02 / math.sqrt(2.0)
    assert abs(pos.x - (140.0 - step)) < 1e-9
    assert abs(pos.y - (100.0 - step)) < 1e-9
    assert math.isclose(facing.angle, -0.75 * math.pi)
    moved = math.hypot(pos.x - 140.0, pos.y - 100.0)
    assert abs(moved - 120.0 * 0.02) < 1e-9


def test_opposing_keys_cancel():
    sim = _sim()
    _, pos, facing = _player(sim)
    facing.angle = 1.0
    sim.step(0.02, InputIntent(left=True, right=True, up=True, down=True))
    assert (pos.x, pos.y) == (140.0, 100.0)
    assert facing.angle == 1.0, "facing kept while standing still"
    vel = sim.world.get(sim.player_eid, Velocity)
    assert (vel.x, vel.y) == (0.0, 0.0)


def test_dt_is_clamped():
    sim = _sim()
    _, pos, _ = _player(sim)
    sim.step(1.0, RIGHT)
    assert abs(pos.x - (140.0 + 120.0 * 0.033)) < 1e-9
    sim.step(-0.5, RIGHT)
    assert abs(pos.x - (140.0 + 120.0 * 0.033)) < 1e-9


# ════════════════════════════════════════════════════════════════════════
#  Stamina
# ════════════════════════════════════════════════════════════════════════

def test_sprint_drains_and_speeds_up():
    sim = _sim()
    player, pos, _ = _player(sim)
    sim.step(0.02, SPRINT_RIGHT)
    assert player.sprinting
    assert abs(player.stamina - (4.0 - 2.5 * 0.02)) < 1e-9
    assert abs(pos.x - (140.0 + 190.0 * 0.02)) < 1e-9


def test_sprint_in_place_recovers():
    sim = _sim()
    player, pos, _ = _player(sim)
    player.stamina = 2.0
    sim.step(0.02, InputIntent(sprint=True))
    assert abs(player.stamina - (2.0 + 1.5 * 0.02)) < 1e-9
    assert (pos.x, pos.y) == (140.0, 100.0)


def test_stamina_never_exceeds_max():
    sim = _sim()
    player, _, _ = _player(sim)
    for _ in range(50):
        sim.step(0.033, RIGHT)
    assert player.stamina == player.max_stamina


def test_exhausted_sprint_walks():
    sim = _sim()
    player, pos, _ = _player(sim)
    player.stamina = 0.1                   # needs strictly more than 0.1
    sim.step(0.02, SPRINT_RIGHT)
    assert not player.sprinting
    assert abs(pos.x - (140.0 + 120.0 * 0.02)) < 1e-9
    assert abs(player.stamina - (0.1 + 1.5 * 0.02)) < 1e-9


def test_stamina_stays_in_range():
    sim = _sim(player=(1, 2))
    player, _, _ = _player(sim)
    intents = [SPRINT_RIGHT, InputIntent(left=True, sprint=True), RIGHT,
               InputIntent(sprint=True), InputIntent()]
    for i in range(2000):
        sim.step(0.033, intents[(i // 37) % len(intents)])
        assert 0.0 <= player.stamina <= player.max_stamina


# ════════════════════════════════════════════════════════════════════════
#  Key and door
# ════════════════════════════════════════════════════════════════════════

def test_key_collected_at_key_centre():
    sim = _sim()
    collected = []
    sim.bus.subscribe("KeyCollected", collected.append)
    _, pos, _ = _player(sim)
    kpos = sim.world.get(sim.key_eid, Position)
    pos.x, pos.y = kpos.x, kpos.y
    sim.step(0.0)
    assert sim.world.get(sim.key_eid, Key).collected
    assert len(collected) == 1
    assert sim.snapshot().key.collected


def test_key_not_collected_out_of_reach():
    sim = _sim()
    _, pos, _ = _player(sim)
    kpos = sim.world.get(sim.key_eid, Position)
    key = sim.world.get(sim.key_eid, Key)
    pos.x, pos.y = kpos.x + 14.0 + key.radius, kpos.y     # exactly touching
    sim.step(0.0)
    assert not key.collected


def test_door_stays_shut_without_key():
    sim = _sim()
    _, pos, _ = _player(sim)
    dpos = sim.world.get(sim.door_eid, Position)
    pos.x, pos.y = dpos.x, dpos.y
    for _ in range(5):
        sim.step(0.02)
    assert not sim.world.get(sim.door_eid, Door).open
    assert sim.running and sim.outcome is None


def test_escape_with_key():
    sim = _sim()
    opened = []
    sim.bus.subscribe("DoorOpened", opened.append)
    _, pos, _ = _player(sim)
    sim.world.get(sim.key_eid, Key).collected = True
    dpos = sim.world.get(sim.door_eid, Position)
    pos.x, pos.y = dpos.x, dpos.y
    assert sim.step(0.02) is False
    assert sim.world.get(sim.door_eid, Door).open
    assert not sim.running
    assert sim.outcome == OUTCOME_ESCAPED
    assert len(opened) == 1
    assert sim.dev_log.for_cat("outcome")[-1]["msg"] == "player escaped"


def test_key_and_door_same_tick():
    """Key first, then door: both can happen in one step."""
    sim = _sim(key=(1, 3), door=(2, 3))
    _, pos, _ = _player(sim)
    pos.x, pos.y = 80.0, 140.0              # between the two tiles
    sim.step(0.0)
    assert sim.world.get(sim.key_eid, Key).collected
    assert sim.outcome == OUTCOME_ESCAPED


# ════════════════════════════════════════════════════════════════════════
#  Reference level walk-through
# ════════════════════════════════════════════════════════════════════════

def test_reference_level_escape_freezes_world():
    tuning.clear()
    sim = EscapeSim.from_level(load_level())
    _, pos, _ = _player(sim)

    pos.x, pos.y = sim.anchors.key
    sim.step(0.02)
    assert sim.snapshot().key.collected
    assert sim.running

    pos.x, pos.y = sim.anchors.door
    sim.step(0.02)
    assert sim.outcome == OUTCOME_ESCAPED

    frozen = sim.snapshot()
    for _ in range(20):
        sim.step(0.03, InputIntent(down=True, sprint=True))
    assert sim.snapshot() == frozen


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
    print(f"\n  Player tests: {len(tests) - failed} passed, {failed} failed")
    sys.exit(1 if failed else 0)
