"""logic/ai/guard.py — Patrol / chase brain for the guard.

Two states:

    patrol ──(sees player)──────────────────────────▶ chase
    chase  ──(memory_timer == 0 and suspicion < 0.2)─▶ patrol

Per tick, in order:

1. **Perception** — distance and bearing to the player, measured before
   anyone moves this tick.  Visible = in range, clear line of sight, and
   inside the vision cone.
2. **Suspicion** — rises by ``dt`` (×1.5 while chasing) while visible,
   otherwise decays by ``suspicion_decay * dt``.  Clamped to
   ``[0, suspicion_max]``.
3. **State** — any sighting forces chase and refills ``memory_timer``.
   Without a sighting a chasing guard burns memory; it gives up only
   when the memory is empty *and* suspicion has fallen under
   ``DISENGAGE_SUSPICION``.
4. **Motion** — patrol walks the waypoint loop at ``speed`` (a zero-
   velocity tick on each arrival); chase heads for the player at
   ``chase_speed`` and holds still within ``CHASE_STOP_DIST``.
5. **Capture** — touching the player ends the run, whatever the state.
"""

from __future__ import annotations
import math

from core.ecs import World
from core.grid import TileGrid
from core.constants import (
    PATROL, CHASE, WAYPOINT_REACH, CHASE_STOP_DIST,
    CHASE_SUSPICION_GAIN, PATROL_SUSPICION_GAIN, DISENGAGE_SUSPICION,
    OUTCOME_CAUGHT, LOS_SAMPLES,
)
from core.events import EventBus, PlayerSpotted, ChaseAbandoned, PlayerCaught
from components import (
    Brain, Guard, Patrol, Position, Velocity, Facing, Collider,
    Player, GameState, SimConfig,
)
from logic.ai.brains import register_brain, _log
from logic.ai.perception import can_see
from logic.ai.steering import move_toward, stop, face_velocity


# ── State update (pure, component-level) ─────────────────────────────

def update_suspicion(guard: Guard, sees: bool, dt: float) -> None:
    if sees:
        gain = CHASE_SUSPICION_GAIN if guard.state == CHASE else PATROL_SUSPICION_GAIN
        guard.suspicion = min(guard.suspicion_max, guard.suspicion + dt * gain)
    else:
        guard.suspicion = max(0.0, guard.suspicion - guard.suspicion_decay * dt)


def update_state(guard: Guard, sees: bool, dt: float) -> None:
    """Apply the patrol/chase transition for one tick.

    Call after ``update_suspicion`` so the disengage check sees this
    tick's suspicion.
    """
    if sees:
        guard.state = CHASE
        guard.memory_timer = guard.max_memory
    elif guard.state == CHASE:
        guard.memory_timer = max(0.0, guard.memory_timer - dt)
        if guard.memory_timer == 0.0 and guard.suspicion < DISENGAGE_SUSPICION:
            guard.state = PATROL


# ── Motion ───────────────────────────────────────────────────────────

def patrol_velocity(patrol: Patrol, guard: Guard, pos: Position,
                    vel: Velocity) -> None:
    """Head for the current waypoint; on arrival advance and stand still."""
    wx, wy = patrol.current()
    if math.hypot(wx - pos.x, wy - pos.y) < WAYPOINT_REACH:
        patrol.advance()
        stop(vel)
        return
    move_toward(pos, vel, wx, wy, guard.speed)


def chase_velocity(guard: Guard, pos: Position, vel: Velocity,
                   tx: float, ty: float) -> None:
    if math.hypot(tx - pos.x, ty - pos.y) <= CHASE_STOP_DIST:
        stop(vel)
        return
    move_toward(pos, vel, tx, ty, guard.chase_speed)


# ── Brain ────────────────────────────────────────────────────────────

def _guard_brain(world: World, eid: int, brain: Brain, dt: float,
                 game_time: float) -> None:
    guard = world.get(eid, Guard)
    pos = world.get(eid, Position)
    vel = world.get(eid, Velocity)
    facing = world.get(eid, Facing)
    if guard is None or vel is None or facing is None:
        return

    target = world.query_one(Player, Position, Collider)
    if target is None:
        stop(vel)
        return
    _, _, ppos, pcol = target

    grid = world.res(TileGrid)
    cfg = world.res(SimConfig)
    samples = cfg.los_samples if cfg else LOS_SAMPLES

    dist = math.hypot(ppos.x - pos.x, ppos.y - pos.y)
    sees = can_see(grid, (pos.x, pos.y), facing.angle, (ppos.x, ppos.y),
                   guard.detection_range, guard.fov, samples)

    was = guard.state
    update_suspicion(guard, sees, dt)
    update_state(guard, sees, dt)

    bus = world.res(EventBus)
    if was == PATROL and guard.state == CHASE:
        _log(world, eid, "guard", "patrol → chase", game_time,
             details={"dist": round(dist, 1),
                      "suspicion": round(guard.suspicion, 3)})
        if bus:
            bus.emit(PlayerSpotted(guard_eid=eid, suspicion=guard.suspicion,
                                   distance=dist))
    elif was == CHASE and guard.state == PATROL:
        _log(world, eid, "guard", "chase → patrol", game_time)
        if bus:
            bus.emit(ChaseAbandoned(guard_eid=eid))

    if guard.state == CHASE:
        chase_velocity(guard, pos, vel, ppos.x, ppos.y)
    else:
        patrol = world.get(eid, Patrol)
        if patrol is None or not patrol.waypoints:
            stop(vel)
        else:
            patrol_velocity(patrol, guard, pos, vel)
    face_velocity(facing, vel)

    # Capture uses the pre-move distance, like perception.
    col = world.get(eid, Collider)
    radius = col.radius if col else 0.0
    if dist < pcol.radius + radius:
        state = world.res(GameState)
        if state is not None and state.running:
            state.finish(OUTCOME_CAUGHT)
            _log(world, eid, "outcome", "player caught", game_time,
                 details={"dist": round(dist, 1)})
            if bus:
                bus.emit(PlayerCaught(guard_eid=eid, x=ppos.x, y=ppos.y))


register_brain("guard", _guard_brain)
