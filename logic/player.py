"""logic/player.py — Player controller: intent → velocity, stamina, pickups.

``player_system`` turns an ``InputIntent`` into this tick's velocity
(and drains / refills stamina).  ``interaction_system`` runs after the
player has moved and handles the key and the door, in that order, so
the door can never open on a tick before the key was collected.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from core.constants import SPRINT_MIN_STAMINA, OUTCOME_ESCAPED
from core.collision import circles_touch
from core.events import EventBus, KeyCollected, DoorOpened
from components import (
    Player, Position, Velocity, Facing, Collider, Key, Door,
    GameState, InputIntent, DevLog, GameClock,
)

if TYPE_CHECKING:
    from core.ecs import World


def player_system(world: "World", dt: float, intent: InputIntent) -> list[int]:
    """Set Player velocity and facing from *intent*; update stamina.

    Opposing axes cancel before the direction is normalised, so a
    diagonal is no faster than a straight line.  Returns the ids of the
    player entities so the caller can move them.
    """
    mx, my = intent.axes()
    moving = mx != 0 or my != 0

    eids: list[int] = []
    for eid, player, vel in world.query(Player, Velocity):
        eids.append(eid)
        player.sprinting = intent.sprint and player.stamina > SPRINT_MIN_STAMINA
        speed = player.sprint_speed if player.sprinting else player.speed

        if player.sprinting and moving:
            player.stamina = max(0.0, player.stamina - player.sprint_drain * dt)
        else:
            player.stamina = min(player.max_stamina,
                                 player.stamina + player.stamina_recovery * dt)

        if not moving:
            vel.x, vel.y = 0.0, 0.0
            continue

        length = math.hypot(mx, my)
        dx, dy = mx / length, my / length
        vel.x = dx * speed
        vel.y = dy * speed
        facing = world.get(eid, Facing)
        if facing is not None:
            facing.angle = math.atan2(dy, dx)
    return eids


def interaction_system(world: "World") -> None:
    """Collect the key, then open the door if the key is held."""
    result = world.query_one(Player, Position, Collider)
    if not result:
        return
    pid, _, ppos, pcol = result
    bus = world.res(EventBus)

    key_held = False
    for _, kpos, key in world.query(Position, Key):
        if not key.collected and circles_touch(ppos.x, ppos.y, pcol.radius,
                                               kpos.x, kpos.y, key.radius):
            key.collected = True
            print("[SIM] key collected")
            if bus:
                bus.emit(KeyCollected(x=kpos.x, y=kpos.y))
        key_held = key_held or key.collected

    if not key_held:
        return

    for _, dpos, door in world.query(Position, Door):
        if door.open:
            continue
        if circles_touch(ppos.x, ppos.y, pcol.radius,
                         dpos.x, dpos.y, door.radius):
            door.open = True
            state = world.res(GameState)
            if state is not None:
                state.finish(OUTCOME_ESCAPED)
            print("[SIM] door opened — escaped")
            log = world.res(DevLog)
            if log is not None:
                clock = world.res(GameClock)
                log.record(pid, "outcome", "player escaped",
                           t=clock.time if clock else 0.0)
            if bus:
                bus.emit(DoorOpened(x=dpos.x, y=dpos.y))
            return
