"""logic/ai/steering.py — AI movement helpers.

Velocity-producing functions used by brain implementations to steer
entities toward a point.  They only *set* velocity; the movement system
applies it against the walls.
"""

from __future__ import annotations
import math


def move_toward(pos, vel, tx: float, ty: float, speed: float) -> float:
    """Set velocity to move directly toward (tx, ty).

    Zero velocity when already exactly on the target.  Returns the
    distance measured before moving.
    """
    dx = tx - pos.x
    dy = ty - pos.y
    d = math.hypot(dx, dy)
    if d == 0.0:
        vel.x, vel.y = 0.0, 0.0
        return d
    vel.x = (dx / d) * speed
    vel.y = (dy / d) * speed
    return d


def stop(vel) -> None:
    vel.x, vel.y = 0.0, 0.0


def face_velocity(facing, vel) -> None:
    """Point *facing* along *vel*; leave it alone when standing still."""
    if vel.x != 0.0 or vel.y != 0.0:
        facing.angle = math.atan2(vel.y, vel.x)
