"""core/collision.py — Low-level tile-grid collision primitives.

These live in ``core/`` (not ``logic/``) because both the movement
system and the level builder's sanity checks need them.

Entities are circles for distance tests, but against walls they are
treated as the square ``centre ± radius`` and only its four corners are
probed.  With a radius below half a tile this is exact for axis moves;
diagonal moves may clip a wall corner slightly, which is accepted.
"""

from __future__ import annotations
from core.grid import TileGrid


def box_hits_wall(grid: TileGrid, x: float, y: float, radius: float) -> bool:
    """Return True if any corner of the square around (x, y) is blocked."""
    return (
        grid.is_blocked_point(x - radius, y - radius)
        or grid.is_blocked_point(x + radius, y - radius)
        or grid.is_blocked_point(x - radius, y + radius)
        or grid.is_blocked_point(x + radius, y + radius)
    )


def circles_touch(ax: float, ay: float, ar: float,
                  bx: float, by: float, br: float) -> bool:
    """True if two circles overlap (strictly closer than the radius sum)."""
    dx = ax - bx
    dy = ay - by
    reach = ar + br
    return dx * dx + dy * dy < reach * reach
