"""logic/ai/perception.py — Line of sight and vision-cone helpers.

Used by the guard brain to decide whether it can see the player.
"""

from __future__ import annotations
import math

from core.grid import TileGrid
from core.constants import LOS_SAMPLES


def has_line_of_sight(grid: TileGrid, origin: tuple[float, float],
                      target: tuple[float, float],
                      samples: int = LOS_SAMPLES) -> bool:
    """Return True if nothing blocks the segment *origin* → *target*.

    Samples *samples* equally spaced points from one step past the origin
    up to and including the target.  A wall thinner than the step can be
    skipped over.  A zero-length segment is always clear.
    """
    if origin == target:
        return True
    ox, oy = origin
    step_x = (target[0] - ox) / samples
    step_y = (target[1] - oy) / samples
    for i in range(1, samples + 1):
        if grid.is_blocked_point(ox + step_x * i, oy + step_y * i):
            return False
    return True


def angle_between(a: float, b: float) -> float:
    """Absolute difference of two angles, wrapped into [0, π]."""
    return abs(math.atan2(math.sin(a - b), math.cos(a - b)))


def in_vision_cone(pos: tuple[float, float], facing: float,
                   target: tuple[float, float],
                   view_distance: float, fov: float) -> bool:
    """True if *target* is closer than *view_distance* and inside the arc.

    *fov* is the full cone width; the target must be strictly within half
    of it on either side of *facing*.
    """
    dx = target[0] - pos[0]
    dy = target[1] - pos[1]
    if math.hypot(dx, dy) >= view_distance:
        return False
    return angle_between(math.atan2(dy, dx), facing) < fov / 2.0


def can_see(grid: TileGrid, pos: tuple[float, float], facing: float,
            target: tuple[float, float], view_distance: float, fov: float,
            samples: int = LOS_SAMPLES) -> bool:
    """Full vision test: range, then line of sight, then field of view."""
    dist = math.hypot(target[0] - pos[0], target[1] - pos[1])
    if dist >= view_distance:
        return False
    if not has_line_of_sight(grid, pos, target, samples):
        return False
    return in_vision_cone(pos, facing, target, view_distance, fov)
