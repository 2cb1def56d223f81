"""logic/movement.py — Physics / movement system.

Moves entities with Position+Velocity+Collider and resolves tile
collisions one axis at a time (x, then y).  A blocked axis is simply
not applied — there is no clamping to the wall face — which gives
wall-sliding when only one axis is free.
"""

from __future__ import annotations
from typing import Iterable

from core.ecs import World
from core.grid import TileGrid
from core.collision import box_hits_wall
from components import Position, Velocity, Collider


def attempt_move(grid: TileGrid, pos: Position, radius: float,
                 vx: float, vy: float, dt: float) -> tuple[bool, bool]:
    """Try to move *pos* by ``(vx, vy) * dt``; commit each axis if clear.

    Returns ``(moved_x, moved_y)``.  An axis with zero velocity is not
    tested and reports False.
    """
    moved_x = moved_y = False
    if vx != 0:
        nx = pos.x + vx * dt
        if not box_hits_wall(grid, nx, pos.y, radius):
            pos.x = nx
            moved_x = True
    if vy != 0:
        ny = pos.y + vy * dt
        if not box_hits_wall(grid, pos.x, ny, radius):
            pos.y = ny
            moved_y = True
    return moved_x, moved_y


def movement_system(world: World, dt: float, eids: Iterable[int]) -> None:
    """Apply each listed entity's Velocity through ``attempt_move``.

    Velocity is rewritten every tick by its owner (player controller or
    brain), so it always holds the value emitted for the current tick.
    """
    grid = world.res(TileGrid)
    for eid in eids:
        pos = world.get(eid, Position)
        vel = world.get(eid, Velocity)
        col = world.get(eid, Collider)
        if pos is None or vel is None or col is None:
            continue
        attempt_move(grid, pos, col.radius, vel.x, vel.y, dt)
