"""components.spatial — Position, movement, and collision shapes.

All coordinates and dimensions are in pixels; angles in radians.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Position:
    x: float = 0.0        # px
    y: float = 0.0        # px


@dataclass
class Velocity:
    """Velocity requested for this tick.  Consumed by ``attempt_move``;
    nothing carries over between ticks."""
    x: float = 0.0        # px/s
    y: float = 0.0        # px/s


@dataclass
class Collider:
    """Circle for entity/item contact, square ``± radius`` against walls."""
    radius: float = 14.0  # px


@dataclass
class Facing:
    """Direction the entity looks, in radians (0 = right, π/2 = down).

    Only updated while the entity actually moves, so it keeps pointing
    the last way it went when standing still.
    """
    angle: float = 0.0    # rad
