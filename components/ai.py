"""components.ai — Brain, guard perception/memory, patrol route."""

from __future__ import annotations
from dataclasses import dataclass, field

from core.constants import PATROL


@dataclass
class Brain:
    """Entity AI controller — minimal.

    ``kind`` selects the brain function from the registry ("guard", …).
    ``active`` must be True for the brain runner to execute.
    """
    kind: str = "guard"
    active: bool = True


@dataclass
class Guard:
    """Perception, suspicion and memory for a patrolling guard.

    ``detection_range`` — max sight distance (px).
    ``fov``             — total field of view (rad, half on each side).
    ``suspicion``       — 0 … ``suspicion_max``; rises while the player is
                          in sight, decays by ``suspicion_decay``/s otherwise.
    ``memory_timer``    — 0 … ``max_memory``; refilled on every sighting,
                          counts down during a chase once sight is lost.
    ``state``           — "patrol" or "chase".
    """
    speed: float = 90.0             # px/s  (patrol)
    chase_speed: float = 115.0      # px/s
    detection_range: float = 220.0  # px
    fov: float = 1.884955592        # rad   (0.6 π)
    suspicion_max: float = 4.0
    suspicion_decay: float = 0.8    # per s
    max_memory: float = 3.0         # s
    state: str = PATROL
    suspicion: float = 0.0
    memory_timer: float = 0.0       # s


@dataclass
class Patrol:
    """Fixed cyclic route of tile-centre waypoints (px)."""
    waypoints: list[tuple[float, float]] = field(default_factory=list)
    index: int = 0

    def current(self) -> tuple[float, float]:
        return self.waypoints[self.index]

    def advance(self) -> None:
        self.index = (self.index + 1) % len(self.waypoints)
