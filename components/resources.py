"""components.resources — Player marker and world-level singletons."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class GameClock:
    """Monotonic sim time — accumulated ``dt`` while the run is live.

    Used to timestamp DevLog entries.  Advanced once per step.
    """
    time: float = 0.0


@dataclass
class GameState:
    """Run status.  ``running`` is False exactly when ``outcome`` is set."""
    running: bool = True
    outcome: str | None = None     # None | "escaped" | "caught"

    def finish(self, outcome: str) -> None:
        self.running = False
        self.outcome = outcome


@dataclass
class SimConfig:
    """Per-sim step settings, read from ``[sim]`` in tuning at build."""
    max_dt: float = 0.033          # s
    los_samples: int = 24


@dataclass
class Player:
    """Marks the player entity and holds its movement / stamina stats."""
    speed: float = 120.0            # px/s
    sprint_speed: float = 190.0     # px/s
    stamina: float = 4.0            # s of sprint
    max_stamina: float = 4.0
    stamina_recovery: float = 1.5   # per s
    sprint_drain: float = 2.5       # per s
    sprinting: bool = False


@dataclass(frozen=True)
class InputIntent:
    """What the host wants the player to do this tick.

    Four independent movement axes plus sprint.  Opposing axes cancel.
    """
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    sprint: bool = False

    def axes(self) -> tuple[int, int]:
        """Return the raw (dx, dy) direction, each in {-1, 0, 1}."""
        dx = int(self.right) - int(self.left)
        dy = int(self.down) - int(self.up)
        return dx, dy


NO_INPUT = InputIntent()
