"""simulation/snapshot.py — Read-only views of the sim for the host.

The renderer and HUD only ever see these frozen records; they never
touch ECS components directly.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PlayerView:
    x: float
    y: float
    facing: float
    stamina_ratio: float
    radius: float


@dataclass(frozen=True, slots=True)
class GuardView:
    x: float
    y: float
    facing: float
    state: str
    suspicion_ratio: float
    detection_range: float
    fov: float
    radius: float


@dataclass(frozen=True, slots=True)
class KeyView:
    x: float
    y: float
    collected: bool
    radius: float


@dataclass(frozen=True, slots=True)
class DoorView:
    x: float
    y: float
    open: bool
    radius: float


@dataclass(frozen=True, slots=True)
class GameView:
    running: bool
    outcome: str | None


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Everything the host needs to draw one frame."""
    player: PlayerView
    guard: GuardView
    key: KeyView
    door: DoorView
    game: GameView
