"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial     Position, Velocity, Collider, Facing
ai          Brain, Guard, Patrol
items       Key, Door
resources   Player, GameState, GameClock, SimConfig, InputIntent
dev_log     DevLog

All public names are re-exported here so code can do
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position, Velocity, Collider, Facing

# ── AI ───────────────────────────────────────────────────────────────
from components.ai import Brain, Guard, Patrol

# ── Items ────────────────────────────────────────────────────────────
from components.items import Key, Door

# ── Player / world resources ─────────────────────────────────────────
from components.resources import (
    GameClock, GameState, SimConfig, Player, InputIntent, NO_INPUT,
)

# ── Debug ────────────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Position", "Velocity", "Collider", "Facing",
    # ai
    "Brain", "Guard", "Patrol",
    # items
    "Key", "Door",
    # resources
    "GameClock", "GameState", "SimConfig", "Player", "InputIntent", "NO_INPUT",
    # debug
    "DevLog",
]
