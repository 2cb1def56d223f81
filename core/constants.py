"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Unit System
-----------
All gameplay distances are measured in **pixels**, where:

    1 tile = ``tile_size`` px   (40 in the reference level)

Standard units used throughout the codebase:

    Distance / position     px      (pixels)
    Speed                   px/s    (pixels per second)
    Time                    s       (seconds)
    Angles                  rad     (radians, 0 = +x, π/2 = +y / down)
    Stamina / suspicion     —       (unitless, "seconds of effort")

Gameplay values that designers tweak (speeds, ranges, radii) live in
``data/tuning.toml``; the defaults below mirror that file so the
simulation runs even without it.
"""

import math

# ── Level ───────────────────────────────────────────────────────────
WALL_CHAR = "#"
TILE_SIZE = 40

# ── Simulation step ─────────────────────────────────────────────────
MAX_DT = 0.033                 # s  (longest tick the core will integrate)
LOS_SAMPLES = 24               # samples per line-of-sight query

# ── Guard behaviour ─────────────────────────────────────────────────
PATROL = "patrol"
CHASE = "chase"

WAYPOINT_REACH = 10.0          # px  (arrival radius for a patrol point)
CHASE_STOP_DIST = 4.0          # px  (stop closing in to avoid jitter)
CHASE_SUSPICION_GAIN = 1.5     # suspicion/s while already chasing
PATROL_SUSPICION_GAIN = 1.0    # suspicion/s while patrolling
DISENGAGE_SUSPICION = 0.2      # chase → patrol needs suspicion below this

# ── Player ──────────────────────────────────────────────────────────
SPRINT_MIN_STAMINA = 0.1       # stamina needed to start / keep sprinting

# ── Outcomes ────────────────────────────────────────────────────────
OUTCOME_ESCAPED = "escaped"
OUTCOME_CAUGHT = "caught"

# ── Reference entity stats (mirrors data/tuning.toml) ───────────────
PLAYER_DEFAULTS = {
    "radius": 14.0,
    "speed": 120.0,
    "sprint_speed": 190.0,
    "max_stamina": 4.0,
    "stamina_recovery": 1.5,
    "sprint_drain": 2.5,
    "facing": 0.0,
}

GUARD_DEFAULTS = {
    "radius": 16.0,
    "speed": 90.0,
    "chase_speed": 115.0,
    "facing": math.pi,
    "detection_range": 220.0,
    "fov": math.pi * 0.6,
    "suspicion_max": 4.0,
    "suspicion_decay": 0.8,
    "max_memory": 3.0,
}

# Item radii are fractions of the tile size.
KEY_RADIUS_FRAC = 0.3
DOOR_RADIUS_FRAC = 0.45

# ── Render ──────────────────────────────────────────────────────────
MESSAGE_SECONDS = 6.0          # how long the outcome banner stays up

COLOR_BG = (30, 30, 38)
COLOR_WALL = (47, 48, 58)
COLOR_WALL_EDGE = (65, 66, 76)
COLOR_FLOOR_A = (35, 35, 45)
COLOR_FLOOR_B = (31, 31, 40)
COLOR_KEY = (255, 212, 71)
COLOR_KEY_RIM = (140, 107, 29)
COLOR_DOOR_OPEN = (71, 209, 125)
COLOR_DOOR_CLOSED = (209, 71, 71)
COLOR_PLAYER = (79, 163, 249)
COLOR_PLAYER_EYE = (215, 236, 255)
COLOR_GUARD = (249, 116, 79)
COLOR_GUARD_RING = (255, 120, 80)
COLOR_CONE = (249, 79, 79, 64)
