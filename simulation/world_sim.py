"""simulation/world_sim.py — Top-level simulation object.

``EscapeSim`` owns one ECS ``World`` built from a ``Level``: the tile
grid, the player, one guard, the key and the door.  It exposes the
whole core surface the host needs::

    level = load_level()
    sim = create_sim(level)
    if isinstance(sim, PlacementError):
        ...                              # bad anchor, nothing was built

    # each frame:
    sim.step(dt, intent)
    view = sim.snapshot()

    # R pressed:
    sim.reset()

Anchors are validated once, when the sim is created.  ``reset`` rebuilds
the entities from those already-validated positions, so it cannot fail.
"""

from __future__ import annotations
from dataclasses import dataclass

from core import tuning
from core.ecs import World
from core.grid import TileGrid, PlacementError
from core.level import Level
from core.events import EventBus
from core.constants import (
    PLAYER_DEFAULTS, GUARD_DEFAULTS, KEY_RADIUS_FRAC, DOOR_RADIUS_FRAC,
    MAX_DT, LOS_SAMPLES,
)
from components import (
    Position, Velocity, Collider, Facing, Brain, Guard, Patrol,
    Key, Door, Player, GameState, GameClock, SimConfig, DevLog,
    InputIntent, NO_INPUT,
)
from logic.tick import tick_systems
from simulation.snapshot import (
    PlayerView, GuardView, KeyView, DoorView, GameView, Snapshot,
)

Point = tuple[float, float]


@dataclass(frozen=True)
class Anchors:
    """Validated pixel positions for everything placed on the map."""
    player: Point
    guard: Point
    key: Point
    door: Point
    patrol: tuple[Point, ...]


def resolve_anchors(grid: TileGrid, level: Level) -> Anchors:
    """Turn the level's anchor tiles into tile-centre positions.

    Raises ``PlacementError`` for the first anchor that is off the map
    or on a wall.
    """
    return Anchors(
        player=grid.tile_center(*level.player, "Player spawn"),
        guard=grid.tile_center(*level.guard, "Guard spawn"),
        door=grid.tile_center(*level.door, "Door"),
        key=grid.tile_center(*level.key, "Key"),
        patrol=tuple(grid.tile_center(c, r, f"Patrol point {i + 1}")
                     for i, (c, r) in enumerate(level.patrol)),
    )


@dataclass(frozen=True)
class SimTuning:
    """Tuning values captured when a sim is built; ``reset`` reuses them."""
    player: dict
    guard: dict
    key_radius_frac: float
    door_radius_frac: float
    max_dt: float
    los_samples: int


def read_tuning() -> SimTuning:
    """Snapshot the currently loaded tuning, falling back to reference values."""
    return SimTuning(
        player=tuning.section("player", PLAYER_DEFAULTS),
        guard=tuning.section("guard", GUARD_DEFAULTS),
        key_radius_frac=float(tuning.get("items", "key_radius_frac",
                                         KEY_RADIUS_FRAC)),
        door_radius_frac=float(tuning.get("items", "door_radius_frac",
                                          DOOR_RADIUS_FRAC)),
        max_dt=float(tuning.get("sim", "max_dt", MAX_DT)),
        los_samples=int(tuning.get("sim", "los_samples", LOS_SAMPLES)),
    )


class EscapeSim:
    """One independent stealth-escape world."""

    def __init__(self, level: Level, grid: TileGrid, anchors: Anchors,
                 settings: SimTuning | None = None):
        self.level = level
        self.grid = grid
        self.anchors = anchors
        self.settings = settings if settings is not None else read_tuning()
        self.bus = EventBus()
        self.dev_log = DevLog()
        self.world = World()
        self.player_eid = 0
        self.guard_eid = 0
        self.key_eid = 0
        self.door_eid = 0
        self._populate()

    @classmethod
    def from_level(cls, level: Level) -> "EscapeSim":
        """Build a sim; raises ``PlacementError`` on a bad anchor."""
        grid = TileGrid(level.layout, level.tile_size, level.rows, level.cols)
        anchors = resolve_anchors(grid, level)
        sim = cls(level, grid, anchors)
        print(f"[SIM] Built '{level.name}': {level.cols}×{level.rows} tiles, "
              f"{len(anchors.patrol)} patrol points")
        return sim

    # ── Setup ────────────────────────────────────────────────────────

    def _populate(self) -> None:
        """(Re)create every entity and resource from anchors and settings."""
        w = World()
        a = self.anchors
        s = self.settings
        ts = self.grid.tile_size

        w.set_res(self.grid)
        w.set_res(self.bus)
        w.set_res(self.dev_log)
        w.set_res(GameState())
        w.set_res(GameClock())
        w.set_res(SimConfig(max_dt=s.max_dt, los_samples=s.los_samples))

        p = s.player
        pid = w.spawn()
        w.add(pid, Position(*a.player))
        w.add(pid, Velocity())
        w.add(pid, Collider(radius=p["radius"]))
        w.add(pid, Facing(angle=p["facing"]))
        w.add(pid, Player(
            speed=p["speed"],
            sprint_speed=p["sprint_speed"],
            stamina=p["max_stamina"],
            max_stamina=p["max_stamina"],
            stamina_recovery=p["stamina_recovery"],
            sprint_drain=p["sprint_drain"],
        ))

        g = s.guard
        gid = w.spawn()
        w.add(gid, Position(*a.guard))
        w.add(gid, Velocity())
        w.add(gid, Collider(radius=g["radius"]))
        w.add(gid, Facing(angle=g["facing"]))
        w.add(gid, Brain(kind="guard", active=True))
        w.add(gid, Guard(
            speed=g["speed"],
            chase_speed=g["chase_speed"],
            detection_range=g["detection_range"],
            fov=g["fov"],
            suspicion_max=g["suspicion_max"],
            suspicion_decay=g["suspicion_decay"],
            max_memory=g["max_memory"],
        ))
        w.add(gid, Patrol(waypoints=list(a.patrol)))

        kid = w.spawn()
        w.add(kid, Position(*a.key))
        w.add(kid, Key(radius=ts * s.key_radius_frac))

        did = w.spawn()
        w.add(did, Position(*a.door))
        w.add(did, Door(radius=ts * s.door_radius_frac))

        self.world = w
        self.player_eid, self.guard_eid = pid, gid
        self.key_eid, self.door_eid = kid, did

    # ── Lifecycle ────────────────────────────────────────────────────

    def reset(self) -> None:
        """Put every entity and the run state back to how they started.

        Uses the tuning captured at build time.  Event subscriptions and
        the dev log survive a reset.
        """
        self.bus.clear()
        self._populate()
        self.dev_log.record(0, "sim", "reset")
        print("[SIM] reset")

    def step(self, dt: float, intent: InputIntent = NO_INPUT) -> bool:
        """Advance one tick.  Returns False once the run has ended."""
        return tick_systems(self.world, dt, intent)

    # ── Views ────────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self.world.res(GameState).running

    @property
    def outcome(self) -> str | None:
        return self.world.res(GameState).outcome

    def player_view(self) -> PlayerView:
        w, eid = self.world, self.player_eid
        pos = w.get(eid, Position)
        player = w.get(eid, Player)
        return PlayerView(
            x=pos.x, y=pos.y,
            facing=w.get(eid, Facing).angle,
            stamina_ratio=player.stamina / player.max_stamina,
            radius=w.get(eid, Collider).radius,
        )

    def guard_view(self) -> GuardView:
        w, eid = self.world, self.guard_eid
        pos = w.get(eid, Position)
        guard = w.get(eid, Guard)
        return GuardView(
            x=pos.x, y=pos.y,
            facing=w.get(eid, Facing).angle,
            state=guard.state,
            suspicion_ratio=guard.suspicion / guard.suspicion_max,
            detection_range=guard.detection_range,
            fov=guard.fov,
            radius=w.get(eid, Collider).radius,
        )

    def key_view(self) -> KeyView:
        pos = self.world.get(self.key_eid, Position)
        key = self.world.get(self.key_eid, Key)
        return KeyView(x=pos.x, y=pos.y, collected=key.collected,
                       radius=key.radius)

    def door_view(self) -> DoorView:
        pos = self.world.get(self.door_eid, Position)
        door = self.world.get(self.door_eid, Door)
        return DoorView(x=pos.x, y=pos.y, open=door.open, radius=door.radius)

    def game_view(self) -> GameView:
        state = self.world.res(GameState)
        return GameView(running=state.running, outcome=state.outcome)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            player=self.player_view(),
            guard=self.guard_view(),
            key=self.key_view(),
            door=self.door_view(),
            game=self.game_view(),
        )

    def debug_info(self) -> dict:
        """Return debug information about the simulation state."""
        guard = self.world.get(self.guard_eid, Guard)
        patrol = self.world.get(self.guard_eid, Patrol)
        clock = self.world.res(GameClock)
        ppos = self.world.get(self.player_eid, Position)
        return {
            "time": clock.time,
            "player_tile": self.grid.to_tile(ppos.x, ppos.y),
            "entities": len(self.world.entity_ids()),
            "guard_state": guard.state,
            "suspicion": guard.suspicion,
            "memory": guard.memory_timer,
            "waypoint": patrol.index,
            "events": self.bus.stats(),
        }


def create_sim(level: Level) -> EscapeSim | PlacementError:
    """Build a sim, returning the ``PlacementError`` instead of raising.

    Nothing is constructed when an anchor is invalid.
    """
    try:
        return EscapeSim.from_level(level)
    except PlacementError as err:
        print(f"[SIM] Level '{level.name}' rejected: {err}")
        return err
