"""logic/tick.py — System tick orchestration.

One call to ``tick_systems`` advances the world by one step in a fixed
order:

    1. player controller   (intent → velocity, stamina)
    2. player movement
    3. key / door interactions
    4. guard brains         (see the player's *new* position)
    5. guard movement
    6. event bus drain

If the run ends during the player phase (escape) the guard phase is
skipped.  A finished run is frozen: nothing moves until ``reset``.

Usage::

    from logic.tick import tick_systems
    tick_systems(world, dt, intent)
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.constants import MAX_DT
from core.events import EventBus
from components import GameClock, GameState, SimConfig, InputIntent
from logic.movement import movement_system
from logic.player import player_system, interaction_system
from logic.ai.brains import tick_ai

if TYPE_CHECKING:
    from core.ecs import World


def clamp_dt(world: "World", dt: float) -> float:
    """Clamp *dt* into ``[0, SimConfig.max_dt]``."""
    cfg = world.res(SimConfig)
    max_dt = cfg.max_dt if cfg else MAX_DT
    return min(max(dt, 0.0), max_dt)


def tick_systems(world: "World", dt: float, intent: InputIntent) -> bool:
    """Run one simulation step.  Returns False if the run is over."""
    state = world.res(GameState)
    if state is not None and not state.running:
        return False

    dt = clamp_dt(world, dt)
    clock = world.res(GameClock)
    if clock:
        clock.time += dt

    # Player first
    players = player_system(world, dt, intent)
    movement_system(world, dt, players)
    interaction_system(world)

    # Guards react to where the player is now
    if state is None or state.running:
        guards = tick_ai(world, dt)
        movement_system(world, dt, guards)

    bus = world.res(EventBus)
    if bus:
        bus.drain()

    return state is None or state.running
