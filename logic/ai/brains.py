"""logic/ai/brains.py — Which function thinks for which entity.

An entity with a ``Brain`` component is driven by the function
registered under ``brain.kind``.  Brain functions look like::

    def my_brain(world, eid, brain, dt, game_time) -> None: ...

They write velocity, facing and their own components; ``tick_systems``
moves the bodies afterwards.  Modules holding brains call
``register_brain`` at import time and are imported at the bottom of
this file, so importing ``tick_ai`` is enough to have them all.
"""

from __future__ import annotations
from typing import Callable
from core.ecs import World
from components import Brain, Position, GameClock, DevLog

BrainFn = Callable[[World, int, Brain, float, float], None]

_brains: dict[str, BrainFn] = {}


def register_brain(name: str, fn: BrainFn) -> None:
    _brains[name] = fn


def get_brain(name: str) -> BrainFn | None:
    return _brains.get(name)


def registered_names() -> list[str]:
    return sorted(_brains)


def _log(world: World, eid: int, cat: str, msg: str, t: float = 0.0, **kw):
    """Record to the world's DevLog, when it has one."""
    log = world.res(DevLog)
    if log is not None:
        log.record(eid, cat, msg, t=t, **kw)


def tick_ai(world: World, dt: float) -> list[int]:
    """Run the brain of every active, positioned entity once.

    Returns the ids that were ticked; those are the ones to move.
    """
    clock = world.res(GameClock)
    now = clock.time if clock else 0.0

    ticked: list[int] = []
    for eid, brain in world.all_of(Brain):
        if not (brain.active and world.has(eid, Position)):
            continue
        fn = get_brain(brain.kind)
        if fn is None:
            _log(world, eid, "error", f"no brain registered as '{brain.kind}'", now)
            continue
        fn(world, eid, brain, dt, now)
        ticked.append(eid)
    return ticked


# Brain modules register themselves on import.
from logic.ai import guard as _guard                                 # noqa: F401, E402
