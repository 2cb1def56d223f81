"""core/events.py — Game events and the per-sim event bus.

Systems announce what happened; the host scene, tests and tooling
listen.  Nothing in the simulation depends on who is listening.

    sim.bus.subscribe("PlayerCaught", on_caught)   # host side
    bus.emit(KeyCollected(x=140.0, y=500.0))       # system side

``tick_systems`` drains the bus once at the end of every step, so
handlers always see the world as it stands after that step.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
from collections import Counter, defaultdict, deque


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class KeyCollected:
    """The player picked up the key."""
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class DoorOpened:
    """The player reached the door holding the key and escaped."""
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class PlayerSpotted:
    """A patrolling guard saw the player and started chasing."""
    guard_eid: int = 0
    suspicion: float = 0.0
    distance: float = 0.0


@dataclass(frozen=True)
class ChaseAbandoned:
    """A guard's memory ran out and it returned to its patrol."""
    guard_eid: int = 0


@dataclass(frozen=True)
class PlayerCaught:
    """A guard touched the player."""
    guard_eid: int = 0
    x: float = 0.0
    y: float = 0.0


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Per-sim queue of events, delivered to subscribers on ``drain()``.

    Stored as a world resource and owned by the ``EscapeSim``, so host
    subscriptions outlive ``reset()``.  A handler that raises aborts the
    drain; the exception reaches whoever called ``step``.
    """

    # Handlers emitting from handlers can chain; stop after this many rounds.
    MAX_ROUNDS = 64

    def __init__(self):
        self._pending: deque = deque()
        self._handlers: dict[str, list[Callable]] = defaultdict(list)
        self._counts: Counter = Counter()

    def emit(self, event) -> None:
        self._pending.append(event)

    def subscribe(self, event_type: str | type, handler: Callable) -> None:
        """Call *handler(event)* for each drained event of *event_type*.

        *event_type* is the event class or its name, e.g. ``"PlayerCaught"``.
        """
        name = event_type if isinstance(event_type, str) else event_type.__name__
        self._handlers[name].append(handler)

    def drain(self) -> int:
        """Deliver everything queued, oldest first.  Returns the count.

        Events emitted by handlers go out in a later round of the same
        drain.
        """
        delivered = 0
        for _ in range(self.MAX_ROUNDS):
            if not self._pending:
                break
            batch, self._pending = self._pending, deque()
            for event in batch:
                name = type(event).__name__
                self._counts[name] += 1
                for handler in tuple(self._handlers.get(name, ())):
                    handler(event)
            delivered += len(batch)
        return delivered

    def clear(self) -> None:
        """Drop queued events; subscriptions stay."""
        self._pending.clear()

    def stats(self) -> dict[str, int]:
        """Events delivered so far, by type name."""
        return dict(self._counts)

    def __repr__(self) -> str:
        return (f"EventBus(pending={len(self._pending)}, "
                f"types={sorted(self._handlers)})")
