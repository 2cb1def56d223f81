"""components.items — The key and the exit door."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Key:
    """Picked up by touching it.  Required to open the door."""
    radius: float = 12.0   # px
    collected: bool = False


@dataclass
class Door:
    """Exit.  Opens (and ends the run) when touched while holding the key."""
    radius: float = 18.0   # px
    open: bool = False
