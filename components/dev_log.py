"""components.dev_log — Transition log for the guard and the run.

Stored as a world resource.  The guard brain writes a line whenever it
switches between patrol and chase, the player systems write the run's
outcome, and ``EscapeSim.reset`` writes a marker.  The F3 overlay shows
the tail of it.

    log = world.res(DevLog)
    log.record(gid, "guard", "patrol → chase", t=12.4,
               details={"dist": 96.0, "suspicion": 0.016})

Entries are dicts: ``{"t", "eid", "cat", "msg", "details"}``.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Bounded log; the oldest entries fall off past ``max_entries``."""

    max_entries: int = 500
    entries: deque = field(init=False)

    def __post_init__(self):
        self.entries = deque(maxlen=self.max_entries)

    def record(self, eid: int, cat: str, msg: str, *,
               t: float = 0.0, details: dict | None = None) -> None:
        self.entries.append({"t": t, "eid": eid, "cat": cat,
                             "msg": msg, "details": details})

    def clear(self):
        self.entries.clear()

    def recent(self, n: int = 50) -> list[dict]:
        """Newest *n* entries, oldest first."""
        return list(self.entries)[-n:] if n > 0 else []

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        return [e for e in self.entries if e["cat"] == cat][-n:]
