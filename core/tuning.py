"""core/tuning.py — Gameplay numbers from ``data/tuning.toml``.

Speeds, radii, stamina and guard perception are read from TOML when a
sim is built, so they can be tweaked without touching code::

    from core import tuning
    tuning.load()
    chase = tuning.get("guard", "chase_speed", 115.0)
    player = tuning.section("player", PLAYER_DEFAULTS)

Callers always pass the reference value as the default; a missing file
or key just means the reference game.

Each sim copies what it needs when it is built.  F5 in the escape scene
calls ``reload()`` and builds a fresh sim from the new values.
"""

from __future__ import annotations
import tomllib
from pathlib import Path


_data: dict = {}
_path: Path | None = None


def default_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


def load(path: str | Path | None = None) -> None:
    """Read *path* (default ``data/tuning.toml``), replacing what was loaded."""
    global _data, _path
    _path = Path(path) if path is not None else default_path()

    if not _path.exists():
        print(f"[TUNING] {_path} not found — reference values in use")
        _data = {}
        return

    with open(_path, "rb") as f:
        _data = tomllib.load(f)
    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {_path}")


def reload() -> None:
    load(_path)


def clear() -> None:
    """Drop loaded values; every lookup falls back to its default."""
    global _data
    _data = {}


def _table(section: str) -> dict | None:
    node = _data
    for part in section.split("."):
        node = node.get(part) if isinstance(node, dict) else None
        if node is None:
            return None
    return node if isinstance(node, dict) else None


def get(section: str, key: str, default=None):
    """One value from ``[section]``; dotted names reach nested tables.

    >>> get("player", "sprint_speed", 190.0)
    190.0
    """
    table = _table(section)
    return default if table is None else table.get(key, default)


def section(section_path: str, defaults: dict | None = None) -> dict:
    """A whole table as a dict, file values layered over *defaults*."""
    out = dict(defaults or {})
    table = _table(section_path)
    if table:
        out.update(table)
    return out


def _count_leaves(d: dict) -> int:
    return sum(_count_leaves(v) if isinstance(v, dict) else 1
               for v in d.values())
