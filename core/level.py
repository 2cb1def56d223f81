"""
core/level.py — TOML → Level loader

Reads the level file (layout + anchor tiles) into a plain ``Level``
record.  Anchors stay in tile coordinates here; they are turned into
pixel positions (and validated) only when a sim is built, so a bad
anchor surfaces as a ``PlacementError`` from the builder.

In the TOML file:

    tile_size = 40
    rows = 15
    cols = 20
    layout = ["####", "#..#", ...]

    [anchors]
    player = [1, 1]            # [col, row]
    guard  = [12, 7]
    key    = [3, 12]
    door   = [18, 1]
    patrol = [[12, 12], [17, 12], [12, 12], [12, 7]]

Usage:
    level = load_level()                    # data/level.toml
    level = load_level("levels/test.toml")
"""

from __future__ import annotations
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from core.constants import TILE_SIZE

Tile = tuple[int, int]

_ANCHOR_KEYS = ("player", "guard", "key", "door")


@dataclass(frozen=True)
class Level:
    """Static description of one map: walls and where things start."""
    layout: tuple[str, ...]
    rows: int
    cols: int
    player: Tile
    guard: Tile
    key: Tile
    door: Tile
    patrol: tuple[Tile, ...] = field(default_factory=tuple)
    tile_size: float = TILE_SIZE
    name: str = "level"


def default_level_path() -> Path:
    root = Path(__file__).resolve().parent.parent
    return root / "data" / "level.toml"


def load_level(path: str | Path | None = None) -> Level:
    """Load a ``Level`` from *path* (default ``data/level.toml``).

    Raises ``ValueError`` when required keys are missing or malformed.
    """
    path = Path(path) if path is not None else default_level_path()
    with open(path, "rb") as f:
        raw = tomllib.load(f)
    level = level_from_dict(raw, name=path.stem)
    print(f"[LEVEL] Loaded '{level.name}' ({level.cols}×{level.rows}, "
          f"{len(level.patrol)} patrol points) from {path}")
    return level


def level_from_dict(raw: dict, name: str = "level") -> Level:
    """Build a ``Level`` from an already-parsed mapping."""
    layout = raw.get("layout")
    if not isinstance(layout, list) or not layout:
        raise ValueError("level needs a non-empty 'layout' list")
    if not all(isinstance(line, str) for line in layout):
        raise ValueError("every layout row must be a string")

    rows = int(raw.get("rows", len(layout)))
    cols = int(raw.get("cols", max(len(line) for line in layout)))

    anchors = raw.get("anchors")
    if not isinstance(anchors, dict):
        raise ValueError("level needs an [anchors] table")
    for k in _ANCHOR_KEYS:
        if k not in anchors:
            raise ValueError(f"anchor '{k}' missing from [anchors]")

    patrol_raw = anchors.get("patrol", [])
    if not isinstance(patrol_raw, list) or not patrol_raw:
        raise ValueError("anchor 'patrol' must be a non-empty list of [col, row]")

    return Level(
        layout=tuple(layout),
        rows=rows,
        cols=cols,
        player=_tile(anchors["player"], "player"),
        guard=_tile(anchors["guard"], "guard"),
        key=_tile(anchors["key"], "key"),
        door=_tile(anchors["door"], "door"),
        patrol=tuple(_tile(p, f"patrol[{i}]")
                     for i, p in enumerate(patrol_raw)),
        tile_size=float(raw.get("tile_size", TILE_SIZE)),
        name=str(raw.get("name", name)),
    )


def _tile(value, what: str) -> Tile:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"anchor '{what}' must be [col, row], got {value!r}")
    return int(value[0]), int(value[1])
