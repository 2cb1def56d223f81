"""core/grid.py — Static tile grid: wall classification and point queries.

The grid is built once from the level layout and never changes.  Walls
are stored as a 2-D boolean array indexed ``walls[row][col]`` (the same
row-major order as the layout strings), so a lookup is two list indexes
and no string building.

    grid = TileGrid(layout, tile_size=40, rows=15, cols=20)
    grid.blocked(0, 0)              # → True (border wall)
    grid.is_blocked_point(60, 60)   # → False (floor)
    grid.tile_center(1, 1, "Player spawn")   # → (60.0, 60.0)
"""

from __future__ import annotations
import math
from typing import Sequence

from core.constants import WALL_CHAR


class PlacementError(Exception):
    """An anchor (spawn, waypoint, key, door) sits off-map or on a wall.

    Raised only while a level is being built.  Carries the anchor's
    ``label`` and the offending ``(col, row)``.
    """

    def __init__(self, label: str, col: int, row: int, reason: str):
        self.label = label
        self.col = col
        self.row = row
        self.reason = reason
        super().__init__(f"{label} {reason} ({col}, {row})")


class TileGrid:
    """Immutable wall map with bounds-aware queries."""

    __slots__ = ("tile_size", "rows", "cols", "width", "height", "_walls")

    def __init__(self, layout: Sequence[str], tile_size: float,
                 rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid must be at least 1×1, got {cols}×{rows}")
        if len(layout) < rows:
            raise ValueError(
                f"layout has {len(layout)} rows, expected {rows}")
        for r in range(rows):
            if len(layout[r]) < cols:
                raise ValueError(
                    f"layout row {r} has {len(layout[r])} cols, expected {cols}")

        self.tile_size = tile_size
        self.rows = rows
        self.cols = cols
        self.width = cols * tile_size
        self.height = rows * tile_size
        self._walls: tuple[tuple[bool, ...], ...] = tuple(
            tuple(layout[r][c] == WALL_CHAR for c in range(cols))
            for r in range(rows)
        )

    # -- Tile queries --

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def blocked(self, col: int, row: int) -> bool:
        """True if (col, row) is off the map or a wall tile."""
        if not (0 <= col < self.cols and 0 <= row < self.rows):
            return True
        return self._walls[row][col]

    def is_blocked_point(self, x: float, y: float) -> bool:
        """True if the pixel-space point lies in a wall or off the map."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return True
        col = int(math.floor(x / self.tile_size))
        row = int(math.floor(y / self.tile_size))
        return self.blocked(col, row)

    def to_tile(self, x: float, y: float) -> tuple[int, int]:
        """Map a pixel-space point to its ``(col, row)``."""
        return (int(math.floor(x / self.tile_size)),
                int(math.floor(y / self.tile_size)))

    # -- Placement (init-time only) --

    def tile_center(self, col: int, row: int, label: str) -> tuple[float, float]:
        """Return the pixel centre of a floor tile.

        Raises ``PlacementError`` if the tile is outside the map or a wall.
        """
        if not self.in_bounds(col, row):
            raise PlacementError(label, col, row, "is outside the map")
        if self._walls[row][col]:
            raise PlacementError(label, col, row, "is placed on a wall")
        return ((col + 0.5) * self.tile_size, (row + 0.5) * self.tile_size)

    # -- Iteration (renderer) --

    def wall_tiles(self):
        """Yield ``(col, row)`` for every wall tile, row by row."""
        for r, line in enumerate(self._walls):
            for c, wall in enumerate(line):
                if wall:
                    yield c, r

    def __repr__(self) -> str:
        return (f"TileGrid({self.cols}×{self.rows}, "
                f"tile_size={self.tile_size})")
