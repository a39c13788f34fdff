"""The playable map as the game sees it once a scene is loaded."""

from __future__ import annotations

import math
from dataclasses import dataclass

WALL = "1"
FLOOR = "0"
_START = "S"


@dataclass
class GameMap:
    """A width x height grid of map characters stored row by row."""

    cells: str
    width: int
    height: int

    def __post_init__(self) -> None:
        self.cells = "".join(self.cells)
        if self.width < 0 or self.height < 0:
            raise ValueError("map dimensions must not be negative")
        if len(self.cells) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} cells, got {len(self.cells)}"
            )

    def element_at(self, x: float, y: float) -> str:
        """Return the map character under the point (x, y).

        Coordinates are truncated toward zero. Anything outside the map reads
        as a wall, and the player start reads as open floor.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            return WALL
        ix, iy = int(x), int(y)
        if ix < 0 or iy < 0 or ix >= self.width or iy >= self.height:
            return WALL
        element = self.cells[iy * self.width + ix]
        return FLOOR if element == _START else element