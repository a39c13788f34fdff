"""Doors near the player and their opening animation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

from .errors import CubError, ErrorCode
from .world import GameMap

DOOR_CHAR_X = "D"
"""A door lying along the x axis, met by horizontal ray steps."""
DOOR_CHAR_Y = "d"
"""A door lying along the y axis, met by vertical ray steps."""
DOOR_CHARS = (DOOR_CHAR_X, DOOR_CHAR_Y)
DOOR_OPEN_FRAMES = 30
"""Number of frames a door takes to open fully."""


@dataclass(eq=False)
class Door:
    """A door cell and how far it has opened, in frames."""

    x: int
    y: int
    kind: str
    state: int = 0


def is_door_nearby(door: Door, x: float, y: float) -> bool:
    """Tell whether ``door`` lies in the 3x3 block of cells around (x, y)."""
    ix, iy = int(x), int(y)
    return ix - 1 <= door.x <= ix + 1 and iy - 1 <= door.y <= iy + 1


class DoorList:
    """The doors currently tracked, most recently added first."""

    def __init__(self, open_frames: int = DOOR_OPEN_FRAMES) -> None:
        if open_frames <= 0:
            raise ValueError("open_frames must be positive")
        self.open_frames = open_frames
        self._doors: list[Door] = []

    def search(self, x: float, y: float) -> Door | None:
        """Return the door on the cell holding (x, y), if tracked."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        ix, iy = int(x), int(y)
        return next((door for door in self._doors if door.x == ix and door.y == iy), None)

    def add(self, x: int, y: int, kind: str) -> Door:
        """Track a closed door on (x, y) unless one is there already."""
        existing = self.search(x, y)
        if existing is not None:
            return existing
        door = Door(int(x), int(y), kind)
        self._doors.insert(0, door)
        return door

    def remove(self, door: Door) -> None:
        """Stop tracking ``door``."""
        for position, node in enumerate(self._doors):
            if node is door:
                del self._doors[position]
                return
        raise CubError(ErrorCode.DOOR_REMOVE)

    def clear(self) -> None:
        """Forget every door."""
        self._doors.clear()

    def __iter__(self) -> Iterator[Door]:
        return iter(list(self._doors))

    def __len__(self) -> int:
        return len(self._doors)

    def update(self, game_map: GameMap, player_x: float, player_y: float) -> None:
        """Advance one frame: track nearby doors, drop closed far ones, animate."""
        self._add_nearby(game_map, player_x, player_y)
        self._remove_inactive(player_x, player_y)
        self._update_states(player_x, player_y)

    def _add_nearby(self, game_map: GameMap, player_x: float, player_y: float) -> None:
        for y in range(int(player_y - 1), math.floor(player_y + 1) + 1):
            for x in range(int(player_x - 1), math.floor(player_x + 1) + 1):
                kind = game_map.element_at(x, y)
                if kind in DOOR_CHARS:
                    self.add(x, y, kind)

    def _remove_inactive(self, player_x: float, player_y: float) -> None:
        for door in list(self._doors):
            if door.state <= 0 and not is_door_nearby(door, player_x, player_y):
                self.remove(door)

    def _update_states(self, player_x: float, player_y: float) -> None:
        for door in self._doors:
            if is_door_nearby(door, player_x, player_y):
                if door.state < self.open_frames:
                    door.state += 1
            elif door.state > 0:
                door.state -= 1