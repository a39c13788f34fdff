"""The player and the rules that keep it out of walls and closed doors."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .doors import DOOR_CHAR_X, DOOR_CHARS, DoorList
from .errors import CubError, ErrorCode
from .mathutil import normalize_angle
from .world import FLOOR, WALL, GameMap

MIN_DIST_FROM_WALL = 0.2
"""Closest the player may come to a wall, in cells."""
POS_INCREMENT = 0.05
"""Distance covered by one movement step, in cells."""
ANGLE_INCREMENT = 0.05
"""Rotation applied by one turning step, in radians."""


def _fraction(value: float) -> float:
    return math.modf(value)[0]


def _is_door_pos_walkable(doors: DoorList, kind: str, x: float, y: float) -> bool:
    door = doors.search(x, y)
    if door is None:
        raise CubError(ErrorCode.DOOR_WALK)
    fract = _fraction(y) if kind == DOOR_CHAR_X else _fraction(x)
    return (
        door.state == doors.open_frames
        or fract > 0.5 + MIN_DIST_FROM_WALL
        or fract < 0.5 - MIN_DIST_FROM_WALL
    )


def _is_pos_valid(game_map: GameMap, doors: DoorList, x: float, y: float) -> bool:
    element = game_map.element_at(x, y)
    if element == WALL:
        return False
    if element == FLOOR:
        return True
    if element in DOOR_CHARS:
        return _is_door_pos_walkable(doors, element, x, y)
    return False


def _clearance(value: float) -> float:
    fract = _fraction(value)
    if fract < MIN_DIST_FROM_WALL:
        return -MIN_DIST_FROM_WALL
    if fract > 1.0 - MIN_DIST_FROM_WALL:
        return MIN_DIST_FROM_WALL
    return 0.0


def is_pos_walkable(game_map: GameMap, doors: DoorList, x: float, y: float) -> bool:
    """Tell whether the player may stand at (x, y)."""
    if not _is_pos_valid(game_map, doors, x, y):
        return False
    step_x = _clearance(x)
    step_y = _clearance(y)
    return (
        _is_pos_valid(game_map, doors, x + step_x, y)
        and _is_pos_valid(game_map, doors, x, y + step_y)
        and _is_pos_valid(game_map, doors, x + step_x, y + step_y)
    )


@dataclass
class Player:
    """Position in map cells and facing angle in radians."""

    x: float
    y: float
    angle: float

    def rotate(self, delta: float) -> None:
        """Turn by ``delta`` radians, keeping the angle within one turn."""
        self.angle = normalize_angle(self.angle + delta)

    def try_move(
        self, game_map: GameMap, doors: DoorList, angle: float, distance: float
    ) -> bool:
        """Step ``distance`` along ``angle`` if the target is walkable."""
        x = self.x + distance * math.cos(angle)
        y = self.y + distance * math.sin(angle)
        if not is_pos_walkable(game_map, doors, x, y):
            return False
        self.x, self.y = x, y
        return True

    def forward(self, game_map: GameMap, doors: DoorList) -> bool:
        """Step ahead."""
        return self.try_move(game_map, doors, self.angle, POS_INCREMENT)

    def backward(self, game_map: GameMap, doors: DoorList) -> bool:
        """Step back."""
        return self.try_move(game_map, doors, self.angle, -POS_INCREMENT)

    def strafe_left(self, game_map: GameMap, doors: DoorList) -> bool:
        """Step sideways to the left."""
        return self.try_move(game_map, doors, self.angle - math.pi / 2, POS_INCREMENT)

    def strafe_right(self, game_map: GameMap, doors: DoorList) -> bool:
        """Step sideways to the right."""
        return self.try_move(game_map, doors, self.angle + math.pi / 2, POS_INCREMENT)