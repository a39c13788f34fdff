"""Casting rays through the map on a half-cell grid, doors included."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from .doors import DOOR_CHAR_X, DOOR_CHAR_Y, DoorList
from .mathutil import map_angle, normalize_angle
from .world import WALL, GameMap

NORTH_TX = "north"
SOUTH_TX = "south"
EAST_TX = "east"
WEST_TX = "west"
DOOR_TX = "door"

NO_HIT_DIST = 1_000_000.0
"""Distance recorded when a ray finds nothing."""
_HIT_LIMIT = 1000.0
_MAX_DEPTH = 30
_PROBE = 0.01
_HALF_PI = math.pi / 2
_THREE_HALF_PI = 3 * math.pi / 2


class _Viewer(Protocol):
    x: float
    y: float
    angle: float


@dataclass
class Ray:
    """One camera ray and what it hit."""

    angle: float = 0.0
    slope: float = 0.0
    ninv_slope: float = 0.0
    step_x: float = 0.5
    step_y: float = 0.5
    v_dist: float = NO_HIT_DIST
    h_dist: float = NO_HIT_DIST
    v_inter_x: float = 0.0
    v_inter_y: float = 0.0
    h_inter_x: float = 0.0
    h_inter_y: float = 0.0
    hit: bool = False
    texture: str | None = None
    offset: float = 0.0

    @property
    def distance(self) -> float:
        """Distance to the nearer of the two intersections."""
        return min(self.v_dist, self.h_dist)


def prepare_ray(angle: float) -> Ray:
    """Return a ray pointing at ``angle`` with its slopes and steps set."""
    angle = normalize_angle(angle)
    slope = math.tan(angle)
    if slope == 0.0:
        ninv_slope = math.inf
    elif slope != math.inf:
        ninv_slope = -1.0 / slope
    else:
        ninv_slope = 0.0
    step_x = 0.5 if angle < _HALF_PI or angle > _THREE_HALF_PI else -0.5
    step_y = 0.5 if angle < math.pi else -0.5
    return Ray(angle=angle, slope=slope, ninv_slope=ninv_slope, step_x=step_x, step_y=step_y)


def _door_state(doors: DoorList, x: float, y: float) -> int:
    door = doors.search(x, y)
    return door.state if door is not None else 0


def _first_step(start: float, step: float) -> tuple[float, bool]:
    """Return the first half-cell line crossed and whether it is a door line."""
    fract, int_part = math.modf(start)
    ahead = step > 0.0
    shift = 0.5 if ahead else 0.0
    if fract < 0.5:
        return math.floor(start) + shift, ahead
    return int_part + 0.5 + shift, not ahead


def _hits_v(
    ray: Ray, game_map: GameMap, doors: DoorList, x: float, y: float, check_doors: bool
) -> bool:
    if not check_doors:
        return game_map.element_at(x + _PROBE * ray.step_x, y) == WALL
    if game_map.element_at(x, y) == DOOR_CHAR_Y:
        return math.modf(y)[0] >= _door_state(doors, x, y) / doors.open_frames
    return False


def _hits_h(
    ray: Ray, game_map: GameMap, doors: DoorList, x: float, y: float, check_doors: bool
) -> bool:
    if not check_doors:
        return game_map.element_at(x, y + _PROBE * ray.step_y) == WALL
    if game_map.element_at(x, y) == DOOR_CHAR_X:
        return math.modf(x)[0] >= _door_state(doors, x, y) / doors.open_frames
    return False


def vertical_collision(
    ray: Ray, game_map: GameMap, doors: DoorList, player: _Viewer
) -> float:
    """Walk the ray across vertical lines; record and return the hit distance."""
    ray.v_dist = NO_HIT_DIST
    if ray.slope == math.inf:
        return ray.v_dist
    x, check_doors = _first_step(player.x, ray.step_x)
    y = -ray.slope * (player.x - x) + player.y
    y_step = ray.step_x * ray.slope
    for _ in range(_MAX_DEPTH):
        if _hits_v(ray, game_map, doors, x, y, check_doors):
            ray.v_inter_x, ray.v_inter_y = x, y
            ray.v_dist = math.hypot(player.x - x, player.y - y)
            break
        y += y_step
        x += ray.step_x
        check_doors = not check_doors
    return ray.v_dist


def horizontal_collision(
    ray: Ray, game_map: GameMap, doors: DoorList, player: _Viewer
) -> float:
    """Walk the ray across horizontal lines; record and return the hit distance."""
    ray.h_dist = NO_HIT_DIST
    if ray.ninv_slope == math.inf:
        return ray.h_dist
    y, check_doors = _first_step(player.y, ray.step_y)
    x = player.x + ray.ninv_slope * (player.y - y)
    x_step = -ray.step_y * ray.ninv_slope
    for _ in range(_MAX_DEPTH):
        if _hits_h(ray, game_map, doors, x, y, check_doors):
            ray.h_inter_x, ray.h_inter_y = x, y
            ray.h_dist = math.hypot(player.x - x, player.y - y)
            break
        x += x_step
        y += ray.step_y
        check_doors = not check_doors
    return ray.h_dist


def _resolve(ray: Ray, game_map: GameMap, doors: DoorList) -> None:
    if ray.v_dist > _HIT_LIMIT and ray.h_dist > _HIT_LIMIT:
        ray.hit = False
        return
    ray.hit = True
    vertical = ray.v_dist < ray.h_dist
    if vertical:
        x, y, door_char, along = ray.v_inter_x, ray.v_inter_y, DOOR_CHAR_Y, ray.v_inter_y
    else:
        x, y, door_char, along = ray.h_inter_x, ray.h_inter_y, DOOR_CHAR_X, ray.h_inter_x
    fract = math.modf(along)[0]
    if game_map.element_at(x, y) == door_char:
        ray.texture = DOOR_TX
        ray.offset = fract - _door_state(doors, x, y) / doors.open_frames
    elif vertical:
        ray.texture = EAST_TX if _HALF_PI < ray.angle < _THREE_HALF_PI else WEST_TX
        ray.offset = fract
    else:
        ray.texture = NORTH_TX if ray.angle < math.pi else SOUTH_TX
        ray.offset = fract


def cast_ray(game_map: GameMap, doors: DoorList, player: _Viewer, angle: float) -> Ray:
    """Cast one ray from the player at ``angle`` and return it resolved."""
    ray = prepare_ray(angle)
    vertical_collision(ray, game_map, doors, player)
    horizontal_collision(ray, game_map, doors, player)
    _resolve(ray, game_map, doors)
    return ray


def cast_rays(
    game_map: GameMap,
    doors: DoorList,
    player: _Viewer,
    projplane_width: float,
    camera_width: int,
    projplane_dist: float,
) -> list[Ray]:
    """Cast one ray per camera column, left to right."""
    return [
        cast_ray(
            game_map,
            doors,
            player,
            map_angle(idx, projplane_width, player.angle, camera_width, projplane_dist),
        )
        for idx in range(camera_width)
    ]