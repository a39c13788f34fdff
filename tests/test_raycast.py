import math

import pytest

from cubgame.doors import DoorList
from cubgame.mathutil import normalize_angle
from cubgame.movement import Player
from cubgame.raycast import (
    DOOR_TX,
    EAST_TX,
    NO_HIT_DIST,
    NORTH_TX,
    WEST_TX,
    cast_ray,
    cast_rays,
    horizontal_collision,
    prepare_ray,
    vertical_collision,
)
from cubgame.world import GameMap

ROOM = GameMap("11111" "10001" "10001" "10001" "11111", 5, 5)
Y_DOOR_ROOM = GameMap("11111" "10001" "10d01" "10001" "11111", 5, 5)
X_DOOR_ROOM = GameMap("11111" "10001" "10D01" "10001" "11111", 5, 5)


def test_prepare_ray_east():
    ray = prepare_ray(0.0)
    assert ray.ninv_slope == math.inf
    assert (ray.step_x, ray.step_y) == (0.5, 0.5)


def test_prepare_ray_west():
    ray = prepare_ray(math.pi)
    assert (ray.step_x, ray.step_y) == (-0.5, -0.5)


def test_prepare_ray_normalizes_and_inverts_slope():
    ray = prepare_ray(-0.25)
    assert ray.angle == pytest.approx(normalize_angle(-0.25))
    assert 0.0 <= ray.angle <= 2 * math.pi
    assert ray.slope * ray.ninv_slope == pytest.approx(-1.0)


def test_cast_east_hits_west_face():
    player = Player(2.5, 2.5, 0.0)
    ray = cast_ray(ROOM, DoorList(), player, 0.0)
    assert ray.hit is True
    assert ray.v_inter_x == pytest.approx(4.0)
    assert ray.v_dist == pytest.approx(4.0 - player.x)
    assert ray.h_dist == NO_HIT_DIST
    assert ray.texture == WEST_TX


def test_cast_west_hits_east_face():
    player = Player(2.5, 2.5, math.pi)
    ray = cast_ray(ROOM, DoorList(), player, math.pi)
    assert ray.v_inter_x == pytest.approx(1.0)
    assert ray.texture == EAST_TX


def test_cast_south_uses_horizontal_hit():
    player = Player(2.5, 2.5, math.pi / 2)
    ray = cast_ray(ROOM, DoorList(), player, math.pi / 2)
    assert ray.h_inter_y == pytest.approx(4.0)
    assert ray.h_dist < ray.v_dist
    assert ray.texture == NORTH_TX


def test_collision_functions_return_recorded_distance():
    player = Player(2.5, 2.5, 0.0)
    ray = prepare_ray(0.0)
    assert vertical_collision(ray, ROOM, DoorList(), player) == ray.v_dist
    assert horizontal_collision(ray, ROOM, DoorList(), player) == NO_HIT_DIST


def test_closed_vertical_door_stops_ray():
    player = Player(1.5, 2.5, 0.0)
    ray = cast_ray(Y_DOOR_ROOM, DoorList(), player, 0.0)
    assert ray.texture == DOOR_TX
    assert ray.v_inter_x == pytest.approx(2.5)
    assert ray.offset == pytest.approx(0.5)


def test_open_vertical_door_lets_ray_through():
    player = Player(1.5, 2.5, 0.0)
    doors = DoorList()
    doors.add(2, 2, "d").state = doors.open_frames
    closed = cast_ray(Y_DOOR_ROOM, DoorList(), player, 0.0)
    opened = cast_ray(Y_DOOR_ROOM, doors, player, 0.0)
    assert opened.v_inter_x == pytest.approx(4.0)
    assert opened.texture == WEST_TX
    assert opened.v_dist > closed.v_dist


def test_closed_horizontal_door_stops_ray():
    player = Player(2.5, 1.5, math.pi / 2)
    ray = cast_ray(X_DOOR_ROOM, DoorList(), player, math.pi / 2)
    assert ray.texture == DOOR_TX
    assert ray.h_inter_y == pytest.approx(2.5)


def test_cast_rays_one_per_column():
    player = Player(2.5, 2.5, 0.7)
    rays = cast_rays(ROOM, DoorList(), player, 1.0, 5, 1.0)
    assert len(rays) == 5
    assert rays[2].angle == pytest.approx(player.angle)
    assert all(ray.hit for ray in rays)
    assert rays[0].angle < rays[2].angle < rays[4].angle