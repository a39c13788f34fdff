import pytest

from cubgame.doors import DOOR_CHAR_X, Door, DoorList, is_door_nearby
from cubgame.errors import CubError, ErrorCode
from cubgame.world import GameMap

CORRIDOR = GameMap("1111111" "10D0001" "1111111", 7, 3)


def test_add_then_search():
    doors = DoorList(5)
    doors.add(2, 1, DOOR_CHAR_X)
    door = doors.search(2, 1)
    assert door is not None
    assert (door.x, door.y, door.kind, door.state) == (2, 1, DOOR_CHAR_X, 0)


def test_search_truncates_coordinates():
    doors = DoorList()
    added = doors.add(2, 3, "d")
    assert doors.search(2.7, 3.2) is added
    assert doors.search(3.0, 3.0) is None


def test_duplicate_add_is_ignored():
    doors = DoorList()
    first = doors.add(1, 1, "D")
    second = doors.add(1, 1, "d")
    assert len(doors) == 1
    assert second is first


def test_new_doors_come_first():
    doors = DoorList()
    doors.add(1, 1, "D")
    doors.add(4, 4, "d")
    assert [(door.x, door.y) for door in doors] == [(4, 4), (1, 1)]


def test_remove_and_unknown_remove():
    doors = DoorList()
    door = doors.add(1, 1, "D")
    doors.remove(door)
    assert len(doors) == 0
    with pytest.raises(CubError) as info:
        doors.remove(door)
    assert info.value.code == ErrorCode.DOOR_REMOVE


def test_clear():
    doors = DoorList()
    doors.add(1, 1, "D")
    doors.add(2, 2, "D")
    doors.clear()
    assert list(doors) == []


def test_open_frames_must_be_positive():
    with pytest.raises(ValueError):
        DoorList(0)


@pytest.mark.parametrize(
    "px, py, expected",
    [(3.5, 3.5, True), (4.9, 4.9, True), (5.0, 3.5, False), (3.5, 0.9, False)],
)
def test_is_door_nearby(px, py, expected):
    door = Door(3, 2, "D")
    assert is_door_nearby(door, px, py) is expected


def test_update_opens_nearby_door():
    doors = DoorList(3)
    doors.update(CORRIDOR, 1.5, 1.5)
    door = doors.search(2, 1)
    assert door is not None
    assert door.state == 1
    for _ in range(10):
        doors.update(CORRIDOR, 1.5, 1.5)
    assert door.state == doors.open_frames


def test_update_closes_and_drops_far_door():
    doors = DoorList(3)
    for _ in range(5):
        doors.update(CORRIDOR, 1.5, 1.5)
    door = doors.search(2, 1)
    doors.update(CORRIDOR, 5.5, 1.5)
    assert door.state == doors.open_frames - 1
    for _ in range(doors.open_frames + 2):
        doors.update(CORRIDOR, 5.5, 1.5)
    assert len(doors) == 0