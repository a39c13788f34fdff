import math

import pytest

from cubgame.assets import AssetStore
from cubgame.errors import CubError, ErrorCode
from cubgame.game import (
    CAMERA_H,
    CAMERA_W,
    MMAP_HEIGHT,
    MMAP_MASK_NAME,
    MMAP_PLAYER_ICON,
    MMAP_WIDTH,
    MMAP_X,
    MMAP_Y,
    MOUSE_ANGLE_RATIO,
    Game,
    main,
)
from cubgame.movement import ANGLE_INCREMENT, POS_INCREMENT
from cubgame.raycast import DOOR_TX, EAST_TX, NORTH_TX, SOUTH_TX, WEST_TX
from cubgame.render import OUT_OF_MAP_COLOR
from cubgame.scene import Scene
from cubgame.texture import Texture

RED = 0xFF0000FF
GREEN = 0x00FF00FF
BLUE = 0x0000FFFF
YELLOW = 0xFFFF00FF
WHITE = 0xFFFFFFFF


def solid(width, height, color):
    return Texture(width, height, color.to_bytes(4, "big") * (width * height))


@pytest.fixture
def scene():
    cells = "111111" "100001" "10S001" "100001" "111111"
    return Scene(
        cells=cells,
        width=6,
        height=5,
        player_x=2.5,
        player_y=2.5,
        angle=math.pi / 2,
        orientation="S",
        north="north.png",
        south="south.png",
        west="west.png",
        east="east.png",
        floor_color=GREEN,
        ceiling_color=BLUE,
    )


def make_assets(with_mask=True):
    assets = AssetStore()
    for name in (NORTH_TX, SOUTH_TX, EAST_TX, WEST_TX, DOOR_TX):
        assets.add(name, solid(4, 4, RED))
    assets.add(MMAP_PLAYER_ICON, solid(2, 2, YELLOW))
    if with_mask:
        assets.add(MMAP_MASK_NAME, solid(MMAP_WIDTH, MMAP_HEIGHT, WHITE))
    return assets


def test_initial_state(scene):
    game = Game(scene, make_assets())
    assert (game.player.x, game.player.y) == (scene.player_x, scene.player_y)
    assert (game.camera.width, game.camera.height) == (CAMERA_W, CAMERA_H)
    assert len(game.rays) == CAMERA_W
    assert game.running


def test_forward_and_backward(scene):
    game = Game(scene, make_assets())
    game.handle_keys({"w"})
    assert game.player.y == pytest.approx(scene.player_y + POS_INCREMENT)
    assert game.player.x == pytest.approx(scene.player_x)
    game.handle_keys({"s"})
    assert game.player.y == pytest.approx(scene.player_y)


def test_rotation_keys(scene):
    game = Game(scene, make_assets())
    game.handle_keys({"q"})
    assert game.player.angle == pytest.approx(scene.angle - ANGLE_INCREMENT)
    game.handle_keys({"e"})
    assert game.player.angle == pytest.approx(scene.angle)


def test_walking_stops_at_wall(scene):
    game = Game(scene, make_assets())
    for _ in range(200):
        game.handle_keys({"w"})
    assert scene.player_y < game.player.y < 4.0


def test_escape_stops_the_game(scene):
    game = Game(scene, make_assets())
    game.handle_keys({"escape"})
    assert game.running is False


def test_mouse_warmup_then_turns(scene):
    game = Game(scene, make_assets())
    for x in (10, 20, 30):
        game.handle_mouse(x)
    assert game.player.angle == pytest.approx(scene.angle)
    game.handle_mouse(40)
    assert game.player.angle == pytest.approx(scene.angle + 10 * MOUSE_ANGLE_RATIO)


def test_mouse_keeps_angle_in_range(scene):
    game = Game(scene, make_assets())
    for x in (1, 2, 3):
        game.handle_mouse(x)
    game.handle_mouse(3 + 2000)
    assert 0.0 <= game.player.angle <= 2 * math.pi


def test_update_renders_frame(scene):
    game = Game(scene, make_assets())
    frame = game.update(set(), None)
    assert frame.get_color(CAMERA_W - 1, 0) == scene.ceiling_color
    assert frame.get_color(CAMERA_W - 1, CAMERA_H - 1) == scene.floor_color
    assert frame.get_color(CAMERA_W // 2, CAMERA_H // 2) == RED
    assert frame.get_color(MMAP_X, MMAP_Y) == OUT_OF_MAP_COLOR


def test_render_requires_mask(scene):
    game = Game(scene, make_assets(with_mask=False))
    with pytest.raises(CubError) as info:
        game.render()
    assert info.value.code == ErrorCode.ASSET_NOT_FOUND


def test_main_needs_one_argument(capsys):
    assert main([]) == 1
    assert "Not correct arguments" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert "Error" in capsys.readouterr().err


def test_main_invalid_scene(tmp_path, capsys):
    path = tmp_path / "bad.cub"
    path.write_text("nonsense\n")
    assert main([str(path)]) == 1
    assert "Error" in capsys.readouterr().err