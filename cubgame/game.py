"""The game loop state: player, doors, rays and the rendered frame."""

from __future__ import annotations

import math
import sys
from typing import Collection, Sequence

from .assets import AssetStore
from .doors import DoorList
from .errors import CubError, ErrorCode, ParseError
from .mathutil import normalize_angle
from .movement import ANGLE_INCREMENT, Player
from .raycast import DOOR_TX, EAST_TX, NORTH_TX, SOUTH_TX, WEST_TX, cast_rays
from .render import apply_minimap_mask, draw_walls, update_minimap
from .scene import Scene, load_scene
from .texture import Texture
from .world import GameMap

WINDOW_W = 960
WINDOW_H = 600
CAMERA_W = 320
CAMERA_H = 200
FOV = math.pi / 3
PROJPLANE_DIST = 1.0
MMAP_WIDTH = 96
MMAP_HEIGHT = 96
MMAP_X = 8
MMAP_Y = 8
MMAP_SQUARE_SIZE = 8
MOUSE_ANGLE_RATIO = 0.002
MOUSE_WARMUP_CHANGES = 3

MMAP_PLAYER_ICON = "mmap_player"
MMAP_MASK_NAME = "mmap_mask"
MMAP_PLAYER_PATH = "assets/minimap_player.png"
MMAP_MASK_PATH = "assets/minimap_mask.png"
DOOR_TEXTURE_PATH = "assets/Brick_Texture.png"

KEY_NAMES = ("q", "e", "w", "s", "a", "d", "escape")
"""Key names understood by :meth:`Game.handle_keys`."""


class Game:
    """A running game built from a scene and its loaded textures."""

    def __init__(self, scene: Scene, assets: AssetStore) -> None:
        self.scene = scene
        self.assets = assets
        self.map = GameMap(scene.cells, scene.width, scene.height)
        self.player = Player(scene.player_x, scene.player_y, scene.angle)
        self.doors = DoorList()
        self.camera = Texture(CAMERA_W, CAMERA_H)
        self.minimap = Texture(MMAP_WIDTH, MMAP_HEIGHT)
        self.minimap_square_size = MMAP_SQUARE_SIZE
        self.projplane_width = PROJPLANE_DIST * math.tan(FOV / 2) * 2
        self.running = True
        self._mouse_changes = 0
        self._mouse_old_x = 0
        self.rays = self._cast()

    def _cast(self):
        return cast_rays(
            self.map,
            self.doors,
            self.player,
            self.projplane_width,
            CAMERA_W,
            PROJPLANE_DIST,
        )

    def handle_keys(self, pressed: Collection[str]) -> None:
        """Apply the held keys: q/e turn, w/s walk, a/d strafe, escape quits."""
        if "escape" in pressed:
            self.running = False
        if "q" in pressed:
            self.player.rotate(-ANGLE_INCREMENT)
        if "e" in pressed:
            self.player.rotate(ANGLE_INCREMENT)
        if "w" in pressed:
            self.player.forward(self.map, self.doors)
        if "s" in pressed:
            self.player.backward(self.map, self.doors)
        if "a" in pressed:
            self.player.strafe_left(self.map, self.doors)
        if "d" in pressed:
            self.player.strafe_right(self.map, self.doors)

    def handle_mouse(self, mouse_x: int) -> None:
        """Turn with horizontal mouse motion, ignoring the first few changes."""
        if self._mouse_changes < MOUSE_WARMUP_CHANGES and self._mouse_old_x != mouse_x:
            self._mouse_changes += 1
        else:
            self.player.angle += (mouse_x - self._mouse_old_x) * MOUSE_ANGLE_RATIO
        self._mouse_old_x = mouse_x
        self.player.angle = normalize_angle(self.player.angle)

    def update(self, pressed: Collection[str], mouse_x: int | None = None) -> Texture:
        """Advance one frame and return the rendered camera texture."""
        self.doors.update(self.map, self.player.x, self.player.y)
        self.handle_keys(pressed)
        if mouse_x is not None:
            self.handle_mouse(mouse_x)
        self.rays = self._cast()
        return self.render()

    def render(self) -> Texture:
        """Draw walls and the masked minimap into the camera texture."""
        update_minimap(
            self.minimap,
            self.map,
            self.player,
            self.minimap_square_size,
            self.assets.get(MMAP_PLAYER_ICON),
        )
        apply_minimap_mask(self.minimap, self.assets.get(MMAP_MASK_NAME))
        draw_walls(
            self.camera,
            self.rays,
            self.player.angle,
            self.assets,
            self.scene.ceiling_color,
            self.scene.floor_color,
        )
        self.camera.merge(self.minimap, MMAP_X, MMAP_Y)
        return self.camera


def load_assets(scene: Scene) -> AssetStore:
    """Load the wall, door and minimap textures a scene needs."""
    assets = AssetStore()
    assets.load(scene.north, NORTH_TX)
    assets.load(scene.south, SOUTH_TX)
    assets.load(scene.west, WEST_TX)
    assets.load(scene.east, EAST_TX)
    assets.load(DOOR_TEXTURE_PATH, DOOR_TX)
    assets.load(MMAP_PLAYER_PATH, MMAP_PLAYER_ICON)
    assets.load(MMAP_MASK_PATH, MMAP_MASK_NAME)
    return assets


def _run(game: Game) -> None:
    import pygame

    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
        except pygame.error as exc:
            raise CubError(ErrorCode.GRAPHICS, f"Error: {exc}") from exc
        pygame.display.set_caption("cub3d")
        pygame.mouse.set_visible(False)
        pygame.event.set_grab(True)
        keymap = {
            "q": pygame.K_q,
            "e": pygame.K_e,
            "w": pygame.K_w,
            "s": pygame.K_s,
            "a": pygame.K_a,
            "d": pygame.K_d,
            "escape": pygame.K_ESCAPE,
        }
        clock = pygame.time.Clock()
        mouse_x = 0
        pygame.mouse.get_rel()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
            if not game.running:
                break
            keys = pygame.key.get_pressed()
            pressed = {name for name, code in keymap.items() if keys[code]}
            mouse_x += pygame.mouse.get_rel()[0]
            frame = game.update(pressed, mouse_x)
            surface = pygame.image.frombuffer(
                bytes(frame.pixels), (frame.width, frame.height), "RGBA"
            )
            screen.blit(pygame.transform.scale(surface, (WINDOW_W, WINDOW_H)), (0, 0))
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Error\nNot correct arguments", file=sys.stderr)
        return 1
    try:
        scene = load_scene(args[0])
    except ParseError as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    try:
        _run(Game(scene, load_assets(scene)))
    except CubError as exc:
        print(exc.message, file=sys.stderr)
        return int(exc.code)
    return 0


if __name__ == "__main__":
    sys.exit(main())