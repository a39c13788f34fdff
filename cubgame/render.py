"""Drawing the 3D view and the minimap into textures."""

from __future__ import annotations

import math
from typing import Iterable, Protocol

from .assets import AssetStore
from .errors import CubError, ErrorCode
from .mathutil import TWO_PI, remap
from .raycast import Ray
from .texture import Texture
from .world import WALL, GameMap

MMAP_WALL_COLOR = 0x404040FF
"""Minimap colour of a wall cell."""
MMAP_FLOOR_COLOR = 0xC8C8C8FF
"""Minimap colour of any cell that is not a wall."""
OUT_OF_MAP_COLOR = 0x000000FF
"""Minimap colour of points outside the map."""
WHITE = 0xFFFFFFFF
"""Mask colour that leaves the minimap untouched."""

_WALL_SCALE = 0.9
_MAX_LINE_HEIGHT = 2**31 - 1


class _Viewer(Protocol):
    x: float
    y: float


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _round_half_away(value: float) -> int:
    if value >= 0:
        return math.floor(value + 0.5)
    return math.ceil(value - 0.5)


def draw_stripe(
    camera: Texture,
    column: int,
    line_height: int,
    texture: Texture | None,
    offset: float,
    ceiling_color: int,
    floor_color: int,
) -> None:
    """Fill one camera column: ceiling, a textured wall slice, then floor.

    ``offset`` is the position along the wall face, from 0 to 1, that picks
    the texture column. ``texture`` may be ``None`` only when no wall rows
    are drawn.
    """
    half = _cdiv(camera.height, 2)
    half_line = _cdiv(line_height, 2)
    line_start = half - half_line
    line_end = half + half_line
    tex_x = 0
    if texture is not None and line_end > line_start:
        tex_x = _round_half_away(offset * (texture.width - 1))
        tex_x = min(max(tex_x, 0), texture.width - 1)
    for row in range(camera.height):
        if row < line_start:
            color = ceiling_color
        elif row < line_end:
            if texture is None:
                raise ValueError("a wall stripe needs a texture")
            tex_y = int(remap(row - line_start, 0, line_height - 1, 0, texture.height - 1))
            color = texture.get_color(tex_x, tex_y)
        else:
            color = floor_color
        camera.put_pixel(column, row, color)


def _line_height(camera_height: int, dist: float) -> int:
    if dist <= 0.0 or math.isnan(dist):
        return _MAX_LINE_HEIGHT
    return int(min(camera_height / dist * _WALL_SCALE, _MAX_LINE_HEIGHT))


def draw_walls(
    camera: Texture,
    rays: Iterable[Ray],
    player_angle: float,
    assets: AssetStore,
    ceiling_color: int,
    floor_color: int,
) -> None:
    """Draw one stripe per ray, the wall height shrinking with distance."""
    for column, ray in enumerate(rays):
        if not ray.hit or ray.texture is None:
            draw_stripe(camera, column, 0, None, 0.0, ceiling_color, floor_color)
            continue
        da = player_angle - ray.angle
        if da < 0:
            da += TWO_PI
        elif da > TWO_PI:
            da -= TWO_PI
        dist = min(ray.h_dist, ray.v_dist) * math.cos(da)
        draw_stripe(
            camera,
            column,
            _line_height(camera.height, dist),
            assets.get(ray.texture),
            ray.offset,
            ceiling_color,
            floor_color,
        )


def _color_at(game_map: GameMap, x: float, y: float) -> int:
    if x < 0 or y < 0:
        return OUT_OF_MAP_COLOR
    ix, iy = int(x), int(y)
    if ix >= game_map.width or iy >= game_map.height:
        return OUT_OF_MAP_COLOR
    if game_map.cells[iy * game_map.width + ix] == WALL:
        return MMAP_WALL_COLOR
    return MMAP_FLOOR_COLOR


def update_minimap(
    mmap: Texture,
    game_map: GameMap,
    player: _Viewer,
    square_size: float,
    player_icon: Texture | None,
) -> None:
    """Redraw the minimap centred on the player, one cell per ``square_size`` pixels."""
    step = 1.0 / square_size
    origin_x = player.x - mmap.width / 2 / square_size
    y = player.y - mmap.height / 2 / square_size
    for j in range(mmap.height):
        x = origin_x
        for i in range(mmap.width):
            mmap.put_pixel(i, j, _color_at(game_map, x, y))
            x += step
        y += step
    if player_icon is not None:
        mmap.merge(
            player_icon,
            mmap.width // 2 - player_icon.width // 2 + 1,
            mmap.height // 2 - player_icon.height // 2 + 1,
        )


def apply_minimap_mask(mmap: Texture, mask: Texture) -> None:
    """Copy every non-white pixel of ``mask`` over the minimap."""
    if mask.width < mmap.width or mask.height < mmap.height:
        raise CubError(ErrorCode.MINIMAP_MASK)
    for i in range(mmap.height):
        for j in range(mmap.width):
            color = mask.get_color(j, i)
            if color != WHITE:
                mmap.put_pixel(j, i, color)