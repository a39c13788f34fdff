"""Reading a whole scene file into the data the game starts from."""

from __future__ import annotations

import math
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Iterable

from .errors import ParseError
from .header import parse_color, rgb_to_hex, scan_header
from .mapcheck import build_grid, check_walls, find_player

_ANGLES = {
    "N": 3.0 * math.pi / 2.0,
    "S": math.pi / 2.0,
    "E": 0.0,
    "W": math.pi,
}
_DEFAULT_ANGLE = 3.0 * math.pi / 2.0


@dataclass
class Scene:
    """Everything a valid scene file describes."""

    cells: str
    width: int
    height: int
    player_x: float
    player_y: float
    angle: float
    orientation: str
    north: str
    south: str
    west: str
    east: str
    floor_color: int
    ceiling_color: int


def player_angle(orientation: str) -> float:
    """Return the facing angle for a start orientation letter."""
    return _ANGLES.get(orientation, _DEFAULT_ANGLE)


def parse_scene(lines: Iterable[str]) -> Scene:
    """Parse the lines of a scene file, newlines kept, into a :class:`Scene`."""
    lines = list(lines)
    try:
        header = scan_header(lines)
    except ParseError as exc:
        raise ParseError(f"Calculate size file failed: {exc}") from exc
    try:
        grid = build_grid(lines, header.map_start, header.map_width, header.map_lines)
        check_walls(grid)
    except ParseError as exc:
        raise ParseError(f"Map not valid: {exc}") from exc
    try:
        if header.ceiling is None or header.floor is None:
            raise ParseError("ceiling or floor colour missing")
        parse_color(header.ceiling)
        parse_color(header.floor)
    except ParseError as exc:
        raise ParseError(f"Colors not valid: {exc}") from exc
    if not header.complete:
        raise ParseError("Not good organisation")
    row, col, orientation = find_player(grid)
    return Scene(
        cells=str(grid),
        width=grid.width,
        height=grid.height,
        player_x=col + 0.5,
        player_y=row + 0.5,
        angle=player_angle(orientation),
        orientation=orientation,
        north=header.north or "",
        south=header.south or "",
        west=header.west or "",
        east=header.east or "",
        # The ceiling entry colours the floor and the floor entry the ceiling.
        floor_color=rgb_to_hex(header.ceiling),
        ceiling_color=rgb_to_hex(header.floor),
    )


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [f"{part}\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_scene(path: str | PathLike) -> Scene:
    """Read and parse a scene file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise ParseError(f"Cannot open file: {path}") from exc
    return parse_scene(_split_lines(data.decode("utf-8", errors="surrogateescape")))