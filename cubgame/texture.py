"""RGBA textures and simple drawing primitives."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from typing import Iterator

from PIL import Image

from .errors import CubError, ErrorCode

_BPP = 4


@dataclass
class Texture:
    """A width x height block of RGBA pixels, stored row by row."""

    width: int
    height: int
    pixels: bytearray | None = None

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("texture dimensions must not be negative")
        size = self.width * self.height * _BPP
        if self.pixels is None:
            self.pixels = bytearray(size)
        else:
            self.pixels = bytearray(self.pixels)
            if len(self.pixels) != size:
                raise ValueError(
                    f"expected {size} bytes of pixel data, got {len(self.pixels)}"
                )

    @classmethod
    def from_png(cls, path: str | PathLike) -> "Texture":
        """Load a PNG file as an RGBA texture."""
        try:
            with Image.open(path) as img:
                if img.format != "PNG":
                    raise CubError(
                        ErrorCode.GRAPHICS, f"Error: {path} is not a PNG file"
                    )
                rgba = img.convert("RGBA")
                return cls(rgba.width, rgba.height, bytearray(rgba.tobytes()))
        except (OSError, ValueError) as exc:
            raise CubError(
                ErrorCode.GRAPHICS, f"Error: could not load PNG {path}: {exc}"
            ) from exc

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return (y * self.width + x) * _BPP

    def contains(self, x: int, y: int) -> bool:
        """Tell whether (x, y) lies inside the texture."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_color(self, x: int, y: int) -> int:
        """Return the pixel at (x, y) as a 0xRRGGBBAA integer."""
        idx = self._offset(x, y)
        return int.from_bytes(self.pixels[idx:idx + _BPP], "big")

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at (x, y) from a 0xRRGGBBAA integer."""
        idx = self._offset(x, y)
        self.pixels[idx:idx + _BPP] = (color & 0xFFFFFFFF).to_bytes(_BPP, "big")

    def merge(self, src: "Texture", x: int, y: int) -> None:
        """Draw the non-transparent pixels of ``src`` with its corner at (x, y)."""
        for j in range(src.height):
            for i in range(src.width):
                color = src.get_color(i, j)
                if color & 0xFF and self.contains(i + x, j + y):
                    self.put_pixel(i + x, j + y, color)

    def scaled_to(self, width: int, height: int) -> "Texture":
        """Return a nearest-neighbour copy resized to width x height."""
        if width == self.width and height == self.height:
            return Texture(width, height, bytearray(self.pixels))
        out = bytearray(width * height * _BPP)
        wratio = self.width / width if width else 0.0
        hratio = self.height / height if height else 0.0
        for y in range(height):
            row = int(y * hratio) * self.width
            for x in range(width):
                src = (row + int(x * wratio)) * _BPP
                dst = (y * width + x) * _BPP
                out[dst:dst + _BPP] = self.pixels[src:src + _BPP]
        return Texture(width, height, out)


def _line_low(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    dx = x1 - x0
    dy = y1 - y0
    step_y = 1 if dy > 0 else -1
    dy = abs(dy)
    d = 2 * dy - dx
    y = y0
    for x in range(x0, x1):
        yield x, y
        if d > 0:
            y += step_y
            d += 2 * (dy - dx)
        else:
            d += 2 * dy
    yield x1, y


def _line_high(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    dx = x1 - x0
    dy = y1 - y0
    step_x = 1 if dx > 0 else -1
    dx = abs(dx)
    d = 2 * dx - dy
    x = x0
    for y in range(y0, y1):
        yield x, y
        if d > 0:
            x += step_x
            d += 2 * (dx - dy)
        else:
            d += 2 * dx
    yield x, y1


def _line_points(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    if x0 == x1:
        step = 1 if y1 > y0 else -1
        for y in range(y0, y1 + step, step):
            yield x0, y
    elif y0 == y1:
        step = 1 if x1 > x0 else -1
        for x in range(x0, x1 + step, step):
            yield x, y0
    elif abs(x1 - x0) > abs(y1 - y0):
        yield from (_line_low(x0, y0, x1, y1) if x1 > x0 else _line_low(x1, y1, x0, y0))
    else:
        yield from (_line_high(x0, y0, x1, y1) if y1 > y0 else _line_high(x1, y1, x0, y0))


def draw_line(texture: Texture, x0: int, y0: int, x1: int, y1: int, color: int) -> None:
    """Draw a Bresenham line, skipping the points that fall outside the texture."""
    for x, y in _line_points(x0, y0, x1, y1):
        if texture.contains(x, y):
            texture.put_pixel(x, y, color)