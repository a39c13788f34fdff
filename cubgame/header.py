"""Parsing of the header lines of a scene file: textures and colours."""

from __future__ import annotations

import os
from dataclasses import dataclass
from os import PathLike
from typing import Iterable

from .errors import ParseError

REQUIRED_ELEMENTS = 6
"""Number of header elements (four textures, two colours) a scene needs."""

_COLOR_BLANKS = " \t"


@dataclass
class SceneHeader:
    """Header data gathered while scanning a scene file."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    ceiling: str | None = None
    floor: str | None = None
    elements: int = 0
    map_start: int | None = None
    map_width: int = 0
    map_lines: int = 0

    @property
    def complete(self) -> bool:
        """Tell whether every header element has been read exactly as required."""
        return self.elements == REQUIRED_ELEMENTS


def _value_after(text: str, marker: str) -> str | None:
    """Return what follows the first ``marker`` in ``text``, up to the newline.

    Leading spaces are dropped. ``None`` means nothing at all followed.
    """
    rest = text[text.index(marker) + 1:].lstrip(" ")
    if not rest:
        return None
    return rest.split("\n", 1)[0]


_IDENTIFIERS = (
    ("C", "C", "ceiling"),
    ("F", "F", "floor"),
    ("NO", "O", "north"),
    ("EA", "A", "east"),
    ("SO", "O", "south"),
    ("WE", "E", "west"),
)


def parse_header_line(header: SceneHeader, line: str, index: int) -> None:
    """Take one line of a scene file into ``header``.

    ``index`` is the position of the line in the file. Raises
    :class:`ParseError` for a line that is neither a header element, a blank
    line, nor a map line coming after all six header elements.
    """
    body = line.lstrip(" ")
    for prefix, marker, field in _IDENTIFIERS:
        if body.startswith(prefix):
            value = _value_after(body, marker)
            if value is not None:
                setattr(header, field, value)
                header.elements += 1
            return
    if body.startswith("\n"):
        return
    if body.startswith("1"):
        if header.elements != REQUIRED_ELEMENTS:
            raise ParseError(
                f"line {index + 1}: map starts before all header elements are set"
            )
        if header.map_start is None or header.map_start > index:
            header.map_start = index
        header.map_width = max(header.map_width, len(line.split("\n", 1)[0]))
        header.map_lines += 1
        return
    raise ParseError(f"line {index + 1}: unexpected content {line.rstrip()!r}")


def scan_header(lines: Iterable[str]) -> SceneHeader:
    """Scan every line of a scene file and return the gathered header."""
    header = SceneHeader()
    for index, line in enumerate(lines):
        parse_header_line(header, line, index)
    return header


def _read_component(text: str, pos: int) -> tuple[int, int]:
    length = len(text)
    while pos < length and text[pos] in _COLOR_BLANKS:
        pos += 1
    start = pos
    while pos < length and "0" <= text[pos] <= "9":
        pos += 1
    if pos == start:
        raise ParseError(f"missing colour component in {text!r}")
    value = int(text[start:pos])
    if value > 255:
        raise ParseError(f"colour component {value} out of range in {text!r}")
    while pos < length and text[pos] in _COLOR_BLANKS:
        pos += 1
    if pos < length and text[pos] == ",":
        pos += 1
    return value, pos


def parse_color(text: str) -> tuple[int, int, int]:
    """Validate an ``R,G,B`` colour and return its three components."""
    if text[:1].isalpha():
        raise ParseError(f"colour must start with a number: {text!r}")
    components = []
    pos = 0
    for _ in range(3):
        value, pos = _read_component(text, pos)
        components.append(value)
    if text[pos:].strip(_COLOR_BLANKS):
        raise ParseError(f"unexpected characters after colour in {text!r}")
    return components[0], components[1], components[2]


def _atoi(text: str) -> int:
    body = text.lstrip(" \t\n\v\f\r")
    sign = 1
    if body[:1] in ("+", "-"):
        if body[0] == "-":
            sign = -1
        body = body[1:]
    digits = ""
    for char in body:
        if not "0" <= char <= "9":
            break
        digits += char
    return sign * int(digits) if digits else 0


def rgb_to_hex(text: str) -> int:
    """Turn an ``R,G,B`` string into an opaque 0xRRGGBBAA colour."""
    parts = [part for part in text.split(",") if part]
    if len(parts) < 3:
        raise ParseError(f"colour needs three components: {text!r}")
    red, green, blue = (_atoi(part) for part in parts[:3])
    return ((red << 24) | (green << 16) | (blue << 8) | 0xFF) & 0xFFFFFFFF


def check_extension(filename: str | None, ext: str | None) -> bool:
    """Tell whether ``filename`` is longer than ``ext`` and ends with it."""
    if not filename or not ext:
        return False
    if len(filename) <= len(ext):
        return False
    return filename.endswith(ext)


def check_textures(header: SceneHeader) -> bool:
    """Tell whether the four wall textures are set, ``.xpm`` and readable."""
    paths: list[str | PathLike | None] = [
        header.north,
        header.south,
        header.west,
        header.east,
    ]
    if any(path is None for path in paths):
        return False
    if not all(check_extension(str(path), ".xpm") for path in paths):
        return False
    return all(os.access(path, os.R_OK) for path in paths)