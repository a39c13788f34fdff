"""Building the map grid of a scene file and checking that it is closed."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import Iterable

from .errors import ParseError

WALL = "1"
PLAYER_CHARS = "NSEW"

# Characters a map line may hold; blanks turn into walls. Only the south
# facing start is accepted when reading a map line.
_MAP_CHARS = frozenset("10SDd")
_BLANKS = frozenset(" \t")
_LINE_ENDS = frozenset("\n\0")
# Cells allowed next to a cell the player can reach.
_ENCLOSING = frozenset("10NSEWdD")


@dataclass
class Grid:
    """A rectangular map stored row by row as single characters."""

    cells: list[str]
    width: int
    height: int

    def __post_init__(self) -> None:
        self.cells = list(self.cells)
        if self.width < 0 or self.height < 0:
            raise ValueError("grid dimensions must not be negative")
        if len(self.cells) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} cells, got {len(self.cells)}"
            )

    @property
    def size(self) -> int:
        """Number of cells in the grid."""
        return self.width * self.height

    def rows(self) -> list[str]:
        """Return the grid as one string per row."""
        return [
            "".join(self.cells[start:start + self.width])
            for start in range(0, self.size, self.width or 1)
        ] if self.width else [""] * self.height

    def __str__(self) -> str:
        return "".join(self.cells)


def _parse_row(line: str, width: int, index: int) -> list[str]:
    cells: list[str] = []
    for char in line[:width]:
        if char in _LINE_ENDS:
            break
        if char in _MAP_CHARS:
            cells.append(char)
        elif char in _BLANKS:
            cells.append(WALL)
        else:
            raise ParseError(f"line {index + 1}: invalid map character {char!r}")
    cells.extend(WALL * (width - len(cells)))
    return cells


def build_grid(
    lines: Iterable[str], start: int | None, width: int, height: int
) -> Grid:
    """Build a width x height grid from the lines starting at index ``start``.

    Every line from ``start`` on is checked; short lines are padded with
    walls and only the first ``height`` rows are kept.
    """
    rows: list[list[str]] = []
    if start is not None:
        for offset, line in enumerate(islice(lines, start, None)):
            row = _parse_row(line, width, start + offset)
            if len(rows) < height:
                rows.append(row)
    if len(rows) < height:
        raise ParseError("map has fewer lines than expected")
    return Grid([cell for row in rows for cell in row], width, height)


def find_player(grid: Grid) -> tuple[int, int, str]:
    """Return the row, column and orientation of the only player start."""
    found = [
        (index // grid.width, index % grid.width, cell)
        for index, cell in enumerate(grid.cells)
        if cell in PLAYER_CHARS
    ]
    if len(found) != 1:
        raise ParseError("Invalid number of players")
    return found[0]


def _is_valid_index(grid: Grid, index: int) -> bool:
    if index < 0 or index >= grid.size:
        return False
    if index % grid.width == 0 and grid.cells[index] == WALL:
        return False
    if (index + 1) % grid.width == 0 and grid.cells[index] == WALL:
        return False
    return True


def flood_fill(grid: Grid, start: int) -> frozenset[int]:
    """Return the indices of every non-wall cell reachable from ``start``."""
    visited: set[int] = set()
    stack = [start]
    width = grid.width
    while stack:
        index = stack.pop()
        if not _is_valid_index(grid, index) or index in visited:
            continue
        if grid.cells[index] == WALL:
            continue
        visited.add(index)
        stack.extend((index - width, index + width, index - 1, index + 1))
    return frozenset(visited)


def _is_exposed(grid: Grid, index: int) -> bool:
    width = grid.width
    if (
        index < width
        or index >= grid.size - width
        or index % width == 0
        or (index + 1) % width == 0
    ):
        return True
    neighbours = (index - width, index + width, index - 1, index + 1)
    return any(grid.cells[n] not in _ENCLOSING for n in neighbours)


def check_walls(grid: Grid) -> frozenset[int]:
    """Check the player cannot leave the map; return the reachable cells."""
    row, col, _ = find_player(grid)
    visited = flood_fill(grid, row * grid.width + col)
    if 0 in visited:
        raise ParseError("Map is not properly closed (space found)")
    if any(_is_exposed(grid, index) for index in sorted(visited)):
        raise ParseError("Map is not properly closed (hole found)")
    return visited


def format_grid(grid: Grid) -> str:
    """Render the grid as a framed block of text."""
    body = "".join(f"{row}\n" for row in grid.rows())
    return f"\n----- Map -----\n{body}--------------\n"