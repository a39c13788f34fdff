"""Error codes and exceptions raised by the game engine."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Fatal error conditions the engine can run into."""

    GRAPHICS = 1
    MEMORY = 2
    ASSET_NAME = 3
    ASSET_NOT_FOUND = 4
    ASSET_DELETE = 5
    MINIMAP_MASK = 6
    DOOR_REMOVE = 7
    DOOR_WALK = 8


_MESSAGES = {
    ErrorCode.GRAPHICS: "Error: Graphics operation failed",
    ErrorCode.MEMORY: "Error: Out of memory",
    ErrorCode.ASSET_NAME: "Error: Asset name already in use",
    ErrorCode.ASSET_NOT_FOUND: "Error: Asset not found",
    ErrorCode.ASSET_DELETE: "Error: Could not delete asset",
    ErrorCode.MINIMAP_MASK: "Error: Minimap mask too small",
    ErrorCode.DOOR_REMOVE: "Error: Tried removing a door that doesn't exist",
    ErrorCode.DOOR_WALK: "Error: Tried walking on a door that doesn't exist",
}


def error_message(code: ErrorCode) -> str:
    """Return the human readable message for an error code."""
    return _MESSAGES[ErrorCode(code)]


class CubError(Exception):
    """A fatal engine error carrying an :class:`ErrorCode`."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        self.code = ErrorCode(code)
        self.message = message if message is not None else error_message(self.code)
        super().__init__(self.message)


class ParseError(ValueError):
    """Raised when a scene description file is invalid."""