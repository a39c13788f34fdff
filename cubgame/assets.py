"""Named texture storage."""

from __future__ import annotations

from os import PathLike
from typing import Iterator

from .errors import CubError, ErrorCode
from .texture import Texture


class AssetStore:
    """Textures kept under unique names, in the order they were added."""

    def __init__(self) -> None:
        self._assets: dict[str, Texture] = {}

    def add(self, name: str, texture: Texture) -> None:
        """Store a texture under a name that is not yet in use."""
        if name in self._assets:
            raise CubError(ErrorCode.ASSET_NAME)
        self._assets[name] = texture

    def load(self, path: str | PathLike, name: str) -> Texture:
        """Load a PNG file and store it under ``name``."""
        if name in self._assets:
            raise CubError(ErrorCode.ASSET_NAME)
        texture = Texture.from_png(path)
        self._assets[name] = texture
        return texture

    def get(self, name: str) -> Texture:
        """Return the texture stored under ``name``."""
        try:
            return self._assets[name]
        except KeyError:
            raise CubError(ErrorCode.ASSET_NOT_FOUND) from None

    def delete(self, name: str) -> None:
        """Remove the named texture; an empty store cannot be deleted from."""
        if not self._assets:
            raise CubError(ErrorCode.ASSET_DELETE)
        self._assets.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._assets)