"""A raycasting maze explorer: scene parsing, movement, doors, ray casting and rendering."""

__version__ = "0.1.0"