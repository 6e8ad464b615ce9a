"""
Exception types raised by tilepath.

A path that cannot be found is not an error: the pathfinder reports it through
``PathResult.success``. The exceptions below are configuration and input
failures and are fatal to a planning run.
"""


class TilepathError(Exception):
    """Base class for all tilepath errors."""


class TileNotFound(TilepathError, KeyError):
    """Lookup of a tile id that was never registered."""

    def __init__(self, tile_id):
        self.tile_id = tile_id
        super().__init__(tile_id)

    def __str__(self):
        return f"Unknown tile type: {self.tile_id!r}"


class InvalidCoordinate(TilepathError, ValueError):
    """A cell reference outside [0, width) x [0, height)."""

    def __init__(self, cell, width: int, height: int):
        self.cell = tuple(cell)
        self.width = width
        self.height = height
        super().__init__(
            f"Cell {self.cell} out of bounds for grid {width}x{height}"
        )


class MapFormatError(TilepathError, ValueError):
    """Malformed map input text."""

    def __init__(self, message: str, line_number=None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class DuplicateTileDefinition(TilepathError, ValueError):
    """A tile id defined more than once while building the rule table."""

    def __init__(self, tile_id):
        self.tile_id = tile_id
        super().__init__(f"Tile {tile_id!r} is already defined")
