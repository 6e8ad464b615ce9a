"""
Loading of map text into a GridMap.

Input format (whitespace separated, one record per line):

    W H G S T
    x y                      G golden point lines
    x y bonus                S silver point lines
    tile_id cost [DIR ...]   T tile definition lines
    x y tile_id              optional per-cell placements, any number

Blank lines and lines starting with '#' are skipped. A tile definition
without direction codes takes its movements from the built-in catalog
(tile_definitions.TILE_MOVEMENT_MAP). Integer tokens after the cost are tile
stock counts and are ignored. Cells without a placement get the default tile:
the configured one, or the first tile defined.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np

from .common import Cell
from .errors import DuplicateTileDefinition, MapFormatError, TileNotFound
from .level_data import GridMap
from .tiles import MovementRuleTable, TileType

logger = logging.getLogger(__name__)


class MapLoader:
    """Parses map text into a GridMap."""

    def __init__(self, default_tile: Optional[str] = None):
        self.default_tile = default_tile

    def load(self, path: Union[str, Path]) -> GridMap:
        """Read and parse a map file."""
        path = Path(path)
        with open(path, "r") as f:
            text = f.read()
        return self.parse(text, map_id=path.stem)

    def parse(self, text: str, map_id: Optional[str] = None) -> GridMap:
        records = self._records(text)

        line_number, header = self._next_record(records, "header")
        if len(header) != 5:
            raise MapFormatError(
                f"header needs 5 fields (W H G S T), got {len(header)}", line_number
            )
        width, height, golden_count, silver_count, tile_count = (
            self._int(token, line_number) for token in header
        )
        if width <= 0 or height <= 0:
            raise MapFormatError(f"grid size must be positive, got {width}x{height}",
                                 line_number)
        if min(golden_count, silver_count, tile_count) < 0:
            raise MapFormatError("record counts must not be negative", line_number)
        if tile_count == 0:
            raise MapFormatError("at least one tile definition is required", line_number)

        golden_points: List[Cell] = []
        for _ in range(golden_count):
            line_number, fields = self._next_record(records, "golden point")
            golden_points.append(self._cell(fields[:2], fields, 2, line_number))

        silver_points = {}
        for _ in range(silver_count):
            line_number, fields = self._next_record(records, "silver point")
            cell = self._cell(fields[:2], fields, 3, line_number)
            silver_points[cell] = self._int(fields[2], line_number)

        rules = MovementRuleTable()
        for _ in range(tile_count):
            line_number, fields = self._next_record(records, "tile definition")
            try:
                rules.register(self._tile_type(fields, line_number))
            except DuplicateTileDefinition as e:
                raise MapFormatError(str(e), line_number) from None

        default_tile = self.default_tile or rules.default_tile_id
        if default_tile not in rules:
            raise TileNotFound(default_tile)
        tiles = np.full((height, width), default_tile, dtype=object)

        grid_map = GridMap(
            tiles=tiles,
            rules=rules,
            golden_points=golden_points,
            silver_points=silver_points,
            map_id=map_id,
        )

        placements = 0
        for line_number, fields in records:
            if len(fields) != 3:
                raise MapFormatError(
                    f"placement needs 3 fields (x y tile_id), got {len(fields)}",
                    line_number,
                )
            cell = self._cell(fields[:2], fields, 3, line_number)
            tile_id = fields[2]
            if tile_id not in rules:
                raise TileNotFound(tile_id)
            grid_map.set_tile(cell, tile_id)
            placements += 1

        logger.debug(
            "Loaded map %s: %dx%d, %d golden, %d silver, %d tiles, %d placements, "
            "default tile %r",
            grid_map.map_id, width, height, len(golden_points), len(silver_points),
            len(rules), placements, default_tile,
        )
        return grid_map

    def _records(self, text: str) -> Iterator[Tuple[int, List[str]]]:
        for line_number, line in enumerate(text.splitlines(), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            yield line_number, stripped.split()

    def _next_record(self, records, what: str) -> Tuple[int, List[str]]:
        try:
            return next(records)
        except StopIteration:
            raise MapFormatError(f"unexpected end of input, expected {what}") from None

    def _int(self, token: str, line_number: int) -> int:
        try:
            return int(token)
        except ValueError:
            raise MapFormatError(f"expected an integer, got {token!r}", line_number) from None

    def _cell(self, coords, fields, expected: int, line_number: int) -> Cell:
        if len(fields) != expected:
            raise MapFormatError(
                f"expected {expected} fields, got {len(fields)}", line_number
            )
        return Cell(self._int(coords[0], line_number), self._int(coords[1], line_number))

    def _tile_type(self, fields: List[str], line_number: int) -> TileType:
        if len(fields) < 2:
            raise MapFormatError("tile definition needs at least tile_id and cost",
                                 line_number)
        tile_id = fields[0]
        cost = self._int(fields[1], line_number)
        if cost < 0:
            raise MapFormatError(f"tile {tile_id!r} has negative cost {cost}", line_number)

        codes = [token for token in fields[2:] if not token.lstrip("-").isdigit()]
        if not codes:
            return TileType.from_catalog(tile_id, cost)
        try:
            return TileType.from_directions(tile_id, cost, codes)
        except ValueError as e:
            raise MapFormatError(str(e), line_number) from None


def load_map(path: Union[str, Path], default_tile: Optional[str] = None) -> GridMap:
    """Read a map file into a GridMap."""
    return MapLoader(default_tile=default_tile).load(path)


def parse_map(text: str, default_tile: Optional[str] = None) -> GridMap:
    """Parse map text into a GridMap."""
    return MapLoader(default_tile=default_tile).parse(text)
