"""
Grid map data structure for route planning.

This module provides a single value describing a complete planning problem:
the per-cell tile layout, the golden endpoints, the silver bonuses and the
tile rules. It is built once by the map loader (or by hand in tests) and then
passed through the graph builder, the pathfinder and the scorer unchanged.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .common import Cell, as_cell
from .errors import InvalidCoordinate
from .tiles import MovementRuleTable


@dataclass
class GridMap:
    """
    Complete planning input.

    Attributes:
        tiles: 2D NumPy object array of tile ids, indexed [y, x] (shape [height, width]).
               None marks a cell without a tile.
        rules: Movement rule table for the tile ids used in ``tiles``
        golden_points: Route endpoints, in input order
        silver_points: Bonus value per cell
        map_id: Optional identifier used in log messages
    """

    tiles: np.ndarray
    rules: MovementRuleTable
    golden_points: List[Cell] = field(default_factory=list)
    silver_points: Dict[Cell, int] = field(default_factory=dict)
    map_id: Optional[str] = None

    def __post_init__(self):
        """Validate the data structure after initialization."""
        if not isinstance(self.tiles, np.ndarray):
            raise TypeError("tiles must be a NumPy array")

        if len(self.tiles.shape) != 2:
            raise ValueError("tiles must be a 2D array")

        self.golden_points = [as_cell(p) for p in self.golden_points]
        self.silver_points = {
            as_cell(p): int(bonus) for p, bonus in self.silver_points.items()
        }
        for cell in self.golden_points:
            self.check_cell(cell)
        for cell in self.silver_points:
            self.check_cell(cell)

        if self.map_id is None:
            self.map_id = f"map_{id(self.tiles)}"

    @classmethod
    def uniform(
        cls,
        width: int,
        height: int,
        tile_id: str,
        rules: MovementRuleTable,
        golden_points=(),
        silver_points=None,
        map_id: Optional[str] = None,
    ) -> "GridMap":
        """Build a map where every cell carries the same tile."""
        tiles = np.full((height, width), tile_id, dtype=object)
        return cls(
            tiles=tiles,
            rules=rules,
            golden_points=list(golden_points),
            silver_points=dict(silver_points or {}),
            map_id=map_id,
        )

    @property
    def height(self) -> int:
        return self.tiles.shape[0]

    @property
    def width(self) -> int:
        return self.tiles.shape[1]

    def in_bounds(self, cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def check_cell(self, cell) -> Cell:
        cell = as_cell(cell)
        if not self.in_bounds(cell):
            raise InvalidCoordinate(cell, self.width, self.height)
        return cell

    def tile_id_at(self, cell) -> Optional[str]:
        """
        Tile id assigned to a cell.

        Raises:
            InvalidCoordinate: If the cell is outside the grid
        """
        x, y = self.check_cell(cell)
        return self.tiles[y, x]

    def set_tile(self, cell, tile_id: str) -> None:
        x, y = self.check_cell(cell)
        self.tiles[y, x] = tile_id

    def tile_cost(self, cell) -> int:
        """
        Cost of moving onto a cell: the cost of the cell's own tile.

        Raises:
            InvalidCoordinate: If the cell is outside the grid
            TileNotFound: If the cell's tile id is not in the rule table
        """
        return self.rules.cost_of(self.tile_id_at(cell))

    @property
    def cost_fn(self) -> Callable[[Cell], int]:
        return self.tile_cost

    def tile_assignment(self) -> Dict[Cell, str]:
        """Per-cell tile ids as a mapping, skipping unassigned cells."""
        assignment = {}
        for x in range(self.width):
            for y in range(self.height):
                tile_id = self.tiles[y, x]
                if tile_id is not None:
                    assignment[Cell(x, y)] = tile_id
        return assignment
