"""
Movement rule table: tile id -> (traversal cost, movement offsets).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

from .errors import DuplicateTileDefinition, TileNotFound
from .tile_definitions import TILE_MOVEMENT_MAP, Direction

logger = logging.getLogger(__name__)

Offset = Tuple[int, int]


def symmetric_offsets(offsets: Iterable[Offset]) -> Tuple[Offset, ...]:
    """
    Close an offset list under negation and drop duplicates.

    Declared offsets keep their order; the reverse of each declared offset
    follows them in the same order. (0, 0) is never a movement and is dropped.
    """
    declared = []
    for dx, dy in offsets:
        delta = (int(dx), int(dy))
        if delta != (0, 0) and delta not in declared:
            declared.append(delta)

    result = list(declared)
    for dx, dy in declared:
        reverse = (-dx, -dy)
        if reverse not in result:
            result.append(reverse)
    return tuple(result)


@dataclass(frozen=True)
class TileType:
    """A tile type: identifier, traversal cost and symmetric movement offsets."""

    tile_id: str
    cost: int
    offsets: Tuple[Offset, ...] = ()

    def __post_init__(self):
        if self.cost < 0:
            raise ValueError(f"Tile {self.tile_id!r} has negative cost {self.cost}")
        object.__setattr__(self, "offsets", symmetric_offsets(self.offsets))

    @classmethod
    def from_directions(
        cls, tile_id: str, cost: int, codes: Sequence[str]
    ) -> "TileType":
        """Build a tile from direction codes such as ``["R", "DR"]``."""
        offsets = [Direction.from_code(code).offset for code in codes]
        return cls(tile_id=tile_id, cost=cost, offsets=tuple(offsets))

    @classmethod
    def from_catalog(cls, tile_id: str, cost: int) -> "TileType":
        """
        Build a tile whose movements come from the built-in catalog.

        Ids missing from the catalog get no movement offsets at all.
        """
        codes = TILE_MOVEMENT_MAP.get(tile_id)
        if codes is None:
            logger.warning(
                "Tile %r is not in the built-in catalog and lists no directions; "
                "cells of this type will be immobile",
                tile_id,
            )
            codes = ()
        return cls.from_directions(tile_id, cost, codes)

    @property
    def max_step_span(self) -> int:
        """Largest Manhattan length of a single step on this tile."""
        return max((abs(dx) + abs(dy) for dx, dy in self.offsets), default=0)


class MovementRuleTable:
    """
    Lookup table from tile id to its TileType.

    Filled once while the map is being set up and treated as read-only by the
    graph builder, the pathfinder and the scorer. Unknown ids raise
    TileNotFound instead of falling back to a placeholder tile.
    """

    def __init__(self, tile_types: Optional[Iterable[TileType]] = None):
        self._tiles: Dict[str, TileType] = {}
        for tile_type in tile_types or ():
            self.register(tile_type)

    def register(self, tile_type: TileType) -> None:
        """
        Add a tile type during setup.

        Raises:
            DuplicateTileDefinition: If the tile id is already registered
        """
        if tile_type.tile_id in self._tiles:
            raise DuplicateTileDefinition(tile_type.tile_id)
        self._tiles[tile_type.tile_id] = tile_type

    def get(self, tile_id: str) -> TileType:
        try:
            return self._tiles[tile_id]
        except KeyError:
            raise TileNotFound(tile_id) from None

    def cost_of(self, tile_id: str) -> int:
        return self.get(tile_id).cost

    def offsets_of(self, tile_id: str) -> Tuple[Offset, ...]:
        return self.get(tile_id).offsets

    @property
    def default_tile_id(self) -> Optional[str]:
        """First registered tile id, used for cells without a placement."""
        return next(iter(self._tiles), None)

    def __contains__(self, tile_id) -> bool:
        return tile_id in self._tiles

    def __iter__(self) -> Iterator[TileType]:
        return iter(self._tiles.values())

    def __len__(self) -> int:
        return len(self._tiles)

    def __repr__(self):
        return f"MovementRuleTable({list(self._tiles)})"
