"""
This module contains the definitions for tile movement rules: the direction
codes a tile definition may list, and the built-in catalog of tile ids whose
movements are known without being spelled out in the input.

COORDINATES:
(0, 0) is the top-left cell, x grows to the right and y grows downward.

DIRECTION CODES:
- R:  (1, 0)   left to right
- L:  (-1, 0)  right to left
- D:  (0, 1)   up to down
- U:  (0, -1)  down to up
- DR: (1, 1)   diagonal down-right
- UL: (-1, -1) diagonal up-left
- UR: (1, -1)  diagonal up-right
- DL: (-1, 1)  diagonal down-left

Every code has an opposite. A tile that lists a code can always be traversed
in the opposite direction as well; the reverse offsets are added when the
tile type is built (see tiles.TileType.from_directions).

BUILT-IN TILE CATALOG:
- 3:  R
- 5:  DR
- 6:  D
- 7:  R, D, DR
- 9:  UR
- 96: D, UR
- A:  U
- A5: U, DR
- B:  R, U, UR
- C:  D
- C3: R, D
- D:  D, UR, DR
- E:  U, D
- F:  R, D, U, UR, DR
"""

from enum import Enum
from typing import Dict, Tuple


class Direction(Enum):
    """Unit step directions a tile can enable."""

    R = (1, 0)
    L = (-1, 0)
    D = (0, 1)
    U = (0, -1)
    DR = (1, 1)
    UL = (-1, -1)
    UR = (1, -1)
    DL = (-1, 1)

    @property
    def offset(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))

    @classmethod
    def from_code(cls, code: str) -> "Direction":
        """Look up a direction by its code, case-insensitively."""
        try:
            return cls[code.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction code: {code!r}") from None


# Tile id -> direction codes, in declaration order.
# Some ids repeat a direction (E and F list D twice); duplicates are removed
# when the tile type is built.
TILE_MOVEMENT_MAP: Dict[str, Tuple[str, ...]] = {
    "3": ("R",),
    "5": ("DR",),
    "6": ("D",),
    "7": ("R", "D", "DR"),
    "9": ("UR",),
    "96": ("D", "UR"),
    "A": ("U",),
    "A5": ("U", "DR"),
    "B": ("R", "U", "UR"),
    "C": ("D",),
    "C3": ("R", "D"),
    "D": ("D", "UR", "DR"),
    "E": ("U", "D", "D"),
    "F": ("R", "D", "U", "D", "DR", "UR"),
}
