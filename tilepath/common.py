"""
Common grid components shared by the rule table, graph builder and pathfinder.
"""

from typing import NamedTuple, Tuple


class Cell(NamedTuple):
    """Integer grid coordinate. Compares equal to a plain (x, y) tuple."""

    x: int
    y: int

    def offset(self, delta: Tuple[int, int]) -> "Cell":
        """Return the cell reached by applying a relative (dx, dy) offset."""
        return Cell(self.x + delta[0], self.y + delta[1])


def as_cell(value) -> Cell:
    """Coerce an (x, y) pair into a Cell."""
    if isinstance(value, Cell):
        return value
    x, y = value
    return Cell(int(x), int(y))


def manhattan_distance(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """|dx| + |dy| between two cells."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
