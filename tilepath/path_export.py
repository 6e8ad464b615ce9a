"""
Path output in the ``tile_id x y`` line format.
"""

from pathlib import Path
from typing import Iterable, List, Tuple, Union

from .common import Cell
from .level_data import GridMap


def path_records(path: Iterable[Cell], grid_map: GridMap) -> List[Tuple[str, int, int]]:
    """(tile_id, x, y) for every cell of a path, using each cell's assigned tile."""
    return [(grid_map.tile_id_at(cell), cell[0], cell[1]) for cell in path]


def format_path(path: Iterable[Cell], grid_map: GridMap) -> str:
    """One ``tile_id x y`` line per cell, newline terminated."""
    lines = [f"{tile_id} {x} {y}" for tile_id, x, y in path_records(path, grid_map)]
    return "".join(line + "\n" for line in lines)


def write_path(path: Iterable[Cell], grid_map: GridMap, output_path: Union[str, Path]) -> Path:
    output_path = Path(output_path)
    output_path.write_text(format_path(path, grid_map))
    return output_path
