# This file makes this a Python package

from .common import Cell, manhattan_distance
from .errors import (
    DuplicateTileDefinition,
    InvalidCoordinate,
    MapFormatError,
    TileNotFound,
    TilepathError,
)
from .tiles import MovementRuleTable, TileType
from .level_data import GridMap
from .graph import GridGraph, GridGraphBuilder, build_grid_graph
from .pathfinding import PathfindingAlgorithm, PathfindingEngine, PathResult
from .scoring import PathScorer, score_path
from .planning import Objective, RoutePlan, RoutePlanner
from .map_loader import MapLoader, load_map, parse_map
from .path_export import format_path, write_path

__all__ = [
    # Grid primitives
    "Cell",
    "manhattan_distance",
    # Errors
    "TilepathError",
    "TileNotFound",
    "InvalidCoordinate",
    "MapFormatError",
    "DuplicateTileDefinition",
    # Tile rules and map
    "TileType",
    "MovementRuleTable",
    "GridMap",
    # Graph and search
    "GridGraph",
    "GridGraphBuilder",
    "build_grid_graph",
    "PathfindingAlgorithm",
    "PathfindingEngine",
    "PathResult",
    "PathScorer",
    "score_path",
    # Planning
    "Objective",
    "RoutePlan",
    "RoutePlanner",
    # I/O
    "MapLoader",
    "load_map",
    "parse_map",
    "format_path",
    "write_path",
]
