"""
Grid graph construction for tile-rule navigation.
"""

from .grid_graph import GridGraph, GridGraphBuilder, build_grid_graph

__all__ = ["GridGraph", "GridGraphBuilder", "build_grid_graph"]
