"""
Constants for route search and its command-line front end.

Centralised defaults so the planner, the config object and the CLI agree.
"""

from typing import Optional


class PathfindingDefaults:
    """Default values for the search algorithms."""

    # None derives the Manhattan weight from the graph's tiles (admissible);
    # a number forces it.
    HEURISTIC_WEIGHT: Optional[float] = None
    # None keeps expanding until the frontier is exhausted.
    MAX_NODES_TO_EXPLORE: Optional[int] = None


DEFAULT_INPUT_FILE = "input.txt"
DEFAULT_OUTPUT_FILE = "output.txt"

OBJECTIVE_CHOICES = ("max", "min")
ALGORITHM_CHOICES = ("astar", "dijkstra")
