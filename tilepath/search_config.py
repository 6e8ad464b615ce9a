from typing import Optional

from .constants import DEFAULT_OUTPUT_FILE, PathfindingDefaults


class SearchConfig:
    def __init__(
        self,
        objective: str = "max",
        algorithm: str = "astar",
        default_tile: Optional[str] = None,
        heuristic_weight: Optional[float] = PathfindingDefaults.HEURISTIC_WEIGHT,
        max_nodes_to_explore: Optional[int] = PathfindingDefaults.MAX_NODES_TO_EXPLORE,
        output_path: str = DEFAULT_OUTPUT_FILE,
        debug: bool = False,
    ):
        self.objective = objective
        self.algorithm = algorithm
        self.default_tile = default_tile
        self.heuristic_weight = heuristic_weight
        self.max_nodes_to_explore = max_nodes_to_explore
        self.output_path = output_path
        self.debug = debug

    @classmethod
    def from_args(cls, args=None):
        config = cls()
        if args is None:
            return config
        config.objective = args.objective
        config.algorithm = args.algorithm
        config.default_tile = args.default_tile
        config.max_nodes_to_explore = args.max_nodes
        config.output_path = args.output
        config.debug = args.verbose
        return config

    def __repr__(self):
        return (
            f"SearchConfig(objective={self.objective!r}, algorithm={self.algorithm!r}, "
            f"default_tile={self.default_tile!r}, output_path={self.output_path!r})"
        )
