"""
All-pairs route planning between golden points.

The planner builds the grid graph once, runs the pathfinder for every ordered
pair of distinct golden points, scores each path that exists and keeps the
best one under an explicit objective.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from ..common import Cell
from ..graph.grid_graph import GridGraph, build_grid_graph
from ..level_data import GridMap
from ..pathfinding import PathfindingAlgorithm, PathfindingEngine
from ..scoring import PathScorer

logger = logging.getLogger(__name__)


class Objective(Enum):
    """Which direction of the path score the planner optimises."""

    MAXIMIZE = "max"  # Prefer bonus-rich, cheap paths
    MINIMIZE = "min"  # Prefer the lowest score

    def is_better(self, candidate: float, incumbent: Optional[float]) -> bool:
        """Strict comparison: ties keep the incumbent."""
        if incumbent is None:
            return True
        if self is Objective.MAXIMIZE:
            return candidate > incumbent
        return candidate < incumbent


@dataclass
class RoutePlan:
    """Best route found between two golden points."""

    start: Cell
    goal: Cell
    path: List[Cell]
    score: int
    total_cost: float
    nodes_explored: int = 0


@dataclass
class PlanningStats:
    """Counters for one planning run."""

    pairs_tried: int = 0
    pairs_connected: int = 0
    nodes_explored: int = 0
    unreachable: List[Tuple[Cell, Cell]] = field(default_factory=list)


class RoutePlanner:
    """
    Finds the best-scoring path among all ordered golden point pairs.

    Pairs are tried in golden point input order (start outer, goal inner).
    Pairs without a connecting path are skipped; they never abort the run.
    """

    def __init__(
        self,
        grid_map: GridMap,
        objective: Objective = Objective.MAXIMIZE,
        algorithm: PathfindingAlgorithm = PathfindingAlgorithm.A_STAR,
        engine: Optional[PathfindingEngine] = None,
        graph: Optional[GridGraph] = None,
    ):
        self.grid_map = grid_map
        self.objective = objective
        self.algorithm = algorithm
        self.engine = engine or PathfindingEngine()
        self.graph = graph if graph is not None else build_grid_graph(grid_map)
        self.scorer = PathScorer(grid_map.silver_points, grid_map.cost_fn)
        self.stats = PlanningStats()

    @classmethod
    def from_config(cls, grid_map: GridMap, config) -> "RoutePlanner":
        """Create a planner from a SearchConfig."""
        algorithm = (
            PathfindingAlgorithm.DIJKSTRA
            if config.algorithm == "dijkstra"
            else PathfindingAlgorithm.A_STAR
        )
        engine = PathfindingEngine(
            heuristic_weight=config.heuristic_weight,
            max_nodes_to_explore=config.max_nodes_to_explore,
        )
        return cls(
            grid_map,
            objective=Objective(config.objective),
            algorithm=algorithm,
            engine=engine,
        )

    def golden_pairs(self) -> Iterator[Tuple[Cell, Cell]]:
        """Ordered pairs of distinct golden points, in input order."""
        golden = list(dict.fromkeys(self.grid_map.golden_points))
        for start in golden:
            for goal in golden:
                if start != goal:
                    yield start, goal

    def plan_pair(self, start: Cell, goal: Cell) -> Optional[RoutePlan]:
        """Search and score a single pair; None when it is not connected."""
        result = self.engine.find_shortest_path(
            self.graph, start, goal, self.grid_map.cost_fn, algorithm=self.algorithm
        )
        self.stats.pairs_tried += 1
        self.stats.nodes_explored += result.nodes_explored

        if not result.success:
            self.stats.unreachable.append((start, goal))
            return None

        self.stats.pairs_connected += 1
        return RoutePlan(
            start=start,
            goal=goal,
            path=result.path,
            score=self.scorer.score(result.path),
            total_cost=result.total_cost,
            nodes_explored=result.nodes_explored,
        )

    def plan(self) -> Optional[RoutePlan]:
        """
        Run the search over every golden pair.

        Returns:
            The best RoutePlan under the objective, or None if no pair connects
        """
        self.stats = PlanningStats()
        best: Optional[RoutePlan] = None

        for start, goal in self.golden_pairs():
            candidate = self.plan_pair(start, goal)
            if candidate is None:
                continue
            if self.objective.is_better(candidate.score, best.score if best else None):
                best = candidate

        if best is None:
            logger.info(
                "No path found between the golden points (%d pairs tried)",
                self.stats.pairs_tried,
            )
        else:
            logger.info(
                "Best route %s -> %s: score=%d cost=%s length=%d (%d/%d pairs connected)",
                best.start, best.goal, best.score, best.total_cost, len(best.path),
                self.stats.pairs_connected, self.stats.pairs_tried,
            )
            summary = self.scorer.breakdown(best.path)
            logger.debug(
                "Best route breakdown: bonus=%d cost=%d revisit_penalty=%d revisits=%d",
                summary["bonus"], summary["cost"],
                summary["revisit_penalty"], summary["revisits"],
            )
        return best
