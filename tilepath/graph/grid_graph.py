"""
Grid graph construction from per-tile movement rules.

Every cell's tile type lists the relative offsets a unit may move along. The
builder turns those rules into a directed graph over grid cells: the
adjacency mapping holds, for every non-golden cell, the in-bounds non-golden
neighbors in the tile's offset order. Golden cells are route endpoints and
never transit nodes, so they get no adjacency entry; the graph keeps their
departure and arrival links separately and hands them to the search only for
the current start and goal.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

import networkx as nx

from ..common import Cell, as_cell
from ..errors import InvalidCoordinate
from ..tiles import MovementRuleTable

logger = logging.getLogger(__name__)


class GridGraph:
    """
    Read-only directed graph over grid cells.

    Attributes:
        width, height: Grid dimensions
        adjacency: Non-golden cell -> ordered legal non-golden neighbors
        golden_points: Endpoint cells, excluded from transit
        departures: Golden cell -> ordered non-golden neighbors it can step to
        arrivals: Golden cell -> non-golden cells that can step onto it
        isolated: Cells whose tile type is not registered (no edges at all)
        heuristic_weight: Largest factor k such that k * Manhattan distance
            never overestimates the remaining path cost
    """

    def __init__(
        self,
        width: int,
        height: int,
        links: Dict[Cell, List[Cell]],
        golden_points: Iterable[Cell],
        isolated: Iterable[Cell] = (),
        heuristic_weight: float = 1.0,
    ):
        self.width = width
        self.height = height
        self.golden_points: FrozenSet[Cell] = frozenset(golden_points)
        self.isolated: FrozenSet[Cell] = frozenset(isolated)
        self.heuristic_weight = heuristic_weight

        # Every in-bounds link in offset order, golden targets included.
        self._links = links

        self.adjacency: Dict[Cell, List[Cell]] = {}
        self.departures: Dict[Cell, List[Cell]] = {}
        arrivals: Dict[Cell, set] = {cell: set() for cell in self.golden_points}

        for cell, targets in links.items():
            transit = [t for t in targets if t not in self.golden_points]
            if cell in self.golden_points:
                self.departures[cell] = transit
                continue
            self.adjacency[cell] = transit
            for target in targets:
                if target in self.golden_points:
                    arrivals[target].add(cell)

        self.arrivals: Dict[Cell, FrozenSet[Cell]] = {
            cell: frozenset(sources) for cell, sources in arrivals.items()
        }

    def in_bounds(self, cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def check_cell(self, cell) -> Cell:
        cell = as_cell(cell)
        if not self.in_bounds(cell):
            raise InvalidCoordinate(cell, self.width, self.height)
        return cell

    def successors(self, cell: Cell, start: Cell, goal: Cell) -> List[Cell]:
        """
        Cells the search may step to from ``cell`` while routing start -> goal.

        Golden cells only leave when they are the start, and are only entered
        when they are the goal. A golden cell never steps directly onto another
        golden cell.
        """
        if cell in self.golden_points:
            if cell != start:
                return []
            return self.departures.get(cell, [])

        if goal in self.golden_points and cell in self.arrivals.get(goal, ()):
            return [
                t for t in self._links.get(cell, [])
                if t not in self.golden_points or t == goal
            ]
        return self.adjacency.get(cell, [])

    @property
    def num_edges(self) -> int:
        return sum(len(targets) for targets in self.adjacency.values())

    def to_networkx(
        self, cost_fn, start: Optional[Cell] = None, goal: Optional[Cell] = None
    ) -> nx.DiGraph:
        """
        Export the transit graph as a networkx DiGraph.

        Edge weights are the cost of the destination cell. When start/goal are
        given, the start's departures and the goal's arrivals are added too.
        """
        graph = nx.DiGraph()
        for cell in self.adjacency:
            graph.add_node(cell, golden=False)
        for cell in self.golden_points:
            graph.add_node(cell, golden=True)

        for cell, targets in self.adjacency.items():
            for target in targets:
                graph.add_edge(cell, target, weight=cost_fn(target))

        if start is not None and start in self.golden_points:
            for target in self.departures.get(start, []):
                graph.add_edge(start, target, weight=cost_fn(target))
        if goal is not None and goal in self.golden_points:
            for source in self.arrivals.get(goal, ()):
                graph.add_edge(source, goal, weight=cost_fn(goal))
        return graph

    def __repr__(self):
        return (
            f"GridGraph({self.width}x{self.height}, nodes={len(self.adjacency)}, "
            f"edges={self.num_edges}, golden={len(self.golden_points)})"
        )


class GridGraphBuilder:
    """Builds a GridGraph from a tile assignment and a movement rule table."""

    def __init__(self, rules: MovementRuleTable):
        self.rules = rules

    def build(
        self,
        width: int,
        height: int,
        tile_assignment: Mapping[Cell, str],
        golden_points: Iterable[Cell],
    ) -> GridGraph:
        """
        Construct the grid graph.

        Args:
            width: Grid width in cells
            height: Grid height in cells
            tile_assignment: Tile id per cell; cells without an entry are isolated
            golden_points: Endpoint cells, excluded from transit

        Returns:
            GridGraph with adjacency for every non-golden cell

        Raises:
            InvalidCoordinate: If a golden point or an assignment key lies outside the grid
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        def in_bounds(cell):
            return 0 <= cell[0] < width and 0 <= cell[1] < height

        golden = []
        for point in golden_points:
            cell = as_cell(point)
            if not in_bounds(cell):
                raise InvalidCoordinate(cell, width, height)
            golden.append(cell)

        for cell in tile_assignment:
            if not in_bounds(cell):
                raise InvalidCoordinate(cell, width, height)

        isolated = set()
        for x in range(width):
            for y in range(height):
                tile_id = tile_assignment.get(Cell(x, y))
                if tile_id is None or tile_id not in self.rules:
                    isolated.add(Cell(x, y))
        if isolated:
            logger.debug("%d cells have no registered tile and stay isolated", len(isolated))

        links: Dict[Cell, List[Cell]] = {}
        used_tiles = set()
        for x in range(width):
            for y in range(height):
                cell = Cell(x, y)
                if cell in isolated:
                    links[cell] = []
                    continue
                tile_id = tile_assignment[cell]
                used_tiles.add(tile_id)
                targets = []
                for offset in self.rules.offsets_of(tile_id):
                    target = cell.offset(offset)
                    if in_bounds(target) and target not in isolated:
                        targets.append(target)
                links[cell] = targets

        graph = GridGraph(
            width,
            height,
            links,
            golden,
            isolated=isolated,
            heuristic_weight=self._heuristic_weight(used_tiles),
        )
        logger.debug("Built %r", graph)
        return graph

    def build_from_map(self, grid_map) -> GridGraph:
        """Build the graph for a GridMap."""
        return self.build(
            grid_map.width,
            grid_map.height,
            grid_map.tile_assignment(),
            grid_map.golden_points,
        )

    def _heuristic_weight(self, tile_ids) -> float:
        """
        Scale for the Manhattan heuristic.

        One step costs at least the cheapest tile and shortens the Manhattan
        distance by at most the longest step span, so min_cost / max_span keeps
        the estimate admissible. Unit-cost cardinal grids get exactly 1.
        """
        tile_types = [self.rules.get(tile_id) for tile_id in tile_ids]
        spans = [t.max_step_span for t in tile_types if t.offsets]
        if not tile_types or not spans:
            return 0.0
        min_cost = min(t.cost for t in tile_types)
        return min_cost / max(spans)


def build_grid_graph(grid_map) -> GridGraph:
    """Shortcut: build the graph for a GridMap with its own rule table."""
    return GridGraphBuilder(grid_map.rules).build_from_map(grid_map)

