"""
Tests for the A* pathfinding engine and the Dijkstra reference search.
"""

import unittest

import networkx as nx

from tilepath.common import Cell, manhattan_distance
from tilepath.errors import InvalidCoordinate
from tilepath.graph import build_grid_graph
from tilepath.level_data import GridMap
from tilepath.pathfinding import PathfindingAlgorithm, PathfindingEngine, PathResult
from tilepath.tiles import MovementRuleTable, TileType


def uniform_map(width, height, tile, golden_points=()):
    rules = MovementRuleTable([tile])
    return GridMap.uniform(width, height, tile.tile_id, rules, golden_points=golden_points)


def mixed_cost_map(golden_points):
    """6x5 map mixing a cheap 4-connected tile with pricier diagonal tiles."""
    rules = MovementRuleTable([
        TileType.from_catalog("C3", 1),
        TileType.from_catalog("7", 2),
        TileType.from_catalog("F", 5),
    ])
    grid_map = GridMap.uniform(6, 5, "C3", rules, golden_points=golden_points)
    tile_ids = ["C3", "7", "F"]
    for x in range(6):
        for y in range(5):
            grid_map.set_tile((x, y), tile_ids[(x * 7 + y * 3) % 3])
    return grid_map


class TestPathfindingEngine(unittest.TestCase):
    """A* behaviour on small hand-checked grids."""

    def setUp(self):
        self.engine = PathfindingEngine()

    def _search(self, grid_map, start, goal, algorithm=PathfindingAlgorithm.A_STAR):
        graph = build_grid_graph(grid_map)
        return self.engine.find_shortest_path(
            graph, start, goal, grid_map.cost_fn, algorithm=algorithm
        )

    def test_diagonal_tile_reaches_far_corner(self):
        grid_map = uniform_map(3, 3, TileType.from_catalog("7", 1), [(0, 0), (2, 2)])
        result = self._search(grid_map, Cell(0, 0), Cell(2, 2))

        self.assertTrue(result.success)
        self.assertEqual(result.path, [Cell(0, 0), Cell(1, 1), Cell(2, 2)])
        self.assertEqual(result.total_cost, 2)

    def test_horizontal_tile_cannot_change_rows(self):
        grid_map = uniform_map(3, 3, TileType.from_catalog("3", 1), [(0, 0), (2, 2)])
        result = self._search(grid_map, Cell(0, 0), Cell(2, 2))

        self.assertFalse(result.success)
        self.assertEqual(result.path, [])
        self.assertEqual(result.total_cost, float("inf"))

    def test_four_connected_path_length_is_manhattan(self):
        tile = TileType.from_catalog("C3", 1)
        pairs = [
            (Cell(0, 0), Cell(4, 3)),
            (Cell(4, 0), Cell(0, 3)),
            (Cell(2, 1), Cell(2, 3)),
            (Cell(0, 2), Cell(3, 2)),
        ]
        for start, goal in pairs:
            grid_map = uniform_map(5, 4, tile, [start, goal])
            with self.subTest(start=start, goal=goal):
                result = self._search(grid_map, start, goal)
                self.assertTrue(result.success)
                self.assertEqual(len(result.path) - 1, manhattan_distance(start, goal))
                self.assertEqual(result.total_cost, manhattan_distance(start, goal))

    def test_interior_endpoints(self):
        grid_map = uniform_map(3, 3, TileType.from_catalog("C3", 1))
        result = self._search(grid_map, Cell(0, 1), Cell(2, 1))
        self.assertEqual(result.path, [Cell(0, 1), Cell(1, 1), Cell(2, 1)])

    def test_path_steps_follow_graph_edges(self):
        grid_map = mixed_cost_map([(0, 0), (5, 4)])
        graph = build_grid_graph(grid_map)
        start, goal = Cell(0, 0), Cell(5, 4)
        result = self.engine.find_shortest_path(graph, start, goal, grid_map.cost_fn)

        self.assertTrue(result.success)
        self.assertEqual(result.path[0], start)
        self.assertEqual(result.path[-1], goal)
        for cell, nxt in zip(result.path, result.path[1:]):
            self.assertIn(nxt, graph.successors(cell, start, goal))
        self.assertEqual(
            result.total_cost, sum(grid_map.tile_cost(c) for c in result.path[1:])
        )

    def test_repeated_searches_return_same_path(self):
        grid_map = uniform_map(5, 5, TileType.from_catalog("C3", 1), [(0, 0), (4, 4)])
        graph = build_grid_graph(grid_map)
        first = self.engine.find_shortest_path(graph, Cell(0, 0), Cell(4, 4), grid_map.cost_fn)
        second = self.engine.find_shortest_path(graph, Cell(0, 0), Cell(4, 4), grid_map.cost_fn)
        self.assertEqual(first.path, second.path)
        self.assertEqual(first.total_cost, second.total_cost)

    def test_start_equals_goal(self):
        grid_map = uniform_map(3, 3, TileType.from_catalog("C3", 1), [(1, 1)])
        result = self._search(grid_map, Cell(1, 1), Cell(1, 1))
        self.assertTrue(result.success)
        self.assertEqual(result.path, [Cell(1, 1)])
        self.assertEqual(result.total_cost, 0)

    def test_out_of_bounds_endpoint(self):
        grid_map = uniform_map(3, 3, TileType.from_catalog("C3", 1))
        with self.assertRaises(InvalidCoordinate):
            self._search(grid_map, Cell(0, 0), Cell(3, 3))
        with self.assertRaises(InvalidCoordinate):
            self._search(grid_map, Cell(-1, 0), Cell(2, 2))

    def test_adjacent_golden_points_are_not_connected(self):
        # Golden cells are never transit cells, and never step onto each other
        grid_map = uniform_map(2, 1, TileType.from_catalog("C3", 1), [(0, 0), (1, 0)])
        self.assertFalse(self._search(grid_map, Cell(0, 0), Cell(1, 0)).success)

    def test_golden_point_boxed_in_by_golden_points(self):
        golden = [(0, 0), (1, 0), (0, 1), (2, 2)]
        grid_map = uniform_map(3, 3, TileType.from_catalog("C3", 1), golden)
        self.assertFalse(self._search(grid_map, Cell(0, 0), Cell(2, 2)).success)
        # The far corner can still reach a golden point next to the boxed one
        self.assertTrue(self._search(grid_map, Cell(2, 2), Cell(1, 0)).success)

    def test_golden_point_is_not_a_transit_cell(self):
        # Row 0 is a corridor; the middle golden point blocks it
        grid_map = uniform_map(5, 1, TileType.from_catalog("C3", 1), [(0, 0), (2, 0), (4, 0)])
        self.assertFalse(self._search(grid_map, Cell(0, 0), Cell(4, 0)).success)
        self.assertTrue(self._search(grid_map, Cell(0, 0), Cell(2, 0)).success)

    def test_zero_cost_tiles(self):
        grid_map = uniform_map(4, 4, TileType.from_catalog("C3", 0), [(0, 0), (3, 3)])
        result = self._search(grid_map, Cell(0, 0), Cell(3, 3))
        self.assertTrue(result.success)
        self.assertEqual(result.total_cost, 0)

    def test_max_nodes_to_explore(self):
        engine = PathfindingEngine(max_nodes_to_explore=1)
        grid_map = uniform_map(5, 5, TileType.from_catalog("C3", 1), [(0, 0), (4, 4)])
        graph = build_grid_graph(grid_map)
        result = engine.find_shortest_path(graph, Cell(0, 0), Cell(4, 4), grid_map.cost_fn)
        self.assertFalse(result.success)
        self.assertEqual(result.nodes_explored, 1)

    def test_not_found_result(self):
        result = PathResult.not_found(7)
        self.assertFalse(result.success)
        self.assertEqual(len(result), 0)
        self.assertEqual(result.nodes_explored, 7)


class TestReExpansion(unittest.TestCase):
    """
    A cell first reached by the costlier route is replaced once a cheaper
    route to it turns up.

        S H # G      S, G: golden, H: cost 3, #: no registered tile
        a Y # c      every other cell costs 1
        # d e f

    H and a tie on f = 5; H pops first and reaches Y with g = 4. Popping a
    then lowers Y to g = 2. The old Y entry (f = 7) pops before the goal and
    must be skipped, and the route must follow the cheaper parent.
    """

    def setUp(self):
        rules = MovementRuleTable([
            TileType.from_catalog("C3", 1),
            TileType.from_directions("H", 3, ["R", "D"]),
        ])
        self.grid_map = GridMap.uniform(4, 3, "C3", rules, golden_points=[(0, 0), (3, 0)])
        self.grid_map.set_tile((1, 0), "H")
        for wall in [(2, 0), (2, 1), (0, 2)]:
            self.grid_map.set_tile(wall, "#")
        self.graph = build_grid_graph(self.grid_map)

    def test_cheaper_parent_replaces_first_discovery(self):
        result = PathfindingEngine().find_shortest_path(
            self.graph, Cell(0, 0), Cell(3, 0), self.grid_map.cost_fn
        )

        self.assertTrue(result.success)
        self.assertEqual(result.path, [
            Cell(0, 0), Cell(0, 1), Cell(1, 1), Cell(1, 2),
            Cell(2, 2), Cell(3, 2), Cell(3, 1), Cell(3, 0),
        ])
        self.assertEqual(result.total_cost, 7)

    def test_stale_entry_is_not_expanded(self):
        result = PathfindingEngine().find_shortest_path(
            self.graph, Cell(0, 0), Cell(3, 0), self.grid_map.cost_fn
        )
        # S, H, a, Y, d, e, f, c, G; the superseded Y entry is not counted
        self.assertEqual(result.nodes_explored, 9)

    def test_matches_dijkstra(self):
        dijkstra = PathfindingEngine().find_shortest_path(
            self.graph, Cell(0, 0), Cell(3, 0), self.grid_map.cost_fn,
            algorithm=PathfindingAlgorithm.DIJKSTRA,
        )
        self.assertEqual(dijkstra.total_cost, 7)


class TestOptimality(unittest.TestCase):
    """A* costs against the networkx references on a mixed-cost grid."""

    def setUp(self):
        self.golden = [Cell(0, 0), Cell(5, 4), Cell(5, 0), Cell(0, 4), Cell(3, 2)]
        self.grid_map = mixed_cost_map(self.golden)
        self.graph = build_grid_graph(self.grid_map)
        self.engine = PathfindingEngine()

    def _pairs(self):
        for start in self.golden:
            for goal in self.golden:
                if start != goal:
                    yield start, goal

    def test_a_star_matches_dijkstra_cost(self):
        for start, goal in self._pairs():
            with self.subTest(start=start, goal=goal):
                a_star = self.engine.find_shortest_path(
                    self.graph, start, goal, self.grid_map.cost_fn
                )
                dijkstra = self.engine.find_shortest_path(
                    self.graph, start, goal, self.grid_map.cost_fn,
                    algorithm=PathfindingAlgorithm.DIJKSTRA,
                )
                self.assertEqual(a_star.success, dijkstra.success)
                self.assertEqual(a_star.total_cost, dijkstra.total_cost)

    def test_a_star_never_costlier_than_fewest_steps_path(self):
        for start, goal in self._pairs():
            nx_graph = self.graph.to_networkx(self.grid_map.cost_fn, start=start, goal=goal)
            try:
                bfs_path = nx.shortest_path(nx_graph, start, goal)
            except nx.NetworkXNoPath:
                continue
            bfs_cost = sum(self.grid_map.tile_cost(c) for c in bfs_path[1:])
            with self.subTest(start=start, goal=goal):
                result = self.engine.find_shortest_path(
                    self.graph, start, goal, self.grid_map.cost_fn
                )
                self.assertTrue(result.success)
                self.assertLessEqual(result.total_cost, bfs_cost)


if __name__ == "__main__":
    unittest.main()
