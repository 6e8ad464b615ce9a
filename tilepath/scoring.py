"""
Path scoring with a revisit penalty.
"""

from collections import Counter
from typing import Callable, Dict, Iterable, Mapping

from .common import Cell


class PathScorer:
    """
    Scores a path as collected silver bonuses minus movement costs.

    Walking the path in order, each cell:
    - adds its silver bonus the first time the path reaches it (once per path)
    - subtracts its tile cost on the first visit
    - subtracts twice its tile cost on every later visit

    Every cell of the path is charged, the start included. Visit counts are
    local to one call. Higher scores are better bonuses, lower scores are
    costlier paths; which one the planner prefers is its own setting.
    """

    def __init__(self, silver_points: Mapping[Cell, int], cost_fn: Callable[[Cell], int]):
        self.silver_points = silver_points
        self.cost_fn = cost_fn

    def score(self, path: Iterable[Cell]) -> int:
        summary = self.breakdown(path)
        return summary["score"]

    def breakdown(self, path: Iterable[Cell]) -> Dict[str, int]:
        """
        Score a path and report its parts.

        Returns:
            Dictionary with ``score``, ``bonus``, ``cost``, ``revisit_penalty``
            (the extra cost charged by repeat visits), ``revisits`` and ``cells``
        """
        visits = Counter()
        bonus = 0
        cost = 0
        revisit_penalty = 0
        cells = 0

        for cell in path:
            cells += 1
            tile_cost = self.cost_fn(cell)
            if visits[cell] == 0:
                bonus += self.silver_points.get(cell, 0)
                cost += tile_cost
            else:
                cost += 2 * tile_cost
                revisit_penalty += tile_cost
            visits[cell] += 1

        return {
            "score": bonus - cost,
            "bonus": bonus,
            "cost": cost,
            "revisit_penalty": revisit_penalty,
            "revisits": sum(count - 1 for count in visits.values()),
            "cells": cells,
        }


def score_path(path, silver_points: Mapping[Cell, int], cost_fn: Callable[[Cell], int]) -> int:
    """Score a path in one call."""
    return PathScorer(silver_points, cost_fn).score(path)
