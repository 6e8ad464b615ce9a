"""
Planning module: picks the best route among all golden point pairs.
"""

from .route_planner import Objective, PlanningStats, RoutePlan, RoutePlanner

__all__ = [
    "Objective",
    "PlanningStats",
    "RoutePlan",
    "RoutePlanner",
]
