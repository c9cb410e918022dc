"""
Navmesh search: Dijkstra, Greedy Best-First and A* over the waypoint graph.

JPS and Theta* need grid topology and have no navmesh counterpart; the
runner maps them to `navmesh_astar`.
"""

import time
from typing import Callable, Optional

from loguru import logger

from .funnel import funnel_smooth
from .geometry import euclidean_distance
from .grid import Grid
from .grid_search import build_result
from .navmesh import nearest_waypoint
from .search import Relax, relax_first_reach, relax_through, run_search
from .types import NavMesh, PlanningResult, as_position

# (waypoint position, g, goal waypoint position) -> priority
WaypointPriority = Callable[[tuple, float, tuple], float]


def _search_navmesh(algorithm: str, grid: Grid, navmesh: NavMesh, start, goal,
                    priority: WaypointPriority,
                    relax: Relax = relax_through) -> Optional[PlanningResult]:
    started = time.perf_counter()
    start, goal = as_position(start), as_position(goal)

    start_waypoint = nearest_waypoint(navmesh, grid, start)
    goal_waypoint = nearest_waypoint(navmesh, grid, goal)
    if start_waypoint is None or goal_waypoint is None:
        logger.debug(f"[navmesh-{algorithm}] no visible waypoint for start={start} or goal={goal}")
        return None

    waypoints = navmesh.waypoints
    adjacency = navmesh.adjacency()
    target = goal_waypoint.position

    reached, state = run_search(
        start_waypoint.id,
        goal_waypoint.id,
        lambda node: adjacency.get(node, ()),
        priority=lambda node, g: priority(waypoints[node].position, g, target),
        relax=relax,
    )
    explored = [waypoints[node] for node in state.explored]

    if not reached:
        logger.debug(f"[navmesh-{algorithm}] no path, explored {len(explored)} waypoints")
        return None

    route = [start] + [waypoints[node].position for node in state.reconstruct(goal_waypoint.id)] + [goal]
    smoothed = funnel_smooth(route, grid)
    result = build_result(algorithm, started, smoothed, explored)
    logger.debug(
        f"[navmesh-{algorithm}] path found: {len(route)} -> {len(smoothed)} points after funnel, "
        f"explored={result.metrics.nodes_explored}"
    )
    return result


def navmesh_dijkstra(grid: Grid, navmesh: NavMesh, start, goal) -> Optional[PlanningResult]:
    """Dijkstra over the waypoint graph (no heuristic)."""
    return _search_navmesh(
        "dijkstra", grid, navmesh, start, goal,
        priority=lambda pos, g, target: g,
    )


def navmesh_greedy(grid: Grid, navmesh: NavMesh, start, goal) -> Optional[PlanningResult]:
    """Greedy Best-First over the waypoint graph, ordered by distance to the goal waypoint."""
    return _search_navmesh(
        "greedy", grid, navmesh, start, goal,
        priority=lambda pos, g, target: euclidean_distance(pos, target),
        relax=relax_first_reach,
    )


def navmesh_astar(grid: Grid, navmesh: NavMesh, start, goal) -> Optional[PlanningResult]:
    """
    A* over the waypoint graph with the Euclidean heuristic.

    Args:
        grid: Occupancy grid the navmesh was built from
        navmesh: Waypoint graph
        start: Start cell (need not be a waypoint)
        goal: Goal cell (need not be a waypoint)

    Returns:
        PlanningResult with the funnel-smoothed route in `waypoints`, or None
    """
    return _search_navmesh(
        "astar", grid, navmesh, start, goal,
        priority=lambda pos, g, target: g + euclidean_distance(pos, target),
    )
