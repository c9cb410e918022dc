"""
Algorithm dispatch for grid and navmesh planning queries.

This is the only entry point the UI / animation layer needs: hand it a grid,
endpoints and an algorithm name, get back a PlanningResult (or None).
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

from .grid import Grid
from .grid_search import astar, dijkstra, greedy_best_first, jps, theta_star
from .navmesh import build_navmesh
from .navmesh_search import navmesh_astar, navmesh_dijkstra, navmesh_greedy
from .rrt import navmesh_rrt, rrt
from .types import NavMesh, PlanningResult, PositionLike, as_position


class Algorithm(str, Enum):
    ASTAR = "astar"
    DIJKSTRA = "dijkstra"
    GREEDY = "greedy"
    RRT = "rrt"
    JPS = "jps"
    THETA = "theta"


class MapType(str, Enum):
    GRID = "grid"
    NAVMESH = "navmesh"


DISPLAY_NAMES = {
    Algorithm.ASTAR: "A* Search",
    Algorithm.DIJKSTRA: "Dijkstra",
    Algorithm.GREEDY: "Greedy Best-First",
    Algorithm.RRT: "RRT",
    Algorithm.JPS: "JPS (Jump Point)",
    Algorithm.THETA: "Theta*",
}


GRID_PLANNERS = {
    Algorithm.ASTAR: astar,
    Algorithm.DIJKSTRA: dijkstra,
    Algorithm.GREEDY: greedy_best_first,
    Algorithm.RRT: rrt,
    Algorithm.JPS: jps,
    Algorithm.THETA: theta_star,
}

# JPS and Theta* have no sparse-graph analogue; they run navmesh A* instead.
NAVMESH_PLANNERS = {
    Algorithm.ASTAR: navmesh_astar,
    Algorithm.DIJKSTRA: navmesh_dijkstra,
    Algorithm.GREEDY: navmesh_greedy,
    Algorithm.RRT: navmesh_rrt,
    Algorithm.JPS: navmesh_astar,
    Algorithm.THETA: navmesh_astar,
}


def parse_algorithm(algorithm) -> Algorithm:
    """
    Resolve an algorithm identifier.

    Raises:
        ValueError: If the name is not a known algorithm
    """
    try:
        return Algorithm(algorithm)
    except ValueError:
        known = ", ".join(a.value for a in Algorithm)
        raise ValueError(f"Unknown algorithm {algorithm!r}; expected one of: {known}") from None


def _check_endpoints(grid: Grid, start, goal):
    start, goal = as_position(start), as_position(goal)
    grid.require_in_bounds(start, "start")
    grid.require_in_bounds(goal, "goal")
    return start, goal


def plan_grid(grid: Grid, start: PositionLike, goal: PositionLike, algorithm,
              rng: Optional[np.random.Generator] = None) -> Optional[PlanningResult]:
    """
    Plan one query on the grid.

    Args:
        grid: Occupancy grid snapshot
        start: Start cell (row, col)
        goal: Goal cell (row, col)
        algorithm: Algorithm or its name ("astar", "dijkstra", ...)
        rng: Random generator for RRT

    Returns:
        PlanningResult, or None if no path was found

    Raises:
        ValueError: On an unknown algorithm or out-of-bounds endpoints
    """
    algorithm = parse_algorithm(algorithm)
    start, goal = _check_endpoints(grid, start, goal)
    logger.debug(f"Planning {algorithm.value} on {grid!r}: {start} -> {goal}")
    planner = GRID_PLANNERS[algorithm]
    if algorithm is Algorithm.RRT:
        return planner(grid, start, goal, rng=rng)
    return planner(grid, start, goal)


def plan_navmesh(grid: Grid, navmesh: Optional[NavMesh], start: PositionLike,
                 goal: PositionLike, algorithm,
                 rng: Optional[np.random.Generator] = None
                 ) -> Tuple[Optional[PlanningResult], NavMesh]:
    """
    Plan one query on the navmesh derived from `grid`.

    The navmesh is built when missing or when it was built from a different
    obstacle layout, and is returned so the caller can cache it.

    Returns:
        (result or None, navmesh)
    """
    algorithm = parse_algorithm(algorithm)
    start, goal = _check_endpoints(grid, start, goal)

    if navmesh is None or not navmesh.matches(grid):
        if navmesh is not None:
            logger.debug("Obstacle layout changed, rebuilding navmesh")
        navmesh = build_navmesh(grid)

    if algorithm in (Algorithm.JPS, Algorithm.THETA):
        logger.debug(f"{algorithm.value} is not defined on a navmesh, using navmesh A*")
    logger.debug(f"Planning navmesh {algorithm.value} on {grid!r}: {start} -> {goal}")
    planner = NAVMESH_PLANNERS[algorithm]
    if algorithm is Algorithm.RRT:
        result = planner(grid, navmesh, start, goal, rng=rng)
    else:
        result = planner(grid, navmesh, start, goal)
    return result, navmesh


@dataclass
class AgentRequest:
    """One agent's planning query."""
    start: PositionLike
    goal: PositionLike
    algorithm: str = Algorithm.ASTAR.value
    name: Optional[str] = None


def plan_agents(grid: Grid, agents: List[AgentRequest], map_type="grid",
                navmesh: Optional[NavMesh] = None,
                rng: Optional[np.random.Generator] = None
                ) -> Tuple[List[Optional[PlanningResult]], Optional[NavMesh]]:
    """
    Plan every agent independently against the same grid snapshot.

    Agents do not see each other; in navmesh mode one mesh is shared by all
    queries.

    Returns:
        (results in agent order, navmesh or None in grid mode)
    """
    try:
        map_type = MapType(map_type)
    except ValueError:
        raise ValueError(f"Unknown map type {map_type!r}; expected 'grid' or 'navmesh'") from None

    results: List[Optional[PlanningResult]] = []
    for agent in agents:
        if map_type is MapType.NAVMESH:
            result, navmesh = plan_navmesh(grid, navmesh, agent.start, agent.goal, agent.algorithm, rng=rng)
        else:
            result = plan_grid(grid, agent.start, agent.goal, agent.algorithm, rng=rng)
        if result is None:
            logger.info(f"No path found for agent {agent.name or len(results)} ({agent.algorithm})")
        results.append(result)

    return results, navmesh if map_type is MapType.NAVMESH else None
