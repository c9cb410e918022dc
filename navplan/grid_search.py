"""
Grid search algorithms: Dijkstra, Greedy Best-First, A*, JPS and Theta*.

All five share the loop in `search.run_search` and differ only in priority,
relaxation rule and neighbour generation.
"""

import time
from typing import List, Optional

from loguru import logger

from .geometry import densify_path, euclidean_distance, manhattan_distance, polyline_length
from .grid import Grid
from .jump_point import identify_successors
from .search import SearchState, relax_first_reach, relax_through, run_search
from .types import PlanningMetrics, PlanningResult, Position, as_position


def build_result(algorithm: str, started: float, waypoints: List[Position],
                 explored: list, path_cost: Optional[float] = None,
                 path: Optional[List[Position]] = None) -> PlanningResult:
    """
    Assemble a PlanningResult and stamp the elapsed time.

    Args:
        algorithm: Algorithm identifier
        started: time.perf_counter() value at query start
        waypoints: Sparse polyline produced by the planner
        explored: Nodes in visitation order
        path_cost: Reported cost; defaults to the polyline length
        path: Dense path; defaults to the densified polyline
    """
    if path is None:
        path = densify_path(waypoints)
    if path_cost is None:
        path_cost = polyline_length(waypoints)
    metrics = PlanningMetrics(
        computation_time_ms=(time.perf_counter() - started) * 1000.0,
        nodes_explored=len(explored),
        path_cost=path_cost,
        path_length=len(path),
    )
    return PlanningResult(
        path=path,
        explored_nodes=explored,
        metrics=metrics,
        waypoints=list(waypoints),
        algorithm=algorithm,
    )


def _unit_steps(grid: Grid, diagonal: bool = False):
    def successors(node):
        return [(n, euclidean_distance(node, n)) for n in grid.neighbors(node, diagonal)]
    return successors


def _finish(algorithm, started, reached, state: SearchState, goal, **kwargs):
    if not reached:
        logger.debug(f"[{algorithm}] no path, explored {len(state.explored)} nodes")
        return None
    waypoints = state.reconstruct(goal)
    result = build_result(algorithm, started, waypoints, state.explored, **kwargs)
    logger.debug(
        f"[{algorithm}] path found: {result.metrics.path_length} cells, "
        f"cost={result.metrics.path_cost:.2f}, explored={result.metrics.nodes_explored}"
    )
    return result


def dijkstra(grid: Grid, start, goal) -> Optional[PlanningResult]:
    """
    Dijkstra's algorithm on the 4-connected grid.

    Returns:
        PlanningResult, or None if no path exists
    """
    started = time.perf_counter()
    start, goal = as_position(start), as_position(goal)
    reached, state = run_search(
        start, goal, _unit_steps(grid), priority=lambda node, g: g
    )
    return _finish("dijkstra", started, reached, state, goal)


def greedy_best_first(grid: Grid, start, goal) -> Optional[PlanningResult]:
    """
    Greedy Best-First search ordered by Manhattan distance only.

    A node keeps the first predecessor that reaches it, so the result is not
    cost-optimal. The reported cost is the step count.
    """
    started = time.perf_counter()
    start, goal = as_position(start), as_position(goal)
    reached, state = run_search(
        start, goal, _unit_steps(grid),
        priority=lambda node, g: manhattan_distance(node, goal),
        relax=relax_first_reach,
    )
    steps = len(state.reconstruct(goal)) - 1 if reached else 0
    return _finish("greedy", started, reached, state, goal, path_cost=float(steps))


def astar(grid: Grid, start, goal) -> Optional[PlanningResult]:
    """
    A* on the 4-connected grid with the Manhattan heuristic.

    Returns:
        PlanningResult, or None if no path exists
    """
    started = time.perf_counter()
    start, goal = as_position(start), as_position(goal)
    reached, state = run_search(
        start, goal, _unit_steps(grid),
        priority=lambda node, g: g + manhattan_distance(node, goal),
    )
    return _finish("astar", started, reached, state, goal)


def jps(grid: Grid, start, goal) -> Optional[PlanningResult]:
    """
    Jump Point Search.

    Expands jump points instead of single cells. `waypoints` holds the jump
    points; `path` is the cell sequence between them.
    """
    started = time.perf_counter()
    start, goal = as_position(start), as_position(goal)
    reached, state = run_search(
        start, goal,
        lambda node: identify_successors(grid, node, goal),
        priority=lambda node, g: g + euclidean_distance(node, goal),
    )
    return _finish("jps", started, reached, state, goal)


def theta_star(grid: Grid, start, goal) -> Optional[PlanningResult]:
    """
    Theta* any-angle search on the 8-connected grid.

    When the current node's predecessor can see a neighbour directly, the
    neighbour is linked to that predecessor, skipping the current node.
    """
    started = time.perf_counter()
    start, goal = as_position(start), as_position(goal)

    def relax_any_angle(state: SearchState, current, neighbor, step_cost):
        parent = state.came_from.get(current)
        if parent is not None and grid.line_of_sight(parent, neighbor):
            return relax_through(state, parent, neighbor, euclidean_distance(parent, neighbor))
        return relax_through(state, current, neighbor, step_cost)

    reached, state = run_search(
        start, goal, _unit_steps(grid, diagonal=True),
        priority=lambda node, g: g + euclidean_distance(node, goal),
        relax=relax_any_angle,
    )
    return _finish("theta", started, reached, state, goal)
