"""
Rapidly-exploring Random Tree planner, grid and navmesh variants.

RRT is neither optimal nor deterministic; pass a seeded
`numpy.random.Generator` for reproducible runs.
"""

import time
from typing import Callable, List, Optional, Tuple

import numpy as np
from loguru import logger

from .config import DEFAULT_GRID_RRT_CONFIG, DEFAULT_NAVMESH_RRT_CONFIG, RRTConfig
from .funnel import funnel_smooth
from .geometry import euclidean_distance, steer_toward
from .grid import Grid
from .grid_search import build_result
from .types import NavMesh, PlanningResult, Position, as_position

Sampler = Callable[[np.random.Generator], Position]


def grow_tree(grid: Grid, start: Position, goal: Position, sampler: Sampler,
              config: RRTConfig, rng: np.random.Generator
              ) -> Tuple[Optional[List[Position]], List[Position]]:
    """
    Grow a tree from `start` until a node lands within reach of `goal`.

    Args:
        grid: Occupancy grid
        start: Tree root
        goal: Target cell
        sampler: Draws a target point; called only when the goal is not sampled
        config: Iteration budget, step size, goal threshold and goal bias
        rng: Random generator

    Returns:
        (branch, explored): root-to-goal positions (None on failure) and the
        tree nodes in insertion order, root excluded
    """
    config.validate()
    positions = [start]
    parents = [-1]
    # Preallocated coordinates for vectorised nearest-node lookups
    coords = np.empty((config.max_iterations + 1, 2), dtype=float)
    coords[0] = start
    explored: List[Position] = []

    def branch_to(index: int) -> List[Position]:
        branch = []
        while index != -1:
            branch.append(positions[index])
            index = parents[index]
        branch.reverse()
        return branch

    if start == goal:
        return [start], explored

    for _ in range(config.max_iterations):
        if rng.random() < config.goal_bias:
            target = goal
        else:
            target = sampler(rng)

        size = len(positions)
        deltas = coords[:size] - np.asarray(target, dtype=float)
        nearest = int(np.argmin(np.einsum("ij,ij->i", deltas, deltas)))
        nearest_pos = positions[nearest]

        candidate = steer_toward(nearest_pos, target, config.step_size)
        if candidate is None or not grid.is_free(candidate):
            continue
        if not grid.line_of_sight(nearest_pos, candidate):
            continue

        positions.append(candidate)
        parents.append(nearest)
        coords[size] = candidate
        explored.append(candidate)

        if (euclidean_distance(candidate, goal) < config.goal_threshold
                and grid.line_of_sight(candidate, goal)):
            branch = branch_to(size)
            if branch[-1] != goal:
                branch.append(goal)
            return branch, explored

    return None, explored


def rrt(grid: Grid, start, goal, config: RRTConfig = DEFAULT_GRID_RRT_CONFIG,
        rng: Optional[np.random.Generator] = None) -> Optional[PlanningResult]:
    """
    RRT over the grid, sampling cells uniformly with a goal bias.

    Returns:
        PlanningResult whose `waypoints` is the tree branch, or None when the
        iteration budget runs out
    """
    started = time.perf_counter()
    start, goal = as_position(start), as_position(goal)
    rng = rng if rng is not None else np.random.default_rng()

    def sample_cell(generator):
        return Position(int(generator.integers(grid.rows)), int(generator.integers(grid.cols)))

    branch, explored = grow_tree(grid, start, goal, sample_cell, config, rng)
    if branch is None:
        logger.debug(f"[rrt] no path after {config.max_iterations} iterations")
        return None

    result = build_result("rrt", started, branch, explored)
    logger.debug(f"[rrt] path found: {result.metrics.path_length} cells, tree={len(explored)}")
    return result


def navmesh_rrt(grid: Grid, navmesh: NavMesh, start, goal,
                config: RRTConfig = DEFAULT_NAVMESH_RRT_CONFIG,
                rng: Optional[np.random.Generator] = None) -> Optional[PlanningResult]:
    """
    RRT that samples waypoint positions instead of arbitrary cells.

    The tree branch is funnel-smoothed before densification.
    """
    started = time.perf_counter()
    start, goal = as_position(start), as_position(goal)
    rng = rng if rng is not None else np.random.default_rng()
    waypoints = navmesh.waypoints

    def sample_waypoint(generator):
        if not waypoints:
            return goal
        return waypoints[int(generator.integers(len(waypoints)))].position

    branch, explored = grow_tree(grid, start, goal, sample_waypoint, config, rng)
    if branch is None:
        logger.debug(f"[navmesh-rrt] no path after {config.max_iterations} iterations")
        return None

    smoothed = funnel_smooth(branch, grid)
    result = build_result("rrt", started, smoothed, explored)
    logger.debug(f"[navmesh-rrt] path found: {result.metrics.path_length} cells, tree={len(explored)}")
    return result
