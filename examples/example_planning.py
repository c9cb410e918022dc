#!/usr/bin/env python3
"""
Example: Planning the same query with every algorithm.

This demonstrates how to build a grid, plan on it directly and on its
navmesh, and read back paths and metrics.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from navplan import (
    Algorithm,
    Grid,
    DISPLAY_NAMES,
    plan_grid,
    plan_navmesh,
)
import numpy as np


def planning_example(rows: int = 20, cols: int = 30, seed: int = 0):
    """Example of comparing planners on a walled grid."""
    print(f"Building {rows}x{cols} grid...")

    # A wall across the middle with a single gap near the right edge
    wall = [(rows // 2, col) for col in range(cols - 3)]
    grid = Grid.from_obstacles(rows, cols, wall)
    start, goal = (2, 2), (rows - 3, 2)
    print(f"  Obstacles: {int(grid.occupancy.sum())}")
    print(f"  Start: {start}  Goal: {goal}")

    rng = np.random.default_rng(seed)

    # Grid planners
    print("\nGrid planners:")
    for algorithm in Algorithm:
        result = plan_grid(grid, start, goal, algorithm, rng=rng)
        name = DISPLAY_NAMES[algorithm]
        if result is None:
            print(f"  {name:<20} no path found")
            continue
        m = result.metrics
        print(f"  {name:<20} cells={m.path_length:<4} cost={m.path_cost:<7.1f} "
              f"explored={m.nodes_explored:<5} time={m.computation_time_ms:.2f}ms")

    # NavMesh planners, reusing the mesh after the first query
    print("\nNavMesh planners:")
    navmesh = None
    for algorithm in Algorithm:
        result, navmesh = plan_navmesh(grid, navmesh, start, goal, algorithm, rng=rng)
        name = DISPLAY_NAMES[algorithm]
        if result is None:
            print(f"  {name:<20} no path found")
            continue
        m = result.metrics
        print(f"  {name:<20} cells={m.path_length:<4} cost={m.path_cost:<7.1f} "
              f"explored={m.nodes_explored:<5} polyline={len(result.waypoints)} points")
    print(f"  NavMesh: {len(navmesh.waypoints)} waypoints, {len(navmesh.edges)} edges")


if __name__ == "__main__":
    planning_example()
