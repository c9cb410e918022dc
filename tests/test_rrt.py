"""
Tests for the RRT planners.

RRT is randomised, so these pin the generator seed and check properties of
whatever path comes back rather than exact paths.
"""

import numpy as np
import pytest

from navplan import Grid, NavMesh, RRTConfig, build_navmesh, euclidean_distance, navmesh_rrt, rrt
from navplan.rrt import grow_tree

from path_checks import assert_legal_grid_path, assert_trace_matches_metrics, assert_visible_polyline

SEEDS = range(10)


def test_open_grid_succeeds(empty_grid, rng):
    result = rrt(empty_grid, (0, 0), (9, 9), rng=rng)

    assert result is not None
    assert result.algorithm == "rrt"
    assert_legal_grid_path(empty_grid, result.path, (0, 0), (9, 9))
    assert_visible_polyline(empty_grid, result.waypoints)
    assert_trace_matches_metrics(result)
    assert result.metrics.path_cost >= euclidean_distance((0, 0), (9, 9)) - 1e-9


def test_same_seed_same_path(maze_grid):
    first = rrt(maze_grid, (12, 3), (20, 32), rng=np.random.default_rng(7))
    second = rrt(maze_grid, (12, 3), (20, 32), rng=np.random.default_rng(7))

    if first is None:
        assert second is None
    else:
        assert first.path == second.path
        assert first.explored_nodes == second.explored_nodes


def test_finds_narrow_gap_for_some_seed(gap_grid):
    results = [rrt(gap_grid, (2, 2), (17, 2), rng=np.random.default_rng(seed)) for seed in SEEDS]
    found = [r for r in results if r is not None]

    assert found
    for result in found:
        assert_legal_grid_path(gap_grid, result.path, (2, 2), (17, 2))
        assert_visible_polyline(gap_grid, result.waypoints)


def test_exhausted_budget_returns_none(partitioned_grid, rng):
    config = RRTConfig(max_iterations=200)
    assert rrt(partitioned_grid, (0, 0), (9, 9), config=config, rng=rng) is None


def test_start_equals_goal(empty_grid, rng):
    result = rrt(empty_grid, (3, 3), (3, 3), rng=rng)

    assert result.path == [(3, 3)]
    assert result.metrics.path_cost == 0
    assert result.explored_nodes == []


def test_grow_tree_reports_every_added_node(empty_grid, rng):
    config = RRTConfig(max_iterations=500, step_size=2.0, goal_threshold=1.5, goal_bias=0.1)
    branch, explored = grow_tree(
        empty_grid, (0, 0), (9, 9),
        sampler=lambda g: (int(g.integers(10)), int(g.integers(10))),
        config=config, rng=rng,
    )

    assert branch[0] == (0, 0)
    assert branch[-1] == (9, 9)
    # Every branch node past the root was added to the tree (the goal may be attached directly)
    for node in branch[1:-1]:
        assert node in explored


def test_invalid_config_is_rejected(empty_grid, rng):
    with pytest.raises(ValueError):
        rrt(empty_grid, (0, 0), (9, 9), config=RRTConfig(step_size=0), rng=rng)
    with pytest.raises(ValueError):
        rrt(empty_grid, (0, 0), (9, 9), config=RRTConfig(goal_bias=1.5), rng=rng)


def test_navmesh_rrt_smooths_and_stays_legal(gap_grid):
    navmesh = build_navmesh(gap_grid)
    results = [
        navmesh_rrt(gap_grid, navmesh, (2, 2), (17, 2), rng=np.random.default_rng(seed))
        for seed in SEEDS
    ]
    found = [r for r in results if r is not None]

    assert found
    for result in found:
        assert result.algorithm == "rrt"
        assert_legal_grid_path(gap_grid, result.path, (2, 2), (17, 2))
        assert_visible_polyline(gap_grid, result.waypoints)
        assert_trace_matches_metrics(result)


def test_navmesh_rrt_without_waypoints_samples_goal(rng):
    grid = Grid.empty(6, 6)
    result = navmesh_rrt(grid, NavMesh(waypoints=[], edges=[]), (0, 0), (5, 5), rng=rng)

    assert result is not None
    assert_legal_grid_path(grid, result.path, (0, 0), (5, 5))
