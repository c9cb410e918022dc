"""
Tests for the grid search family: Dijkstra, Greedy, A*, JPS and Theta*.
"""

import math

import pytest

from navplan import Algorithm, Grid, astar, dijkstra, greedy_best_first, jps, plan_grid, theta_star
from navplan.jump_point import has_forced_neighbor, jump

from path_checks import approx_equal, assert_legal_grid_path, assert_trace_matches_metrics

DETERMINISTIC = [dijkstra, greedy_best_first, astar, jps, theta_star]


@pytest.mark.parametrize("planner", [astar, dijkstra, jps])
def test_straight_row_on_empty_grid(empty_grid, planner):
    result = planner(empty_grid, (0, 0), (0, 9))

    assert result is not None
    assert len(result.path) == 10
    assert result.metrics.path_cost == pytest.approx(9.0)
    assert_legal_grid_path(empty_grid, result.path, (0, 0), (0, 9))
    assert_trace_matches_metrics(result)


def test_greedy_reaches_goal_and_reports_steps(empty_grid, maze_grid):
    result = greedy_best_first(empty_grid, (0, 0), (0, 9))
    assert result is not None
    assert result.path[-1] == (0, 9)

    result = greedy_best_first(maze_grid, (12, 3), (20, 32))
    assert result is not None
    assert_legal_grid_path(maze_grid, result.path, (12, 3), (20, 32))
    assert result.metrics.path_cost == len(result.path) - 1


@pytest.mark.parametrize("algorithm", list(Algorithm))
def test_solid_wall_has_no_path(partitioned_grid, algorithm, rng):
    assert plan_grid(partitioned_grid, (0, 0), (9, 9), algorithm, rng=rng) is None


@pytest.mark.parametrize("planner", DETERMINISTIC)
def test_paths_are_legal_on_maze(maze_grid, planner):
    result = planner(maze_grid, (12, 3), (20, 32))

    assert result is not None
    assert_legal_grid_path(maze_grid, result.path, (12, 3), (20, 32))
    assert_trace_matches_metrics(result)
    assert result.explored_nodes[0] == (12, 3)
    assert result.explored_nodes[-1] == (20, 32)


@pytest.mark.parametrize("planner", DETERMINISTIC)
def test_start_equals_goal(empty_grid, planner):
    result = planner(empty_grid, (4, 4), (4, 4))

    assert result.path == [(4, 4)]
    assert result.metrics.path_cost == 0
    assert result.metrics.nodes_explored == 1


@pytest.mark.parametrize("grid_name,start,goal", [
    ("gap_grid", (2, 2), (17, 2)),
    ("maze_grid", (12, 3), (20, 32)),
    ("maze_grid", (0, 0), (23, 35)),
])
def test_cost_relations(request, grid_name, start, goal):
    grid = request.getfixturevalue(grid_name)
    a = astar(grid, start, goal)
    d = dijkstra(grid, start, goal)
    j = jps(grid, start, goal)
    t = theta_star(grid, start, goal)

    # Both optimal on the 4-connected grid
    assert approx_equal(a.metrics.path_cost, d.metrics.path_cost)
    # Diagonal jumps and any-angle shortcuts never lengthen the route
    assert j.metrics.path_cost <= a.metrics.path_cost + 1e-9
    assert t.metrics.path_cost <= a.metrics.path_cost + 1e-9


def test_jps_matches_astar_in_corridor():
    grid = Grid.from_obstacles(3, 50, [(0, c) for c in range(50)] + [(2, c) for c in range(50)])
    a = astar(grid, (1, 0), (1, 49))
    j = jps(grid, (1, 0), (1, 49))

    assert approx_equal(j.metrics.path_cost, a.metrics.path_cost)
    assert j.path == a.path
    assert j.waypoints == [(1, 0), (1, 49)]


def test_jps_handles_long_corridors_without_deep_recursion():
    grid = Grid.empty(1, 2000)
    result = jps(grid, (0, 0), (0, 1999))

    assert result is not None
    assert len(result.path) == 2000
    assert result.metrics.nodes_explored == 2


def test_jps_explores_fewer_nodes_than_astar(empty_grid):
    a = astar(empty_grid, (0, 0), (9, 9))
    j = jps(empty_grid, (0, 0), (9, 9))

    assert j.metrics.nodes_explored <= a.metrics.nodes_explored
    assert j.metrics.path_cost == pytest.approx(9 * math.sqrt(2))


def test_astar_explores_fewer_nodes_than_dijkstra(empty_grid):
    a = astar(empty_grid, (0, 0), (0, 9))
    d = dijkstra(empty_grid, (0, 0), (0, 9))

    assert a.metrics.nodes_explored < d.metrics.nodes_explored


def test_theta_star_takes_any_angle_shortcut(empty_grid):
    result = theta_star(empty_grid, (0, 0), (5, 9))

    assert result.waypoints == [(0, 0), (5, 9)]
    assert result.metrics.path_cost == pytest.approx(math.hypot(5, 9))
    assert_legal_grid_path(empty_grid, result.path, (0, 0), (5, 9))


def test_theta_star_waypoints_are_mutually_visible(gap_grid):
    result = theta_star(gap_grid, (2, 2), (17, 2))

    for a, b in zip(result.waypoints[:-1], result.waypoints[1:]):
        assert gap_grid.line_of_sight(a, b)


def test_forced_neighbor_rules():
    grid = Grid.from_obstacles(3, 3, [(0, 1)])

    # Moving right past a blocked cell above with open space beyond it
    assert has_forced_neighbor(grid, (1, 1), (0, 1))
    assert not has_forced_neighbor(Grid.empty(3, 3), (1, 1), (0, 1))
    # Moving down-right with the cell behind on the row blocked
    assert has_forced_neighbor(grid, (1, 1), (1, 1))


def test_jump_stops_at_forced_neighbor_goal_and_walls():
    grid = Grid.from_obstacles(3, 6, [(0, 2)])

    assert jump(grid, (1, 0), (0, 1), goal=(2, 5)) == (1, 2)
    assert jump(Grid.empty(3, 6), (1, 0), (0, 1), goal=(1, 4)) == (1, 4)
    assert jump(Grid.empty(3, 6), (1, 0), (0, 1), goal=(2, 5)) is None
