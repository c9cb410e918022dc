"""
Tests for navmesh generation and navmesh search.
"""

import pytest

from navplan import (
    Grid,
    NavMesh,
    NavMeshConfig,
    Waypoint,
    build_navmesh,
    connect_waypoints,
    navmesh_astar,
    navmesh_dijkstra,
    navmesh_greedy,
    nearest_waypoint,
    place_waypoints,
    polyline_length,
)

from path_checks import assert_legal_grid_path, assert_trace_matches_metrics, assert_visible_polyline

NAVMESH_SEARCHES = [navmesh_dijkstra, navmesh_greedy, navmesh_astar]


def test_open_grid_gets_lattice_only(empty_grid):
    waypoints = place_waypoints(empty_grid)

    assert [(w.row, w.col) for w in waypoints] == [(2, 2), (2, 7), (7, 2), (7, 7)]
    assert [w.id for w in waypoints] == [0, 1, 2, 3]


def test_ring_waypoints_come_before_lattice():
    grid = Grid.from_obstacles(5, 5, [(2, 2)])
    waypoints = place_waypoints(grid)

    assert [(w.row, w.col) for w in waypoints] == [
        (1, 1), (1, 2), (1, 3),
        (2, 1), (2, 3),
        (3, 1), (3, 2), (3, 3),
    ]


def test_waypoints_are_free_and_unique(maze_grid):
    waypoints = place_waypoints(maze_grid)
    cells = [(w.row, w.col) for w in waypoints]

    assert len(cells) == len(set(cells))
    assert all(maze_grid.is_free(cell) for cell in cells)
    assert [w.id for w in waypoints] == list(range(len(waypoints)))


def test_open_grid_edges(empty_grid):
    navmesh = build_navmesh(empty_grid)

    assert [(e.source, e.target) for e in navmesh.edges] == [
        (0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)
    ]
    assert navmesh.edges[0].cost == pytest.approx(5.0)


def test_edges_are_visible_short_and_ordered(maze_grid):
    navmesh = build_navmesh(maze_grid)
    by_id = {w.id: w for w in navmesh.waypoints}

    assert navmesh.edges
    keys = [(e.source, e.target) for e in navmesh.edges]
    assert keys == sorted(keys)
    for edge in navmesh.edges:
        a, b = by_id[edge.source], by_id[edge.target]
        assert edge.source < edge.target
        assert edge.cost <= 15.0
        assert maze_grid.line_of_sight(a.position, b.position)


def test_edge_length_limit_is_configurable(empty_grid):
    waypoints = place_waypoints(empty_grid)

    edges = connect_waypoints(empty_grid, waypoints, max_edge_length=5.0)
    assert [(e.source, e.target) for e in edges] == [(0, 1), (0, 2), (1, 3), (2, 3)]
    assert connect_waypoints(empty_grid, waypoints[:1]) == []


def test_invalid_navmesh_config_is_rejected(empty_grid):
    with pytest.raises(ValueError):
        build_navmesh(empty_grid, NavMeshConfig(lattice_spacing=0))


def test_adjacency_is_bidirectional(empty_grid):
    adjacency = build_navmesh(empty_grid).adjacency()

    assert sorted(n for n, _ in adjacency[0]) == [1, 2, 3]
    assert sorted(n for n, _ in adjacency[3]) == [0, 1, 2]


def test_fingerprint_tracks_obstacle_layout(empty_grid):
    navmesh = build_navmesh(empty_grid)

    assert navmesh.matches(empty_grid)
    assert navmesh.matches(Grid.empty(10, 10))
    assert not navmesh.matches(empty_grid.with_obstacles([(4, 4)]))


def test_nearest_waypoint_ties_and_visibility():
    navmesh = NavMesh(
        waypoints=[Waypoint(id=0, row=5, col=8), Waypoint(id=1, row=5, col=2)],
        edges=[],
    )
    grid = Grid.empty(10, 10)

    assert nearest_waypoint(navmesh, grid, (5, 5)).id == 0
    assert nearest_waypoint(navmesh, grid.with_obstacles([(5, 7)]), (5, 5)).id == 1
    assert nearest_waypoint(navmesh, grid.with_obstacles([(5, 7), (5, 3)]), (5, 5)) is None
    assert nearest_waypoint(NavMesh(waypoints=[], edges=[]), grid, (5, 5)) is None


@pytest.mark.parametrize("search", NAVMESH_SEARCHES)
@pytest.mark.parametrize("grid_name,start,goal", [
    ("gap_grid", (2, 2), (17, 2)),
    ("maze_grid", (12, 3), (20, 32)),
])
def test_navmesh_paths_are_legal(request, search, grid_name, start, goal):
    grid = request.getfixturevalue(grid_name)
    navmesh = build_navmesh(grid)
    result = search(grid, navmesh, start, goal)

    assert result is not None
    assert result.waypoints[0] == start
    assert result.waypoints[-1] == goal
    assert_legal_grid_path(grid, result.path, start, goal)
    assert_visible_polyline(grid, result.waypoints)
    assert_trace_matches_metrics(result)
    assert all(isinstance(node, Waypoint) for node in result.explored_nodes)


def test_navmesh_cost_is_polyline_length(maze_grid):
    navmesh = build_navmesh(maze_grid)
    result = navmesh_astar(maze_grid, navmesh, (12, 3), (20, 32))

    assert result.metrics.path_cost == pytest.approx(polyline_length(result.waypoints))


@pytest.mark.parametrize("search", NAVMESH_SEARCHES)
def test_navmesh_partitioned_grid_has_no_path(partitioned_grid, search):
    navmesh = build_navmesh(partitioned_grid)
    assert search(partitioned_grid, navmesh, (0, 0), (9, 9)) is None


@pytest.mark.parametrize("search", NAVMESH_SEARCHES)
def test_no_visible_waypoint_means_no_path(empty_grid, search):
    empty_mesh = NavMesh(waypoints=[], edges=[], fingerprint=empty_grid.fingerprint)
    assert search(empty_grid, empty_mesh, (0, 0), (9, 9)) is None


def test_enclosed_start_has_no_path():
    ring = [(r, c) for r in range(4, 7) for c in range(4, 7) if (r, c) != (5, 5)]
    grid = Grid.from_obstacles(12, 12, ring)
    navmesh = build_navmesh(grid)

    assert navmesh_astar(grid, navmesh, (5, 5), (0, 0)) is None
