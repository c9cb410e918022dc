"""
Navmesh generation: waypoints around obstacles and on an open-space lattice,
connected by line-of-sight edges.
"""

from typing import Dict, List, Optional

import numpy as np
from loguru import logger
from scipy.spatial import KDTree

from .config import DEFAULT_NAVMESH_CONFIG, NavMeshConfig
from .geometry import euclidean_distance
from .grid import Grid
from .types import Edge, NavMesh, Waypoint

# Ring order used when placing waypoints around an obstacle cell
_RING = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


def place_waypoints(grid: Grid, config: NavMeshConfig = DEFAULT_NAVMESH_CONFIG) -> List[Waypoint]:
    """
    Place navmesh waypoints.

    Every free cell touching an obstacle (8-neighbourhood) becomes a waypoint,
    then a regular lattice fills the open areas.

    Args:
        grid: Occupancy grid
        config: Lattice spacing and offset

    Returns:
        Waypoints with dense ids in placement order
    """
    placed: Dict[tuple, int] = {}

    def add(row, col):
        if (row, col) not in placed and grid.is_free((row, col)):
            placed[(row, col)] = len(placed)

    for row, col in grid.obstacle_cells():
        for dr, dc in _RING:
            add(row + dr, col + dc)

    for row in range(config.lattice_offset, grid.rows, config.lattice_spacing):
        for col in range(config.lattice_offset, grid.cols, config.lattice_spacing):
            add(row, col)

    return [Waypoint(id=index, row=row, col=col) for (row, col), index in placed.items()]


def connect_waypoints(grid: Grid, waypoints: List[Waypoint],
                      max_edge_length: float = DEFAULT_NAVMESH_CONFIG.max_edge_length) -> List[Edge]:
    """
    Connect every waypoint pair within `max_edge_length` that can see each other.

    Candidate pairs come from a KD-tree, so only nearby pairs are tested for
    line of sight. Edges are ordered by (source, target) with source < target.
    """
    if len(waypoints) < 2:
        return []

    points = np.array([(w.row, w.col) for w in waypoints], dtype=float)
    tree = KDTree(points)
    pairs = tree.query_pairs(max_edge_length, output_type="ndarray")
    if len(pairs) == 0:
        return []
    pairs = np.sort(pairs, axis=1)
    pairs = pairs[np.lexsort((pairs[:, 1], pairs[:, 0]))]

    edges = []
    for i, j in pairs.tolist():
        a, b = waypoints[i], waypoints[j]
        dist = euclidean_distance(a.position, b.position)
        if dist > max_edge_length:
            continue
        if grid.line_of_sight(a.position, b.position):
            edges.append(Edge(source=i, target=j, cost=dist))
    return edges


def build_navmesh(grid: Grid, config: NavMeshConfig = DEFAULT_NAVMESH_CONFIG) -> NavMesh:
    """
    Build the waypoint visibility graph for the grid's current obstacles.

    Args:
        grid: Occupancy grid snapshot
        config: Navmesh generation settings

    Returns:
        NavMesh tagged with the grid's fingerprint
    """
    config.validate()
    waypoints = place_waypoints(grid, config)
    edges = connect_waypoints(grid, waypoints, config.max_edge_length)
    logger.debug(f"NavMesh generated: {len(waypoints)} waypoints, {len(edges)} edges")
    return NavMesh(waypoints=waypoints, edges=edges, fingerprint=grid.fingerprint)


def nearest_waypoint(navmesh: NavMesh, grid: Grid, point) -> Optional[Waypoint]:
    """
    Closest waypoint with direct line of sight to `point`.

    Ties go to the lowest waypoint id.

    Returns:
        The waypoint, or None if no waypoint is visible from `point`
    """
    if not navmesh.waypoints:
        return None

    points = np.array([(w.row, w.col) for w in navmesh.waypoints], dtype=float)
    dists = np.hypot(points[:, 0] - point[0], points[:, 1] - point[1])
    order = np.lexsort((np.arange(len(dists)), dists))

    for index in order.tolist():
        waypoint = navmesh.waypoints[index]
        if grid.line_of_sight(point, waypoint.position):
            return waypoint
    return None
