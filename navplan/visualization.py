"""
Visualization setup utilities for Rerun.

Everything here consumes planner output; the planners themselves never draw.
"""

import numpy as np
import rerun as rr

from .grid import Grid
from .types import NavMesh, PlanningResult


def setup_planner_viewer_blueprint(agent_paths=None):
    """
    Set up the blueprint for the planner comparison viewer.

    Args:
        agent_paths: Optional entity paths to give their own 2D view

    Returns:
        Blueprint configuration for Rerun viewer
    """
    views = [rr.blueprint.Spatial2DView(name="All Agents", origin="world")]
    for path in agent_paths or []:
        views.append(rr.blueprint.Spatial2DView(
            name=path.rsplit("/", 1)[-1],
            origin="world",
            contents=["world/grid/**", f"{path}/**"],
        ))

    blueprint = rr.blueprint.Blueprint(
        rr.blueprint.Grid(*views),
        collapse_panels=False,
    )
    return blueprint


def create_occupancy_grid_image(grid: Grid):
    """
    Create colored visualization of occupancy grid.

    Args:
        grid: Occupancy grid

    Returns:
        Colored image array (H, W, 3) with uint8 dtype
    """
    grid_viz = np.zeros((*grid.occupancy.shape, 3), dtype=np.uint8)
    grid_viz[~grid.occupancy] = [235, 235, 235]   # Light gray = free
    grid_viz[grid.occupancy] = [40, 40, 40]       # Dark = obstacle
    return grid_viz


def _cell_centers(points):
    # Rerun 2D space is (x, y) = (col, row); draw through cell centers
    return np.array([[p[1] + 0.5, p[0] + 0.5] for p in points], dtype=np.float32)


def log_grid(grid: Grid, entity_path: str = "world/grid"):
    rr.log(entity_path, rr.Image(create_occupancy_grid_image(grid)), static=True)


def log_navmesh(navmesh: NavMesh, entity_path: str = "world/navmesh"):
    """Log navmesh waypoints as points and edges as line segments."""
    if navmesh.waypoints:
        rr.log(
            f"{entity_path}/waypoints",
            rr.Points2D(_cell_centers([w.position for w in navmesh.waypoints]),
                        colors=[80, 140, 255], radii=0.15),
            static=True,
        )
    if navmesh.edges:
        waypoints = navmesh.waypoints
        strips = [
            _cell_centers([waypoints[e.source].position, waypoints[e.target].position])
            for e in navmesh.edges
        ]
        rr.log(
            f"{entity_path}/edges",
            rr.LineStrips2D(strips, colors=[80, 140, 255, 60], radii=0.03),
            static=True,
        )


def log_planning_result(result: PlanningResult, entity_path: str, color=(0, 255, 255)):
    """
    Log one agent's path, sparse waypoints and explored nodes.

    Args:
        result: Planning result to draw
        entity_path: Entity path for this agent
        color: RGB color for the path
    """
    explored = [(n.row, n.col) for n in result.explored_nodes]
    if explored:
        rr.log(
            f"{entity_path}/explored",
            rr.Points2D(_cell_centers(explored), colors=[*color, 70], radii=0.2),
        )
    rr.log(
        f"{entity_path}/path",
        rr.LineStrips2D([_cell_centers(result.path)], colors=[color], radii=0.12),
    )
    rr.log(
        f"{entity_path}/waypoints",
        rr.Points2D(_cell_centers(result.waypoints or result.path), colors=[color], radii=0.25),
    )
    rr.log(
        f"{entity_path}/endpoints",
        rr.Points2D(
            _cell_centers([result.start, result.goal]),
            colors=[[0, 200, 0], [255, 0, 255]],
            radii=0.45,
        ),
    )
