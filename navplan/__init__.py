"""
Grid and navmesh path planning: search, sampling, navmesh generation and smoothing.
"""

from loguru import logger

from .types import (
    Position,
    Waypoint,
    Edge,
    NavMesh,
    PlanningMetrics,
    PlanningResult,
    as_position
)
from .priority_queue import PriorityQueue
from .grid import Grid
from .geometry import (
    euclidean_distance,
    manhattan_distance,
    raster_line,
    densify_path,
    polyline_length,
    steer_toward
)
from .grid_search import dijkstra, greedy_best_first, astar, jps, theta_star
from .rrt import rrt, navmesh_rrt
from .navmesh import build_navmesh, place_waypoints, connect_waypoints, nearest_waypoint
from .navmesh_search import navmesh_dijkstra, navmesh_greedy, navmesh_astar
from .funnel import funnel_indices, funnel_smooth
from .runner import (
    Algorithm,
    MapType,
    AgentRequest,
    DISPLAY_NAMES,
    GRID_PLANNERS,
    NAVMESH_PLANNERS,
    plan_grid,
    plan_navmesh,
    plan_agents
)
from .config import (
    RRTConfig,
    NavMeshConfig,
    DEFAULT_GRID_RRT_CONFIG,
    DEFAULT_NAVMESH_RRT_CONFIG,
    DEFAULT_NAVMESH_CONFIG,
    get_output_dir,
    setup_logger
)
from .visualization import (
    setup_planner_viewer_blueprint,
    create_occupancy_grid_image,
    log_grid,
    log_navmesh,
    log_planning_result
)
from .io_utils import (
    Scenario,
    load_json,
    save_json,
    load_image,
    load_grid,
    load_scenario,
    grid_from_dict,
    grid_to_dict,
    result_to_dict,
    navmesh_to_dict
)

# Library logging stays off until an application calls setup_logger
logger.disable("navplan")

__all__ = [
    # Data model
    'Position',
    'Waypoint',
    'Edge',
    'NavMesh',
    'PlanningMetrics',
    'PlanningResult',
    'as_position',
    'PriorityQueue',
    'Grid',
    # Geometry
    'euclidean_distance',
    'manhattan_distance',
    'raster_line',
    'densify_path',
    'polyline_length',
    'steer_toward',
    # Grid search
    'dijkstra',
    'greedy_best_first',
    'astar',
    'jps',
    'theta_star',
    # Sampling
    'rrt',
    'navmesh_rrt',
    # NavMesh
    'build_navmesh',
    'place_waypoints',
    'connect_waypoints',
    'nearest_waypoint',
    'navmesh_dijkstra',
    'navmesh_greedy',
    'navmesh_astar',
    'funnel_indices',
    'funnel_smooth',
    # Dispatch
    'Algorithm',
    'MapType',
    'AgentRequest',
    'DISPLAY_NAMES',
    'GRID_PLANNERS',
    'NAVMESH_PLANNERS',
    'plan_grid',
    'plan_navmesh',
    'plan_agents',
    # Config
    'RRTConfig',
    'NavMeshConfig',
    'DEFAULT_GRID_RRT_CONFIG',
    'DEFAULT_NAVMESH_RRT_CONFIG',
    'DEFAULT_NAVMESH_CONFIG',
    'get_output_dir',
    'setup_logger',
    # Visualization
    'setup_planner_viewer_blueprint',
    'create_occupancy_grid_image',
    'log_grid',
    'log_navmesh',
    'log_planning_result',
    # IO utilities
    'Scenario',
    'load_json',
    'save_json',
    'load_image',
    'load_grid',
    'load_scenario',
    'grid_from_dict',
    'grid_to_dict',
    'result_to_dict',
    'navmesh_to_dict',
]
