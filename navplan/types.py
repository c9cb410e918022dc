"""
Core data types shared by the planners.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union


class Position(NamedTuple):
    """Grid position as (row, col). Hashable, so it doubles as a search key."""
    row: Union[int, float]
    col: Union[int, float]


PositionLike = Union[Position, Tuple[int, int], Sequence[int]]


def as_position(value: PositionLike) -> Position:
    """Coerce a (row, col) pair or a waypoint into a Position."""
    if isinstance(value, Position):
        return value
    if isinstance(value, Waypoint):
        return value.position
    row, col = value
    return Position(row, col)


@dataclass(frozen=True)
class Waypoint:
    """Navmesh node. `id` is the index of the waypoint in the mesh's list."""
    id: int
    row: int
    col: int

    @property
    def position(self) -> Position:
        return Position(self.row, self.col)


@dataclass(frozen=True)
class Edge:
    """Undirected navmesh edge between two waypoint ids."""
    source: int
    target: int
    cost: float


@dataclass
class NavMesh:
    """
    Sparse waypoint visibility graph built from a grid.

    `fingerprint` identifies the obstacle layout the mesh was built from; a
    mesh whose fingerprint no longer matches the grid must be rebuilt.
    """
    waypoints: List[Waypoint]
    edges: List[Edge]
    fingerprint: str = ""

    def adjacency(self) -> Dict[int, List[Tuple[int, float]]]:
        """Adjacency list with every edge inserted in both directions."""
        adjacency = {waypoint.id: [] for waypoint in self.waypoints}
        for edge in self.edges:
            adjacency[edge.source].append((edge.target, edge.cost))
            adjacency[edge.target].append((edge.source, edge.cost))
        return adjacency

    def matches(self, grid) -> bool:
        return self.fingerprint == grid.fingerprint


@dataclass
class PlanningMetrics:
    computation_time_ms: float
    nodes_explored: int
    path_cost: float
    path_length: int


@dataclass
class PlanningResult:
    """
    Outcome of one successful planning query.

    `path` is the dense cell-by-cell route; `waypoints` is the sparse
    polyline the planner produced before densification (identical to `path`
    for the 4-connected searches).
    """
    path: List[Position]
    explored_nodes: List[Any]
    metrics: PlanningMetrics
    waypoints: List[Position] = field(default_factory=list)
    algorithm: Optional[str] = None

    @property
    def start(self) -> Position:
        return self.path[0]

    @property
    def goal(self) -> Position:
        return self.path[-1]
