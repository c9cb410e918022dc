"""
Occupancy grid model used by every planner.
"""

import hashlib
import numpy as np
from typing import Iterable, List, Tuple

from .geometry import raster_line
from .types import Position

# 4-connected moves first (up, down, left, right), then the diagonals
CARDINAL_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL_DIRECTIONS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ALL_DIRECTIONS = CARDINAL_DIRECTIONS + DIAGONAL_DIRECTIONS


class Grid:
    """
    Read-only snapshot of a rows x cols occupancy map.

    Args:
        occupancy: 2D array-like where truthy/1 = obstacle, 0 = free

    Raises:
        ValueError: If the occupancy is not a non-empty 2D array
    """

    def __init__(self, occupancy):
        occupancy = np.array(occupancy, dtype=bool)
        if occupancy.ndim != 2:
            raise ValueError(f"occupancy must be 2D, got shape {occupancy.shape}")
        if occupancy.size == 0:
            raise ValueError(f"occupancy must not be empty, got shape {occupancy.shape}")
        occupancy.setflags(write=False)

        self.occupancy = occupancy
        self.rows, self.cols = occupancy.shape
        # Plain nested lists are much faster than numpy scalar indexing in the
        # per-cell checks the searches run.
        self._blocked = occupancy.tolist()
        self.fingerprint = hashlib.sha1(
            f"{self.rows}x{self.cols}:".encode() + np.packbits(occupancy).tobytes()
        ).hexdigest()

    @classmethod
    def empty(cls, rows: int, cols: int) -> "Grid":
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        return cls(np.zeros((rows, cols), dtype=bool))

    @classmethod
    def from_obstacles(cls, rows: int, cols: int, obstacles: Iterable) -> "Grid":
        """
        Build a grid from a list of obstacle cells.

        Obstacles outside the grid are ignored.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        occupancy = np.zeros((rows, cols), dtype=bool)
        for row, col in obstacles:
            if 0 <= row < rows and 0 <= col < cols:
                occupancy[row, col] = True
        return cls(occupancy)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def in_bounds(self, pos) -> bool:
        return 0 <= pos[0] < self.rows and 0 <= pos[1] < self.cols

    def is_obstacle(self, pos) -> bool:
        """True only for in-bounds obstacle cells."""
        return self.in_bounds(pos) and self._blocked[pos[0]][pos[1]]

    def is_free(self, pos) -> bool:
        """True only for in-bounds free cells."""
        return self.in_bounds(pos) and not self._blocked[pos[0]][pos[1]]

    def obstacle_cells(self) -> List[Position]:
        """Obstacle cells in row-major order."""
        return [Position(int(r), int(c)) for r, c in np.argwhere(self.occupancy)]

    def neighbors(self, pos, diagonal: bool = False) -> List[Position]:
        """
        Free neighbouring cells.

        Args:
            pos: Cell (row, col)
            diagonal: Include the 4 diagonal moves (8-connected)

        Returns:
            Neighbours in up, down, left, right[, diagonals] order
        """
        directions = ALL_DIRECTIONS if diagonal else CARDINAL_DIRECTIONS
        row, col = pos
        result = []
        for dr, dc in directions:
            neighbor = Position(row + dr, col + dc)
            if self.is_free(neighbor):
                result.append(neighbor)
        return result

    def line_of_sight(self, a, b) -> bool:
        """
        Rasterized visibility test.

        Returns:
            True if every cell on the segment a-b is in bounds and free
        """
        return all(self.is_free(cell) for cell in raster_line(a, b))

    def with_obstacles(self, cells: Iterable, blocked: bool = True) -> "Grid":
        """Return a new snapshot with `cells` set to obstacle (or cleared)."""
        occupancy = self.occupancy.copy()
        for row, col in cells:
            if 0 <= row < self.rows and 0 <= col < self.cols:
                occupancy[row, col] = blocked
        return Grid(occupancy)

    def require_in_bounds(self, pos, label: str = "position"):
        if not self.in_bounds(pos):
            raise ValueError(
                f"{label} {tuple(pos)} is outside the {self.rows}x{self.cols} grid"
            )

    def __repr__(self):
        return f"Grid({self.rows}x{self.cols}, obstacles={int(self.occupancy.sum())})"
