"""
Jump point scanning for JPS.

A diagonal scan calls the cardinal scan for its two component directions and
a cardinal scan never recurses, so nesting depth is at most two. Every scan is
also capped at rows + cols steps.
"""

from typing import List, Optional, Tuple

from .geometry import euclidean_distance
from .grid import ALL_DIRECTIONS, Grid
from .types import Position


def has_forced_neighbor(grid: Grid, node: Position, direction: Tuple[int, int]) -> bool:
    """
    Check the JPS pruning rules at `node` when arriving along `direction`.

    A neighbour is forced when a cell beside the line of travel is blocked
    while the cell diagonally ahead on that side is free.
    """
    dr, dc = direction
    row, col = node

    if dr != 0 and dc != 0:
        return (
            (grid.is_obstacle((row - dr, col)) and grid.is_free((row - dr, col + dc)))
            or (grid.is_obstacle((row, col - dc)) and grid.is_free((row + dr, col - dc)))
        )

    if dr != 0:
        for side in (col - 1, col + 1):
            if grid.is_obstacle((row, side)) and grid.is_free((row + dr, side)):
                return True
        return False

    for side in (row - 1, row + 1):
        if grid.is_obstacle((side, col)) and grid.is_free((side, col + dc)):
            return True
    return False


def jump(grid: Grid, origin: Position, direction: Tuple[int, int],
         goal: Position) -> Optional[Position]:
    """
    Scan from `origin` along `direction` for the next jump point.

    Returns:
        The jump point, or None when the scan runs into an obstacle or the edge
    """
    dr, dc = direction
    diagonal = dr != 0 and dc != 0
    row, col = origin
    max_steps = grid.rows + grid.cols

    for _ in range(max_steps):
        row += dr
        col += dc
        node = Position(row, col)

        if not grid.is_free(node):
            return None
        if node == goal:
            return node
        if has_forced_neighbor(grid, node, direction):
            return node
        if diagonal and (jump(grid, node, (dr, 0), goal) is not None
                         or jump(grid, node, (0, dc), goal) is not None):
            return node

    return None


def identify_successors(grid: Grid, node: Position, goal: Position) -> List[Tuple[Position, float]]:
    """Jump points reachable from `node` in all 8 directions, with their costs."""
    successors = []
    for direction in ALL_DIRECTIONS:
        jump_point = jump(grid, node, direction, goal)
        if jump_point is not None:
            successors.append((jump_point, euclidean_distance(node, jump_point)))
    return successors
