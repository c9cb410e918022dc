"""
Line-of-sight path smoothing ("funnel") for navmesh routes.

This is a greedy string-pulling pass, not a true portal funnel: it keeps a
point only when line of sight from the current anchor would otherwise be lost.
"""

from typing import List, Sequence

from .grid import Grid


def funnel_indices(path: Sequence, grid: Grid) -> List[int]:
    """
    Indices of the points kept by the funnel pass.

    Args:
        path: Ordered points (start, intermediate waypoints, goal)
        grid: Occupancy grid used for visibility tests

    Returns:
        Strictly increasing indices, first 0, last len(path) - 1
    """
    if len(path) <= 2:
        return list(range(len(path)))

    kept = [0]
    anchor = 0
    last = len(path) - 1

    while anchor < last:
        farthest = anchor + 1
        for i in range(anchor + 2, len(path)):
            if not grid.line_of_sight(path[anchor], path[i]):
                break
            farthest = i
        kept.append(farthest)
        anchor = farthest

    return kept


def funnel_smooth(path: Sequence, grid: Grid) -> List:
    """Reduce `path` to the points kept by `funnel_indices`."""
    return [path[i] for i in funnel_indices(path, grid)]
