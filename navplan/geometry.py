"""
Geometry helpers for grid positions and polylines.
"""

import math
import numpy as np
from typing import List, Optional, Sequence

from .types import Position


def euclidean_distance(a, b) -> float:
    """Straight-line distance between two (row, col) positions."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def manhattan_distance(a, b) -> float:
    """Manhattan distance heuristic."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _bresenham(r0: int, c0: int, r1: int, c1: int) -> List[Position]:
    cells = []
    dc = abs(c1 - c0)
    dr = abs(r1 - r0)
    step_c = 1 if c0 < c1 else -1
    step_r = 1 if r0 < r1 else -1
    err = dc - dr

    while True:
        cells.append(Position(r0, c0))
        if r0 == r1 and c0 == c1:
            break
        e2 = 2 * err
        if e2 > -dr:
            err -= dr
            c0 += step_c
        if e2 < dc:
            err += dc
            r0 += step_r
    return cells


def raster_line(a, b) -> List[Position]:
    """
    Cells on the Bresenham segment from `a` to `b`, endpoints included.

    The segment is always traced from the lexicographically smaller endpoint,
    so raster_line(a, b) is raster_line(b, a) reversed. Visibility tests and
    path densification both go through here and therefore agree cell for cell.

    Args:
        a: Start position (row, col)
        b: End position (row, col)

    Returns:
        List of Positions, consecutive cells 8-adjacent
    """
    a = Position(int(a[0]), int(a[1]))
    b = Position(int(b[0]), int(b[1]))
    if b < a:
        cells = _bresenham(b.row, b.col, a.row, a.col)
        cells.reverse()
        return cells
    return _bresenham(a.row, a.col, b.row, b.col)


def densify_path(points: Sequence) -> List[Position]:
    """
    Expand a polyline into a continuous cell sequence.

    Args:
        points: Polyline vertices (row, col)

    Returns:
        Cells along every segment with consecutive duplicates removed
    """
    if len(points) == 0:
        return []
    if len(points) == 1:
        return [Position(int(points[0][0]), int(points[0][1]))]

    cells: List[Position] = []
    for start, end in zip(points[:-1], points[1:]):
        for cell in raster_line(start, end):
            if not cells or cells[-1] != cell:
                cells.append(cell)
    return cells


def polyline_length(points: Sequence) -> float:
    """
    Total Euclidean length of a polyline.

    Args:
        points: Sequence of (row, col) vertices

    Returns:
        Sum of segment lengths (0.0 for fewer than two points)
    """
    if len(points) < 2:
        return 0.0
    coords = np.asarray([(p[0], p[1]) for p in points], dtype=float)
    return float(np.linalg.norm(np.diff(coords, axis=0), axis=1).sum())


def steer_toward(origin, target, step_size: float) -> Optional[Position]:
    """
    Move from `origin` toward `target` by at most `step_size`, snapped to a cell.

    Returns:
        Rounded position, or None if origin and target coincide
    """
    dist = euclidean_distance(origin, target)
    if dist == 0:
        return None
    ratio = min(step_size / dist, 1.0)
    row = math.floor(origin[0] + (target[0] - origin[0]) * ratio + 0.5)
    col = math.floor(origin[1] + (target[1] - origin[1]) * ratio + 0.5)
    return Position(int(row), int(col))
