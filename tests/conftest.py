"""
Shared fixtures for the planner tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from navplan import Grid


@pytest.fixture
def empty_grid():
    """10x10 grid with no obstacles."""
    return Grid.empty(10, 10)


@pytest.fixture
def partitioned_grid():
    """10x10 grid split in two by a solid obstacle row."""
    return Grid.from_obstacles(10, 10, [(5, col) for col in range(10)])


@pytest.fixture
def gap_grid():
    """20x30 grid with a wall across row 10, open only at the three rightmost columns."""
    return Grid.from_obstacles(20, 30, [(10, col) for col in range(27)])


@pytest.fixture
def maze_grid():
    """24x36 grid with offset walls and pillars."""
    obstacles = (
        [(8, col) for col in range(6, 22)]
        + [(16, col) for col in range(14, 34)]
        + [(row, 26) for row in range(2, 8)]
        + [(row, 12) for row in range(9, 15)]
        + [(row, 8) for row in range(17, 22)]
    )
    return Grid.from_obstacles(24, 36, obstacles)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
