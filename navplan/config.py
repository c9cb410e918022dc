"""
Configuration utilities and default settings.
"""

import sys
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from loguru import logger


@dataclass
class RRTConfig:
    """Configuration for the sampling planner."""
    max_iterations: int = 2000
    step_size: float = 2.0
    goal_threshold: float = 1.5
    goal_bias: float = 0.1  # Probability of sampling the goal directly

    def validate(self) -> "RRTConfig":
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.step_size <= 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.goal_threshold <= 0:
            raise ValueError(f"goal_threshold must be positive, got {self.goal_threshold}")
        if not 0.0 <= self.goal_bias <= 1.0:
            raise ValueError(f"goal_bias must be in [0, 1], got {self.goal_bias}")
        return self


@dataclass
class NavMeshConfig:
    """Configuration for navmesh generation."""
    lattice_spacing: int = 5
    lattice_offset: int = 2
    max_edge_length: float = 15.0

    def validate(self) -> "NavMeshConfig":
        if self.lattice_spacing <= 0:
            raise ValueError(f"lattice_spacing must be positive, got {self.lattice_spacing}")
        if self.lattice_offset < 0:
            raise ValueError(f"lattice_offset must be non-negative, got {self.lattice_offset}")
        if self.max_edge_length <= 0:
            raise ValueError(f"max_edge_length must be positive, got {self.max_edge_length}")
        return self


# Default configurations
DEFAULT_GRID_RRT_CONFIG = RRTConfig()
DEFAULT_NAVMESH_RRT_CONFIG = RRTConfig(
    max_iterations=1000,
    step_size=3.0,
    goal_threshold=3.0,
    goal_bias=0.2,
)
DEFAULT_NAVMESH_CONFIG = NavMeshConfig()


def get_output_dir(base_dir: Path, scenario_name: Optional[str] = None) -> Path:
    """
    Get standardized output directory path.

    Args:
        base_dir: Base output directory
        scenario_name: Optional scenario name for subdirectory

    Returns:
        Path to output directory
    """
    if scenario_name:
        return base_dir / f"plans_{scenario_name}"
    return base_dir / "plans"


def setup_logger(level: str = "WARNING"):
    """
    Route planner logs to stderr at the given level.

    The planners log every query at DEBUG. Their logging is disabled on
    import and switched on here.

    Args:
        level: Minimum loguru level to show

    Returns:
        The configured logger
    """
    logger.enable("navplan")
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
               "<level>{message}</level>",
        level=level,
        colorize=True,
    )
    return logger
