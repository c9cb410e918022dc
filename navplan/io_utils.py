"""
Input/Output utilities for grids, scenarios and planning results.
"""

import json
import numpy as np
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, Any, Optional, List
from PIL import Image

from .grid import Grid
from .runner import AgentRequest
from .types import NavMesh, PlanningResult


IMAGE_SUFFIXES = {".png", ".bmp", ".gif", ".jpg", ".jpeg", ".tif", ".tiff"}


def load_json(file_path: Path) -> Optional[Dict[str, Any]]:
    """
    Load JSON file safely.

    Args:
        file_path: Path to JSON file

    Returns:
        Dictionary with JSON data, or None if loading fails
    """
    try:
        with open(file_path, 'r') as f:
            return json.load(f)
    except Exception as e:
        print(f"Error loading JSON from {file_path}: {e}")
        return None


def save_json(data: Dict[str, Any], file_path: Path, indent: int = 2) -> bool:
    """
    Save data to JSON file.

    Args:
        data: Dictionary to save
        file_path: Path to save JSON file
        indent: JSON indentation

    Returns:
        True if successful, False otherwise
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w') as f:
            json.dump(data, f, indent=indent)
        return True
    except Exception as e:
        print(f"Error saving JSON to {file_path}: {e}")
        return False


def load_image(image_path: Path) -> Optional[np.ndarray]:
    """
    Load image file as a grayscale numpy array.

    Args:
        image_path: Path to image file

    Returns:
        Numpy array (H, W) of uint8, or None if loading fails
    """
    try:
        return np.array(Image.open(image_path).convert("L"))
    except Exception as e:
        print(f"Error loading image from {image_path}: {e}")
        return None


def grid_from_image(image: np.ndarray, threshold: int = 128) -> Grid:
    """Pixels darker than `threshold` are obstacles; one pixel per cell."""
    return Grid(np.asarray(image) < threshold)


def grid_from_dict(data: Dict[str, Any]) -> Grid:
    """
    Build a grid from its JSON form.

    Accepts either {"cells": [[0, 1, ...], ...]} or
    {"rows": R, "cols": C, "obstacles": [{"row": r, "col": c}, ...]}.

    Raises:
        ValueError: If neither form is present
    """
    if "cells" in data:
        return Grid(np.asarray(data["cells"], dtype=int) != 0)
    if "rows" in data and "cols" in data:
        obstacles = [_cell(o) for o in data.get("obstacles", [])]
        return Grid.from_obstacles(int(data["rows"]), int(data["cols"]), obstacles)
    raise ValueError("Grid JSON needs either 'cells' or 'rows'/'cols'/'obstacles'")


def grid_to_dict(grid: Grid) -> Dict[str, Any]:
    return {
        "rows": grid.rows,
        "cols": grid.cols,
        "obstacles": [{"row": r, "col": c} for r, c in grid.obstacle_cells()],
    }


def load_grid(path: Path) -> Grid:
    """
    Load a grid from a JSON description or an occupancy image.

    Raises:
        ValueError: If the file cannot be read or describes no grid
    """
    path = Path(path)
    if path.suffix.lower() in IMAGE_SUFFIXES:
        image = load_image(path)
        if image is None:
            raise ValueError(f"Could not read grid image: {path}")
        return grid_from_image(image)

    data = load_json(path)
    if data is None:
        raise ValueError(f"Could not read grid file: {path}")
    return grid_from_dict(data.get("grid", data))


@dataclass
class Scenario:
    """A grid plus the agents to plan on it."""
    name: str
    grid: Grid
    agents: List[AgentRequest] = field(default_factory=list)
    map_type: str = "grid"
    description: str = ""


def _cell(value) -> tuple:
    if isinstance(value, dict):
        return int(value["row"]), int(value["col"])
    row, col = value
    return int(row), int(col)


def load_scenario(path: Path) -> Scenario:
    """
    Load a scenario file.

    Expected shape::

        {"name": ..., "mapType": "grid" | "navmesh" | "both",
         "rows": 30, "cols": 40, "obstacles": [{"row": r, "col": c}, ...],
         "agents": [{"algorithm": "astar", "start": {...}, "goal": {...}}]}

    Raises:
        ValueError: If the file cannot be read or is malformed
    """
    path = Path(path)
    data = load_json(path)
    if data is None:
        raise ValueError(f"Could not read scenario file: {path}")

    agents = []
    for index, agent in enumerate(data.get("agents", [])):
        try:
            agents.append(AgentRequest(
                start=_cell(agent["start"]),
                goal=_cell(agent["goal"]),
                algorithm=agent.get("algorithm", "astar"),
                name=agent.get("name", f"agent_{index + 1}"),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed agent #{index + 1} in {path}: {e}") from e

    return Scenario(
        name=data.get("name", path.stem),
        grid=grid_from_dict(data.get("grid", data)),
        agents=agents,
        map_type=data.get("mapType", "grid"),
        description=data.get("description", ""),
    )


def result_to_dict(result: PlanningResult) -> Dict[str, Any]:
    """Convert a planning result to plain JSON-serialisable data."""
    return {
        "algorithm": result.algorithm,
        "path": [{"row": int(p[0]), "col": int(p[1])} for p in result.path],
        "waypoints": [{"row": int(p[0]), "col": int(p[1])} for p in result.waypoints],
        "exploredNodes": [{"row": int(n.row), "col": int(n.col)} for n in result.explored_nodes],
        "metrics": asdict(result.metrics),
    }


def navmesh_to_dict(navmesh: NavMesh) -> Dict[str, Any]:
    return {
        "waypoints": [asdict(w) for w in navmesh.waypoints],
        "edges": [asdict(e) for e in navmesh.edges],
        "fingerprint": navmesh.fingerprint,
    }
