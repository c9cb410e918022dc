#!/usr/bin/env python3
"""
Compare path planning algorithms on a grid and on its navmesh.

Runs every requested algorithm for every agent, prints a metrics table and
optionally exports the results to JSON or shows them in Rerun.
"""

import argparse
import sys
from pathlib import Path

import numpy as np
import rerun as rr
from tqdm import tqdm

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from navplan.config import get_output_dir, setup_logger
from navplan.runner import Algorithm, AgentRequest, DISPLAY_NAMES, plan_agents
from navplan.io_utils import Scenario, load_grid, load_scenario, save_json, result_to_dict, navmesh_to_dict
from navplan.visualization import (
    setup_planner_viewer_blueprint,
    log_grid,
    log_navmesh,
    log_planning_result,
)

AGENT_COLORS = [
    (255, 107, 107), (78, 205, 196), (69, 183, 209),
    (255, 160, 122), (152, 216, 200), (247, 220, 111),
]


def build_scenario(args) -> Scenario:
    """Load a scenario file, or a bare grid plus --start/--goal agents."""
    if args.grid:
        grid = load_grid(args.grid)
        if not args.start or not args.goal:
            raise ValueError("--start and --goal are required with --grid")
        algorithms = args.algorithms or [a.value for a in Algorithm]
        agents = [
            AgentRequest(start=tuple(args.start), goal=tuple(args.goal), algorithm=name, name=name)
            for name in algorithms
        ]
        return Scenario(name=args.grid.stem, grid=grid, agents=agents, map_type=args.mode or "grid")

    scenario = load_scenario(args.input)
    if args.algorithms:
        scenario.agents = [a for a in scenario.agents if a.algorithm in args.algorithms]
    return scenario


def print_comparison(mode, agents, results):
    print(f"\n{mode.upper()} MODE")
    print("-" * 78)
    print(f"{'Agent':<12}{'Algorithm':<20}{'Time (ms)':>12}{'Explored':>10}{'Cells':>8}{'Cost':>10}")
    print("-" * 78)
    for agent, result in zip(agents, results):
        name = DISPLAY_NAMES.get(Algorithm(agent.algorithm), agent.algorithm)
        if result is None:
            print(f"{agent.name:<12}{name:<20}{'✗ No path found':>40}")
            continue
        m = result.metrics
        print(f"{agent.name:<12}{name:<20}{m.computation_time_ms:>12.3f}"
              f"{m.nodes_explored:>10}{m.path_length:>8}{m.path_cost:>10.1f}")


def visualize(scenario, runs):
    rr.init(f"Planner Comparison - {scenario.name}", spawn=True)
    entity_paths = [f"world/{mode}/{agent.name}" for mode, agents, _, _ in runs for agent in agents]
    rr.send_blueprint(setup_planner_viewer_blueprint(entity_paths))

    log_grid(scenario.grid)
    for mode, agents, results, navmesh in runs:
        if navmesh is not None:
            log_navmesh(navmesh)
        for index, (agent, result) in enumerate(zip(agents, results)):
            if result is not None:
                log_planning_result(result, f"world/{mode}/{agent.name}",
                                    AGENT_COLORS[index % len(AGENT_COLORS)])


def main():
    parser = argparse.ArgumentParser(
        description="Compare grid and navmesh path planning algorithms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a scenario file in the mode it declares
  python compare_planners.py -i examples/scenarios/corridors.json

  # All algorithms on a grid image, both representations
  python compare_planners.py --grid map.png --start 14 5 --goal 14 35 --mode both

  # Reproducible RRT, export and visualize
  python compare_planners.py -i examples/scenarios/corridors.json --seed 7 -o results.json --visualize

  # Export under output/plans_corridors/results.json
  python compare_planners.py -i examples/scenarios/corridors.json --output-dir output
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-i", "--input", type=Path, help="Scenario JSON file")
    source.add_argument("--grid", type=Path, help="Grid JSON or occupancy image")
    parser.add_argument("--start", nargs=2, type=int, help="Start cell (row col)")
    parser.add_argument("--goal", nargs=2, type=int, help="Goal cell (row col)")
    parser.add_argument("--mode", choices=["grid", "navmesh", "both"], default=None,
                        help="Map representation (default: scenario's, or grid)")
    parser.add_argument("--algorithms", nargs="+", choices=[a.value for a in Algorithm],
                        help="Only run these algorithms")
    parser.add_argument("--seed", type=int, help="Random seed for RRT")
    parser.add_argument("-o", "--output", type=Path, help="Output JSON file for results")
    parser.add_argument("--output-dir", type=Path,
                        help="Write results.json under <dir>/plans_<scenario> (ignored with -o)")
    parser.add_argument("--visualize", action="store_true", help="Show results in Rerun")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Planner log level (default: WARNING)")

    args = parser.parse_args()
    setup_logger(args.log_level)

    source_path = args.input or args.grid
    if not source_path.exists():
        print(f"Error: {source_path} does not exist")
        return 1

    try:
        scenario = build_scenario(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    mode = args.mode or scenario.map_type
    modes = ["grid", "navmesh"] if mode == "both" else [mode]
    grid = scenario.grid

    print(f"Scenario: {scenario.name}")
    if scenario.description:
        print(f"  {scenario.description}")
    print(f"  Grid size: {grid.rows}x{grid.cols}")
    print(f"  Obstacles: {int(grid.occupancy.sum()):,}")
    print(f"  Agents: {len(scenario.agents)}")

    rng = np.random.default_rng(args.seed)
    runs = []
    navmesh = None
    for run_mode in modes:
        results = []
        for agent in tqdm(scenario.agents, desc=f"Planning ({run_mode})"):
            try:
                (result,), navmesh_out = plan_agents(grid, [agent], run_mode, navmesh, rng=rng)
            except ValueError as e:
                print(f"Error: agent {agent.name}: {e}")
                return 1
            navmesh = navmesh_out or navmesh
            results.append(result)
        runs.append((run_mode, scenario.agents, results, navmesh if run_mode == "navmesh" else None))
        print_comparison(run_mode, scenario.agents, results)
        if run_mode == "navmesh" and navmesh is not None:
            print(f"  NavMesh: {len(navmesh.waypoints)} waypoints, {len(navmesh.edges)} edges")

    output_path = args.output
    if output_path is None and args.output_dir is not None:
        output_path = get_output_dir(args.output_dir, scenario.name) / "results.json"

    if output_path:
        export_data = {"scenario": scenario.name, "runs": {}}
        for run_mode, agents, results, run_navmesh in runs:
            export_data["runs"][run_mode] = {
                "agents": [
                    {
                        "name": agent.name,
                        "algorithm": agent.algorithm,
                        "result": result_to_dict(result) if result is not None else None,
                    }
                    for agent, result in zip(agents, results)
                ],
            }
            if run_navmesh is not None:
                export_data["runs"][run_mode]["navmesh"] = navmesh_to_dict(run_navmesh)
        if save_json(export_data, output_path):
            print(f"\n✓ Exported planning results to {output_path}")

    if args.visualize:
        print("\nVisualizing in Rerun...")
        visualize(scenario, runs)

    return 0


if __name__ == "__main__":
    sys.exit(main())
