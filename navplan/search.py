"""
Open/closed-set best-first search loop shared by the grid and navmesh planners.
"""

from typing import Callable, Dict, Hashable, Iterable, List, Optional, Set, Tuple

from .priority_queue import PriorityQueue

Successors = Callable[[Hashable], Iterable[Tuple[Hashable, float]]]
Priority = Callable[[Hashable, float], float]


class SearchState:
    """Per-query bookkeeping. Never shared between queries."""

    def __init__(self, start):
        self.start = start
        self.came_from: Dict = {}
        self.g_score: Dict = {start: 0.0}
        self.closed: Set = set()
        self.explored: List = []

    def reconstruct(self, node) -> List:
        """Follow predecessors from `node` back to the start."""
        path = [node]
        while node in self.came_from:
            node = self.came_from[node]
            path.append(node)
        path.reverse()
        return path


Relax = Callable[[SearchState, Hashable, Hashable, float], Optional[float]]


def relax_through(state: SearchState, current, neighbor, step_cost: float) -> Optional[float]:
    """Standard relaxation: keep the cheaper of the known and the new route."""
    tentative = state.g_score[current] + step_cost
    if neighbor not in state.g_score or tentative < state.g_score[neighbor]:
        state.came_from[neighbor] = current
        state.g_score[neighbor] = tentative
        return tentative
    return None


def relax_first_reach(state: SearchState, current, neighbor, step_cost: float) -> Optional[float]:
    """Greedy relaxation: a node keeps the first predecessor that reached it."""
    if neighbor in state.g_score:
        return None
    state.came_from[neighbor] = current
    state.g_score[neighbor] = state.g_score[current] + step_cost
    return state.g_score[neighbor]


def run_search(start, goal, successors: Successors, priority: Priority,
               relax: Relax = relax_through) -> Tuple[bool, SearchState]:
    """
    Run one best-first query.

    Args:
        start: Start node (any hashable)
        goal: Goal node
        successors: node -> iterable of (neighbor, step_cost)
        priority: (node, g) -> queue priority
        relax: Relaxation rule; returns the neighbour's new g when improved

    Returns:
        (reached, state). `state.explored` records nodes in closing order.
    """
    state = SearchState(start)
    open_set = PriorityQueue()
    open_set.insert(start, priority(start, 0.0))

    while not open_set.is_empty():
        current = open_set.extract_min()
        # Stale entry left behind by a re-insert
        if current in state.closed:
            continue
        state.closed.add(current)
        state.explored.append(current)

        if current == goal:
            return True, state

        for neighbor, step_cost in successors(current):
            if neighbor in state.closed:
                continue
            new_g = relax(state, current, neighbor, step_cost)
            if new_g is not None:
                open_set.insert(neighbor, priority(neighbor, new_g))

    return False, state
