"""
Min-priority queue shared by every search algorithm.
"""

from heapq import heappush, heappop
from itertools import count


class PriorityQueue:
    """
    Binary-heap priority queue with FIFO tie breaking.

    There is no decrease-key operation: callers re-insert an item with a
    better priority and ignore the stale entry when it is popped later.
    """

    def __init__(self):
        self._heap = []
        self._counter = count()

    def insert(self, item, priority):
        heappush(self._heap, (priority, next(self._counter), item))

    def extract_min(self):
        """
        Remove and return the item with the lowest priority.

        Raises:
            IndexError: If the queue is empty
        """
        if not self._heap:
            raise IndexError("extract_min from an empty priority queue")
        _, _, item = heappop(self._heap)
        return item

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self):
        return len(self._heap)
