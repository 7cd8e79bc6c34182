"""
Weighted node priority queue used by MCS-M.

Nodes ``0 .. n-1`` start at weight 0. `pop` removes the node of maximum
weight, breaking ties by the smallest node id, so runs are reproducible.
Weights only ever increase, which lets the heap keep stale entries around
and skip them lazily on `pop`.
"""

import heapq
from typing import List, Tuple

import numpy as np

Node = int


class IncreasingWeightNodeQueue:
    """Max-weight queue over a fixed set of integer nodes."""

    def __init__(self, n_nodes: int) -> None:
        self._weights = np.zeros(n_nodes, dtype=int)
        self._removed_mask = np.zeros(n_nodes, dtype=bool)
        self._remaining = n_nodes
        # (-weight, node): heapq is a min-heap, smallest id wins ties
        self._heap: List[Tuple[int, Node]] = [(0, v) for v in range(n_nodes)]

    def __len__(self) -> int:
        return self._remaining

    def is_empty(self) -> bool:
        return self._remaining == 0

    def pop(self) -> Node:
        """Remove and return the node of maximum weight."""
        while self._heap:
            neg_weight, v = heapq.heappop(self._heap)
            if self._removed_mask[v] or -neg_weight != self._weights[v]:
                # stale entry, superseded by a later increase
                continue
            self._removed_mask[v] = True
            self._remaining -= 1
            return v
        raise IndexError("pop from an empty node queue")

    def get_weight(self, v: Node) -> int:
        """Current weight of `v`; a popped node keeps the weight it was popped with."""
        return int(self._weights[v])

    def increase_weight(self, v: Node) -> None:
        if self._removed_mask[v]:
            raise ValueError(f"Node {v} was already popped; its weight is fixed")
        self._weights[v] += 1
        heapq.heappush(self._heap, (-int(self._weights[v]), v))
