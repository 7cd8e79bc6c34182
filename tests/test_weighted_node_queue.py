"""
Tests for the weighted node priority queue.
"""

import pytest

from weighted_node_queue import IncreasingWeightNodeQueue


class TestIncreasingWeightNodeQueue:
    """Tests for pop order, weights and misuse."""

    def test_ties_pop_smallest_id(self):
        queue = IncreasingWeightNodeQueue(3)

        assert len(queue) == 3
        assert [queue.pop(), queue.pop(), queue.pop()] == [0, 1, 2]
        assert queue.is_empty()

    def test_pops_maximum_weight_first(self):
        queue = IncreasingWeightNodeQueue(4)
        queue.increase_weight(2)
        queue.increase_weight(3)
        queue.increase_weight(3)

        assert queue.get_weight(3) == 2
        assert queue.pop() == 3
        assert queue.pop() == 2
        assert queue.pop() == 0

        queue.increase_weight(1)
        assert queue.get_weight(1) == 1
        assert queue.pop() == 1
        assert len(queue) == 0

    def test_weight_is_fixed_once_popped(self):
        queue = IncreasingWeightNodeQueue(2)
        queue.increase_weight(0)
        v = queue.pop()

        assert v == 0
        assert queue.get_weight(0) == 1
        with pytest.raises(ValueError):
            queue.increase_weight(0)

    def test_pop_from_empty_queue(self):
        queue = IncreasingWeightNodeQueue(0)

        assert queue.is_empty()
        with pytest.raises(IndexError):
            queue.pop()
