"""
Fenwick Tree (Binary Indexed Tree) for Point Updates and Range Sums

This module provides:
- Point update: add a signed delta at one position, O(log n)
- Prefix sum / range sum queries, O(log n)
- O(n) recovery of the underlying values for inspection
"""

from typing import List


class FenwickTree:
    """
    Point-update, range-query binary indexed tree over a fixed number of slots.

    Position i of the 1-based backing array is responsible for the range of
    length lowbit(i) ending at i. Updates walk upward by adding the lowest set
    bit; prefix sums walk downward by removing it.

    Update: O(log n)
    Query: O(log n)
    """

    def __init__(self, size: int):
        """
        Initialize a tree with all values zero.

        Args:
            size: Number of logical slots (capacity is fixed)
        """
        if size < 0:
            raise ValueError(f"Fenwick tree size must be non-negative, got {size}")

        self.size = size
        self.tree: List[int] = [0] * (size + 1)

    def __len__(self):
        return self.size

    def point_update(self, index: int, delta: int):
        """
        Add delta to the value at a 0-based index.

        Bounds are the caller's responsibility.
        """
        index += 1
        while index <= self.size:
            self.tree[index] += delta
            index += index & -index

    def _prefix_sum(self, index: int) -> int:
        """Sum of values at positions 0..index inclusive (0 when index < 0)."""
        total = 0
        index += 1
        while index > 0:
            total += self.tree[index]
            index -= index & -index
        return total

    def range_sum(self, start: int, end: int) -> int:
        """
        Sum of values in [start, end], both inclusive.

        Args:
            start: First 0-based index (start <= end)
            end: Last 0-based index

        Returns:
            Sum of the logical values in the range
        """
        return self._prefix_sum(end) - self._prefix_sum(start - 1)

    def total(self) -> int:
        """Sum of every value in the tree."""
        return self._prefix_sum(self.size - 1)

    def frequencies(self) -> List[int]:
        """
        Recover the logical values in O(n).

        Each node's parent in the update tree also covers the node's range,
        so subtracting a node's partial sum from its parent leaves the
        parent's own value once all children have been subtracted.
        """
        values = self.tree[1:]
        for idx in range(1, self.size + 1):
            parent = idx + (idx & -idx)
            if parent <= self.size:
                values[parent - 1] -= self.tree[idx]
        return values


def demo_fenwick_tree():
    """Small walkthrough of point updates and range sums."""
    tree = FenwickTree(6)
    tree.point_update(2, 1)
    tree.point_update(4, 1)

    print("Fenwick Tree Walkthrough:")
    print("-" * 50)
    for start, end in [(0, 5), (0, 1), (2, 4), (3, 3)]:
        print(f"range_sum({start}, {end}) = {tree.range_sum(start, end)}")

    tree.point_update(2, -1)
    print(f"\nAfter turning off index 2: {tree.frequencies()}")


if __name__ == "__main__":
    demo_fenwick_tree()
