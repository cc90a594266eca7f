"""Lazy-propagating interval tree with range add, range max and range sum."""

from __future__ import annotations

import numpy as np

NEG_INF = int(np.iinfo(np.int64).min)


class LazySegmentTree:
    """Tree over the integer positions ``lo..hi`` (inclusive), all starting at zero.

    Nodes live in flat ``int64`` arrays in heap order: node 1 is the root and
    node ``i`` has children ``2i`` and ``2i + 1``.  A node's pending delta sits
    in ``lazy`` until a later visit pushes it into the children.
    """

    def __init__(self, lo: int, hi: int) -> None:
        if hi < lo:
            raise ValueError(f"Empty index range [{lo}, {hi}]")
        self.lo = lo
        self.hi = hi
        size = 4 * (hi - lo + 1)
        self._lo = np.zeros(size, dtype=np.int64)
        self._hi = np.zeros(size, dtype=np.int64)
        self._sum = np.zeros(size, dtype=np.int64)
        self._max = np.zeros(size, dtype=np.int64)
        self._lazy = np.zeros(size, dtype=np.int64)
        self._build(1, lo, hi)

    def _build(self, node: int, lo: int, hi: int) -> None:
        stack = [(node, lo, hi)]
        while stack:
            node, lo, hi = stack.pop()
            self._lo[node] = lo
            self._hi[node] = hi
            if lo < hi:
                mid = lo + (hi - lo) // 2
                stack.append((2 * node, lo, mid))
                stack.append((2 * node + 1, mid + 1, hi))

    def _is_leaf(self, node: int) -> bool:
        return self._lo[node] == self._hi[node]

    def _propagate(self, node: int) -> None:
        delta = self._lazy[node]
        if delta == 0:
            return
        self._sum[node] += delta * (self._hi[node] - self._lo[node] + 1)
        self._max[node] += delta
        if not self._is_leaf(node):
            self._lazy[2 * node] += delta
            self._lazy[2 * node + 1] += delta
        self._lazy[node] = 0

    def update(self, lo: int, hi: int, delta: int) -> None:
        """Add ``delta`` to every position in ``[lo, hi]``; positions outside the tree are ignored."""
        self._update(1, lo, hi, delta)

    def _update(self, node: int, lo: int, hi: int, delta: int) -> None:
        self._propagate(node)
        node_lo, node_hi = int(self._lo[node]), int(self._hi[node])
        if hi < node_lo or node_hi < lo:
            return
        if lo <= node_lo and node_hi <= hi:
            self._sum[node] += delta * (node_hi - node_lo + 1)
            self._max[node] += delta
            if node_lo != node_hi:
                self._lazy[2 * node] += delta
                self._lazy[2 * node + 1] += delta
            return
        left, right = 2 * node, 2 * node + 1
        self._update(left, lo, hi, delta)
        self._update(right, lo, hi, delta)
        self._sum[node] = self._sum[left] + self._sum[right]
        self._max[node] = max(self._max[left], self._max[right])

    def max(self, lo: int, hi: int) -> int:
        return int(self._query_max(1, lo, hi))

    def _query_max(self, node: int, lo: int, hi: int) -> int:
        self._propagate(node)
        node_lo, node_hi = int(self._lo[node]), int(self._hi[node])
        if hi < node_lo or node_hi < lo:
            return NEG_INF
        if lo <= node_lo and node_hi <= hi:
            return int(self._max[node])
        return max(self._query_max(2 * node, lo, hi), self._query_max(2 * node + 1, lo, hi))

    def sum(self, lo: int, hi: int) -> int:
        return int(self._query_sum(1, lo, hi))

    def _query_sum(self, node: int, lo: int, hi: int) -> int:
        self._propagate(node)
        node_lo, node_hi = int(self._lo[node]), int(self._hi[node])
        if hi < node_lo or node_hi < lo:
            return 0
        if lo <= node_lo and node_hi <= hi:
            return int(self._sum[node])
        return self._query_sum(2 * node, lo, hi) + self._query_sum(2 * node + 1, lo, hi)

    def to_array(self) -> np.ndarray:
        """Current value of every position, for inspection."""
        return np.array([self.sum(i, i) for i in range(self.lo, self.hi + 1)], dtype=np.int64)
