import logging

import numpy as np

_LOGGER = logging.getLogger(__name__)


def _copy_leaf(value):
    # Rows of a 2-D array are views; copy them so the tree owns its leaves.
    if isinstance(value, np.ndarray):
        return value.copy()
    return value


class InvalidRange(ValueError):
    """
    Raised when a query range is empty or falls outside the tree.
    """

    def __init__(self, left, right, size):
        super().__init__(f"Invalid range: {left}, {right} for size {size}")
        self.left = left
        self.right = right
        self.size = size


class SegmentTree:
    """
    Segment tree over a fixed sequence.

    Each element is converted once by ``mapper`` into a leaf result, and
    sibling results are merged with ``op(left, right)``. ``op`` must be
    associative but need not be commutative: the left operand always
    covers the lower indices.

    Nodes are stored in a flat list of ``4 * n`` slots, where the node at
    ``i`` has children at ``2 * i + 1`` and ``2 * i + 2``. Ranges are
    0-indexed and inclusive on both ends.
    """

    def __init__(
        self,
        values,
        mapper,
        op,
    ):
        if not hasattr(values, "__getitem__"):
            values = list(values)

        self._size = len(values)
        self._mapper = mapper
        self._op = op
        self._values = [None] * (4 * self._size)

        if self._size > 0:
            self._build(values, 0, 0, self._size - 1)
        _LOGGER.debug("Built segment tree over %d leaves (%d slots).", self._size, len(self._values))

    def _build(self, values, idx, left, right):
        if left == right:
            self._values[idx] = self._mapper(values[left])
            return

        mid = (left + right) // 2
        child = 2 * idx + 1
        self._build(values, child, left, mid)
        self._build(values, child + 1, mid + 1, right)
        self._values[idx] = self._op(self._values[child], self._values[child + 1])

    def query(self, start, end):
        """
        Fold the leaf results over the inclusive range [start, end].

        Array results are returned as copies, so editing them leaves the
        tree unchanged.
        """
        if start > end or start < 0 or end >= self._size:
            raise InvalidRange(start, end, self._size)
        return _copy_leaf(self._query(0, 0, self._size - 1, start, end))

    def _query(self, idx, left, right, start, end):
        # [start, end] is always contained in [left, right] here.
        if start == left and end == right:
            return self._values[idx]

        mid = (left + right) // 2
        child = 2 * idx + 1
        if end <= mid:
            return self._query(child, left, mid, start, end)
        if start > mid:
            return self._query(child + 1, mid + 1, right, start, end)
        return self._op(
            self._query(child, left, mid, start, mid),
            self._query(child + 1, mid + 1, right, mid + 1, end),
        )

    def set(self, idx, val):
        """
        Replace the element at ``idx`` and refresh its ancestors.

        The index is guarded by an ``assert``, which ``python -O`` strips.
        """
        assert 0 <= idx < self._size
        self._update(0, 0, self._size - 1, idx, val)

    def _update(self, node, left, right, idx, val):
        if left == right:
            self._values[node] = self._mapper(val)
            return

        mid = (left + right) // 2
        child = 2 * node + 1
        if idx <= mid:
            self._update(child, left, mid, idx, val)
        else:
            self._update(child + 1, mid + 1, right, idx, val)
        self._values[node] = self._op(self._values[child], self._values[child + 1])

    def __setitem__(self, idx, val):
        self.set(idx, val)

    def __getitem__(self, idx):
        return self.query(idx, idx)

    def __len__(self):
        return self._size


class SumTree(SegmentTree):
    """
    Sum tree.
    """

    def __init__(self, values, mapper=None):
        super().__init__(values, mapper or _copy_leaf, np.add)

    def find_prefixsum_idx(self, prefixsum):
        """
        Return the first index whose inclusive prefix sum exceeds
        ``prefixsum``, or the last index if none does.
        Leaves must be non-negative scalars; row leaves are not supported.
        """
        assert self._size > 0

        # Traverse to the leaf.
        idx, left, right = 0, 0, self._size - 1
        while left < right:
            mid = (left + right) // 2
            child = 2 * idx + 1
            if self._values[child] > prefixsum:
                idx, right = child, mid
            else:
                prefixsum -= self._values[child]
                idx, left = child + 1, mid + 1
        return left


class MinTree(SegmentTree):
    """
    Min tree.
    """

    def __init__(self, values, mapper=None):
        super().__init__(values, mapper or _copy_leaf, np.minimum)


class MaxTree(SegmentTree):
    """
    Max tree.
    """

    def __init__(self, values, mapper=None):
        super().__init__(values, mapper or _copy_leaf, np.maximum)
