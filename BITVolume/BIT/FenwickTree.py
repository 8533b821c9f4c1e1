import numpy as np


def lowbit(i):
    return i & -i


class FenwickTree(object):
    """
    A data structure for maintaining cumulative (prefix) sums.
    (aka "binary indexed tree")
    Incrementing a value is O(log n).
    Calculating a cumulative sum is O(log n).
    Retrieving a single value is a special case of calculating a range
    sum, and is thus O(log n).

    Positions are 1-based and run from 1 to n. Accumulator i holds the sum of
    the positions i - lowbit(i) + 1 .. i. Index 0 of the backing array is
    never written.

    Every method is total: an index outside [1, n] is clamped, ignored or
    summed as zero, never rejected. Use StrictFenwickTree to get IndexError
    instead.
    """
    def __init__(self, n):
        """ Initializes max(n, 0) values to zero. """
        self._n = max(int(n), 0)
        self._v = np.zeros(self._n + 1, dtype=np.int64)

    def __len__(self):
        return self._n

    def size(self):
        """ Returns the highest valid index. """
        return self._n

    def reset(self):
        """ Sets every value back to zero, keeping the same storage. """
        self._v.fill(0)

    def add(self, idx, delta):
        """ Adds delta to the idx'th value (1-based). Out of range idx is ignored. """
        if idx < 1 or idx > self._n:
            return
        while idx <= self._n:
            self._v[idx] += delta
            idx += lowbit(idx)

    def prefix_sum(self, idx):
        """ Returns the sum of values 1..idx, with idx clamped to n. """
        if idx <= 0:
            return 0
        if idx > self._n:
            idx = self._n
        _sum = 0
        while idx > 0:
            _sum += int(self._v[idx])
            idx -= lowbit(idx)
        return _sum

    def range_sum(self, left, right):
        """
        Returns the sum of values left..right (both inclusive).
        The bounds may be given in either order. The part of the range
        lying outside [1, n] contributes nothing.
        """
        if left > right:
            left, right = right, left
        if right < 1 or left > self._n:
            return 0
        left = max(left, 1)
        right = min(right, self._n)
        return self.prefix_sum(right) - self.prefix_sum(left - 1)

    def value_at(self, idx):
        return self.range_sum(idx, idx)

    def __getitem__(self, idx):
        return self.value_at(idx)

    def set(self, idx, value):
        # It's more efficient to use add directly, as set costs an
        # extra range query.
        if idx < 1 or idx > self._n:
            return
        self.add(idx, value - self.value_at(idx))

    def frequencies(self):
        """ Retrieves all values in O(n). """
        _frequencies = [0] * self._n
        for idx in range(1, self._n + 1):
            _frequencies[idx - 1] += int(self._v[idx])
            parent_idx = idx + lowbit(idx)
            if parent_idx <= self._n:
                _frequencies[parent_idx - 1] -= int(self._v[idx])
        return _frequencies

    @classmethod
    def from_frequencies(cls, frequencies):
        """ Builds a tree holding the given values in O(n). frequencies[0] lands at position 1. """
        tree = cls(len(frequencies))
        tree._v[1:] = np.asarray(frequencies, dtype=np.int64)
        for idx in range(1, tree._n + 1):
            parent_idx = idx + lowbit(idx) # parent in update tree
            if parent_idx <= tree._n:
                tree._v[parent_idx] += tree._v[idx]
        return tree

    def resized(self, n):
        """
        Returns a new tree of capacity max(n, 0) holding the same values.
        Values at positions beyond the new capacity are dropped. The capacity
        of an existing tree never changes.
        """
        n = max(int(n), 0)
        values = self.frequencies()[:n]
        values += [0] * (n - len(values))
        return type(self).from_frequencies(values)

    def update_path(self, idx):
        """ Indices of the accumulators touched by add(idx, .). """
        path = []
        if idx < 1 or idx > self._n:
            return path
        while idx <= self._n:
            path.append(idx)
            idx += lowbit(idx)
        return path

    def query_path(self, idx):
        """ Indices of the accumulators read by prefix_sum(idx). """
        path = []
        idx = min(idx, self._n)
        while idx > 0:
            path.append(idx)
            idx -= lowbit(idx)
        return path

    def covered_range(self, idx):
        """ Inclusive range of positions summed by accumulator idx, or None. """
        if idx < 1 or idx > self._n:
            return None
        return (idx - lowbit(idx) + 1, idx)

    def __eq__(self, other):
        return isinstance(other, FenwickTree) and self._n == other._n and np.array_equal(self._v, other._v)

    def __repr__(self):
        return f"{type(self).__name__}({self._n})"


class StrictFenwickTree(FenwickTree):
    """
    A FenwickTree which raises instead of clamping.

    add, set and value_at need 1 <= idx <= n, prefix_sum needs 0 <= idx <= n,
    and both range_sum bounds must lie in [1, n] (in either order).
    Anything else raises IndexError. A negative size raises ValueError.
    """
    def __init__(self, n):
        if n < 0:
            raise ValueError(f"size must be non-negative, got {n}")
        super().__init__(n)

    def _check(self, idx, low=1):
        if idx < low or idx > self._n:
            raise IndexError(f"index {idx} out of range [{low}, {self._n}]")

    def add(self, idx, delta):
        self._check(idx)
        super().add(idx, delta)

    def prefix_sum(self, idx):
        self._check(idx, low=0)
        return super().prefix_sum(idx)

    def range_sum(self, left, right):
        self._check(left)
        self._check(right)
        return super().range_sum(left, right)

    def set(self, idx, value):
        self._check(idx)
        super().set(idx, value)
