"""
Fenwick (binary indexed) tree.

1D prefix sums and point updates in O(log n). 1-indexed.
"""

import numpy as np
from typing import Sequence, Union


class Fenwick:
    """
    Prefix-sum tree over positions 1..n.

    Parameters
    ----------
    size_or_values : int or sequence
        An int builds an all-zero tree of that length. A sequence builds a
        tree whose position i holds values[i - 1].
    dtype : numpy dtype
        Element type of the stored sums (default int64).
    """

    def __init__(self, size_or_values: Union[int, Sequence], dtype=np.int64):
        if isinstance(size_or_values, (int, np.integer)):
            n = int(size_or_values)
            if n < 0:
                raise ValueError(f"length must be non-negative, got {n}")
            self.data = np.zeros(n + 1, dtype=dtype)
            return

        raw = np.asarray(size_or_values)
        values = raw.astype(dtype)
        if not np.array_equal(values, raw):
            raise ValueError(f"initial values are not exactly representable as {values.dtype}")
        n = len(values)
        self.data = np.zeros(n + 1, dtype=dtype)
        self.data[1:] = values

        # Linear build: push each node's sum into its parent
        for i in range(1, n + 1):
            j = i + (i & -i)
            if j <= n:
                self.data[j] += self.data[i]

    def __len__(self) -> int:
        return len(self.data) - 1

    def _check_index(self, index: int, lowest: int = 1):
        if not lowest <= index <= len(self):
            raise IndexError(f"index {index} out of range [{lowest}, {len(self)}]")

    def _exact(self, delta):
        """Convert delta to the tree dtype, refusing lossy conversions."""
        converted = self.data.dtype.type(delta)
        if converted != delta:
            raise ValueError(f"delta {delta!r} is not exactly representable as {self.data.dtype}")
        return converted

    def update(self, index: int, delta):
        """Add delta to the element at index."""
        self._check_index(index)
        delta = self._exact(delta)
        n = len(self)
        while index <= n:
            self.data[index] += delta
            index += index & -index

    def prefix_sum(self, index: int):
        """Return the sum of elements 1..index. prefix_sum(0) is 0."""
        self._check_index(index, lowest=0)
        total = self.data.dtype.type(0)
        while index > 0:
            total += self.data[index]
            index -= index & -index
        return total

    def range_sum(self, lo: int, hi: int):
        """Return the sum of elements lo..hi (inclusive)."""
        self._check_index(lo)
        self._check_index(hi)
        return self.prefix_sum(hi) - self.prefix_sum(lo - 1)
