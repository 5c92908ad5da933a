"""
Tests for the Fenwick tree.

Reference values come from numpy.cumsum over a plain array that receives
the same updates.
"""

import numpy as np
import pytest

from cplib.fenwick import Fenwick


class TestConstruction:

    def test_zero_length_tree(self):
        tree = Fenwick(5)
        assert len(tree) == 5
        for i in range(6):
            assert tree.prefix_sum(i) == 0

    def test_from_values_matches_cumsum(self):
        """Linear build agrees with prefix sums of the input."""
        values = np.arange(1, 101)
        tree = Fenwick(values)
        expected = np.cumsum(values)

        for i in range(1, 101):
            assert tree.prefix_sum(i) == expected[i - 1], f"prefix_sum({i}) mismatch"

    def test_from_list(self):
        tree = Fenwick([3, 1, 4, 1, 5, 9, 2, 6])
        assert tree.prefix_sum(8) == 31
        assert tree.range_sum(3, 6) == 19

    def test_empty(self):
        tree = Fenwick([])
        assert len(tree) == 0
        assert tree.prefix_sum(0) == 0

    def test_float_dtype(self):
        tree = Fenwick([0.5, 0.25, 0.125], dtype=np.float64)
        assert tree.prefix_sum(3) == pytest.approx(0.875)

    def test_negative_length(self):
        with pytest.raises(ValueError):
            Fenwick(-1)


class TestUpdatesAndQueries:

    def test_single_update(self):
        tree = Fenwick(10)
        tree.update(4, 7)

        assert tree.prefix_sum(3) == 0
        assert tree.prefix_sum(4) == 7
        assert tree.prefix_sum(10) == 7
        assert tree.range_sum(4, 4) == 7
        assert tree.range_sum(5, 10) == 0

    def test_random_updates_match_reference(self):
        """Prefix and range sums track a plain array under random updates."""
        rng = np.random.default_rng(0)
        n = 257
        reference = rng.integers(-50, 50, size=n)
        tree = Fenwick(reference)

        for _ in range(2000):
            i = int(rng.integers(1, n + 1))
            delta = int(rng.integers(-100, 100))
            tree.update(i, delta)
            reference[i - 1] += delta

            lo, hi = sorted(int(v) for v in rng.integers(1, n + 1, size=2))
            prefix = np.cumsum(reference)
            assert tree.prefix_sum(hi) == prefix[hi - 1]
            assert tree.range_sum(lo, hi) == reference[lo - 1:hi].sum()

    def test_last_index(self):
        """Updating index n touches only the root path."""
        tree = Fenwick(16)
        tree.update(16, 3)
        assert tree.prefix_sum(15) == 0
        assert tree.prefix_sum(16) == 3


class TestLossyValues:
    """Values the tree dtype cannot hold exactly are rejected, not truncated."""

    def test_fractional_delta_on_int_tree(self):
        tree = Fenwick(4)
        with pytest.raises(ValueError, match="not exactly representable"):
            tree.update(1, 0.5)
        assert tree.prefix_sum(1) == 0

    def test_integral_float_delta_accepted(self):
        tree = Fenwick(4)
        tree.update(2, 3.0)
        assert tree.prefix_sum(4) == 3

    def test_fractional_delta_on_float_tree(self):
        tree = Fenwick(4, dtype=np.float64)
        tree.update(1, 0.5)
        assert tree.prefix_sum(1) == pytest.approx(0.5)

    def test_fractional_initial_values(self):
        with pytest.raises(ValueError, match="not exactly representable"):
            Fenwick([1, 2.5, 3])


class TestIndexing:

    @pytest.mark.parametrize("index", [0, 11, -1])
    def test_update_out_of_range(self, index):
        tree = Fenwick(10)
        with pytest.raises(IndexError):
            tree.update(index, 1)

    @pytest.mark.parametrize("index", [11, -1])
    def test_prefix_out_of_range(self, index):
        tree = Fenwick(10)
        with pytest.raises(IndexError):
            tree.prefix_sum(index)

    def test_range_out_of_range(self):
        tree = Fenwick(10)
        with pytest.raises(IndexError):
            tree.range_sum(0, 5)
        with pytest.raises(IndexError):
            tree.range_sum(1, 11)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
