"""Tests for Interval and ScatteredGrid."""

import numpy as np
import pytest

from pylagrange import (
    LAGRANGE_INTERVAL,
    ChebyshevInterval,
    DomainError,
    Interval,
    ScatteredGrid,
)


class TestInterval:
    def test_properties(self):
        iv = Interval(-2, 4)
        assert iv.left == -2.0
        assert iv.right == 4.0
        assert iv.width == 6.0
        assert iv.center == 1.0
        assert tuple(iv) == (-2.0, 4.0)

    @pytest.mark.parametrize("left,right", [(1.0, 1.0), (2.0, -1.0)])
    def test_bad_bounds_raise(self, left, right):
        with pytest.raises(ValueError, match="left < right"):
            Interval(left, right)

    def test_infinite_bounds_raise(self):
        with pytest.raises(ValueError, match="finite"):
            Interval(-np.inf, 1.0)

    def test_contains(self):
        iv = Interval(0, 1)
        mask = iv.contains([-0.1, 0.0, 0.5, 1.0, 1.1])
        np.testing.assert_array_equal(mask, [False, True, True, True, False])

    def test_map_to(self):
        src = Interval(-1, 1)
        dst = Interval(-2, 4)
        xs = src.map_to(dst, [-1.0, -2.0 / 3.0, 0.0, 1.0])
        np.testing.assert_allclose(xs, [-2.0, -1.0, 1.0, 4.0], atol=1e-14)

    def test_map_to_roundtrip(self):
        a, b = Interval(-1, 1), Interval(3, 7)
        xs = np.linspace(-1, 1, 9)
        np.testing.assert_allclose(b.map_to(a, a.map_to(b, xs)), xs, atol=1e-14)

    def test_equality_and_hash(self):
        assert Interval(-1, 1) == ChebyshevInterval()
        assert Interval(-1, 1) != Interval(0, 1)
        assert len({Interval(-1, 1), ChebyshevInterval(), LAGRANGE_INTERVAL}) == 1

    def test_repr(self):
        assert repr(Interval(0, 2)) == "Interval(0.0, 2.0)"


class TestScatteredGrid:
    def test_default_support(self):
        grid = ScatteredGrid([-0.5, 0.5])
        assert grid.support == Interval(-1, 1)

    def test_order_kept(self):
        grid = ScatteredGrid([0.3, -0.7, 0.1])
        np.testing.assert_array_equal(grid.points, [0.3, -0.7, 0.1])
        assert list(grid) == [0.3, -0.7, 0.1]
        assert grid[1] == -0.7
        assert len(grid) == 3

    def test_tuple_support(self):
        grid = ScatteredGrid([0.0, 2.0], support=(0, 2))
        assert grid.support == Interval(0, 2)

    def test_endpoints_allowed(self):
        grid = ScatteredGrid([-1.0, 1.0])
        assert len(grid) == 2

    @pytest.mark.parametrize("points", [[-1.5, 0.0], [0.0, 1.0000001]])
    def test_outside_raises_domain_error(self, points):
        with pytest.raises(DomainError, match="outside the interval"):
            ScatteredGrid(points)

    def test_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            ScatteredGrid([3.0], support=(0, 1))

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="at least one point"):
            ScatteredGrid([])

    def test_2d_raises(self):
        with pytest.raises(ValueError, match="one-dimensional"):
            ScatteredGrid([[0.0, 0.5]])

    def test_nan_raises(self):
        with pytest.raises(ValueError, match="NaN or Inf"):
            ScatteredGrid([0.0, np.nan])

    def test_points_read_only(self):
        grid = ScatteredGrid([0.0, 0.5])
        with pytest.raises(ValueError):
            grid.points[0] = 0.25

    def test_input_not_aliased(self):
        src = np.array([0.0, 0.5])
        grid = ScatteredGrid(src)
        src[0] = 0.9
        assert grid[0] == 0.0

    def test_rescale(self):
        grid = ScatteredGrid([-1.0, 0.0, 1.0]).rescale(2, 6)
        np.testing.assert_allclose(grid.points, [2.0, 4.0, 6.0])
        assert grid.support == Interval(2, 6)

    def test_equality(self):
        assert ScatteredGrid([0.0, 0.5]) == ScatteredGrid([0.0, 0.5])
        assert ScatteredGrid([0.0, 0.5]) != ScatteredGrid([0.0, 0.5], support=(0, 1))
        assert ScatteredGrid([0.0, 0.5]) != ScatteredGrid([0.5, 0.0])

    def test_repr(self):
        r = repr(ScatteredGrid([0.0, 0.5, 1.0], support=(0, 1)))
        assert "n=3" in r
        assert "[0.0, 1.0]" in r
