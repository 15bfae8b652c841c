"""Intervals and node containers for one-dimensional polynomial bases.

A :class:`ScatteredGrid` is an ordered, read-only sequence of nodes that
has been validated against the closed :class:`Interval` it lives in.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from pylagrange.exceptions import DomainError


class Interval:
    """Closed interval ``[left, right]`` with ``left < right``.

    Parameters
    ----------
    left : float
        Left endpoint.
    right : float
        Right endpoint.

    Raises
    ------
    ValueError
        If the endpoints are not finite or ``left >= right``.
    """

    __slots__ = ("_left", "_right")

    def __init__(self, left: float, right: float):
        left = float(left)
        right = float(right)
        if not (np.isfinite(left) and np.isfinite(right)):
            raise ValueError(
                f"Interval endpoints must be finite, got [{left}, {right}]"
            )
        if left >= right:
            raise ValueError(
                f"Interval bounds must satisfy left < right, got [{left}, {right}]"
            )
        self._left = left
        self._right = right

    @property
    def left(self) -> float:
        return self._left

    @property
    def right(self) -> float:
        return self._right

    @property
    def width(self) -> float:
        return self._right - self._left

    @property
    def center(self) -> float:
        return 0.5 * (self._left + self._right)

    def contains(self, x):
        """Boolean mask telling which points of *x* lie in the interval."""
        x = np.asarray(x, dtype=float)
        return (x >= self._left) & (x <= self._right)

    def map_to(self, other: "Interval", x):
        """Affinely map points of *x* from this interval onto *other*.

        The endpoints are mapped exactly: ``left -> other.left`` and
        ``right -> other.right``.
        """
        x = np.asarray(x, dtype=float)
        t = (x - self._left) / self.width
        return (1.0 - t) * other.left + t * other.right

    def __iter__(self) -> Iterator[float]:
        yield self._left
        yield self._right

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._left == other._left and self._right == other._right

    def __hash__(self) -> int:
        return hash((self._left, self._right))

    def __getstate__(self) -> tuple:
        return (self._left, self._right)

    def __setstate__(self, state: tuple) -> None:
        self._left, self._right = state

    def __repr__(self) -> str:
        return f"Interval({self._left}, {self._right})"


def ChebyshevInterval() -> Interval:
    """The reference interval ``[-1, 1]``."""
    return Interval(-1.0, 1.0)


LAGRANGE_INTERVAL = ChebyshevInterval()


class ScatteredGrid:
    """Ordered sequence of nodes inside a closed interval.

    Parameters
    ----------
    points : array_like
        One-dimensional sequence of finite node positions. The order is
        kept as given.
    support : Interval or (float, float), optional
        Interval the nodes must lie in. Default is ``[-1, 1]``.

    Raises
    ------
    ValueError
        If *points* is empty, not one-dimensional, or contains NaN or Inf.
    DomainError
        If a node lies outside *support*.

    Examples
    --------
    >>> grid = ScatteredGrid([-1.0, 0.0, 1.0])
    >>> len(grid)
    3
    >>> grid.rescale(0, 2).points
    array([0., 1., 2.])
    """

    def __init__(self, points, support=None):
        if support is None:
            support = LAGRANGE_INTERVAL
        elif not isinstance(support, Interval):
            support = Interval(*support)

        points = np.array(points, dtype=float)
        if points.ndim != 1:
            raise ValueError(
                f"Grid points must be one-dimensional, got shape {points.shape}"
            )
        if points.size == 0:
            raise ValueError("Grid must contain at least one point")
        if not np.isfinite(points).all():
            raise ValueError("Grid points contain NaN or Inf")

        outside = np.where(~support.contains(points))[0]
        if len(outside) > 0:
            k = int(outside[0])
            raise DomainError(
                f"Node {k} = {points[k]} lies outside the interval "
                f"[{support.left}, {support.right}]"
            )

        points.flags.writeable = False
        self._points = points
        self._support = support

    @property
    def points(self) -> np.ndarray:
        """Read-only array of node positions."""
        return self._points

    @property
    def support(self) -> Interval:
        return self._support

    def rescale(self, a: float, b: float) -> "ScatteredGrid":
        """Return a new grid with the nodes mapped affinely onto ``[a, b]``."""
        target = Interval(a, b)
        mapped = self._support.map_to(target, self._points)
        # Guard the endpoints against round-off pushing a node outside.
        mapped = np.clip(mapped, target.left, target.right)
        return ScatteredGrid(mapped, target)

    def __len__(self) -> int:
        return self._points.size

    def __iter__(self) -> Iterator[float]:
        return (float(p) for p in self._points)

    def __getitem__(self, idx):
        return self._points[idx]

    def __eq__(self, other) -> bool:
        if not isinstance(other, ScatteredGrid):
            return NotImplemented
        return (
            self._support == other._support
            and np.array_equal(self._points, other._points)
        )

    __hash__ = None

    def __setstate__(self, state: dict) -> None:
        self.__dict__.update(state)
        self._points.flags.writeable = False

    def __repr__(self) -> str:
        return (
            f"ScatteredGrid(n={len(self)}, "
            f"support=[{self._support.left}, {self._support.right}])"
        )
