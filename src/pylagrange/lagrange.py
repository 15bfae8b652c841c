"""Lagrange polynomial basis on a set of scattered nodes.

The basis functions are

.. math::

    l_i(x) = \\prod_{j \\neq i} \\frac{x - \\xi_j}{\\xi_i - \\xi_j}

for distinct nodes :math:`\\xi_0, \\dots, \\xi_{n-1}` inside a closed
interval. The reciprocal node differences and the normalizing products
are computed once at construction, so evaluating an element costs O(n)
and its derivative O(n^2). Antiderivatives go through the monomial form
of :math:`l_i`, obtained from the inverse Vandermonde matrix.

References
----------
- Berrut & Trefethen (2004), "Barycentric Lagrange Interpolation",
  SIAM Review 46(3):501-517
"""

from __future__ import annotations

import os
import pickle
import time
import warnings
from typing import Tuple

import numpy as np
from numpy.polynomial import Polynomial
from numpy.polynomial import polynomial as P
from scipy.linalg import inv

from pylagrange.basis import PolynomialBasis
from pylagrange.exceptions import DegenerateNodesError
from pylagrange.grid import Interval, ScatteredGrid

# Condition number of the Vandermonde matrix above which antiderivatives
# are unreliable.
VANDERMONDE_COND_WARN = 1e12


class LagrangeIndex(int):
    """Native index of a Lagrange basis element (0-based node index)."""

    def __repr__(self) -> str:
        return f"LagrangeIndex({int(self)})"


def compute_reciprocal_differences(nodes: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Compute reciprocal node differences and Lagrange denominators.

    Parameters
    ----------
    nodes : ndarray
        Interpolation nodes of shape (n,).

    Returns
    -------
    diffs : ndarray of shape (n, n)
        ``diffs[i, j] = 1 / (nodes[i] - nodes[j])`` for ``i != j``. The
        diagonal is unused and set to 0.
    denom : ndarray of shape (n,)
        ``denom[i] = prod_{j != i} diffs[i, j]``.

    Raises
    ------
    DegenerateNodesError
        If two nodes coincide, or if a normalizing product ``denom[i]``
        overflows or underflows.
    """
    n = len(nodes)
    c = nodes[:, np.newaxis] - nodes
    np.fill_diagonal(c, 1.0)

    coincident = np.argwhere(c == 0.0)
    if len(coincident) > 0:
        i, j = sorted(int(k) for k in coincident[0])
        raise DegenerateNodesError(
            f"Nodes {i} and {j} coincide (both equal {nodes[i]})"
        )

    with np.errstate(over="ignore"):
        diffs = 1.0 / c
    if not np.isfinite(diffs).all():
        i, j = sorted(int(k) for k in np.argwhere(~np.isfinite(diffs))[0])
        raise DegenerateNodesError(
            f"Nodes {i} and {j} are too close to be distinguished "
            f"({nodes[i]} vs {nodes[j]})"
        )
    np.fill_diagonal(diffs, 0.0)

    denom = np.ones(n)
    with np.errstate(over="ignore", under="ignore"):
        for i in range(n):
            for j in range(n):
                if j != i:
                    denom[i] *= diffs[i, j]

    bad = np.where(~np.isfinite(denom) | (denom == 0.0))[0]
    if len(bad) > 0:
        i = int(bad[0])
        kind = "underflows" if denom[i] == 0.0 else "overflows"
        raise DegenerateNodesError(
            f"Normalizing product of node {i} ({nodes[i]}) {kind}; "
            f"rescale the nodes to an interval of moderate width"
        )
    return diffs, denom


def compute_vandermonde_inverse(nodes: np.ndarray) -> Tuple[np.ndarray, float]:
    """Invert the Vandermonde matrix ``V[k, i] = nodes[i] ** k``.

    Row ``i`` of the inverse holds the ascending monomial coefficients of
    the ``i``-th Lagrange polynomial.

    Parameters
    ----------
    nodes : ndarray
        Distinct interpolation nodes of shape (n,).

    Returns
    -------
    vdminv : ndarray of shape (n, n)
        Inverse of ``V``.
    cond : float
        2-norm condition number of ``V``.
    """
    vdm = np.vander(nodes, increasing=True).T
    cond = float(np.linalg.cond(vdm))
    return inv(vdm), cond


class LagrangeBasis(PolynomialBasis):
    """Basis of Lagrange polynomials on a set of scattered nodes.

    Pre-computes the reciprocal node differences, the normalizing
    denominators and the inverse Vandermonde matrix at construction. The
    instance is immutable afterwards: all stored arrays are read-only, so
    it can be shared between threads without locking.

    Parameters
    ----------
    nodes : ScatteredGrid or array_like
        Distinct interpolation nodes. A plain array is wrapped in a
        :class:`ScatteredGrid` over *support*.
    support : Interval or (float, float), optional
        Interval the nodes must lie in when *nodes* is not already a grid.
        Default is ``[-1, 1]``.
    verbose : bool, optional
        If True, print construction statistics. Default is False.

    Raises
    ------
    DomainError
        If a node lies outside the support interval.
    DegenerateNodesError
        If two nodes coincide, or if a normalizing product overflows or
        underflows.

    Warns
    -----
    RuntimeWarning
        If the Vandermonde matrix is ill-conditioned, which makes
        antiderivatives inaccurate.

    Examples
    --------
    >>> basis = LagrangeBasis([-1.0, 0.0, 1.0])
    >>> basis.eval_element(0, -1.0)
    1.0
    >>> basis.eval_element(1, 0.0)
    1.0
    """

    def __init__(self, nodes, support=None, verbose: bool = False):
        if isinstance(nodes, ScatteredGrid):
            if support is not None:
                raise ValueError(
                    "support must not be given together with a ScatteredGrid"
                )
            grid = nodes
        else:
            grid = ScatteredGrid(nodes, support)

        start = time.time()
        xi = grid.points

        # Step 1: reciprocal differences and denominators
        diffs, denom = compute_reciprocal_differences(xi)

        # Step 2: inverse Vandermonde matrix for antiderivatives
        vdminv, cond = compute_vandermonde_inverse(xi)
        if cond > VANDERMONDE_COND_WARN:
            warnings.warn(
                f"Vandermonde matrix of {len(xi)} nodes is ill-conditioned "
                f"(cond={cond:.2e}); antiderivatives may be inaccurate.",
                RuntimeWarning,
                stacklevel=2,
            )

        for arr in (diffs, denom, vdminv):
            arr.flags.writeable = False

        self.n: int = len(xi)
        self.grid: ScatteredGrid = grid
        self.denom: np.ndarray = denom
        self.diffs: np.ndarray = diffs
        self.vdminv: np.ndarray = vdminv
        self.vandermonde_cond: float = cond
        self.build_time: float = time.time() - start

        if verbose:
            print(f"Built Lagrange basis ({self.n} nodes) in {self.build_time:.3f}s "
                  f"(cond(V)={cond:.2e})")

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def on_interval(cls, nodes, a: float, b: float, **kwargs) -> "LagrangeBasis":
        """Build a basis from reference nodes in ``[-1, 1]`` mapped onto ``[a, b]``.

        Parameters
        ----------
        nodes : array_like
            Nodes in the reference interval ``[-1, 1]``.
        a, b : float
            Target interval, ``a < b``.

        Returns
        -------
        LagrangeBasis
        """
        return cls(ScatteredGrid(nodes).rescale(a, b), **kwargs)

    def similar(self, nodes) -> "LagrangeBasis":
        """Build a basis of the same type on *nodes*.

        A plain array of nodes is validated against this basis' support.
        """
        if isinstance(nodes, ScatteredGrid):
            return type(self)(nodes)
        return type(self)(nodes, self.support)

    def rescale(self, a: float, b: float) -> "LagrangeBasis":
        """Return a new basis with the nodes mapped affinely onto ``[a, b]``."""
        return self.similar(self.grid.rescale(a, b))

    # ------------------------------------------------------------------
    # Basis properties
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> np.ndarray:
        return self.grid.points

    @property
    def n_nodes(self) -> int:
        return self.n

    @property
    def support(self) -> Interval:
        return self.grid.support

    @property
    def has_derivative(self) -> bool:
        return True

    @property
    def has_antiderivative(self) -> bool:
        return True

    def __len__(self) -> int:
        return self.n

    def native_index(self, idx: int) -> LagrangeIndex:
        return LagrangeIndex(idx)

    # ------------------------------------------------------------------
    # Element evaluation
    # ------------------------------------------------------------------
    #
    # The unsafe evaluators trust the caller: idx must satisfy
    # 0 <= idx < n. Use eval_element() and friends for checked access.

    def unsafe_eval_element(self, idx, x: float) -> float:
        """Evaluate ``l_idx(x)`` as ``denom[idx] * prod_{j != idx} (x - nodes[j])``."""
        diff = x - self.nodes
        diff[idx] = 1.0
        return float(np.prod(diff) * self.denom[idx])

    def unsafe_eval_element_derivative(self, idx, x: float) -> float:
        """Evaluate ``l_idx'(x)`` with the product rule.

        Sums, over every ``l != idx``, the product of ``diffs[idx, l]`` and
        the remaining normalized factors ``(x - nodes[k]) * diffs[idx, k]``.
        """
        d = self.diffs[idx]
        factors = (x - self.nodes) * d
        factors[idx] = 1.0

        y = 0.0
        for l in range(self.n):
            if l == idx:
                continue
            z = d[l]
            for k in range(self.n):
                if k != idx and k != l:
                    z *= factors[k]
            y += z
        return float(y)

    def monomial_coefficients(self, idx) -> np.ndarray:
        """Ascending monomial coefficients of ``l_idx``."""
        e = np.zeros(self.n)
        e[idx] = 1.0
        return e @ self.vdminv

    def unsafe_eval_element_antiderivative(self, idx, x: float) -> float:
        """Evaluate ``int_{left}^{x} l_idx(t) dt`` via the monomial form of ``l_idx``."""
        lint = Polynomial(self.monomial_coefficients(idx)).integ()
        return float(lint(x) - lint(self.support.left))

    # ------------------------------------------------------------------
    # Vectorized evaluation
    # ------------------------------------------------------------------

    def eval_basis(self, xs) -> np.ndarray:
        """Evaluate every basis element at *xs*, shape (m, n), by broadcasting."""
        diff = self._as_points(xs)[:, np.newaxis] - self.nodes
        # (m, n, n): factor j of element i, with the j == i factor set to 1
        factors = np.where(np.eye(self.n, dtype=bool), 1.0, diff[:, np.newaxis, :])
        return np.prod(factors, axis=2) * self.denom

    def eval_basis_derivative(self, xs) -> np.ndarray:
        """Derivative of every basis element at *xs*, shape (m, n)."""
        diff = self._as_points(xs)[:, np.newaxis] - self.nodes
        vals = np.zeros(diff.shape)
        for i in range(self.n):
            d = self.diffs[i]
            factors = diff * d
            factors[:, i] = 1.0
            for l in range(self.n):
                if l == i:
                    continue
                rest = factors.copy()
                rest[:, l] = 1.0
                vals[:, i] += d[l] * np.prod(rest, axis=1)
        return vals

    def eval_basis_antiderivative(self, xs) -> np.ndarray:
        """Antiderivative of every basis element at *xs*, shape (m, n).

        Integrates all rows of :attr:`vdminv` at once with
        :func:`numpy.polynomial.polynomial.polyint`.
        """
        xs = self._as_points(xs)
        lint = P.polyint(self.vdminv.T, axis=0)
        return (P.polyval(xs, lint) - P.polyval(self.support.left, lint)[:, np.newaxis]).T

    def interpolate(self, values, xs) -> np.ndarray:
        """Evaluate the interpolant through ``(nodes[i], values[i])`` at *xs*.

        Equivalent to :meth:`eval_expansion`; *values* may be (n,) or (n, k).
        """
        return self.eval_expansion(values, xs)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, LagrangeBasis):
            return NotImplemented
        return type(self) is type(other) and self.grid == other.grid

    __hash__ = None

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def __getstate__(self) -> dict:
        """Return picklable state stamped with the package version."""
        from pylagrange._version import __version__

        state = self.__dict__.copy()
        state["_pylagrange_version"] = __version__
        return state

    def __setstate__(self, state: dict) -> None:
        """Restore state and make the stored tables read-only again."""
        from pylagrange._version import __version__

        saved_version = state.pop("_pylagrange_version", None)
        if saved_version is not None and saved_version != __version__:
            warnings.warn(
                f"This object was saved with pylagrange {saved_version}, "
                f"but you are loading it with {__version__}. "
                f"Evaluation results may differ if internal data layout changed.",
                UserWarning,
                stacklevel=2,
            )

        self.__dict__.update(state)
        for arr in (self.diffs, self.denom, self.vdminv):
            arr.flags.writeable = False

    def save(self, path: str | os.PathLike) -> None:
        """Save the basis to a file.

        Parameters
        ----------
        path : str or path-like
            Destination file path.
        """
        with open(os.fspath(path), "wb") as f:
            pickle.dump(self, f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, path: str | os.PathLike) -> "LagrangeBasis":
        """Load a basis written by :meth:`save`.

        The stored tables are restored as saved and made read-only again;
        nothing is recomputed. Raises ``TypeError`` if the file holds
        anything but a :class:`LagrangeBasis`. The file is unpickled, so
        only load files you trust.
        """
        with open(os.fspath(path), "rb") as f:
            obj = pickle.load(f)  # noqa: S301
        if not isinstance(obj, cls):
            raise TypeError(
                f"{os.fspath(path)} holds a {type(obj).__name__}, not a {cls.__name__}"
            )
        return obj

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"LagrangeBasis("
            f"n={self.n}, "
            f"support=[{self.support.left}, {self.support.right}])"
        )

    def __str__(self) -> str:
        max_display = 6
        if self.n > max_display:
            nodes_str = (
                "["
                + ", ".join(f"{x:.6g}" for x in self.nodes[:max_display])
                + ", ...]"
            )
        else:
            nodes_str = "[" + ", ".join(f"{x:.6g}" for x in self.nodes) + "]"

        lines = [
            f"LagrangeBasis ({self.n} nodes, degree {self.degree})",
            f"  Nodes:       {nodes_str}",
            f"  Support:     [{self.support.left}, {self.support.right}]",
            f"  cond(V):     {self.vandermonde_cond:.2e}",
        ]
        return "\n".join(lines)
