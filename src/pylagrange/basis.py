"""Generic interface for one-dimensional polynomial bases.

Concrete bases implement the ``unsafe_*`` element evaluators, which take a
native index and perform no bounds checking. The safe ``eval_element*``
wrappers and the vectorized helpers defined here validate the index once
and then delegate to them.
"""

from __future__ import annotations

import abc

import numpy as np

from pylagrange.grid import Interval


class PolynomialBasis(abc.ABC):
    """Parent class for all one-dimensional polynomial bases."""

    @property
    @abc.abstractmethod
    def support(self) -> Interval:
        """The interval on which the basis is defined."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """The number of basis elements."""

    @property
    def degree(self) -> int:
        """Maximal polynomial degree of the basis elements."""
        return len(self) - 1

    @property
    def has_derivative(self) -> bool:
        return False

    @property
    def has_antiderivative(self) -> bool:
        return False

    # ------------------------------------------------------------------
    # Index conventions
    # ------------------------------------------------------------------

    def native_index(self, idx: int):
        """Convert a linear index ``0 <= idx < len(self)`` to a native index."""
        return int(idx)

    def linear_index(self, idxn) -> int:
        """Convert a native index back to a linear index."""
        return int(idxn)

    def _checked_index(self, idx):
        if isinstance(idx, (bool, np.bool_)) or not isinstance(idx, (int, np.integer)):
            raise TypeError(f"Basis index must be int, got {type(idx).__name__}")
        if idx < 0 or idx >= len(self):
            raise IndexError(f"Basis index {idx} out of range [0, {len(self) - 1}]")
        return self.native_index(idx)

    # ------------------------------------------------------------------
    # Element evaluation (no bounds checks)
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def unsafe_eval_element(self, idxn, x: float) -> float:
        """Evaluate basis element *idxn* at *x* without checking *idxn*."""

    def unsafe_eval_element_derivative(self, idxn, x: float) -> float:
        raise NotImplementedError(
            f"{type(self).__name__} does not support derivatives"
        )

    def unsafe_eval_element_antiderivative(self, idxn, x: float) -> float:
        raise NotImplementedError(
            f"{type(self).__name__} does not support antiderivatives"
        )

    # ------------------------------------------------------------------
    # Element evaluation (checked)
    # ------------------------------------------------------------------

    def eval_element(self, idx: int, x: float) -> float:
        """Evaluate basis element *idx* at *x*.

        Parameters
        ----------
        idx : int
            Linear index of the element, ``0 <= idx < len(self)``.
        x : float
            Evaluation point. It is not required to lie in :attr:`support`.

        Returns
        -------
        float
            Value of the element at *x*.

        Raises
        ------
        IndexError
            If *idx* is out of range.
        """
        return self.unsafe_eval_element(self._checked_index(idx), float(x))

    def eval_element_derivative(self, idx: int, x: float) -> float:
        """Evaluate the first derivative of basis element *idx* at *x*.

        Raises
        ------
        NotImplementedError
            If the basis does not support derivatives.
        IndexError
            If *idx* is out of range.
        """
        if not self.has_derivative:
            raise NotImplementedError(
                f"{type(self).__name__} does not support derivatives"
            )
        return self.unsafe_eval_element_derivative(self._checked_index(idx), float(x))

    def eval_element_antiderivative(self, idx: int, x: float) -> float:
        """Evaluate the antiderivative of basis element *idx* at *x*.

        The antiderivative vanishes at the left endpoint of :attr:`support`.

        Raises
        ------
        NotImplementedError
            If the basis does not support antiderivatives.
        IndexError
            If *idx* is out of range.
        """
        if not self.has_antiderivative:
            raise NotImplementedError(
                f"{type(self).__name__} does not support antiderivatives"
            )
        return self.unsafe_eval_element_antiderivative(self._checked_index(idx), float(x))

    # ------------------------------------------------------------------
    # Vectorized evaluation
    # ------------------------------------------------------------------

    def in_support(self, xs) -> np.ndarray:
        """Boolean mask telling which points of *xs* lie in :attr:`support`."""
        return self.support.contains(xs)

    @staticmethod
    def _as_points(xs) -> np.ndarray:
        xs = np.atleast_1d(np.asarray(xs, dtype=float))
        if xs.ndim != 1:
            raise ValueError(f"Points must be one-dimensional, got shape {xs.shape}")
        return xs

    def _eval_matrix(self, evaluator, xs) -> np.ndarray:
        xs = self._as_points(xs)
        n = len(self)
        vals = np.empty((xs.size, n))
        for i in range(n):
            idxn = self.native_index(i)
            for j, x in enumerate(xs):
                vals[j, i] = evaluator(idxn, float(x))
        return vals

    def eval_basis(self, xs) -> np.ndarray:
        """Evaluate every basis element at a set of points.

        Parameters
        ----------
        xs : array_like
            Points of shape (m,).

        Returns
        -------
        ndarray of shape (m, n)
            Element ``(j, i)`` is basis element ``i`` evaluated at ``xs[j]``.
        """
        return self._eval_matrix(self.unsafe_eval_element, xs)

    def eval_basis_derivative(self, xs) -> np.ndarray:
        """Derivative of every basis element at a set of points, shape (m, n)."""
        if not self.has_derivative:
            raise NotImplementedError(
                f"{type(self).__name__} does not support derivatives"
            )
        return self._eval_matrix(self.unsafe_eval_element_derivative, xs)

    def eval_basis_antiderivative(self, xs) -> np.ndarray:
        """Antiderivative of every basis element at a set of points, shape (m, n)."""
        if not self.has_antiderivative:
            raise NotImplementedError(
                f"{type(self).__name__} does not support antiderivatives"
            )
        return self._eval_matrix(self.unsafe_eval_element_antiderivative, xs)

    def _check_coeffs(self, coeffs) -> np.ndarray:
        coeffs = np.asarray(coeffs, dtype=float)
        if coeffs.ndim not in (1, 2) or coeffs.shape[0] != len(self):
            raise ValueError(
                f"coeffs must have shape ({len(self)},) or ({len(self)}, k), "
                f"got {coeffs.shape}"
            )
        return coeffs

    def eval_expansion(self, coeffs, xs) -> np.ndarray:
        """Evaluate ``sum_i coeffs[i] * phi_i(x)`` at each point of *xs*.

        Parameters
        ----------
        coeffs : array_like
            Coefficients of shape (n,) or (n, k). With two dimensions, each
            column is a separate expansion.
        xs : array_like
            Points of shape (m,).

        Returns
        -------
        ndarray
            Shape (m,) for 1-D *coeffs*, otherwise (m, k).

        Raises
        ------
        ValueError
            If the leading dimension of *coeffs* does not match ``len(self)``.
        """
        coeffs = self._check_coeffs(coeffs)
        return self.eval_basis(xs) @ coeffs

    def eval_expansion_derivative(self, coeffs, xs) -> np.ndarray:
        """Derivative of the expansion with coefficients *coeffs* at *xs*."""
        coeffs = self._check_coeffs(coeffs)
        return self.eval_basis_derivative(xs) @ coeffs

    def eval_expansion_antiderivative(self, coeffs, xs) -> np.ndarray:
        """Antiderivative of the expansion with coefficients *coeffs* at *xs*."""
        coeffs = self._check_coeffs(coeffs)
        return self.eval_basis_antiderivative(xs) @ coeffs
