"""Shared test fixtures for PyLagrange tests."""

import math

import numpy as np
import pytest

from pylagrange import LagrangeBasis


# ---------------------------------------------------------------------------
# Node sets and helpers
# ---------------------------------------------------------------------------

def chebyshev_nodes(n):
    """Chebyshev points of the first kind on [-1, 1], ascending."""
    k = np.arange(n)
    return np.sort(np.cos((2 * k + 1) * math.pi / (2 * n)))


def central_difference(f, x, h=1e-5):
    """Second-order centered finite difference of a scalar function."""
    return (f(x + h) - f(x - h)) / (2 * h)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def basis_3():
    """Basis on the nodes [-1, 0, 1]."""
    return LagrangeBasis([-1.0, 0.0, 1.0])


@pytest.fixture
def basis_cheb_8():
    """Basis on 8 Chebyshev points in [-1, 1]."""
    return LagrangeBasis(chebyshev_nodes(8))


@pytest.fixture
def basis_scattered():
    """Basis on unevenly spaced, unsorted nodes in [0, 2]."""
    return LagrangeBasis([1.3, 0.0, 0.45, 2.0, 1.7], support=(0.0, 2.0))


@pytest.fixture(params=[1, 2, 3, 5, 8], ids=lambda n: f"n={n}")
def basis_any(request):
    """Chebyshev bases of several sizes."""
    return LagrangeBasis(chebyshev_nodes(request.param))
