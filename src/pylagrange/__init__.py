"""PyLagrange: Lagrange polynomial bases on scattered nodes.

Provides the :class:`LagrangeBasis` class, which pre-computes reciprocal
node differences and an inverse Vandermonde matrix once, then evaluates
each Lagrange basis polynomial, its derivative and its antiderivative at
arbitrary points. Bases implement the generic :class:`PolynomialBasis`
interface and are defined on a :class:`ScatteredGrid` of nodes inside a
closed :class:`Interval`.

Example
-------
>>> from pylagrange import LagrangeBasis
>>> basis = LagrangeBasis([-1.0, 0.0, 1.0])
>>> basis.eval_element(1, 0.0)
1.0
>>> round(sum(basis.eval_element(i, 0.5) for i in range(3)), 12)
1.0
"""

from pylagrange._version import __version__
from pylagrange.basis import PolynomialBasis
from pylagrange.exceptions import DegenerateNodesError, DomainError
from pylagrange.grid import LAGRANGE_INTERVAL, ChebyshevInterval, Interval, ScatteredGrid
from pylagrange.lagrange import LagrangeBasis, LagrangeIndex

__all__ = [
    "ChebyshevInterval",
    "DegenerateNodesError",
    "DomainError",
    "Interval",
    "LAGRANGE_INTERVAL",
    "LagrangeBasis",
    "LagrangeIndex",
    "PolynomialBasis",
    "ScatteredGrid",
    "__version__",
]
