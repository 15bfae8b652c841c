"""Exception types raised while constructing a basis.

Both subclass :class:`ValueError`, so callers that already catch
``ValueError`` for bad arguments keep working.
"""


class DomainError(ValueError):
    """A node lies outside the interval it is declared on."""


class DegenerateNodesError(ValueError):
    """Two interpolation nodes coincide."""
