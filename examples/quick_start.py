"""Quick start example: interpolate, differentiate and integrate with a Lagrange basis."""

import math

import numpy as np

from pylagrange import LagrangeBasis

# Chebyshev points of the first kind on [-1, 1], mapped onto [-pi/2, pi/2]
n = 12
k = np.arange(n)
ref_nodes = np.sort(np.cos((2 * k + 1) * math.pi / (2 * n)))
basis = LagrangeBasis.on_interval(ref_nodes, -math.pi / 2, math.pi / 2)
print(basis)

# Nodal values of cos(x) are the expansion coefficients
values = np.cos(basis.nodes)

x = 0.7
approx = basis.interpolate(values, [x])[0]
print(f"\ncos(x) exact:  {math.cos(x):.10f}")
print(f"cos(x) approx: {approx:.10f}")
print(f"error:         {abs(approx - math.cos(x)):.2e}")

# Derivative
dfdx = basis.eval_expansion_derivative(values, [x])[0]
print(f"\n-sin(x) exact: {-math.sin(x):.10f}")
print(f"d/dx approx:   {dfdx:.10f}")
print(f"error:         {abs(dfdx + math.sin(x)):.2e}")

# Definite integral over [-pi/2, pi/2] from the antiderivatives at the right endpoint
weights = np.array([
    basis.eval_element_antiderivative(i, math.pi / 2) for i in range(len(basis))
])
integral = weights @ values
print(f"\nintegral exact:  {2.0:.10f}")
print(f"integral approx: {integral:.10f}")
print(f"error:           {abs(integral - 2.0):.2e}")
