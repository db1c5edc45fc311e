"""numba compiled kernels for the pairwise sums.

Both kernels walk each unordered pair ``(i, j)`` with ``i < j`` exactly once,
in a fixed order, so results are reproducible run to run.
"""

import numba as nb
import numpy as np


@nb.njit(error_model="numpy")
def pairwise_accelerations_jit(positions, masses, g_const, out):
    n = masses.shape[0]
    for i in range(n):
        out[i, 0] = 0.0
        out[i, 1] = 0.0
        out[i, 2] = 0.0
    for i in range(n):
        for j in range(i + 1, n):
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            dz = positions[j, 2] - positions[i, 2]
            r2 = dx * dx + dy * dy + dz * dz
            # No softening: coincident bodies give inf/nan, which propagates.
            f = g_const / (r2 * np.sqrt(r2))
            fi = f * masses[j]
            fj = f * masses[i]
            out[i, 0] += fi * dx
            out[i, 1] += fi * dy
            out[i, 2] += fi * dz
            out[j, 0] -= fj * dx
            out[j, 1] -= fj * dy
            out[j, 2] -= fj * dz
    return out


@nb.njit(error_model="numpy")
def potential_energy_jit(positions, masses, g_const):
    n = masses.shape[0]
    potential = 0.0
    for i in range(n):
        for j in range(i + 1, n):
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            dz = positions[j, 2] - positions[i, 2]
            r = np.sqrt(dx * dx + dy * dy + dz * dz)
            potential -= g_const * masses[i] * masses[j] / r
    return potential
