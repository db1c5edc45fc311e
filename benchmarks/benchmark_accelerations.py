import time
import numpy as np

from orrery.constants import AU, EARTH_MASS, G_REAL
from orrery.integrators import compute_accelerations


def compute_accelerations_python(positions, masses, g_constant=G_REAL):
    n = len(masses)
    acc = np.zeros((n, 3), dtype=np.float64)
    for i in range(n):
        r_vec = positions - positions[i]
        dist_sq = np.einsum("ij,ij->i", r_vec, r_vec)
        dist_sq[i] = np.inf
        factors = g_constant * masses / (dist_sq * np.sqrt(dist_sq))
        acc[i] = np.sum(r_vec * factors[:, None], axis=0)
    return acc


if __name__ == "__main__":
    rng = np.random.default_rng(0)
    N = 1500
    positions = rng.random((N, 3)) * AU
    masses = (rng.random(N) + 1.0) * EARTH_MASS

    # warm up JIT
    compute_accelerations(positions, masses)

    t0 = time.time()
    baseline = compute_accelerations_python(positions, masses)
    t1 = time.time()
    accelerated = compute_accelerations(positions, masses)
    t2 = time.time()

    assert np.allclose(baseline, accelerated, rtol=1e-9, atol=1e-9 * np.abs(baseline).max())
    print(f"Python loop: {t1 - t0:.3f}s")
    print(f"Accelerated : {t2 - t1:.3f}s")
    if t2 - t1 > 0:
        print(f"Speedup     : {(t1 - t0) / (t2 - t1):.1f}x")
