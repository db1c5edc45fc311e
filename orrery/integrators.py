import numpy as np

from . import constants as C
from .jit import pairwise_accelerations_jit


def compute_accelerations(
    positions: np.ndarray,
    masses: np.ndarray,
    g_constant: float = C.G_REAL,
    out: np.ndarray = None,
) -> np.ndarray:
    """Newtonian acceleration of every body from every other body.

    Parameters
    ----------
    positions : ndarray, shape (n, 3)
        Positions in metres.
    masses : ndarray, shape (n,)
        Masses in kilograms.
    g_constant : float
        Gravitational constant.
    out : ndarray, optional
        Preallocated ``(n, 3)`` buffer. Overwritten and returned.

    Each unordered pair is evaluated once and applied to both members with
    opposite sign. No softening is applied, so coincident bodies yield
    non-finite accelerations.
    """
    positions = np.asarray(positions, dtype=np.float64)
    masses = np.asarray(masses, dtype=np.float64)
    if out is None:
        out = np.empty_like(positions)
    if len(masses) == 0:
        return out
    return pairwise_accelerations_jit(positions, masses, g_constant, out)


def verlet_step_arrays(
    positions,
    velocities,
    accelerations,
    masses,
    integrated_mask,
    dt,
    g_constant,
    place_kinematic=None,
):
    """Advance one velocity Verlet step, updating the arrays in place.

    Only rows selected by ``integrated_mask`` are drifted and kicked. Rows
    outside the mask still act as gravity sources. ``place_kinematic``, when
    given, is called with the drifted ``positions`` before the force
    evaluation so kinematic rows can be moved to their end-of-step positions.

    Returns the ``(positions, velocities, accelerations)`` arrays.
    """
    m = integrated_mask
    acc_old = accelerations.copy()

    positions[m] += velocities[m] * dt + 0.5 * acc_old[m] * (dt * dt)
    if place_kinematic is not None:
        place_kinematic(positions)

    compute_accelerations(positions, masses, g_constant, out=accelerations)
    velocities[m] += 0.5 * (acc_old[m] + accelerations[m]) * dt

    return positions, velocities, accelerations
