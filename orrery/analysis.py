"""Orbital diagnostics and energy-drift monitoring."""

from collections import deque
import csv
import math
import os
from typing import NamedTuple

import numpy as np

from . import constants as C


class OrbitalElements(NamedTuple):
    """Two-body elements of a satellite relative to its primary.

    Distances are in metres, angles in radians, the period in seconds.
    """

    semi_major_axis: float
    eccentricity: float
    inclination: float
    period: float
    specific_energy: float
    periapsis: float
    apoapsis: float
    speed: float

    @property
    def inclination_deg(self) -> float:
        return math.degrees(self.inclination)

    @property
    def period_days(self) -> float:
        return self.period / C.DAY


def _relative_state(body, primary):
    r_vec = np.asarray(body.pos, dtype=float) - np.asarray(primary.pos, dtype=float)
    v_vec = np.asarray(body.vel, dtype=float) - np.asarray(primary.vel, dtype=float)
    return r_vec, v_vec


def specific_orbital_energy(body, primary, g_constant=C.G_REAL) -> float:
    """Energy per unit mass of ``body``'s orbit around ``primary``.

    Only the pair is considered: ``v²/2 − G·M/r`` with ``M`` the primary's
    mass. Negative means bound.
    """
    r_vec, v_vec = _relative_state(body, primary)
    r = math.sqrt(float(np.dot(r_vec, r_vec)))
    v_sq = float(np.dot(v_vec, v_vec))
    return 0.5 * v_sq - g_constant * primary.mass / r


def binding_energy(body, primary, g_constant=C.G_REAL) -> float:
    """Specific orbital energy used as the escape test (``> 0`` is escaped)."""
    return specific_orbital_energy(body, primary, g_constant)


def _clamped_acos(x: float) -> float:
    return math.acos(max(-1.0, min(1.0, x)))


def orbital_elements(body, primary, g_constant=C.G_REAL, normal=(0.0, 0.0, 1.0)):
    """Classical elements of ``body`` around ``primary``.

    Returns ``None`` when the relative orbit is unbound (``ε >= 0``).
    Inclination is the angle between the specific angular momentum and
    ``normal``, so retrograde orbits report more than 90°.
    """
    r_vec, v_vec = _relative_state(body, primary)
    mu = g_constant * primary.mass
    r = math.sqrt(float(np.dot(r_vec, r_vec)))
    v_sq = float(np.dot(v_vec, v_vec))

    energy = 0.5 * v_sq - mu / r
    if not energy < 0:
        return None

    a = -mu / (2.0 * energy)
    h_vec = np.cross(r_vec, v_vec)
    h_sq = float(np.dot(h_vec, h_vec))
    e = math.sqrt(max(0.0, 1.0 - h_sq / (mu * a)))

    n_vec = np.asarray(normal, dtype=float)
    h = math.sqrt(h_sq)
    if h == 0:
        inclination = math.nan
    else:
        inclination = _clamped_acos(float(np.dot(h_vec, n_vec)) / (h * np.linalg.norm(n_vec)))

    period = 2.0 * math.pi * math.sqrt(a**3 / mu)

    return OrbitalElements(
        semi_major_axis=a,
        eccentricity=e,
        inclination=inclination,
        period=period,
        specific_energy=energy,
        periapsis=a * (1.0 - e),
        apoapsis=a * (1.0 + e),
        speed=math.sqrt(v_sq),
    )


class EnergyMonitor:
    """Record the relative energy drift of a simulation over time.

    An instance can be passed straight to
    :meth:`~orrery.simulation.Simulation.advance` as the sampling callback.
    """

    def __init__(self, max_points=500):
        self.history = deque(maxlen=max_points)

    def __call__(self, sim):
        self.update(sim)

    def update(self, sim):
        self.history.append((sim.time, sim.energy_drift()))

    @property
    def max_abs_drift(self) -> float:
        if not self.history:
            return 0.0
        return max(abs(d) for _, d in self.history)

    def export_csv(self, file, delimiter=","):
        """Export the recorded history to a CSV file.

        Parameters
        ----------
        file : str or file-like
            Destination filename or open file object.
        delimiter : str, optional
            Delimiter used between columns (default is ',').
        """
        close = False
        if isinstance(file, (str, bytes, os.PathLike)):
            f = open(file, "w", newline="")
            close = True
        else:
            f = file
        try:
            writer = csv.writer(f, delimiter=delimiter)
            writer.writerow(["step", "time_s", "energy_drift"])
            for i, (t, drift) in enumerate(self.history):
                writer.writerow([i, t, drift])
        finally:
            if close:
                f.close()
