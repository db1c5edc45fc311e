"""Body representation and whole-system physics helpers.

:class:`Body` holds mass, name and kinematics as 3-D vectors in SI units.
Once a body is adopted by a :class:`~orrery.simulation.Simulation` its
vectors become views into the simulation's state arrays, so integrator
updates are visible through the body without copying.
"""

from enum import Enum
import math

import numpy as np

from . import constants as C
from .anchors import Anchor
from .config import InvalidConfigurationError
from .jit import potential_energy_jit


class MotionLaw(Enum):
    """How a body's trajectory is advanced."""

    INTEGRATED = "integrated"
    KINEMATIC = "kinematic"


def _as_vec3(values, label):
    v = np.array(values, dtype=float).reshape(-1)
    if v.size > 3:
        raise InvalidConfigurationError(f"{label} must have at most 3 components, got {v.size}")
    if v.size < 3:
        v = np.pad(v, (0, 3 - v.size))
    return v


class Body:
    """A point mass with an optional kinematic anchor."""

    def __init__(self, mass, pos, vel, name: str, anchor: Anchor | None = None):
        """Create a body storing position and velocity as 3-D vectors.

        Parameters
        ----------
        mass : float
            Mass in kilograms.
        pos : array-like
            Position in metres. Fewer than three components are padded with
            zeros.
        vel : array-like
            Velocity in m/s, padded like ``pos``.
        name : str
            Stable identifier used for lookups and snapshot matching.
        anchor : Anchor, optional
            Prescribed circular orbit. Anchored bodies are not integrated.
        """
        self.mass = float(mass)
        self.name = name
        self.anchor = anchor
        self._pos = _as_vec3(pos, "position")
        self._vel = _as_vec3(vel, "velocity")
        self._acc = np.zeros(3, dtype=np.float64)
        self._bound = False

    @property
    def pos(self) -> np.ndarray:
        return self._pos

    @pos.setter
    def pos(self, value):
        self._pos[...] = _as_vec3(value, "position")

    @property
    def vel(self) -> np.ndarray:
        return self._vel

    @vel.setter
    def vel(self, value):
        self._vel[...] = _as_vec3(value, "velocity")

    @property
    def acc(self) -> np.ndarray:
        """Acceleration from the latest force evaluation (transient)."""
        return self._acc

    @property
    def bound(self) -> bool:
        """True once a simulation has adopted this body."""
        return self._bound

    @property
    def motion(self) -> MotionLaw:
        return MotionLaw.INTEGRATED if self.anchor is None else MotionLaw.KINEMATIC

    def bind(self, pos_row, vel_row, acc_row):
        """Copy kinematics into the given rows and use them as storage.

        A body can be bound once. Build fresh bodies for every simulation.
        """
        if self._bound:
            raise InvalidConfigurationError(
                f"body {self.name!r} already belongs to a simulation"
            )
        pos_row[...] = self._pos
        vel_row[...] = self._vel
        acc_row[...] = self._acc
        self._pos, self._vel, self._acc = pos_row, vel_row, acc_row
        self._bound = True

    def update_physics_state(self, new_pos, new_vel):
        """Replace the body's position and velocity."""
        self.pos = new_pos
        self.vel = new_vel

    def validate(self) -> None:
        if not self.name:
            raise InvalidConfigurationError("every body needs a non-empty name")
        if not (math.isfinite(self.mass) and self.mass > 0):
            raise InvalidConfigurationError(
                f"mass of {self.name!r} must be positive, got {self.mass!r}"
            )
        if not (np.all(np.isfinite(self._pos)) and np.all(np.isfinite(self._vel))):
            raise InvalidConfigurationError(f"kinematics of {self.name!r} must be finite")

    def __repr__(self):
        return (
            f"Body(name={self.name!r}, mass={self.mass}, pos={self.pos.tolist()}, "
            f"vel={self.vel.tolist()}, motion={self.motion.value})"
        )


def validate_bodies(bodies) -> None:
    """Check masses, kinematics, name uniqueness and that no body is already adopted."""
    seen = set()
    for body in bodies:
        body.validate()
        if body.bound:
            raise InvalidConfigurationError(f"body {body.name!r} already belongs to a simulation")
        if body.name in seen:
            raise InvalidConfigurationError(f"duplicate body name {body.name!r}")
        seen.add(body.name)


def system_energy(bodies, g_constant=C.G_REAL):
    """Return total kinetic, potential and total energy in joules."""
    if not bodies:
        return 0.0, 0.0, 0.0
    masses = np.array([b.mass for b in bodies], dtype=float)
    velocities = np.array([b.vel for b in bodies], dtype=float)
    positions = np.array([b.pos for b in bodies], dtype=float)
    kinetic = float(0.5 * np.sum(masses * np.einsum("ij,ij->i", velocities, velocities)))
    potential = float(potential_energy_jit(positions, masses, g_constant))
    return kinetic, potential, kinetic + potential


def center_of_mass(bodies):
    """Return the mass-weighted position and velocity of the system."""
    if not bodies:
        return None, None
    masses = np.array([b.mass for b in bodies], dtype=float)
    total_mass = masses.sum()
    com_pos = np.sum(masses[:, None] * np.array([b.pos for b in bodies]), axis=0) / total_mass
    com_vel = np.sum(masses[:, None] * np.array([b.vel for b in bodies]), axis=0) / total_mass
    return com_pos, com_vel


def shift_to_center_of_mass(bodies) -> None:
    """Translate every body so the centroid and total momentum are zero."""
    com_pos, com_vel = center_of_mass(bodies)
    if com_pos is None:
        return
    for body in bodies:
        body.pos = body.pos - com_pos
        body.vel = body.vel - com_vel
