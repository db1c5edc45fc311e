"""Kinematic anchors.

An anchored body ignores gravity for its own motion and instead rides an
exact circular orbit, optionally inclined, around a reference body. It keeps
its mass, so it still pulls on everything else.
"""

from dataclasses import dataclass
import math

import numpy as np

from . import constants as C
from .config import InvalidConfigurationError


@dataclass(frozen=True)
class Anchor:
    """Circular orbit prescription for one body.

    Attributes
    ----------
    reference : str
        Name of the body the orbit is centred on.
    radius : float
        Orbit radius in metres.
    angular_velocity : float
        Rate in rad/s. Negative values orbit clockwise.
    phase_at_epoch : float
        Angle from the ascending node axis at ``t = 0``, in radians.
    inclination : float
        Tilt of the orbital plane about the ascending node axis (+x), radians.
    """

    reference: str
    radius: float
    angular_velocity: float
    phase_at_epoch: float = 0.0
    inclination: float = 0.0

    def validate(self, owner: str) -> None:
        if not self.reference:
            raise InvalidConfigurationError(f"anchor on {owner!r} has no reference body")
        if self.reference == owner:
            raise InvalidConfigurationError(f"body {owner!r} cannot be anchored to itself")
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise InvalidConfigurationError(
                f"anchor radius for {owner!r} must be positive, got {self.radius!r}"
            )
        for field in ("angular_velocity", "phase_at_epoch", "inclination"):
            value = getattr(self, field)
            if not math.isfinite(value):
                raise InvalidConfigurationError(
                    f"anchor {field} for {owner!r} must be finite, got {value!r}"
                )

    def angle_at(self, t: float) -> float:
        """Orbital angle at time ``t`` wrapped into [0, 2π)."""
        # Wrap each term before summing so large t keeps full precision.
        swept = math.fmod(self.angular_velocity * t, C.TWO_PI)
        return (self.phase_at_epoch + swept) % C.TWO_PI

    def offset(self, t: float) -> tuple[np.ndarray, np.ndarray]:
        """Position and velocity relative to the reference body at time ``t``."""
        theta = self.angle_at(t)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        cos_i, sin_i = math.cos(self.inclination), math.sin(self.inclination)
        r = self.radius
        rw = r * self.angular_velocity
        rel_pos = np.array([r * cos_t, r * sin_t * cos_i, -r * sin_t * sin_i])
        rel_vel = np.array([-rw * sin_t, rw * cos_t * cos_i, -rw * cos_t * sin_i])
        return rel_pos, rel_vel


def anchor_state(anchor: Anchor, ref_pos, ref_vel, t: float):
    """Absolute position and velocity of an anchored body at time ``t``."""
    rel_pos, rel_vel = anchor.offset(t)
    return np.asarray(ref_pos, dtype=float) + rel_pos, np.asarray(ref_vel, dtype=float) + rel_vel


def resolve_anchors(bodies):
    """Return ``[(body_index, reference_index, anchor), ...]`` for anchored bodies.

    Raises :class:`InvalidConfigurationError` when a reference is missing or is
    itself anchored.
    """
    index_by_name = {b.name: i for i, b in enumerate(bodies)}
    links = []
    for i, body in enumerate(bodies):
        anchor = body.anchor
        if anchor is None:
            continue
        anchor.validate(body.name)
        if anchor.reference not in index_by_name:
            raise InvalidConfigurationError(
                f"anchor on {body.name!r} references unknown body {anchor.reference!r}"
            )
        ref_idx = index_by_name[anchor.reference]
        if bodies[ref_idx].anchor is not None:
            raise InvalidConfigurationError(
                f"anchor on {body.name!r} references {anchor.reference!r}, "
                "which is itself anchored"
            )
        links.append((i, ref_idx, anchor))
    return links


def apply_anchor_positions(positions, links, t):
    """Move anchored rows of ``positions`` onto their orbits at time ``t``."""
    for i, ref_idx, anchor in links:
        rel_pos, _ = anchor.offset(t)
        positions[i] = positions[ref_idx] + rel_pos


def apply_anchors(positions, velocities, links, t):
    """Overwrite position and velocity of every anchored row for time ``t``."""
    for i, ref_idx, anchor in links:
        rel_pos, rel_vel = anchor.offset(t)
        positions[i] = positions[ref_idx] + rel_pos
        velocities[i] = velocities[ref_idx] + rel_vel
