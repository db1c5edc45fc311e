"""Newtonian N-body propagation with kinematic anchors and orbital diagnostics."""

from importlib.metadata import PackageNotFoundError, version

from .physics import Body, MotionLaw, system_energy, shift_to_center_of_mass
from .anchors import Anchor
from .integrators import compute_accelerations, verlet_step_arrays
from .config import PhysicsContext, InvalidConfigurationError
from .simulation import Simulation
from .analysis import (
    OrbitalElements,
    EnergyMonitor,
    binding_energy,
    orbital_elements,
    specific_orbital_energy,
)
from .stability import StabilityReport, scan_stability
from .state_io import snapshot, save_snapshot, load_snapshot, apply_snapshot
from .presets import PRESETS, create_bodies
from .constants import G_REAL, AU, LUNAR_DIST, SOLAR_MASS, EARTH_MASS, MOON_MASS

try:
    __version__ = version("orrery")
except PackageNotFoundError:
    # Fallback when package metadata is unavailable (e.g. running from source)
    __version__ = "0.0.0"

__all__ = [
    "Body",
    "MotionLaw",
    "Anchor",
    "system_energy",
    "shift_to_center_of_mass",
    "compute_accelerations",
    "verlet_step_arrays",
    "PhysicsContext",
    "InvalidConfigurationError",
    "Simulation",
    "OrbitalElements",
    "EnergyMonitor",
    "binding_energy",
    "orbital_elements",
    "specific_orbital_energy",
    "StabilityReport",
    "scan_stability",
    "snapshot",
    "save_snapshot",
    "load_snapshot",
    "apply_snapshot",
    "PRESETS",
    "create_bodies",
    "G_REAL",
    "AU",
    "LUNAR_DIST",
    "SOLAR_MASS",
    "EARTH_MASS",
    "MOON_MASS",
    "__version__",
]
