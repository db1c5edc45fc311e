import numpy as np

from .analysis import binding_energy, orbital_elements
from .anchors import apply_anchor_positions, apply_anchors, resolve_anchors
from .config import DEFAULT_CONTEXT, PhysicsContext
from .integrators import compute_accelerations, verlet_step_arrays
from .log import get_logger
from .physics import (
    MotionLaw,
    center_of_mass,
    shift_to_center_of_mass,
    system_energy,
    validate_bodies,
)

logger = get_logger(__name__)


class Simulation:
    """Owner of the evolving system state.

    The bodies passed in are validated, anchored bodies are placed on their
    orbits at ``time``, and the whole set is shifted into the centre-of-mass
    frame. From then on the simulation is the only writer of body kinematics.
    """

    def __init__(
        self,
        bodies,
        context: PhysicsContext = DEFAULT_CONTEXT,
        time: float = 0.0,
        center_of_mass_frame: bool = True,
    ):
        self.bodies = list(bodies)
        self.context = context
        self.time = float(time)

        validate_bodies(self.bodies)
        self._links = resolve_anchors(self.bodies)

        n = len(self.bodies)
        self.masses = np.array([b.mass for b in self.bodies], dtype=np.float64)
        self.positions = np.zeros((n, 3), dtype=np.float64)
        self.velocities = np.zeros((n, 3), dtype=np.float64)
        self.accelerations = np.zeros((n, 3), dtype=np.float64)
        for i, body in enumerate(self.bodies):
            body.bind(self.positions[i], self.velocities[i], self.accelerations[i])
        self.integrated_mask = np.array(
            [b.motion is MotionLaw.INTEGRATED for b in self.bodies], dtype=bool
        )
        self._index = {b.name: i for i, b in enumerate(self.bodies)}

        apply_anchors(self.positions, self.velocities, self._links, self.time)
        if center_of_mass_frame:
            shift_to_center_of_mass(self.bodies)
        self._refresh()

        logger.info(
            "simulation of %d bodies (%d anchored), dt=%gs, E0=%.6e J",
            n,
            len(self._links),
            self.dt,
            self.initial_total_energy,
        )

    # ------------------------------------------------------------------
    @property
    def dt(self) -> float:
        return self.context.dt

    @property
    def g_constant(self) -> float:
        return self.context.g_constant

    def _refresh(self):
        """Recompute accelerations and the energy baseline for the current state."""
        compute_accelerations(
            self.positions, self.masses, self.g_constant, out=self.accelerations
        )
        self.initial_total_energy = self.total_energy()

    def _place_anchored(self, positions):
        apply_anchor_positions(positions, self._links, self.time + self.dt)

    # ------------------------------------------------------------------
    def step(self) -> None:
        """Advance the state by exactly one ``dt``."""
        verlet_step_arrays(
            self.positions,
            self.velocities,
            self.accelerations,
            self.masses,
            self.integrated_mask,
            self.dt,
            self.g_constant,
            place_kinematic=self._place_anchored if self._links else None,
        )
        self.time += self.dt
        if self._links:
            apply_anchors(self.positions, self.velocities, self._links, self.time)

    def advance(self, n: int, sample_interval: int = 10, callback=None) -> None:
        """Run ``n`` steps, calling ``callback(self)`` every ``sample_interval`` steps.

        The callback fires after step ``i`` whenever ``i % sample_interval == 0``,
        so the first step is always sampled.
        """
        for i in range(n):
            self.step()
            if callback is not None and i % sample_interval == 0:
                callback(self)
        logger.debug("advanced %d steps to t=%.1fs", n, self.time)

    # ------------------------------------------------------------------
    def body(self, name: str):
        """Return the body called ``name``."""
        try:
            return self.bodies[self._index[name]]
        except KeyError:
            raise KeyError(f"no body named {name!r}") from None

    def _resolve(self, body):
        return self.body(body) if isinstance(body, str) else body

    def total_energy(self) -> float:
        return system_energy(self.bodies, self.g_constant)[2]

    def energy_drift(self) -> float:
        """Relative change of total energy since construction."""
        e0 = self.initial_total_energy
        if e0 == 0:
            return float("nan")
        return (self.total_energy() - e0) / abs(e0)

    def orbital_elements(self, body, primary, normal=(0.0, 0.0, 1.0)):
        return orbital_elements(
            self._resolve(body), self._resolve(primary), self.g_constant, normal
        )

    def binding_energy(self, body, primary) -> float:
        return binding_energy(self._resolve(body), self._resolve(primary), self.g_constant)

    def center_of_mass(self):
        return center_of_mass(self.bodies)

    def total_momentum(self) -> np.ndarray:
        return np.sum(self.masses[:, None] * self.velocities, axis=0)

    def reset_kinematics(self, time: float) -> None:
        """Re-establish invariants after positions/velocities were overwritten."""
        self.time = float(time)
        apply_anchors(self.positions, self.velocities, self._links, self.time)
        self._refresh()
