"""Run-wide physics configuration.

A single :class:`PhysicsContext` is built per simulation run and handed to
every core operation, so the gravitational constant and the step size are
never re-declared at call sites.
"""

from dataclasses import dataclass
import math

from . import constants as C


class InvalidConfigurationError(ValueError):
    """Raised when bodies, anchors or run parameters are malformed."""


@dataclass(frozen=True)
class PhysicsContext:
    """Gravitational constant and fixed time step of a run.

    Attributes
    ----------
    g_constant : float
        Gravitational constant in m^3 kg^-1 s^-2.
    dt : float
        Integrator step in seconds. Fixed for the lifetime of a run.
    """

    g_constant: float = C.G_REAL
    dt: float = C.TIME_STEP_BASE

    def __post_init__(self):
        if not (math.isfinite(self.g_constant) and self.g_constant > 0):
            raise InvalidConfigurationError(
                f"g_constant must be a positive finite number, got {self.g_constant!r}"
            )
        if not (math.isfinite(self.dt) and self.dt > 0):
            raise InvalidConfigurationError(
                f"dt must be a positive finite number of seconds, got {self.dt!r}"
            )

    def steps_for(self, seconds: float) -> int:
        """Number of whole steps covering ``seconds`` of simulated time."""
        return int(round(seconds / self.dt))


DEFAULT_CONTEXT = PhysicsContext()
