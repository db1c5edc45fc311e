"""Long-run escape scans.

The scan advances a simulation in fixed chunks and checks, after each chunk,
whether any watched body has become unbound from its primary in two-body
terms. A body's escape time is the end of the first chunk in which its
binding energy is positive.
"""

from dataclasses import dataclass, field

from . import constants as C
from .log import get_logger

logger = get_logger(__name__)


@dataclass
class StabilityReport:
    primary: str
    horizon: float
    elapsed: float = 0.0
    escapes: dict = field(default_factory=dict)
    final_binding: dict = field(default_factory=dict)
    energy_drift: float = 0.0

    @property
    def stable(self) -> list[str]:
        return [name for name, t in self.escapes.items() if t is None]

    @property
    def escaped(self) -> list[str]:
        return [name for name, t in self.escapes.items() if t is not None]

    @property
    def all_escaped(self) -> bool:
        return bool(self.escapes) and all(t is not None for t in self.escapes.values())


def scan_stability(
    sim,
    primary,
    watched=None,
    horizon=200 * C.JULIAN_YEAR,
    check_interval=10 * C.JULIAN_YEAR,
    on_check=None,
):
    """Advance ``sim`` up to ``horizon`` seconds watching for escapes.

    Parameters
    ----------
    sim : Simulation
        Simulation to advance. It is mutated.
    primary : str
        Name of the body escapes are measured against.
    watched : iterable of str, optional
        Bodies to test. Defaults to every gravity-integrated body other than
        ``primary`` that is less massive than it.
    horizon : float
        Total simulated seconds to run. Defaults to 200 Julian years.
    check_interval : float
        Simulated seconds between checks. Defaults to 10 Julian years.
    on_check : callable, optional
        Called as ``on_check(sim, report)`` after every check.
    """
    primary_body = sim.body(primary)
    if watched is None:
        watched = [
            b.name
            for b in sim.bodies
            if b.name != primary and b.anchor is None and b.mass < primary_body.mass
        ]
    report = StabilityReport(primary=primary, horizon=horizon)
    report.escapes = {name: None for name in watched}

    chunk = max(1, sim.context.steps_for(check_interval))
    total = sim.context.steps_for(horizon)
    t_start = sim.time
    done = 0
    while done < total:
        n = min(chunk, total - done)
        sim.advance(n, sample_interval=n)
        done += n
        report.elapsed = sim.time - t_start

        for name in watched:
            eps = sim.binding_energy(name, primary_body)
            report.final_binding[name] = eps
            if report.escapes[name] is None and eps > 0:
                report.escapes[name] = report.elapsed
                logger.info(
                    "%s escaped %s after %.3e s (eps=%.3e J/kg)", name, primary, report.elapsed, eps
                )
        if on_check is not None:
            on_check(sim, report)
        if report.all_escaped:
            logger.info("all watched bodies escaped, stopping early")
            break

    report.energy_drift = sim.energy_drift()
    return report
