"""Command line entry point for headless runs."""

import argparse

from . import constants as C
from .analysis import EnergyMonitor
from .config import PhysicsContext
from .presets import PRESETS, create_bodies
from .simulation import Simulation
from .stability import scan_stability
from .state_io import apply_snapshot, load_snapshot, save_snapshot
from .utils import distance_to_display, time_to_display


def _build(args) -> Simulation:
    context = PhysicsContext(dt=args.dt)
    sim = Simulation(create_bodies(args.preset, exclude=args.exclude), context)
    if getattr(args, "resume", None):
        apply_snapshot(sim, load_snapshot(args.resume))
    return sim


def _cmd_run(args) -> int:
    sim = _build(args)
    monitor = EnergyMonitor(max_points=args.samples)
    steps = sim.context.steps_for(args.years * C.JULIAN_YEAR)
    interval = max(1, steps // args.samples)
    print(f"Running {steps:,} steps ({args.years} years, dt={sim.dt:g}s)...")
    sim.advance(steps, sample_interval=interval, callback=monitor)
    print(f"t = {time_to_display(sim.time)}  drift = {sim.energy_drift():.3e}  "
          f"max |drift| = {monitor.max_abs_drift:.3e}")
    if args.snapshot:
        save_snapshot(args.snapshot, sim)
        print(f"Saved to {args.snapshot}")
    if args.energy_csv:
        monitor.export_csv(args.energy_csv)
    return 0


def _cmd_stability(args) -> int:
    sim = _build(args)

    def progress(sim, report):
        status = "  ".join(
            f"{name}:{'ok' if t is None else 'ESCAPED@' + time_to_display(t)}"
            for name, t in report.escapes.items()
        )
        print(f"{time_to_display(report.elapsed):>12}  {status}")

    report = scan_stability(
        sim,
        args.primary,
        watched=args.watch or None,
        horizon=args.years * C.JULIAN_YEAR,
        check_interval=args.every * C.JULIAN_YEAR,
        on_check=progress,
    )
    print()
    for name, t in report.escapes.items():
        if t is None:
            print(f"  {name}: stable past {time_to_display(report.elapsed)}")
        else:
            print(f"  {name}: escaped at ~{time_to_display(t)}")
    print(f"Energy drift: {report.energy_drift:.2e}")
    return 1 if report.escaped else 0


def _cmd_elements(args) -> int:
    sim = _build(args)
    apply_snapshot(sim, load_snapshot(args.snapshot))
    primary = sim.body(args.primary)
    for body in sim.bodies:
        if body is primary:
            continue
        el = sim.orbital_elements(body, primary)
        if el is None:
            print(f"{body.name:<10} unbound (eps={sim.binding_energy(body, primary):.3e})")
            continue
        print(
            f"{body.name:<10} a={distance_to_display(el.semi_major_axis):>12}  e={el.eccentricity:.4f}  "
            f"i={el.inclination_deg:7.2f}°  T={el.period_days:.2f} d"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="orrery", description="Headless N-body runs")
    parser.add_argument("--preset", default="Qaia system", choices=sorted(PRESETS))
    parser.add_argument("--dt", type=float, default=C.TIME_STEP_BASE, help="Step in seconds")
    parser.add_argument("--exclude", action="append", default=[], help="Drop a body by name")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Advance and optionally save a snapshot")
    run.add_argument("--years", type=float, default=1.0)
    run.add_argument("--resume", help="Snapshot to start from")
    run.add_argument("--snapshot", help="Write the final state here")
    run.add_argument("--energy-csv", help="Write the energy drift history here")
    run.add_argument("--samples", type=int, default=500)
    run.set_defaults(func=_cmd_run)

    stab = sub.add_parser("stability", help="Scan for moon escapes")
    stab.add_argument("--primary", default="Qaia")
    stab.add_argument("--watch", action="append", default=[], help="Body to check (repeatable)")
    stab.add_argument("--years", type=float, default=200.0)
    stab.add_argument("--every", type=float, default=10.0, help="Years between checks")
    stab.add_argument("--resume", help="Snapshot to start from")
    stab.set_defaults(func=_cmd_stability)

    elem = sub.add_parser("elements", help="Print orbital elements from a snapshot")
    elem.add_argument("snapshot")
    elem.add_argument("--primary", default="Qaia")
    elem.set_defaults(func=_cmd_elements)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover - manual tool
    raise SystemExit(main())
