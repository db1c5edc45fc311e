"""Kinematic snapshots.

A snapshot records ``{time, bodies: [{name, position, velocity}]}``. Loading
one overlays positions, velocities and time onto a freshly constructed
simulation, matching bodies by name. Masses and anchors always come from
the fresh construction.
"""

from pathlib import Path
import json

from .config import InvalidConfigurationError
from .log import get_logger

logger = get_logger(__name__)


def snapshot(sim) -> dict:
    """Return the current kinematics of ``sim`` as a JSON-ready dict."""
    return {
        "time": sim.time,
        "dt": sim.dt,
        "bodies": [
            {
                "name": b.name,
                "position": b.pos.tolist(),
                "velocity": b.vel.tolist(),
            }
            for b in sim.bodies
        ],
    }


def save_snapshot(filepath, sim) -> Path:
    """Serialize a snapshot of ``sim`` to a JSON file."""
    path = Path(filepath)
    path.write_text(json.dumps(snapshot(sim)))
    logger.info("saved snapshot at t=%.1fs to %s", sim.time, path)
    return path


def load_snapshot(filepath) -> dict:
    """Read a snapshot dict from a JSON file."""
    data = json.loads(Path(filepath).read_text())
    if not isinstance(data, dict) or "bodies" not in data:
        raise InvalidConfigurationError(f"{filepath} is not a snapshot: missing 'bodies'")
    return data


def _kinematics(item):
    try:
        if "position" in item:
            return item["position"], item["velocity"]
        # Flat layout written by older tooling.
        return (
            [item["x"], item["y"], item.get("z", 0.0)],
            [item["vx"], item["vy"], item.get("vz", 0.0)],
        )
    except KeyError as exc:
        raise InvalidConfigurationError(
            f"snapshot body {item.get('name')!r} is missing {exc.args[0]!r}"
        ) from exc


def apply_snapshot(sim, data: dict):
    """Overlay snapshot kinematics onto ``sim`` and return it.

    Bodies missing from the snapshot keep their current kinematics; snapshot
    entries without a matching body are ignored. Anchors are re-applied and
    the energy baseline is re-captured at the overlaid state.
    """
    if "bodies" not in data:
        raise InvalidConfigurationError("snapshot is missing 'bodies'")
    names = {b.name for b in sim.bodies}
    overlay = {}
    for item in data["bodies"]:
        name = item.get("name")
        if name not in names:
            logger.debug("snapshot body %r has no counterpart, ignored", name)
            continue
        overlay[name] = _kinematics(item)
    for name, (pos, vel) in overlay.items():
        sim.body(name).update_physics_state(pos, vel)
    matched = len(overlay)
    sim.reset_kinematics(data.get("time", sim.time))
    logger.info("overlaid %d/%d bodies at t=%.1fs", matched, len(sim.bodies), sim.time)
    return sim
