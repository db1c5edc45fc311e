"""Named initial-condition sets.

Each preset is a list of body configuration dicts in the heliocentric frame.
:func:`create_bodies` turns one into :class:`~orrery.physics.Body` objects;
the centre-of-mass shift is left to :class:`~orrery.simulation.Simulation`.
"""

import math

from . import constants as C
from .anchors import Anchor
from .physics import Body


def _periapsis_speed(g, mass, a, e):
    # vis-viva at periapsis
    return math.sqrt(g * mass * (1 + e) / (a * (1 - e)))


def _qaia_system(g=C.G_REAL, geosynchronous_primus=False):
    v_qaia = math.sqrt(g * C.SOLAR_MASS / C.AU)
    v_primus = math.sqrt(g * C.EARTH_MASS / C.LUNAR_DIST)
    primus_inc = math.radians(5.14)

    sec_a, sec_e = 0.45 * C.LUNAR_DIST, 0.10
    qua_a, qua_e = 0.12 * C.LUNAR_DIST, 0.10
    ter_a, ter_e = 0.24 * C.LUNAR_DIST, 0.10
    v_sec = _periapsis_speed(g, C.EARTH_MASS, sec_a, sec_e)
    v_qua = _periapsis_speed(g, C.EARTH_MASS, qua_a, qua_e)
    v_ter = _periapsis_speed(g, C.EARTH_MASS, ter_a, ter_e)

    bodies = [
        {"name": "Sun", "mass": C.SOLAR_MASS},
        {"name": "Qaia", "mass": C.EARTH_MASS, "x": C.AU, "vy": v_qaia},
    ]
    if geosynchronous_primus:
        bodies.append({
            "name": "Primus",
            "mass": C.MOON_MASS * 0.002,
            "x": C.AU + C.GEO_RADIUS,
            "vy": v_qaia,
            "anchor": {
                "reference": "Qaia",
                "radius": C.GEO_RADIUS,
                "angular_velocity": C.TWO_PI / C.SIDEREAL_DAY,
            },
        })
    else:
        bodies.append({
            "name": "Primus",
            "mass": C.MOON_MASS,
            "x": C.AU + C.LUNAR_DIST,
            "vy": v_qaia + v_primus * math.cos(primus_inc),
            "vz": v_primus * math.sin(primus_inc),
        })
    moons = [
        # periapsis at +y from Qaia, prograde
        {
            "name": "Secundus",
            "mass": C.MOON_MASS * 0.25,
            "x": C.AU,
            "y": sec_a * (1 - sec_e),
            "vx": -v_sec,
            "vy": v_qaia,
        },
        # periapsis at -x from Qaia, retrograde
        {
            "name": "Quartus",
            "mass": C.MOON_MASS * 0.02,
            "x": C.AU - qua_a * (1 - qua_e),
            "vy": v_qaia + v_qua,
        },
        # periapsis at -y from Qaia, retrograde
        {
            "name": "Tertius",
            "mass": C.MOON_MASS * 0.04,
            "x": C.AU,
            "y": -ter_a * (1 - ter_e),
            "vx": -v_ter,
            "vy": v_qaia,
        },
    ]
    if geosynchronous_primus:
        # Quartus would cross the geosynchronous radius near periapsis.
        moons = [m for m in moons if m["name"] != "Quartus"]
    return bodies + moons


PRESETS = {
    "Sun & Earth": [
        {"name": "Sun", "mass": C.SOLAR_MASS},
        {
            "name": "Earth",
            "mass": C.EARTH_MASS,
            "x": C.AU,
            "vy": math.sqrt(C.G_REAL * C.SOLAR_MASS / C.AU),
        },
    ],
    "Qaia system": _qaia_system(),
    "Geosynchronous Primus": _qaia_system(geosynchronous_primus=True),
}


def body_from_config(cfg) -> Body:
    """Build a :class:`Body` from one preset entry."""
    anchor_cfg = cfg.get("anchor")
    anchor = Anchor(**anchor_cfg) if anchor_cfg is not None else None
    return Body(
        cfg["mass"],
        [cfg.get("x", 0.0), cfg.get("y", 0.0), cfg.get("z", 0.0)],
        [cfg.get("vx", 0.0), cfg.get("vy", 0.0), cfg.get("vz", 0.0)],
        name=cfg["name"],
        anchor=anchor,
    )


def create_bodies(preset_name: str, exclude=()):
    """Return fresh bodies for ``preset_name``, skipping names in ``exclude``."""
    if preset_name not in PRESETS:
        raise KeyError(f"Preset '{preset_name}' not found")
    return [body_from_config(cfg) for cfg in PRESETS[preset_name] if cfg["name"] not in exclude]
