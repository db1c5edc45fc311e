import math
import numpy as np
import pytest

from orrery import Anchor, Body, InvalidConfigurationError, Simulation, EARTH_MASS, MOON_MASS
from orrery import constants as C
from orrery.anchors import anchor_state
from orrery.presets import create_bodies

GEO_OMEGA = 2 * math.pi / 86164.0


def _distance(sim, name, ref):
    return np.linalg.norm(sim.body(name).pos - sim.body(ref).pos)


def test_anchor_offset_geometry():
    anchor = Anchor("ref", radius=2.0, angular_velocity=0.5, phase_at_epoch=0.0, inclination=math.pi / 2)
    pos, vel = anchor.offset(math.pi)  # theta = pi/2
    assert np.allclose(pos, [0.0, 0.0, -2.0], atol=1e-12)
    assert np.allclose(vel, [-1.0, 0.0, 0.0], atol=1e-12)


def test_anchor_state_adds_reference_motion():
    anchor = Anchor("ref", radius=1.0, angular_velocity=1.0)
    pos, vel = anchor_state(anchor, [10.0, 0.0, 0.0], [0.0, 3.0, 0.0], 0.0)
    assert np.allclose(pos, [11.0, 0.0, 0.0])
    assert np.allclose(vel, [0.0, 4.0, 0.0])


def test_angle_wraps_for_large_times():
    anchor = Anchor("ref", radius=1.0, angular_velocity=GEO_OMEGA, phase_at_epoch=0.3)
    t = 1000 * 86164.0  # whole number of turns
    assert 0.0 <= anchor.angle_at(t) < 2 * math.pi
    assert math.isclose(anchor.angle_at(t), 0.3, abs_tol=1e-9)
    assert 0.0 <= Anchor("ref", 1.0, -GEO_OMEGA).angle_at(1234.5) < 2 * math.pi


def test_anchor_distance_exact_every_step():
    sim = Simulation(create_bodies("Geosynchronous Primus"))
    assert math.isclose(_distance(sim, "Primus", "Qaia"), C.GEO_RADIUS, rel_tol=1e-10)

    distances = []
    sim.advance(2000, sample_interval=1, callback=lambda s: distances.append(_distance(s, "Primus", "Qaia")))

    assert len(distances) == 2000
    assert np.allclose(distances, C.GEO_RADIUS, rtol=1e-10, atol=0.0)


def test_anchor_follows_prescribed_phase():
    sim = Simulation(create_bodies("Geosynchronous Primus"))
    sim.advance(240)  # one day at six minute steps
    rel = sim.body("Primus").pos - sim.body("Qaia").pos
    expected = (GEO_OMEGA * sim.time) % (2 * math.pi)
    angle = math.atan2(rel[1], rel[0]) % (2 * math.pi)
    assert math.isclose(angle, expected, abs_tol=1e-9)


def test_anchor_velocity_comoves_with_reference():
    sim = Simulation(create_bodies("Geosynchronous Primus"))
    sim.advance(100)
    rel_v = sim.body("Primus").vel - sim.body("Qaia").vel
    assert math.isclose(np.linalg.norm(rel_v), C.GEO_RADIUS * GEO_OMEGA, rel_tol=1e-10)


def test_inclined_anchor_leaves_plane():
    qaia = Body(EARTH_MASS, [0.0], [0.0], name="Qaia")
    moon = Body(
        MOON_MASS * 0.01,
        [0.0],
        [0.0],
        name="Tilted",
        anchor=Anchor("Qaia", 1.0e7, 1.0e-4, phase_at_epoch=math.pi / 2, inclination=math.radians(30)),
    )
    sim = Simulation([qaia, moon])
    rel = sim.body("Tilted").pos - sim.body("Qaia").pos
    assert math.isclose(rel[2], -1.0e7 * math.sin(math.radians(30)), rel_tol=1e-12)
    assert math.isclose(np.linalg.norm(rel), 1.0e7, rel_tol=1e-12)


def test_anchored_body_still_pulls_others():
    heavy = Body(EARTH_MASS, [0.0], [0.0], name="Heavy")
    probe = Body(1.0, [2.0e7, 0.0], [0.0], name="Probe")
    pinned = Body(
        EARTH_MASS, [0.0], [0.0], name="Pinned", anchor=Anchor("Heavy", 1.0e7, 0.0)
    )
    with_anchor = Simulation([heavy, probe, pinned], center_of_mass_frame=False)
    # Pinned sits at +1e7 on the x axis, between Heavy and Probe.
    a = with_anchor.body("Probe").acc
    expected = -C.G_REAL * EARTH_MASS * (1 / 2.0e7**2 + 1 / 1.0e7**2)
    assert math.isclose(a[0], expected, rel_tol=1e-12)


def test_kinematic_body_ignores_gravity():
    heavy = Body(EARTH_MASS, [0.0], [0.0], name="Heavy")
    pinned = Body(MOON_MASS, [0.0], [0.0], name="Pinned", anchor=Anchor("Heavy", 1.0e8, 0.0))
    sim = Simulation([heavy, pinned], center_of_mass_frame=False)
    sim.advance(100)
    # zero angular velocity: it hangs at a fixed offset while Heavy is pulled toward it
    rel = sim.body("Pinned").pos - sim.body("Heavy").pos
    assert np.allclose(rel, [1.0e8, 0.0, 0.0])
    assert sim.body("Heavy").pos[0] > 0.0


@pytest.mark.parametrize(
    "anchor, match",
    [
        (Anchor("Nowhere", 1.0, 0.1), "unknown"),
        (Anchor("Moon", 1.0, 0.1), "itself"),
        (Anchor("Planet", 0.0, 0.1), "radius"),
        (Anchor("Planet", -5.0, 0.1), "radius"),
        (Anchor("Planet", 1.0, float("nan")), "angular_velocity"),
        (Anchor("Planet", 1.0, 0.1, inclination=float("inf")), "inclination"),
        (Anchor("", 1.0, 0.1), "reference"),
    ],
)
def test_malformed_anchor_rejected(anchor, match):
    bodies = [
        Body(EARTH_MASS, [0.0], [0.0], name="Planet"),
        Body(MOON_MASS, [1.0e8], [0.0], name="Moon", anchor=anchor),
    ]
    with pytest.raises(InvalidConfigurationError, match=match):
        Simulation(bodies)


def test_anchor_to_anchored_body_rejected():
    bodies = [
        Body(EARTH_MASS, [0.0], [0.0], name="Planet"),
        Body(MOON_MASS, [0.0], [0.0], name="Moon", anchor=Anchor("Planet", 1.0e8, 1e-6)),
        Body(1.0e10, [0.0], [0.0], name="Speck", anchor=Anchor("Moon", 1.0e6, 1e-5)),
    ]
    with pytest.raises(InvalidConfigurationError, match="itself anchored"):
        Simulation(bodies)
