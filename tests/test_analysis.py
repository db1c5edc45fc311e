import math
import numpy as np

from orrery import Body, G_REAL, EARTH_MASS, LUNAR_DIST
from orrery.analysis import (
    _clamped_acos,
    binding_energy,
    orbital_elements,
    specific_orbital_energy,
)

MU = G_REAL * EARTH_MASS


def _pair(pos, vel):
    planet = Body(EARTH_MASS, [1.0e11, 0.0, 0.0], [0.0, 3.0e4, 0.0], name="Planet")
    moon = Body(1.0e20, planet.pos + np.asarray(pos), planet.vel + np.asarray(vel), name="Moon")
    return moon, planet


def test_circular_orbit_elements():
    v = math.sqrt(MU / LUNAR_DIST)
    moon, planet = _pair([LUNAR_DIST, 0.0, 0.0], [0.0, v, 0.0])
    el = orbital_elements(moon, planet, G_REAL)

    assert math.isclose(el.semi_major_axis, LUNAR_DIST, rel_tol=1e-9)
    assert el.eccentricity < 1e-5
    assert math.isclose(el.inclination, 0.0, abs_tol=1e-12)
    assert math.isclose(el.period, 2 * math.pi * math.sqrt(LUNAR_DIST**3 / MU), rel_tol=1e-9)
    assert math.isclose(el.speed, v, rel_tol=1e-9)
    assert el.specific_energy < 0


def test_eccentric_orbit_from_periapsis():
    a, e = 0.45 * LUNAR_DIST, 0.10
    r_peri = a * (1 - e)
    v_peri = math.sqrt(MU * (1 + e) / r_peri)
    moon, planet = _pair([0.0, r_peri, 0.0], [-v_peri, 0.0, 0.0])
    el = orbital_elements(moon, planet, G_REAL)

    assert math.isclose(el.semi_major_axis, a, rel_tol=1e-9)
    assert math.isclose(el.eccentricity, e, rel_tol=1e-6)
    assert math.isclose(el.periapsis, r_peri, rel_tol=1e-6)
    assert math.isclose(el.apoapsis, a * (1 + e), rel_tol=1e-6)


def test_retrograde_orbit_inclination_above_ninety():
    v = math.sqrt(MU / LUNAR_DIST)
    moon, planet = _pair([LUNAR_DIST, 0.0, 0.0], [0.0, -v, 0.0])
    el = orbital_elements(moon, planet, G_REAL)
    assert math.isclose(el.inclination_deg, 180.0, abs_tol=1e-9)


def test_inclined_orbit():
    inc = math.radians(5.14)
    v = math.sqrt(MU / LUNAR_DIST)
    moon, planet = _pair([LUNAR_DIST, 0.0, 0.0], [0.0, v * math.cos(inc), v * math.sin(inc)])
    el = orbital_elements(moon, planet, G_REAL)
    assert math.isclose(el.inclination_deg, 5.14, rel_tol=1e-9)


def test_custom_reference_normal():
    v = math.sqrt(MU / LUNAR_DIST)
    moon, planet = _pair([LUNAR_DIST, 0.0, 0.0], [0.0, v, 0.0])
    el = orbital_elements(moon, planet, G_REAL, normal=(1.0, 0.0, 0.0))
    assert math.isclose(el.inclination_deg, 90.0, abs_tol=1e-9)


def test_unbound_orbit_returns_none():
    r = LUNAR_DIST
    v_esc = math.sqrt(2 * MU / r)
    moon, planet = _pair([r, 0.0, 0.0], [0.0, 1.2 * v_esc, 0.0])
    assert orbital_elements(moon, planet, G_REAL) is None
    assert binding_energy(moon, planet, G_REAL) > 0


def test_radial_orbit_has_undefined_inclination():
    moon, planet = _pair([LUNAR_DIST, 0.0, 0.0], [10.0, 0.0, 0.0])
    el = orbital_elements(moon, planet, G_REAL)
    assert math.isnan(el.inclination)
    assert math.isclose(el.eccentricity, 1.0)


def test_binding_energy_is_pairwise_specific_energy():
    moon, planet = _pair([2.0e8, 0.0, 0.0], [0.0, 500.0, 100.0])
    expected = 0.5 * (500.0**2 + 100.0**2) - MU / 2.0e8
    assert math.isclose(binding_energy(moon, planet, G_REAL), expected, rel_tol=1e-12)
    assert binding_energy(moon, planet, G_REAL) == specific_orbital_energy(moon, planet, G_REAL)


def test_binding_energy_ignores_satellite_mass():
    light, planet = _pair([2.0e8, 0.0, 0.0], [0.0, 500.0, 0.0])
    heavy = Body(1.0e24, light.pos, light.vel, name="Heavy")
    assert binding_energy(light, planet) == binding_energy(heavy, planet)


def test_acos_argument_is_clamped():
    assert _clamped_acos(1.0 + 1e-12) == 0.0
    assert math.isclose(_clamped_acos(-1.0 - 1e-12), math.pi)
