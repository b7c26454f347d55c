# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the orbit → equatorial transform."""
import math

import numpy as np
import pytest

from exofinder.domain.exoplanet import Exoplanet
from exofinder.domain.equatorial import (
    EquatorialPosition,
    declination_deg,
    orbit_rotation,
    orbit_to_equatorial,
    orbital_plane_position,
    right_ascension,
    set_equatorial_coordinates,
)


LY_PER_AU = 1.58125074e-5
HALF_YEAR_S = 15_778_800.0


def _circular(**kwargs) -> Exoplanet:
    elements = dict(orbital_radius=1.0, orbital_period=1.0, eccentricity=0.0)
    elements.update(kwargs)
    return Exoplanet(**elements)


# ── Building blocks ───────────────────────────────────────────────

class TestOrbitalPlane:

    def test_periapsis(self):
        x_o, y_o = orbital_plane_position(2.0, 0.0, 0.0)
        assert (x_o, y_o) == (2.0, 0.0)

    def test_quarter_circle(self):
        x_o, y_o = orbital_plane_position(1.0, 0.0, math.pi / 2)
        assert x_o == pytest.approx(0.0, abs=1e-15)
        assert y_o == pytest.approx(1.0)

    def test_unbound_is_nan(self):
        x_o, y_o = orbital_plane_position(1.0, 1.5, 0.0)
        assert math.isnan(x_o) and math.isnan(y_o)


class TestOrbitRotation:

    def test_shape(self):
        assert orbit_rotation(0.1, 0.2, 0.3).shape == (3, 2)

    def test_identity_for_zero_angles(self):
        rot = orbit_rotation(0.0, 0.0, 0.0)
        np.testing.assert_allclose(rot, [[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]], atol=1e-15)

    def test_out_of_plane_row(self):
        """z_eq = x_o·sin ω·sin i + y_o·cos ω·sin i."""
        i, node, w = 0.4, 1.1, 0.7
        rot = orbit_rotation(i, node, w)
        assert rot[2, 0] == pytest.approx(math.sin(w) * math.sin(i))
        assert rot[2, 1] == pytest.approx(math.cos(w) * math.sin(i))

    def test_in_plane_terms(self):
        i, node, w = 0.4, 1.1, 0.7
        cO, sO, co, so, ci = (math.cos(node), math.sin(node), math.cos(w),
                              math.sin(w), math.cos(i))
        rot = orbit_rotation(i, node, w)
        assert rot[0, 0] == pytest.approx(cO * co - sO * so * ci)
        assert rot[0, 1] == pytest.approx(-(sO * co + cO * so * ci))
        assert rot[1, 0] == pytest.approx(cO * so + sO * co * ci)
        assert rot[1, 1] == pytest.approx(cO * co - sO * so * ci)


class TestAngles:

    @pytest.mark.parametrize("x,y,expected", [
        (1.0, 0.0, 0.0),
        (0.0, 1.0, math.pi / 2),
        (-1.0, 0.0, math.pi),
        (0.0, -1.0, 3 * math.pi / 2),
        (1.0, -1e-12, 2 * math.pi - 1e-12),
    ])
    def test_right_ascension_wraps(self, x, y, expected):
        ra = right_ascension(x, y)
        assert 0.0 <= ra < 2 * math.pi
        assert ra == pytest.approx(expected)

    def test_declination_at_origin_is_zero(self):
        assert declination_deg(0.0, 0.0, 0.0) == 0.0

    def test_declination_pole(self):
        assert declination_deg(0.0, 0.0, 3.0) == pytest.approx(90.0)
        assert declination_deg(0.0, 0.0, -3.0) == pytest.approx(-90.0)

    def test_declination_45(self):
        assert declination_deg(1.0, 0.0, 1.0) == pytest.approx(45.0)


# ── Full transform ────────────────────────────────────────────────

class TestOrbitToEquatorial:

    def test_default_body_at_epoch_zero(self):
        """t = 0 ⇒ periapsis on the +x axis."""
        pos = orbit_to_equatorial(Exoplanet(), 0.0)
        assert isinstance(pos, EquatorialPosition)
        assert pos.distance_ly == pytest.approx(2.774 * (1 - 0.37) * LY_PER_AU)
        assert pos.ra_rad == 0.0
        assert pos.declination_deg == pytest.approx(0.0, abs=1e-12)

    def test_half_period_circular(self):
        """Half a period on a unit circle puts the planet at -x."""
        pos = orbit_to_equatorial(_circular(), HALF_YEAR_S)
        assert pos.distance_ly == pytest.approx(LY_PER_AU)
        assert pos.ra_rad == pytest.approx(math.pi, abs=1e-9)
        assert pos.declination_deg == pytest.approx(0.0, abs=1e-9)

    def test_inclined_periapsis_above_node(self):
        """i = 90°, ω = 90°, Ω = 0 at t = 0: (x, y, z)_eq = (0, 1, 1)."""
        planet = _circular(inclination=90.0, argument_of_periapsis=90.0)
        pos = orbit_to_equatorial(planet, 0.0)
        assert pos.distance_ly == pytest.approx(LY_PER_AU)
        assert pos.ra_rad == pytest.approx(math.pi / 2)
        assert pos.declination_deg == pytest.approx(45.0)

    @pytest.mark.parametrize("t", [0.0, 1e5, 7.3e6, HALF_YEAR_S, 2.9e7, 1.7e9])
    def test_unrotated_circular_stays_in_equator(self, t):
        pos = orbit_to_equatorial(_circular(), t)
        assert pos.declination_deg == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize("t", [-1.0e7, -3.3e8, -HALF_YEAR_S / 3])
    def test_negative_epoch_wraps_ra(self, t):
        planet = _circular(eccentricity=0.2, inclination=15.0)
        pos = orbit_to_equatorial(planet, t)
        assert 0.0 <= pos.ra_rad < 2 * math.pi
        assert pos.distance_ly > 0

    @pytest.mark.parametrize("e", [0.0, 0.3, 0.7, 0.8])
    @pytest.mark.parametrize("t", [0.0, 4.1e6, 1.2e7, 1.7e9])
    def test_ranges(self, e, t):
        planet = Exoplanet(eccentricity=e, inclination=33.0,
                           longitude_of_node=120.0, argument_of_periapsis=250.0)
        pos = orbit_to_equatorial(planet, t)
        assert pos.distance_ly > 0
        assert 0.0 <= pos.ra_rad < 2 * math.pi
        assert -90.0 <= pos.declination_deg <= 90.0

    def test_distance_bounded_by_apsides(self):
        planet = Exoplanet(orbital_radius=2.0, eccentricity=0.5)
        for t in np.linspace(0.0, 4.8 * 31_557_600.0, 17):
            pos = orbit_to_equatorial(planet, float(t))
            assert 1.0 * LY_PER_AU - 1e-15 <= pos.distance_ly <= 3.0 * LY_PER_AU + 1e-15

    def test_solver_failure_propagates_nan(self):
        """e = 1 at t = 0 cannot be solved; declination is kept."""
        planet = Exoplanet(eccentricity=1.0, declination=12.5)
        pos = orbit_to_equatorial(planet, 0.0)
        assert math.isnan(pos.distance_ly)
        assert math.isnan(pos.ra_rad)
        assert pos.declination_deg == 12.5

    def test_hyperbolic_eccentricity_gives_nan_ra(self):
        """e = 1.5 at t = 0 passes the solver but has no true anomaly."""
        pos = orbit_to_equatorial(Exoplanet(eccentricity=1.5), 0.0)
        assert math.isnan(pos.ra_rad)


class TestSetEquatorialCoordinates:

    def test_returns_new_record(self):
        planet = Exoplanet()
        located = set_equatorial_coordinates(planet, 0.0)
        assert located is not planet
        assert planet.distance == 0.0
        assert located.distance == pytest.approx(1.74762 * LY_PER_AU)
        assert located.name == planet.name
        assert located.eccentricity == planet.eccentricity


# ── Domain purity ─────────────────────────────────────────────────

class TestEquatorialPurity:

    def test_equatorial_imports_only_allowed(self):
        """equatorial.py may import stdlib math/dataclasses and numpy only."""
        import ast
        import os
        allowed = {'math', 'numpy', 'dataclasses', 'typing', 'abc', 'enum', '__future__'}
        path = os.path.join(os.path.dirname(__file__), '..', 'src',
                            'exofinder', 'domain', 'equatorial.py')
        with open(path, encoding='utf-8') as f:
            tree = ast.parse(f.read())
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    root = alias.name.split('.')[0]
                    assert root in allowed, f"Disallowed import '{alias.name}'"
            if isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
                root = node.module.split('.')[0]
                assert root in allowed or root == 'exofinder', \
                    f"Disallowed import from '{node.module}'"
