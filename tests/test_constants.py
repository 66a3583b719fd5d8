"""
Tests for the physical constants module.

HUBBLE_CONST and SOLAR_METALLICITY are part of the public contract and
must keep their exact values.
"""

from gadgetplotting.constants import (
    HUBBLE_CONST,
    SOLAR_METALLICITY,
    KENNICUTT98_SLOPE,
    KENNICUTT98_INTERCEPT,
    KENNICUTT98_RHO_UNIT,
    KS_MIN_POINTS,
)


class TestPublicConstants:

    def test_hubble_const(self):
        assert HUBBLE_CONST == 0.102201

    def test_solar_metallicity(self):
        """Asplund et al. (2009) value."""
        assert SOLAR_METALLICITY == 0.0134

    def test_hubble_time_about_ten_gyr(self):
        """1 / (100 km/s/Mpc) is close to 9.78 Gyr."""
        assert 9.7 < 1.0 / HUBBLE_CONST < 9.9


class TestKennicutt98:

    def test_slope(self):
        assert KENNICUTT98_SLOPE == 1.4

    def test_intercept(self):
        assert KENNICUTT98_INTERCEPT == 2.5e-4

    def test_rho_unit(self):
        assert KENNICUTT98_RHO_UNIT == 1.0

    def test_min_points(self):
        assert KS_MIN_POINTS == 5
