"""
Tests for the radial profiles and the CMDF.

Verifies:
  1. Shell volumes and per-shell aggregation against hand calculations.
  2. Empty shells: zero value at the shell midpoint.
  3. Cumulative mass monotonicity and total.
  4. CMDF range, monotonicity and normalization.
  5. Dimension mismatch on every function.
"""

import math

import numpy as np
import pytest

from gadgetplotting.constants import SOLAR_METALLICITY
from gadgetplotting.errors import DimensionMismatchError, InvalidParameterError
from gadgetplotting.particles import radial_distance
from gadgetplotting.profiles import (
    cmdf,
    density_profile,
    mass_profile,
    metallicity_profile,
    shell_volume,
)


class TestShellVolume:

    def test_first_shell_is_sphere(self):
        assert shell_volume(2.0, 1) == pytest.approx(4.0 / 3.0 * math.pi * 8.0)

    @pytest.mark.parametrize("i", [1, 2, 3, 7, 20])
    def test_difference_of_spheres(self, i):
        w = 0.5
        expected = 4.0 / 3.0 * math.pi * ((w * i) ** 3 - (w * (i - 1)) ** 3)
        assert shell_volume(w, i) == pytest.approx(expected, rel=1e-12)


class TestDensityProfile:

    def test_hand_computed(self):
        mass = [1.0, 2.0, 3.0]
        distance = [0.5, 0.5, 1.5]
        x, y = density_profile(mass, distance, 2.0, 2)
        assert x.tolist() == pytest.approx([0.5, 1.5])
        assert y[0] == pytest.approx(3.0 / (4.0 / 3.0 * math.pi))
        assert y[1] == pytest.approx(3.0 / (4.0 / 3.0 * math.pi * 7.0))

    def test_empty_shell_uses_midpoint(self):
        x, y = density_profile([1.0], [0.1], 3.0, 3)
        assert x[1] == pytest.approx(1.5)
        assert x[2] == pytest.approx(2.5)
        assert y[1] == 0.0
        assert y[2] == 0.0

    def test_particle_on_max_radius_kept(self):
        x, y = density_profile([1.0], [3.0], 3.0, 3)
        assert y[-1] > 0
        assert x[-1] == 3.0

    def test_particles_beyond_max_radius_ignored(self):
        x, y = density_profile([1.0, 5.0], [0.5, 10.0], 1.0, 1)
        assert y[0] == pytest.approx(1.0 / (4.0 / 3.0 * math.pi))

    def test_non_negative(self, disk_galaxy):
        stars = disk_galaxy["stars"]
        distance = radial_distance(stars["positions"])
        _, y = density_profile(stars["mass"], distance, 40.0, 80)
        assert np.all(y >= 0)

    def test_decreasing_for_disk(self, disk_galaxy):
        """An exponential disk is densest near the center."""
        stars = disk_galaxy["stars"]
        distance = radial_distance(stars["positions"])
        _, y = density_profile(stars["mass"], distance, 20.0, 5)
        assert y[0] > y[2] > y[4]

    def test_output_length(self):
        x, y = density_profile([1.0, 1.0], [0.1, 0.2], 1.0, 17)
        assert len(x) == 17
        assert len(y) == 17

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            density_profile([1.0, 2.0], [1.0], 2.0, 2)

    def test_invalid_radius(self):
        with pytest.raises(InvalidParameterError):
            density_profile([1.0], [1.0], 0.0, 2)

    def test_invalid_bins(self):
        with pytest.raises(InvalidParameterError):
            density_profile([1.0], [1.0], 2.0, 0)


class TestMetallicityProfile:

    def test_solar_units(self):
        mass = [1.0, 1.0]
        metal = [SOLAR_METALLICITY, SOLAR_METALLICITY]
        _, y = metallicity_profile(mass, [0.1, 0.2], metal, 1.0, 1)
        assert y[0] == pytest.approx(1.0)

    def test_mass_weighted(self):
        mass = [1.0, 3.0]
        metal = [0.0, 0.0402]
        _, y = metallicity_profile(mass, [0.1, 0.2], metal, 1.0, 1)
        assert y[0] == pytest.approx((0.0402 / 4.0) / 0.0134)

    def test_empty_shell_zero(self):
        x, y = metallicity_profile([1.0], [0.1], [0.01], 2.0, 2)
        assert y[1] == 0.0
        assert x[1] == pytest.approx(1.5)

    def test_non_negative(self, disk_galaxy):
        gas = disk_galaxy["gas"]
        distance = radial_distance(gas["positions"])
        _, y = metallicity_profile(gas["mass"], distance, gas["metal_mass"], 40.0, 40)
        assert np.all(y >= 0)

    def test_gradient_for_disk(self, disk_galaxy):
        gas = disk_galaxy["gas"]
        distance = radial_distance(gas["positions"])
        _, y = metallicity_profile(gas["mass"], distance, gas["metal_mass"], 12.0, 3)
        assert y[0] > y[1] > y[2]

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            metallicity_profile([1.0, 2.0], [1.0, 2.0], [0.1], 2.0, 2)


class TestMassProfile:

    def test_cumulative(self):
        x, y = mass_profile([1.0, 2.0, 4.0], [0.5, 1.5, 2.5], 3.0, 3)
        assert y.tolist() == pytest.approx([1.0, 3.0, 7.0])
        assert x.tolist() == pytest.approx([0.5, 1.5, 2.5])

    def test_empty_shell_keeps_running_total(self):
        x, y = mass_profile([1.0, 4.0], [0.5, 2.5], 3.0, 3)
        assert y.tolist() == pytest.approx([1.0, 1.0, 5.0])
        assert x[1] == pytest.approx(1.5)

    def test_monotonic_and_total(self, disk_galaxy):
        stars = disk_galaxy["stars"]
        distance = radial_distance(stars["positions"])
        max_radius = float(distance.max())
        _, y = mass_profile(stars["mass"], distance, max_radius, 50)
        assert np.all(np.diff(y) >= 0)
        assert y[-1] == pytest.approx(stars["mass"].sum(), rel=1e-12)

    def test_random_inputs_monotonic(self):
        rng = np.random.default_rng(3)
        for _ in range(20):
            n = int(rng.integers(1, 200))
            mass = rng.uniform(0.0, 10.0, size=n)
            distance = rng.uniform(0.0, 5.0, size=n)
            _, y = mass_profile(mass, distance, 5.0, int(rng.integers(1, 30)))
            assert np.all(np.diff(y) >= 0)
            assert y[-1] == pytest.approx(mass.sum())

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            mass_profile([1.0], [1.0, 2.0], 2.0, 2)


class TestCMDF:

    def test_hand_computed(self):
        mass = [1.0, 1.0, 2.0]
        metal = [0.001, 0.003, 0.016]
        x, y = cmdf(mass, metal, 0.01, 2)
        # Z = [0.001, 0.003, 0.008]: bin [0, 0.005) holds two, [0.005, 0.01] one
        assert y.tolist() == pytest.approx([0.5, 1.0])
        assert x.tolist() == pytest.approx([0.002, 0.008])

    def test_x_norm(self):
        mass = [1.0, 1.0, 2.0]
        metal = [0.001, 0.003, 0.016]
        x, y = cmdf(mass, metal, 0.01, 2, x_norm=True)
        assert y.tolist() == pytest.approx([0.5, 1.0])
        assert x.tolist() == pytest.approx([0.2, 0.8])

    def test_particles_above_range(self):
        """Mass beyond max_z is not an error: the curve stays below 1."""
        x, y = cmdf([1.0, 1.0], [0.001, 0.5], 0.01, 4)
        assert y[-1] == pytest.approx(0.5)

    def test_empty_bin_midpoint(self):
        x, y = cmdf([1.0], [0.0001], 0.01, 4)
        assert x[3] == pytest.approx(0.00875)
        assert y.tolist() == pytest.approx([1.0, 1.0, 1.0, 1.0])

    def test_bounded_and_monotonic(self, disk_galaxy):
        stars = disk_galaxy["stars"]
        for x_norm in (False, True):
            _, y = cmdf(stars["mass"], stars["metal_mass"], 0.02, 25, x_norm=x_norm)
            assert np.all(y >= 0)
            assert np.all(y <= 1.0 + 1e-12)
            assert np.all(np.diff(y) >= 0)

    def test_reaches_one(self, disk_galaxy):
        stars = disk_galaxy["stars"]
        z = stars["metal_mass"] / stars["mass"]
        _, y = cmdf(stars["mass"], stars["metal_mass"], float(z.max()), 30)
        assert y[-1] == pytest.approx(1.0)

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            cmdf([1.0, 2.0], [0.1], 0.5, 2)

    def test_zero_total_mass(self):
        with pytest.raises(InvalidParameterError):
            cmdf([0.0, 0.0], [0.0, 0.0], 0.5, 2)
