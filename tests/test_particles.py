"""
Tests for particle geometry helpers and particle filters.
"""

import numpy as np
import pytest

from gadgetplotting.errors import DimensionMismatchError, InvalidParameterError
from gadgetplotting.particles import (
    PASS_ALL,
    WithinSphere,
    apply_filter,
    as_positions,
    center_of_mass,
    projected_distance,
    radial_distance,
)


POSITIONS = np.array([
    [1.0, 0.0, 0.0],
    [0.0, 2.0, 0.0],
    [0.0, 0.0, 3.0],
    [4.0, 4.0, 4.0],
])


class TestPositions:

    def test_column_layout_is_transposed(self):
        pos = as_positions(np.zeros((3, 10)))
        assert pos.shape == (10, 3)

    def test_single_particle(self):
        assert as_positions([1.0, 2.0, 3.0]).shape == (1, 3)

    def test_bad_shape(self):
        with pytest.raises(DimensionMismatchError):
            as_positions(np.zeros((4, 4)))
        with pytest.raises(DimensionMismatchError):
            as_positions(np.zeros((2, 3, 4)))


class TestCenterOfMass:

    def test_equal_masses(self):
        com = center_of_mass(POSITIONS, np.ones(4))
        assert com == pytest.approx((1.25, 1.5, 1.75))

    def test_weighted(self):
        com = center_of_mass(POSITIONS, [1.0, 0.0, 0.0, 1.0])
        assert com == pytest.approx((2.5, 2.0, 2.0))

    def test_column_layout(self):
        assert center_of_mass(POSITIONS.T, np.ones(4)) == pytest.approx(
            center_of_mass(POSITIONS, np.ones(4)))

    def test_zero_mass(self):
        with pytest.raises(InvalidParameterError):
            center_of_mass(POSITIONS, np.zeros(4))

    def test_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            center_of_mass(POSITIONS, np.ones(3))

    def test_symmetric_disk_is_centered(self, disk_galaxy):
        gas = disk_galaxy["gas"]
        com = center_of_mass(gas["positions"], gas["mass"])
        assert all(abs(c) < 1.0 for c in com)


class TestDistances:

    def test_radial(self):
        d = radial_distance(POSITIONS)
        np.testing.assert_allclose(d, [1.0, 2.0, 3.0, np.sqrt(48.0)])

    def test_radial_with_center(self):
        d = radial_distance(POSITIONS, center=(1.0, 0.0, 0.0))
        assert d[0] == 0.0

    def test_projected_xy_ignores_z(self):
        d = projected_distance(POSITIONS, plane="xy")
        np.testing.assert_allclose(d, [1.0, 2.0, 0.0, np.sqrt(32.0)])

    def test_projected_planes(self):
        np.testing.assert_allclose(projected_distance(POSITIONS, plane="xz")[:3], [1.0, 0.0, 3.0])
        np.testing.assert_allclose(projected_distance(POSITIONS, plane="yz")[:3], [0.0, 2.0, 3.0])

    def test_unknown_plane(self):
        with pytest.raises(InvalidParameterError):
            projected_distance(POSITIONS, plane="xw")


class TestFilters:

    def test_pass_all(self):
        np.testing.assert_array_equal(PASS_ALL(POSITIONS), [0, 1, 2, 3])

    def test_within_sphere_boundary_included(self):
        idx = WithinSphere(2.0)(POSITIONS)
        np.testing.assert_array_equal(idx, [0, 1])

    def test_within_sphere_center(self):
        idx = WithinSphere(0.5, center=(4.0, 4.0, 4.0))(POSITIONS)
        np.testing.assert_array_equal(idx, [3])

    def test_radius_must_be_positive(self):
        with pytest.raises(InvalidParameterError):
            WithinSphere(0.0)

    def test_to_dict(self):
        assert PASS_ALL.to_dict() == {"type": "PassAll"}
        assert WithinSphere(2.0).to_dict() == {
            "type": "WithinSphere", "radius": 2.0, "center": [0.0, 0.0, 0.0]}

    def test_apply_filter_default(self):
        pos, mass = apply_filter(POSITIONS, np.arange(4.0))
        assert pos.shape == (4, 3)
        np.testing.assert_array_equal(mass, [0.0, 1.0, 2.0, 3.0])

    def test_apply_filter_keeps_arrays_parallel(self):
        pos, mass, temp = apply_filter(
            POSITIONS, [10.0, 20.0, 30.0, 40.0], [1.0, 2.0, 3.0, 4.0],
            particle_filter=WithinSphere(3.0),
        )
        assert len(pos) == 3
        np.testing.assert_array_equal(mass, [10.0, 20.0, 30.0])
        np.testing.assert_array_equal(temp, [1.0, 2.0, 3.0])

    def test_apply_filter_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            apply_filter(POSITIONS, np.ones(5))
