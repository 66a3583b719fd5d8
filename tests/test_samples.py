"""
Tests for the synthetic particle sets.
"""

import numpy as np

from data.samples import SAMPLES, get_sample, make_disk_galaxy, sample_to_json


class TestDiskGalaxy:

    def test_shapes(self):
        galaxy = make_disk_galaxy(n_gas=50, n_stars=30)
        assert galaxy["gas"]["positions"].shape == (50, 3)
        assert galaxy["stars"]["positions"].shape == (30, 3)
        for block in (galaxy["gas"], galaxy["stars"]):
            n = len(block["positions"])
            assert all(len(v) == n for v in block.values())

    def test_deterministic(self):
        a = make_disk_galaxy(n_gas=20, n_stars=20, seed=3)
        b = make_disk_galaxy(n_gas=20, n_stars=20, seed=3)
        np.testing.assert_array_equal(a["gas"]["positions"], b["gas"]["positions"])
        np.testing.assert_array_equal(a["stars"]["age"], b["stars"]["age"])

    def test_metallicity_below_central_value(self, disk_galaxy):
        gas = disk_galaxy["gas"]
        z = gas["metal_mass"] / gas["mass"]
        assert np.all(z > 0)
        assert np.all(z <= 0.02)

    def test_young_and_cold_fractions(self, disk_galaxy):
        assert 0.1 < np.mean(disk_galaxy["stars"]["age"] <= 50.0) < 0.5
        assert 0.6 < np.mean(disk_galaxy["gas"]["temperature"] <= 3.0e4) < 0.95


class TestRegistry:

    def test_every_sample_builds(self):
        for name in SAMPLES:
            assert set(get_sample(name)) == {"gas", "stars"}

    def test_unknown(self):
        assert get_sample("nonexistent") is None

    def test_json_lists(self):
        data = sample_to_json(make_disk_galaxy(n_gas=5, n_stars=5))
        assert isinstance(data["gas"]["mass"], list)
        assert len(data["gas"]["positions"][0]) == 3
