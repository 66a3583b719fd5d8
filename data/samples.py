"""
Synthetic particle sets for examples and tests.

The snapshot readers are not part of this repository, so the API
examples and the test suite use small, deterministic galaxies drawn
from analytic distributions instead of real GADGET output.

DISK GALAXY:
  Exponential disk: surface density ~ exp(-R / R_d), so the cylindrical
  radius follows a Gamma(2, R_d) distribution. Thin Gaussian vertical
  profile. Metallicity falls off exponentially with radius. A fraction
  of the gas is hot (T ~ 1e6 K) and a fraction of the stars is young
  (age < 50 Myr), enough for a Kennicutt-Schmidt fit out to a few
  scale lengths.

Units: M_sun, kpc, K, Myr.

IMPORTANT: No unicode characters (Windows charmap constraint).
"""

import numpy as np


def _disk_positions(rng, n, scale_length, scale_height):
    radius = rng.gamma(2.0, scale_length, size=n)
    phi = rng.uniform(0.0, 2.0 * np.pi, size=n)
    z = rng.normal(0.0, scale_height, size=n)
    return np.column_stack((radius * np.cos(phi), radius * np.sin(phi), z))


def _metal_mass(positions, mass, central_z, z_scale_length):
    radius = np.linalg.norm(positions[:, :2], axis=1)
    return mass * central_z * np.exp(-radius / z_scale_length)


def make_disk_galaxy(n_gas=2000, n_stars=2000, seed=42, scale_length=3.0,
                     scale_height=0.3, particle_mass=1.0e5, hot_fraction=0.2,
                     young_fraction=0.3):
    """
    Build a synthetic disk galaxy.

    Parameters
    ----------
    n_gas, n_stars : int
        Number of gas and star particles.
    seed : int
        Seed for numpy.random.default_rng; same seed, same galaxy.
    scale_length : float
        Disk scale length in kpc.
    scale_height : float
        Disk scale height in kpc.
    particle_mass : float
        Mass of every particle in M_sun.
    hot_fraction : float
        Fraction of gas particles at ~1e6 K.
    young_fraction : float
        Fraction of stars younger than 50 Myr.

    Returns
    -------
    dict
        {"gas": {positions, mass, metal_mass, temperature},
         "stars": {positions, mass, metal_mass, age}} with numpy arrays.
    """
    rng = np.random.default_rng(seed)

    gas_pos = _disk_positions(rng, n_gas, scale_length, scale_height)
    gas_mass = np.full(n_gas, particle_mass)
    hot = rng.random(n_gas) < hot_fraction
    temperature = np.where(
        hot,
        10.0 ** rng.normal(6.0, 0.2, size=n_gas),
        10.0 ** rng.normal(3.8, 0.2, size=n_gas),
    )

    star_pos = _disk_positions(rng, n_stars, 0.8 * scale_length, scale_height)
    star_mass = np.full(n_stars, particle_mass)
    young = rng.random(n_stars) < young_fraction
    age = np.where(
        young,
        rng.uniform(0.0, 50.0, size=n_stars),
        rng.uniform(50.0, 10000.0, size=n_stars),
    )

    return {
        "gas": {
            "positions": gas_pos,
            "mass": gas_mass,
            "metal_mass": _metal_mass(gas_pos, gas_mass, 0.02, 4.0 * scale_length),
            "temperature": temperature,
        },
        "stars": {
            "positions": star_pos,
            "mass": star_mass,
            "metal_mass": _metal_mass(star_pos, star_mass, 0.03, 3.0 * scale_length),
            "age": age,
        },
    }


SAMPLES = {
    "disk_galaxy": {
        "name": "Exponential disk galaxy (2000 gas + 2000 star particles)",
        "builder": make_disk_galaxy,
        "kwargs": {},
    },
    "small_disk_galaxy": {
        "name": "Exponential disk galaxy (200 gas + 200 star particles)",
        "builder": make_disk_galaxy,
        "kwargs": {"n_gas": 200, "n_stars": 200, "seed": 7},
    },
}


def get_sample(name):
    """Build sample `name` as numpy arrays, or None if unknown."""
    entry = SAMPLES.get(name)
    if entry is None:
        return None
    return entry["builder"](**entry["kwargs"])


def sample_to_json(sample):
    """Convert a sample to nested lists for jsonify."""
    return {
        family: {key: np.asarray(values).tolist() for key, values in block.items()}
        for family, block in sample.items()
    }
