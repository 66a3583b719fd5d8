"""
Particle geometry helpers: center of mass, distances and particle filters.

Positions are (N, 3) arrays of Cartesian coordinates. A (3, N) array,
the column layout used by GADGET readers, is accepted as well and
transposed on the fly.

Particle filters replace an implicit "no filter" global: the caller
passes a filter object explicitly, and PASS_ALL is the default.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import numpy as np

from gadgetplotting.binning import as_array, check_dimensions
from gadgetplotting.errors import DimensionMismatchError, InvalidParameterError

_PLANES = {"xy": (0, 1), "xz": (0, 2), "yz": (1, 2)}


def as_positions(positions):
    """Return `positions` as an (N, 3) float array."""
    pos = np.asarray(positions, dtype=float)
    if pos.ndim == 1 and pos.size == 3:
        return pos.reshape(1, 3)
    if pos.ndim != 2:
        raise DimensionMismatchError(
            "Positions must be a 2D array, got {} dimensions".format(pos.ndim)
        )
    if pos.shape[1] == 3:
        return pos
    if pos.shape[0] == 3:
        return pos.T
    raise DimensionMismatchError(
        "Positions must have 3 coordinates per particle, got shape {}".format(pos.shape)
    )


def center_of_mass(positions, mass):
    """
    Mass-weighted mean position R = sum(m_i r_i) / sum(m_i).

    Parameters
    ----------
    positions : array_like
        Particle positions, shape (N, 3) or (3, N).
    mass : array_like
        Particle masses, length N.

    Returns
    -------
    tuple of float
        (x, y, z) of the center of mass.

    Raises
    ------
    DimensionMismatchError
        If the number of positions and masses differ.
    InvalidParameterError
        If the total mass is not positive.
    """
    pos = as_positions(positions)
    mass = as_array(mass)
    check_dimensions(pos, mass)

    total = mass.sum()
    if not total > 0:
        raise InvalidParameterError("The total mass must be positive")

    com = mass @ pos / total
    return float(com[0]), float(com[1]), float(com[2])


def radial_distance(positions, center=(0.0, 0.0, 0.0)):
    """3D distance of every particle to `center`."""
    pos = as_positions(positions)
    return np.linalg.norm(pos - np.asarray(center, dtype=float), axis=1)


def projected_distance(positions, center=(0.0, 0.0, 0.0), plane="xy"):
    """
    Distance of every particle to `center` projected on a coordinate plane.

    Used for surface densities, e.g. the Kennicutt-Schmidt law.

    Parameters
    ----------
    plane : str, optional
        One of "xy", "xz", "yz" (default "xy").
    """
    try:
        axes = list(_PLANES[plane])
    except KeyError:
        raise InvalidParameterError(
            "plane must be one of {}, got {!r}".format(sorted(_PLANES), plane)
        ) from None
    pos = as_positions(positions)
    delta = pos[:, axes] - np.asarray(center, dtype=float)[axes]
    return np.linalg.norm(delta, axis=1)


class ParticleFilter:
    """
    Selects a subset of particles from their positions.

    Subclasses implement __call__(positions) and return the integer
    indices of the particles to keep.
    """

    def __call__(self, positions):
        raise NotImplementedError

    def to_dict(self):
        """Serialize the filter parameters."""
        return {"type": type(self).__name__}


class PassAll(ParticleFilter):
    """Filter that keeps every particle."""

    def __call__(self, positions):
        return np.arange(len(as_positions(positions)))


class WithinSphere(ParticleFilter):
    """
    Keep the particles within `radius` of `center` (boundary included).

    Parameters
    ----------
    radius : float
        Radius of the sphere, in the units of the positions.
    center : sequence of float, optional
        Center of the sphere (default origin).
    """

    def __init__(self, radius, center=(0.0, 0.0, 0.0)):
        if not radius > 0:
            raise InvalidParameterError("radius must be positive, got {}".format(radius))
        self.radius = float(radius)
        self.center = tuple(float(c) for c in center)

    def __call__(self, positions):
        return np.flatnonzero(radial_distance(positions, self.center) <= self.radius)

    def to_dict(self):
        return {"type": "WithinSphere", "radius": self.radius, "center": list(self.center)}


PASS_ALL = PassAll()


def apply_filter(positions, *arrays, particle_filter=PASS_ALL):
    """
    Apply `particle_filter` to positions and every parallel array.

    Parameters
    ----------
    positions : array_like
        Particle positions, shape (N, 3) or (3, N).
    *arrays : array_like
        Per-particle arrays of length N (masses, temperatures, ...).
    particle_filter : ParticleFilter, optional
        Filter to apply (default PASS_ALL).

    Returns
    -------
    tuple
        (filtered_positions, *filtered_arrays), positions as (M, 3).
    """
    pos = as_positions(positions)
    arrays = [as_array(a) for a in arrays]
    check_dimensions(pos, *arrays)
    idx = particle_filter(pos)
    return (pos[idx],) + tuple(a[idx] for a in arrays)
