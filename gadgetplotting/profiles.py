"""
Radial profiles and the cumulative metallicity distribution function.

All profiles cut [0, max] into `bins` windows of equal width (see
gadgetplotting.binning) and aggregate particle quantities per window.
An empty window is not an error here: its y value is zero and its x
value falls back to the window midpoint.

Units are never converted. `distance` and `max_radius` must share a
length unit, and `metal_mass` and `mass` must share a mass unit.

Functions:
    density_profile     - mass per spherical shell volume
    metallicity_profile - shell metallicity in solar units
    mass_profile        - cumulative mass inside each shell
    cmdf                - cumulative metallicity distribution function

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math

import numpy as np

from gadgetplotting.binning import (
    as_array,
    check_bins,
    check_dimensions,
    linear_edges,
    window_indices,
    window_midpoints,
)
from gadgetplotting.constants import SOLAR_METALLICITY
from gadgetplotting.errors import InvalidParameterError

log = logging.getLogger(__name__)


def _check_upper_bound(name, value):
    if not value > 0:
        raise InvalidParameterError(
            "{} must be positive, got {!r}".format(name, value)
        )
    return float(value)


def _radial_windows(distance, max_radius, bins):
    """Shell midpoints and member indices for [0, max_radius]."""
    max_radius = _check_upper_bound("max_radius", max_radius)
    bins = check_bins(bins)
    edges = linear_edges(0.0, max_radius, bins)
    shells = window_indices(distance, edges)
    empty = sum(1 for idx in shells if idx.size == 0)
    if empty:
        log.debug("%d of %d radial shells are empty", empty, bins)
    return window_midpoints(edges), shells


def shell_volume(width, i):
    """
    Volume of spherical shell i (1-based) of constant width.

    Closed form of 4/3 pi [(w i)^3 - (w (i-1))^3].
    """
    return 4.0 / 3.0 * math.pi * width ** 3 * (3 * i * i - 3 * i + 1)


def density_profile(mass, distance, max_radius, bins):
    """
    Compute a density profile up to a radius `max_radius`.

    Parameters
    ----------
    mass : array_like
        Masses of the particles.
    distance : array_like
        Radial distances of the particles.
    max_radius : float
        Maximum distance up to which the profile is calculated.
    bins : int
        Number of subdivisions of [0, max_radius].

    Returns
    -------
    tuple of numpy.ndarray
        (radii, densities). Radii are the mean distance of the particles
        in each shell (or the shell midpoint if it is empty); densities
        are in mass / length^3 of the input units.

    Raises
    ------
    DimensionMismatchError
        If `mass` and `distance` differ in length.
    """
    mass = as_array(mass)
    distance = as_array(distance)
    check_dimensions(mass, distance)

    midpoints, shells = _radial_windows(distance, max_radius, bins)
    width = float(max_radius) / len(shells)

    x_data = np.empty(len(shells))
    y_data = np.zeros(len(shells))
    for i, idx in enumerate(shells, start=1):
        if idx.size == 0:
            x_data[i - 1] = midpoints[i - 1]
            continue
        x_data[i - 1] = distance[idx].mean()
        y_data[i - 1] = mass[idx].sum() / shell_volume(width, i)

    return x_data, y_data


def metallicity_profile(mass, distance, metal_mass, max_radius, bins):
    """
    Compute a metallicity profile up to `max_radius`, in solar units.

    The metallicity of a shell is its total metal mass over its total
    mass, divided by SOLAR_METALLICITY.

    Parameters
    ----------
    mass : array_like
        Masses of the particles.
    distance : array_like
        Radial distances of the particles.
    metal_mass : array_like
        Metal content of the particles, in the same unit as `mass`.
    max_radius : float
        Maximum distance up to which the profile is calculated.
    bins : int
        Number of subdivisions of [0, max_radius].

    Returns
    -------
    tuple of numpy.ndarray
        (radii, metallicities).
    """
    mass = as_array(mass)
    distance = as_array(distance)
    metal_mass = as_array(metal_mass)
    check_dimensions(mass, distance, metal_mass)

    midpoints, shells = _radial_windows(distance, max_radius, bins)

    x_data = np.empty(len(shells))
    y_data = np.zeros(len(shells))
    for i, idx in enumerate(shells):
        if idx.size == 0:
            x_data[i] = midpoints[i]
            continue
        x_data[i] = distance[idx].mean()
        total_mass = mass[idx].sum()
        if total_mass > 0:
            y_data[i] = (metal_mass[idx].sum() / total_mass) / SOLAR_METALLICITY

    return x_data, y_data


def mass_profile(mass, distance, max_radius, bins):
    """
    Compute an accumulated mass profile up to `max_radius`.

    Returns
    -------
    tuple of numpy.ndarray
        (radii, cumulative masses). The masses never decrease and the
        last one is the total mass inside max_radius.
    """
    mass = as_array(mass)
    distance = as_array(distance)
    check_dimensions(mass, distance)

    midpoints, shells = _radial_windows(distance, max_radius, bins)

    x_data = np.empty(len(shells))
    y_data = np.zeros(len(shells))
    for i, idx in enumerate(shells):
        if idx.size == 0:
            x_data[i] = midpoints[i]
        else:
            x_data[i] = distance[idx].mean()
            y_data[i] = mass[idx].sum()

    return x_data, np.cumsum(y_data)


def cmdf(mass, metal_mass, max_z, bins, x_norm=False):
    """
    Compute the cumulative metallicity distribution function up to `max_z`.

    Each particle has a dimensionless metallicity Z = metal_mass / mass.
    The y value of bin i is the fraction of the total mass with Z in
    bins 1..i, so the curve reaches 1.0 only if no particle lies beyond
    `max_z`.

    Parameters
    ----------
    mass : array_like
        Masses of the particles.
    metal_mass : array_like
        Metal content of the particles, in the same unit as `mass`.
    max_z : float
        Maximum dimensionless metallicity covered by the bins.
    bins : int
        Number of subdivisions of [0, max_z].
    x_norm : bool, optional
        Normalize Z by `max_z`, so the bins cover [0, 1] (default False).

    Returns
    -------
    tuple of numpy.ndarray
        (metallicities, cumulative mass fractions).

    Raises
    ------
    DimensionMismatchError
        If `mass` and `metal_mass` differ in length.
    InvalidParameterError
        If the total mass is not positive.
    """
    mass = as_array(mass)
    metal_mass = as_array(metal_mass)
    check_dimensions(mass, metal_mass)
    max_z = _check_upper_bound("max_z", max_z)
    bins = check_bins(bins)

    total_mass = mass.sum()
    if not total_mass > 0:
        raise InvalidParameterError("The total mass must be positive")

    # Massless particles get an inf or NaN metallicity and never land in a bin
    with np.errstate(divide="ignore", invalid="ignore"):
        z = metal_mass / mass

    if x_norm:
        z = z / max_z
        edges = linear_edges(0.0, 1.0, bins)
    else:
        edges = linear_edges(0.0, max_z, bins)
    midpoints = window_midpoints(edges)

    x_data = np.empty(bins)
    y_data = np.zeros(bins)
    for i, idx in enumerate(window_indices(z, edges)):
        if idx.size == 0:
            x_data[i] = midpoints[i]
        else:
            x_data[i] = z[idx].mean()
            y_data[i] = mass[idx].sum() / total_mass

    return x_data, np.cumsum(y_data)
