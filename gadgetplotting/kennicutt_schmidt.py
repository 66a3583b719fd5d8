"""
Kennicutt-Schmidt law estimator.

Relates the star formation rate surface density to the gas surface
density in concentric annuli of a galaxy:

    log10(Sigma_SFR) = intercept + slope * log10(Sigma_gas)

Only cold gas (temperature <= temp_filter) and young stars
(age <= age_filter) take part. The star formation rate of an annulus is
its young stellar mass divided by age_filter. Annuli where either
density is zero are dropped together, so the two series stay paired
point by point (annulus identity is not kept). With fewer than
KS_MIN_POINTS surviving annuli there is no fit and the estimator
returns None, which callers treat as "skip this snapshot".

Reference: R. C. Kennicutt (1998), ApJ 498, 541.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math

import numpy as np
from scipy import stats

from gadgetplotting.binning import (
    as_array,
    check_bins,
    check_dimensions,
    linear_edges,
    window_indices,
)
from gadgetplotting.constants import (
    KENNICUTT98_INTERCEPT,
    KENNICUTT98_RHO_UNIT,
    KENNICUTT98_SLOPE,
    KS_MIN_POINTS,
)
from gadgetplotting.errors import InvalidParameterError
from gadgetplotting.formatting import format_error

log = logging.getLogger(__name__)

ERROR_FORMATS = ("std_error", "conf_interval")


class LinearFit:
    """
    Ordinary least squares fit y = intercept + slope * x.

    Holds the data the fit was made on and the statistics needed for
    standard errors and confidence intervals.

    Parameters
    ----------
    x, y : numpy.ndarray
        Data used in the fit.
    slope, intercept : float
        Fitted coefficients.
    slope_stderr, intercept_stderr : float
        Standard errors of the coefficients.
    rvalue : float
        Pearson correlation coefficient.
    """

    def __init__(self, x, y, slope, intercept, slope_stderr, intercept_stderr,
                 rvalue):
        self.x = x
        self.y = y
        self.slope = float(slope)
        self.intercept = float(intercept)
        self.slope_stderr = float(slope_stderr)
        self.intercept_stderr = float(intercept_stderr)
        self.rvalue = float(rvalue)

    @classmethod
    def from_data(cls, x, y):
        """Fit `y` against `x` with scipy.stats.linregress."""
        x = as_array(x)
        y = as_array(y)
        res = stats.linregress(x, y)
        return cls(x, y, res.slope, res.intercept, res.stderr,
                   res.intercept_stderr, res.rvalue)

    @property
    def n(self):
        """Number of data points."""
        return len(self.x)

    @property
    def dof(self):
        """Residual degrees of freedom."""
        return self.n - 2

    def predict(self, x):
        """Evaluate the fitted line at `x`."""
        return self.intercept + self.slope * np.asarray(x, dtype=float)

    def confidence_interval(self, level=0.95):
        """
        Two-sided confidence intervals of the coefficients.

        Returns
        -------
        dict
            {"slope": (lower, upper), "intercept": (lower, upper)}
        """
        if not 0 < level < 1:
            raise InvalidParameterError("level must be in (0, 1), got {}".format(level))
        t = stats.t.ppf(0.5 + level / 2.0, self.dof)
        return {
            "slope": (self.slope - t * self.slope_stderr,
                      self.slope + t * self.slope_stderr),
            "intercept": (self.intercept - t * self.intercept_stderr,
                          self.intercept + t * self.intercept_stderr),
        }

    def to_dict(self):
        """Serialize the fit for API responses."""
        ci = self.confidence_interval()
        return {
            "x": [float(v) for v in self.x],
            "y": [float(v) for v in self.y],
            "n": self.n,
            "slope": self.slope,
            "intercept": self.intercept,
            "slope_stderr": self.slope_stderr,
            "intercept_stderr": self.intercept_stderr,
            "rvalue": self.rvalue,
            "slope_ci95": list(ci["slope"]),
            "intercept_ci95": list(ci["intercept"]),
        }


def annulus_area(width, i):
    """Area of annulus i (1-based): pi [(w i)^2 - (w (i-1))^2]."""
    return math.pi * width * width * (2 * i - 1)


def kennicutt_schmidt_law(gas_mass, gas_distance, temperature,
                          star_mass, star_distance, age,
                          temp_filter, age_filter, max_r, bins=50):
    """
    Fit the Kennicutt-Schmidt law in `bins` annuli covering [0, max_r].

    Parameters
    ----------
    gas_mass : array_like
        Masses of the gas particles.
    gas_distance : array_like
        Projected (2D) distances of the gas particles.
    temperature : array_like
        Temperatures of the gas particles.
    star_mass : array_like
        Masses of the star particles.
    star_distance : array_like
        Projected (2D) distances of the star particles.
    age : array_like
        Ages of the star particles.
    temp_filter : float
        Maximum temperature of the gas taken into account.
    age_filter : float
        Maximum age of the stars taken into account. Also the time span
        over which the star formation rate is averaged.
    max_r : float
        Outer radius of the last annulus.
    bins : int, optional
        Number of annuli, at least KS_MIN_POINTS (default 50).

    Returns
    -------
    LinearFit or None
        The fit of log10(Sigma_SFR) against log10(Sigma_gas), or None if
        fewer than KS_MIN_POINTS annuli have both densities positive or
        all of them share the same gas density.

    Raises
    ------
    DimensionMismatchError
        If the gas arrays or the star arrays are not parallel.
    InvalidParameterError
        If bins < KS_MIN_POINTS, or max_r / age_filter are not positive.
    """
    gas_mass = as_array(gas_mass)
    gas_distance = as_array(gas_distance)
    temperature = as_array(temperature)
    star_mass = as_array(star_mass)
    star_distance = as_array(star_distance)
    age = as_array(age)
    check_dimensions(gas_mass, gas_distance, temperature)
    check_dimensions(star_mass, star_distance, age)

    bins = check_bins(bins, minimum=KS_MIN_POINTS)
    if not max_r > 0:
        raise InvalidParameterError("max_r must be positive, got {}".format(max_r))
    if not age_filter > 0:
        raise InvalidParameterError(
            "age_filter must be positive, got {}".format(age_filter)
        )

    cold = temperature <= temp_filter
    young = age <= age_filter
    gas_mass, gas_distance = gas_mass[cold], gas_distance[cold]
    star_mass, star_distance = star_mass[young], star_distance[young]

    edges = linear_edges(0.0, max_r, bins)
    width = max_r / bins
    gas_annuli = window_indices(gas_distance, edges)
    star_annuli = window_indices(star_distance, edges)

    gas_density = np.empty(bins)
    sfr_density = np.empty(bins)
    for i in range(1, bins + 1):
        area = annulus_area(width, i)
        gas_density[i - 1] = gas_mass[gas_annuli[i - 1]].sum() / area
        sfr_density[i - 1] = star_mass[star_annuli[i - 1]].sum() / age_filter / area

    keep = (gas_density > 0) & (sfr_density > 0)
    if np.count_nonzero(keep) < KS_MIN_POINTS:
        log.debug(
            "Only %d of %d annuli have gas and young stars; no fit",
            np.count_nonzero(keep), bins,
        )
        return None

    x = np.log10(gas_density[keep])
    y = np.log10(sfr_density[keep])
    # One gas density for every annulus leaves the slope undefined
    if np.ptp(x) <= 1e-12 * max(1.0, np.abs(x).max()):
        log.debug("All %d annuli share one gas density; no fit", x.size)
        return None
    return LinearFit.from_data(x, y)


def fit_summary(fit, error_formatting="std_error"):
    """
    Rounded (value, error) pairs for the slope and intercept of a fit.

    Parameters
    ----------
    fit : LinearFit
        Result of kennicutt_schmidt_law().
    error_formatting : str, optional
        "std_error" uses the standard error; "conf_interval" uses the
        largest distance from the value to the ends of its 95%
        confidence interval (default "std_error").

    Returns
    -------
    dict
        {"slope": (value, error), "intercept": (value, error)}, each pair
        rounded with format_error().
    """
    if error_formatting == "std_error":
        slope_err = fit.slope_stderr
        intercept_err = fit.intercept_stderr
    elif error_formatting == "conf_interval":
        ci = fit.confidence_interval(0.95)
        slope_err = max(ci["slope"][1] - fit.slope, fit.slope - ci["slope"][0])
        intercept_err = max(ci["intercept"][1] - fit.intercept,
                            fit.intercept - ci["intercept"][0])
    else:
        raise InvalidParameterError(
            "error_formatting must be one of {}, got {!r}".format(
                ERROR_FORMATS, error_formatting)
        )
    return {
        "slope": format_error(fit.slope, slope_err),
        "intercept": format_error(fit.intercept, intercept_err),
    }


def kennicutt98_sfr_density(gas_density):
    """
    Star formation rate surface density from the Kennicutt (1998) law.

    Parameters
    ----------
    gas_density : float or array_like
        Gas surface density in M_sun / pc^2.

    Returns
    -------
    float or numpy.ndarray
        Sigma_SFR in M_sun / yr / kpc^2.
    """
    gas_density = np.asarray(gas_density, dtype=float)
    out = KENNICUTT98_INTERCEPT * (gas_density / KENNICUTT98_RHO_UNIT) ** KENNICUTT98_SLOPE
    return float(out) if out.ndim == 0 else out
