"""
Fixed-step quadrature and the cosmological time integrand.

The time elapsed since the Big Bang at scale factor a is

    t(a) = integral_0^a da' / (H(a') * sqrt(E(a')))

with H(a) = h0 * HUBBLE_CONST * a and
E(a) = Omega_0 / a^3 + Omega_K / a^2 + Omega_Lambda,
Omega_K = 1 - Omega_0 - Omega_Lambda. The integrand diverges at a = 0,
so integrate() uses right endpoints and never evaluates it there.

`h0` is the dimensionless Hubble parameter (H0 / 100 km s^-1 Mpc^-1),
as stored in the GADGET snapshot header; results are in Gyr.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from gadgetplotting.constants import HUBBLE_CONST
from gadgetplotting.errors import InvalidParameterError

DEFAULT_STEPS = 200


def integrate(func, inf_lim, sup_lim, steps=DEFAULT_STEPS):
    """
    Right-endpoint Riemann sum of `func` over [inf_lim, sup_lim].

        width * sum(func(inf_lim + width * i) for i in 1..steps)

    Parameters
    ----------
    func : callable
        Function of one real variable.
    inf_lim : float
        Lower limit of integration.
    sup_lim : float
        Upper limit of integration.
    steps : int, optional
        Number of subintervals (default 200).

    Returns
    -------
    float
        Approximate value of the integral.
    """
    if steps < 1:
        raise InvalidParameterError("steps must be >= 1, got {}".format(steps))
    width = (sup_lim - inf_lim) / steps
    total = 0.0
    for i in range(1, steps + 1):
        total += func(inf_lim + width * i)
    return width * total


def energy_integrand(a, h0, omega_0, omega_lambda):
    """
    Integrand 1 / (H sqrt(E)) of the cosmological time, in Gyr.

    Parameters
    ----------
    a : float
        Scale factor (> 0).
    h0 : float
        Dimensionless Hubble parameter.
    omega_0 : float
        Total matter density parameter.
    omega_lambda : float
        Dark energy density parameter.
    """
    omega_k = 1.0 - omega_0 - omega_lambda
    hubble = h0 * HUBBLE_CONST * a
    e = omega_0 / (a * a * a) + omega_k / (a * a) + omega_lambda
    return 1.0 / (hubble * math.sqrt(e))


def time_from_scale_factor(a, h0, omega_0, omega_lambda, steps=DEFAULT_STEPS):
    """
    Physical time (Gyr) since the Big Bang at scale factor `a`.

    Parameters
    ----------
    a : float
        Scale factor, 0 < a.
    h0, omega_0, omega_lambda : float
        Cosmological parameters, see energy_integrand().
    steps : int, optional
        Integration steps (default 200).
    """
    if not a > 0:
        raise InvalidParameterError("The scale factor must be positive, got {}".format(a))
    if not h0 > 0:
        raise InvalidParameterError("h0 must be positive, got {}".format(h0))

    def integrand(x):
        return energy_integrand(x, h0, omega_0, omega_lambda)

    return integrate(integrand, 0.0, float(a), steps=steps)


def scale_factor_to_redshift(a):
    """Redshift z = 1/a - 1."""
    if not a > 0:
        raise InvalidParameterError("The scale factor must be positive, got {}".format(a))
    return 1.0 / a - 1.0


def redshift_to_scale_factor(z):
    """Scale factor a = 1/(1+z)."""
    if not z > -1:
        raise InvalidParameterError("The redshift must be > -1, got {}".format(z))
    return 1.0 / (1.0 + z)
