"""
Scientific rounding of a measurement and its uncertainty.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from gadgetplotting.errors import InvalidParameterError


def _leading_digit(value):
    """Return (first significant digit, decimal exponent) of a positive value."""
    mantissa, exponent = "{:e}".format(value).split("e")
    return int(mantissa[0]), int(exponent)


def format_error(mean, error):
    """
    Round a (mean, error) pair following the usual scientific convention.

    The error keeps one significant digit, or two when that digit is a 1.
    The mean is rounded to the same decimal position. If the error is
    larger than the absolute value of the mean, the mean becomes 0.0.
    A zero error leaves both values untouched.

        format_error(69.42069, 0.038796) -> (69.42, 0.04)
        format_error(69.42069, 0.018796) -> (69.421, 0.019)
        format_error(69.42069, 73.4)     -> (0.0, 70.0)

    Parameters
    ----------
    mean : float
        Measured value.
    error : float
        Uncertainty of `mean`. Must be >= 0.

    Returns
    -------
    tuple of float
        (rounded_mean, rounded_error).

    Raises
    ------
    InvalidParameterError
        If `error` is negative or not finite.
    """
    mean = float(mean)
    error = float(error)
    if not math.isfinite(error):
        raise InvalidParameterError("The error must be finite, got {}".format(error))
    if error < 0:
        raise InvalidParameterError("The error must be >= 0, got {}".format(error))
    if error == 0:
        return mean, error

    leading, exponent = _leading_digit(error)
    digits = -exponent + (1 if leading == 1 else 0)

    rounded_error = round(error, digits)
    if abs(mean) < error:
        return 0.0, rounded_error
    return round(mean, digits), rounded_error
