"""
Tolerance-aware equality for numbers and nested data structures.

Used to validate computed profiles against reference results, where
exact float equality is too strict.

    comparison(x, y)       - leaf comparison (numbers, arrays, anything else)
    deep_comparison(x, y)  - recursive walk over mappings and sequences

Dispatch order in deep_comparison(): mapping, then list/tuple, then leaf.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import numbers
from collections.abc import Mapping

import numpy as np

DEFAULT_ATOL = 1e-5
DEFAULT_RTOL = 1e-5


def _is_number(value):
    return isinstance(value, (numbers.Real, np.number)) and not isinstance(value, (bool, np.bool_))


def _close(x, y, atol, rtol):
    """|x - y| <= max(atol, rtol * max(|x|, |y|)), with NaN equal to NaN."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    with np.errstate(invalid="ignore"):
        tol = np.maximum(atol, rtol * np.maximum(np.abs(x), np.abs(y)))
        close = np.abs(x - y) <= tol
    # Identical values (including infinities) and pairs of NaNs are equal
    close |= (x == y) | (np.isnan(x) & np.isnan(y))
    return bool(np.all(close))


def comparison(x, y, atol=DEFAULT_ATOL, rtol=DEFAULT_RTOL):
    """
    Compare two leaf values.

    Real numbers (bools excluded) and numeric numpy arrays are compared
    with absolute tolerance `atol` and relative tolerance `rtol`; arrays
    must have the same shape. Everything else must be exactly equal.

    Parameters
    ----------
    x, y : object
        Values to compare.
    atol : float, optional
        Absolute tolerance (default 1e-5).
    rtol : float, optional
        Relative tolerance (default 1e-5).

    Returns
    -------
    bool
    """
    if _is_number(x) and _is_number(y):
        return _close(x, y, atol, rtol)

    if isinstance(x, np.ndarray) or isinstance(y, np.ndarray):
        x_arr = np.asarray(x)
        y_arr = np.asarray(y)
        if x_arr.shape != y_arr.shape:
            return False
        if np.issubdtype(x_arr.dtype, np.number) and np.issubdtype(y_arr.dtype, np.number):
            return _close(x_arr, y_arr, atol, rtol)
        return bool(np.all(x_arr == y_arr))

    try:
        return bool(x == y)
    except (TypeError, ValueError):
        return False


def _is_sequence(value):
    if isinstance(value, (list, tuple)):
        return True
    return isinstance(value, np.ndarray) and value.dtype == object


def deep_comparison(x, y, atol=DEFAULT_ATOL, rtol=DEFAULT_RTOL):
    """
    Recursively compare two nested structures.

    Two mappings are equal when they have the same keys and every value
    pair is equal. Two lists/tuples are equal when they have the same
    length and every element pair is equal. Any other pair is handed to
    comparison(). A key set or length mismatch returns False right away.

    Parameters
    ----------
    x, y : object
        Structures to compare.
    atol : float, optional
        Absolute tolerance for numeric leaves (default 1e-5).
    rtol : float, optional
        Relative tolerance for numeric leaves (default 1e-5).

    Returns
    -------
    bool
    """
    if isinstance(x, Mapping) and isinstance(y, Mapping):
        if set(x.keys()) != set(y.keys()):
            return False
        return all(deep_comparison(x[k], y[k], atol, rtol) for k in x)

    if _is_sequence(x) and _is_sequence(y):
        if len(x) != len(y):
            return False
        return all(deep_comparison(a, b, atol, rtol) for a, b in zip(x, y))

    return comparison(x, y, atol, rtol)
