"""
Window smoothing of a noisy (x, y) series.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import numpy as np

from gadgetplotting.binning import (
    as_array,
    check_bins,
    check_dimensions,
    data_edges,
    window_indices,
)
from gadgetplotting.errors import InvalidParameterError, TooManyBinsError


def smooth_window(x_data, y_data, bins, log=False):
    """
    Replace the data inside each x window by its mean.

    The range of `x_data` is cut into `bins` contiguous windows (linear,
    or logarithmic when `log` is True) and every window is collapsed into
    the mean of its x values and the mean of its y values.

    Parameters
    ----------
    x_data : array_like
        Data used to build the windows.
    y_data : array_like
        Data to be smoothed out. Same length as `x_data`.
    bins : int
        Number of windows.
    log : bool, optional
        Divide the x axis in logarithmic windows (default False). Only
        positive x values can land in a logarithmic window.

    Returns
    -------
    tuple of numpy.ndarray
        (smooth_x, smooth_y), each of length `bins`.

    Raises
    ------
    DimensionMismatchError
        If `x_data` and `y_data` differ in length.
    TooManyBinsError
        If any window is empty. There is no partial result: the caller
        has to lower `bins`.
    """
    x_data = as_array(x_data)
    y_data = as_array(y_data)
    check_dimensions(x_data, y_data)
    bins = check_bins(bins)
    if x_data.size == 0:
        raise InvalidParameterError("Cannot smooth an empty series")

    edges = data_edges(x_data, bins, log=log)

    smooth_x = np.empty(bins)
    smooth_y = np.empty(bins)
    for i, idx in enumerate(window_indices(x_data, edges)):
        if idx.size == 0:
            raise TooManyBinsError(bins)
        smooth_x[i] = x_data[idx].mean()
        smooth_y[i] = y_data[idx].mean()

    return smooth_x, smooth_y
