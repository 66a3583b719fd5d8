"""
Fixed-width windowing of 1D coordinate arrays.

Shared by every profile, distribution function and smoothing routine.
The range [min_bound, max_bound] is cut into `bins` windows of equal
width. Window i (1-based) holds

    min_bound + width*(i-1) <= c < min_bound + width*i

and the last window is closed on the right, so a sample sitting exactly
on max_bound is never dropped. In logarithmic mode the same rule is
applied in log10 space, but membership is tested on the raw values
against 10**boundary; non-positive samples never fall in a log window.

What to do with an empty window is up to the caller: smoothing rejects
it, profiles report zero at the window midpoint.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import numpy as np

from gadgetplotting.errors import DimensionMismatchError, InvalidParameterError


def as_array(data):
    """Return `data` as a 1D float64 numpy array (no copy when possible)."""
    return np.asarray(data, dtype=float).reshape(-1)


def check_dimensions(*arrays):
    """
    Raise DimensionMismatchError unless all arrays have the same length.

    Parameters
    ----------
    *arrays : sequence of array_like
        Parallel per-particle arrays taking part in one computation.
    """
    lengths = {len(a) for a in arrays}
    if len(lengths) > 1:
        raise DimensionMismatchError(
            "The input vectors should have the same length "
            "(got lengths {}).".format(", ".join(str(len(a)) for a in arrays))
        )


def check_bins(bins, minimum=1):
    """Raise InvalidParameterError unless `bins` is an integer >= minimum."""
    if isinstance(bins, bool) or not isinstance(bins, (int, np.integer)):
        raise InvalidParameterError(
            "bins must be an integer, got {!r}".format(bins)
        )
    if bins < minimum:
        raise InvalidParameterError(
            "bins must be >= {}, got {}".format(minimum, bins)
        )
    return int(bins)


def linear_edges(min_bound, max_bound, bins):
    """
    Edges of `bins` equal-width windows covering [min_bound, max_bound].

    Edges are computed as min_bound + width*i (not with linspace) so they
    match the membership predicate exactly; the last edge is pinned to
    max_bound.

    Returns
    -------
    numpy.ndarray
        Array of bins + 1 increasing edges.
    """
    bins = check_bins(bins)
    width = (max_bound - min_bound) / bins
    edges = min_bound + width * np.arange(bins + 1, dtype=float)
    edges[-1] = max_bound
    return edges


def log_edges(coord, bins):
    """
    Edges of `bins` windows equally spaced in log10 over the positive data.

    The start value is the smallest strictly positive sample; non-positive
    samples are ignored when looking for it. The first and last edges are
    pinned to the smallest positive and the largest sample.

    Raises
    ------
    InvalidParameterError
        If `coord` has no strictly positive value.
    """
    bins = check_bins(bins)
    coord = as_array(coord)
    positive = coord[coord > 0]
    if positive.size == 0:
        raise InvalidParameterError(
            "Logarithmic windows need at least one positive value"
        )
    lo = positive.min()
    hi = coord.max()
    start = np.log10(lo)
    width = (np.log10(hi) - start) / bins
    edges = 10.0 ** (start + width * np.arange(bins + 1, dtype=float))
    edges[0] = lo
    edges[-1] = hi
    return edges


def data_edges(coord, bins, log=False):
    """Edges spanning the range of the data itself (linear or log)."""
    coord = as_array(coord)
    if log:
        return log_edges(coord, bins)
    return linear_edges(coord.min(), coord.max(), bins)


def window_indices(coord, edges):
    """
    Indices of `coord` falling in each window defined by `edges`.

    Parameters
    ----------
    coord : array_like
        Coordinate of every sample.
    edges : array_like
        Window edges, as returned by linear_edges() or log_edges().

    Returns
    -------
    list of numpy.ndarray
        One integer index array per window, in window order. The last
        window includes its right edge.
    """
    coord = as_array(coord)
    n_windows = len(edges) - 1
    out = []
    for i in range(n_windows):
        lo, hi = edges[i], edges[i + 1]
        if i == n_windows - 1:
            mask = (coord >= lo) & (coord <= hi)
        else:
            mask = (coord >= lo) & (coord < hi)
        out.append(np.flatnonzero(mask))
    return out


def window_midpoints(edges):
    """Midpoint of every window (width*(i - 0.5) for windows starting at 0)."""
    edges = np.asarray(edges, dtype=float)
    return 0.5 * (edges[:-1] + edges[1:])
