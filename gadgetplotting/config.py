"""
Binning configuration shared by the service layer.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

# Upper bound on the number of windows a single request may ask for
MAX_BINS = 1000


def _flag(data, key):
    # JSON booleans only
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ValueError("{} must be true or false".format(key))
    return value


class BinningConfig:
    """
    Normalized binning parameters for one profile computation.

    Parameters
    ----------
    bins : int
        Number of windows. Clamped to [min_bins, MAX_BINS].
    max_value : float, optional
        Upper bound of the binned range (max radius, max metallicity).
        None when the range comes from the data itself (smoothing).
    log : bool, optional
        Logarithmic windows (smoothing only).
    x_norm : bool, optional
        Normalize the x axis to max_value (CMDF only).
    min_bins : int, optional
        Lower clamp for bins (default 1).
    """

    def __init__(self, bins, max_value=None, log=False, x_norm=False,
                 min_bins=1):
        self.bins = max(int(min_bins), min(int(bins), MAX_BINS))
        self.max_value = float(max_value) if max_value is not None else None
        if self.max_value is not None and not self.max_value > 0:
            raise ValueError("max value must be positive")
        self.log = bool(log)
        self.x_norm = bool(x_norm)

    @classmethod
    def from_request(cls, data, max_key=None, default_bins=50, min_bins=1):
        """
        Build a config from a raw JSON payload.

        Parameters
        ----------
        data : dict
            Request payload.
        max_key : str, optional
            Payload key holding max_value (e.g. "max_radius").
        default_bins : int, optional
            Used when the payload has no "bins" entry.
        """
        try:
            bins = int(data.get("bins", default_bins))
        except (TypeError, ValueError):
            raise ValueError("bins must be an integer") from None
        max_value = None
        if max_key is not None:
            if data.get(max_key) is None:
                raise ValueError("{} is required".format(max_key))
            try:
                max_value = float(data[max_key])
            except (TypeError, ValueError):
                raise ValueError("{} must be a number".format(max_key)) from None
        return cls(
            bins,
            max_value=max_value,
            log=_flag(data, "log"),
            x_norm=_flag(data, "x_norm"),
            min_bins=min_bins,
        )

    def to_dict(self):
        """Serialize config for inclusion in responses."""
        result = {"bins": self.bins, "log": self.log, "x_norm": self.x_norm}
        if self.max_value is not None:
            result["max_value"] = self.max_value
        return result
