"""
Exception hierarchy for the binning and aggregation core.

Every error derives from ValueError so the service layer can keep
treating bad input the same way it always has: validate() and compute()
raise, the API answers 400.
"""


class GadgetPlottingError(Exception):
    """Base class for all errors raised by gadgetplotting."""


class DimensionMismatchError(GadgetPlottingError, ValueError):
    """Parallel input arrays have different lengths."""


class InvalidParameterError(GadgetPlottingError, ValueError):
    """A scalar parameter is outside its allowed range."""


class TooManyBinsError(GadgetPlottingError, ValueError):
    """At least one smoothing window ended up with no data in it."""

    def __init__(self, bins):
        self.bins = bins
        super().__init__(
            "Using {} bins is too high for the data, lower it.".format(bins)
        )
