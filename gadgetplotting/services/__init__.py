"""
Service layer: GadgetService ABC and ServiceRegistry.

Each analysis (radial profiles, CMDF, Kennicutt-Schmidt law, smoothing,
cosmological time) is a GadgetService. A service turns a JSON payload
into core function arguments, calls the core, and shapes the result for
jsonify. Binning and fitting stay in the gadgetplotting core modules.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

log = logging.getLogger(__name__)


class GadgetService(ABC):
    """
    One analysis exposed over the JSON API.

    Subclasses set the listing attributes below and implement validate()
    and compute(). Services with status "live" also mount their endpoint
    in register_routes().

    Attributes
    ----------
    id : str
        Registry key, e.g. "cmdf".
    name, description : str
        Shown in GET /api/services.
    category : str
        "profiles", "scaling_relations", "cosmology" or "utilities".
    status : str
        "live" or "coming_soon".
    route : str
        Endpoint of the service.
    """

    id = ""
    name = ""
    description = ""
    category = ""
    status = "coming_soon"
    route = ""

    @abstractmethod
    def validate(self, config):
        """Turn a raw payload into core arguments; ValueError if unusable."""

    @abstractmethod
    def compute(self, config):
        """Run the core computation on validated arguments."""

    def register_routes(self, blueprint):
        """Mount the service endpoint on `blueprint` (no-op by default)."""

    def run(self, data):
        """
        validate() then compute(), for use by route handlers.

        Core errors derive from ValueError, so anything the payload
        triggers comes back as a message for a 400 response.

        Returns
        -------
        tuple
            (result, None) on success, (None, {"error": message}) otherwise.
        """
        if not data:
            return None, {"error": "Request body must be JSON"}
        try:
            config = self.validate(data)
            return self.compute(config), None
        except ValueError as e:
            log.warning("%s request rejected: %s", self.id, e)
            return None, {"error": str(e)}

    def metadata(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "status": self.status,
            "route": self.route,
        }


class ServiceRegistry:
    """Services by id, in registration order."""

    def __init__(self):
        self._services = {}

    def register(self, service):
        """Add `service`. Raises ValueError on a duplicate id."""
        if service.id in self._services:
            raise ValueError(
                "Service '{}' is already registered".format(service.id)
            )
        self._services[service.id] = service

    def get(self, service_id):
        return self._services.get(service_id)

    def list_all(self):
        """Listing metadata of every service."""
        return [s.metadata() for s in self._services.values()]

    def live(self):
        """Services whose routes get mounted."""
        return [s for s in self._services.values()
                if s.status == "live"]


# ---------------------------------------------------------------------------
# Payload helpers shared by the services
# ---------------------------------------------------------------------------

def require_array(data, key):
    """
    Read a numeric 1D array from a request payload.

    Raises
    ------
    ValueError
        If the key is missing or the value is not a list of numbers.
    """
    value = data.get(key)
    if value is None:
        raise ValueError("{} is required".format(key))
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        raise ValueError("{} must be a list of numbers".format(key)) from None
    if arr.ndim != 1:
        raise ValueError("{} must be a flat list of numbers".format(key))
    return arr


def require_number(data, key, default=None, positive=False):
    """Read a float from a request payload, with an optional default."""
    value = data.get(key, default)
    if value is None:
        raise ValueError("{} is required".format(key))
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValueError("{} must be a number".format(key)) from None
    if positive and not value > 0:
        raise ValueError("{} must be positive".format(key))
    return value


def optional_center(data, key="center"):
    """Read an (x, y, z) point from a payload; None when absent."""
    value = data.get(key)
    if value is None:
        return None
    try:
        center = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        raise ValueError("{} must be a list of 3 numbers".format(key)) from None
    if center.shape != (3,):
        raise ValueError("{} must be a list of 3 numbers".format(key))
    return tuple(float(c) for c in center)


def to_list(values, ndigits=None):
    """numpy array -> list of floats, optionally rounded, for jsonify."""
    if ndigits is None:
        return [float(v) for v in values]
    return [round(float(v), ndigits) for v in values]
