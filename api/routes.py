"""
Flask API routes shared by all services.

Endpoints:
  GET  /api/services         - metadata of every registered service
  GET  /api/constants        - physical constants used by the core
  GET  /api/samples          - list synthetic particle sets
  GET  /api/samples/<name>   - one synthetic particle set as JSON arrays

Service-owned endpoints (/api/profiles/*, /api/cmdf, ...) are mounted by
each live service through register_routes().
"""

from flask import Blueprint, jsonify

from gadgetplotting import constants
from data.samples import SAMPLES, get_sample, sample_to_json


def create_api_blueprint(registry):
    """
    Build the /api blueprint: shared routes plus every live service's routes.

    Parameters
    ----------
    registry : ServiceRegistry
        Registry holding the services to expose.

    Returns
    -------
    flask.Blueprint
    """
    api = Blueprint("api", __name__, url_prefix="/api")

    @api.route("/services", methods=["GET"])
    def list_services():
        """Return metadata for all registered services."""
        return jsonify(registry.list_all())

    @api.route("/constants", methods=["GET"])
    def get_constants():
        """Return the physical constants used by the core."""
        return jsonify({
            "HUBBLE_CONST": constants.HUBBLE_CONST,
            "SOLAR_METALLICITY": constants.SOLAR_METALLICITY,
            "KENNICUTT98_SLOPE": constants.KENNICUTT98_SLOPE,
            "KENNICUTT98_INTERCEPT": constants.KENNICUTT98_INTERCEPT,
            "KENNICUTT98_RHO_UNIT": constants.KENNICUTT98_RHO_UNIT,
        })

    @api.route("/samples", methods=["GET"])
    def list_samples():
        """Return the available synthetic particle sets."""
        return jsonify([
            {"id": sample_id, "name": entry["name"]}
            for sample_id, entry in SAMPLES.items()
        ])

    @api.route("/samples/<name>", methods=["GET"])
    def get_sample_data(name):
        """Return one synthetic particle set."""
        sample = get_sample(name)
        if sample is None:
            return jsonify({"error": "Sample not found"}), 404
        return jsonify(sample_to_json(sample))

    for service in registry.live():
        service.register_routes(api)

    return api
