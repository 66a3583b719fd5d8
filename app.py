"""
gadgetplotting - binning and profile engine for GADGET snapshot data.
Flask application factory.

Serves the REST API for the profile, distribution function and scaling
relation computations via registered GadgetService instances.

Usage:
    python app.py              # Development server on http://localhost:5000
    flask run                  # Same, via Flask CLI
"""

__version__ = "0.1.0"

import logging

from flask import Flask, jsonify

from gadgetplotting.services import ServiceRegistry
from gadgetplotting.services.profiles import ProfileService
from gadgetplotting.services.cmdf import CMDFService
from gadgetplotting.services.kennicutt_schmidt import KennicuttSchmidtService
from gadgetplotting.services.smoothing import SmoothingService
from gadgetplotting.services.cosmology import CosmologyService


def create_registry():
    """Build and populate the service registry."""
    registry = ServiceRegistry()
    registry.register(ProfileService())
    registry.register(CMDFService())
    registry.register(KennicuttSchmidtService())
    registry.register(SmoothingService())
    registry.register(CosmologyService())
    return registry


def create_app(config=None):
    """
    Application factory.

    Parameters
    ----------
    config : dict, optional
        Extra settings merged into app.config (e.g. {"TESTING": True}).
    """
    app = Flask(__name__)
    app.config["JSON_SORT_KEYS"] = False
    if config:
        app.config.update(config)

    registry = create_registry()
    app.extensions["gadgetplotting_registry"] = registry

    from api.routes import create_api_blueprint
    app.register_blueprint(create_api_blueprint(registry))

    @app.route("/")
    def index():
        return jsonify({
            "name": "gadgetplotting",
            "version": __version__,
            "services": registry.list_all(),
        })

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    app.run(debug=True, host="127.0.0.1", port=5000)
