"""
Cosmology Service: physical time from the scale factor.

Endpoints:
    POST /api/cosmology/time - {"a": 0.5, "h0": 0.7, "omega_0": 0.3,
                                "omega_lambda": 0.7}
                               or a list of scale factors in "a"

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from flask import jsonify, request

from gadgetplotting.integration import (
    DEFAULT_STEPS,
    scale_factor_to_redshift,
    time_from_scale_factor,
)
from gadgetplotting.services import GadgetService, require_number

# Planck 2015 parameters, the GADGET4 example defaults
DEFAULT_H0 = 0.6774
DEFAULT_OMEGA_0 = 0.3089
DEFAULT_OMEGA_LAMBDA = 0.6911


class CosmologyService(GadgetService):

    id = "cosmology"
    name = "Cosmological Time"
    description = "Age of the universe at a given scale factor"
    category = "cosmology"
    status = "live"
    route = "/api/cosmology/time"

    def validate(self, config):
        """Validate and normalize cosmology parameters."""
        raw_a = config.get("a")
        if raw_a is None:
            raise ValueError("a is required")
        scale_factors = raw_a if isinstance(raw_a, list) else [raw_a]
        try:
            scale_factors = [float(a) for a in scale_factors]
        except (TypeError, ValueError):
            raise ValueError("a must be a number or a list of numbers") from None
        if not scale_factors or any(not 0 < a <= 1 for a in scale_factors):
            raise ValueError("Scale factors must be in (0, 1]")

        omega_0 = require_number(config, "omega_0", DEFAULT_OMEGA_0)
        omega_lambda = require_number(config, "omega_lambda", DEFAULT_OMEGA_LAMBDA)
        if not 0 < omega_0 <= 2:
            raise ValueError("omega_0 must be between 0 and 2")
        if not 0 <= omega_lambda <= 2:
            raise ValueError("omega_lambda must be between 0 and 2")

        try:
            steps = int(config.get("steps", DEFAULT_STEPS))
        except (TypeError, ValueError):
            raise ValueError("steps must be an integer") from None
        return {
            "a": scale_factors,
            "h0": require_number(config, "h0", DEFAULT_H0, positive=True),
            "omega_0": omega_0,
            "omega_lambda": omega_lambda,
            "steps": max(10, min(steps, 100000)),
        }

    def compute(self, config):
        """Physical time (Gyr) and redshift for every scale factor."""
        times = []
        redshifts = []
        for a in config["a"]:
            t = time_from_scale_factor(a, config["h0"], config["omega_0"],
                                       config["omega_lambda"], steps=config["steps"])
            times.append(round(t, 6))
            redshifts.append(round(scale_factor_to_redshift(a), 6))
        return {
            "a": config["a"],
            "redshift": redshifts,
            "time_gyr": times,
            "h0": config["h0"],
            "omega_0": config["omega_0"],
            "omega_lambda": config["omega_lambda"],
            "omega_k": round(1.0 - config["omega_0"] - config["omega_lambda"], 6),
        }

    def register_routes(self, bp):
        """Register cosmology API endpoints on the given blueprint."""
        service = self

        @bp.route("/cosmology/time", methods=["POST"])
        def cosmology_time():
            result, err = service.run(request.get_json(silent=True))
            if err is not None:
                return jsonify(err), 400
            return jsonify(result)
