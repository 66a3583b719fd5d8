"""
Cumulative Metallicity Distribution Function Service.

Endpoints:
    POST /api/cmdf - cumulative mass fraction against Z = metal_mass / mass

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from flask import jsonify, request

from gadgetplotting.binning import check_dimensions
from gadgetplotting.config import BinningConfig
from gadgetplotting.constants import SOLAR_METALLICITY
from gadgetplotting.profiles import cmdf
from gadgetplotting.services import GadgetService, require_array, to_list


class CMDFService(GadgetService):

    id = "cmdf"
    name = "Metallicity Distribution"
    description = "Cumulative stellar mass fraction as a function of metallicity"
    category = "profiles"
    status = "live"
    route = "/api/cmdf"

    def validate(self, config):
        """Validate a CMDF request. max_Z defaults to 5 solar metallicities."""
        data = dict(config)
        data.setdefault("max_Z", 5.0 * SOLAR_METALLICITY)
        binning = BinningConfig.from_request(data, max_key="max_Z")
        mass = require_array(config, "mass")
        metal_mass = require_array(config, "metal_mass")
        check_dimensions(mass, metal_mass)
        return {"binning": binning, "mass": mass, "metal_mass": metal_mass}

    def compute(self, config):
        binning = config["binning"]
        x, y = cmdf(config["mass"], config["metal_mass"], binning.max_value,
                    binning.bins, x_norm=binning.x_norm)
        return {
            "metallicity": to_list(x),
            "cumulative_fraction": to_list(y),
            "x_norm": binning.x_norm,
            "binning": binning.to_dict(),
        }

    def register_routes(self, bp):
        """Register the CMDF endpoint."""
        service = self

        @bp.route("/cmdf", methods=["POST"])
        def cmdf_compute():
            result, err = service.run(request.get_json(silent=True))
            if err is not None:
                return jsonify(err), 400
            return jsonify(result)
