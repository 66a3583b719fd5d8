"""
Kennicutt-Schmidt Law Service.

Fits log10(Sigma_SFR) against log10(Sigma_gas) in concentric annuli and
compares the result with the Kennicutt (1998) relation.

Distances are projected. They come either ready-made ("gas_distance",
"star_distance") or from 3D positions ("gas_positions",
"star_positions") projected on "plane" around "center".

The reference curve assumes masses in M_sun, lengths in kpc and times
in Myr, the units the snapshot pipelines convert to by default.

Endpoints:
    POST /api/kennicutt-schmidt - fit, rounded summary and reference curve
                                  ({"fit": null} when there is not enough data)

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import numpy as np
from flask import jsonify, request

from gadgetplotting.config import BinningConfig
from gadgetplotting.constants import (
    KENNICUTT98_INTERCEPT,
    KENNICUTT98_SLOPE,
    KS_MIN_POINTS,
)
from gadgetplotting.kennicutt_schmidt import (
    ERROR_FORMATS,
    fit_summary,
    kennicutt98_sfr_density,
    kennicutt_schmidt_law,
)
from gadgetplotting.particles import projected_distance
from gadgetplotting.services import (
    GadgetService,
    optional_center,
    require_array,
    require_number,
    to_list,
)

# M_sun/kpc^2 -> M_sun/pc^2, and M_sun/yr -> M_sun/Myr
KPC2_PER_PC2 = 1.0e6
YR_PER_MYR = 1.0e6

DEFAULT_TEMP_FILTER = 3.0e4   # K
DEFAULT_AGE_FILTER = 20.0     # Myr
DEFAULT_MAX_R = 1000.0        # kpc


def _projected(data, prefix):
    if data.get(prefix + "_positions") is None:
        return require_array(data, prefix + "_distance")
    center = optional_center(data) or (0.0, 0.0, 0.0)
    plane = data.get("plane", "xy")
    return projected_distance(data[prefix + "_positions"], center, plane)


def reference_log_sfr(log_gas_density):
    """log10 Sigma_SFR (M_sun/Myr/kpc^2) of the Kennicutt (1998) law."""
    gas_pc2 = 10.0 ** np.asarray(log_gas_density, dtype=float) / KPC2_PER_PC2
    return np.log10(kennicutt98_sfr_density(gas_pc2) * YR_PER_MYR)


class KennicuttSchmidtService(GadgetService):

    id = "kennicutt_schmidt"
    name = "Kennicutt-Schmidt Law"
    description = "Star formation rate versus gas surface density fit"
    category = "scaling_relations"
    status = "live"
    route = "/api/kennicutt-schmidt"

    def validate(self, config):
        """Validate a Kennicutt-Schmidt request. bins is clamped to >= 5."""
        data = dict(config)
        data.setdefault("max_r", DEFAULT_MAX_R)
        binning = BinningConfig.from_request(data, max_key="max_r",
                                             min_bins=KS_MIN_POINTS)

        error_formatting = config.get("error_formatting", "std_error")
        if error_formatting not in ERROR_FORMATS:
            raise ValueError(
                "error_formatting must be one of {}".format(", ".join(ERROR_FORMATS)))

        return {
            "binning": binning,
            "gas_mass": require_array(config, "gas_mass"),
            "gas_distance": _projected(config, "gas"),
            "temperature": require_array(config, "temperature"),
            "star_mass": require_array(config, "star_mass"),
            "star_distance": _projected(config, "star"),
            "age": require_array(config, "age"),
            "temp_filter": require_number(config, "temp_filter", DEFAULT_TEMP_FILTER),
            "age_filter": require_number(config, "age_filter", DEFAULT_AGE_FILTER,
                                         positive=True),
            "error_formatting": error_formatting,
        }

    def compute(self, config):
        binning = config["binning"]
        fit = kennicutt_schmidt_law(
            config["gas_mass"], config["gas_distance"], config["temperature"],
            config["star_mass"], config["star_distance"], config["age"],
            config["temp_filter"], config["age_filter"],
            binning.max_value, binning.bins,
        )
        result = {
            "binning": binning.to_dict(),
            "kennicutt98": {
                "slope": KENNICUTT98_SLOPE,
                "intercept": KENNICUTT98_INTERCEPT,
            },
        }
        if fit is None:
            result["fit"] = None
            result["message"] = (
                "Fewer than {} annuli with cold gas and young stars".format(KS_MIN_POINTS))
            return result

        summary = fit_summary(fit, config["error_formatting"])
        result["fit"] = fit.to_dict()
        result["summary"] = {
            "error_formatting": config["error_formatting"],
            "slope": list(summary["slope"]),
            "intercept": list(summary["intercept"]),
        }
        result["reference"] = {
            "x": to_list(fit.x),
            "y": to_list(reference_log_sfr(fit.x)),
        }
        return result

    def register_routes(self, bp):
        service = self

        @bp.route("/kennicutt-schmidt", methods=["POST"])
        def kennicutt_schmidt_compute():
            result, err = service.run(request.get_json(silent=True))
            if err is not None:
                return jsonify(err), 400
            return jsonify(result)
