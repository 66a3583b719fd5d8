"""
Smoothing Service: window means of a noisy (x, y) series.

Endpoints:
    POST /api/smooth - {"x": [...], "y": [...], "bins": 20, "log": false}

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from flask import jsonify, request

from gadgetplotting.binning import check_dimensions
from gadgetplotting.config import BinningConfig
from gadgetplotting.services import GadgetService, require_array, to_list
from gadgetplotting.smoothing import smooth_window


class SmoothingService(GadgetService):

    id = "smoothing"
    name = "Window Smoothing"
    description = "Average a series inside linear or logarithmic x windows"
    category = "utilities"
    status = "live"
    route = "/api/smooth"

    def validate(self, config):
        binning = BinningConfig.from_request(config, default_bins=20)
        x = require_array(config, "x")
        y = require_array(config, "y")
        check_dimensions(x, y)
        if len(x) == 0:
            raise ValueError("x must not be empty")
        return {"binning": binning, "x": x, "y": y}

    def compute(self, config):
        """Smooth the series. Raises TooManyBinsError if a window is empty."""
        binning = config["binning"]
        x, y = smooth_window(config["x"], config["y"], binning.bins, log=binning.log)
        return {"x": to_list(x), "y": to_list(y), "binning": binning.to_dict()}

    def register_routes(self, bp):
        service = self

        @bp.route("/smooth", methods=["POST"])
        def smooth_compute():
            result, err = service.run(request.get_json(silent=True))
            if err is not None:
                return jsonify(err), 400
            return jsonify(result)
