"""
Radial Profiles Service.

Density, metallicity and cumulative mass profiles of a set of particles.
Distances come either ready-made ("distance") or from 3D "positions"
measured from "center" (default: the center of mass). An optional
"sphere_radius" keeps only the particles inside that sphere first.

Endpoints:
    POST /api/profiles/density      - mass per shell volume
    POST /api/profiles/metallicity  - shell metallicity in solar units
    POST /api/profiles/mass         - cumulative mass

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from flask import jsonify, request

from gadgetplotting.binning import check_dimensions
from gadgetplotting.config import BinningConfig
from gadgetplotting.particles import (
    PASS_ALL,
    WithinSphere,
    apply_filter,
    center_of_mass,
    radial_distance,
)
from gadgetplotting.profiles import density_profile, mass_profile, metallicity_profile
from gadgetplotting.services import (
    GadgetService,
    optional_center,
    require_array,
    require_number,
    to_list,
)

PROFILE_KINDS = ("density", "metallicity", "mass")


def _distances(data, mass, *arrays):
    """
    Resolve particle distances from the payload.

    Returns (center, distance, mass, *arrays) with every array filtered
    the same way. center is None when distances were given directly.
    """
    if data.get("positions") is None:
        distance = require_array(data, "distance")
        check_dimensions(mass, distance, *arrays)
        return (None, distance, mass) + tuple(arrays)

    positions = data["positions"]
    particle_filter = PASS_ALL
    center = optional_center(data)
    if data.get("sphere_radius") is not None:
        if center is None:
            center = center_of_mass(positions, mass)
        particle_filter = WithinSphere(require_number(data, "sphere_radius"), center)
    positions, mass, *arrays = apply_filter(
        positions, mass, *arrays, particle_filter=particle_filter)
    if center is None:
        center = center_of_mass(positions, mass)
    return (tuple(center), radial_distance(positions, center), mass) + tuple(arrays)


class ProfileService(GadgetService):

    id = "profiles"
    name = "Radial Profiles"
    description = "Density, metallicity and cumulative mass in spherical shells"
    category = "profiles"
    status = "live"
    route = "/api/profiles"

    def validate(self, config):
        """Validate and normalize a profile request."""
        kind = config.get("kind", "density")
        if kind not in PROFILE_KINDS:
            raise ValueError("kind must be one of {}".format(", ".join(PROFILE_KINDS)))

        binning = BinningConfig.from_request(config, max_key="max_radius")
        mass = require_array(config, "mass")
        extra = []
        if kind == "metallicity":
            extra.append(require_array(config, "metal_mass"))

        center, distance, mass, *extra = _distances(config, mass, *extra)
        out = {
            "kind": kind,
            "binning": binning,
            "mass": mass,
            "distance": distance,
            "center": center,
        }
        if kind == "metallicity":
            out["metal_mass"] = extra[0]
        return out

    def compute(self, config):
        """Compute the requested radial profile."""
        kind = config["kind"]
        binning = config["binning"]
        if kind == "density":
            x, y = density_profile(
                config["mass"], config["distance"], binning.max_value, binning.bins)
        elif kind == "metallicity":
            x, y = metallicity_profile(
                config["mass"], config["distance"], config["metal_mass"],
                binning.max_value, binning.bins)
        else:
            x, y = mass_profile(
                config["mass"], config["distance"], binning.max_value, binning.bins)

        result = {
            "kind": kind,
            "radii": to_list(x),
            "values": to_list(y),
            "n_particles": int(len(config["mass"])),
            "binning": binning.to_dict(),
        }
        if config["center"] is not None:
            result["center"] = list(config["center"])
        return result

    def register_routes(self, bp):
        """Register profile API endpoints on the given blueprint."""
        service = self

        @bp.route("/profiles/<kind>", methods=["POST"])
        def profiles_compute(kind):
            if kind not in PROFILE_KINDS:
                return jsonify({"error": "Unknown profile '{}'".format(kind)}), 404
            data = request.get_json(silent=True)
            if data:
                data = dict(data, kind=kind)
            result, err = service.run(data)
            if err is not None:
                return jsonify(err), 400
            return jsonify(result)
