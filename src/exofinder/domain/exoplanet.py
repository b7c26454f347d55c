# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Exoplanet record.

Immutable bundle of orbital elements and computed sky position, plus the
pure mappings between the record and request/response dictionaries.
No external dependencies, only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass, replace
from typing import Any


KEPLER_FAILURE_MESSAGE = "Failed to solve Kepler's equation given the input."


@dataclass(frozen=True)
class Exoplanet:
    """Orbital elements of an exoplanet and its computed position.

    Inputs are in the units astronomers quote them in (AU, Julian years,
    degrees). Outputs: distance in light-years, ra in radians, declination
    and galactic coordinates in degrees. NaN in distance or ra marks a
    failed Kepler solve.
    """
    name: str = "Gas Giant"
    mass: float = 8.053                   # Jupiter masses
    planet_radius: float = 1.12           # Jupiter radii
    orbital_radius: float = 2.774         # AU (semi-major axis)
    orbital_period: float = 4.8           # Julian years
    eccentricity: float = 0.37
    inclination: float = 0.0              # deg
    longitude_of_node: float = 0.0        # deg
    argument_of_periapsis: float = 0.0    # deg
    unix_time: float = 0.0                # s
    distance: float = 0.0                 # ly
    ra: float = 0.0                       # rad
    declination: float = 0.0              # deg
    galactic_longitude: float = 0.0       # deg
    galactic_latitude: float = 0.0        # deg
    stay_alive: bool = False

    @property
    def solved(self) -> bool:
        """False when the Kepler solve failed (distance or ra is NaN)."""
        return not (math.isnan(self.distance) or math.isnan(self.ra))


DEFAULT_EXOPLANET = Exoplanet()

# Wire key → record attribute, in response order.
_NUMERIC_FIELDS: tuple[tuple[str, str], ...] = (
    ("mass", "mass"),
    ("planet_radius", "planet_radius"),
    ("orbital_radius", "orbital_radius"),
    ("orbital_period", "orbital_period"),
    ("eccentricity", "eccentricity"),
    ("inclination", "inclination"),
    ("longitude_of_node", "longitude_of_node"),
    ("argument_of_periapsis", "argument_of_periapsis"),
    ("galacticLongitude", "galactic_longitude"),
    ("galacticLatitude", "galactic_latitude"),
    ("declination", "declination"),
    ("unix_time", "unix_time"),
    ("distance", "distance"),
    ("ra", "ra"),
)

REQUEST_KEYS: frozenset[str] = frozenset(
    key for key, _ in _NUMERIC_FIELDS
) | {"name", "stay_alive"}


def _is_number(value: Any) -> bool:
    # JSON true/false decode to bool, which subclasses int.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float(value: int | float) -> float:
    try:
        return float(value)
    except OverflowError:
        # Integer literals past the float range read like 1e999 does
        return math.inf if value > 0 else -math.inf


def exoplanet_from_request(
    request: dict[str, Any],
    template: Exoplanet = DEFAULT_EXOPLANET,
) -> Exoplanet:
    """
    Build a record from a template and the fields present in a request.

    Numeric fields are taken only when the request value is a JSON number;
    anything else (strings, null, booleans, nested values) leaves the
    template value in place. Unknown keys are ignored. The template is
    not mutated.

    Args:
        request: Decoded request object.
        template: Record supplying values for absent fields.

    Returns:
        New Exoplanet.
    """
    updates: dict[str, Any] = {}
    for key, attr in _NUMERIC_FIELDS:
        value = request.get(key)
        if _is_number(value):
            updates[attr] = _to_float(value)

    name = request.get("name")
    if isinstance(name, str):
        updates["name"] = name

    stay_alive = request.get("stay_alive")
    if isinstance(stay_alive, bool):
        updates["stay_alive"] = stay_alive

    return replace(template, **updates)


def _json_float(value: float) -> float | None:
    return None if math.isnan(value) or math.isinf(value) else value


def exoplanet_to_response(planet: Exoplanet) -> dict[str, Any]:
    """
    Map a located record to the response object.

    All fields are echoed. When the Kepler solve failed, ``error`` carries
    KEPLER_FAILURE_MESSAGE and distance/ra are None. Any other non-finite
    value is also reported as None, since JSON has no NaN.
    """
    response: dict[str, Any] = {"name": planet.name}
    for key, attr in _NUMERIC_FIELDS:
        if key in ("distance", "ra"):
            continue
        response[key] = _json_float(getattr(planet, attr))

    if planet.solved:
        response["distance"] = _json_float(planet.distance)
        response["ra"] = _json_float(planet.ra)
    else:
        response["error"] = KEPLER_FAILURE_MESSAGE
        response["distance"] = None
        response["ra"] = None

    response["stay_alive"] = planet.stay_alive
    return response
