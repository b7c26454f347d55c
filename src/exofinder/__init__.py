# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Exoplanet Finder

Locate an exoplanet on the sky from its orbital elements: Kepler's
equation, heliocentric distance, right ascension, declination and
galactic coordinates at a Unix epoch, plus OBJ point clouds of located
batches for 3-D viewers.
"""

from exofinder.version import __version__
from exofinder.domain.orbital_mechanics import (
    AstroConstants,
    mean_anomaly,
    solve_kepler,
    true_anomaly,
)
from exofinder.domain.exoplanet import (
    DEFAULT_EXOPLANET,
    KEPLER_FAILURE_MESSAGE,
    Exoplanet,
    exoplanet_from_request,
    exoplanet_to_response,
)
from exofinder.domain.equatorial import (
    EquatorialPosition,
    orbit_to_equatorial,
    set_equatorial_coordinates,
)
from exofinder.domain.galactic import (
    equatorial_to_galactic,
    set_galactic_coordinates,
)
from exofinder.domain.pipeline import (
    handle_request,
    locate_exoplanet,
)
from exofinder.domain.visualization import (
    galactic_to_cartesian,
    generate_obj_data,
    scaling_factor,
)

__all__ = [
    "__version__",
    "AstroConstants",
    "mean_anomaly",
    "solve_kepler",
    "true_anomaly",
    "DEFAULT_EXOPLANET",
    "KEPLER_FAILURE_MESSAGE",
    "Exoplanet",
    "exoplanet_from_request",
    "exoplanet_to_response",
    "EquatorialPosition",
    "orbit_to_equatorial",
    "set_equatorial_coordinates",
    "equatorial_to_galactic",
    "set_galactic_coordinates",
    "handle_request",
    "locate_exoplanet",
    "galactic_to_cartesian",
    "generate_obj_data",
    "scaling_factor",
]
