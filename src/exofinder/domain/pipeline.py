# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Exoplanet location pipeline.

Composes time reduction, Kepler solve, orbit projection and galactic
rotation into one call per request. Stateless; safe to call from any
number of threads.
"""
import time
from typing import Any, Callable

from exofinder.domain.exoplanet import (
    DEFAULT_EXOPLANET,
    Exoplanet,
    exoplanet_from_request,
    exoplanet_to_response,
)
from exofinder.domain.equatorial import set_equatorial_coordinates
from exofinder.domain.galactic import set_galactic_coordinates


def resolve_epoch(planet: Exoplanet, clock: Callable[[], float] = time.time) -> float:
    """Requested unix_time when positive, otherwise the clock's reading."""
    if planet.unix_time > 0:
        return planet.unix_time
    return float(int(clock()))


def locate_exoplanet(
    planet: Exoplanet,
    clock: Callable[[], float] = time.time,
) -> Exoplanet:
    """
    Compute distance, equatorial and galactic coordinates for a record.

    Args:
        planet: Record with orbital elements.
        clock: Wall-clock source (seconds since the Unix epoch), used
            when planet.unix_time is not positive.

    Returns:
        New Exoplanet with all outputs set. A failed Kepler solve leaves
        NaN in distance and ra (see Exoplanet.solved).
    """
    epoch_s = resolve_epoch(planet, clock)
    located = set_equatorial_coordinates(planet, epoch_s)
    return set_galactic_coordinates(located)


def handle_request(
    request: dict[str, Any],
    template: Exoplanet = DEFAULT_EXOPLANET,
    clock: Callable[[], float] = time.time,
) -> dict[str, Any]:
    """Merge a decoded request onto the template, locate it, build the response."""
    planet = exoplanet_from_request(request, template)
    return exoplanet_to_response(locate_exoplanet(planet, clock))
