# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Point-cloud projection of located exoplanets.

Places each planet at (distance, galactic longitude, galactic latitude)
in a galactic Cartesian frame, scales the batch to fit a screen, and
formats the points as Wavefront OBJ vertex ("v") or point ("p") lines.
"""
import math

import numpy as np

from exofinder.domain.exoplanet import Exoplanet


OBJ_ELEMENTS = ("v", "p")


def galactic_to_cartesian(planet: Exoplanet) -> tuple[float, float, float]:
    """
    Spherical → Cartesian with r = distance, θ = l, φ = b.

        x = r·cos θ·cos φ
        y = r·sin θ·cos φ
        z = r·sin φ

    Returns:
        (x, y, z) in light-years.
    """
    r = planet.distance
    theta = math.radians(planet.galactic_longitude)
    phi = math.radians(planet.galactic_latitude)
    return (
        r * math.cos(theta) * math.cos(phi),
        r * math.sin(theta) * math.cos(phi),
        r * math.sin(phi),
    )


def scaling_factor(
    max_distance: float,
    min_distance: float,
    screen_width: float,
    screen_height: float,
) -> float:
    """
    Uniform scale fitting the batch's distance range onto the screen.

    min(W / range, H / range, 1.0); a zero range (all distances equal)
    leaves the points unscaled.
    """
    distance_range = max_distance - min_distance
    if distance_range == 0.0:
        return 1.0
    return min(screen_width / distance_range, screen_height / distance_range, 1.0)


def project_points(
    planets: list[Exoplanet],
    screen_width: float,
    screen_height: float,
) -> np.ndarray:
    """
    Scaled Cartesian points for a batch of located planets.

    The distance range is taken over finite distances only; planets
    without one still get a (NaN) row so rows line up with the input.

    Returns:
        numpy array of shape (N, 3).

    Raises:
        ValueError: If planets is empty.
    """
    if not planets:
        raise ValueError("at least one exoplanet is required")

    points = np.array([galactic_to_cartesian(p) for p in planets], dtype=float)
    distances = np.array([p.distance for p in planets], dtype=float)
    finite = distances[np.isfinite(distances)]
    if finite.size == 0:
        return points

    scale = scaling_factor(
        float(finite.max()), float(finite.min()), screen_width, screen_height,
    )
    return points * scale


def format_obj_points(points: np.ndarray, element: str = "v") -> str:
    """Format (N, 3) points as OBJ lines with 6 decimal places."""
    if element not in OBJ_ELEMENTS:
        raise ValueError(f"element must be one of {OBJ_ELEMENTS}, got {element!r}")
    return "".join(
        f"{element} {x:.6f} {y:.6f} {z:.6f}\n" for x, y, z in points.tolist()
    )


def generate_obj_data(
    planets: list[Exoplanet],
    screen_width: float,
    screen_height: float,
    element: str = "v",
) -> tuple[str, int]:
    """
    OBJ text for a batch of located planets.

    Args:
        planets: Located records (distance and galactic coordinates set).
        screen_width: Target width in output units.
        screen_height: Target height in output units.
        element: "v" for OBJ vertices, "p" for OBJ points.

    Returns:
        (text, byte_length), the length being that of the UTF-8 encoded text.
    """
    points = project_points(planets, screen_width, screen_height)
    text = format_obj_points(points, element)
    return text, len(text.encode("utf-8"))
