# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Time reduction and Kepler's equation for heliocentric exoplanet orbits.
No external dependencies, only stdlib math.
"""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class _AstroConstants:
    """Astronomical constants used by the exoplanet pipeline."""
    SECONDS_PER_DAY: float = 86_400.0
    DAYS_PER_JULIAN_YEAR: float = 365.25
    AU_TO_LIGHT_YEARS: float = 1.58125074e-5   # ly per AU
    # Galactic frame (degrees)
    ANGLE_NCP_DEG: float = 123.932    # position angle of the North Celestial Pole
    DEC_NGP_DEG: float = 27.12825     # declination of the North Galactic Pole
    RA_NGP_DEG: float = 192.85948     # right ascension of the North Galactic Pole
    # Newton-Raphson limits for Kepler's equation
    KEPLER_TOLERANCE: float = 1e-6
    KEPLER_MAX_ITERATIONS: int = 100


AstroConstants: _AstroConstants = _AstroConstants()


def orbital_period_seconds(orbital_period_years: float) -> float:
    """Convert an orbital period in Julian years to seconds."""
    c = AstroConstants
    return orbital_period_years * c.DAYS_PER_JULIAN_YEAR * c.SECONDS_PER_DAY


def mean_anomaly(epoch_s: float, orbital_period_years: float) -> float:
    """
    Mean anomaly at a Unix epoch, measured from periapsis at t = 0.

        M = 2π · t / P

    No reduction to [0, 2π) is applied; solve_kepler accepts any real M.

    Args:
        epoch_s: Seconds since the Unix epoch.
        orbital_period_years: Orbital period (Julian years).

    Returns:
        Mean anomaly in radians. A zero period gives ±inf (NaN at
        t = 0), which solve_kepler reports as a failed solve.
    """
    period_s = orbital_period_seconds(orbital_period_years)
    if period_s == 0.0:
        if epoch_s == 0.0:
            return math.nan
        return math.copysign(math.inf, epoch_s) * math.copysign(1.0, period_s)
    return 2.0 * math.pi * (epoch_s / period_s)


def solve_kepler(mean_anomaly_rad: float, eccentricity: float) -> float:
    """
    Solve Kepler's equation E - e·sin(E) = M for the eccentric anomaly.

    Newton-Raphson iteration starting from E₀ = M:
        E ← E - (E - e·sin(E) - M) / (1 - e·cos(E))

    Converges when successive iterates differ by less than
    KEPLER_TOLERANCE. Returns NaN when KEPLER_MAX_ITERATIONS pass
    without convergence or an iterate stops being finite (e ≥ 1,
    infinite M); callers test the result with math.isnan.

    Args:
        mean_anomaly_rad: Mean anomaly M (radians, any real).
        eccentricity: Orbital eccentricity, 0 ≤ e < 1.

    Returns:
        Eccentric anomaly E in radians, or NaN.
    """
    c = AstroConstants
    if not math.isfinite(mean_anomaly_rad):
        return math.nan
    e = eccentricity
    ecc_anomaly = mean_anomaly_rad

    for _ in range(c.KEPLER_MAX_ITERATIONS):
        f = ecc_anomaly - e * math.sin(ecc_anomaly) - mean_anomaly_rad
        f_prime = 1.0 - e * math.cos(ecc_anomaly)
        if f_prime == 0.0:
            return math.nan
        next_anomaly = ecc_anomaly - f / f_prime
        if not math.isfinite(next_anomaly):
            return math.nan
        if abs(next_anomaly - ecc_anomaly) < c.KEPLER_TOLERANCE:
            return next_anomaly
        ecc_anomaly = next_anomaly

    return math.nan


def true_anomaly(eccentric_anomaly_rad: float, eccentricity: float) -> float:
    """
    True anomaly from eccentric anomaly.

        ν = 2·atan(√((1+e)/(1-e)) · tan(E/2))

    Only elliptical orbits are modelled: e ≥ 1 (or e ≤ -1) yields NaN
    rather than an infinite or imaginary factor.

    Returns:
        True anomaly in radians, in (-π, π], or NaN.
    """
    e = eccentricity
    if not -1.0 < e < 1.0:
        return math.nan
    factor = math.sqrt((1.0 + e) / (1.0 - e))
    return 2.0 * math.atan(factor * math.tan(eccentric_anomaly_rad / 2.0))


def heliocentric_distance_au(
    semi_major_axis_au: float, eccentricity: float, eccentric_anomaly_rad: float,
) -> float:
    """Distance from the focus: r = a·(1 - e·cos E)."""
    return semi_major_axis_au * (1.0 - eccentricity * math.cos(eccentric_anomaly_rad))


def au_to_light_years(distance_au: float) -> float:
    """Convert astronomical units to light-years."""
    return distance_au * AstroConstants.AU_TO_LIGHT_YEARS
