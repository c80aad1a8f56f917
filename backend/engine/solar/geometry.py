"""
Solar geometry for the Liu & Jordan daily-to-hourly decomposition.

Computes the solar declination (Cooper 1969) and the sunset hour angle for
a site latitude and day of year.

References
----------
- Cooper P.I., "The absorption of radiation in solar stills", Solar
  Energy, 12(3):333-346, 1969.
- Duffie J.A., Beckman W.A., "Solar Engineering of Thermal Processes",
  4th ed., Wiley, 2013, sections 1.6 and 1.9.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
MAX_DECLINATION_DEG: float = 23.45   # axial tilt used by Cooper's formula
DAYS_PER_YEAR: int = 365
DAYS_PER_MONTH: int = 30             # representative-month approximation
MID_MONTH_OFFSET: int = 15


@dataclass(frozen=True)
class SolarGeometry:
    """Declination and sunset hour angle for one (latitude, day) pair."""

    declination_deg: float
    sunset_hour_angle_rad: float
    sunset_hour_angle_deg: float
    latitude_rad: float = 0.0
    declination_rad: float = 0.0
    cos_sunset_arg: float = 0.0     # clamped to [-1, 1]


def declination(day_of_year: float) -> float:
    """Solar declination in degrees, ``23.45 * sin(2*pi/365 * (284 + n))``."""
    return MAX_DECLINATION_DEG * math.sin(
        2.0 * math.pi / DAYS_PER_YEAR * (284.0 + day_of_year)
    )


def compute_geometry(latitude_deg: float, day_of_year: int) -> SolarGeometry:
    """Compute declination and sunset hour angle.

    Parameters
    ----------
    latitude_deg : float
        Site latitude in degrees (positive north).
    day_of_year : int
        Day of year (1-365).

    Returns
    -------
    SolarGeometry
        The sunset hour angle ``ws`` satisfies
        ``cos(ws) = -tan(phi) * tan(delta)``. The cosine argument is
        clamped to [-1, 1] so polar day (``ws = pi``) and polar night
        (``ws = 0``) are returned instead of a domain error.
    """
    delta_deg = declination(day_of_year)
    phi_rad = math.radians(latitude_deg)
    delta_rad = math.radians(delta_deg)

    cos_ws = -math.tan(phi_rad) * math.tan(delta_rad)
    cos_ws = max(-1.0, min(1.0, cos_ws))
    ws = math.acos(cos_ws)

    return SolarGeometry(
        declination_deg=delta_deg,
        sunset_hour_angle_rad=ws,
        sunset_hour_angle_deg=math.degrees(ws),
        latitude_rad=phi_rad,
        declination_rad=delta_rad,
        cos_sunset_arg=cos_ws,
    )


def representative_day(month_index: int) -> int:
    """Day of year used to stand in for a whole month (0-based index)."""
    return month_index * DAYS_PER_MONTH + MID_MONTH_OFFSET
