"""
Daily-to-hourly irradiance decomposition (Liu & Jordan 1960).

The ratio of hourly to daily total radiation is

    r_t = (pi/24) * (cos(w) - cos(ws)) / (sin(ws) - ws*cos(ws))

where ``w`` is the hour angle at the middle of the hour and ``ws`` the
sunset hour angle. Summed over the sunlit hours ``r_t`` integrates to ~1,
so the hourly profile reconstructs the daily total.

References
----------
- Liu B.Y.H., Jordan R.C., "The interrelationship and characteristic
  distribution of direct, diffuse and total solar radiation", Solar
  Energy, 4(3):1-19, 1960.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .geometry import SolarGeometry

HOURS_PER_DAY: int = 24
DEG_PER_HOUR: float = 15.0
WH_PER_KWH: float = 1000.0


def hour_angle(
    hour_index: NDArray[np.float64] | float,
) -> NDArray[np.float64] | float:
    """Hour angle (degrees) at the middle of hour ``hour_index``.

    Solar noon is 0, mornings negative: ``15 * (h + 0.5 - 12)``.
    """
    return DEG_PER_HOUR * (np.asarray(hour_index, dtype=np.float64) + 0.5 - 12.0)


def hourly_fraction(
    hour_index: NDArray[np.float64] | float,
    geometry: SolarGeometry,
) -> NDArray[np.float64]:
    """Liu & Jordan ``r_t`` for each hour, zero outside daylight.

    Negative values caused by round-off at the sunrise/sunset boundary are
    clamped to zero.
    """
    omega_deg = np.atleast_1d(hour_angle(hour_index))
    ws = geometry.sunset_hour_angle_rad
    daylight = np.abs(omega_deg) <= geometry.sunset_hour_angle_deg

    denom = np.sin(ws) - ws * np.cos(ws)
    r_t = np.zeros_like(omega_deg)
    if denom > 0.0:
        r_t[daylight] = (
            (np.pi / HOURS_PER_DAY)
            * (np.cos(np.radians(omega_deg[daylight])) - np.cos(ws))
            / denom
        )
    return np.maximum(r_t, 0.0)


def decompose_hour(
    daily_irradiance_kwh: float,
    hour_index: NDArray[np.float64] | int,
    geometry: SolarGeometry,
) -> NDArray[np.float64] | float:
    """Irradiance (W/m^2) for one hour, or for an array of hours.

    Parameters
    ----------
    daily_irradiance_kwh : float
        Daily global horizontal irradiation (kWh/m^2/day).
    hour_index : int or array_like
        Hour of day, 0-23.
    geometry : SolarGeometry
        Output of :func:`engine.solar.geometry.compute_geometry`.

    Returns
    -------
    float or ndarray
        ``max(0, r_t) * daily * 1000``. A scalar hour gives a float.
    """
    irradiance = hourly_fraction(hour_index, geometry) * daily_irradiance_kwh * WH_PER_KWH
    if np.ndim(hour_index) == 0:
        return float(irradiance[0])
    return irradiance


def hourly_profile(
    daily_irradiance_kwh: float,
    geometry: SolarGeometry,
) -> NDArray[np.float64]:
    """Return the 24-element hourly irradiance profile (W/m^2)."""
    hours = np.arange(HOURS_PER_DAY, dtype=np.float64)
    return decompose_hour(daily_irradiance_kwh, hours, geometry)
