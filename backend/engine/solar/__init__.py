"""
Solar PV engine module.

Provides solar geometry (Cooper declination, sunset hour angle), the
Liu & Jordan daily-to-hourly irradiance decomposition and the NOCT
thermal derating model.
"""

from .geometry import SolarGeometry, compute_geometry, declination, representative_day
from .decomposition import decompose_hour, hour_angle, hourly_fraction, hourly_profile
from .panel import PanelParameters
from .thermal import cell_temperature, instantaneous_yield

__all__ = [
    # geometry
    "SolarGeometry",
    "compute_geometry",
    "declination",
    "representative_day",
    # decomposition
    "decompose_hour",
    "hour_angle",
    "hourly_fraction",
    "hourly_profile",
    # panel / thermal
    "PanelParameters",
    "cell_temperature",
    "instantaneous_yield",
]
