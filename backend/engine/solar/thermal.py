"""
Thermal derating: NOCT cell-temperature model and linear power derating
around Standard Test Conditions (25 degC).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .panel import PanelParameters

NOCT_IRRADIANCE: float = 800.0      # W/m^2 at NOCT reference conditions
NOCT_AMBIENT: float = 20.0          # degC at NOCT reference conditions
T_STC: float = 25.0                 # STC cell temperature (degC)


def cell_temperature(
    irradiance: NDArray[np.float64] | float,
    t_amb: NDArray[np.float64] | float,
    noct: float = 45.0,
) -> NDArray[np.float64] | float:
    """Estimate cell temperature using the NOCT model.

    ``Tc = Ta + (G / 800) * (NOCT - 20)``

    Parameters
    ----------
    irradiance : float or ndarray
        Irradiance on the module (W/m^2).
    t_amb : float or ndarray
        Ambient (dry-bulb) temperature (degC).
    noct : float
        Nominal Operating Cell Temperature (degC).

    Returns
    -------
    float or ndarray
        Cell temperature (degC). Scalars in, scalar out.
    """
    t_cell = np.asarray(t_amb, dtype=np.float64) + (
        np.asarray(irradiance, dtype=np.float64) / NOCT_IRRADIANCE
    ) * (noct - NOCT_AMBIENT)
    if t_cell.ndim == 0:
        return float(t_cell)
    return t_cell


def instantaneous_yield(
    irradiance: NDArray[np.float64] | float,
    panel: PanelParameters,
    cell_temp: NDArray[np.float64] | float,
) -> NDArray[np.float64] | float:
    """Energy (kWh) over one hour at constant irradiance.

    ``E = G * A * eta * (1 - beta * (Tc - 25)) / 1000``

    The derating is linear and is not floored: at extreme cell
    temperatures the result goes negative.
    """
    g = np.asarray(irradiance, dtype=np.float64)
    tc = np.asarray(cell_temp, dtype=np.float64)
    energy = (
        g * panel.area * panel.efficiency
        * (1.0 - panel.temp_coeff * (tc - T_STC))
        / 1000.0
    )
    if energy.ndim == 0:
        return float(energy)
    return energy
