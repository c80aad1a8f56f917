"""
Yield engine: chains solar geometry, Liu & Jordan decomposition, NOCT
thermal derating and the IEC 61724 indicators into the calculation modes
exposed by the service.

Modes
~~~~~
* ``run_hourly``         one representative day, 24 hourly samples.
* ``run_monthly``        12 representative days (``n = 30*m + 15``), each
                         day's total scaled by 30 to the month.
* ``run_pr_proportional`` the aggregate PR model, no hourly decomposition.
* ``actual_series``      measured monthly production in the same series
                         shape as the simulated output.

Every function is pure: inputs are read-only snapshots, results are new
objects, identical inputs give identical outputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

import numpy as np

from engine.climate.records import DAYS_PER_MONTH, ClimateRecord
from engine.climate.tabular import ActualProductionRow
from engine.performance.iec61724 import (
    YieldSeriesEntry,
    build_entry,
    proportional_yield,
)
from engine.solar.decomposition import HOURS_PER_DAY, hourly_profile
from engine.solar.geometry import SolarGeometry, compute_geometry, representative_day
from engine.solar.panel import PanelParameters
from engine.solar.thermal import cell_temperature, instantaneous_yield

logger = logging.getLogger(__name__)


class CalculationMode(str, Enum):
    HOURLY = "hourly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class HourlySample:
    """Irradiance, cell temperature and energy for one hour."""

    hour_label: str
    irradiance: float       # W/m^2
    cell_temp: float        # degC
    energy: float           # kWh


@dataclass(frozen=True)
class DailyYield:
    """Intermediate result of one representative day."""

    geometry: SolarGeometry
    irradiance: np.ndarray      # (24,) W/m^2
    cell_temp: np.ndarray       # (24,) degC
    energy: np.ndarray          # (24,) kWh

    @property
    def total_energy(self) -> float:
        return float(self.energy.sum())

    @property
    def sunlit(self) -> np.ndarray:
        return self.irradiance > 0.0


@dataclass(frozen=True)
class CalculationResult:
    series: tuple[Union[HourlySample, YieldSeriesEntry], ...]
    total_energy: float
    mode: CalculationMode
    geometry: SolarGeometry | None = None


# ---------------------------------------------------------------------------
# Building block
# ---------------------------------------------------------------------------

def simulate_day(
    daily_irradiance: float,
    ambient_temp: float,
    latitude: float,
    day_of_year: int,
    panel: PanelParameters,
) -> DailyYield:
    """Decompose one day and derate each hour (vectorised over 24 hours)."""
    geometry = compute_geometry(latitude, day_of_year)
    irradiance = hourly_profile(daily_irradiance, geometry)
    t_cell = cell_temperature(irradiance, ambient_temp, noct=panel.noct)
    energy = instantaneous_yield(irradiance, panel, t_cell)
    return DailyYield(geometry=geometry, irradiance=irradiance, cell_temp=t_cell, energy=energy)


def _capacity(panel: PanelParameters, capacity_kwp: float | None) -> float:
    return panel.nominal_capacity_kwp if capacity_kwp is None else capacity_kwp


def month_label(month_index: int) -> str:
    return f"M{month_index + 1}"


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

def run_hourly(
    daily_irradiance: float,
    ambient_temp: float,
    latitude: float,
    day_of_year: int,
    panel: PanelParameters,
) -> CalculationResult:
    """Hourly profile for a single representative day.

    Parameters
    ----------
    daily_irradiance : float
        Daily GHI (kWh/m^2/day).
    ambient_temp : float
        Ambient temperature (degC), held constant over the day.
    latitude : float
        Site latitude (degrees).
    day_of_year : int
        Day of year (1-365).
    panel : PanelParameters
        Array area, efficiency and thermal parameters.

    Returns
    -------
    CalculationResult
        24 :class:`HourlySample` entries labelled ``"0h"`` .. ``"23h"``,
        the daily total (kWh) and the solar geometry used.
    """
    day = simulate_day(daily_irradiance, ambient_temp, latitude, day_of_year, panel)
    series = tuple(
        HourlySample(
            hour_label=f"{h}h",
            irradiance=float(day.irradiance[h]),
            cell_temp=float(day.cell_temp[h]),
            energy=float(day.energy[h]),
        )
        for h in range(HOURS_PER_DAY)
    )
    return CalculationResult(
        series=series,
        total_energy=day.total_energy,
        mode=CalculationMode.HOURLY,
        geometry=day.geometry,
    )


def run_monthly(
    record: ClimateRecord,
    panel: PanelParameters,
    capacity_kwp: float | None = None,
) -> CalculationResult:
    """Monthly and annual yield from 12 representative days.

    Each month is simulated on day ``30*m + 15`` and the daily total is
    multiplied by 30. Yr, Yf and PR are computed per month against the
    nominal capacity (``area * efficiency`` unless given).

    Sunlit-hour averages of cell temperature and irradiance are ``None``
    for a month with no sun.
    """
    capacity = _capacity(panel, capacity_kwp)
    entries: list[YieldSeriesEntry] = []

    for idx, month in enumerate(record.months):
        day = simulate_day(
            month.daily_irradiance,
            month.ambient_temp,
            record.latitude,
            representative_day(idx),
            panel,
        )
        sunlit = day.sunlit
        has_sun = bool(sunlit.any())
        entries.append(
            build_entry(
                label=month_label(idx),
                energy_kwh=day.total_energy * DAYS_PER_MONTH,
                daily_irradiance_kwh=month.daily_irradiance,
                nominal_capacity_kwp=capacity,
                irradiation=month.daily_irradiance * DAYS_PER_MONTH,
                ambient_temp=month.ambient_temp,
                avg_cell_temp=float(day.cell_temp[sunlit].mean()) if has_sun else None,
                avg_irradiance=float(day.irradiance[sunlit].mean()) if has_sun else None,
            )
        )

    total = float(sum(e.energy for e in entries))
    logger.debug("Monthly run: lat=%.2f total=%.1f kWh", record.latitude, total)
    return CalculationResult(series=tuple(entries), total_energy=total, mode=CalculationMode.MONTHLY)


def run_pr_proportional(
    record: ClimateRecord,
    panel: PanelParameters,
    capacity_kwp: float | None = None,
) -> CalculationResult:
    """Aggregate PR model, ``E = PR * A * eta * GHI``, month by month.

    The annual total is the proportional yield over the annual cumulative
    irradiation (sum of ``daily * 30``).
    """
    capacity = _capacity(panel, capacity_kwp)
    entries = tuple(
        build_entry(
            label=month_label(idx),
            energy_kwh=proportional_yield(
                panel.performance_ratio,
                panel.area,
                panel.efficiency,
                month.daily_irradiance * DAYS_PER_MONTH,
            ),
            daily_irradiance_kwh=month.daily_irradiance,
            nominal_capacity_kwp=capacity,
            irradiation=month.daily_irradiance * DAYS_PER_MONTH,
            ambient_temp=month.ambient_temp,
        )
        for idx, month in enumerate(record.months)
    )
    total = proportional_yield(
        panel.performance_ratio, panel.area, panel.efficiency, record.annual_irradiance
    )
    return CalculationResult(series=entries, total_energy=total, mode=CalculationMode.MONTHLY)


def actual_series(
    rows: Sequence[ActualProductionRow],
    capacity_kwp: float,
) -> list[YieldSeriesEntry]:
    """Convert measured monthly production to IEC 61724 series entries.

    Daily reference irradiation is the monthly value divided by 30.
    """
    return [
        build_entry(
            label=row.month,
            energy_kwh=row.actual_energy_kwh,
            daily_irradiance_kwh=row.actual_irradiance_kwh_m2 / DAYS_PER_MONTH,
            nominal_capacity_kwp=capacity_kwp,
            irradiation=row.actual_irradiance_kwh_m2,
            ambient_temp=row.avg_ambient_temp,
        )
        for row in rows
    ]
