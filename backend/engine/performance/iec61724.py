"""IEC 61724-1 performance indicators.

Computes reference yield (Yr), final yield (Yf), performance ratio (PR)
and capacity utilisation factor (CUF) for monthly yield series, plus the
proportional PR model ``E = PR * A * eta * GHI``.

Divisions by a zero reference yield or zero capacity do not raise: they
return ``nan`` / ``inf`` so callers can label the period "not computable".
Such periods are excluded from averaged indicators but still contribute
their energy to totals.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

# ======================================================================
# Constants
# ======================================================================

G_STC: float = 1.0                  # reference irradiance (kW/m^2)
DAYS_PER_PERIOD: int = 30
HOURS_PER_PERIOD: float = 720.0     # 30-day month


# ======================================================================
# Series types
# ======================================================================

@dataclass(frozen=True)
class YieldSeriesEntry:
    """One period (month or hour) of a yield series."""

    label: str
    energy: float                       # kWh
    reference_yield: float              # kWh/m^2/day over G_STC (h/day)
    final_yield: float                  # kWh/kWp/day (h/day)
    performance_ratio: float            # percent, nan when not computable
    irradiation: float | None = None    # kWh/m^2 over the period
    ambient_temp: float | None = None   # degC
    avg_cell_temp: float | None = None  # degC, sunlit hours only
    avg_irradiance: float | None = None # W/m^2, sunlit hours only

    @property
    def pr_available(self) -> bool:
        return math.isfinite(self.performance_ratio)


@dataclass(frozen=True)
class PerformanceSummary:
    """Aggregated indicators over a yield series."""

    total_energy: float
    avg_performance_ratio: float
    avg_final_yield: float
    avg_reference_yield: float
    capacity_utilization_factor: float
    periods: int
    valid_periods: int

    @property
    def has_data(self) -> bool:
        return self.periods > 0


# ======================================================================
# Indicators
# ======================================================================

def _divide(numerator: float, denominator: float) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def reference_yield(daily_irradiance_kwh: float) -> float:
    """Yr: daily in-plane irradiation divided by the 1 kW/m^2 reference."""
    return _divide(daily_irradiance_kwh, G_STC)


def final_yield(
    energy_kwh: float,
    nominal_capacity_kwp: float,
    days_in_period: int = DAYS_PER_PERIOD,
) -> float:
    """Yf: energy per installed kWp per day."""
    return _divide(_divide(energy_kwh, nominal_capacity_kwp), days_in_period)


def performance_ratio(final_yield_value: float, reference_yield_value: float) -> float:
    """PR in percent, ``Yf / Yr * 100``. Non-finite when ``Yr == 0``."""
    return _divide(final_yield_value, reference_yield_value) * 100.0


def capacity_utilization_factor(
    total_energy_kwh: float,
    nominal_capacity_kwp: float,
    period_count: int,
    hours_per_period: float = HOURS_PER_PERIOD,
) -> float:
    """CUF in percent: energy over capacity running flat out for all periods."""
    return _divide(
        total_energy_kwh, nominal_capacity_kwp * period_count * hours_per_period
    ) * 100.0


def proportional_yield(
    pr: float,
    area: float,
    efficiency: float,
    irradiation_kwh_m2: float,
) -> float:
    """PR-model energy (kWh): ``E = PR * A * eta * GHI``."""
    return pr * area * efficiency * irradiation_kwh_m2


def build_entry(
    label: str,
    energy_kwh: float,
    daily_irradiance_kwh: float,
    nominal_capacity_kwp: float,
    days_in_period: int = DAYS_PER_PERIOD,
    **details: float | None,
) -> YieldSeriesEntry:
    """Assemble a :class:`YieldSeriesEntry` with Yr, Yf and PR filled in."""
    yr = reference_yield(daily_irradiance_kwh)
    yf = final_yield(energy_kwh, nominal_capacity_kwp, days_in_period)
    return YieldSeriesEntry(
        label=label,
        energy=energy_kwh,
        reference_yield=yr,
        final_yield=yf,
        performance_ratio=performance_ratio(yf, yr),
        **details,
    )


# ======================================================================
# Aggregation
# ======================================================================

def summarize(
    entries: Sequence[YieldSeriesEntry],
    nominal_capacity_kwp: float,
    hours_per_period: float = HOURS_PER_PERIOD,
) -> PerformanceSummary:
    """Aggregate a series.

    Total energy sums every entry. PR, Yf and Yr are averaged over the
    entries whose PR is finite. An empty series gives an all-zero summary
    with ``has_data == False``.
    """
    if not entries:
        return PerformanceSummary(
            total_energy=0.0,
            avg_performance_ratio=0.0,
            avg_final_yield=0.0,
            avg_reference_yield=0.0,
            capacity_utilization_factor=0.0,
            periods=0,
            valid_periods=0,
        )

    total = float(sum(e.energy for e in entries))
    valid = [e for e in entries if e.pr_available]

    def _mean(values: Iterable[float]) -> float:
        values = list(values)
        return float(np.mean(values)) if values else float("nan")

    return PerformanceSummary(
        total_energy=total,
        avg_performance_ratio=_mean(e.performance_ratio for e in valid),
        avg_final_yield=_mean(e.final_yield for e in valid),
        avg_reference_yield=_mean(e.reference_yield for e in valid),
        capacity_utilization_factor=capacity_utilization_factor(
            total, nominal_capacity_kwp, len(entries), hours_per_period
        ),
        periods=len(entries),
        valid_periods=len(valid),
    )


@dataclass(frozen=True)
class PerformanceComparison:
    """Actual over simulated energy, matched month by month."""

    ratios: dict[str, float]            # actual label -> percent
    unmatched: tuple[str, ...] = ()     # actual labels with no simulated month

    @property
    def compared(self) -> int:
        return len(self.ratios)


_TRAILING_NUMBER = re.compile(r"(\d+)\s*$")


def month_number(label: str, position: int) -> int:
    """Month number (1-based) of a series label.

    Uses the number at the end of the label, so ``"M3"``, ``"T3"`` and
    ``"Tháng 3"`` all give 3. Labels without a number fall back to their
    0-based ``position`` in the series.
    """
    match = _TRAILING_NUMBER.search(label)
    if match:
        return int(match.group(1))
    return position + 1


def relative_performance(
    actual: Sequence[YieldSeriesEntry],
    simulated: Sequence[YieldSeriesEntry],
) -> PerformanceComparison:
    """Actual over simulated energy (percent) for each month present in both.

    Entries are paired by :func:`month_number`, not by exact label, so
    actual data labelled ``T1..T12`` compares against a simulated
    ``M1..M12`` series.
    """
    simulated_by_month = {
        month_number(e.label, i): e.energy for i, e in enumerate(simulated)
    }
    ratios: dict[str, float] = {}
    unmatched: list[str] = []
    for i, e in enumerate(actual):
        month = month_number(e.label, i)
        if month in simulated_by_month:
            ratios[e.label] = _divide(e.energy, simulated_by_month[month]) * 100.0
        else:
            unmatched.append(e.label)
    return PerformanceComparison(ratios=ratios, unmatched=tuple(unmatched))
