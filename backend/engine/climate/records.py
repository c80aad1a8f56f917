"""Monthly climate records: 12 representative-day climate values per site."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

MONTHS_PER_YEAR: int = 12
DAYS_PER_MONTH: int = 30
DEFAULT_DAILY_IRRADIANCE: float = 0.0   # kWh/m^2/day
DEFAULT_AMBIENT_TEMP: float = 25.0      # degC
DEFAULT_LATITUDE: float = 10.0          # used when an imported region has none


@dataclass(frozen=True)
class MonthlyClimate:
    """Average daily irradiation and ambient temperature for one month."""

    daily_irradiance: float = DEFAULT_DAILY_IRRADIANCE  # kWh/m^2/day
    ambient_temp: float = DEFAULT_AMBIENT_TEMP          # degC


def _default_months() -> tuple[MonthlyClimate, ...]:
    return tuple(MonthlyClimate() for _ in range(MONTHS_PER_YEAR))


@dataclass(frozen=True)
class ClimateRecord:
    """Climate for one site: latitude plus exactly 12 months (index 0 = Jan)."""

    latitude: float
    months: tuple[MonthlyClimate, ...] = field(default_factory=_default_months)

    def __post_init__(self) -> None:
        months = tuple(self.months)
        if len(months) != MONTHS_PER_YEAR:
            raise ValueError(
                f"months has {len(months)} entries, expected {MONTHS_PER_YEAR}"
            )
        object.__setattr__(self, "months", months)

    @classmethod
    def empty(cls, latitude: float = DEFAULT_LATITUDE) -> ClimateRecord:
        return cls(latitude=latitude)

    def with_month(self, month_index: int, month: MonthlyClimate) -> ClimateRecord:
        """Return a copy with one month replaced."""
        months = list(self.months)
        months[month_index] = month
        return replace(self, months=tuple(months))

    @property
    def annual_irradiance(self) -> float:
        """Annual cumulative GHI (kWh/m^2) with 30-day months."""
        return sum(m.daily_irradiance * DAYS_PER_MONTH for m in self.months)

    @property
    def average_daily_irradiance(self) -> float:
        return sum(m.daily_irradiance for m in self.months) / MONTHS_PER_YEAR

    @property
    def average_temperature(self) -> float:
        return sum(m.ambient_temp for m in self.months) / MONTHS_PER_YEAR

    # -- plain-data conversion (JSON storage) -----------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "latitude": self.latitude,
            "months": [
                {"daily_irradiance": m.daily_irradiance, "ambient_temp": m.ambient_temp}
                for m in self.months
            ],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClimateRecord:
        """Build a record from plain data, defaulting missing or non-finite values."""
        raw_months = data.get("months")
        if not isinstance(raw_months, (list, tuple)):
            raw_months = []
        raw_months = list(raw_months)[:MONTHS_PER_YEAR]
        raw_months += [{}] * (MONTHS_PER_YEAR - len(raw_months))
        months = tuple(
            MonthlyClimate(
                daily_irradiance=max(
                    0.0, _finite_or(m.get("daily_irradiance"), DEFAULT_DAILY_IRRADIANCE)
                ),
                ambient_temp=_finite_or(m.get("ambient_temp"), DEFAULT_AMBIENT_TEMP),
            )
            for m in (r if isinstance(r, Mapping) else {} for r in raw_months)
        )
        return cls(
            latitude=_finite_or(data.get("latitude"), DEFAULT_LATITUDE),
            months=months,
        )


def _finite_or(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _record(latitude: float, pairs: list[tuple[float, float]]) -> ClimateRecord:
    return ClimateRecord(
        latitude=latitude,
        months=tuple(MonthlyClimate(float(ghi), float(temp)) for ghi, temp in pairs),
    )


# Built-in regional climatology (kWh/m^2/day, degC).
DEFAULT_REGIONAL_DATA: dict[str, ClimateRecord] = {
    "Hồ Chí Minh": _record(10.8, [
        (5.2, 27), (5.8, 28), (6.1, 29), (5.9, 30), (5.1, 29), (4.5, 28),
        (4.4, 27), (4.6, 27), (4.2, 27), (4.1, 27), (4.3, 27), (4.8, 27),
    ]),
    "Hà Nội": _record(21.0, [
        (2.1, 17), (2.3, 18), (2.8, 21), (3.9, 24), (5.2, 28), (5.5, 30),
        (5.4, 30), (5.1, 29), (4.8, 28), (4.2, 25), (3.5, 22), (2.7, 19),
    ]),
}
