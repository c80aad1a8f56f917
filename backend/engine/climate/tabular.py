"""Tabular (CSV) import of climate records and actual production data.

Both importers accept English or Vietnamese column headers, the layouts of
the sample templates produced by :func:`climate_template_csv` and
:func:`actual_template_csv`. Malformed cells are defaulted and malformed
rows are skipped; nothing in a single row aborts the whole import.
"""

from __future__ import annotations

import csv
import io
import logging
import math
from dataclasses import dataclass, field
from typing import Mapping

from .records import (
    DEFAULT_AMBIENT_TEMP,
    DEFAULT_DAILY_IRRADIANCE,
    DEFAULT_LATITUDE,
    MONTHS_PER_YEAR,
    ClimateRecord,
    MonthlyClimate,
)

logger = logging.getLogger(__name__)

CLIMATE_COLUMNS: dict[str, tuple[str, ...]] = {
    "region": ("region", "Region Name", "Tên Vùng", "Vùng"),
    "latitude": ("latitude", "Latitude", "Vĩ độ"),
    "month": ("month", "Month", "Tháng (1-12)"),
    "daily_irradiance": ("daily_irradiance", "GHI", "Bức xạ GHI (kWh/m2/ngày)"),
    "ambient_temp": ("ambient_temp", "Temp", "Nhiệt độ (°C)"),
}

ACTUAL_COLUMNS: dict[str, tuple[str, ...]] = {
    "month": ("month", "Month", "Tháng"),
    "actual_energy_kwh": (
        "actual_energy_kwh", "Actual AC Energy (kWh)", "Sản lượng AC Thực tế (kWh)",
    ),
    "actual_irradiance_kwh_m2": (
        "actual_irradiance_kwh_m2",
        "Actual GHI (kWh/m2/month)",
        "Bức xạ GHI Thực tế (kWh/m2/tháng)",
    ),
    "avg_ambient_temp": (
        "avg_ambient_temp", "Avg Ambient Temp (°C)", "Nhiệt độ môi trường TB (°C)",
    ),
}


# ======================================================================
# Row types
# ======================================================================

@dataclass(frozen=True)
class ClimateImportRow:
    """One validated (region, month) row."""

    region: str
    latitude: float | None
    month: int                  # 1-12
    daily_irradiance: float     # kWh/m^2/day
    ambient_temp: float         # degC


@dataclass(frozen=True)
class ActualProductionRow:
    """One month of measured plant output."""

    month: str
    actual_energy_kwh: float
    actual_irradiance_kwh_m2: float     # per month
    avg_ambient_temp: float = DEFAULT_AMBIENT_TEMP


@dataclass
class ImportReport:
    accepted: int = 0
    rejected: int = 0
    regions: list[str] = field(default_factory=list)


# ======================================================================
# Cell helpers
# ======================================================================

def _cell(row: Mapping[str, str | None], aliases: tuple[str, ...]) -> str | None:
    """Return the first non-blank value among the alias columns."""
    for name in aliases:
        value = row.get(name)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    return None


def _number(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _reader(csv_text: str) -> csv.DictReader:
    return csv.DictReader(io.StringIO(csv_text.lstrip("\ufeff")))


# ======================================================================
# Climate import
# ======================================================================

def parse_climate_rows(csv_text: str) -> tuple[list[ClimateImportRow], int]:
    """Parse climate CSV text into rows.

    Returns ``(rows, rejected)``. A row is rejected when it has no region
    name or its month is not an integer in 1-12. Missing or non-numeric
    irradiance defaults to 0 (negative values are clamped to 0); missing
    temperature defaults to 25 degC.
    """
    rows: list[ClimateImportRow] = []
    rejected = 0

    for line_no, raw in enumerate(_reader(csv_text), start=2):
        region = _cell(raw, CLIMATE_COLUMNS["region"])
        month = _number(_cell(raw, CLIMATE_COLUMNS["month"]))
        if not region or month is None or not month.is_integer() or not 1 <= month <= MONTHS_PER_YEAR:
            logger.debug("Skipping climate row %d: region=%r month=%r", line_no, region, month)
            rejected += 1
            continue

        latitude = _number(_cell(raw, CLIMATE_COLUMNS["latitude"]))
        if latitude is not None and not -90.0 <= latitude <= 90.0:
            latitude = None
        ghi = _number(_cell(raw, CLIMATE_COLUMNS["daily_irradiance"]))
        temp = _number(_cell(raw, CLIMATE_COLUMNS["ambient_temp"]))

        rows.append(
            ClimateImportRow(
                region=region,
                latitude=latitude,
                month=int(month),
                daily_irradiance=max(0.0, ghi) if ghi is not None else DEFAULT_DAILY_IRRADIANCE,
                ambient_temp=temp if temp is not None else DEFAULT_AMBIENT_TEMP,
            )
        )

    return rows, rejected


def merge_climate_rows(
    dataset: Mapping[str, ClimateRecord],
    rows: list[ClimateImportRow],
) -> dict[str, ClimateRecord]:
    """Merge rows into a copy of ``dataset`` keyed by (region, month).

    Later rows overwrite earlier values for the same key. A region not yet
    in the dataset starts from 12 default months, with the latitude of its
    first row (10.0 if that row has none). Existing regions keep their
    latitude. The input mapping is not modified.
    """
    merged = dict(dataset)
    for row in rows:
        record = merged.get(row.region)
        if record is None:
            record = ClimateRecord.empty(
                row.latitude if row.latitude is not None else DEFAULT_LATITUDE
            )
        merged[row.region] = record.with_month(
            row.month - 1, MonthlyClimate(row.daily_irradiance, row.ambient_temp)
        )
    return merged


def import_climate_csv(
    dataset: Mapping[str, ClimateRecord],
    csv_text: str,
) -> tuple[dict[str, ClimateRecord], ImportReport]:
    """Parse and merge climate CSV text. Returns the new dataset and a report."""
    rows, rejected = parse_climate_rows(csv_text)
    merged = merge_climate_rows(dataset, rows)
    report = ImportReport(
        accepted=len(rows),
        rejected=rejected,
        regions=sorted({r.region for r in rows}),
    )
    logger.info(
        "Climate import: %d rows accepted, %d rejected, %d regions touched",
        report.accepted, report.rejected, len(report.regions),
    )
    return merged, report


# ======================================================================
# Actual production import
# ======================================================================

def parse_actual_rows(csv_text: str) -> tuple[list[ActualProductionRow], int]:
    """Parse measured monthly production.

    Rows without a month label, energy or irradiation are rejected.
    Missing temperature defaults to 25 degC.
    """
    rows: list[ActualProductionRow] = []
    rejected = 0

    for line_no, raw in enumerate(_reader(csv_text), start=2):
        month = _cell(raw, ACTUAL_COLUMNS["month"])
        energy = _number(_cell(raw, ACTUAL_COLUMNS["actual_energy_kwh"]))
        irradiation = _number(_cell(raw, ACTUAL_COLUMNS["actual_irradiance_kwh_m2"]))
        if not month or energy is None or irradiation is None:
            logger.debug("Skipping actual-data row %d", line_no)
            rejected += 1
            continue

        temp = _number(_cell(raw, ACTUAL_COLUMNS["avg_ambient_temp"]))
        rows.append(
            ActualProductionRow(
                month=month,
                actual_energy_kwh=energy,
                actual_irradiance_kwh_m2=irradiation,
                avg_ambient_temp=temp if temp is not None else DEFAULT_AMBIENT_TEMP,
            )
        )

    logger.info("Actual-data import: %d rows accepted, %d rejected", len(rows), rejected)
    return rows, rejected


# ======================================================================
# Sample templates
# ======================================================================

def climate_template_csv() -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(["region", "latitude", "month", "daily_irradiance", "ambient_temp"])
    writer.writerow(["Hồ Chí Minh", 10.8, 1, 5.2, 27])
    writer.writerow(["Hồ Chí Minh", 10.8, 2, 5.8, 28])
    return buf.getvalue()


def actual_template_csv() -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(
        ["month", "actual_energy_kwh", "actual_irradiance_kwh_m2", "avg_ambient_temp"]
    )
    writer.writerows([["M1", 5000, 150, 27], ["M2", 5500, 160, 28], ["M3", 6000, 180, 29]])
    return buf.getvalue()
