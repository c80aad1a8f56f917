"""Shared test fixtures for SolarYield engine and API tests."""

from __future__ import annotations

import pytest

from engine.climate.records import DEFAULT_REGIONAL_DATA, ClimateRecord, MonthlyClimate
from engine.solar.panel import PanelParameters


# ======================================================================
# Climate fixtures
# ======================================================================

@pytest.fixture
def hcm_record() -> ClimateRecord:
    """Built-in Ho Chi Minh City climatology (lat 10.8, Jan GHI 5.2, 27 °C)."""
    return DEFAULT_REGIONAL_DATA["Hồ Chí Minh"]


@pytest.fixture
def flat_record() -> ClimateRecord:
    """Constant 5.2 kWh/m²/day and 27 °C every month (annual GHI 1872 kWh/m²)."""
    return ClimateRecord(
        latitude=10.8,
        months=tuple(MonthlyClimate(5.2, 27.0) for _ in range(12)),
    )


@pytest.fixture
def record_with_dark_month(hcm_record: ClimateRecord) -> ClimateRecord:
    """HCM climatology with March set to zero irradiance."""
    return hcm_record.with_month(2, MonthlyClimate(0.0, 25.0))


# ======================================================================
# Panel fixtures
# ======================================================================

@pytest.fixture
def sample_panel() -> PanelParameters:
    """100 m² array, 18 % efficiency, -0.45 %/°C, NOCT 45 °C, PR 0.8."""
    return PanelParameters(
        area=100.0,
        efficiency=0.18,
        temp_coeff=0.0045,
        noct=45.0,
        performance_ratio=0.8,
    )
