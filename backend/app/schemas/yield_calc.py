import math

from pydantic import BaseModel, Field

from app.config import settings
from engine.performance.iec61724 import PerformanceSummary, YieldSeriesEntry
from engine.simulation.yield_engine import CalculationResult, HourlySample
from engine.solar.geometry import SolarGeometry
from engine.solar.panel import PanelParameters


def finite_or_none(value: float | None) -> float | None:
    """Map nan/inf to None ("not computable") for JSON output."""
    if value is None or not math.isfinite(value):
        return None
    return value


class PanelParametersSchema(BaseModel):
    area: float = Field(default=settings.default_area, gt=0, allow_inf_nan=False, description="m²")
    efficiency: float = Field(default=settings.default_efficiency, gt=0, le=1)
    temp_coeff: float = Field(
        default=settings.default_temp_coeff, ge=0, allow_inf_nan=False, description="1/°C"
    )
    noct: float = Field(default=settings.default_noct, allow_inf_nan=False, description="°C")
    performance_ratio: float = Field(default=settings.default_performance_ratio, gt=0, le=1)

    def to_panel(self) -> PanelParameters:
        return PanelParameters(**self.model_dump())


# ── Requests ──────────────────────────────────────────────────


class HourlyYieldRequest(BaseModel):
    """Either a stored ``region`` + ``month`` or explicit climate inputs.

    Explicit values override the ones taken from the region.
    """

    panel: PanelParametersSchema = Field(default_factory=PanelParametersSchema)
    region: str | None = None
    month: int | None = Field(default=None, ge=1, le=12)
    daily_irradiance: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    ambient_temp: float | None = Field(default=None, allow_inf_nan=False)
    latitude: float | None = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    day_of_year: int | None = Field(default=None, ge=1, le=365)


class RegionYieldRequest(BaseModel):
    region: str
    panel: PanelParametersSchema = Field(default_factory=PanelParametersSchema)
    capacity_kwp: float | None = Field(
        default=None, gt=0, description="Nominal capacity; defaults to area × efficiency"
    )


# ── Responses ─────────────────────────────────────────────────


class SolarGeometryResponse(BaseModel):
    declination_deg: float
    sunset_hour_angle_rad: float
    sunset_hour_angle_deg: float
    latitude_rad: float
    declination_rad: float
    cos_sunset_arg: float

    @classmethod
    def from_geometry(cls, geometry: SolarGeometry) -> "SolarGeometryResponse":
        return cls(**vars(geometry))


class HourlySampleResponse(BaseModel):
    hour_label: str
    irradiance: float
    cell_temp: float
    energy: float

    @classmethod
    def from_sample(cls, sample: HourlySample) -> "HourlySampleResponse":
        return cls(**vars(sample))


class YieldEntryResponse(BaseModel):
    label: str
    energy: float
    reference_yield: float | None
    final_yield: float | None
    performance_ratio: float | None = Field(description="%, null when not computable")
    irradiation: float | None = None
    ambient_temp: float | None = None
    avg_cell_temp: float | None = None
    avg_irradiance: float | None = None

    @classmethod
    def from_entry(cls, entry: YieldSeriesEntry) -> "YieldEntryResponse":
        return cls(**{k: finite_or_none(v) if isinstance(v, float) else v for k, v in vars(entry).items()})


class PerformanceSummaryResponse(BaseModel):
    has_data: bool
    total_energy: float
    avg_performance_ratio: float | None
    avg_final_yield: float | None
    avg_reference_yield: float | None
    capacity_utilization_factor: float | None
    periods: int
    valid_periods: int

    @classmethod
    def from_summary(cls, summary: PerformanceSummary) -> "PerformanceSummaryResponse":
        return cls(
            has_data=summary.has_data,
            total_energy=summary.total_energy,
            avg_performance_ratio=finite_or_none(summary.avg_performance_ratio),
            avg_final_yield=finite_or_none(summary.avg_final_yield),
            avg_reference_yield=finite_or_none(summary.avg_reference_yield),
            capacity_utilization_factor=finite_or_none(summary.capacity_utilization_factor),
            periods=summary.periods,
            valid_periods=summary.valid_periods,
        )


class HourlyCalculationResponse(BaseModel):
    mode: str = "hourly"
    total_energy: float
    series: list[HourlySampleResponse]
    geometry: SolarGeometryResponse
    day_of_year: int

    @classmethod
    def from_result(cls, result: CalculationResult, day_of_year: int) -> "HourlyCalculationResponse":
        return cls(
            mode=result.mode.value,
            total_energy=result.total_energy,
            series=[HourlySampleResponse.from_sample(s) for s in result.series],
            geometry=SolarGeometryResponse.from_geometry(result.geometry),
            day_of_year=day_of_year,
        )


class MonthlyCalculationResponse(BaseModel):
    mode: str = "monthly"
    model: str = Field(description="'thermal' (Liu & Jordan + NOCT) or 'pr'")
    region: str
    total_energy: float
    capacity_kwp: float
    annual_irradiance: float
    series: list[YieldEntryResponse]
    summary: PerformanceSummaryResponse
