from pydantic import BaseModel, Field

from engine.climate.records import ClimateRecord, MonthlyClimate


class MonthlyClimateSchema(BaseModel):
    daily_irradiance: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="kWh/m²/day"
    )
    ambient_temp: float = Field(default=25.0, allow_inf_nan=False, description="°C")


class ClimateRecordSchema(BaseModel):
    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    months: list[MonthlyClimateSchema] = Field(min_length=12, max_length=12)

    def to_record(self) -> ClimateRecord:
        return ClimateRecord(
            latitude=self.latitude,
            months=tuple(
                MonthlyClimate(m.daily_irradiance, m.ambient_temp) for m in self.months
            ),
        )


class ClimateRecordResponse(ClimateRecordSchema):
    region: str
    version: int
    annual_irradiance: float = Field(description="Σ daily GHI × 30 (kWh/m²)")
    average_daily_irradiance: float
    average_temperature: float

    @classmethod
    def from_record(cls, region: str, record: ClimateRecord, version: int) -> "ClimateRecordResponse":
        return cls(
            region=region,
            version=version,
            latitude=record.latitude,
            months=[
                MonthlyClimateSchema(
                    daily_irradiance=m.daily_irradiance, ambient_temp=m.ambient_temp
                )
                for m in record.months
            ],
            annual_irradiance=record.annual_irradiance,
            average_daily_irradiance=record.average_daily_irradiance,
            average_temperature=record.average_temperature,
        )


class ClimateListResponse(BaseModel):
    version: int
    regions: list[str]
    default_region: str | None


class ClimateImportResponse(BaseModel):
    version: int
    accepted: int
    rejected: int
    regions: list[str]
    total_regions: int
