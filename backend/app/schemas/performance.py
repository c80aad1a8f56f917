from pydantic import BaseModel, Field

from app.schemas.yield_calc import (
    PanelParametersSchema,
    PerformanceSummaryResponse,
    YieldEntryResponse,
)


class PerformanceSimulationRequest(BaseModel):
    region: str
    panel: PanelParametersSchema = Field(default_factory=PanelParametersSchema)
    capacity_kwp: float | None = Field(default=None, gt=0)


class PerformanceAnalysisResponse(BaseModel):
    source: str = Field(description="'simulation' or 'actual'")
    capacity_kwp: float
    series: list[YieldEntryResponse]
    summary: PerformanceSummaryResponse
    rejected_rows: int = 0
    relative_to_simulation: dict[str, float | None] | None = Field(
        default=None, description="Actual / simulated energy per month (%)"
    )
    unmatched_months: list[str] | None = Field(
        default=None, description="Actual month labels with no simulated month to compare against"
    )
