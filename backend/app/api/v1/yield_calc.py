import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas.yield_calc import (
    HourlyCalculationResponse,
    HourlyYieldRequest,
    MonthlyCalculationResponse,
    PerformanceSummaryResponse,
    RegionYieldRequest,
    YieldEntryResponse,
)
from app.services.climate_store import ClimateStore, get_climate_store
from engine.climate.records import ClimateRecord, MonthlyClimate
from engine.performance.iec61724 import summarize
from engine.simulation.yield_engine import (
    CalculationResult,
    run_hourly,
    run_monthly,
    run_pr_proportional,
)
from engine.solar.geometry import representative_day

logger = logging.getLogger(__name__)

router = APIRouter()


def get_region_record(store: ClimateStore, region: str) -> ClimateRecord:
    record = store.get(region)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Region not found")
    return record


def _monthly_response(
    region: str,
    record: ClimateRecord,
    result: CalculationResult,
    capacity_kwp: float,
    model: str,
) -> MonthlyCalculationResponse:
    logger.info(
        "Yield (%s model) for %s: %.1f kWh", model, region, result.total_energy,
        extra={"region": region},
    )
    return MonthlyCalculationResponse(
        mode=result.mode.value,
        model=model,
        region=region,
        total_energy=result.total_energy,
        capacity_kwp=capacity_kwp,
        annual_irradiance=record.annual_irradiance,
        series=[YieldEntryResponse.from_entry(e) for e in result.series],
        summary=PerformanceSummaryResponse.from_summary(
            summarize(result.series, capacity_kwp)
        ),
    )


@router.post(
    "/yield/hourly",
    response_model=HourlyCalculationResponse,
    summary="Hourly yield for one day",
    description="Liu & Jordan hourly decomposition with NOCT derating for a single representative day.",
)
async def hourly_yield(
    body: HourlyYieldRequest,
    store: ClimateStore = Depends(get_climate_store),
):
    month = MonthlyClimate()
    latitude = None
    if body.region is not None:
        record = get_region_record(store, body.region)
        month = record.months[(body.month or 1) - 1]
        latitude = record.latitude

    latitude = body.latitude if body.latitude is not None else latitude
    if latitude is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide either 'region' or 'latitude'",
        )

    day_of_year = body.day_of_year or representative_day((body.month or 1) - 1)
    result = run_hourly(
        daily_irradiance=(
            body.daily_irradiance if body.daily_irradiance is not None else month.daily_irradiance
        ),
        ambient_temp=body.ambient_temp if body.ambient_temp is not None else month.ambient_temp,
        latitude=latitude,
        day_of_year=day_of_year,
        panel=body.panel.to_panel(),
    )
    return HourlyCalculationResponse.from_result(result, day_of_year)


@router.post(
    "/yield/monthly",
    response_model=MonthlyCalculationResponse,
    summary="Monthly and annual yield",
    description="Run the hourly thermal model on 12 representative days and scale each to 30 days.",
)
async def monthly_yield(
    body: RegionYieldRequest,
    store: ClimateStore = Depends(get_climate_store),
):
    record = get_region_record(store, body.region)
    panel = body.panel.to_panel()
    capacity = body.capacity_kwp or panel.nominal_capacity_kwp
    result = run_monthly(record, panel, capacity)
    return _monthly_response(body.region, record, result, capacity, "thermal")


@router.post(
    "/yield/pr",
    response_model=MonthlyCalculationResponse,
    summary="Performance-ratio model yield",
    description="E = PR × A × η × GHI applied to each month of the region's climate data.",
)
async def pr_yield(
    body: RegionYieldRequest,
    store: ClimateStore = Depends(get_climate_store),
):
    record = get_region_record(store, body.region)
    panel = body.panel.to_panel()
    capacity = body.capacity_kwp or panel.nominal_capacity_kwp
    result = run_pr_proportional(record, panel, capacity)
    return _monthly_response(body.region, record, result, capacity, "pr")
