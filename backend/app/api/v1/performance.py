import logging

from fastapi import APIRouter, Depends, Query, UploadFile
from fastapi.responses import PlainTextResponse

from app.api.v1.climate import decode_upload
from app.api.v1.yield_calc import get_region_record
from app.schemas.performance import PerformanceAnalysisResponse, PerformanceSimulationRequest
from app.schemas.yield_calc import (
    PerformanceSummaryResponse,
    YieldEntryResponse,
    finite_or_none,
)
from app.services.climate_store import ClimateStore, get_climate_store
from engine.climate.tabular import actual_template_csv, parse_actual_rows
from engine.performance.iec61724 import relative_performance, summarize
from engine.simulation.yield_engine import actual_series, run_monthly
from engine.solar.panel import PanelParameters

logger = logging.getLogger(__name__)

router = APIRouter()

# Fixed thermal parameters of the IEC 61724 comparison.
ANALYSIS_TEMP_COEFF = 0.0045
ANALYSIS_NOCT = 45.0


@router.post(
    "/performance/simulation",
    response_model=PerformanceAnalysisResponse,
    summary="Simulated IEC 61724 indicators",
    description="Monthly Yr, Yf, PR and CUF from the thermal model for a region.",
)
async def simulated_performance(
    body: PerformanceSimulationRequest,
    store: ClimateStore = Depends(get_climate_store),
):
    record = get_region_record(store, body.region)
    panel = body.panel.to_panel()
    capacity = body.capacity_kwp or panel.nominal_capacity_kwp
    result = run_monthly(record, panel, capacity)
    logger.info(
        "Simulated performance for %s: %.1f kWh", body.region, result.total_energy,
        extra={"region": body.region},
    )
    return PerformanceAnalysisResponse(
        source="simulation",
        capacity_kwp=capacity,
        series=[YieldEntryResponse.from_entry(e) for e in result.series],
        summary=PerformanceSummaryResponse.from_summary(summarize(result.series, capacity)),
    )


@router.post(
    "/performance/actual",
    response_model=PerformanceAnalysisResponse,
    summary="Actual production IEC 61724 indicators",
    description=(
        "Upload a CSV of monthly measured energy and irradiation. If a region is "
        "given, each month is also compared to the simulated energy."
    ),
)
async def actual_performance(
    file: UploadFile,
    area: float = Query(default=250_000.0, gt=0),
    efficiency: float = Query(default=0.18, gt=0, le=1),
    capacity_kwp: float | None = Query(default=None, gt=0),
    region: str | None = Query(default=None),
    store: ClimateStore = Depends(get_climate_store),
):
    rows, rejected = parse_actual_rows(decode_upload(await file.read()))
    panel = PanelParameters(
        area=area, efficiency=efficiency, temp_coeff=ANALYSIS_TEMP_COEFF, noct=ANALYSIS_NOCT
    )
    capacity = capacity_kwp or panel.nominal_capacity_kwp
    series = actual_series(rows, capacity)

    relative = None
    unmatched = None
    if region is not None:
        simulated = run_monthly(get_region_record(store, region), panel, capacity)
        comparison = relative_performance(series, simulated.series)
        relative = {label: finite_or_none(pct) for label, pct in comparison.ratios.items()}
        unmatched = list(comparison.unmatched)
        logger.info(
            "Compared %d actual months with simulation for %s (%d unmatched)",
            comparison.compared, region, len(unmatched),
            extra={"region": region},
        )
        if unmatched:
            logger.warning("Actual months with no simulated counterpart: %s", ", ".join(unmatched))

    return PerformanceAnalysisResponse(
        source="actual",
        capacity_kwp=capacity,
        series=[YieldEntryResponse.from_entry(e) for e in series],
        summary=PerformanceSummaryResponse.from_summary(summarize(series, capacity)),
        rejected_rows=rejected,
        relative_to_simulation=relative,
        unmatched_months=unmatched,
    )


@router.get(
    "/performance/template",
    response_class=PlainTextResponse,
    summary="Actual data import template",
)
async def performance_template():
    return PlainTextResponse(
        actual_template_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="actual_data_template.csv"'},
    )
