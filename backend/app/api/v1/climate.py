from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from fastapi.responses import PlainTextResponse

from app.config import settings
from app.schemas.climate import (
    ClimateImportResponse,
    ClimateListResponse,
    ClimateRecordResponse,
    ClimateRecordSchema,
)
from app.services.climate_store import ClimateStore, get_climate_store
from engine.climate.tabular import climate_template_csv

router = APIRouter()


def decode_upload(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File must be UTF-8 encoded CSV",
        )


@router.get(
    "/climate",
    response_model=ClimateListResponse,
    summary="List climate regions",
    description="Return the region names in the current climate snapshot and its version number.",
)
async def list_regions(store: ClimateStore = Depends(get_climate_store)):
    snap = store.snapshot()
    regions = list(snap.records.keys())
    default = settings.default_region if settings.default_region in snap.records else None
    return ClimateListResponse(version=snap.version, regions=regions, default_region=default)


@router.get(
    "/climate/template",
    response_class=PlainTextResponse,
    summary="Climate import template",
    description="Sample CSV with one row per (region, month).",
)
async def climate_template():
    return PlainTextResponse(
        climate_template_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="climate_template.csv"'},
    )


@router.post(
    "/climate/import",
    response_model=ClimateImportResponse,
    summary="Import climate CSV",
    description="Merge (region, month) rows into the climate data, overwriting existing months.",
)
async def import_climate(
    file: UploadFile,
    store: ClimateStore = Depends(get_climate_store),
):
    text = decode_upload(await file.read())
    snap, report = store.import_csv(text)
    return ClimateImportResponse(
        version=snap.version,
        accepted=report.accepted,
        rejected=report.rejected,
        regions=report.regions,
        total_regions=len(snap.records),
    )


@router.get(
    "/climate/{region}",
    response_model=ClimateRecordResponse,
    summary="Get climate record",
    description="Return the 12 monthly values for a region with yearly irradiation statistics.",
)
async def get_region(region: str, store: ClimateStore = Depends(get_climate_store)):
    snap = store.snapshot()
    record = snap.records.get(region)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Region not found")
    return ClimateRecordResponse.from_record(region, record, snap.version)


@router.put(
    "/climate/{region}",
    response_model=ClimateRecordResponse,
    summary="Create or replace climate record",
)
async def put_region(
    region: str,
    body: ClimateRecordSchema,
    store: ClimateStore = Depends(get_climate_store),
):
    record = body.to_record()
    snap = store.put(region, record)
    return ClimateRecordResponse.from_record(region, record, snap.version)


@router.delete(
    "/climate",
    response_model=ClimateListResponse,
    summary="Reset climate data",
    description="Discard imported and edited regions and restore the built-in data.",
)
async def reset_climate(store: ClimateStore = Depends(get_climate_store)):
    snap = store.reset()
    return ClimateListResponse(
        version=snap.version,
        regions=list(snap.records.keys()),
        default_region=settings.default_region if settings.default_region in snap.records else None,
    )
