"""Climate data module (monthly records, CSV import)."""

from .records import DEFAULT_REGIONAL_DATA, ClimateRecord, MonthlyClimate
from .tabular import (
    ActualProductionRow,
    ClimateImportRow,
    ImportReport,
    actual_template_csv,
    climate_template_csv,
    import_climate_csv,
    merge_climate_rows,
    parse_actual_rows,
    parse_climate_rows,
)

__all__ = [
    "DEFAULT_REGIONAL_DATA",
    "ClimateRecord",
    "MonthlyClimate",
    "ActualProductionRow",
    "ClimateImportRow",
    "ImportReport",
    "actual_template_csv",
    "climate_template_csv",
    "import_climate_csv",
    "merge_climate_rows",
    "parse_actual_rows",
    "parse_climate_rows",
]
