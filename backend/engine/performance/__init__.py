"""IEC 61724-1 performance indicators (Yr, Yf, PR, CUF) and the PR model."""

from .iec61724 import (
    PerformanceComparison,
    PerformanceSummary,
    YieldSeriesEntry,
    build_entry,
    capacity_utilization_factor,
    final_yield,
    month_number,
    performance_ratio,
    proportional_yield,
    reference_yield,
    relative_performance,
    summarize,
)

__all__ = [
    "PerformanceComparison",
    "PerformanceSummary",
    "YieldSeriesEntry",
    "build_entry",
    "capacity_utilization_factor",
    "final_yield",
    "month_number",
    "performance_ratio",
    "proportional_yield",
    "reference_yield",
    "relative_performance",
    "summarize",
]
