"""Analysis modules for FireHistory."""

from .years import YearIndex, EmptyYearIndexError, year_label
from .aggregate import (
    AGGREGATED_TYPES,
    YearBucket,
    aggregate_by_year,
    year_summary_frame,
    year_caption,
)
from .filters import FilterRules, DEFAULT_RULES, filter_fires_for_year, is_displayed
from .size_class import (
    SizeClass,
    SIZE_CLASS_TABLE,
    classify_acres,
    marker_size,
    legend_entries,
)

__all__ = [
    "YearIndex",
    "EmptyYearIndexError",
    "year_label",
    "AGGREGATED_TYPES",
    "YearBucket",
    "aggregate_by_year",
    "year_summary_frame",
    "year_caption",
    "FilterRules",
    "DEFAULT_RULES",
    "filter_fires_for_year",
    "is_displayed",
    "SizeClass",
    "SIZE_CLASS_TABLE",
    "classify_acres",
    "marker_size",
    "legend_entries",
]
