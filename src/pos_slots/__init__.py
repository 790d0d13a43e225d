"""POS Slots - find the weakest and strongest store/day/hour sales slots.

This package turns a flat array of point-of-sale rows into per-slot averages
and the views built on them:

- **Validation**: raw rows into canonical records, bad rows counted
- **Closed hours**: store-closed hours dropped before any average
- **Aggregation**: store x day x hour averages, sorted lowest first
- **Views**: chart series, day x hour grid, summary stats, table pages

Module Structure:
    pos_slots.validation: Row validator
    pos_slots.closed_hours: Closed-hours rules and filter
    pos_slots.filters: Date range, store/day slices, pagination
    pos_slots.aggregate: Grouping, averaging, sorting
    pos_slots.charts / grid / stats: Reducers over grouped records
    pos_slots.pipeline: End-to-end processing and dashboard view
    pos_slots.loaders: JSON/Excel/CSV/URL input

Quick Start:
    >>> from pos_slots import SlotsConfig, ViewFilters, build_view, process_records
    >>> from pos_slots.loaders import load_records
    >>>
    >>> raw = load_records("data.json")
    >>> result = process_records(raw, SlotsConfig(), "2024-01-01", "2024-01-28")
    >>> view = build_view(result.processed, ViewFilters(store="Clinton", sort="lowest"))
    >>> view.stats.lowest_slot
    'Clinton - Monday 9 PM - 10 PM'

Grain Reference:
    - CanonicalRecord: one validated row (store x date x hour)
    - GroupedRecord: store code x day-of-week x hour
    - DayHourGrid cell: day-of-week x hour, averaged over stores
"""

__version__ = "0.1.0"

from pos_slots.aggregate import group_and_average, merge_grouped, sort_by_average
from pos_slots.charts import build_series
from pos_slots.closed_hours import STORE_CLOSED_HOURS, filter_closed_hours
from pos_slots.config import SlotsConfig
from pos_slots.exceptions import (
    ConfigError,
    DataQualityError,
    InvalidInputError,
    LoadError,
    SlotsError,
)
from pos_slots.filters import filter_by_date_range, paginate
from pos_slots.grid import build_grid
from pos_slots.loaders import load_records
from pos_slots.pipeline import ViewFilters, build_view, process_records
from pos_slots.records import (
    CanonicalRecord,
    ChartSeries,
    DayHourGrid,
    GroupedRecord,
    StatsSummary,
)
from pos_slots.sample_data import generate_sample_data
from pos_slots.stats import calculate_stats
from pos_slots.validation import validate_row, validate_rows

__all__ = [
    "STORE_CLOSED_HOURS",
    "CanonicalRecord",
    "ChartSeries",
    "ConfigError",
    "DataQualityError",
    "DayHourGrid",
    "GroupedRecord",
    "InvalidInputError",
    "LoadError",
    "SlotsConfig",
    "SlotsError",
    "StatsSummary",
    "ViewFilters",
    "__version__",
    "build_grid",
    "build_series",
    "build_view",
    "calculate_stats",
    "filter_by_date_range",
    "filter_closed_hours",
    "generate_sample_data",
    "group_and_average",
    "load_records",
    "merge_grouped",
    "paginate",
    "process_records",
    "sort_by_average",
    "validate_row",
    "validate_rows",
]
