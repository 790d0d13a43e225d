"""Aggregation pipeline and dashboard view.

Pipeline:
    1. Validate and clean raw rows
    2. Drop store-closed hours
    3. Restrict to the date range
    4. Group by StoreCode + Day + Hour and average
    5. Sort by lowest AvgAmount first

The view step slices the processed groups by store/day, re-sorts them, and
derives the chart series, grid, stats and table page from the same slice.
Every function here is pure: inputs are never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from pos_slots.aggregate import SortDirection, group_and_average, sort_by_average
from pos_slots.charts import BucketBy, build_series
from pos_slots.closed_hours import filter_closed_hours
from pos_slots.config import SlotsConfig
from pos_slots.filters import (
    DateBound,
    filter_by_date_range,
    filter_by_day,
    filter_by_store,
    paginate,
)
from pos_slots.grid import build_grid
from pos_slots.records import DashboardView, GroupedRecord, ProcessingStats, ProcessResult
from pos_slots.stats import calculate_stats
from pos_slots.validation import ensure_rows, validate_rows

logger = logging.getLogger(__name__)


@dataclass
class ViewFilters:
    """Selections made in the dashboard.

    Attributes:
        store: StoreName to show; empty shows all stores.
        day: Day to show; empty shows all days.
        sort: "lowest" or "highest" first.
        bucket_by: Chart buckets, "hour" or "day".
        page: 1-based table page.
    """

    store: str = ""
    day: str = ""
    sort: SortDirection = "lowest"
    bucket_by: BucketBy = "hour"
    page: int = 1


def process_records(
    raw: Iterable[Any],
    config: Optional[SlotsConfig] = None,
    date_from: DateBound = None,
    date_to: DateBound = None,
) -> ProcessResult:
    """Run raw rows through validation, filtering, grouping and sorting.

    Args:
        raw: Raw rows from a JSON file, spreadsheet or URL.
        config: Business rules; defaults to SlotsConfig().
        date_from: Inclusive lower date bound, empty for none.
        date_to: Inclusive upper date bound, empty for none.

    Returns:
        ProcessResult with groups sorted lowest AvgAmount first and the
        run's row counts. An empty result is reported via ``is_empty``.

    Raises:
        InvalidInputError: If ``raw`` is not a sequence of rows.
        ConfigError: If a date bound cannot be parsed.
    """
    config = config or SlotsConfig()
    rows = ensure_rows(raw)

    validation = validate_rows(rows)
    closed = filter_closed_hours(validation.records, config.closed_hours)
    in_range = filter_by_date_range(closed.kept, date_from, date_to)
    groups = sort_by_average(group_and_average(in_range), "lowest")

    stats = ProcessingStats(
        total_raw_rows=len(rows),
        valid_rows=validation.valid_count,
        invalid_rows=validation.invalid_count,
        closed_rows_removed=closed.removed_count,
        date_filtered_out=len(closed.kept) - len(in_range),
        unique_groups=len(groups),
        stores=len({r.store_code for r in validation.records}),
    )
    logger.info(
        "Processed %d raw row(s): %d valid, %d invalid, %d closed-hour, %d out of range -> %d group(s)",
        stats.total_raw_rows,
        stats.valid_rows,
        stats.invalid_rows,
        stats.closed_rows_removed,
        stats.date_filtered_out,
        stats.unique_groups,
    )
    if not groups:
        logger.warning("No data left after processing")
    return ProcessResult(processed=groups, stats=stats)


def select_rows(
    processed: Sequence[GroupedRecord],
    filters: ViewFilters,
) -> list[GroupedRecord]:
    """Store/day slice of ``processed``, sorted in the selected direction."""
    rows = filter_by_day(filter_by_store(processed, filters.store), filters.day)
    return sort_by_average(rows, filters.sort)


def build_view(
    processed: Sequence[GroupedRecord],
    filters: Optional[ViewFilters] = None,
    config: Optional[SlotsConfig] = None,
) -> DashboardView:
    """Derive everything the dashboard shows for one filter selection.

    Args:
        processed: Groups from ``process_records``.
        filters: Store/day/sort/chart/page selection.
        config: Excluded display hours and page size.

    Returns:
        DashboardView whose series, grid, stats and page all come from the
        same store/day slice.
    """
    filters = filters or ViewFilters()
    config = config or SlotsConfig()

    rows = select_rows(processed, filters)
    view = DashboardView(
        rows=rows,
        page=paginate(rows, filters.page, config.page_size),
        series=build_series(rows, filters.bucket_by, config.excluded_hours),
        grid=build_grid(rows, config.excluded_hours),
        stats=calculate_stats(rows),
    )
    logger.debug(
        "View store=%r day=%r sort=%s: %d row(s), page %d/%d",
        filters.store,
        filters.day,
        filters.sort,
        len(rows),
        view.page.page,
        view.page.total_pages,
    )
    return view
