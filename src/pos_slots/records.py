"""Record and result types for the slot aggregation pipeline.

Attributes are snake_case; ``to_dict()`` emits the field names the dashboard
consumes (``StoreName``, ``AvgAmount``, ``totalRecords``, ...), so any result
can be passed straight to ``json.dumps``.

Grain Reference:
    - CanonicalRecord: one validated POS row (store x date x hour)
    - GroupedRecord: store code x day-of-week x hour, averaged over dates
    - DayHourGrid: day-of-week x hour, averaged over stores
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

# Untrusted input row: keys StoreName, StoreCode, Amount, Hour, Day, Date with
# values of any type. Only the validator may read one.
RawRecord = Mapping[str, Any]

GroupKey = Tuple[str, str, int]


@dataclass(frozen=True)
class CanonicalRecord:
    """A validated POS row.

    Attributes:
        store_name: Display name, falls back to store_code when blank.
        store_code: Non-empty store identifier.
        amount: Sales amount, always >= 0.
        hour: Hour of day, 0-23.
        day: Day-of-week label (not checked against the weekday names).
        date: Trimmed date string as supplied; guaranteed to parse.
    """

    store_name: str
    store_code: str
    amount: float
    hour: int
    day: str
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "StoreName": self.store_name,
            "StoreCode": self.store_code,
            "Amount": self.amount,
            "Hour": self.hour,
            "Day": self.day,
            "Date": self.date,
        }


@dataclass(frozen=True)
class GroupedRecord:
    """Average amount for one (store code, day, hour) group.

    Attributes:
        store_name: Name taken from the first record seen for the group.
        store_code: Store identifier.
        day: Day-of-week label.
        hour: Hour of day.
        avg_amount: Mean amount, rounded half-away to 2 decimals.
        data_points: Number of canonical records averaged (>= 1).
    """

    store_name: str
    store_code: str
    day: str
    hour: int
    avg_amount: float
    data_points: int

    @property
    def key(self) -> GroupKey:
        return (self.store_code, self.day, self.hour)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "StoreName": self.store_name,
            "StoreCode": self.store_code,
            "Day": self.day,
            "Hour": self.hour,
            "AvgAmount": self.avg_amount,
            "DataPoints": self.data_points,
        }


@dataclass(frozen=True)
class ChartSeries:
    """Parallel label/value arrays for one chart."""

    labels: Tuple[str, ...]
    values: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.values):
            raise ValueError(
                f"labels and values differ in length: {len(self.labels)} != {len(self.values)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {"labels": list(self.labels), "values": list(self.values)}


@dataclass(frozen=True)
class DayHourGrid:
    """Day x hour matrix of averages.

    ``grid`` has one entry per ``"{day}_{hour}"`` for every day in ``day_order``
    and every hour in ``hours``. A value of None means no group contributed to
    the cell, which is distinct from an average of 0.
    """

    grid: Dict[str, Optional[float]]
    day_order: Tuple[str, ...]
    hours: Tuple[int, ...]

    def cell(self, day: str, hour: int) -> Optional[float]:
        return self.grid[f"{day}_{hour}"]

    def value_bounds(self) -> Tuple[float, float]:
        """Return (min, max) over cells with a positive value, (0, 0) if none."""
        values = [v for v in self.grid.values() if v is not None and v > 0]
        if not values:
            return (0.0, 0.0)
        return (min(values), max(values))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": dict(self.grid),
            "dayOrder": list(self.day_order),
            "hours": list(self.hours),
        }


@dataclass(frozen=True)
class StatsSummary:
    """Summary of the grouped slice currently in view."""

    total_records: int
    avg_amount: str
    min_amount: str
    max_amount: str
    lowest_slot: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRecords": self.total_records,
            "avgAmount": self.avg_amount,
            "minAmount": self.min_amount,
            "maxAmount": self.max_amount,
            "lowestSlot": self.lowest_slot,
        }


@dataclass
class ValidationResult:
    """Outcome of validating a batch of raw rows."""

    records: List[CanonicalRecord]
    valid_count: int
    invalid_count: int


@dataclass
class ProcessingStats:
    """Row counts reported by one pipeline run.

    Attributes:
        total_raw_rows: Rows received from the source.
        valid_rows: Rows that passed validation.
        invalid_rows: Rows rejected by validation.
        closed_rows_removed: Valid rows dropped as store-closed hours.
        date_filtered_out: Rows dropped by the date range.
        unique_groups: Grouped records produced.
        stores: Distinct store codes among the valid rows.
    """

    total_raw_rows: int = 0
    valid_rows: int = 0
    invalid_rows: int = 0
    closed_rows_removed: int = 0
    date_filtered_out: int = 0
    unique_groups: int = 0
    stores: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalRawRows": self.total_raw_rows,
            "validRows": self.valid_rows,
            "invalidRows": self.invalid_rows,
            "closedRowsRemoved": self.closed_rows_removed,
            "dateFilteredOut": self.date_filtered_out,
            "uniqueGroups": self.unique_groups,
            "stores": self.stores,
        }


@dataclass
class ProcessResult:
    """Grouped records (sorted lowest first) plus the run's statistics."""

    processed: List[GroupedRecord]
    stats: ProcessingStats = field(default_factory=ProcessingStats)

    @property
    def is_empty(self) -> bool:
        return not self.processed


@dataclass(frozen=True)
class Page:
    """One page of a grouped, sorted slice (1-based)."""

    items: Tuple[GroupedRecord, ...]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def first_index(self) -> int:
        """0-based position of the first item in the full slice."""
        return (self.page - 1) * self.page_size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [r.to_dict() for r in self.items],
            "page": self.page,
            "pageSize": self.page_size,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
        }


@dataclass
class DashboardView:
    """Everything the dashboard renders for one filter selection."""

    rows: List[GroupedRecord]
    page: Page
    series: ChartSeries
    grid: DayHourGrid
    stats: Optional[StatsSummary]

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.page.to_dict(),
            "series": self.series.to_dict(),
            "grid": self.grid.to_dict(),
            "stats": self.stats.to_dict() if self.stats else None,
        }
