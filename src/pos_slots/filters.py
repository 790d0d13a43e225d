"""Slicing helpers: date range, store, day and pagination.

The date-range filter works on canonical records and runs before grouping.
The store/day filters and pagination select which part of the already
grouped result a view shows.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Union

import pandas as pd

from pos_slots.cleaning_utils import to_date
from pos_slots.config import DEFAULT_PAGE_SIZE, WEEKDAYS
from pos_slots.exceptions import ConfigError
from pos_slots.records import CanonicalRecord, GroupedRecord, Page

logger = logging.getLogger(__name__)

DateBound = Union[str, date, datetime, None]


def _parse_bound(value: DateBound, name: str) -> Optional[pd.Timestamp]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    ts = to_date(value)
    if pd.isna(ts):
        raise ConfigError(f"Invalid {name} date: {value!r}")
    return ts.normalize()


def filter_by_date_range(
    records: Iterable[CanonicalRecord],
    date_from: DateBound = None,
    date_to: DateBound = None,
) -> List[CanonicalRecord]:
    """Keep records dated within [date_from, date_to], both inclusive.

    An empty bound means unbounded on that side. Records whose date does not
    parse are dropped whenever at least one bound is active, kept otherwise.

    Args:
        records: Canonical records.
        date_from: Lower bound (str, date, or empty).
        date_to: Upper bound (str, date, or empty).

    Returns:
        Records in range, in input order.

    Raises:
        ConfigError: If a non-empty bound cannot be parsed.
    """
    start = _parse_bound(date_from, "from")
    end = _parse_bound(date_to, "to")
    records = list(records)
    if start is None and end is None:
        return records

    kept: List[CanonicalRecord] = []
    for record in records:
        ts = to_date(record.date)
        if pd.isna(ts):
            continue
        ts = ts.normalize()
        if start is not None and ts < start:
            continue
        if end is not None and ts > end:
            continue
        kept.append(record)

    logger.debug(
        "Date range %s to %s kept %d of %d record(s)",
        start.date() if start is not None else "-",
        end.date() if end is not None else "-",
        len(kept),
        len(records),
    )
    return kept


def filter_by_store(groups: Iterable[GroupedRecord], store: Optional[str]) -> List[GroupedRecord]:
    """Keep groups whose StoreName equals ``store``; empty keeps all."""
    if not store:
        return list(groups)
    return [g for g in groups if g.store_name == store]


def filter_by_day(groups: Iterable[GroupedRecord], day: Optional[str]) -> List[GroupedRecord]:
    """Keep groups for ``day``; empty keeps all."""
    if not day:
        return list(groups)
    return [g for g in groups if g.day == day]


def paginate(
    groups: Sequence[GroupedRecord],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page:
    """Return one page of ``groups``.

    Pages are 1-based. ``page`` is clamped to [1, total_pages]; an empty
    slice has a single empty page.

    Raises:
        ConfigError: If ``page_size`` is not positive.
    """
    if page_size < 1:
        raise ConfigError(f"page_size must be positive, got {page_size}")
    total = len(groups)
    total_pages = max(1, math.ceil(total / page_size))
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return Page(
        items=tuple(groups[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_items=total,
        total_pages=total_pages,
    )


def unique_store_names(groups: Iterable[GroupedRecord]) -> List[str]:
    return sorted({g.store_name for g in groups})


def unique_store_codes(groups: Iterable[GroupedRecord]) -> List[str]:
    return sorted({g.store_code for g in groups})


def unique_days(groups: Iterable[GroupedRecord]) -> List[str]:
    """Distinct days, Monday to Sunday; unrecognised names last, alphabetically."""
    days = {g.day for g in groups}
    order = {d: i for i, d in enumerate(WEEKDAYS)}
    return sorted(days, key=lambda d: (order.get(d, len(WEEKDAYS)), d))
