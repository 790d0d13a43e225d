"""Chart series: grouped results reduced by hour of day or day of week."""

from __future__ import annotations

import logging
from typing import Iterable, Literal

import pandas as pd

from pos_slots.cleaning_utils import round_half_away
from pos_slots.config import DEFAULT_EXCLUDED_HOURS, WEEKDAYS, display_hours
from pos_slots.records import ChartSeries, GroupedRecord

logger = logging.getLogger(__name__)

BucketBy = Literal["hour", "day"]


def hour_label(hour: int) -> str:
    """Chart label for an hour bucket, e.g. ``'9 - 10'``."""
    return f"{hour} - {hour + 1}"


def _bucket_means(groups: Iterable[GroupedRecord], by: str, buckets: tuple) -> list[float]:
    df = pd.DataFrame(
        [{"hour": g.hour, "day": g.day, "avg_amount": g.avg_amount} for g in groups],
        columns=["hour", "day", "avg_amount"],
    )
    df["avg_amount"] = df["avg_amount"].astype("float64")
    df = df[df[by].isin(buckets)]
    # reindex leaves empty buckets as NaN; they are reported as 0
    means = df.groupby(by)["avg_amount"].mean().reindex(list(buckets)).fillna(0.0)
    return [round_half_away(v, 2) for v in means.tolist()]


def build_series(
    groups: Iterable[GroupedRecord],
    bucket_by: BucketBy = "hour",
    excluded_hours: Iterable[int] = DEFAULT_EXCLUDED_HOURS,
) -> ChartSeries:
    """Average AvgAmount per hour-of-day or per day-of-week bucket.

    Hour buckets cover 0-23 minus ``excluded_hours``, ascending, labelled
    ``"H - H+1"``; groups at an excluded hour are skipped. Day buckets are
    Monday to Sunday; groups with any other day label are skipped. A bucket
    with no contributing group has value 0.

    Args:
        groups: Grouped records in view.
        bucket_by: "hour" or "day".
        excluded_hours: Hours hidden from the hour series.

    Returns:
        ChartSeries with one label/value per bucket.

    Raises:
        ValueError: If ``bucket_by`` is not "hour" or "day".
    """
    if bucket_by == "hour":
        hours = display_hours(excluded_hours)
        values = _bucket_means(groups, "hour", hours)
        return ChartSeries(labels=tuple(hour_label(h) for h in hours), values=tuple(values))
    if bucket_by == "day":
        values = _bucket_means(groups, "day", WEEKDAYS)
        return ChartSeries(labels=WEEKDAYS, values=tuple(values))
    raise ValueError(f"bucket_by must be 'hour' or 'day', got {bucket_by!r}")
