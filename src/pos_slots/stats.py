"""Summary statistics for the grouped slice in view."""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from pos_slots.cleaning_utils import format_hour_range, format_money
from pos_slots.records import GroupedRecord, StatsSummary


def describe_slot(group: GroupedRecord) -> str:
    """Human label for a slot, e.g. ``'Clinton - Monday 9 AM - 10 AM'``."""
    return f"{group.store_name} - {group.day} {format_hour_range(group.hour, group.hour + 1)}"


def find_lowest(groups: Sequence[GroupedRecord]) -> Optional[GroupedRecord]:
    """Return the group with the minimum AvgAmount, first one on ties.

    Scans every group, so the input may be in any order.
    """
    lowest: Optional[GroupedRecord] = None
    for group in groups:
        if lowest is None or group.avg_amount < lowest.avg_amount:
            lowest = group
    return lowest


def calculate_stats(groups: Sequence[GroupedRecord]) -> Optional[StatsSummary]:
    """Count, mean, extrema and weakest slot of ``groups``.

    Returns:
        StatsSummary with 2-decimal strings, or None for an empty slice.

    Examples:
        >>> g = GroupedRecord("A", "A", "Monday", 9, 60.0, 2)
        >>> calculate_stats([g]).avg_amount
        '60.00'
    """
    if not groups:
        return None

    amounts = pd.Series([g.avg_amount for g in groups], dtype="float64")
    lowest = find_lowest(groups)

    return StatsSummary(
        total_records=len(groups),
        avg_amount=format_money(amounts.mean()),
        min_amount=format_money(amounts.min()),
        max_amount=format_money(amounts.max()),
        lowest_slot=describe_slot(lowest) if lowest else "-",
    )
