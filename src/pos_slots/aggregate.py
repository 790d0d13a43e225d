"""Group canonical records by store, day and hour, and sort the result.

Grouping logic:
    All records sharing (StoreCode, Day, Hour) form one group, e.g. every
    Monday 9 AM sale of store A across the weeks loaded. The group's
    average is sum(Amount) / count, rounded once to 2 decimals, so with four
    weeks of data each group is effectively a 4-week average.

    The first record seen for a key supplies StoreName; later records only
    add to the sum and count.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Literal

import pandas as pd

from pos_slots.cleaning_utils import round_half_away
from pos_slots.records import CanonicalRecord, GroupedRecord, GroupKey

logger = logging.getLogger(__name__)

SortDirection = Literal["lowest", "highest"]

GROUP_KEYS = ["store_code", "day", "hour"]


def group_and_average(records: Iterable[CanonicalRecord]) -> List[GroupedRecord]:
    """Group records by (store code, day, hour) and average their amounts.

    Args:
        records: Canonical records (closed hours and date range already
            applied).

    Returns:
        One GroupedRecord per key that has at least one record, in order of
        each key's first appearance.

    Examples:
        >>> recs = [CanonicalRecord("S1", "S1", a, 9, "Monday", "2024-01-01")
        ...         for a in (10, 20, 30)]
        >>> [(g.avg_amount, g.data_points) for g in group_and_average(recs)]
        [(20.0, 3)]
    """
    df = pd.DataFrame(
        [
            {
                "store_name": r.store_name,
                "store_code": r.store_code,
                "day": r.day,
                "hour": r.hour,
                "amount": r.amount,
            }
            for r in records
        ],
        columns=["store_name", "store_code", "day", "hour", "amount"],
    )
    if df.empty:
        return []

    agg = (
        df.groupby(GROUP_KEYS, sort=False)
        .agg(
            store_name=("store_name", "first"),
            total=("amount", "sum"),
            data_points=("amount", "size"),
        )
        .reset_index()
    )

    groups = [
        GroupedRecord(
            store_name=str(row.store_name),
            store_code=str(row.store_code),
            day=str(row.day),
            hour=int(row.hour),
            avg_amount=round_half_away(row.total / row.data_points, 2),
            data_points=int(row.data_points),
        )
        for row in agg.itertuples(index=False)
    ]
    logger.debug("Grouped %d record(s) into %d group(s)", len(df), len(groups))
    return groups


def sort_by_average(
    groups: Iterable[GroupedRecord],
    direction: SortDirection = "lowest",
) -> List[GroupedRecord]:
    """Sort groups by AvgAmount.

    "lowest" puts the weakest slots first, "highest" the strongest. The
    sort is stable: groups with equal averages keep their input order in
    both directions. The input is not modified.

    Raises:
        ValueError: If ``direction`` is not "lowest" or "highest".
    """
    if direction not in ("lowest", "highest"):
        raise ValueError(f"direction must be 'lowest' or 'highest', got {direction!r}")
    return sorted(groups, key=lambda g: g.avg_amount, reverse=(direction == "highest"))


def merge_grouped(
    existing: Iterable[GroupedRecord],
    new: Iterable[GroupedRecord],
) -> List[GroupedRecord]:
    """Merge two grouped results without overwriting existing entries.

    Groups are keyed on (StoreCode, Day, Hour). When a key exists in both,
    the existing group is kept and the new one ignored.

    Returns:
        Merged groups sorted lowest AvgAmount first.
    """
    merged: Dict[GroupKey, GroupedRecord] = {}
    for group in existing:
        merged[group.key] = group
    for group in new:
        merged.setdefault(group.key, group)
    return sort_by_average(merged.values(), "lowest")
