"""Day x hour grid of averages for the heatmap view.

Only groups that exist contribute to a cell. When no store has data for a
day+hour the cell is None (shown as a dash), not 0, so missing hours never
pollute averages.

Each cell is the mean of the groups' AvgAmount values: when several stores
share a cell this is an average of per-store averages, not of raw amounts.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

import pandas as pd

from pos_slots.cleaning_utils import round_half_away
from pos_slots.config import DEFAULT_EXCLUDED_HOURS, GRID_DAYS, display_hours
from pos_slots.records import DayHourGrid, GroupedRecord


def cell_key(day: str, hour: int) -> str:
    return f"{day}_{hour}"


def build_grid(
    groups: Iterable[GroupedRecord],
    excluded_hours: Iterable[int] = DEFAULT_EXCLUDED_HOURS,
) -> DayHourGrid:
    """Build the Sunday-Saturday x displayed-hours grid.

    Args:
        groups: Grouped records in view.
        excluded_hours: Hours left out of the grid; must match the chart's.

    Returns:
        DayHourGrid with an entry for every (day, hour) in the domain. Groups
        for an unknown day or an excluded hour are ignored.
    """
    hours = display_hours(excluded_hours)
    grid: Dict[str, Optional[float]] = {cell_key(d, h): None for d in GRID_DAYS for h in hours}

    df = pd.DataFrame(
        [{"day": g.day, "hour": g.hour, "avg_amount": g.avg_amount} for g in groups],
        columns=["day", "hour", "avg_amount"],
    )
    df["avg_amount"] = df["avg_amount"].astype("float64")
    df = df[df["day"].isin(GRID_DAYS) & df["hour"].isin(hours)]
    if not df.empty:
        means = df.groupby(["day", "hour"])["avg_amount"].mean()
        for (day, hour), value in means.items():
            grid[cell_key(day, int(hour))] = round_half_away(value, 2)

    return DayHourGrid(grid=grid, day_order=GRID_DAYS, hours=hours)
