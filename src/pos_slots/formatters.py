"""Console output formatting utilities."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from pos_slots.cleaning_utils import format_hour_range
from pos_slots.records import ChartSeries, DashboardView, DayHourGrid, Page, ProcessingStats, StatsSummary


def format_processing_stats(stats: ProcessingStats) -> str:
    return (
        f"Rows: {stats.total_raw_rows:,} raw, {stats.valid_rows:,} valid, "
        f"{stats.invalid_rows:,} invalid, {stats.closed_rows_removed:,} closed-hour, "
        f"{stats.date_filtered_out:,} out of range | "
        f"{stats.unique_groups:,} slot(s) across {stats.stores} store(s)"
    )


def format_stats(stats: StatsSummary | None) -> str:
    if stats is None:
        return "No data available."
    return "\n".join(
        [
            f"Slots:        {stats.total_records:,}",
            f"Average:      ${stats.avg_amount}",
            f"Lowest:       ${stats.min_amount}",
            f"Highest:      ${stats.max_amount}",
            f"Weakest slot: {stats.lowest_slot}",
        ]
    )


def format_page(page: Page) -> str:
    """Table of one page of slots, numbered by position in the full slice."""
    if not page.items:
        return "No slots match the current filters."
    df = pd.DataFrame(
        [
            {
                "#": page.first_index + i + 1,
                "Store": g.store_name,
                "Code": g.store_code,
                "Day": g.day,
                "Hour": format_hour_range(g.hour, g.hour + 1),
                "Avg Amount": g.avg_amount,
                "Data Points": g.data_points,
            }
            for i, g in enumerate(page.items)
        ]
    )
    with pd.option_context("display.float_format", lambda v: f"{v:,.2f}"):
        table = df.to_string(index=False)
    last = page.first_index + len(page.items)
    footer = (
        f"Showing {page.first_index + 1} to {last} of {page.total_items} results "
        f"(page {page.page} of {page.total_pages})"
    )
    return f"{table}\n{footer}"


def format_series(series: ChartSeries, title: str = "Average Sales") -> str:
    """Horizontal text bar chart of a series."""
    lines = [title, "=" * 60]
    peak = max(series.values, default=0.0)
    width = max((len(label) for label in series.labels), default=0)
    for label, value in zip(series.labels, series.values):
        bar = "#" * int(round(30 * value / peak)) if peak > 0 else ""
        lines.append(f"{label:>{width}} | {value:>10,.2f} {bar}")
    return "\n".join(lines)


def format_grid(grid: DayHourGrid) -> str:
    """Day x hour table; cells without data print as a dash."""
    data = {
        day[:3]: [grid.cell(day, h) for h in grid.hours]
        for day in grid.day_order
    }
    df = pd.DataFrame(data, index=[format_hour_range(h, h + 1) for h in grid.hours])
    return df.to_string(na_rep="-", float_format=lambda v: f"{v:,.2f}")


def format_view(view: DashboardView, sections: Sequence[str] = ("stats", "series", "page")) -> str:
    """Build the console rendering of a dashboard view."""
    if view.is_empty:
        return "No data available for the selected filters."
    parts = []
    for section in sections:
        if section == "stats":
            parts.append(format_stats(view.stats))
        elif section == "series":
            parts.append(format_series(view.series))
        elif section == "grid":
            parts.append(format_grid(view.grid))
        elif section == "page":
            parts.append(format_page(view.page))
    return "\n\n".join(parts)
