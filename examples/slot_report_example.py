"""Example: weakest sales slots from a POS export

This example demonstrates how to turn raw POS rows into per store/day/hour
averages and derive the dashboard views (stats, chart series, grid, table page).

Prerequisites:
- A data file with StoreName, StoreCode, Amount, Hour, Day, Date columns
  (.json, .xlsx, .xls or .csv), or run with no file to use generated sample data
"""

import sys

from pos_slots import (
    SlotsConfig,
    ViewFilters,
    build_view,
    generate_sample_data,
    load_records,
    process_records,
)
from pos_slots.formatters import format_grid, format_processing_stats, format_view

# Four weeks of data - MODIFY AS NEEDED
date_from = ""  # e.g. "2024-01-01"
date_to = ""  # e.g. "2024-01-28"

if len(sys.argv) > 1:
    print(f"Loading {sys.argv[1]}...")
    raw = load_records(sys.argv[1])
else:
    print("No data file given, generating 4 weeks of sample data...")
    raw = generate_sample_data(weeks=4, seed=42)

# Closed-hours rules and excluded display hours come from POS_SLOTS_* env vars
config = SlotsConfig.from_env()

result = process_records(raw, config, date_from, date_to)
print(format_processing_stats(result.stats))

if result.is_empty:
    print("No data left after processing.")
    sys.exit(0)

# All stores, lowest averages first
view = build_view(result.processed, ViewFilters(), config)
print()
print(format_view(view))

# One store, strongest slots first, chart by day of week
store = result.processed[0].store_name
view = build_view(result.processed, ViewFilters(store=store, sort="highest", bucket_by="day"), config)
print(f"\n{store} - strongest slots:")
print(format_view(view, sections=("stats", "series")))

print("\nDay x hour grid (all stores):")
print(format_grid(build_view(result.processed, config=config).grid))
