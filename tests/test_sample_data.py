"""Tests for the sample data generator."""

from datetime import date

from pos_slots.loaders import load_records
from pos_slots.pipeline import process_records
from pos_slots.sample_data import (
    END_HOUR,
    START_HOUR,
    STORES,
    generate_sample_data,
    sample_data_stats,
    write_sample_excel,
)
from pos_slots.validation import validate_rows

TODAY = date(2024, 1, 24)


def test_row_count_matches_stats() -> None:
    rows = generate_sample_data(weeks=1, seed=1, today=TODAY)
    assert len(rows) == 980
    assert sample_data_stats(1)["totalRecords"] == 980
    assert sample_data_stats(4)["expectedRecordsPerStore"] == 4 * 7 * 14


def test_seed_is_reproducible() -> None:
    assert generate_sample_data(2, seed=5, today=TODAY) == generate_sample_data(2, seed=5, today=TODAY)
    assert generate_sample_data(2, seed=5, today=TODAY) != generate_sample_data(2, seed=6, today=TODAY)


def test_all_rows_are_valid() -> None:
    rows = generate_sample_data(weeks=1, seed=2, today=TODAY)
    result = validate_rows(rows)
    assert result.invalid_count == 0
    assert {r.hour for r in result.records} == set(range(START_HOUR, END_HOUR))
    assert {r.store_code for r in result.records} == {code for _, code, _ in STORES}


def test_dates_follow_weekdays() -> None:
    rows = generate_sample_data(weeks=2, seed=0, today=TODAY)
    mondays = {r["Date"] for r in rows if r["Day"] == "Monday"}
    assert mondays == {"2024-01-22", "2024-01-15"}


def test_one_group_per_store_day_hour() -> None:
    result = process_records(generate_sample_data(weeks=2, seed=4, today=TODAY))
    assert result.stats.unique_groups == len(STORES) * 7 * (END_HOUR - START_HOUR)
    assert all(g.data_points == 2 for g in result.processed)


def test_excel_round_trip(tmp_path) -> None:
    path = write_sample_excel(tmp_path / "sample.xlsx", weeks=1, seed=9)
    rows = load_records(path)
    assert len(rows) == 980
    assert validate_rows(rows).invalid_count == 0
