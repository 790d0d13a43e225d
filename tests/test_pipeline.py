"""End-to-end tests: raw rows through process_records and build_view."""

import pandas as pd
import pytest

from pos_slots.config import SlotsConfig
from pos_slots.exceptions import ConfigError, InvalidInputError
from pos_slots.pipeline import ViewFilters, build_view, process_records
from pos_slots.stats import calculate_stats


def _summary(groups):
    return [(g.store_code, g.day, g.hour, g.avg_amount, g.data_points) for g in groups]


class TestProcessRecords:
    def test_four_weeks_average_per_slot(self, four_week_rows) -> None:
        result = process_records(four_week_rows)
        assert _summary(result.processed) == [
            ("B", "Monday", 9, 65.0, 4),
            ("A", "Monday", 9, 115.0, 4),
            ("A", "Monday", 10, 215.0, 4),
        ]
        assert not result.is_empty

    def test_processing_stats(self, four_week_rows) -> None:
        rows = four_week_rows + [{"StoreCode": "", "Amount": 1, "Hour": 9, "Day": "Monday", "Date": "2024-01-01"}]
        stats = process_records(rows).stats
        assert stats.total_raw_rows == 13
        assert stats.valid_rows == 12
        assert stats.invalid_rows == 1
        assert stats.closed_rows_removed == 0
        assert stats.unique_groups == 3
        assert stats.stores == 2

    def test_date_range_limits_weeks(self, four_week_rows) -> None:
        result = process_records(four_week_rows, date_from="2024-01-01", date_to="2024-01-08")
        assert _summary(result.processed) == [
            ("B", "Monday", 9, 55.0, 2),
            ("A", "Monday", 9, 105.0, 2),
            ("A", "Monday", 10, 205.0, 2),
        ]
        assert result.stats.date_filtered_out == 6

    def test_closed_hours_removed_before_grouping(self) -> None:
        rows = [
            {"StoreName": "Clinton", "StoreCode": "13589", "Amount": a, "Hour": h, "Day": "Monday", "Date": "2024-01-01"}
            for a, h in [(10, 7), (20, 8), (30, 9), (50, 9)]
        ]
        result = process_records(rows)
        assert _summary(result.processed) == [("13589", "Monday", 9, 40.0, 2)]
        assert result.stats.closed_rows_removed == 2

    def test_custom_closed_hours(self, four_week_rows) -> None:
        config = SlotsConfig(closed_hours={"Beta": frozenset({9})})
        result = process_records(four_week_rows, config)
        assert {g.store_code for g in result.processed} == {"A"}
        assert result.stats.closed_rows_removed == 4

    def test_no_valid_rows_gives_empty_result(self) -> None:
        result = process_records([{"Amount": "abc"}, {"StoreCode": "A"}])
        assert result.is_empty
        assert result.stats.invalid_rows == 2

    def test_empty_list_is_empty_result(self) -> None:
        assert process_records([]).is_empty

    def test_accepts_dataframe(self, four_week_rows) -> None:
        result = process_records(pd.DataFrame(four_week_rows))
        assert len(result.processed) == 3

    @pytest.mark.parametrize("raw", [None, "rows", {"StoreCode": "A"}, 42])
    def test_rejects_non_sequence_input(self, raw) -> None:
        with pytest.raises(InvalidInputError):
            process_records(raw)

    def test_invalid_date_bound_raises(self, four_week_rows) -> None:
        with pytest.raises(ConfigError):
            process_records(four_week_rows, date_from="not a date")

    def test_input_rows_not_modified(self, four_week_rows) -> None:
        before = [dict(r) for r in four_week_rows]
        process_records(four_week_rows)
        assert four_week_rows == before


class TestBuildView:
    def test_default_view_over_all_groups(self, four_week_rows) -> None:
        processed = process_records(four_week_rows).processed
        view = build_view(processed)
        assert len(view.rows) == 3
        assert view.stats.total_records == 3
        assert view.stats.lowest_slot == "Beta - Monday 9 AM - 10 AM"
        assert view.grid.cell("Monday", 9) == 90.0
        assert dict(zip(view.series.labels, view.series.values))["10 - 11"] == 215.0

    def test_store_filter_applies_to_every_view(self, four_week_rows) -> None:
        processed = process_records(four_week_rows).processed
        view = build_view(processed, ViewFilters(store="Alpha"))
        assert {g.store_name for g in view.rows} == {"Alpha"}
        assert view.grid.cell("Monday", 9) == 115.0
        assert view.stats.total_records == 2
        assert view.page.total_items == 2

    def test_highest_sort_and_day_buckets(self, four_week_rows) -> None:
        processed = process_records(four_week_rows).processed
        view = build_view(processed, ViewFilters(sort="highest", bucket_by="day"))
        assert [g.avg_amount for g in view.rows] == [215.0, 115.0, 65.0]
        assert view.series.labels[0] == "Monday"
        assert view.series.values[0] == 131.67

    def test_paging(self, four_week_rows) -> None:
        processed = process_records(four_week_rows).processed
        view = build_view(processed, ViewFilters(page=2), SlotsConfig(page_size=2))
        assert view.page.total_pages == 2
        assert [g.avg_amount for g in view.page.items] == [215.0]

    def test_unknown_store_gives_empty_view(self, four_week_rows) -> None:
        processed = process_records(four_week_rows).processed
        view = build_view(processed, ViewFilters(store="Nowhere"))
        assert view.is_empty
        assert view.stats is None
        assert all(v is None for v in view.grid.grid.values())
        assert view.to_dict()["stats"] is None


class TestTwoRowChain:
    def test_two_rows_to_one_group_and_stats(self) -> None:
        """Two raw rows for one slot average into one group with matching stats."""
        rows = [
            {"StoreName": "A", "StoreCode": "A", "Amount": "50", "Hour": 9, "Day": "Monday", "Date": "2024-01-01"},
            {"StoreName": "A", "StoreCode": "A", "Amount": "70", "Hour": 9, "Day": "Monday", "Date": "2024-01-08"},
        ]
        result = process_records(rows)
        assert result.stats.valid_rows == 2
        assert _summary(result.processed) == [("A", "Monday", 9, 60.0, 2)]

        stats = calculate_stats(result.processed)
        assert stats.total_records == 1
        assert stats.avg_amount == stats.min_amount == stats.max_amount == "60.00"
        assert stats.lowest_slot == "A - Monday 9 AM - 10 AM"

    def test_timezone_dated_row_with_bounds(self) -> None:
        rows = [{"StoreName": "A", "StoreCode": "A", "Amount": 5, "Hour": 9, "Day": "Monday", "Date": "2024-01-01T10:00:00Z"}]
        result = process_records(rows, date_from="2024-01-01", date_to="2024-01-31")
        assert _summary(result.processed) == [("A", "Monday", 9, 5.0, 1)]
