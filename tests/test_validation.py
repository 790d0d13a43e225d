"""Tests for the row validator.

Covers every rejection rule, the StoreName fallback, and the batch variant's
counts and structural input check.
"""

from typing import Any, Dict

import pandas as pd
import pytest

from pos_slots.exceptions import InvalidInputError
from pos_slots.records import CanonicalRecord
from pos_slots.validation import ensure_rows, validate_row, validate_rows


class TestValidateRow:
    """Single-row validation rules."""

    def test_valid_row_is_cleaned(self, raw_row: Dict[str, Any]) -> None:
        record = validate_row(raw_row)
        assert record == CanonicalRecord(
            store_name="Clinton",
            store_code="13589",
            amount=125.5,
            hour=9,
            day="Monday",
            date="2024-01-01",
        )

    @pytest.mark.parametrize("hour", [-1, 24, "-3", "25", 100])
    def test_out_of_range_hour_is_rejected(self, raw_row: Dict[str, Any], hour: Any) -> None:
        raw_row["Hour"] = hour
        assert validate_row(raw_row) is None, f"Hour {hour!r} should be rejected"

    @pytest.mark.parametrize("hour", [0, 23, "0", "23"])
    def test_boundary_hours_are_accepted(self, raw_row: Dict[str, Any], hour: Any) -> None:
        raw_row["Hour"] = hour
        record = validate_row(raw_row)
        assert record is not None
        assert record.hour == int(hour)

    def test_fractional_hour_truncates(self, raw_row: Dict[str, Any]) -> None:
        raw_row["Hour"] = "9.7"
        assert validate_row(raw_row).hour == 9

    @pytest.mark.parametrize("hour", ["", "abc", None])
    def test_non_numeric_hour_is_rejected(self, raw_row: Dict[str, Any], hour: Any) -> None:
        raw_row["Hour"] = hour
        assert validate_row(raw_row) is None

    def test_negative_amount_is_rejected(self, raw_row: Dict[str, Any]) -> None:
        raw_row["Amount"] = -5
        assert validate_row(raw_row) is None

    def test_zero_amount_is_accepted(self, raw_row: Dict[str, Any]) -> None:
        raw_row["Amount"] = 0
        record = validate_row(raw_row)
        assert record is not None
        assert record.amount == 0.0

    @pytest.mark.parametrize("amount", ["", "n/a", None, float("nan"), True])
    def test_non_numeric_amount_is_rejected(self, raw_row: Dict[str, Any], amount: Any) -> None:
        raw_row["Amount"] = amount
        assert validate_row(raw_row) is None

    def test_formatted_amount_is_parsed(self, raw_row: Dict[str, Any]) -> None:
        raw_row["Amount"] = "$1,234.56"
        assert validate_row(raw_row).amount == pytest.approx(1234.56)

    @pytest.mark.parametrize("day", ["", "   ", None])
    def test_empty_day_is_rejected(self, raw_row: Dict[str, Any], day: Any) -> None:
        raw_row["Day"] = day
        assert validate_row(raw_row) is None

    def test_day_is_trimmed_but_not_checked_against_weekdays(self, raw_row: Dict[str, Any]) -> None:
        raw_row["Day"] = "  Holiday "
        assert validate_row(raw_row).day == "Holiday"

    @pytest.mark.parametrize("date", ["", "not-a-date", None, "now", "today", "Today ", "Jan"])
    def test_invalid_date_is_rejected(self, raw_row: Dict[str, Any], date: Any) -> None:
        raw_row["Date"] = date
        assert validate_row(raw_row) is None

    def test_date_is_kept_as_trimmed_string(self, raw_row: Dict[str, Any]) -> None:
        raw_row["Date"] = " 01/08/2024 "
        assert validate_row(raw_row).date == "01/08/2024"

    def test_timestamp_with_offset_is_accepted(self, raw_row: Dict[str, Any]) -> None:
        raw_row["Date"] = "2024-01-01T10:00:00Z"
        assert validate_row(raw_row).date == "2024-01-01T10:00:00Z"

    @pytest.mark.parametrize("code", ["", "  ", None])
    def test_empty_store_code_is_rejected(self, raw_row: Dict[str, Any], code: Any) -> None:
        raw_row["StoreCode"] = code
        assert validate_row(raw_row) is None

    def test_blank_store_name_falls_back_to_code(self, raw_row: Dict[str, Any]) -> None:
        raw_row["StoreName"] = "   "
        assert validate_row(raw_row).store_name == "13589"

    def test_missing_store_name_falls_back_to_code(self, raw_row: Dict[str, Any]) -> None:
        del raw_row["StoreName"]
        assert validate_row(raw_row).store_name == "13589"

    def test_numeric_store_code_becomes_text(self, raw_row: Dict[str, Any]) -> None:
        raw_row["StoreCode"] = 13589
        assert validate_row(raw_row).store_code == "13589"

    @pytest.mark.parametrize("raw", [None, "row", 42, ["a", "b"]])
    def test_non_mapping_row_is_rejected(self, raw: Any) -> None:
        assert validate_row(raw) is None


class TestValidateRows:
    """Batch validation and structural input errors."""

    def test_counts_valid_and_invalid(self, raw_row: Dict[str, Any]) -> None:
        bad = dict(raw_row, Hour=30)
        result = validate_rows([raw_row, bad, raw_row, "junk"])
        assert result.valid_count == 2
        assert result.invalid_count == 2
        assert len(result.records) == 2

    def test_empty_input_is_not_an_error(self) -> None:
        result = validate_rows([])
        assert result.records == []
        assert result.valid_count == 0
        assert result.invalid_count == 0

    @pytest.mark.parametrize("raw", [None, "rows", {"StoreCode": "A"}, 5])
    def test_non_list_input_raises(self, raw: Any) -> None:
        with pytest.raises(InvalidInputError):
            validate_rows(raw)

    def test_dataframe_input_is_accepted(self, raw_row: Dict[str, Any]) -> None:
        df = pd.DataFrame([raw_row, raw_row])
        assert len(ensure_rows(df)) == 2
        assert validate_rows(df).valid_count == 2

    def test_input_is_not_modified(self, raw_row: Dict[str, Any]) -> None:
        rows = [dict(raw_row)]
        validate_rows(rows)
        assert rows == [raw_row]
