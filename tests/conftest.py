"""Shared fixtures for pos_slots tests."""

from __future__ import annotations

from typing import Any, Callable, Dict, List

import pytest

from pos_slots.records import CanonicalRecord, GroupedRecord


@pytest.fixture
def raw_row() -> Dict[str, Any]:
    """A valid raw row with numbers arriving as strings."""
    return {
        "StoreName": "Clinton",
        "StoreCode": "13589",
        "Amount": "125.50",
        "Hour": "9",
        "Day": "Monday",
        "Date": "2024-01-01",
    }


@pytest.fixture
def make_record() -> Callable[..., CanonicalRecord]:
    """Factory for canonical records with sensible defaults."""

    def _make(
        amount: float = 10.0,
        hour: int = 9,
        day: str = "Monday",
        store_code: str = "S1",
        store_name: str | None = None,
        date: str = "2024-01-01",
    ) -> CanonicalRecord:
        return CanonicalRecord(
            store_name=store_name or store_code,
            store_code=store_code,
            amount=amount,
            hour=hour,
            day=day,
            date=date,
        )

    return _make


@pytest.fixture
def make_group() -> Callable[..., GroupedRecord]:
    """Factory for grouped records with sensible defaults."""

    def _make(
        avg_amount: float,
        hour: int = 9,
        day: str = "Monday",
        store_code: str = "S1",
        store_name: str | None = None,
        data_points: int = 1,
    ) -> GroupedRecord:
        return GroupedRecord(
            store_name=store_name or store_code,
            store_code=store_code,
            day=day,
            hour=hour,
            avg_amount=avg_amount,
            data_points=data_points,
        )

    return _make


@pytest.fixture
def four_week_rows() -> List[Dict[str, Any]]:
    """Two stores, Monday 9 and 10 AM, four weekly dates, amounts as strings."""
    dates = ["2024-01-01", "2024-01-08", "2024-01-15", "2024-01-22"]
    rows: List[Dict[str, Any]] = []
    for week, d in enumerate(dates):
        rows.append(
            {"StoreName": "Alpha", "StoreCode": "A", "Amount": str(100 + week * 10), "Hour": 9, "Day": "Monday", "Date": d}
        )
        rows.append(
            {"StoreName": "Alpha", "StoreCode": "A", "Amount": str(200 + week * 10), "Hour": 10, "Day": "Monday", "Date": d}
        )
        rows.append(
            {"StoreName": "Beta", "StoreCode": "B", "Amount": str(50 + week * 10), "Hour": 9, "Day": "Monday", "Date": d}
        )
    return rows
