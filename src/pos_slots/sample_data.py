"""Sample sales data for demos and tests.

Creates several weeks of hourly rows for ten stores with realistic patterns:
- Higher sales during lunch and dinner hours
- Busier weekends, a slow Monday
- Different baselines per store type
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from pos_slots.cleaning_utils import round_half_away
from pos_slots.config import REQUIRED_COLUMNS, WEEKDAYS

logger = logging.getLogger(__name__)

# (name, code, traffic multiplier)
STORES = [
    ("Downtown Store", "STORE001", 1.2),
    ("Mall Center", "STORE002", 1.5),
    ("Airport Shop", "STORE003", 1.3),
    ("University Plaza", "STORE004", 0.8),
    ("Suburban Outlet", "STORE005", 0.7),
    ("Beach Front", "STORE006", 1.1),
    ("Business District", "STORE007", 1.4),
    ("Highway Rest Stop", "STORE008", 0.6),
    ("Train Station", "STORE009", 1.0),
    ("Shopping Village", "STORE010", 0.9),
]

# Operating hours: open 8 AM, last slot starts 9 PM
START_HOUR = 8
END_HOUR = 22

BASE_AMOUNT = 500.0

DAY_MULTIPLIERS = {"Monday": 0.8, "Friday": 1.2, "Saturday": 1.4, "Sunday": 1.3}


def _hour_multiplier(hour: int) -> float:
    if 11 <= hour <= 13:
        return 1.4  # lunch
    if 17 <= hour <= 19:
        return 1.5  # dinner
    if hour < 10:
        return 0.5
    if hour > 20:
        return 0.6
    return 1.0


def _day_multiplier(code: str, day: str) -> float:
    if code == "STORE007" and day in ("Saturday", "Sunday"):
        return 0.5  # business district is quiet at weekends
    if code == "STORE004" and day == "Sunday":
        return 0.4
    return DAY_MULTIPLIERS.get(day, 1.0)


def _week_start(today: date, weeks_back: int) -> date:
    monday = today - timedelta(days=today.weekday())
    return monday - timedelta(weeks=weeks_back)


def generate_sample_data(
    weeks: int = 4,
    seed: Optional[int] = None,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """Generate shuffled raw rows for every store, day and operating hour.

    Args:
        weeks: Number of weeks, counting back from the week of ``today``.
        seed: Seed for reproducible amounts and order.
        today: Reference date (default: today).

    Returns:
        Raw row dicts with StoreName, StoreCode, Amount, Hour, Day, Date.
    """
    rng = np.random.default_rng(seed)
    today = today or date.today()
    rows: List[Dict[str, Any]] = []

    for week in range(weeks):
        monday = _week_start(today, week)
        for name, code, store_mult in STORES:
            for day_index, day in enumerate(WEEKDAYS):
                day_date = (monday + timedelta(days=day_index)).isoformat()
                day_mult = _day_multiplier(code, day)
                for hour in range(START_HOUR, END_HOUR):
                    noise = rng.uniform(0.7, 1.3)
                    amount = BASE_AMOUNT * store_mult * _hour_multiplier(hour) * day_mult * noise
                    rows.append(
                        {
                            "StoreName": name,
                            "StoreCode": code,
                            "Amount": round_half_away(amount, 2),
                            "Hour": hour,
                            "Day": day,
                            "Date": day_date,
                        }
                    )

    order = rng.permutation(len(rows))
    return [rows[i] for i in order]


def sample_data_stats(weeks: int = 4) -> Dict[str, int]:
    """Shape of the data ``generate_sample_data`` produces."""
    hours = END_HOUR - START_HOUR
    return {
        "totalRecords": weeks * len(STORES) * len(WEEKDAYS) * hours,
        "stores": len(STORES),
        "weeks": weeks,
        "daysPerWeek": len(WEEKDAYS),
        "hoursPerDay": hours,
        "expectedRecordsPerStore": weeks * len(WEEKDAYS) * hours,
    }


def write_sample_excel(path: Path, weeks: int = 4, seed: Optional[int] = None) -> Path:
    """Write generated sample rows to an Excel workbook ("Sales Data" sheet)."""
    df = pd.DataFrame(generate_sample_data(weeks, seed), columns=list(REQUIRED_COLUMNS))
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_excel(path, sheet_name="Sales Data", index=False)
    logger.info("Wrote %d sample row(s) to %s", len(df), path)
    return path
