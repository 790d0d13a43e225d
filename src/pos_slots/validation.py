"""Row validation: raw POS rows into canonical records.

Validation rules (any failure rejects the row):
- Amount: must parse as a number >= 0
- Hour: must parse as an integer between 0 and 23
- Day: must not be empty after trimming
- Date: must parse as a calendar date
- StoreCode: must not be empty after trimming
- StoreName: trimmed; falls back to StoreCode when blank

Rejected rows are counted, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional

import pandas as pd

from pos_slots.cleaning_utils import clean_text, to_date, to_float, to_int
from pos_slots.exceptions import InvalidInputError
from pos_slots.records import CanonicalRecord, ValidationResult

logger = logging.getLogger(__name__)


def validate_row(raw: Any) -> Optional[CanonicalRecord]:
    """Validate and clean a single raw row.

    Args:
        raw: Mapping with StoreName, StoreCode, Amount, Hour, Day, Date keys.
            Values may be strings or numbers. Anything that is not a mapping
            is rejected.

    Returns:
        CanonicalRecord, or None if the row is invalid.

    Examples:
        >>> validate_row({"StoreCode": "A", "Amount": "50", "Hour": 9,
        ...               "Day": "Monday", "Date": "2024-01-01"}).store_name
        'A'
        >>> validate_row({"StoreCode": "A", "Amount": "-5", "Hour": 9,
        ...               "Day": "Monday", "Date": "2024-01-01"}) is None
        True
    """
    if not isinstance(raw, Mapping):
        return None

    amount = to_float(raw.get("Amount"))
    if amount is None or amount < 0:
        return None

    hour = to_int(raw.get("Hour"))
    if hour is None or not 0 <= hour <= 23:
        return None

    day = clean_text(raw.get("Day"))
    if not day:
        return None

    date_str = clean_text(raw.get("Date"))
    if pd.isna(to_date(date_str)):
        return None

    store_code = clean_text(raw.get("StoreCode"))
    if not store_code:
        return None

    store_name = clean_text(raw.get("StoreName")) or store_code

    return CanonicalRecord(
        store_name=store_name,
        store_code=store_code,
        amount=amount,
        hour=hour,
        day=day,
        date=date_str,
    )


def ensure_rows(raw: Any) -> List[Any]:
    """Return ``raw`` as a list of rows.

    DataFrames are converted to their records; any other iterable is listed.

    Raises:
        InvalidInputError: If ``raw`` is not a sequence of rows (e.g. a
            string, a single mapping, or None).
    """
    if isinstance(raw, pd.DataFrame):
        return raw.to_dict("records")
    if raw is None or isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
        raise InvalidInputError(f"Raw input must be a list of records, got {type(raw).__name__}")
    return list(raw)


def validate_rows(rows: Iterable[Any]) -> ValidationResult:
    """Validate and clean all raw rows.

    Args:
        rows: Sequence of raw rows (list, tuple, or DataFrame).

    Returns:
        ValidationResult with the canonical records in input order and the
        valid/invalid counts.

    Raises:
        InvalidInputError: If ``rows`` is not a sequence of rows.
    """
    rows = ensure_rows(rows)
    records: List[CanonicalRecord] = []
    invalid = 0
    for raw in rows:
        record = validate_row(raw)
        if record is None:
            invalid += 1
        else:
            records.append(record)

    logger.debug("Validated %d row(s): %d valid, %d invalid", len(rows), len(records), invalid)
    return ValidationResult(records=records, valid_count=len(records), invalid_count=invalid)
