"""Shared utilities for cleaning raw POS rows.

This module provides the parsing primitives used by the row validator and
the loaders: text cleanup, robust number parsing, date parsing, rounding and
hour formatting.

Key utilities:
- Text normalization: strip invisible characters and surrounding whitespace
- Number parsing: robust handling of various currency and number formats
- Date parsing: multiple date format support
- Rounding: half-away-from-zero at a fixed number of decimals

Examples:
    >>> from pos_slots.cleaning_utils import to_float, to_date, format_hour_range
    >>> to_float("1,234.56")
    1234.56
    >>> to_date("2024-01-15")
    Timestamp('2024-01-15 00:00:00')
    >>> format_hour_range(9, 10)
    '9 AM - 10 AM'
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

import numpy as np
import pandas as pd

# Unicode characters that should be stripped from text
NBSP = "\u00a0"  # Non-breaking space
NNBSP = "\u202f"  # Narrow non-breaking space
ZW = "".join(chr(c) for c in (0x200B, 0x200C, 0x200D, 0xFEFF))  # Zero-width characters

# Regex to strip currency symbols while preserving number separators
_CURRENCY_RE = re.compile(r"[^\d,.\-\(\)\s]")

# Excel stores dates as days since this epoch (includes the 1900 leap-year bug)
EXCEL_EPOCH = date(1899, 12, 30)

DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d/%m/%Y", "%d-%m-%Y")

# pandas resolves these against the clock; they never name a calendar date
RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


def _is_missing(x: Any) -> bool:
    if x is None:
        return True
    if isinstance(x, float) and math.isnan(x):
        return True
    return x is pd.NaT


def clean_text(x: Any) -> str:
    """Return ``x`` as trimmed text with invisible characters removed.

    Inner whitespace is preserved so that store names keep matching the
    closed-hours table exactly.

    Examples:
        >>> clean_text("  Clinton\\u200b ")
        'Clinton'
        >>> clean_text(None)
        ''
    """
    if _is_missing(x):
        return ""
    s = str(x)
    s = s.replace(NBSP, " ").replace(NNBSP, " ")
    s = re.sub(r"[%s]" % re.escape(ZW), "", s)
    return s.strip()


def to_float(x: Any) -> Optional[float]:
    """Robustly parse numbers in various formats.

    Handles:
    - US format: '1,234.56' (comma thousands, dot decimal)
    - EU format: '1.234,56' (dot thousands, comma decimal)
    - Negative in parentheses: '(1,234.56)'
    - Currency symbols: '$ 1 234.56'

    Args:
        x: Value to parse (string, number, or None).

    Returns:
        Parsed float value, or None if parsing fails or the value is NaN/inf.

    Examples:
        >>> to_float("1,234.56")
        1234.56
        >>> to_float("(12.50)")
        -12.5
        >>> to_float("abc") is None
        True
    """
    if _is_missing(x) or isinstance(x, (bool, np.bool_)):
        return None
    if isinstance(x, (int, float, np.integer, np.floating)):
        v = float(x)
        return v if math.isfinite(v) else None

    s = clean_text(x)
    if not s:
        return None

    neg = False
    if s.startswith("(") and s.endswith(")"):
        neg, s = True, s[1:-1].strip()

    # strip currency and weird symbols but KEEP '.' and ','
    s = _CURRENCY_RE.sub("", s)
    s = re.sub(r"\s+", "", s)
    if not s or not re.search(r"\d", s):
        return None

    def _finalize(num_str: str, negative: bool) -> Optional[float]:
        try:
            v = float(num_str)
        except ValueError:
            return None
        if not math.isfinite(v):
            return None
        return -v if negative else v

    # Pattern: 1.234,56 (EU)
    if re.fullmatch(r"-?\d{1,3}(?:\.\d{3})+,\d{1,2}", s):
        return _finalize(s.replace(".", "").replace(",", "."), neg)

    # Pattern: 1,234.56 (US)
    if re.fullmatch(r"-?\d{1,3}(?:,\d{3})+\.\d+", s):
        return _finalize(s.replace(",", ""), neg)

    has_dot = "." in s
    has_com = "," in s

    if has_com and not has_dot:
        # 1,234,567 (no decimals) -> thousands
        if re.fullmatch(r"-?\d{1,3}(?:,\d{3})+", s):
            return _finalize(s.replace(",", ""), neg)
        return _finalize(s.replace(",", "."), neg)

    return _finalize(s, neg)


def to_int(x: Any) -> Optional[int]:
    """Parse an integer, truncating any fractional part toward zero.

    Examples:
        >>> to_int("9")
        9
        >>> to_int("9.7")
        9
        >>> to_int("") is None
        True
    """
    f = to_float(x)
    if f is None:
        return None
    return int(f)


def to_date(val: Any) -> pd.Timestamp:
    """Parse a date from various formats.

    Attempts multiple formats in order:
    1. ISO format: YYYY-MM-DD
    2. US: MM/DD/YYYY
    3. European: DD/MM/YYYY
    4. Dash format: DD-MM-YYYY
    5. Any other ISO 8601 form (e.g. with a time and UTC offset)

    Relative words such as "now" or "today" are not dates. Timezone-aware
    values keep their wall-clock date and are returned tz-naive, so results
    always compare with each other.

    Args:
        val: Value to parse (string, date, Timestamp, or None).

    Returns:
        Parsed Timestamp or pd.NaT if parsing fails.
    """
    if _is_missing(val) or isinstance(val, (bool, np.bool_)):
        return pd.NaT
    if isinstance(val, (pd.Timestamp, np.datetime64, datetime, date)):
        return _naive(pd.to_datetime(val, errors="coerce"))
    s = clean_text(val)
    if not s or s.lower() in RELATIVE_DATE_WORDS:
        return pd.NaT
    for fmt in DATE_FORMATS:
        try:
            return pd.to_datetime(s, format=fmt, errors="raise")
        except (ValueError, TypeError):
            pass
    try:
        return _naive(pd.to_datetime(s, format="ISO8601", errors="coerce"))
    except (ValueError, TypeError, OverflowError):
        return pd.NaT


def _naive(ts: Any) -> pd.Timestamp:
    if pd.isna(ts):
        return pd.NaT
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def round_half_away(value: float, ndigits: int = 2) -> float:
    """Round ``value`` half-away-from-zero at ``ndigits`` decimals.

    The value's shortest repr is rounded in decimal, so 0.125 becomes 0.13
    rather than the 0.12 that binary rounding would give.

    Examples:
        >>> round_half_away(0.125)
        0.13
        >>> round_half_away(-2.675)
        -2.68
    """
    quantum = Decimal(1).scaleb(-ndigits)
    try:
        d = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return float(value)
    return float(d)


def format_money(value: float) -> str:
    """Format ``value`` with exactly two decimals.

    Examples:
        >>> format_money(60)
        '60.00'
    """
    return f"{round_half_away(value, 2):.2f}"


def format_hour(hour: int) -> str:
    """Format an hour (0-24) on the 12-hour clock, e.g. ``'9 PM'``."""
    h = hour % 24
    suffix = "AM" if h < 12 else "PM"
    h12 = h % 12 or 12
    return f"{h12} {suffix}"


def format_hour_range(start: int, end: int) -> str:
    """Format an hour slot as ``'9 AM - 10 AM'``.

    Examples:
        >>> format_hour_range(23, 24)
        '11 PM - 12 AM'
    """
    return f"{format_hour(start)} - {format_hour(end)}"


def excel_serial_to_iso(value: Any) -> Any:
    """Convert an Excel serial day number to ``YYYY-MM-DD``.

    Strings and missing values are returned unchanged; anything else that is
    not numeric becomes None.

    Examples:
        >>> excel_serial_to_iso(45292)
        '2024-01-01'
        >>> excel_serial_to_iso("2024-01-01")
        '2024-01-01'
    """
    if isinstance(value, str) or _is_missing(value):
        return value
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return pd.Timestamp(value).strftime("%Y-%m-%d")
    f = to_float(value)
    if f is None:
        return None
    return (EXCEL_EPOCH + timedelta(days=int(f))).isoformat()
