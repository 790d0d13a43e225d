"""Configuration for POS slot reporting.

This module holds the calendar constants shared by the reducers and a single
configuration class carrying the business rules that operators change:
which hours are hidden from charts/grid, which store hours are closed, and
the table page size.

Environment variables (read by ``SlotsConfig.from_env``):
    POS_SLOTS_EXCLUDED_HOURS: Comma-separated display hours to hide
        (default "2,3,4,5,6"; an empty string hides nothing).
    POS_SLOTS_CLOSED_HOURS: Path to a closed-hours JSON file
        (default: the built-in STORE_CLOSED_HOURS table).
    POS_SLOTS_PAGE_SIZE: Rows per table page (default 20).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Optional

from pos_slots.exceptions import ConfigError

# Chart and day-filter ordering
WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Grid rows start on Sunday
GRID_DAYS = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

ALL_HOURS = tuple(range(24))

# 2 AM - 7 AM slots are hidden from charts and the grid
DEFAULT_EXCLUDED_HOURS = frozenset({2, 3, 4, 5, 6})

DEFAULT_PAGE_SIZE = 20

REQUIRED_COLUMNS = ("StoreName", "StoreCode", "Amount", "Hour", "Day", "Date")


def check_hours(hours: Iterable[int], what: str = "hours") -> frozenset[int]:
    """Return ``hours`` as a frozenset, raising ConfigError for values outside 0-23."""
    out = set()
    for h in hours:
        if isinstance(h, bool) or not isinstance(h, int) or not 0 <= h <= 23:
            raise ConfigError(f"Invalid {what}: {h!r} (expected integers 0-23)")
        out.add(h)
    return frozenset(out)


def display_hours(excluded_hours: Iterable[int] = DEFAULT_EXCLUDED_HOURS) -> tuple[int, ...]:
    """Hours shown on charts and the grid, ascending."""
    excluded = check_hours(excluded_hours, "excluded hours")
    return tuple(h for h in ALL_HOURS if h not in excluded)


def _parse_hour_list(text: str) -> frozenset[int]:
    parts = [p.strip() for p in text.split(",") if p.strip()]
    try:
        hours = [int(p) for p in parts]
    except ValueError as e:
        raise ConfigError(f"POS_SLOTS_EXCLUDED_HOURS must be comma-separated integers: {text!r}") from e
    return check_hours(hours, "excluded hours")


@dataclass
class SlotsConfig:
    """Business rules applied by the pipeline and the dashboard view.

    Attributes:
        excluded_hours: Hours hidden from charts and the grid. Records at these
            hours still count in the table and stats.
        closed_hours: Store name -> hours the store is closed. Matching rows are
            dropped before grouping.
        page_size: Rows per table page.
    """

    excluded_hours: frozenset[int] = DEFAULT_EXCLUDED_HOURS
    closed_hours: Mapping[str, frozenset[int]] = field(default_factory=lambda: _default_closed_hours())
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        self.excluded_hours = check_hours(self.excluded_hours, "excluded hours")
        self.closed_hours = {
            str(name): check_hours(hours, f"closed hours for {name!r}")
            for name, hours in self.closed_hours.items()
        }
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int) or self.page_size < 1:
            raise ConfigError(f"page_size must be a positive integer, got {self.page_size!r}")

    @property
    def display_hours(self) -> tuple[int, ...]:
        return display_hours(self.excluded_hours)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> SlotsConfig:
        """Build a configuration from POS_SLOTS_* environment variables.

        Examples:
            >>> cfg = SlotsConfig.from_env({"POS_SLOTS_EXCLUDED_HOURS": "2,3,4,5"})
            >>> sorted(cfg.excluded_hours)
            [2, 3, 4, 5]
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        excluded = env.get("POS_SLOTS_EXCLUDED_HOURS")
        if excluded is not None:
            kwargs["excluded_hours"] = _parse_hour_list(excluded)

        closed_path = env.get("POS_SLOTS_CLOSED_HOURS")
        if closed_path:
            from pos_slots.closed_hours import load_closed_hours

            kwargs["closed_hours"] = load_closed_hours(Path(closed_path))

        page_size = env.get("POS_SLOTS_PAGE_SIZE")
        if page_size:
            try:
                kwargs["page_size"] = int(page_size)
            except ValueError as e:
                raise ConfigError(f"POS_SLOTS_PAGE_SIZE must be an integer: {page_size!r}") from e

        return cls(**kwargs)


def _default_closed_hours() -> Mapping[str, frozenset[int]]:
    from pos_slots.closed_hours import STORE_CLOSED_HOURS

    return STORE_CLOSED_HOURS
