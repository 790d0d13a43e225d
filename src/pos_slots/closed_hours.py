"""Store closed-hours rules.

Rows for a store at an hour it is closed are EXCLUDED from all calculations:
    - They are stripped from validated data BEFORE grouping/averaging
    - They do NOT count as $0 sales
    - They do NOT appear in the denominator of any average

Rules map a store name (exact, case-sensitive match on StoreName) to the set
of closed hours. "Closed 6-9 AM" means hours 6, 7 and 8; hour 9 is when the
store opens, so it is kept.

Example closed-hours JSON file:
    {
        "Clinton": [6, 7, 8],
        "Doylestown": [6, 7, 8]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping

from pos_slots.config import check_hours
from pos_slots.exceptions import ConfigError
from pos_slots.records import CanonicalRecord

logger = logging.getLogger(__name__)

ClosedHoursRule = Mapping[str, frozenset]

CLOSED_6_TO_9 = frozenset({6, 7, 8})

# Keys must match StoreName in the data exactly. Store codes for reference.
STORE_CLOSED_HOURS: Dict[str, frozenset] = {
    "Clinton": CLOSED_6_TO_9,  # 13589
    "Doylestown": CLOSED_6_TO_9,  # 2444
    "Norristown 1": CLOSED_6_TO_9,  # 8616
    "Dresher": CLOSED_6_TO_9,  # 527 (no data yet)
    "Souderton": CLOSED_6_TO_9,  # 2686
    "Morrisville": CLOSED_6_TO_9,  # 8612
    "King of Prussia": CLOSED_6_TO_9,  # 8617
    "Hatfield": CLOSED_6_TO_9,  # 11807
    "Point Pleasant": CLOSED_6_TO_9,  # 8186
    "Toms River": CLOSED_6_TO_9,  # 10803
    "Point Pleasant Beach": CLOSED_6_TO_9,  # 11870
    "Horsham": CLOSED_6_TO_9,  # 1400
    "Collegeville": CLOSED_6_TO_9,  # 1879
    "Phoenixville": CLOSED_6_TO_9,  # 2230
    "Exton": CLOSED_6_TO_9,  # 11228
    "Lansdale 2": CLOSED_6_TO_9,  # 1875
    "Norristown 2": CLOSED_6_TO_9,  # 11187
    "Montgomeryville": CLOSED_6_TO_9,  # 11971
    "Eatontown": CLOSED_6_TO_9,  # 13248
}


@dataclass
class ClosedHoursResult:
    """Records kept after dropping closed hours, and how many were dropped."""

    kept: List[CanonicalRecord]
    removed_count: int


def is_store_closed(store_name: str, hour: int, rules: ClosedHoursRule = STORE_CLOSED_HOURS) -> bool:
    """Return True if ``store_name`` is closed at ``hour``.

    Stores without a rule are never closed.

    Examples:
        >>> is_store_closed("Clinton", 7)
        True
        >>> is_store_closed("Clinton", 9)
        False
        >>> is_store_closed("clinton", 7)
        False
    """
    closed = rules.get(store_name)
    if not closed:
        return False
    return hour in closed


def filter_closed_hours(
    records: Iterable[CanonicalRecord],
    rules: ClosedHoursRule = STORE_CLOSED_HOURS,
) -> ClosedHoursResult:
    """Drop records whose (store name, hour) falls in a closed-hours rule.

    Must run before grouping so a closed hour never reaches a group's total
    or DataPoints count.

    Args:
        records: Validated records.
        rules: Store name -> closed hours.

    Returns:
        ClosedHoursResult with the kept records (input order) and the number
        removed.
    """
    kept: List[CanonicalRecord] = []
    removed = 0
    for record in records:
        if is_store_closed(record.store_name, record.hour, rules):
            removed += 1
        else:
            kept.append(record)

    if removed:
        logger.debug("Removed %d record(s) in store-closed hours", removed)
    return ClosedHoursResult(kept=kept, removed_count=removed)


def load_closed_hours(path: Path) -> Dict[str, frozenset]:
    """Load closed-hours rules from a JSON file.

    Args:
        path: JSON file mapping store names to lists of hours.

    Returns:
        Dictionary of store name -> frozenset of closed hours.

    Raises:
        ConfigError: If the file is missing, is not valid JSON, or holds
            anything other than store -> list of integer hours 0-23.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Closed-hours file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read closed-hours file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Closed-hours file {path} must contain a JSON object")

    rules: Dict[str, frozenset] = {}
    for store, hours in data.items():
        if not isinstance(hours, list):
            raise ConfigError(f"Closed hours for {store!r} must be a list, got {type(hours).__name__}")
        rules[store] = check_hours(hours, f"closed hours for {store!r}")

    logger.info("Loaded closed-hours rules for %d store(s) from %s", len(rules), path)
    return rules
