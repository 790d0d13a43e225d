"""Input boundary: load raw POS rows from files or URLs.

Every source yields the same shape, a list of raw rows keyed by
StoreName, StoreCode, Amount, Hour, Day and Date, which is what the pipeline
accepts. Rows are not validated here.

Supported sources:
- ``.json``: a JSON array of row objects
- ``.xlsx`` / ``.xls``: first sheet, header row as keys
- ``.csv``: header row as keys
- ``http(s)://`` URLs returning a JSON array

Environment variables:
    POS_SLOTS_TIMEOUT: HTTP timeout in seconds (default 60).
    POS_SLOTS_RETRIES: HTTP retry attempts (default 3).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from pos_slots.cleaning_utils import excel_serial_to_iso
from pos_slots.config import REQUIRED_COLUMNS
from pos_slots.exceptions import ConfigError, LoadError

logger = logging.getLogger(__name__)

Source = Union[str, Path]

DEFAULT_TIMEOUT = 60.0
DEFAULT_RETRIES = 3

SPREADSHEET_SUFFIXES = {".xlsx", ".xls", ".csv"}


@dataclass
class LoadedData:
    """Raw rows and the source they came from."""

    records: List[Dict[str, Any]]
    source: str


def _env_number(name: str, default: float, cast: type) -> Any:
    value = os.environ.get(name)
    if not value:
        return cast(default)
    try:
        return cast(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


def make_session(
    timeout: Optional[float] = None, retries: Optional[int] = None
) -> requests.Session:
    """Create a requests Session with retry logic and a default timeout.

    Retries GET requests on 429, 500, 502, 503 and 504 with exponential
    backoff (0.8s, 1.6s, 3.2s, ...).

    Args:
        timeout: Default timeout in seconds for all requests
            (default: POS_SLOTS_TIMEOUT, else 60).
        retries: Number of retry attempts (default: POS_SLOTS_RETRIES, else 3).

    Returns:
        Configured requests.Session object.

    Raises:
        ConfigError: If POS_SLOTS_TIMEOUT or POS_SLOTS_RETRIES is not a number.
    """
    if timeout is None:
        timeout = _env_number("POS_SLOTS_TIMEOUT", DEFAULT_TIMEOUT, float)
    if retries is None:
        retries = _env_number("POS_SLOTS_RETRIES", DEFAULT_RETRIES, int)

    s = requests.Session()
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=0.8,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET", "HEAD"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    orig_request = s.request

    def timed_request(method: str, url: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return orig_request(method, url, **kwargs)

    s.request = timed_request  # type: ignore[method-assign,assignment]
    return s


def is_url(source: Source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def _require_list(data: Any, source: str) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        raise LoadError(f"Data from {source} must be an array of objects, got {type(data).__name__}")
    return data


def fetch_json(url: str, session: Optional[requests.Session] = None) -> List[Dict[str, Any]]:
    """GET ``url`` and return its JSON array.

    Raises:
        LoadError: On connection errors, non-2xx status, or a body that is not
            a JSON array.
    """
    session = session or make_session()
    try:
        resp = session.get(url)
    except requests.RequestException as e:
        raise LoadError(f"Failed to fetch {url}: {e}") from e
    if not resp.ok:
        raise LoadError(f"Failed to fetch {url}: HTTP {resp.status_code}")
    try:
        data = resp.json()
    except ValueError as e:
        raise LoadError(f"Response from {url} is not valid JSON: {e}") from e
    return _require_list(data, url)


def read_json_file(path: Path) -> List[Dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise LoadError(f"Data file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise LoadError(f"Failed to read {path}: {e}") from e
    return _require_list(data, str(path))


def read_spreadsheet(path: Path) -> List[Dict[str, Any]]:
    """Read the first sheet of an Excel/CSV file into raw rows.

    Cells are read as-is (no type coercion), empty cells become ``""``, and
    Excel serial dates in the Date column become ``YYYY-MM-DD``.

    Raises:
        LoadError: If the file cannot be read, has no rows, or lacks one of
            the required columns.
    """
    try:
        if path.suffix.lower() == ".csv":
            df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
        else:
            df = pd.read_excel(path, sheet_name=0, dtype=object)
    except FileNotFoundError as e:
        raise LoadError(f"Data file not found: {path}") from e
    except Exception as e:
        raise LoadError(f"Failed to parse spreadsheet {path}: {e}") from e

    if df.empty:
        raise LoadError(f"{path.name} appears to be empty or has no valid data")

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise LoadError(f"{path.name} is missing required columns: {', '.join(missing)}")

    df = df.astype(object).where(pd.notna(df), "")
    df["Date"] = df["Date"].map(excel_serial_to_iso)
    logger.debug("Read %d row(s) from %s", len(df), path)
    return df.to_dict("records")


def load_records(source: Source, session: Optional[requests.Session] = None) -> List[Dict[str, Any]]:
    """Load raw rows from a file path or URL.

    Args:
        source: Path to a .json/.xlsx/.xls/.csv file, or an http(s) URL
            serving a JSON array.
        session: Optional requests session for URLs.

    Returns:
        List of raw row mappings (unvalidated).

    Raises:
        LoadError: If the source cannot be fetched or parsed.
    """
    if is_url(source):
        records = fetch_json(str(source), session)
    else:
        path = Path(source)
        suffix = path.suffix.lower()
        if suffix == ".json":
            records = read_json_file(path)
        elif suffix in SPREADSHEET_SUFFIXES:
            records = read_spreadsheet(path)
        else:
            raise LoadError(f"Unsupported data file type: {path.name} (expected .json, .xlsx, .xls or .csv)")

    logger.info("Loaded %d raw row(s) from %s", len(records), source)
    return records


def fetch_with_fallback(
    primary: Source,
    fallback: Source,
    session: Optional[requests.Session] = None,
) -> LoadedData:
    """Load ``primary``, falling back to ``fallback`` if it fails or is empty.

    Raises:
        LoadError: If the fallback also fails or holds no rows.
    """
    try:
        records = load_records(primary, session)
        if records:
            return LoadedData(records=records, source=str(primary))
        logger.warning("%s holds no rows, using %s", primary, fallback)
    except LoadError as e:
        logger.warning("%s unavailable (%s), using %s", primary, e, fallback)

    records = load_records(fallback, session)
    if not records:
        raise LoadError(f"No data found in {fallback}")
    return LoadedData(records=records, source=str(fallback))


def combine_sources(sources: Iterable[Source]) -> List[Dict[str, Any]]:
    """Concatenate the rows of several files (e.g. one export per week).

    Missing files are skipped with a warning; other load errors propagate.
    """
    rows: List[Dict[str, Any]] = []
    for source in sources:
        if not is_url(source) and not Path(source).exists():
            logger.warning("Skipping %s (not found)", source)
            continue
        added = load_records(source)
        logger.info("Added %d row(s) from %s", len(added), source)
        rows.extend(added)
    return rows


def write_records_json(records: Iterable[Any], path: Source) -> Path:
    """Write rows (mappings or objects with ``to_dict``) as a JSON array."""
    out = [r.to_dict() if hasattr(r, "to_dict") else dict(r) for r in records]
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(out, indent=2, default=str), encoding="utf-8")
    logger.info("Wrote %d row(s) to %s", len(out), path)
    return path
