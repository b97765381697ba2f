from __future__ import annotations

import logging
import os
import re
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import pandas as pd

from sleepstats.schema import (
    CATEGORICAL_COLUMNS,
    NUMERIC_COLUMNS,
    RECORD_FIELDS,
    Dataset,
    SleepRecord,
)


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DATA_FILE = "Combined_Health_and_Labels_Data.csv"
DATA_PATH_ENV = "SLEEP_DATA_PATH"

_CLOCK_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?")


def get_source_file(path: str | Path | None = None) -> Path:
    """Explicit path, then $SLEEP_DATA_PATH, then the bundled data directory."""
    if path:
        return Path(path)
    env_path = os.getenv(DATA_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DATA_DIR / DATA_FILE


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path.resolve()), path.stat().st_mtime)


def numericize(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def coerce_str_safe(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            series = df[col].astype("string").str.strip()
            series = series.replace({"nan": pd.NA, "None": pd.NA, "": pd.NA})
            df[col] = series
    return df


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def bucket_value(value: object, step: float = 0.5) -> Optional[float]:
    """Snap a value to the nearest multiple of ``step``, halves rounding up.

    With the default step this is ``round(x * 2) / 2``: 7.25 -> 7.5, 7.24 -> 7.0.
    """
    if value is None or pd.isna(value):
        return None
    step_d = Decimal(str(step))
    units = (Decimal(str(value)) / step_d).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(units * step_d)


def parse_clock_time(value: object) -> Optional[float]:
    """Parse the first ``H:MM[:SS] [AM|PM]`` found in a free-form answer into decimal hours in [0, 24).

    "Around 7:30 PM" and "7:30 PM - 8:00 PM" both give 19.5. Seconds are accepted
    but do not contribute. No clock time, or an out-of-range one, yields None.
    """
    if value is None or not isinstance(value, str):
        return None
    match = _CLOCK_TIME_RE.search(value)
    if not match:
        return None
    hour = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3)) if match.group(3) else 0
    ampm = match.group(4).upper() if match.group(4) else None
    if minutes > 59 or seconds > 59:
        return None
    if ampm is not None:
        if not 1 <= hour <= 12:
            return None
        if ampm == "PM" and hour < 12:
            hour += 12
        if ampm == "AM" and hour == 12:
            hour = 0
    elif hour > 23:
        return None
    return hour + minutes / 60


def _as_number(value: object) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


def _as_text(value: object) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    s = str(value).strip()
    return s or None


def records_from_frame(df: pd.DataFrame) -> Dataset:
    """Resolve a raw survey frame into typed records.

    Columns the frame lacks leave the matching field as None.
    """
    if df.empty:
        return ()
    df = df.copy()
    df.columns = [str(c).strip() for c in df.columns]
    df = numericize(df, NUMERIC_COLUMNS.keys())
    df = coerce_str_safe(df, CATEGORICAL_COLUMNS.keys())

    missing = [c for c in list(NUMERIC_COLUMNS) + list(CATEGORICAL_COLUMNS) if c not in df.columns]
    if missing:
        logger.warning("Dataset is missing %d expected column(s): %s", len(missing), ", ".join(missing))

    records = []
    for row in df.to_dict(orient="records"):
        values: Dict[str, object] = {}
        for col, name in NUMERIC_COLUMNS.items():
            values[name] = _as_number(row.get(col))
        for col, name in CATEGORICAL_COLUMNS.items():
            values[name] = _as_text(row.get(col))
        records.append(SleepRecord(**values))
    return tuple(records)


def read_dataset(path: str | Path) -> Dataset:
    """Read and resolve a CSV without caching. Failures surface as an empty dataset."""
    try:
        df = pd.read_csv(path, dtype=str, encoding="utf-8-sig")
    except FileNotFoundError:
        logger.warning("Sleep dataset not found: %s", path)
        return ()
    except (OSError, ValueError):
        logger.exception("Failed to read sleep dataset: %s", path)
        return ()
    records = records_from_frame(df)
    logger.info("Loaded %d sleep record(s) from %s", len(records), path)
    return records


@lru_cache(maxsize=4)
def _load_dataset_cached(signature: Tuple[str, float]) -> Dataset:
    return read_dataset(signature[0])


def load_dataset(path: str | Path | None = None) -> Dataset:
    """Shared immutable snapshot of the dataset, reloaded only when the file changes."""
    source = get_source_file(path)
    if not source.exists():
        logger.warning("Sleep dataset not found: %s", source)
        return ()
    return _load_dataset_cached(file_signature(source))


def dataset_summary(dataset: Dataset) -> Dict[str, object]:
    non_null = {name: 0 for name in RECORD_FIELDS}
    for record in dataset:
        for name in RECORD_FIELDS:
            if getattr(record, name) is not None:
                non_null[name] += 1
    return {"records": len(dataset), "non_null": non_null}
