from __future__ import annotations

import math
from numbers import Number
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd


WALL_CLOCK_KEYWORDS = frozenset({"now", "today"})


def to_float(value: Any) -> float:
    """
    Coerce a raw field to float. Anything that is missing, unparseable
    or non-finite comes back as NaN.
    """
    if value is None or isinstance(value, bool):
        return np.nan

    if isinstance(value, str):
        value = value.strip()
        # float() accepts "1_000"; a numeric field does not
        if not value or "_" in value:
            return np.nan

    try:
        x = float(value)
    except (TypeError, ValueError):
        return np.nan

    return x if math.isfinite(x) else np.nan


def parse_instant(value: Any) -> Optional[pd.Timestamp]:
    """
    Parse a timestamp into a UTC pd.Timestamp.

    - numbers are epoch milliseconds
    - strings / datetimes go through pd.Timestamp
    - tz-naive values are taken as UTC

    Returns None when the value is not a valid instant.
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, Number):
            if not math.isfinite(float(value)):
                return None
            ts = pd.Timestamp(int(value), unit="ms")
        elif isinstance(value, str):
            value = value.strip()
            # pandas reads these as the wall clock
            if value.lower() in WALL_CLOCK_KEYWORDS:
                return None
            ts = pd.Timestamp(value)
        else:
            ts = pd.Timestamp(value)

        if ts is pd.NaT or pd.isna(ts):
            return None

        ts = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
        # series are built at nanosecond resolution (years 1677-2262)
        return ts.as_unit("ns")
    except (TypeError, ValueError, OverflowError, pd.errors.OutOfBoundsDatetime):
        return None


def require_instant(value: Any, name: str) -> pd.Timestamp:
    ts = parse_instant(value)
    if ts is None:
        raise ValueError(f"{name} is not a valid instant: {value!r}")
    return ts


def hours_between(start: Iterable[pd.Timestamp], end: pd.Timestamp) -> np.ndarray:
    """
    Signed hours from each `start` to `end` (negative when start is after end).
    """
    start = pd.DatetimeIndex(list(start))
    if len(start) == 0:
        return np.empty(0, dtype=float)
    if start.tz is None:
        start = start.tz_localize("UTC")

    delta = pd.Timestamp(end) - start
    return np.asarray(delta.total_seconds(), dtype=float) / 3600.0


def nested_get(record: Any, *path: str) -> Any:
    """Walk dict-like `record` along `path`; None if any step is missing."""
    node = record
    for key in path:
        if not hasattr(node, "get"):
            return None
        node = node.get(key)
        if node is None:
            return None
    return node
