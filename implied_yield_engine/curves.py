from __future__ import annotations

import numpy as np
import pandas as pd

from .aggregation import AggregationResult
from .config import FAIR_CURVE_POINTS
from .pricing import yt_price
from .utils import hours_between, require_instant


SERIES_COLUMNS = ["time", "price", "accrual", "fair_value", "is_trade"]


def curve_sample_times(now, maturity, n_points: int = FAIR_CURVE_POINTS) -> pd.DatetimeIndex:
    """
    n_points instants evenly spaced from now to maturity (both inclusive).

    Offsets are computed in integer nanoseconds so the endpoints are
    exactly `now` and exactly `maturity`.
    """
    if n_points < 2:
        raise ValueError("n_points must be at least 2")

    now = require_instant(now, "now")
    maturity = require_instant(maturity, "maturity")

    start_ns = int(now.value)
    span_ns = int(maturity.value) - start_ns
    last = n_points - 1

    # python ints: span * i can exceed int64 for long-dated maturities
    stamps = [start_ns + (span_ns * i) // last for i in range(n_points)]
    return pd.DatetimeIndex(pd.to_datetime(stamps, unit="ns", utc=True))


def fair_value_curve(weighted_rate: float, now, maturity, n_points: int = FAIR_CURVE_POINTS) -> pd.DataFrame:
    """
    Synthetic fair value from now to maturity at a single (weighted) rate.
    An undefined (NaN) rate gives an all-NaN curve.
    """
    times = curve_sample_times(now, maturity, n_points)
    hours = hours_between(times, require_instant(maturity, "maturity"))

    return pd.DataFrame({"time": times, "fair_value": yt_price(weighted_rate, hours)})


def merge_series(curve: pd.DataFrame, result: AggregationResult) -> pd.DataFrame:
    """
    Combine the synthetic curve with real trade points into one time-sorted frame.

    Curve rows carry price/accrual = None and is_trade = False. Trade rows carry
    all four fields, fair_value being evaluated at the trade time with the
    weighted rate. Sort is stable: ties keep curve rows before trade rows,
    and trades keep their record order.
    """
    curve_part = pd.DataFrame(
        {
            "time": pd.DatetimeIndex(curve["time"]),
            "price": pd.Series([None] * len(curve), dtype=object),
            "accrual": pd.Series([None] * len(curve), dtype=object),
            "fair_value": curve["fair_value"].to_numpy(dtype=float),
            "is_trade": np.zeros(len(curve), dtype=bool),
        },
        columns=SERIES_COLUMNS,
    )

    trade_part = pd.DataFrame(
        {
            "time": result.times,
            "price": pd.Series(result.price, dtype=object),
            "accrual": pd.Series(result.accrual, dtype=object),
            "fair_value": yt_price(result.weighted_rate, result.hours),
            "is_trade": np.ones(len(result), dtype=bool),
        },
        columns=SERIES_COLUMNS,
    )

    parts = [p for p in (curve_part, trade_part) if len(p)]
    if not parts:
        return curve_part

    merged = pd.concat(parts, ignore_index=True)
    merged["time"] = pd.to_datetime(merged["time"], utc=True)
    return merged.sort_values("time", kind="stable").reset_index(drop=True)
