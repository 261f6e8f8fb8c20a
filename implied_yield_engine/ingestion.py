from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping

import numpy as np
import pandas as pd

from .utils import to_float, parse_instant, nested_get


logger = logging.getLogger(__name__)

OBSERVATION_COLUMNS = ["time", "implied_rate", "valuation_usd"]


def raw_valuation(record: Mapping[str, Any]) -> Any:
    """Nested valuation.usd wins over the flat valuation_usd field."""
    usd = nested_get(record, "valuation", "usd")
    if usd is None:
        usd = nested_get(record, "valuation_usd")
    return usd


def normalize_trades(records: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """
    Normalize raw trade records into aligned observation columns.

    - rows whose timestamp does not parse are dropped
    - implied_rate: NaN when missing/invalid/non-finite (row is kept)
    - valuation_usd: 0.0 when missing/invalid/non-finite

    Original record order is preserved; the index is 0..n-1.
    """
    times: List[pd.Timestamp] = []
    rates: List[float] = []
    usds: List[float] = []

    n_seen = 0
    for record in records:
        n_seen += 1
        t = parse_instant(nested_get(record, "timestamp"))
        if t is None:
            continue

        times.append(t)
        rates.append(to_float(nested_get(record, "impliedApy")))

        usd = to_float(raw_valuation(record))
        usds.append(usd if np.isfinite(usd) else 0.0)

    dropped = n_seen - len(times)
    if dropped:
        logger.debug("Dropped %s of %s trade records with unparseable timestamps", dropped, n_seen)

    return pd.DataFrame(
        {
            "time": pd.DatetimeIndex(times, tz="UTC"),
            "implied_rate": np.array(rates, dtype=float),
            "valuation_usd": np.array(usds, dtype=float),
        },
        columns=OBSERVATION_COLUMNS,
    )


def rate_volume_pairs(records: Iterable[Mapping[str, Any]], percent: bool = True) -> np.ndarray:
    """
    (rate, volume) pairs for the volume distribution, shape (n, 2).

    Unlike normalize_trades, a missing valuation excludes the pair instead of
    zero-weighting it, and timestamps are not consulted.
    """
    scale = 100.0 if percent else 1.0

    pairs = []
    for record in records:
        rate = to_float(nested_get(record, "impliedApy"))
        vol = to_float(raw_valuation(record))
        if np.isfinite(rate) and np.isfinite(vol):
            pairs.append((rate * scale, vol))

    if not pairs:
        return np.empty((0, 2), dtype=float)
    return np.array(pairs, dtype=float)
