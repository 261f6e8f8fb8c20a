from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

import numpy as np
import pandas as pd

from .config import RewardParams
from .ingestion import normalize_trades
from .pricing import yt_price, points_accrual
from .utils import hours_between, require_instant


logger = logging.getLogger(__name__)


def weighted_implied_rate(rates, valuations) -> float:
    """
    Volume-weighted average implied rate.

    Only indices with a finite rate and finite valuation enter the numerator;
    every finite valuation enters the denominator. NaN (undefined) when the
    total volume is not positive, never 0.
    """
    r = np.asarray(rates, dtype=float)
    v = np.asarray(valuations, dtype=float)
    if r.shape != v.shape:
        raise ValueError(f"rates/valuations length mismatch: {r.shape} vs {v.shape}")

    v_ok = np.isfinite(v)
    total = float(np.sum(v[v_ok]))
    if not total > 0:
        return np.nan

    both = v_ok & np.isfinite(r)
    return float(np.sum(r[both] * v[both]) / total)


@dataclass(frozen=True, eq=False)
class AggregationResult:
    """
    Per-trade analytics. times/price/accrual/hours are aligned index-for-index
    with the normalized observations, in original record order.
    """
    weighted_rate: float
    maturity: pd.Timestamp
    observations: pd.DataFrame
    hours: np.ndarray
    price: np.ndarray
    accrual: np.ndarray

    @property
    def times(self) -> pd.DatetimeIndex:
        return pd.DatetimeIndex(self.observations["time"])

    def __len__(self) -> int:
        return len(self.observations)

    def to_frame(self) -> pd.DataFrame:
        out = self.observations.copy()
        out["hours_to_maturity"] = self.hours
        out["price"] = self.price
        out["accrual"] = self.accrual
        return out


def compute_trade_analytics(
    records: Iterable[Mapping[str, Any]],
    maturity,
    params: Optional[RewardParams] = None,
) -> AggregationResult:
    """
    Normalize trades, then compute the weighted implied rate and the
    per-trade price and points accrual series.
    """
    if params is None:
        params = RewardParams()
    maturity = require_instant(maturity, "maturity")

    obs = normalize_trades(records)
    rates = obs["implied_rate"].to_numpy(dtype=float)

    weighted = weighted_implied_rate(rates, obs["valuation_usd"].to_numpy(dtype=float))
    if np.isnan(weighted):
        logger.debug("Weighted implied rate undefined (%s observations, zero total volume)", len(obs))

    hours = hours_between(obs["time"], maturity)
    price = yt_price(rates, hours)
    accrual = points_accrual(price, hours, params)

    return AggregationResult(
        weighted_rate=weighted,
        maturity=maturity,
        observations=obs,
        hours=hours,
        price=price,
        accrual=accrual,
    )


def latest_accrual(result: AggregationResult) -> float:
    """
    Points accrual of the most recent trade (first one wins on time ties).
    NaN if there are no trades or that accrual is not finite.
    """
    if len(result) == 0:
        return np.nan

    i = int(np.argmax(result.times.asi8))
    a = float(result.accrual[i])
    return a if np.isfinite(a) else np.nan
