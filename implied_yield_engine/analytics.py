from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd

from .aggregation import AggregationResult, compute_trade_analytics, latest_accrual
from .config import FAIR_CURVE_POINTS, MAX_HISTOGRAM_BINS, RewardParams
from .curves import fair_value_curve, merge_series
from .histogram import HistogramBin, volume_histogram, histogram_frame
from .ingestion import rate_volume_pairs
from .utils import require_instant


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class AnalyticsReport:
    """
    Everything a presentation layer needs for one market.

    weighted_rate is NaN when undefined (no trades / zero volume); in that
    case the fair value curve is all NaN and should not be rendered as data.
    Histogram rate centers are in percent.
    """
    weighted_rate: float
    maturity: pd.Timestamp
    series: pd.DataFrame
    histogram: List[HistogramBin]
    latest_accrual: float
    trades: AggregationResult

    @property
    def weighted_rate_percent(self) -> float:
        return self.weighted_rate * 100.0

    @property
    def is_degenerate(self) -> bool:
        return bool(np.isnan(self.weighted_rate))

    def histogram_frame(self) -> pd.DataFrame:
        return histogram_frame(self.histogram)

    def series_records(self) -> List[Dict[str, Any]]:
        """
        Combined series as plain dicts. Curve points carry None for price and
        accrual; undefined trade values stay NaN.
        """
        out = []
        for row in self.series.itertuples(index=False):
            out.append(
                {
                    "time": row.time,
                    "price": None if row.price is None else float(row.price),
                    "accrual": None if row.accrual is None else float(row.accrual),
                    "fair_value": float(row.fair_value),
                }
            )
        return out


def build_analytics(
    records: Iterable[Mapping[str, Any]],
    maturity,
    params: Optional[RewardParams] = None,
    now=None,
    n_curve_points: int = FAIR_CURVE_POINTS,
    max_bins: int = MAX_HISTOGRAM_BINS,
) -> AnalyticsReport:
    """
    Full analytics bundle for one market's trades.

    `now` anchors the fair value curve; it defaults to the current UTC time,
    so pass it explicitly for reproducible output.
    """
    records = list(records)
    if params is None:
        params = RewardParams()
    now = pd.Timestamp.now(tz="UTC") if now is None else require_instant(now, "now")

    result = compute_trade_analytics(records, maturity, params)
    curve = fair_value_curve(result.weighted_rate, now, result.maturity, n_curve_points)
    series = merge_series(curve, result)

    bins = volume_histogram(rate_volume_pairs(records, percent=True), max_bins=max_bins)

    if np.isnan(result.weighted_rate):
        logger.debug("No usable volume in %s records; fair value curve is undefined", len(records))

    return AnalyticsReport(
        weighted_rate=result.weighted_rate,
        maturity=result.maturity,
        series=series,
        histogram=bins,
        latest_accrual=latest_accrual(result),
        trades=result,
    )
