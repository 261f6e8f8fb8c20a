from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

import numpy as np
import pandas as pd

from .config import MAX_HISTOGRAM_BINS


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistogramBin:
    rate_center: float
    volume: float


def sturges_bin_count(n: int, max_bins: int = MAX_HISTOGRAM_BINS) -> int:
    """Sturges' rule, ceil(log2(n)) + 1, capped at max_bins. 0 for n == 0."""
    if max_bins < 1:
        raise ValueError("max_bins must be positive")
    if n <= 0:
        return 0
    return min(max_bins, math.ceil(math.log2(n)) + 1)


def volume_histogram(pairs, max_bins: int = MAX_HISTOGRAM_BINS, decimals: int = 2) -> List[HistogramBin]:
    """
    Equal-width histogram of traded volume against rate.

    pairs: array-like of (rate, volume), shape (n, 2). Pairs with a non-finite
    rate or volume are excluded. Bin width is (max - min) / bin_count, or 1.0
    when all rates are equal (everything lands in bin 0). Indices are clamped
    to the last bin to absorb rounding at the max edge.

    Returns bins with volume > 0, ascending, centers rounded to `decimals`.
    """
    arr = np.asarray(pairs, dtype=float).reshape(-1, 2)
    ok = np.isfinite(arr[:, 0]) & np.isfinite(arr[:, 1])
    rates, vols = arr[ok, 0], arr[ok, 1]

    n_bins = sturges_bin_count(len(rates), max_bins)
    if n_bins == 0:
        return []

    lo, hi = float(rates.min()), float(rates.max())
    span = hi - lo
    width = span / n_bins if span != 0 else 1.0

    if span == 0:
        idx = np.zeros(len(rates), dtype=int)
    else:
        idx = np.floor((rates - lo) / width).astype(int)
        idx = np.clip(idx, 0, n_bins - 1)

    totals = np.bincount(idx, weights=vols, minlength=n_bins)
    centers = lo + (np.arange(n_bins) + 0.5) * width

    logger.debug("Histogram: %s pairs into %s bins of width %s", len(rates), n_bins, width)

    return [
        HistogramBin(rate_center=round(float(c), decimals), volume=float(v))
        for c, v in zip(centers, totals)
        if v > 0
    ]


def histogram_frame(bins: List[HistogramBin]) -> pd.DataFrame:
    return pd.DataFrame(
        {"rate_center": [b.rate_center for b in bins], "volume": [b.volume for b in bins]},
        columns=["rate_center", "volume"],
    )
