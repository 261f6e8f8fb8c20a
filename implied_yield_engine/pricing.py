from __future__ import annotations

import numpy as np

from .config import HOURS_PER_YEAR, RewardParams


def yt_price(rate, hours) -> np.ndarray:
    """
    Yield token price implied by an annualized rate and hours to maturity:

        p = 1 - (1 + r) ** (-h / 8760)

    Vectorized over numpy-broadcastable inputs. NaN wherever rate or hours
    is non-finite, or where the power is undefined (r < -1).
    At h == 0 the price is 0 for any finite r.
    """
    r = np.asarray(rate, dtype=float)
    h = np.asarray(hours, dtype=float)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        p = 1.0 - np.power(1.0 + r, -h / HOURS_PER_YEAR)

    return np.where(np.isfinite(r) & np.isfinite(h), p, np.nan)


def points_accrual(price, hours, params: RewardParams) -> np.ndarray:
    """
    Reward points accrued holding 1/price yield tokens until maturity:

        a = (1 / p) * h * points_per_hour * underlying_amount * multiplier

    NaN where the price or hours are NaN. A zero price follows IEEE
    division (inf, or NaN at exactly maturity where h == 0).
    """
    p = np.asarray(price, dtype=float)
    h = np.asarray(hours, dtype=float)

    scale = params.points_per_hour * params.underlying_amount * params.multiplier
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        a = (1.0 / p) * h * scale

    return np.where(np.isnan(p) | np.isnan(h), np.nan, a)
