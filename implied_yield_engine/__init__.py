"""
Implied Yield Engine

Trade analytics for a yield token position:
- ingestion: raw trade records -> normalized observations
- pricing: yield token price + points accrual from rate and hours to maturity
- aggregation: volume-weighted implied rate + per-trade series
- curves: synthetic fair value curve to maturity + combined chart series
- histogram: volume vs implied rate distribution
- analytics: one-call report bundle
- config: reward parameters + constants
- utils: coercion + time helpers

Pure functions only: no I/O. Callers fetch trades and render results.
"""
from .config import RewardParams, RewardPeriod
from .analytics import AnalyticsReport, build_analytics

__all__ = ["RewardParams", "RewardPeriod", "AnalyticsReport", "build_analytics"]
