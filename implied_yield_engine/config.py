from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


HOURS_PER_YEAR = 8760.0
FAIR_CURVE_POINTS = 50
MAX_HISTOGRAM_BINS = 20


class RewardPeriod(str, Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"


PERIOD_HOURS = {
    RewardPeriod.HOUR: 1.0,
    RewardPeriod.DAY: 24.0,
    RewardPeriod.WEEK: 168.0,
}


def as_period(period) -> RewardPeriod:
    """Normalise "day" / RewardPeriod.DAY to a RewardPeriod."""
    try:
        return RewardPeriod(str(getattr(period, "value", period)).lower())
    except ValueError:
        raise ValueError(f"Unsupported reward period: {period!r}") from None


def hours_in_period(period) -> float:
    return PERIOD_HOURS[as_period(period)]


@dataclass(frozen=True)
class RewardParams:
    """
    Reward accrual parameters for a position.

    points_per_period is earned per unit of underlying per `period`,
    then scaled by `multiplier`.
    """
    underlying_amount: float = 1500.0
    points_per_period: float = 1.0
    period: RewardPeriod = RewardPeriod.DAY
    multiplier: float = 36.0

    def __post_init__(self):
        object.__setattr__(self, "period", as_period(self.period))

        for name in ("underlying_amount", "points_per_period", "multiplier"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
                raise ValueError(f"{name} must be a finite number, got {v!r}")
            object.__setattr__(self, name, float(v))

    @property
    def period_hours(self) -> float:
        return hours_in_period(self.period)

    @property
    def points_per_hour(self) -> float:
        return self.points_per_period / self.period_hours

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RewardParams":
        """
        Build from a plain mapping. Accepts snake_case keys and the
        camelCase keys used by the web front end.
        """
        aliases = {
            "underlying_amount": ("underlying_amount", "underlyingAmount"),
            "points_per_period": ("points_per_period", "pointsPerPeriodPerUnderlying", "pointsPerDay"),
            "period": ("period", "pointsPeriod"),
            "multiplier": ("multiplier", "pendleMultiplier"),
        }
        kwargs = {}
        for field_name, keys in aliases.items():
            for k in keys:
                if k in values and values[k] is not None:
                    v = values[k]
                    if field_name != "period" and isinstance(v, str):
                        try:
                            v = float(v)
                        except ValueError:
                            raise ValueError(f"{k} must be numeric, got {v!r}") from None
                    kwargs[field_name] = v
                    break

        unknown = set(values) - {k for keys in aliases.values() for k in keys}
        if unknown:
            raise ValueError(f"Unknown reward parameter(s): {sorted(unknown)}")

        return cls(**kwargs)
