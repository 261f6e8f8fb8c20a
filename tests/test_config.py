import pytest

from implied_yield_engine.config import RewardParams, RewardPeriod, hours_in_period


def test_defaults():
    p = RewardParams()
    assert p.underlying_amount == 1500.0
    assert p.period is RewardPeriod.DAY
    assert p.multiplier == 36.0
    assert p.points_per_hour == pytest.approx(1.0 / 24.0)


def test_period_normalised_from_string():
    p = RewardParams(period="WEEK")
    assert p.period is RewardPeriod.WEEK
    assert p.period_hours == 168.0


@pytest.mark.parametrize("period,hours", [("hour", 1.0), (RewardPeriod.DAY, 24.0), ("week", 168.0)])
def test_hours_in_period(period, hours):
    assert hours_in_period(period) == hours


def test_unknown_period_raises():
    with pytest.raises(ValueError):
        RewardParams(period="month")


@pytest.mark.parametrize("field", ["underlying_amount", "points_per_period", "multiplier"])
@pytest.mark.parametrize("bad", [float("nan"), float("inf"), "10", None, True])
def test_non_finite_or_non_numeric_raises(field, bad):
    with pytest.raises(ValueError):
        RewardParams(**{field: bad})


def test_params_are_frozen():
    p = RewardParams()
    with pytest.raises(AttributeError):
        p.multiplier = 1.0


def test_from_mapping_camel_case():
    p = RewardParams.from_mapping(
        {"underlyingAmount": "250", "pointsPerPeriodPerUnderlying": 2, "pointsPeriod": "hour", "multiplier": 5}
    )
    assert p == RewardParams(underlying_amount=250.0, points_per_period=2.0, period="hour", multiplier=5.0)


def test_from_mapping_rejects_unknown_and_bad_values():
    with pytest.raises(ValueError):
        RewardParams.from_mapping({"multiplier": 2, "leverage": 3})
    with pytest.raises(ValueError):
        RewardParams.from_mapping({"multiplier": "lots"})
