import numpy as np
import pytest

from implied_yield_engine.histogram import (
    HistogramBin,
    sturges_bin_count,
    volume_histogram,
    histogram_frame,
)


@pytest.mark.parametrize("n,expected", [(0, 0), (1, 1), (2, 2), (3, 3), (8, 4), (9, 5), (1_000_000, 20)])
def test_sturges_bin_count(n, expected):
    assert sturges_bin_count(n) == expected


def test_empty_pairs_give_no_bins():
    assert volume_histogram([]) == []
    assert volume_histogram([(np.nan, 10.0), (5.0, np.inf)]) == []


def test_identical_rates_collapse_to_one_bin():
    pairs = [(7.5, 100.0), (7.5, 50.0), (7.5, 25.0), (7.5, 1.0)]
    bins = volume_histogram(pairs)

    assert bins == [HistogramBin(rate_center=8.0, volume=176.0)], "Width 1.0, center min + 0.5"


def test_max_edge_clamped_into_last_bin():
    # n=4 -> 3 bins of width 1.0; rate 3.0 lands at index 3 and is clamped to 2
    bins = volume_histogram([(0.0, 1.0), (1.0, 2.0), (2.0, 4.0), (3.0, 8.0)])

    assert [b.rate_center for b in bins] == [0.5, 1.5, 2.5]
    assert [b.volume for b in bins] == [1.0, 2.0, 12.0]


def test_zero_volume_bins_suppressed():
    # n=3 -> 3 bins of width 10/3; the middle bin is empty
    bins = volume_histogram([(0.0, 5.0), (1.0, 5.0), (10.0, 7.0)])

    assert bins == [
        HistogramBin(rate_center=1.67, volume=10.0),
        HistogramBin(rate_center=8.33, volume=7.0),
    ]


def test_volume_conserved_and_centers_in_range():
    rng = np.random.default_rng(7)
    rates = rng.normal(8.0, 1.5, size=500)
    vols = rng.uniform(1.0, 1000.0, size=500)
    pairs = np.column_stack([rates, vols])
    pairs[::50, 0] = np.nan  # excluded entirely

    ok = np.isfinite(pairs[:, 0])
    bins = volume_histogram(pairs)

    assert sum(b.volume for b in bins) == pytest.approx(vols[ok].sum())
    centers = [b.rate_center for b in bins]
    assert centers == sorted(centers)
    assert len(bins) <= 20
    assert min(centers) >= round(rates[ok].min(), 2) - 0.01
    assert max(centers) <= round(rates[ok].max(), 2) + 0.01


def test_rounding_decimals():
    bins = volume_histogram([(0.0, 1.0), (1.0, 1.0), (10.0, 1.0)], decimals=0)
    assert [b.rate_center for b in bins] == [2.0, 8.0]


def test_histogram_frame():
    df = histogram_frame([HistogramBin(1.0, 2.0), HistogramBin(3.0, 4.0)])
    assert list(df.columns) == ["rate_center", "volume"]
    assert df["volume"].sum() == 6.0

    assert list(histogram_frame([]).columns) == ["rate_center", "volume"]


def test_invalid_max_bins():
    with pytest.raises(ValueError):
        volume_histogram([(1.0, 1.0)], max_bins=0)
