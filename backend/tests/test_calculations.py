"""Unit tests for the NumPy indicator primitives."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from stockwatch.services.indicators.calculations import (
    bollinger_bands,
    ema,
    get_last_valid,
    macd,
    rsi,
    sma,
    tail_valid,
)


class TestMovingAverages:
    def test_sma_window_mean(self):
        data = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        result = sma(data, 3)
        assert np.isnan(result[:2]).all()
        assert result[2:].tolist() == pytest.approx([2.0, 3.0, 4.0])

    def test_sma_short_series_is_all_nan(self):
        assert np.isnan(sma(np.array([1.0, 2.0]), 3)).all()

    def test_ema_seeded_with_first_value(self):
        data = np.array([1.0, 2.0, 3.0, 4.0])
        result = ema(data, 3)
        assert np.isnan(result[:2]).all()
        # multiplier 2 / (3 + 1) = 0.5: 1 -> 1.5 -> 2.25 -> 3.125
        assert result[2] == pytest.approx(2.25)
        assert result[3] == pytest.approx(3.125)

    def test_ema_matches_pandas_adjust_false(self):
        data = np.array([100 * 1.01**i + (i % 3) for i in range(40)])
        expected = pd.Series(data).ewm(span=12, adjust=False).mean().to_numpy()

        result = ema(data, 12)

        assert np.isnan(result[:11]).all()
        assert result[11:] == pytest.approx(expected[11:])

    def test_ema_skips_leading_nans(self):
        data = np.array([np.nan, np.nan, 1.0, 2.0, 3.0, 4.0])
        result = ema(data, 3)
        assert np.isnan(result[:4]).all()
        assert result[4] == pytest.approx(2.25)
        assert result[5] == pytest.approx(3.125)


class TestRSI:
    def test_only_gains_is_100(self):
        closes = np.arange(100.0, 120.0)
        assert get_last_valid(rsi(closes, 14)) == pytest.approx(100.0)

    def test_only_losses_is_0(self):
        closes = np.arange(120.0, 100.0, -1.0)
        assert get_last_valid(rsi(closes, 14)) == pytest.approx(0.0)

    def test_flat_series_is_50(self):
        assert get_last_valid(rsi(np.full(20, 42.0), 14)) == pytest.approx(50.0)

    def test_wilder_smoothing(self):
        # gains: 1, 0, 2 ; losses: 0, 1, 0 with period 2
        closes = np.array([10.0, 11.0, 10.0, 12.0])
        result = rsi(closes, 2)
        # seed: avg_gain 0.5, avg_loss 0.5 -> 50
        assert result[2] == pytest.approx(50.0)
        # avg_gain (0.5 + 2) / 2 = 1.25, avg_loss (0.5 + 0) / 2 = 0.25 -> rs 5
        assert result[3] == pytest.approx(100 - 100 / 6)

    def test_exactly_period_closes_yields_last_value(self):
        closes = np.array([10.0, 11.0, 12.0])
        result = rsi(closes, 3)
        assert np.isnan(result[:2]).all()
        assert result[2] == pytest.approx(100.0)

    def test_single_close_period_one(self):
        assert get_last_valid(rsi(np.array([10.0]), 1)) == pytest.approx(50.0)


class TestMACD:
    def test_histogram_is_macd_minus_signal(self):
        closes = np.array([100 * 1.01**i for i in range(50)])
        macd_line, signal_line, histogram = macd(closes, 12, 26, 9)

        valid = ~np.isnan(histogram)
        assert valid.sum() == 50 - (26 - 1) - (9 - 1)
        assert histogram[valid] == pytest.approx(macd_line[valid] - signal_line[valid])

    def test_too_short_for_slow_ema(self):
        _, _, histogram = macd(np.arange(1.0, 20.0), 12, 26, 9)
        assert np.isnan(histogram).all()


class TestBollinger:
    def test_bands_use_population_std(self):
        closes = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        upper, middle, lower = bollinger_bands(closes, 5, 2.0)
        std = np.std(closes)
        assert middle[-1] == pytest.approx(3.0)
        assert upper[-1] == pytest.approx(3.0 + 2 * std)
        assert lower[-1] == pytest.approx(3.0 - 2 * std)


class TestUtilities:
    def test_get_last_valid(self):
        assert get_last_valid(np.array([1.0, 2.0, np.nan])) == 2.0
        assert get_last_valid(np.array([np.nan])) is None

    def test_tail_valid(self):
        arr = np.array([np.nan, 1.0, 2.0, 3.0])
        assert tail_valid(arr, 2).tolist() == [2.0, 3.0]
        assert tail_valid(arr, 10).tolist() == [1.0, 2.0, 3.0]
