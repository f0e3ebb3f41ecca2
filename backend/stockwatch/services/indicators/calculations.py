"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic. Arrays are aligned with the input closes;
positions without enough history hold NaN.
"""

import numpy as np
from typing import Optional


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """Simple Moving Average."""
    result = np.full(len(data), np.nan)
    if len(data) < period:
        return result

    for i in range(period - 1, len(data)):
        result[i] = np.mean(data[i - period + 1 : i + 1])
    return result


def ema(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average.

    Recursive form seeded with the first valid value, the same as pandas
    `ewm(span=period, adjust=False)`. Leading NaNs in `data` are skipped and
    the first `period - 1` outputs stay NaN as warm-up.
    """
    result = np.full(len(data), np.nan)

    valid = np.flatnonzero(~np.isnan(data))
    if len(valid) < period:
        return result

    start = valid[0]
    multiplier = 2 / (period + 1)

    smoothed = np.empty(len(data) - start)
    smoothed[0] = data[start]
    for i in range(1, len(smoothed)):
        smoothed[i] = (data[start + i] - smoothed[i - 1]) * multiplier + smoothed[i - 1]

    result[start + period - 1 :] = smoothed[period - 1 :]
    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """
    Relative Strength Index (Wilder smoothing).

    The first value sits at index `period` and is seeded with the simple mean
    of the first `period` gains/losses. A series of exactly `period` closes
    seeds from the `period - 1` changes available and yields a single value
    at the last index.
    """
    result = np.full(len(closes), np.nan)
    if len(closes) < max(period, 2):
        if len(closes) == period:
            # period == 1 with a single close: no price change to measure
            result[-1] = 50.0
        return result

    # Calculate price changes
    deltas = np.diff(closes)

    # Separate gains and losses
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average
    seed_len = min(period, len(deltas))
    avg_gain = np.mean(gains[:seed_len])
    avg_loss = np.mean(losses[:seed_len])

    result[seed_len] = _rsi_value(avg_gain, avg_loss)

    # Subsequent RSI values using smoothed averages
    for i in range(seed_len, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result[i + 1] = _rsi_value(avg_gain, avg_loss)

    return result


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence).

    Returns: (macd_line, signal_line, histogram)
    """
    fast_ema = ema(closes, fast_period)
    slow_ema = ema(closes, slow_period)

    macd_line = fast_ema - slow_ema

    # Signal line is EMA of MACD line
    signal_line = ema(macd_line, signal_period)

    # Histogram
    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Bollinger Bands (population standard deviation).

    Returns: (upper, middle, lower)
    """
    middle = sma(closes, period)

    # Standard deviation
    std = np.full(len(closes), np.nan)
    for i in range(period - 1, len(closes)):
        std[i] = np.std(closes[i - period + 1 : i + 1])

    upper = middle + (std_dev * std)
    lower = middle - (std_dev * std)

    return upper, middle, lower


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_last_valid(arr: np.ndarray) -> Optional[float]:
    """Get last non-NaN value from array."""
    valid = arr[~np.isnan(arr)]
    return float(valid[-1]) if len(valid) > 0 else None


def tail_valid(arr: np.ndarray, count: int) -> np.ndarray:
    """Last `count` non-NaN values, oldest first."""
    valid = arr[~np.isnan(arr)]
    return valid[-count:] if count > 0 else valid[:0]
