"""
Indicator Engine Implementation

Builds an IndicatorSnapshot from a close-price sequence.
Pure Python/NumPy calculations, no I/O, no shared state.
"""

import logging
from typing import Sequence, Union

import numpy as np

from stockwatch.schemas.indicators import (
    BollingerBands,
    CrossPosition,
    IndicatorParams,
    IndicatorSnapshot,
    MACDPoint,
)
from stockwatch.services.base import InsufficientDataError
from stockwatch.services.indicators.calculations import (
    bollinger_bands,
    get_last_valid,
    macd,
    rsi,
    sma,
    tail_valid,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "IndicatorEngine"

MACD_POINTS = 14
SMA_POINTS = 10
SIGNIFICANT_DIGITS = 8


def compute_indicators(
    closes: Sequence[float],
    params: Union[IndicatorParams, dict, None] = None,
) -> IndicatorSnapshot:
    """
    Calculate the indicator snapshot for a close sequence.

    Args:
        closes: Daily closes, oldest first
        params: Indicator parameters (defaults when None)

    Returns:
        IndicatorSnapshot with the latest RSI, the last 14 MACD points,
        the latest Bollinger Bands and the last 10 SMA values

    Raises:
        InvalidParamsError: Non-numeric or non-positive parameter
        InsufficientDataError: Fewer closes than the RSI period
    """
    params = _validated(params)

    if len(closes) < params.rsi_period:
        raise InsufficientDataError(
            SERVICE_NAME,
            f"RSI period {params.rsi_period} requires at least {params.rsi_period} closes, "
            f"got {len(closes)}",
            details={"required": params.rsi_period, "available": len(closes)},
        )

    data = np.asarray(closes, dtype=float)

    rsi_val = get_last_valid(rsi(data, params.rsi_period))
    macd_line, signal_line, histogram = macd(
        data, params.macd_fast, params.macd_slow, params.macd_signal
    )
    macd_points = _macd_points(macd_line, signal_line, histogram)
    bands = _bollinger(data, params)
    sma_vals = tail_valid(sma(data, params.sma_period), SMA_POINTS)

    # Down when no histogram exists yet or it sits exactly at zero.
    # Read from the unrounded series; rounding never flips a sign.
    last_histogram = get_last_valid(histogram)
    if last_histogram is not None and last_histogram > 0:
        cross = CrossPosition.UP
    else:
        cross = CrossPosition.DOWN

    return IndicatorSnapshot(
        rsi=round(rsi_val, 2),
        macd=macd_points,
        cross_position=cross,
        bollinger=bands,
        sma=tuple(_round_sig(v) for v in sma_vals),
    )


def _validated(params: Union[IndicatorParams, dict, None]) -> IndicatorParams:
    # Re-validate: models built with model_construct or mutated after
    # construction skip field constraints
    if params is None:
        return IndicatorParams()
    if isinstance(params, IndicatorParams):
        params = params.model_dump()
    return IndicatorParams.from_overrides(params)


def _macd_points(
    macd_line: np.ndarray, signal_line: np.ndarray, histogram: np.ndarray
) -> tuple[MACDPoint, ...]:
    defined = np.flatnonzero(~np.isnan(histogram))[-MACD_POINTS:]
    return tuple(
        MACDPoint(
            macd_line=_round_sig(macd_line[i]),
            signal_line=_round_sig(signal_line[i]),
            histogram=_round_sig(histogram[i]),
        )
        for i in defined
    )


def _bollinger(data: np.ndarray, params: IndicatorParams) -> BollingerBands:
    # Shrink the window to the available history on short series
    period = min(params.bb_period, len(data))
    upper, middle, lower = bollinger_bands(data, period, params.bb_std_dev)

    return BollingerBands(
        upper=_round_sig(get_last_valid(upper)),
        middle=_round_sig(get_last_valid(middle)),
        lower=_round_sig(get_last_valid(lower)),
    )


def _round_sig(value: float) -> float:
    """Round to SIGNIFICANT_DIGITS significant digits (sub-cent prices keep their detail)."""
    value = float(value)
    if value == 0 or not np.isfinite(value):
        return value
    return float(f"{value:.{SIGNIFICANT_DIGITS}g}")
