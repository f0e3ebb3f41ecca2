"""
Indicator Engine

CONTRACT:
    Input:  close-price sequence + IndicatorParams
    Output: IndicatorSnapshot

RESPONSIBILITIES:
    - RSI (Wilder smoothing), latest value
    - MACD with EMA fast/slow/signal, last 14 points
    - Bollinger Bands, latest point
    - SMA, last 10 values
    - Cross position from the latest MACD histogram

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from stockwatch.services.indicators.service import compute_indicators

__all__ = [
    "compute_indicators",
]
