"""
StockWatch Schema Contracts

This module defines all JSON contracts between system components.
Fields are snake_case in Python and camelCase on the wire.
"""

from stockwatch.schemas.market import (
    CamelModel,
    PricePoint,
    PriceSeries,
    QuoteSummary,
)
from stockwatch.schemas.indicators import (
    BollingerBands,
    CrossPosition,
    IndicatorParams,
    IndicatorSnapshot,
    MACDPoint,
)
from stockwatch.schemas.watchlist import (
    AddStockRequest,
    GeneralInfo,
    TickerSnapshot,
    WatchlistResponse,
    WatchlistUpdateResponse,
    dump_watchlist,
    load_watchlist,
    normalize_ticker,
)

__all__ = [
    # Quote source
    "CamelModel",
    "PricePoint",
    "PriceSeries",
    "QuoteSummary",
    # Indicators
    "BollingerBands",
    "CrossPosition",
    "IndicatorParams",
    "IndicatorSnapshot",
    "MACDPoint",
    # Watchlist
    "AddStockRequest",
    "GeneralInfo",
    "TickerSnapshot",
    "WatchlistResponse",
    "WatchlistUpdateResponse",
    "dump_watchlist",
    "load_watchlist",
    "normalize_ticker",
]
