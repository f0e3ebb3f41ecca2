"""
Quote Source

CONTRACT:
    Input:  ticker + date range
    Output: PriceSeries, QuoteSummary

RESPONSIBILITIES:
    - Fetch trailing daily history from Yahoo Finance
    - Fetch quote summary (name, type, latest price)
    - Normalize to standard schemas
    - Report empty history as NoData, failures/timeouts as SourceUnavailable

NO CACHING - every request fetches fresh data.
"""

from stockwatch.services.quotes.interface import QuoteSource
from stockwatch.services.quotes.yahoo_adapter import YahooQuoteSource

__all__ = [
    "QuoteSource",
    "YahooQuoteSource",
]
