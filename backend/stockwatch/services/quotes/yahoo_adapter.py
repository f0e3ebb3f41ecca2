"""
Yahoo Finance Quote Adapter

Fetches REAL daily history and quote summaries from Yahoo Finance.
yfinance is synchronous; calls run in the default executor so the event
loop stays free and the await can be cancelled with the request.
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import Any

import pandas as pd
import yfinance as yf

from stockwatch.schemas.market import PricePoint, PriceSeries, QuoteSummary
from stockwatch.services.base import NoDataError, SourceUnavailableError
from stockwatch.services.quotes.interface import QuoteSource

logger = logging.getLogger(__name__)


def get_yahoo_symbol(ticker: str) -> str:
    """Convert a user-supplied ticker to Yahoo Finance format."""
    return ticker.upper().strip()


class YahooQuoteSource(QuoteSource):
    """
    Quote source backed by yfinance.

    Every call is bounded by `timeout_seconds`; a timeout is reported as
    SourceUnavailable. No retries.
    """

    def __init__(self, timeout_seconds: float = 15.0):
        self.timeout_seconds = timeout_seconds

    @property
    def name(self) -> str:
        return "Yahoo Finance"

    async def fetch_history(
        self, ticker: str, from_date: date, to_date: date
    ) -> PriceSeries:
        """
        Fetch daily closes between from_date and to_date (inclusive).

        Raises:
            NoDataError: Yahoo returned no quotes
            SourceUnavailableError: Request failed or timed out
        """
        yahoo_symbol = get_yahoo_symbol(ticker)
        logger.info(f"Fetching {yahoo_symbol} history {from_date} -> {to_date} from Yahoo Finance...")

        hist = await self._run(
            yahoo_symbol,
            lambda: yf.Ticker(yahoo_symbol).history(
                start=from_date.isoformat(),
                # yfinance treats `end` as exclusive
                end=(to_date + timedelta(days=1)).isoformat(),
                interval="1d",
                auto_adjust=False,
            ),
        )

        if hist is None or hist.empty:
            logger.warning(f"No data returned for {yahoo_symbol}")
            raise NoDataError(self.name, f"No quotes found for {yahoo_symbol}")

        points = _to_points(hist)
        if not points:
            logger.warning(f"No usable closes returned for {yahoo_symbol}")
            raise NoDataError(self.name, f"No quotes found for {yahoo_symbol}")

        return PriceSeries(ticker=yahoo_symbol, points=points)

    async def fetch_summary(self, ticker: str) -> QuoteSummary:
        """Fetch quote metadata. Failures yield an empty summary."""
        yahoo_symbol = get_yahoo_symbol(ticker)

        try:
            info = await self._run(yahoo_symbol, lambda: yf.Ticker(yahoo_symbol).info)
        except SourceUnavailableError as e:
            logger.warning(f"Could not get quote summary for {yahoo_symbol}: {e.message}")
            return QuoteSummary()

        info = info or {}
        return QuoteSummary(
            symbol=info.get("symbol"),
            long_name=info.get("longName"),
            quote_type=info.get("quoteType"),
            regular_market_price=_as_float(info.get("regularMarketPrice")),
        )

    async def _run(self, yahoo_symbol: str, call) -> Any:
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(None, call),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Yahoo Finance timed out for {yahoo_symbol} after {self.timeout_seconds}s")
            raise SourceUnavailableError(
                self.name, f"Timed out fetching {yahoo_symbol}"
            ) from e
        except Exception as e:
            logger.error(f"Error fetching {yahoo_symbol} from Yahoo Finance: {e}")
            raise SourceUnavailableError(
                self.name, f"Failed to fetch {yahoo_symbol}: {e}"
            ) from e


def _to_points(hist: pd.DataFrame) -> list[PricePoint]:
    """Convert a yfinance history frame to ascending, de-duplicated closes."""
    by_date: dict[date, float] = {}
    for idx, row in hist.sort_index().iterrows():
        close = row.get("Close")
        if close is None or pd.isna(close) or close <= 0:
            continue
        # Later rows win for the same calendar day
        by_date[idx.date()] = float(close)

    return [PricePoint(date=d, close=c) for d, c in sorted(by_date.items())]


def _as_float(value: Any):
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None
