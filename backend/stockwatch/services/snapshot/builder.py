"""
Snapshot Builder

Combines quote metadata and the indicator snapshot into one immutable
TickerSnapshot. build_snapshot is pure: the caller fetches the data.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from stockwatch.schemas.indicators import IndicatorParams
from stockwatch.schemas.market import PriceSeries, QuoteSummary
from stockwatch.schemas.watchlist import GeneralInfo, TickerSnapshot, normalize_ticker
from stockwatch.services.base import NoDataError
from stockwatch.services.indicators import compute_indicators
from stockwatch.services.quotes.interface import QuoteSource

logger = logging.getLogger(__name__)

SERVICE_NAME = "SnapshotBuilder"


def build_snapshot(
    ticker: str,
    summary: Optional[QuoteSummary],
    series: Optional[PriceSeries],
    params: Optional[IndicatorParams] = None,
) -> TickerSnapshot:
    """
    Build a TickerSnapshot from already-fetched data.

    Raises:
        NoDataError: Empty or missing series (checked before any indicator work)
        InvalidParamsError / InsufficientDataError: From the indicator engine
    """
    if series is None or series.is_empty():
        raise NoDataError(SERVICE_NAME, f"No quotes available for {normalize_ticker(ticker)}")

    summary = summary or QuoteSummary()
    indicators = compute_indicators(series.closes(), params)

    general = GeneralInfo(
        ticker=summary.symbol or normalize_ticker(ticker),
        full_name=summary.long_name,
        type=summary.quote_type,
        price=summary.regular_market_price,
    )

    return TickerSnapshot(general=general, technical_indicators=indicators)


class SnapshotService:
    """
    Fetches a trailing history window and builds the snapshot.

    The quote source is injected; nothing here is cached between calls.
    """

    def __init__(self, quote_source: QuoteSource, history_days: int = 365):
        self.quote_source = quote_source
        self.history_days = history_days

    async def lookup(
        self,
        ticker: str,
        params: Optional[IndicatorParams] = None,
        today: Optional[date] = None,
    ) -> TickerSnapshot:
        """Fetch history + summary for `ticker` and build its snapshot."""
        symbol = normalize_ticker(ticker)
        to_date = today or date.today()
        from_date = to_date - timedelta(days=self.history_days)

        series = await self.quote_source.fetch_history(symbol, from_date, to_date)
        summary = await self.quote_source.fetch_summary(symbol)

        snapshot = build_snapshot(symbol, summary, series, params)
        logger.info(
            f"Built snapshot for {snapshot.general.ticker} from {len(series.points)} closes "
            f"(RSI {snapshot.technical_indicators.rsi}, "
            f"{snapshot.technical_indicators.cross_position.value})"
        )
        return snapshot
