"""
Quote Source Interface

Defines the contract for the external quote source.
"""

from abc import ABC, abstractmethod
from datetime import date

from stockwatch.schemas.market import PriceSeries, QuoteSummary


class QuoteSource(ABC):
    """
    Quote Source Contract.

    fetch_history:
        INPUT:  ticker, from_date, to_date (inclusive)
        OUTPUT: PriceSeries of daily closes, ascending by date
        RAISES: NoDataError, SourceUnavailableError

    fetch_summary:
        INPUT:  ticker
        OUTPUT: QuoteSummary (fields may be missing)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name for logging."""
        pass

    @abstractmethod
    async def fetch_history(
        self, ticker: str, from_date: date, to_date: date
    ) -> PriceSeries:
        """Fetch daily closes for the date range."""
        pass

    @abstractmethod
    async def fetch_summary(self, ticker: str) -> QuoteSummary:
        """Fetch quote metadata. Never raises for missing fields."""
        pass

    async def close(self) -> None:
        """Release resources held by the source."""
        return None
